"""Shared test fixtures."""

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest
from loguru import logger

from notion_export.core.context import ExportContext
from notion_export.writer import FileWriter
from tests.unit.fakes import TOKEN, FakeFetcher, FakeNotionApi


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Keep CLI tests from leaving a sink bound to a closed stream."""
    yield
    logger.remove()
    logger.add(sys.stderr)


@pytest.fixture
def fake_api() -> FakeNotionApi:
    return FakeNotionApi()


@pytest.fixture
def fake_fetcher() -> FakeFetcher:
    return FakeFetcher()


@pytest.fixture
def writer(tmp_path: Path) -> FileWriter:
    out = tmp_path / "out"
    out.mkdir()
    return FileWriter(out)


@pytest.fixture
def ctx(fake_api: FakeNotionApi, fake_fetcher: FakeFetcher, writer: FileWriter) -> ExportContext:
    return ExportContext(fake_api, writer, fake_fetcher, root_dir=writer.root, token=TOKEN)
