"""Tests for loguru setup."""

import pytest
from loguru import logger

from notion_export.logging_config import configure_logging


def test_default_level_hides_debug(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging()

    logger.debug("hidden detail")
    logger.info("Exporting page")

    err = capsys.readouterr().err
    assert "hidden detail" not in err
    assert "Exporting page" in err
    assert "test_logging_config" not in err


def test_verbose_shows_debug_with_module(capsys: pytest.CaptureFixture[str]) -> None:
    configure_logging(verbose=True)

    logger.debug("GET pages/abc")

    err = capsys.readouterr().err
    assert "GET pages/abc" in err
    assert "test_logging_config" in err
