"""Per-export traversal state: visited pages, page scopes, children and assets."""

from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path

import requests
from loguru import logger

from notion_export.api import iter_paginated
from notion_export.config import ASSETS_DIR_NAME
from notion_export.core.assets import AssetStore, relativize
from notion_export.core.render.markdown import render_block, render_table_row
from notion_export.errors import FetchFailed
from notion_export.models.block import Block, BlockType
from notion_export.models.page import Page
from notion_export.protocols import Fetcher, PageSource, Store


@dataclass(frozen=True)
class PageScope:
    """Where the page currently being rendered lives on disk."""

    page_dir: Path
    assets_dir: Path

    @classmethod
    def for_page(cls, page_dir: Path) -> "PageScope":
        return cls(page_dir=page_dir, assets_dir=page_dir / ASSETS_DIR_NAME)


class ExportContext:
    """Mutable state of one export run.

    Owns the visited-page registry and the stack of page scopes. Rendering
    code receives the context explicitly and reaches the API, the fetcher
    and the asset store only through it.

    Not thread-safe: the walk is strictly sequential.
    """

    def __init__(
        self,
        api: PageSource,
        store: Store,
        fetcher: Fetcher,
        *,
        root_dir: Path,
        token: str | None = None,
    ) -> None:
        self.api = api
        self.store = store
        self.fetcher = fetcher
        self.assets = AssetStore(store)
        self.root_dir = Path(root_dir)
        self._token = token

        # page id -> page directory
        self.visited: dict[str, Path] = {}
        self._scopes: list[PageScope] = []
        self._database_entries: dict[str, list[Page]] = {}

    # --- visited registry ---------------------------------------------

    def is_visited(self, page_id: str) -> bool:
        return page_id in self.visited

    def mark_visited(self, page_id: str, page_dir: Path) -> None:
        if page_id in self.visited:
            msg = f"page {page_id!r} already visited"
            raise ValueError(msg)
        self.visited[page_id] = page_dir

    # --- page scopes ----------------------------------------------------

    @property
    def scope(self) -> PageScope:
        """Innermost page scope; the output root when no page is open."""
        if self._scopes:
            return self._scopes[-1]
        return PageScope.for_page(self.root_dir)

    @contextmanager
    def page_scope(self, page_dir: Path) -> Iterator[PageScope]:
        """Make ``page_dir`` (and its assets dir) current inside the block.

        The enclosing scope is restored on every exit path.
        """
        scope = PageScope.for_page(page_dir)
        self.store.ensure_dir(scope.page_dir)
        self.store.ensure_dir(scope.assets_dir)
        self._scopes.append(scope)
        try:
            yield scope
        finally:
            self._scopes.pop()

    # --- assets ---------------------------------------------------------

    def download_asset(self, url: str) -> str:
        """Download ``url`` into the current assets dir.

        The first attempt goes without credentials (pre-signed URLs reject
        them); on failure, one retry is made with the API token.

        Returns:
            Path of the stored file relative to the current page directory.
        """
        try:
            data = self.fetcher.fetch(url)
        except (FetchFailed, requests.RequestException) as e:
            if not self._token:
                raise
            logger.debug("Anonymous download failed ({}), retrying with token", e)
            data = self.fetcher.fetch(url, token=self._token)

        scope = self.scope
        path = self.assets.materialize(data, scope.assets_dir, source_url=url)
        return relativize(path, scope.page_dir)

    # --- listings -------------------------------------------------------

    def iter_children(self, block_id: str) -> Iterator[Block]:
        """All child blocks of a page or block, across every result page."""
        for raw in iter_paginated(lambda cursor: self.api.list_block_children(block_id, cursor)):
            yield Block.from_api(raw)

    def database_pages(self, database_id: str) -> list[Page]:
        """All entries of a database, across every result page.

        Each database is queried once per export; later calls reuse the entries.
        """
        if database_id not in self._database_entries:
            self._database_entries[database_id] = [
                Page.from_api(raw)
                for raw in iter_paginated(
                    lambda cursor: self.api.query_database(database_id, cursor)
                )
            ]
        return self._database_entries[database_id]

    def render_children(self, block_id: str) -> str:
        """Render every child of ``block_id`` and concatenate the output."""
        return "".join(render_block(child, self) for child in self.iter_children(block_id))

    def table_rows(self, block_id: str) -> list[list[str]]:
        """Rendered cells of every ``table_row`` child of a table block."""
        return [
            render_table_row(child)
            for child in self.iter_children(block_id)
            if child.type is BlockType.TABLE_ROW
        ]
