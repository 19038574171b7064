"""Walk a Notion page tree and export every page as Markdown."""

from pathlib import Path

from loguru import logger

from notion_export.config import DOCUMENT_NAME, MAX_PAGE_DEPTH
from notion_export.core.context import ExportContext
from notion_export.core.render.properties import render_properties
from notion_export.ids import normalize_page_id, page_dir_name
from notion_export.models.block import BlockType
from notion_export.models.page import Page
from notion_export.protocols import Fetcher, PageSource
from notion_export.writer import FileWriter


class Exporter:
    """Export a page, its sub-pages and database entries, depth first.

    Each page is written once to ``<parent dir>/<slug>_<id8>/index.md``;
    sub-pages go inside the directory of the page that references them.
    """

    def __init__(
        self,
        api: PageSource,
        writer: FileWriter,
        fetcher: Fetcher,
        *,
        token: str | None = None,
        max_depth: int = MAX_PAGE_DEPTH,
    ) -> None:
        self._api = api
        self._writer = writer
        self.max_depth = max_depth
        self.ctx = ExportContext(api, writer, fetcher, root_dir=writer.root, token=token)

    def export(self, root_input: str) -> Path:
        """Export the page named by a URL or id.

        Returns:
            Directory of the root page.
        """
        page_id = normalize_page_id(root_input)
        logger.info("Exporting page {} into {}", page_id, self._writer.root)
        self.export_page(page_id, self._writer.root)
        logger.info("Exported {} page(s). {}", len(self.ctx.visited), self._writer.summary())
        return self.ctx.visited[page_id]

    def export_page(
        self,
        page_id: str,
        parent_dir: Path,
        *,
        link_title: str | None = None,
        depth: int = 0,
    ) -> None:
        """Export one page, then recurse into its children.

        Args:
            page_id: Canonical page id.
            parent_dir: Directory the page's own directory is created in.
            link_title: Title used by the referencing page's link, so the
                directory matches the link even when the title is blank.
            depth: Nesting level below the root page.
        """
        if self.ctx.is_visited(page_id):
            logger.debug("Already exported, skipping {}", page_id)
            return
        if depth > self.max_depth:
            logger.warning("Page {} is nested deeper than {}, skipping", page_id, self.max_depth)
            return

        page = Page.from_api(self._api.retrieve_page(page_id))
        dir_title = page.title if link_title is None else link_title
        page_dir = parent_dir / page_dir_name(dir_title, page_id)
        self.ctx.mark_visited(page_id, page_dir)
        logger.debug("Rendering {!r} ({})", page.title, page_id)

        with self.ctx.page_scope(page_dir):
            document = (
                f"# {page.title}\n\n"
                + render_properties(page, self.ctx)
                + self.ctx.render_children(page_id)
            )
            self._writer.write_text(page_dir / DOCUMENT_NAME, document)
        logger.info("Exported {!r} -> {}", page.title, page_dir)

        self._traverse_children(page_id, page_dir, depth)

    def _traverse_children(self, page_id: str, page_dir: Path, depth: int) -> None:
        for block in self.ctx.iter_children(page_id):
            if block.type is BlockType.CHILD_PAGE:
                # A child_page block's id is the child page's id.
                self.export_page(
                    block.id,
                    page_dir,
                    link_title=block.data.get("title") or "",
                    depth=depth + 1,
                )
            elif block.type is BlockType.CHILD_DATABASE:
                self._export_database(block.id, page_dir, depth)

    def _export_database(self, database_id: str, page_dir: Path, depth: int) -> None:
        for entry in self.ctx.database_pages(database_id):
            self.export_page(entry.id, page_dir, link_title=entry.title, depth=depth + 1)
