"""Render blocks and rich text as Markdown."""

import textwrap
from collections.abc import Callable
from pathlib import PurePosixPath
from typing import TYPE_CHECKING
from urllib.parse import unquote, urlparse

from notion_export.config import DOCUMENT_NAME
from notion_export.ids import page_dir_name
from notion_export.models.block import Block, BlockType, RichText, parse_rich_text, plain_text

if TYPE_CHECKING:
    from notion_export.core.context import ExportContext

DEFAULT_CALLOUT_ICON = "ℹ️"


def render_span(span: RichText) -> str:
    """Wrap a span as bold, italic, strikethrough, code, underline, then link.

    The order is fixed so output is stable for diffing.
    """
    ann = span.annotations
    text = span.plain_text
    if ann.bold:
        text = f"**{text}**"
    if ann.italic:
        text = f"*{text}*"
    if ann.strikethrough:
        text = f"~~{text}~~"
    if ann.code:
        text = f"`{text}`"
    if ann.underline:
        text = f"<u>{text}</u>"
    if span.href:
        text = f"[{text}]({span.href})"
    return text


def render_rich_text(spans: tuple[RichText, ...]) -> str:
    return "".join(render_span(s) for s in spans)


def child_page_link(title: str | None, page_id: str) -> str:
    """Relative link to a child page's document, which may not be exported yet."""
    return f"./{page_dir_name(title, page_id)}/{DOCUMENT_NAME}"


def url_basename(url: str) -> str:
    return PurePosixPath(unquote(urlparse(url).path)).name


def _with_children(line: str, block: Block, ctx: "ExportContext") -> str:
    """A list line followed by its nested blocks, indented one level."""
    if not block.has_children:
        return line
    children = ctx.render_children(block.id)
    return line + textwrap.indent(children, "    ")


# --- text blocks ---------------------------------------------------------


def _paragraph(block: Block, ctx: "ExportContext") -> str:
    return f"{render_rich_text(block.rich_text)}\n\n"


def _heading(level: int) -> Callable[[Block, "ExportContext"], str]:
    def render(block: Block, ctx: "ExportContext") -> str:
        return f"{'#' * level} {render_rich_text(block.rich_text)}\n\n"

    return render


def _bulleted(block: Block, ctx: "ExportContext") -> str:
    return _with_children(f"- {render_rich_text(block.rich_text)}\n", block, ctx)


def _numbered(block: Block, ctx: "ExportContext") -> str:
    return _with_children(f"1. {render_rich_text(block.rich_text)}\n", block, ctx)


def _to_do(block: Block, ctx: "ExportContext") -> str:
    mark = "x" if block.data.get("checked") else " "
    return _with_children(f"- [{mark}] {render_rich_text(block.rich_text)}\n", block, ctx)


def _toggle(block: Block, ctx: "ExportContext") -> str:
    summary = render_rich_text(block.rich_text)
    children = ctx.render_children(block.id)
    return f"<details>\n<summary>{summary}</summary>\n\n{children}\n</details>\n\n"


def _quote(block: Block, ctx: "ExportContext") -> str:
    return f"> {render_rich_text(block.rich_text)}\n\n"


def _callout(block: Block, ctx: "ExportContext") -> str:
    icon = block.data.get("icon") or {}
    emoji = icon.get("emoji") if icon.get("type") == "emoji" else None
    return f"> **{emoji or DEFAULT_CALLOUT_ICON}  {render_rich_text(block.rich_text)}**\n\n"


def _divider(block: Block, ctx: "ExportContext") -> str:
    return "\n---\n\n"


def _code(block: Block, ctx: "ExportContext") -> str:
    lang = block.data.get("language") or ""
    return f"```{lang}\n{plain_text(block.rich_text)}\n```\n\n"


def _equation(block: Block, ctx: "ExportContext") -> str:
    return f"$$\n{block.data.get('expression') or ''}\n$$\n\n"


# --- media and links -----------------------------------------------------


def _image(block: Block, ctx: "ExportContext") -> str:
    url = block.file_url
    if not url:
        return "<!-- image without url -->\n\n"
    local = ctx.download_asset(url)
    return f"![{plain_text(block.caption)}]({local})\n\n"


def _file(block: Block, ctx: "ExportContext") -> str:
    url = block.file_url
    if not url:
        return f"<!-- {block.raw_type} without url -->\n\n"
    name = plain_text(block.caption) or block.data.get("name") or url_basename(url)
    local = ctx.download_asset(url)
    return f"[{name}]({local})\n\n"


def _bookmark(block: Block, ctx: "ExportContext") -> str:
    href = block.data.get("url") or ""
    return f"[{href}]({href})\n\n"


def _embed(block: Block, ctx: "ExportContext") -> str:
    return f"[Embed] {block.data.get('url') or ''}\n\n"


# --- containers ----------------------------------------------------------


def _table_cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\r\n", "<br>").replace("\n", "<br>")


def render_table_row(block: Block) -> list[str]:
    return [
        _table_cell(render_rich_text(parse_rich_text(cell)))
        for cell in block.data.get("cells") or []
    ]


def _table_line(cells: list[str]) -> str:
    # Empty cells get a space so the grid stays well-formed.
    return "| " + " | ".join(c or " " for c in cells) + " |\n"


def _table(block: Block, ctx: "ExportContext") -> str:
    rows = ctx.table_rows(block.id)
    if not rows:
        return "\n"
    header, body = rows[0], rows[1:]
    out = _table_line(header)
    out += _table_line(["---"] * len(header))
    for row in body:
        out += _table_line(row)
    return out + "\n\n"


def _table_row(block: Block, ctx: "ExportContext") -> str:
    return _table_line(render_table_row(block))


def _transparent(block: Block, ctx: "ExportContext") -> str:
    return ctx.render_children(block.id)


def _synced_block(block: Block, ctx: "ExportContext") -> str:
    # A synced copy lists its children under the original block.
    source = (block.data.get("synced_from") or {}).get("block_id") or block.id
    return ctx.render_children(source)


def _child_page(block: Block, ctx: "ExportContext") -> str:
    title = block.data.get("title")
    return f"- [{title or 'Untitled'}]({child_page_link(title, block.id)})\n\n"


def _child_database(block: Block, ctx: "ExportContext") -> str:
    title = block.data.get("title") or "Database"
    out = f"### {title} (database)\n\n"
    entries = [
        f"- [{page.title}]({child_page_link(page.title, page.id)})\n"
        for page in ctx.database_pages(block.id)
    ]
    if entries:
        out += "".join(entries) + "\n"
    return out


def _unsupported(block: Block, ctx: "ExportContext") -> str:
    return f"<!-- Unsupported block: {block.raw_type} -->\n\n"


BLOCK_RENDERERS: dict[BlockType, Callable[[Block, "ExportContext"], str]] = {
    BlockType.PARAGRAPH: _paragraph,
    BlockType.HEADING_1: _heading(1),
    BlockType.HEADING_2: _heading(2),
    BlockType.HEADING_3: _heading(3),
    BlockType.BULLETED_LIST_ITEM: _bulleted,
    BlockType.NUMBERED_LIST_ITEM: _numbered,
    BlockType.TO_DO: _to_do,
    BlockType.TOGGLE: _toggle,
    BlockType.QUOTE: _quote,
    BlockType.CALLOUT: _callout,
    BlockType.DIVIDER: _divider,
    BlockType.CODE: _code,
    BlockType.IMAGE: _image,
    BlockType.FILE: _file,
    BlockType.PDF: _file,
    BlockType.VIDEO: _file,
    BlockType.AUDIO: _file,
    BlockType.BOOKMARK: _bookmark,
    BlockType.EMBED: _embed,
    BlockType.EQUATION: _equation,
    BlockType.TABLE: _table,
    BlockType.TABLE_ROW: _table_row,
    BlockType.COLUMN_LIST: _transparent,
    BlockType.COLUMN: _transparent,
    BlockType.SYNCED_BLOCK: _synced_block,
    BlockType.CHILD_PAGE: _child_page,
    BlockType.CHILD_DATABASE: _child_database,
    BlockType.UNSUPPORTED: _unsupported,
}


def render_block(block: Block, ctx: "ExportContext") -> str:
    """Render one block. Container and media blocks call back into ``ctx``."""
    return BLOCK_RENDERERS[block.type](block, ctx)
