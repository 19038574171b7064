"""Block and rich-text models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any


@dataclass(frozen=True)
class Annotations:
    """Inline style flags of a rich-text span."""

    bold: bool = False
    italic: bool = False
    strikethrough: bool = False
    code: bool = False
    underline: bool = False

    @classmethod
    def from_api(cls, data: dict[str, Any] | None) -> "Annotations":
        data = data or {}
        return cls(
            bold=bool(data.get("bold")),
            italic=bool(data.get("italic")),
            strikethrough=bool(data.get("strikethrough")),
            code=bool(data.get("code")),
            underline=bool(data.get("underline")),
        )


@dataclass(frozen=True)
class RichText:
    """A run of text with style annotations and an optional link."""

    plain_text: str
    annotations: Annotations = field(default_factory=Annotations)
    href: str | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> "RichText":
        return cls(
            plain_text=data.get("plain_text") or "",
            annotations=Annotations.from_api(data.get("annotations")),
            href=data.get("href"),
        )


def parse_rich_text(items: list[dict[str, Any]] | None) -> tuple[RichText, ...]:
    return tuple(RichText.from_api(x) for x in items or ())


def plain_text(spans: tuple[RichText, ...]) -> str:
    return "".join(s.plain_text for s in spans)


class BlockType(str, Enum):
    """Known block types. Anything else parses as UNSUPPORTED."""

    PARAGRAPH = "paragraph"
    HEADING_1 = "heading_1"
    HEADING_2 = "heading_2"
    HEADING_3 = "heading_3"
    BULLETED_LIST_ITEM = "bulleted_list_item"
    NUMBERED_LIST_ITEM = "numbered_list_item"
    TO_DO = "to_do"
    TOGGLE = "toggle"
    QUOTE = "quote"
    CALLOUT = "callout"
    DIVIDER = "divider"
    CODE = "code"
    IMAGE = "image"
    FILE = "file"
    PDF = "pdf"
    VIDEO = "video"
    AUDIO = "audio"
    BOOKMARK = "bookmark"
    EMBED = "embed"
    EQUATION = "equation"
    TABLE = "table"
    TABLE_ROW = "table_row"
    COLUMN_LIST = "column_list"
    COLUMN = "column"
    SYNCED_BLOCK = "synced_block"
    CHILD_PAGE = "child_page"
    CHILD_DATABASE = "child_database"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, tag: str | None) -> "BlockType":
        try:
            return cls(tag)
        except ValueError:
            return cls.UNSUPPORTED


@dataclass(frozen=True)
class Block:
    """One block of a page's content tree.

    ``data`` is the type-specific payload (``block[block["type"]]`` in the API).
    Children are never inline; they are listed separately by block id.
    """

    id: str
    type: BlockType
    raw_type: str
    data: dict[str, Any] = field(default_factory=dict)
    has_children: bool = False

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Block":
        raw_type = raw.get("type") or ""
        return cls(
            id=raw["id"],
            type=BlockType.parse(raw_type),
            raw_type=raw_type,
            data=raw.get(raw_type) or {},
            has_children=bool(raw.get("has_children")),
        )

    @property
    def rich_text(self) -> tuple[RichText, ...]:
        return parse_rich_text(self.data.get("rich_text"))

    @property
    def caption(self) -> tuple[RichText, ...]:
        return parse_rich_text(self.data.get("caption"))

    @property
    def file_url(self) -> str | None:
        """URL of a media block, hosted or external."""
        return file_object_url(self.data)


def file_object_url(data: dict[str, Any]) -> str | None:
    """URL of a Notion file object (``{"type": "file"|"external", ...}``)."""
    kind = data.get("type")
    if kind == "external":
        return (data.get("external") or {}).get("url")
    return (data.get("file") or {}).get("url")
