"""Page and property models."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from notion_export.models.block import parse_rich_text, plain_text


class PropertyType(str, Enum):
    """Known page property types. Anything else parses as UNSUPPORTED."""

    TITLE = "title"
    RICH_TEXT = "rich_text"
    SELECT = "select"
    MULTI_SELECT = "multi_select"
    STATUS = "status"
    DATE = "date"
    PEOPLE = "people"
    FILES = "files"
    CHECKBOX = "checkbox"
    URL = "url"
    EMAIL = "email"
    PHONE_NUMBER = "phone_number"
    NUMBER = "number"
    RELATION = "relation"
    FORMULA = "formula"
    CREATED_TIME = "created_time"
    LAST_EDITED_TIME = "last_edited_time"
    UNSUPPORTED = "unsupported"

    @classmethod
    def parse(cls, tag: str | None) -> "PropertyType":
        try:
            return cls(tag)
        except ValueError:
            return cls.UNSUPPORTED


@dataclass(frozen=True)
class Property:
    """A named, typed page property. ``value`` is ``prop[prop["type"]]``."""

    name: str
    type: PropertyType
    raw_type: str
    value: Any = None


@dataclass(frozen=True)
class Page:
    """Page metadata: id, url, title and properties (in API order)."""

    id: str
    url: str | None
    title: str
    properties: tuple[Property, ...] = field(default_factory=tuple)

    @classmethod
    def from_api(cls, raw: dict[str, Any]) -> "Page":
        props = tuple(
            Property(
                name=name,
                type=PropertyType.parse(prop.get("type")),
                raw_type=prop.get("type") or "",
                value=prop.get(prop.get("type") or ""),
            )
            for name, prop in (raw.get("properties") or {}).items()
        )
        url = raw.get("url")
        return cls(id=raw["id"], url=url, title=_derive_title(props, url), properties=props)


def _derive_title(props: tuple[Property, ...], url: str | None) -> str:
    """Plain text of the first title property; the page URL if that is empty.

    Database entries sometimes have no title at all, which must not fail
    the export.
    """
    title_prop = next((p for p in props if p.type is PropertyType.TITLE), None)
    if title_prop is not None:
        text = plain_text(parse_rich_text(title_prop.value))
        if text:
            return text
    return url or "Untitled"
