"""Page identifier and directory-name helpers."""

import re

from slugify import slugify

from notion_export.config import PAGE_ID_PREFIX_LEN, SLUG_MAX_LEN
from notion_export.errors import InvalidIdentifier

_HEX32_RE = re.compile(r"[0-9a-f]{32}", re.IGNORECASE)
_UUID_RE = re.compile(
    r"[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}", re.IGNORECASE
)


def normalize_page_id(value: str) -> str:
    """Extract a canonical 8-4-4-4-12 page id from a URL or raw id.

    A bare 32-digit hex run wins over an already hyphenated id, so
    ``https://www.notion.so/My-Page-0123...cdef`` and ``0123...cdef`` give
    the same result.

    Raises:
        InvalidIdentifier: If neither form is found.
    """
    text = value.strip()
    match = _HEX32_RE.search(text)
    if match:
        raw = match.group(0).lower()
        return f"{raw[:8]}-{raw[8:12]}-{raw[12:16]}-{raw[16:20]}-{raw[20:]}"

    match = _UUID_RE.search(text)
    if match:
        return match.group(0).lower()

    raise InvalidIdentifier(value)


def slug(title: str | None) -> str:
    """Lowercase ASCII slug cut at a word boundary, "untitled" for blank titles."""
    if title is None or not title.strip():
        return "untitled"
    text = slugify(title, separator="-", max_length=SLUG_MAX_LEN, word_boundary=True)
    return text or "untitled"


def page_dir_name(title: str | None, page_id: str) -> str:
    """Directory name for a page: ``<slug>_<first 8 chars of id>``."""
    return f"{slug(title)}_{page_id[:PAGE_ID_PREFIX_LEN]}"
