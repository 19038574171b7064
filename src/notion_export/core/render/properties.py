"""Render page properties as a Markdown preamble."""

from collections.abc import Callable
from typing import TYPE_CHECKING, Any

from notion_export.core.render.markdown import render_rich_text, url_basename
from notion_export.models.block import file_object_url, parse_rich_text
from notion_export.models.page import Page, Property, PropertyType

if TYPE_CHECKING:
    from notion_export.core.context import ExportContext


def _rich_text(value: Any, ctx: "ExportContext") -> str:
    return render_rich_text(parse_rich_text(value))


def _named(value: Any, ctx: "ExportContext") -> str | None:
    return (value or {}).get("name")


def _multi_select(value: Any, ctx: "ExportContext") -> str:
    return ", ".join(opt.get("name") or "" for opt in value or [])


def _date(value: Any, ctx: "ExportContext") -> str | None:
    if not value:
        return None
    if value.get("end"):
        return f"{value.get('start')} → {value['end']}"
    return value.get("start")


def _people(value: Any, ctx: "ExportContext") -> str:
    return ", ".join(p.get("name") or p.get("id") or "" for p in value or [])


def _files(value: Any, ctx: "ExportContext") -> str:
    links = []
    for f in value or []:
        url = file_object_url(f)
        if not url:
            continue
        name = f.get("name") or url_basename(url)
        links.append(f"[{name}]({ctx.download_asset(url)})")
    return ", ".join(links)


def _boolean(value: Any, ctx: "ExportContext") -> str:
    return "true" if value else "false"


def _scalar(value: Any, ctx: "ExportContext") -> str | None:
    return None if value is None else str(value)


def _relation(value: Any, ctx: "ExportContext") -> str:
    return ", ".join(r.get("id") or "" for r in value or [])


def _formula(value: Any, ctx: "ExportContext") -> str | None:
    if not value:
        return None
    kind = value.get("type")
    result = value.get(kind)
    if kind == "date":
        return _date(result, ctx)
    if kind == "boolean":
        return _boolean(result, ctx)
    return _scalar(result, ctx)


def _skip(value: Any, ctx: "ExportContext") -> None:
    return None


PROPERTY_RENDERERS: dict[PropertyType, Callable[[Any, "ExportContext"], str | None]] = {
    PropertyType.TITLE: _skip,
    PropertyType.RICH_TEXT: _rich_text,
    PropertyType.SELECT: _named,
    PropertyType.MULTI_SELECT: _multi_select,
    PropertyType.STATUS: _named,
    PropertyType.DATE: _date,
    PropertyType.PEOPLE: _people,
    PropertyType.FILES: _files,
    PropertyType.CHECKBOX: _boolean,
    PropertyType.URL: _scalar,
    PropertyType.EMAIL: _scalar,
    PropertyType.PHONE_NUMBER: _scalar,
    PropertyType.NUMBER: _scalar,
    PropertyType.RELATION: _relation,
    PropertyType.FORMULA: _formula,
    PropertyType.CREATED_TIME: _scalar,
    PropertyType.LAST_EDITED_TIME: _scalar,
    PropertyType.UNSUPPORTED: _skip,
}


def render_property(prop: Property, ctx: "ExportContext") -> str | None:
    """Human-readable value of a property, None when there is nothing to show.

    File properties download their files as assets of the current page.
    """
    return PROPERTY_RENDERERS[prop.type](prop.value, ctx)


def render_properties(page: Page, ctx: "ExportContext") -> str:
    """Bullet list of non-title properties with a value; empty when there are none."""
    lines = []
    for prop in page.properties:
        value = render_property(prop, ctx)
        if value is None or value == "":
            continue
        lines.append(f"- **{prop.name}**: {value}\n")
    if not lines:
        return ""
    return "\n<!-- properties -->\n" + "".join(lines) + "\n"
