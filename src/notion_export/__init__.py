"""Export Notion page trees to Markdown with local assets."""

from notion_export.api import NotionApi
from notion_export.exporter import Exporter
from notion_export.fetcher import HttpFetcher
from notion_export.protocols import Fetcher, PageSource, Store
from notion_export.writer import FileWriter

__all__ = ["Exporter", "Fetcher", "FileWriter", "HttpFetcher", "NotionApi", "PageSource", "Store"]
