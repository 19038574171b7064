"""Notion REST API client."""

from collections.abc import Callable, Iterator
from typing import Any

import requests
from loguru import logger

from notion_export.config import API_BASE_URL, NOTION_VERSION, PAGE_SIZE
from notion_export.errors import FetchFailed


class NotionApi:
    """Thin Notion API wrapper returning raw JSON objects."""

    def __init__(self, token: str, *, base_url: str = API_BASE_URL) -> None:
        self.base_url = base_url.rstrip("/")
        self.sess = requests.Session()
        self.sess.headers.update(
            {
                "Authorization": f"Bearer {token}",
                "Notion-Version": NOTION_VERSION,
                "Content-Type": "application/json",
            }
        )
        logger.debug("API ready: base {!r}, version {!r}", self.base_url, NOTION_VERSION)

    def retrieve_page(self, page_id: str) -> dict[str, Any]:
        return self._request("GET", f"pages/{page_id}")

    def list_block_children(self, block_id: str, cursor: str | None = None) -> dict[str, Any]:
        params: dict[str, Any] = {"page_size": PAGE_SIZE}
        if cursor:
            params["start_cursor"] = cursor
        return self._request("GET", f"blocks/{block_id}/children", params=params)

    def query_database(self, database_id: str, cursor: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"page_size": PAGE_SIZE}
        if cursor:
            body["start_cursor"] = cursor
        return self._request("POST", f"databases/{database_id}/query", json=body)

    def _request(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        """Invoke an API endpoint, return json."""
        url = f"{self.base_url}/{path}"
        logger.debug("Making request: {} {} {}", method, path, repr(kwargs)[:64])

        r = self.sess.request(method, url, **kwargs)
        if not r.ok:
            raise FetchFailed(r.status_code, _error_message(r), url=url)
        rv: dict[str, Any] = r.json()
        return rv


def _error_message(response: requests.Response) -> str:
    """Prefer the API's own error message over the HTTP reason phrase."""
    try:
        body = response.json()
    except ValueError:
        return response.reason or "request failed"
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return response.reason or "request failed"


def iter_paginated(call: Callable[[str | None], dict[str, Any]]) -> Iterator[dict[str, Any]]:
    """Yield every result of a cursor-paginated listing.

    Args:
        call: Fetches one page of results given a cursor (None for the first page).

    Yields:
        Items from each page's ``results``, in order.
    """
    cursor: str | None = None
    while True:
        resp = call(cursor)
        yield from resp.get("results") or []
        if not resp.get("has_more"):
            break
        cursor = resp.get("next_cursor")
        if not cursor:
            logger.warning("Listing reports more results but no cursor; stopping")
            break
