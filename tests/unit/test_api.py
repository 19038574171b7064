"""Tests for NotionApi — REST client and cursor pagination."""

from typing import Any
from unittest.mock import MagicMock, patch

import pytest

from notion_export.api import NotionApi, iter_paginated
from notion_export.errors import FetchFailed


@pytest.fixture
def api_with_mock_session() -> tuple[NotionApi, MagicMock]:
    with patch("notion_export.api.requests.Session") as mock_session_cls:
        mock_session = MagicMock()
        mock_session.headers = {}
        mock_session_cls.return_value = mock_session
        api = NotionApi("test-token")
    return api, mock_session


def _make_response(data: Any, *, status: int = 200, reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.ok = status < 400
    response.status_code = status
    response.reason = reason
    response.json.return_value = data
    return response


def test_init_sets_auth_and_version_headers(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    _api, mock_session = api_with_mock_session

    assert mock_session.headers["Authorization"] == "Bearer test-token"
    assert mock_session.headers["Notion-Version"] == "2022-06-28"


def test_retrieve_page_gets_page_endpoint(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response({"id": "p1"})

    result = api.retrieve_page("p1")

    assert result == {"id": "p1"}
    mock_session.request.assert_called_once_with("GET", "https://api.notion.com/v1/pages/p1")


def test_list_block_children_passes_cursor(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response({"results": []})

    api.list_block_children("b1", "cur-2")

    args, kwargs = mock_session.request.call_args
    assert args == ("GET", "https://api.notion.com/v1/blocks/b1/children")
    assert kwargs["params"] == {"page_size": 100, "start_cursor": "cur-2"}


def test_list_block_children_omits_cursor_on_first_page(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response({"results": []})

    api.list_block_children("b1")

    assert "start_cursor" not in mock_session.request.call_args.kwargs["params"]


def test_query_database_posts_cursor_in_body(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response({"results": []})

    api.query_database("db1", "cur-1")

    args, kwargs = mock_session.request.call_args
    assert args == ("POST", "https://api.notion.com/v1/databases/db1/query")
    assert kwargs["json"] == {"page_size": 100, "start_cursor": "cur-1"}


def test_request_raises_fetch_failed_with_api_message(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    mock_session.request.return_value = _make_response(
        {"object": "error", "code": "object_not_found", "message": "Could not find page"},
        status=404,
        reason="Not Found",
    )

    with pytest.raises(FetchFailed, match="Could not find page") as exc_info:
        api.retrieve_page("missing")
    assert exc_info.value.status == 404


def test_request_falls_back_to_reason_for_non_json_errors(
    api_with_mock_session: tuple[NotionApi, MagicMock],
) -> None:
    api, mock_session = api_with_mock_session
    response = _make_response(None, status=502, reason="Bad Gateway")
    response.json.side_effect = ValueError("no json")
    mock_session.request.return_value = response

    with pytest.raises(FetchFailed, match="Bad Gateway"):
        api.retrieve_page("p1")


def test_iter_paginated_concatenates_pages_in_order() -> None:
    """Three result pages are yielded in order, following each cursor."""
    responses = {
        None: {"results": [1, 2], "next_cursor": "a", "has_more": True},
        "a": {"results": [3], "next_cursor": "b", "has_more": True},
        "b": {"results": [4, 5], "next_cursor": None, "has_more": False},
    }
    seen_cursors: list[str | None] = []

    def call(cursor: str | None) -> dict[str, Any]:
        seen_cursors.append(cursor)
        return responses[cursor]

    assert list(iter_paginated(call)) == [1, 2, 3, 4, 5]
    assert seen_cursors == [None, "a", "b"]


def test_iter_paginated_handles_empty_listing() -> None:
    assert list(iter_paginated(lambda cursor: {"results": [], "has_more": False})) == []


def test_iter_paginated_stops_when_more_results_have_no_cursor() -> None:
    seen_cursors: list[str | None] = []

    def call(cursor: str | None) -> dict[str, Any]:
        seen_cursors.append(cursor)
        return {"results": [1], "next_cursor": None, "has_more": True}

    assert list(iter_paginated(call)) == [1]
    assert seen_cursors == [None]
