"""Protocols for dependency injection in the exporter."""

from pathlib import Path
from typing import Any, Protocol, runtime_checkable


@runtime_checkable
class PageSource(Protocol):
    """Protocol for the remote page/block/database listing API."""

    def retrieve_page(self, page_id: str) -> dict[str, Any]:
        """Return page metadata and properties."""
        ...

    def list_block_children(self, block_id: str, cursor: str | None = None) -> dict[str, Any]:
        """Return one page of child blocks: results, next_cursor, has_more."""
        ...

    def query_database(self, database_id: str, cursor: str | None = None) -> dict[str, Any]:
        """Return one page of database entries: results, next_cursor, has_more."""
        ...


@runtime_checkable
class Fetcher(Protocol):
    """Protocol for binary downloads."""

    def fetch(self, url: str, *, token: str | None = None) -> bytes:
        """Download the full response body."""
        ...


@runtime_checkable
class Store(Protocol):
    """Protocol for the output filesystem."""

    def ensure_dir(self, path: Path) -> None:
        """Create a directory (and parents) if it is missing."""
        ...

    def exists(self, path: Path) -> bool:
        """Check whether a file is already present."""
        ...

    def write_text(self, path: Path, contents: str) -> None:
        """Write a text document."""
        ...

    def read_bytes(self, path: Path) -> bytes:
        """Read back a file written earlier."""
        ...

    def write_bytes(self, path: Path, data: bytes) -> None:
        """Write a binary file."""
        ...
