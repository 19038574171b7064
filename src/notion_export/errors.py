"""Exceptions raised while exporting a page tree."""


class ExportError(Exception):
    """Base class for all export failures."""


class InvalidIdentifier(ExportError, ValueError):
    """The input does not contain a page identifier."""

    def __init__(self, value: str) -> None:
        self.value = value
        super().__init__(f"Cannot extract a page id from {value!r}")


class FetchFailed(ExportError):
    """A request ended with a non-success, non-redirect HTTP response."""

    def __init__(self, status: int, message: str, *, url: str | None = None) -> None:
        self.status = status
        self.message = message
        self.url = url
        where = f" ({url})" if url else ""
        super().__init__(f"HTTP {status}: {message}{where}")


class RedirectLoop(FetchFailed):
    """Too many redirects while downloading a file."""

    def __init__(self, url: str, hops: int) -> None:
        super().__init__(0, f"redirected more than {hops} times", url=url)
        self.hops = hops


class PathOutsideBase(ExportError, ValueError):
    """A path cannot be expressed relative to (or inside) a base directory."""

    def __init__(self, path: str, base: str) -> None:
        self.path = path
        self.base = base
        super().__init__(f"Path {path!r} is outside of {base!r}")
