"""Binary downloads with bounded redirect following."""

from urllib.parse import urljoin

import requests
from loguru import logger

from notion_export.config import MAX_REDIRECTS
from notion_export.errors import FetchFailed, RedirectLoop


class HttpFetcher:
    """Download files, following redirects by hand so the hop count stays bounded."""

    def __init__(self, *, max_redirects: int = MAX_REDIRECTS) -> None:
        self.max_redirects = max_redirects
        self.sess = requests.Session()

    def fetch(self, url: str, *, token: str | None = None) -> bytes:
        """Return the response body of ``url``.

        Args:
            url: Address to download.
            token: Optional bearer credential sent as an Authorization header.

        Raises:
            RedirectLoop: More than ``max_redirects`` redirects.
            FetchFailed: Any other non-success response.
        """
        return self._fetch(url, token=token, hops_left=self.max_redirects)

    def _fetch(self, url: str, *, token: str | None, hops_left: int) -> bytes:
        if hops_left < 0:
            raise RedirectLoop(url, self.max_redirects)

        headers = {"Authorization": f"Bearer {token}"} if token else {}
        logger.debug("Downloading {} (auth {})", url, bool(token))
        r = self.sess.get(url, headers=headers, allow_redirects=False)

        if r.is_redirect:
            target = urljoin(url, r.headers["location"])
            return self._fetch(target, token=token, hops_left=hops_left - 1)
        if not r.ok:
            raise FetchFailed(r.status_code, r.reason or "download failed", url=url)
        return r.content
