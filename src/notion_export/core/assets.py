"""Content-addressed asset storage."""

import hashlib
import os
from pathlib import Path, PurePosixPath
from urllib.parse import unquote, urlparse

from loguru import logger

from notion_export.config import DEFAULT_ASSET_EXT
from notion_export.errors import PathOutsideBase
from notion_export.protocols import Store


def asset_extension(url: str) -> str:
    """File extension of the URL's path component, or the generic binary one."""
    ext = PurePosixPath(unquote(urlparse(url).path)).suffix
    return ext or DEFAULT_ASSET_EXT


def relativize(path: Path, base: Path) -> str:
    """Relative path from ``base`` to ``path``, with forward slashes.

    Raises:
        PathOutsideBase: If no relative path exists (e.g. different drives).
    """
    try:
        rel = os.path.relpath(path, base)
    except ValueError as e:
        raise PathOutsideBase(str(path), str(base)) from e
    return Path(rel).as_posix()


class AssetStore:
    """Store downloaded bytes as ``<sha256><ext>``, writing each file once."""

    def __init__(self, store: Store) -> None:
        self._store = store

    def materialize(self, data: bytes, dest_dir: Path, *, source_url: str) -> Path:
        """Write ``data`` into ``dest_dir`` unless an identical file exists.

        A file at the hash path whose contents do not match the hash is rewritten.

        Returns:
            Path of the stored file (whether written now or earlier).
        """
        digest = hashlib.sha256(data).hexdigest()
        dest = Path(dest_dir) / f"{digest}{asset_extension(source_url)}"
        if self._store.exists(dest):
            if hashlib.sha256(self._store.read_bytes(dest)).hexdigest() == digest:
                logger.debug("Asset already present: {}", dest.name)
                return dest
            logger.warning("Replacing damaged asset {}", dest.name)
        self._store.write_bytes(dest, data)
        return dest
