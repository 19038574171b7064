"""Output file writer with containment checks and run statistics."""

import os
import tempfile
from pathlib import Path

from loguru import logger

from notion_export.errors import PathOutsideBase


class FileWriter:
    """Write export output under a single root directory.

    - Never write outside of the root.
    - Do not rewrite documents whose contents did not change.
    - In dry-run mode, log what would be written and touch nothing.
    """

    def __init__(self, root: str | Path, *, dry_run: bool = False) -> None:
        self.root = Path(root).resolve()
        self.dry_run = dry_run

        if not dry_run and not self.root.is_dir():
            msg = f"Output directory {str(self.root)!r} not found"
            raise ValueError(msg)

        logger.debug("Writer ready, root {!r}, dry_run {!r}", str(self.root), dry_run)

        self.num_docs_new = 0
        self.num_docs_changed = 0
        self.num_docs_same = 0
        self.num_assets_written = 0

    def _check(self, path: Path) -> Path:
        resolved = Path(path).resolve()
        if resolved != self.root and not resolved.is_relative_to(self.root):
            raise PathOutsideBase(str(resolved), str(self.root))
        return resolved

    def ensure_dir(self, path: Path) -> None:
        resolved = self._check(path)
        if self.dry_run:
            return
        resolved.mkdir(parents=True, exist_ok=True)

    def exists(self, path: Path) -> bool:
        return self._check(path).is_file()

    def write_text(self, path: Path, contents: str) -> None:
        """Write a document, skipping the write if contents are unchanged."""
        resolved = self._check(path)
        action = "create"
        try:
            if resolved.read_text(encoding="utf-8") == contents:
                self.num_docs_same += 1
                logger.debug("Unchanged: {!r}", str(resolved))
                return
            action = "update"
        except (FileNotFoundError, UnicodeDecodeError):
            pass

        if action == "create":
            self.num_docs_new += 1
        else:
            self.num_docs_changed += 1

        if self.dry_run:
            logger.info("dry-run: would {} {!r}", action, str(resolved))
            return
        logger.debug("Writing ({}) {!r}", action, str(resolved))
        _replace_atomically(resolved, contents.encode("utf-8"))

    def read_bytes(self, path: Path) -> bytes:
        return self._check(path).read_bytes()

    def write_bytes(self, path: Path, data: bytes) -> None:
        resolved = self._check(path)
        self.num_assets_written += 1
        if self.dry_run:
            logger.info("dry-run: would create {!r} ({} bytes)", str(resolved), len(data))
            return
        logger.debug("Writing {!r} ({} bytes)", str(resolved), len(data))
        _replace_atomically(resolved, data)

    def summary(self) -> str:
        return (
            f"Documents: {self.num_docs_new} new, {self.num_docs_changed} changed, "
            f"{self.num_docs_same} same; assets: {self.num_assets_written} written"
        )


def _replace_atomically(path: Path, data: bytes) -> None:
    """Write to a temp file beside ``path``, then rename it into place.

    An interrupted write leaves no partial file at ``path``.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp = tempfile.NamedTemporaryFile(dir=path.parent, prefix=".tmp-", delete=False)
    tmp_path = Path(tmp.name)
    try:
        with tmp:
            tmp.write(data)
        os.replace(tmp_path, path)
    except BaseException:
        tmp_path.unlink(missing_ok=True)
        raise
