"""Tests for FileWriter — contained, change-aware output writes."""

from pathlib import Path

import pytest

from notion_export.errors import PathOutsideBase
from notion_export.writer import FileWriter


def test_init_creates_writer_for_valid_directory(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path)

    assert writer.root == tmp_path.resolve()
    assert writer.dry_run is False


def test_init_raises_for_missing_directory(tmp_path: Path) -> None:
    with pytest.raises(ValueError, match="not found"):
        FileWriter(tmp_path / "does_not_exist")


def test_init_dry_run_allows_missing_directory(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path / "does_not_exist", dry_run=True)

    assert writer.dry_run is True


def test_write_text_creates_parent_directories(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path)

    writer.write_text(tmp_path / "a" / "b" / "index.md", "# Hi\n")

    assert (tmp_path / "a" / "b" / "index.md").read_text() == "# Hi\n"
    assert writer.num_docs_new == 1


def test_write_text_skips_unchanged_content(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path)
    writer.write_text(tmp_path / "index.md", "same")

    writer.write_text(tmp_path / "index.md", "same")

    assert writer.num_docs_same == 1
    assert writer.num_docs_changed == 0


def test_write_text_counts_updates(tmp_path: Path) -> None:
    (tmp_path / "index.md").write_text("old")
    writer = FileWriter(tmp_path)

    writer.write_text(tmp_path / "index.md", "new")

    assert (tmp_path / "index.md").read_text() == "new"
    assert writer.num_docs_changed == 1


def test_write_rejects_paths_outside_root(tmp_path: Path) -> None:
    root = tmp_path / "root"
    root.mkdir()
    writer = FileWriter(root)

    with pytest.raises(PathOutsideBase):
        writer.write_text(root / ".." / "escape.md", "nope")
    with pytest.raises(PathOutsideBase):
        writer.write_bytes(tmp_path / "escape.bin", b"nope")
    assert not (tmp_path / "escape.md").exists()


def test_write_bytes_and_exists(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path)
    target = tmp_path / "assets" / "abc.png"

    assert writer.exists(target) is False
    writer.write_bytes(target, b"\x89PNG")

    assert writer.exists(target) is True
    assert target.read_bytes() == b"\x89PNG"
    assert writer.num_assets_written == 1


def test_interrupted_write_bytes_leaves_no_file(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    writer = FileWriter(tmp_path)
    target = tmp_path / "assets" / "abc.png"

    def fail_replace(src: str, dst: str) -> None:
        raise KeyboardInterrupt

    monkeypatch.setattr("notion_export.writer.os.replace", fail_replace)

    with pytest.raises(KeyboardInterrupt):
        writer.write_bytes(target, b"\x89PNG-FULL")

    assert not target.exists()
    assert list(target.parent.iterdir()) == []


def test_failed_document_update_keeps_previous_contents(
    tmp_path: Path, monkeypatch: pytest.MonkeyPatch
) -> None:
    writer = FileWriter(tmp_path)
    target = tmp_path / "index.md"
    writer.write_text(target, "old")

    def fail_replace(src: str, dst: str) -> None:
        raise OSError(28, "No space left on device")

    monkeypatch.setattr("notion_export.writer.os.replace", fail_replace)

    with pytest.raises(OSError):
        writer.write_text(target, "new")

    assert target.read_text() == "old"
    assert [p.name for p in tmp_path.iterdir()] == ["index.md"]


def test_dry_run_writes_nothing(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path, dry_run=True)

    writer.ensure_dir(tmp_path / "page")
    writer.write_text(tmp_path / "page" / "index.md", "text")
    writer.write_bytes(tmp_path / "page" / "assets" / "x.bin", b"x")

    assert list(tmp_path.iterdir()) == []
    assert writer.num_docs_new == 1
    assert writer.num_assets_written == 1


def test_summary_reports_counts(tmp_path: Path) -> None:
    writer = FileWriter(tmp_path)
    writer.write_text(tmp_path / "index.md", "a")
    writer.write_bytes(tmp_path / "x.bin", b"x")

    assert writer.summary() == "Documents: 1 new, 0 changed, 0 same; assets: 1 written"
