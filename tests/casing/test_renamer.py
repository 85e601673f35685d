from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

import casing.renamer as renamer
from casing.renamer import rename_tree


def _touch(path: Path, content: str = "") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")
    return path


def _case_sensitive(directory: Path) -> bool:
    probe = _touch(directory / "CaseProbe")
    sensitive = not (directory / "caseprobe").exists()
    probe.unlink()
    return sensitive


@pytest.fixture
def kebab_caplog(caplog: pytest.LogCaptureFixture, monkeypatch: pytest.MonkeyPatch) -> pytest.LogCaptureFixture:
    # setup_logging() stops propagation; re-enable it so caplog sees the records.
    monkeypatch.setattr(logging.getLogger("kebab"), "propagate", True)
    caplog.set_level(logging.WARNING, logger="kebab")
    return caplog


def test_nested_tree_is_renamed_bottom_up(tmp_path: Path) -> None:
    _touch(tmp_path / "A" / "B" / "C.txt", "payload")

    rows = rename_tree(tmp_path)

    assert (tmp_path / "a" / "b" / "c.txt").read_text(encoding="utf-8") == "payload"
    assert not (tmp_path / "A").exists()
    assert [row["target"] for row in rows] == ["c.txt", "b", "a"]
    assert all(row["status"] == "renamed" for row in rows)
    # Paths are recorded before any ancestor is renamed.
    assert rows[0]["path"] == str(tmp_path / "A" / "B" / "C.txt")


def test_descendants_convert_before_ancestors(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    _touch(tmp_path / "ParentDir" / "ChildDir" / "LeafFile.ts")
    seen: list[str] = []
    original = renamer.to_kebab_name

    def _recording(name: str) -> str:
        seen.append(name)
        return original(name)

    monkeypatch.setattr(renamer, "to_kebab_name", _recording)
    rename_tree(tmp_path)

    assert seen == ["LeafFile.ts", "ChildDir", "ParentDir"]
    assert (tmp_path / "parent-dir" / "child-dir" / "leaf-file.ts").is_file()


def test_root_itself_is_not_renamed(tmp_path: Path) -> None:
    root = tmp_path / "MyProject"
    _touch(root / "SomeFile.js")

    rename_tree(root)

    assert root.is_dir()
    assert (root / "some-file.js").is_file()


def test_collision_is_skipped_with_warning(tmp_path: Path, kebab_caplog: pytest.LogCaptureFixture) -> None:
    if not _case_sensitive(tmp_path):
        pytest.skip("filesystem is case-insensitive")
    _touch(tmp_path / "Foo.txt", "upper")
    _touch(tmp_path / "foo.txt", "lower")

    rows = rename_tree(tmp_path)

    assert (tmp_path / "Foo.txt").read_text(encoding="utf-8") == "upper"
    assert (tmp_path / "foo.txt").read_text(encoding="utf-8") == "lower"
    assert [row["status"] for row in rows] == ["collision"]
    assert "already exists" in kebab_caplog.text


def test_siblings_converging_on_one_name(tmp_path: Path) -> None:
    _touch(tmp_path / "FooBar.txt", "first")
    _touch(tmp_path / "foo_bar.txt", "second")

    rows = rename_tree(tmp_path)

    assert {row["status"] for row in rows} == {"renamed", "collision"}
    assert (tmp_path / "foo-bar.txt").read_text(encoding="utf-8") == "first"
    assert (tmp_path / "foo_bar.txt").read_text(encoding="utf-8") == "second"


def test_dry_run_plans_without_touching_disk(tmp_path: Path) -> None:
    _touch(tmp_path / "SomeDir" / "FooBar.txt")
    _touch(tmp_path / "SomeDir" / "foo_bar.txt")

    rows = rename_tree(tmp_path, dry_run=True)

    assert sorted(p.name for p in (tmp_path / "SomeDir").iterdir()) == ["FooBar.txt", "foo_bar.txt"]
    assert [(row["target"], row["status"]) for row in rows] == [
        ("foo-bar.txt", "planned"),
        ("foo-bar.txt", "collision"),
        ("some-dir", "planned"),
    ]


def test_second_run_is_a_no_op(tmp_path: Path) -> None:
    _touch(tmp_path / "Components" / "NavBar" / "NavBarItem.svelte")
    _touch(tmp_path / "HTTPServer.py")

    assert rename_tree(tmp_path)
    snapshot = sorted(str(p.relative_to(tmp_path)) for p in tmp_path.rglob("*"))

    assert rename_tree(tmp_path) == []
    assert sorted(str(p.relative_to(tmp_path)) for p in tmp_path.rglob("*")) == snapshot


def test_symlink_is_renamed_but_not_followed(tmp_path: Path) -> None:
    outside = tmp_path / "outside"
    _touch(outside / "InnerFile.txt")
    root = tmp_path / "root"
    root.mkdir()
    try:
        os.symlink(outside, root / "LinkedDir", target_is_directory=True)
    except (OSError, NotImplementedError):
        pytest.skip("symlinks not supported")

    rows = rename_tree(root)

    assert (root / "linked-dir").is_symlink()
    assert (outside / "InnerFile.txt").exists()
    assert [(row["type"], row["target"]) for row in rows] == [("l", "linked-dir")]


def test_excluded_directories_are_untouched(tmp_path: Path) -> None:
    _touch(tmp_path / "node_modules" / "SomePackage" / "IndexFile.js")
    _touch(tmp_path / "Vendor" / "LibCode.js")

    rename_tree(tmp_path, exclude=["node_modules", "Vendor"])

    assert (tmp_path / "node_modules" / "SomePackage" / "IndexFile.js").exists()
    assert (tmp_path / "Vendor" / "LibCode.js").exists()


def test_default_exclusions(tmp_path: Path) -> None:
    _touch(tmp_path / ".git" / "HooksDir" / "PreCommit")
    _touch(tmp_path / "SrcDir" / "MainFile.ts")

    rename_tree(tmp_path)

    assert (tmp_path / ".git" / "HooksDir" / "PreCommit").exists()
    assert (tmp_path / "src-dir" / "main-file.ts").exists()


def test_failed_rename_does_not_abort_walk(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    kebab_caplog: pytest.LogCaptureFixture,
) -> None:
    _touch(tmp_path / "Alpha.txt")
    _touch(tmp_path / "Beta.txt")
    _touch(tmp_path / "Gamma.txt")
    original = renamer.rename_entry

    def _flaky(src: Path, dst: Path, dry_run: bool = False) -> Path:
        if src.name == "Beta.txt":
            raise PermissionError(13, "Permission denied", str(src))
        return original(src, dst, dry_run=dry_run)

    monkeypatch.setattr(renamer, "rename_entry", _flaky)
    rows = rename_tree(tmp_path)

    assert [(row["target"], row["status"]) for row in rows] == [
        ("alpha.txt", "renamed"),
        ("beta.txt", "error"),
        ("gamma.txt", "renamed"),
    ]
    assert (tmp_path / "Beta.txt").exists()
    assert "Permission denied" in kebab_caplog.text


def test_unreadable_directory_is_reported_and_walk_continues(
    tmp_path: Path,
    monkeypatch: pytest.MonkeyPatch,
    kebab_caplog: pytest.LogCaptureFixture,
) -> None:
    _touch(tmp_path / "Alpha" / "InnerFile.txt")
    _touch(tmp_path / "Locked" / "HiddenFile.txt")
    _touch(tmp_path / "Zeta.txt")
    original = os.scandir

    def _guarded(path="."):
        if Path(path).name == "Locked":
            raise PermissionError(13, "Permission denied", str(path))
        return original(path)

    monkeypatch.setattr(renamer.os, "scandir", _guarded)
    rows = rename_tree(tmp_path)

    assert [(row["target"], row["status"]) for row in rows] == [
        ("inner-file.txt", "renamed"),
        ("alpha", "renamed"),
        ("", "error"),
        ("locked", "renamed"),
        ("zeta.txt", "renamed"),
    ]
    assert rows[2]["path"] == str(tmp_path / "Locked")
    assert (tmp_path / "locked" / "HiddenFile.txt").exists()
    assert "Cannot read directory" in kebab_caplog.text

def test_invalid_root(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        rename_tree(tmp_path / "missing")

    file_root = _touch(tmp_path / "plain.txt")
    with pytest.raises(NotADirectoryError):
        rename_tree(file_root)
