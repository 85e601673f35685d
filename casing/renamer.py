"""
casing.renamer

Rename every file and directory under a root to kebab-case.

The walk is post-order: a directory's contents reach their final names before
the directory itself is renamed, so the paths handed to the recursive call
stay valid for its whole duration. Symbolic links are renamed like any other
entry but never descended into.
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

from common.base.logging import get_logger
from common.base.ops import NameCollisionError, rename_entry

from .converter import to_kebab_name
from .utils import exclusion_set, resolve_root, result_row

log = get_logger(__name__)


def _entry_kind(entry: os.DirEntry) -> str:
    if entry.is_symlink():
        return "l"
    return "d" if entry.is_dir(follow_symlinks=False) else "f"


def _list_children(directory: Path, results: List[Dict[str, str]]) -> Optional[List[os.DirEntry]]:
    try:
        with os.scandir(directory) as it:
            return sorted(it, key=lambda entry: entry.name)
    except OSError as exc:
        log.warning(f"⚠️ Cannot read directory {directory}: {exc}")
        results.append(result_row(directory, "d", "error", str(exc)))
        return None


def _rename_one(
    path: Path,
    kind: str,
    claimed: Set[str],
    results: List[Dict[str, str]],
    *,
    dry_run: bool,
) -> None:
    target = to_kebab_name(path.name)
    if target == path.name:
        return

    destination = path.with_name(target)
    try:
        # ``claimed`` also holds names planned earlier in this pass (dry-run).
        if target in claimed:
            raise NameCollisionError(path, destination)
        rename_entry(path, destination, dry_run=dry_run)
    except NameCollisionError:
        log.warning(f"⚠️ Skipping {path}: '{target}' already exists")
        results.append(result_row(path, kind, "collision", "destination exists", target))
        return
    except OSError as exc:
        log.warning(f"⚠️ Failed to rename {path}: {exc}")
        results.append(result_row(path, kind, "error", str(exc), target))
        return

    claimed.discard(path.name)
    claimed.add(target)
    if not dry_run:
        log.info(f"✏️ Renamed {path} → {target}")
    results.append(result_row(path, kind, "planned" if dry_run else "renamed", str(destination), target))


def _rename_children(
    directory: Path,
    results: List[Dict[str, str]],
    *,
    exclude: frozenset[str],
    dry_run: bool,
) -> None:
    children = _list_children(directory, results)
    if children is None:
        return

    claimed = {entry.name for entry in children}
    for entry in children:
        if entry.name in exclude:
            log.debug(f"Excluded: {entry.path}")
            continue
        path = Path(entry.path)
        try:
            kind = _entry_kind(entry)
        except OSError as exc:
            log.warning(f"⚠️ Cannot stat {path}: {exc}")
            results.append(result_row(path, "?", "error", str(exc)))
            continue

        if kind == "d":
            _rename_children(path, results, exclude=exclude, dry_run=dry_run)
        _rename_one(path, kind, claimed, results, dry_run=dry_run)


def rename_tree(
    root: Path | str,
    *,
    dry_run: bool = False,
    exclude: Optional[Iterable[str]] = None,
) -> List[Dict[str, str]]:
    """
    Rename every entry below ``root`` whose name is not kebab-case.

    Args:
        root: Directory whose contents are renamed (the root itself is kept).
        dry_run: Log and report the planned renames without touching the disk.
        exclude: Entry names that are neither renamed nor descended into.
            Defaults to ``.git`` and ``node_modules``.

    Returns:
        One row per rename attempt, in the order the renames happen
        (deepest entries first). ``status`` is ``renamed``, ``planned``
        (dry-run), ``collision`` or ``error``.

    Raises:
        FileNotFoundError / NotADirectoryError: ``root`` is not a directory.
    """
    root = resolve_root(root)
    results: List[Dict[str, str]] = []
    log.info(f"🔎 Renaming entries under {root}{' (dry-run)' if dry_run else ''}")
    _rename_children(root, results, exclude=exclusion_set(exclude), dry_run=dry_run)
    return results
