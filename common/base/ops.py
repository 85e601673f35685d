"""
common.base.ops

Guarded filesystem operations for kebab-tools.

 - Dry-run support for destructive operations
 - Refuses to overwrite an existing destination (NameCollisionError)
 - Case-only renames on case-insensitive filesystems via a temporary name
"""

from __future__ import annotations

import os
import uuid
from pathlib import Path

from .fs import same_entry
from .logging import get_logger

log = get_logger(__name__)


class NameCollisionError(FileExistsError):
    """Raised when a rename destination is already taken by another entry."""

    def __init__(self, src: Path, dst: Path) -> None:
        super().__init__(f"Destination already exists: {dst}")
        self.src = src
        self.dst = dst


# ----------------------------------------------------------------------
# FILESYSTEM OPERATIONS
# ----------------------------------------------------------------------

def rename_entry(src: Path | str, dst: Path | str, dry_run: bool = False) -> Path:
    """
    Rename a file, directory or symlink in place without overwriting anything.

    Args:
        src: Existing entry.
        dst: New path (normally a sibling of ``src``).
        dry_run: Simulate the rename without performing it.

    Returns:
        The destination path.

    Raises:
        NameCollisionError: ``dst`` exists and is a different entry.
        OSError: the underlying rename failed (permissions, vanished source...).
    """
    src, dst = Path(src), Path(dst)
    case_only = False
    if os.path.lexists(dst):
        # Case-insensitive filesystems report Foo.txt and foo.txt as one entry.
        if not same_entry(src, dst) or src.name == dst.name:
            raise NameCollisionError(src, dst)
        case_only = True

    if dry_run:
        log.info(f"[DRY-RUN] Would rename {src} → {dst.name}")
        return dst

    if case_only:
        staging = src.with_name(f".{src.name}.{uuid.uuid4().hex[:8]}.tmp")
        os.rename(src, staging)
        os.rename(staging, dst)
    else:
        os.rename(src, dst)
    log.debug(f"Renamed {src} → {dst}")
    return dst
