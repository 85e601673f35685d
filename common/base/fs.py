"""Filesystem helper utilities shared across common modules."""

from __future__ import annotations

import os
from pathlib import Path


def ensure_dir(path: Path | str) -> Path:
    p = Path(path).expanduser()
    p.mkdir(parents=True, exist_ok=True)
    return p


def same_entry(first: Path | str, second: Path | str) -> bool:
    """Return True when both paths point at the same directory entry (no link following)."""
    try:
        a, b = os.lstat(first), os.lstat(second)
    except OSError:
        return False
    return (a.st_dev, a.st_ino) == (b.st_dev, b.st_ino)
