"""Shared helpers for the rename and import-rewrite passes."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, Optional

DEFAULT_EXCLUDE = (".git", "node_modules")


def resolve_root(root: Path | str) -> Path:
    """Validate the traversal root.

    Args:
        root: Directory to process (``~`` is expanded).

    Returns:
        The absolute root path.

    Raises:
        FileNotFoundError: If ``root`` does not exist.
        NotADirectoryError: If ``root`` is not a directory.
    """

    root = Path(root).expanduser().resolve()
    if not root.exists():
        raise FileNotFoundError(f"Root directory not found: {root}")
    if not root.is_dir():
        raise NotADirectoryError(f"Root path is not a directory: {root}")
    return root


def exclusion_set(exclude: Optional[Iterable[str]]) -> frozenset[str]:
    if exclude is None:
        return frozenset(DEFAULT_EXCLUDE)
    return frozenset(name.strip().rstrip("/\\") for name in exclude if name and name.strip())


def result_row(path: Path, kind: str, status: str, message: str = "", target: str = "") -> dict[str, str]:
    return {
        "path": str(path),
        "type": kind,
        "status": status,
        "target": target,
        "message": message,
    }
