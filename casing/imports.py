"""
casing.imports

Rewrite the paths referenced by import/require statements to kebab-case.

Statements are located with a regular expression, not a parser. Only the
quoted path is rewritten: binding names stay untouched, and only local paths
(``./``, ``../``, ``/`` or a configured alias such as ``~/``) are converted,
so bare module names and scoped packages are left alone. Each path segment
goes through the same ``to_kebab_name`` rule the rename pass applies to the
entries on disk, which keeps rewritten references pointing at renamed files.
"""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from common.base.file_io import DEFAULT_ENCODING, decode_text, read_bytes, write_bytes
from common.base.logging import get_logger
from common.shared.utils import Progress

from .converter import to_kebab_name
from .utils import exclusion_set, resolve_root, result_row

log = get_logger(__name__)

DEFAULT_ALIASES = ("~/", "@/", "$lib/")
SOURCE_EXTENSIONS = ("js", "jsx", "ts", "tsx", "svelte", "vue")

IMPORT_PATTERN = re.compile(
    r"""
    (?P<lead>
        \bimport\s+[^'";]*?\bfrom\s*      # import X from '...'
      | \bexport\s+[^'";]*?\bfrom\s*      # export { X } from '...'
      | \bimport\s*\(\s*                  # import('...')
      | \bimport\s*                       # import '...'
      | \brequire\s*\(\s*                 # require('...')
    )
    (?P<quote>['"])
    (?P<path>[^'"\r\n]+)
    (?P=quote)
    """,
    re.VERBOSE,
)

_SEGMENT_SPLIT = re.compile(r"([\\/])")
_SUFFIX_START = re.compile(r"[?#]")


def _local_prefix(path: str, aliases: Sequence[str]) -> Optional[str]:
    """Return the untouched prefix of a local path, or None for package imports."""
    for alias in aliases:
        if alias and path.startswith(alias):
            return alias
    if path.startswith((".", "/")):
        return ""
    return None


def _split_suffix(path: str) -> Tuple[str, str]:
    match = _SUFFIX_START.search(path)
    if match is None:
        return path, ""
    return path[:match.start()], path[match.start():]


def rewrite_import_path(path: str, aliases: Sequence[str] = DEFAULT_ALIASES) -> str:
    """
    Convert every segment of a local import path to kebab-case.

    A ``?query`` or ``#fragment`` suffix is kept as written.

    >>> rewrite_import_path("./ComponentLibrary/ButtonComponent.svelte")
    './component-library/button-component.svelte'
    >>> rewrite_import_path("@scope/SomePackage")
    '@scope/SomePackage'
    """
    prefix = _local_prefix(path, aliases)
    if prefix is None:
        return path

    body, suffix = _split_suffix(path[len(prefix):])
    parts = _SEGMENT_SPLIT.split(body)
    converted = [
        part if part in {"", ".", "..", "/", "\\"} else to_kebab_name(part)
        for part in parts
    ]
    return prefix + "".join(converted) + suffix


def rewrite_imports(content: str, aliases: Sequence[str] = DEFAULT_ALIASES) -> Tuple[str, int]:
    """Return ``content`` with rewritten import paths and the number of paths changed."""
    changes = 0

    def _replace(match: re.Match) -> str:
        nonlocal changes
        original = match.group("path")
        updated = rewrite_import_path(original, aliases)
        if updated == original:
            return match.group(0)
        changes += 1
        quote = match.group("quote")
        return f"{match.group('lead')}{quote}{updated}{quote}"

    return IMPORT_PATTERN.sub(_replace, content), changes


def rewrite_file(
    path: Path | str,
    *,
    dry_run: bool = False,
    aliases: Sequence[str] = DEFAULT_ALIASES,
) -> int:
    """
    Rewrite the import paths of one file in place.

    Binary and non UTF-8 files are skipped. The file is only written when at
    least one path changed; line endings are preserved.

    Returns:
        Number of rewritten import paths (0 for skipped files).

    Raises:
        OSError: the file could not be read or written.
    """
    path = Path(path)
    content = decode_text(read_bytes(path))
    if content is None:
        log.debug(f"Skipping binary or non-UTF-8 file: {path}")
        return 0

    new_content, changes = rewrite_imports(content, aliases)
    if not changes:
        return 0

    if dry_run:
        log.info(f"[DRY-RUN] Would update {changes} import(s) in: {path}")
    else:
        write_bytes(path, new_content.encode(DEFAULT_ENCODING))
        log.info(f"📝 Updated {changes} import(s) in: {path}")
    return changes


def iter_text_candidates(
    root: Path,
    *,
    extensions: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
) -> List[Path]:
    """Collect regular files under ``root`` (symlinks skipped, excluded dirs pruned)."""
    skip = exclusion_set(exclude)
    wanted = {ext.lstrip(".").lower() for ext in extensions} if extensions else None

    candidates: List[Path] = []
    for dirpath, dirnames, filenames in os.walk(root, followlinks=False):
        dirnames[:] = sorted(name for name in dirnames if name not in skip)
        dir_path = Path(dirpath)
        for filename in sorted(filenames):
            if filename in skip:
                continue
            file_path = dir_path / filename
            if file_path.is_symlink() or not file_path.is_file():
                continue
            if wanted is not None and file_path.suffix.lstrip(".").lower() not in wanted:
                continue
            candidates.append(file_path)
    return candidates


def rewrite_tree(
    root: Path | str,
    *,
    dry_run: bool = False,
    extensions: Optional[Iterable[str]] = None,
    exclude: Optional[Iterable[str]] = None,
    aliases: Sequence[str] = DEFAULT_ALIASES,
) -> List[Dict[str, str]]:
    """
    Rewrite import paths in every text file below ``root``.

    Args:
        root: Directory to scan.
        dry_run: Report files that would change without writing them.
        extensions: Optional extension filter (e.g. ``SOURCE_EXTENSIONS``);
            every text file is scanned when omitted.
        exclude: Directory or file names to skip (defaults to ``.git`` and
            ``node_modules``).
        aliases: Path prefixes treated as local besides ``./``, ``../`` and ``/``.

    Returns:
        One row per changed (``rewritten`` / ``planned``) or failed (``error``) file.

    Raises:
        FileNotFoundError / NotADirectoryError: ``root`` is not a directory.
    """
    root = resolve_root(root)
    log.info(f"🔎 Rewriting imports under {root}{' (dry-run)' if dry_run else ''}")
    files = iter_text_candidates(root, extensions=extensions, exclude=exclude)

    results: List[Dict[str, str]] = []
    for file_path in Progress(files, desc="Rewriting imports", unit="file"):
        try:
            changes = rewrite_file(file_path, dry_run=dry_run, aliases=aliases)
        except OSError as exc:
            log.warning(f"⚠️ Failed to rewrite {file_path}: {exc}")
            results.append(result_row(file_path, "f", "error", str(exc)))
            continue
        if changes:
            status = "planned" if dry_run else "rewritten"
            results.append(result_row(file_path, "f", status, f"{changes} import(s)"))
    return results
