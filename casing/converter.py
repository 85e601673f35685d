"""
casing.converter

Pure PascalCase → kebab-case transforms.

``to_kebab`` converts a bare identifier, ``to_kebab_name`` a filename (or a
path segment) one dot-delimited part at a time. Both are fixed points on their
own output, so running a conversion pass twice changes nothing.
"""

from __future__ import annotations

from typing import Tuple

SEPARATORS = "-_ "


def split_extension(name: str) -> Tuple[str, str]:
    """
    Split ``name`` at its final dot.

    A dot in first position (dotfiles such as ``.eslintrc``) is not an
    extension separator, and neither is a trailing dot.

    >>> split_extension("ButtonComponent.svelte")
    ('ButtonComponent', 'svelte')
    >>> split_extension(".env")
    ('.env', '')
    """
    index = name.rfind(".")
    if index <= 0 or index == len(name) - 1:
        return name, ""
    return name[:index], name[index + 1:]


def _is_boundary(text: str, index: int, leading_digits: int) -> bool:
    """True when a hyphen belongs between ``text[index - 1]`` and ``text[index]``."""
    current = text[index]
    if index == 0 or not current.isupper():
        return False
    previous = text[index - 1]
    if previous.islower():
        return True
    if previous.isdigit():
        # 3DModel → 3d-model: a name's leading number stays glued to its first word.
        return index > leading_digits
    if previous.isupper() and index + 1 < len(text):
        return text[index + 1].islower()
    return False


def _convert_core(core: str) -> str:
    leading_digits = len(core) - len(core.lstrip("0123456789"))
    pieces = []
    for index, char in enumerate(core):
        if char in SEPARATORS:
            if pieces and pieces[-1] != "-":
                pieces.append("-")
            continue
        if _is_boundary(core, index, leading_digits) and pieces and pieces[-1] != "-":
            pieces.append("-")
        pieces.append(char.lower())
    return "".join(pieces).strip("-")


def to_kebab(identifier: str) -> str:
    """
    Convert an identifier to kebab-case.

    Every separator (hyphen, underscore, space) becomes a single hyphen and
    hyphens left at either edge are stripped, so ``__tests__`` becomes
    ``tests``. A string made only of separators is returned unchanged.

    >>> to_kebab("HTTPServer")
    'http-server'
    >>> to_kebab("-Leading-And-Trailing-")
    'leading-and-trailing'
    """
    if not identifier.strip(SEPARATORS):
        return identifier
    return _convert_core(identifier.strip(SEPARATORS))


def to_kebab_name(name: str) -> str:
    """
    Convert a file or directory name.

    Each dot-delimited part, the extension included, goes through ``to_kebab``
    on its own. The result does not depend on where the extension is split,
    so an import path that omits the extension (``./UserCard.Stories``)
    converts the same way as the file on disk (``UserCard.Stories.tsx``).

    >>> to_kebab_name("MainModule.TS")
    'main-module.ts'
    """
    base, ext = split_extension(name)
    parts = [to_kebab(part) for part in base.split(".")]
    if ext:
        parts.append(to_kebab(ext))
    return ".".join(parts)
