"""Utility helpers for performing file I/O with consistent defaults."""

from __future__ import annotations

from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator, Mapping, Optional

import yaml


DEFAULT_ENCODING = "utf-8"
BINARY_SNIFF_BYTES = 8192


def _to_path(path: Path | str) -> Path:
    return Path(path).expanduser()


def read_bytes(path: Path | str) -> bytes:
    return _to_path(path).read_bytes()


def write_bytes(path: Path | str, payload: bytes) -> None:
    _to_path(path).write_bytes(payload)


def looks_binary(payload: bytes) -> bool:
    """Heuristic used by git and grep: a NUL byte near the start means binary."""
    return b"\0" in payload[:BINARY_SNIFF_BYTES]


def decode_text(payload: bytes, encoding: str = DEFAULT_ENCODING) -> Optional[str]:
    """Decode ``payload`` or return None when it is not text in ``encoding``."""
    if looks_binary(payload):
        return None
    try:
        return payload.decode(encoding)
    except UnicodeDecodeError:
        return None


@contextmanager
def open_file(
    path: Path | str,
    mode: str = "r",
    *,
    encoding: str = DEFAULT_ENCODING,
    newline: Optional[str] = None,
) -> Iterator[Any]:
    path_obj = _to_path(path)
    kwargs: dict[str, Any] = {}
    is_binary = "b" in mode
    if is_binary:
        if newline is not None:
            raise ValueError("newline is not supported in binary mode")
    else:
        kwargs["encoding"] = encoding
        kwargs["newline"] = newline
    with open(path_obj, mode, **kwargs) as handle:
        yield handle


def read_yaml(path: Path | str) -> Mapping[str, Any] | list[Any]:
    with open_file(path, "r") as handle:
        data = yaml.safe_load(handle)
    return data if data is not None else {}
