"""Low-level shared utilities for kebab-tools."""

from .logging import get_logger, setup_logging, KebabLogger

__all__ = [
    "get_logger",
    "setup_logging",
    "KebabLogger",
]
