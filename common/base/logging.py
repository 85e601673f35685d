"""
common.base.logging

Typed logging for kebab-tools.

Features:
 - KebabLogger subclass carrying the Rich flag and the active log file
 - Unified setup for Rich + standard logging
 - Optional per-run log file when a log directory is configured
 - Colorized, emoji-enhanced level output
 - Level and Rich toggle normalization shared with the YAML config loader
"""

from __future__ import annotations

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Optional, cast

# ----------------------------------------------------------------------
# RICH HANDLER CONFIGURATION
# ----------------------------------------------------------------------

try:
    from rich.logging import RichHandler
    from rich.text import Text

    RICH_AVAILABLE = True
except ImportError:
    RichHandler = None  # type: ignore[assignment]
    Text = None  # type: ignore[assignment]
    RICH_AVAILABLE = False


BASE_LOGGER_NAME = "kebab"

# ----------------------------------------------------------------------
# LEVEL STYLE METADATA
# ----------------------------------------------------------------------

ANSI_RESET = "\033[0m"

LEVEL_STYLES: Dict[int, Dict[str, str]] = {
    logging.DEBUG: {"emoji": "🐛", "ansi": "\033[36m", "rich": "bright_cyan"},
    logging.INFO: {"emoji": "ℹ️", "ansi": "\033[32m", "rich": "green"},
    logging.WARNING: {"emoji": "⚠️", "ansi": "\033[33m", "rich": "yellow"},
    logging.ERROR: {"emoji": "❌", "ansi": "\033[31m", "rich": "red"},
    logging.CRITICAL: {"emoji": "💥", "ansi": "\033[95m", "rich": "bold magenta"},
}
DEFAULT_STYLE = LEVEL_STYLES[logging.INFO]


def _style_for(record: logging.LogRecord) -> Dict[str, str]:
    return LEVEL_STYLES.get(record.levelno, DEFAULT_STYLE)


# ----------------------------------------------------------------------
# FORMATTERS
# ----------------------------------------------------------------------

class ColorEmojiFormatter(logging.Formatter):
    """Console formatter that injects colored level names and emojis."""

    def format(self, record: logging.LogRecord) -> str:
        style = _style_for(record)
        display = f"{style['emoji']} {record.levelname}"
        record.level_display = f"{style['ansi']}{display}{ANSI_RESET}"  # type: ignore[attr-defined]
        try:
            return super().format(record)
        finally:
            delattr(record, "level_display")


class EmojiFormatter(logging.Formatter):
    """File formatter that prefixes log lines with the level emoji."""

    def format(self, record: logging.LogRecord) -> str:
        record.level_emoji = _style_for(record)["emoji"]  # type: ignore[attr-defined]
        return super().format(record)


if RICH_AVAILABLE and RichHandler is not None and Text is not None:

    class KebabRichHandler(RichHandler):
        """Rich console handler with emoji-enhanced level column."""

        def get_level_text(self, record: logging.LogRecord) -> Text:  # type: ignore[override]
            style = _style_for(record)
            text = Text()
            text.append(f"{style['emoji']} ", style=style["rich"])
            text.append(record.levelname, style=style["rich"])
            return text

else:  # pragma: no cover - fallback when Rich is unavailable
    KebabRichHandler = None  # type: ignore[assignment]


# ----------------------------------------------------------------------
# LOGGER CLASS
# ----------------------------------------------------------------------

class KebabLogger(logging.Logger):
    """Custom logger with Rich support flag and optional log file."""

    rich_enabled: bool = False
    log_file: Optional[Path] = None


# ----------------------------------------------------------------------
# NORMALIZATION
# ----------------------------------------------------------------------

def normalize_level(value: Any) -> str:
    if isinstance(value, str):
        candidate = value.strip().upper()
        if candidate in logging._nameToLevel:  # type: ignore[attr-defined]
            return candidate
    elif isinstance(value, int) and not isinstance(value, bool):
        label = logging.getLevelName(value)
        if isinstance(label, str) and not label.startswith("Level "):
            return label
    return "INFO"


def normalize_use_rich(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"auto", "default", ""}:
            return None
        if lowered in {"true", "yes", "1", "on"}:
            return True
        if lowered in {"false", "no", "0", "off"}:
            return False
    return None


def _resolve_use_rich(value: Optional[bool]) -> bool:
    if value is None:
        return RICH_AVAILABLE
    return bool(value) and RICH_AVAILABLE


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


# ----------------------------------------------------------------------
# BASE LOGGER SETUP
# ----------------------------------------------------------------------

def setup_logging(
    level: str | int | None = None,
    use_rich: Any = None,
    log_dir: Optional[Path | str] = None,
    file_prefix: Optional[str] = None,
) -> KebabLogger:
    """
    Configure and return the global kebab logger.

    Args:
        level: Desired logging level (INFO if unset or unknown).
        use_rich: Force-enable or disable the Rich handler. None/"auto" auto-detects.
        log_dir: Directory for a per-run log file. No file is written when omitted.
        file_prefix: Prefix for generated log filenames.
    """
    resolved_level = normalize_level(level)
    resolved_use_rich = _resolve_use_rich(normalize_use_rich(use_rich))

    logging.setLoggerClass(KebabLogger)
    logger = cast(KebabLogger, logging.getLogger(BASE_LOGGER_NAME))
    logger.setLevel(resolved_level)

    # Rebuild handlers so repeated calls pick up new settings.
    _close_handlers(logger)

    # ------------------------------------------------------------------
    # Console Handler (Rich or ANSI)
    # ------------------------------------------------------------------
    console_handler: logging.Handler
    if resolved_use_rich and KebabRichHandler is not None:
        console_handler = KebabRichHandler(
            rich_tracebacks=True,
            markup=False,
            show_time=True,
            show_level=True,
            show_path=False,
            log_time_format="[%X]",
        )
        logger.rich_enabled = True
    else:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(
            ColorEmojiFormatter(
                fmt="%(asctime)s %(level_display)s %(name)s: %(message)s",
                datefmt="%H:%M:%S",
            )
        )
        logger.rich_enabled = False
    console_handler.setLevel(logging.NOTSET)
    logger.addHandler(console_handler)

    # ------------------------------------------------------------------
    # File Handler
    # ------------------------------------------------------------------
    logger.log_file = None
    if log_dir:
        resolved_log_dir = Path(log_dir).expanduser()
        resolved_log_dir.mkdir(parents=True, exist_ok=True)
        timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        log_file_path = resolved_log_dir / f"{file_prefix or 'kebab'}_{timestamp}.log"

        file_handler = logging.FileHandler(log_file_path, mode="a", encoding="utf-8")
        file_handler.setFormatter(
            EmojiFormatter(
                fmt="%(asctime)s %(level_emoji)s [%(levelname)s] %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
        file_handler.setLevel(logging.NOTSET)
        logger.addHandler(file_handler)
        logger.log_file = log_file_path

    # ------------------------------------------------------------------
    # Finalize
    # ------------------------------------------------------------------
    logger.propagate = False
    logger._initialized = True  # type: ignore[attr-defined]
    logger.debug(
        "Logger initialized at level %s (Rich=%s)",
        resolved_level,
        "ON" if logger.rich_enabled else "OFF",
    )
    if logger.log_file:
        logger.info("📄 Log file created at: %s", logger.log_file.resolve())

    return logger


# ----------------------------------------------------------------------
# UTILITY ACCESSOR
# ----------------------------------------------------------------------

def get_logger(name: str = BASE_LOGGER_NAME) -> KebabLogger:
    """Retrieve a namespaced kebab logger (configured later via setup_logging)."""

    logging.setLoggerClass(KebabLogger)
    base = cast(KebabLogger, logging.getLogger(BASE_LOGGER_NAME))

    if not getattr(base, "_initialized", False) and not base.handlers:
        base.addHandler(logging.NullHandler())

    if not name or name == BASE_LOGGER_NAME:
        return base

    return cast(KebabLogger, base.getChild(name))
