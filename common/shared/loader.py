"""
Shared configuration loading and validation helpers.

Provides:
 - `load_config`: basic YAML loader
 - `load_task_config`: validated configuration for a given task
 - `cli_main`: command-line entry point exposed as the `kebab-config` script
"""

from __future__ import annotations

import argparse
import base64
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional

from common.base.file_io import read_yaml


ConfigDict = Dict[str, Any]

DEFAULT_CONFIG_FILENAME = "config.yaml"
LOGGING_SECTION_KEY = "logging"
TASKS_SECTION_KEY = "tasks"
CONFIGS_DIR = Path(__file__).resolve().parents[2] / "configs"


TASK_SCHEMAS: Dict[str, Dict[str, Iterable[str]]] = {
    "kebab_rename": {
        "required": [],
        "optional": ["root", "dry_run", "exclude", "report_dir"],
    },
    "kebab_imports": {
        "required": [],
        "optional": ["root", "dry_run", "exclude", "extensions", "aliases", "report_dir"],
    },
}

FIELD_ALIASES = {
    "roots": "root",
    "excludes": "exclude",
    "exts": "extensions",
    "report": "report_dir",
}

SINGLE_PATH_FIELDS = {"root", "report_dir"}
BOOLEAN_FIELDS = {"dry_run"}
STRING_LIST_FIELDS = {"exclude", "extensions", "aliases"}
LOGGING_ALLOWED_KEYS = {"level", "use_rich", "log_dir", "file_prefix"}

YES_VALUES = {"1", "true", "yes", "y", "on"}
NO_VALUES = {"0", "false", "no", "n", "off"}


def load_config(path: str | Path | None) -> Mapping[str, Any] | Dict[str, Any]:
    if not path:
        return {}

    cfg_path = Path(path).expanduser()
    if not cfg_path.exists():
        raise FileNotFoundError(f"Configuration file not found: {cfg_path}")

    data = read_yaml(cfg_path)
    if not isinstance(data, Mapping):
        raise ValueError(f"Configuration root must be a mapping in {cfg_path}")

    return data


def load_task_config(task: str, config_path: str | Path | None = None) -> ConfigDict:
    """
    Load and validate the settings of ``task``.

    When ``config_path`` is omitted the repository default
    (``configs/config.yaml``) is used if present; otherwise only the built-in
    defaults of the caller apply and an empty task section is returned.

    The returned mapping carries the normalized task keys plus ``__task__``,
    ``__config_path__`` and ``__logging__`` (the merged logging section).
    """
    if task not in TASK_SCHEMAS:
        raise ValueError(f"Unknown task '{task}'. Expected one of: {', '.join(sorted(TASK_SCHEMAS))}")

    resolved_path = _resolve_config_path(config_path)
    root_config = dict(load_config(resolved_path)) if resolved_path else {}
    task_config_raw = _extract_task_config(root_config, task, resolved_path)

    task_logging_override: Dict[str, Any] = {}
    if "logging" in task_config_raw:
        logging_payload = task_config_raw.pop("logging")
        if not isinstance(logging_payload, Mapping):
            raise ValueError(
                f"Task '{task}' logging section must be a mapping in {resolved_path}"
            )
        task_logging_override = _validate_logging_keys(dict(logging_payload), resolved_path)

    config = _apply_aliases(task_config_raw)

    schema = TASK_SCHEMAS[task]
    required = set(schema.get("required", []))
    optional = set(schema.get("optional", []))
    allowed_keys = required | optional

    missing = [key for key in required if not config.get(key)]
    if missing:
        raise ValueError(
            f"Configuration '{resolved_path}' missing required fields for task '{task}': {', '.join(missing)}"
        )

    unexpected = [key for key in config if key not in allowed_keys]
    if unexpected:
        raise ValueError(
            f"Configuration '{resolved_path}' contains unsupported keys for task '{task}': {', '.join(sorted(unexpected))}"
        )

    normalized: ConfigDict = {}
    for key, value in config.items():
        if key in SINGLE_PATH_FIELDS:
            normalized[key] = _normalize_single_path(value, key, resolved_path)
        elif key in BOOLEAN_FIELDS:
            normalized[key] = _coerce_bool(value, key, resolved_path)
        elif key in STRING_LIST_FIELDS:
            normalized[key] = _normalize_string_list(value, key, resolved_path)
        else:
            normalized[key] = value

    if "extensions" in normalized:
        normalized["extensions"] = [ext.lstrip(".").lower() for ext in normalized["extensions"]]

    normalized["__task__"] = task
    normalized["__config_path__"] = str(resolved_path) if resolved_path else None

    merged_logging = _extract_logging_settings(root_config, resolved_path)
    merged_logging.update(task_logging_override)
    if merged_logging.get("log_dir"):
        merged_logging["log_dir"] = _anchor_path(merged_logging["log_dir"], resolved_path)
    normalized["__logging__"] = merged_logging
    return normalized


def _resolve_config_path(config_path: str | Path | None) -> Optional[Path]:
    if config_path:
        return Path(config_path).expanduser()

    candidate = CONFIGS_DIR / DEFAULT_CONFIG_FILENAME
    return candidate if candidate.exists() else None


def _extract_task_config(root: Mapping[str, Any], task: str, config_path: Optional[Path]) -> ConfigDict:
    if TASKS_SECTION_KEY not in root:
        # Flat single-task files carry the task keys at the root.
        return {key: value for key, value in root.items() if key != LOGGING_SECTION_KEY}

    tasks_section = root.get(TASKS_SECTION_KEY) or {}
    if not isinstance(tasks_section, Mapping):
        raise ValueError(f"'tasks' section must be a mapping in {config_path}")
    task_payload = tasks_section.get(task) or {}
    if not isinstance(task_payload, Mapping):
        raise ValueError(f"Task '{task}' entry must be a mapping in {config_path}")
    return dict(task_payload)


def _extract_logging_settings(root: Mapping[str, Any], config_path: Optional[Path]) -> Dict[str, Any]:
    section = root.get(LOGGING_SECTION_KEY, {})
    if not section:
        return {}
    if not isinstance(section, Mapping):
        raise ValueError(f"'{LOGGING_SECTION_KEY}' section must be a mapping in {config_path}")
    return _validate_logging_keys(dict(section), config_path)


def _validate_logging_keys(section: Dict[str, Any], config_path: Optional[Path]) -> Dict[str, Any]:
    invalid = [key for key in section if key not in LOGGING_ALLOWED_KEYS]
    if invalid:
        raise ValueError(
            f"Logging section contains unsupported keys in {config_path}: {', '.join(sorted(invalid))}"
        )
    return section


def _apply_aliases(config: Mapping[str, Any]) -> ConfigDict:
    result: ConfigDict = {}
    for key, value in config.items():
        canonical = FIELD_ALIASES.get(key, key)
        result[canonical] = value
    return result


def _anchor_path(value: Any, config_path: Optional[Path]) -> str:
    """Resolve a relative path against the directory holding the config file."""
    candidate = Path(str(value)).expanduser()
    if not candidate.is_absolute() and config_path is not None:
        candidate = config_path.expanduser().resolve().parent / candidate
    return str(candidate)


def _normalize_single_path(value: Any, field: str, config_path: Optional[Path]) -> str:
    if isinstance(value, (list, tuple)):
        if len(value) != 1:
            raise ValueError(
                f"Configuration '{config_path}' field '{field}' expects a single path."
            )
        value = value[0]
    if value is None or str(value).strip() == "":
        raise ValueError(f"Configuration '{config_path}' field '{field}' cannot be empty.")
    return _anchor_path(value, config_path)


def _coerce_bool(value: object, field: str, config_path: Optional[Path]) -> bool:
    if isinstance(value, bool):
        return value
    if value is None:
        return False
    text = str(value).strip().lower()
    if text in YES_VALUES:
        return True
    if text in NO_VALUES:
        return False
    raise ValueError(
        f"Configuration '{config_path}' field '{field}' must be a boolean (yes/no, true/false)."
    )


def _normalize_string_list(value: Any, field: str, config_path: Optional[Path]) -> List[str]:
    if value is None:
        return []

    items: List[str] = []
    if isinstance(value, str):
        items.extend(token.strip() for token in value.split(",") if token.strip())
    elif isinstance(value, (list, tuple, set)):
        for item in value:
            if not isinstance(item, str):
                raise ValueError(
                    f"Configuration '{config_path}' field '{field}' must contain only strings."
                )
            items.extend(token.strip() for token in item.split(",") if token.strip())
    else:
        raise ValueError(
            f"Configuration '{config_path}' field '{field}' must be a list or comma-separated string."
        )
    return items


def cli_main(argv: Optional[Iterable[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Load and validate kebab-tools YAML configs.")
    parser.add_argument("task", help=f"Task identifier ({', '.join(sorted(TASK_SCHEMAS))})")
    parser.add_argument("config_path", nargs="?", help="Path to YAML file (defaults to configs/config.yaml)")
    parser.add_argument(
        "--format",
        choices={"b64", "json"},
        default="json",
        help="Output format: raw JSON (default) or base64-encoded JSON.",
    )
    args = parser.parse_args(list(argv) if argv is not None else None)

    config = load_task_config(args.task, args.config_path)
    payload = json.dumps(config)

    if args.format == "json":
        print(payload)
    else:
        encoded = base64.b64encode(payload.encode("utf-8")).decode("utf-8")
        print(encoded)
    return 0


if __name__ == "__main__":
    raise SystemExit(cli_main())
