"""Command-line entry points for kebab-tools.

``kebabify`` renames files and directories to kebab-case and/or rewrites the
import paths that reference them. Settings come from the YAML config
(``configs/config.yaml`` by default); command-line flags win over config
values. Shell auto-completion is available through ``argcomplete``.
"""

from __future__ import annotations

import argparse
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

try:  # pragma: no cover - completion optional in tests
    import argcomplete  # type: ignore
except ImportError:  # pragma: no cover
    argcomplete = None  # type: ignore[assignment]

from casing.imports import DEFAULT_ALIASES, rewrite_tree
from casing.renamer import rename_tree
from casing.utils import DEFAULT_EXCLUDE, resolve_root
from common.base.logging import get_logger, setup_logging
from common.shared.loader import load_task_config
from common.shared.report import count_statuses, export_report, summarize_counts

log = get_logger(__name__)

EXIT_OK = 0
EXIT_ERROR = 1
EXIT_INTERRUPTED = 130


def _enable_autocomplete(parser: argparse.ArgumentParser) -> None:
    if argcomplete is not None:  # pragma: no branch
        argcomplete.autocomplete(parser)  # type: ignore[call-arg]


def _configure_logging(logging_cfg: Dict[str, Any], level_override: Optional[str]) -> None:
    setup_logging(
        level=level_override or logging_cfg.get("level"),
        use_rich=logging_cfg.get("use_rich"),
        log_dir=logging_cfg.get("log_dir"),
        file_prefix=logging_cfg.get("file_prefix"),
    )


def _load_task_payload(task: str, config_arg: Optional[str]) -> tuple[Dict[str, Any], Dict[str, Any]]:
    raw = load_task_config(task, config_arg)
    payload: Dict[str, Any] = dict(raw)
    logging_cfg = payload.pop("__logging__", {}) or {}
    return payload, logging_cfg


def _report_dir(args: argparse.Namespace, cfg: Dict[str, Any]) -> Optional[Path]:
    value = args.report or cfg.get("report_dir")
    return Path(value).expanduser() if value else None


def _finish_pass(title: str, base_name: str, rows: List[Dict[str, str]], report_dir: Optional[Path], dry_run: bool) -> None:
    log.info(summarize_counts(title, count_statuses(rows)))
    if report_dir is not None and rows:
        export_report(rows, base_name, output_dir=report_dir, dry_run=dry_run)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="kebabify",
        description="Convert PascalCase file and directory names to kebab-case.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        help="Directory to process (defaults to the configured root, then the current directory).",
    )
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument(
        "-i",
        "--imports",
        action="store_true",
        help="Rewrite import/require paths instead of renaming files.",
    )
    mode.add_argument(
        "-a",
        "--all",
        action="store_true",
        help="Rewrite import/require paths, then rename files and directories.",
    )
    parser.add_argument("--config", "-c", help="Path to configuration YAML (defaults to repo config).")
    parser.add_argument("--dry-run", action="store_true", help="Show what would change without modifying anything.")
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override the configured logging verbosity.",
    )
    parser.add_argument("--report", help="Directory for CSV reports of every change.")
    parser.add_argument(
        "--ext",
        action="append",
        dest="extensions",
        metavar="EXT",
        help="Only rewrite imports in files with this extension (repeatable).",
    )
    return parser


def run(args: argparse.Namespace, rename_cfg: Dict[str, Any], imports_cfg: Dict[str, Any]) -> int:
    do_imports = args.imports or args.all
    do_rename = args.all or not args.imports

    target = args.path or rename_cfg.get("root") or imports_cfg.get("root") or Path.cwd()
    try:
        root = resolve_root(target)
    except (FileNotFoundError, NotADirectoryError) as exc:
        log.error(f"❌ {exc}")
        return EXIT_ERROR

    # Imports first: every file discovered by the rewrite pass still exists.
    if do_imports:
        dry_run = args.dry_run or bool(imports_cfg.get("dry_run", False))
        rows = rewrite_tree(
            root,
            dry_run=dry_run,
            extensions=args.extensions or imports_cfg.get("extensions") or None,
            exclude=imports_cfg.get("exclude", DEFAULT_EXCLUDE),
            aliases=imports_cfg.get("aliases", DEFAULT_ALIASES),
        )
        _finish_pass("Import Rewrite Summary", "imports-report", rows, _report_dir(args, imports_cfg), dry_run)

    if do_rename:
        dry_run = args.dry_run or bool(rename_cfg.get("dry_run", False))
        rows = rename_tree(
            root,
            dry_run=dry_run,
            exclude=rename_cfg.get("exclude", DEFAULT_EXCLUDE),
        )
        _finish_pass("Rename Summary", "rename-report", rows, _report_dir(args, rename_cfg), dry_run)

    return EXIT_OK


def cli_kebabify(argv: Optional[Iterable[str]] = None) -> int:
    parser = build_parser()
    _enable_autocomplete(parser)
    args = parser.parse_args(list(argv) if argv is not None else None)

    try:
        rename_cfg, logging_cfg = _load_task_payload("kebab_rename", args.config)
        imports_cfg, _ = _load_task_payload("kebab_imports", args.config)
    except (ValueError, FileNotFoundError) as exc:
        setup_logging(level=args.log_level)
        log.error(f"❌ Invalid configuration: {exc}")
        return EXIT_ERROR
    _configure_logging(logging_cfg, args.log_level)

    try:
        return run(args, rename_cfg, imports_cfg)
    except KeyboardInterrupt:
        log.warning("⚠️ Operation cancelled by user.")
        return EXIT_INTERRUPTED


if __name__ == "__main__":
    raise SystemExit(cli_kebabify())
