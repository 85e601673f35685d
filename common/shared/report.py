"""
common.shared.report

Centralized reporting utilities for kebab-tools.

 - export_report() writes pass results to a timestamped CSV
 - summarize_counts() renders the end-of-run status table
 - Dry-run aware (no files written when simulating)
"""

from __future__ import annotations

import csv
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence

from common.base.file_io import open_file
from common.base.fs import ensure_dir
from common.base.logging import get_logger

log = get_logger(__name__)

REPORT_COLUMNS = ["path", "type", "status", "target", "message"]


# ----------------------------------------------------------------------
# TIMESTAMPED FILENAMES
# ----------------------------------------------------------------------

def timestamped_filename(base_name: str, ext: str = "csv", output_dir: Optional[Path] = None) -> Path:
    """
    Generate a timestamped output filename (e.g., rename-report_2026-10-19_103000.csv)
    """
    ts = datetime.now().strftime("%Y-%m-%d_%H%M%S")
    name = f"{base_name}_{ts}.{ext}"
    return (output_dir or Path.cwd()) / name


# ----------------------------------------------------------------------
# CSV WRITERS
# ----------------------------------------------------------------------

def write_csv(
    data: List[Dict[str, Any]],
    output_path: Path,
    fieldnames: Optional[Sequence[str]] = None,
    dry_run: bool = False,
) -> Path:
    """
    Write structured data to a CSV file.
    Respects dry-run (simulates write if enabled).
    """
    if not data:
        log.warning("No data provided for CSV export.")
        return output_path

    if dry_run:
        log.info(f"[DRY-RUN] Would write CSV: {output_path}")
        return output_path

    ensure_dir(output_path.parent)
    try:
        with open_file(output_path, "w", newline="") as handle:
            writer = csv.DictWriter(
                handle,
                fieldnames=list(fieldnames or data[0].keys()),
                extrasaction="ignore",
            )
            writer.writeheader()
            writer.writerows(data)
        log.debug(f"📊 CSV report saved → {output_path}")
        return output_path
    except Exception as e:
        log.error(f"Failed to write CSV report: {e}")
        raise


# ----------------------------------------------------------------------
# HUMAN-READABLE SUMMARY
# ----------------------------------------------------------------------

def count_statuses(rows: Iterable[Mapping[str, Any]]) -> Dict[str, int]:
    counts = Counter(str(row.get("status", "")) for row in rows)
    return dict(sorted(counts.items()))


def summarize_counts(title: str, summary: Dict[str, int]) -> str:
    """
    Return a formatted, human-readable summary string.
    Example:
        summarize_counts("Rename Summary", {"renamed": 12, "collision": 1})
    """
    lines = [f"\n===== {title.upper()} ====="]
    if not summary:
        lines.append("- None -")
    for key, val in summary.items():
        lines.append(f"{key}: {val}")
    lines.append("=====================\n")
    return "\n".join(lines)


# ----------------------------------------------------------------------
# UNIFIED EXPORT WRAPPER
# ----------------------------------------------------------------------

def export_report(
    data: List[Dict[str, Any]],
    base_name: str,
    output_dir: Optional[Path] = None,
    dry_run: bool = False,
) -> Optional[Path]:
    """
    Export report rows to a timestamped CSV file.

    Args:
        data: List of result rows
        base_name: Base filename for the report (e.g. 'rename-report')
        output_dir: Directory for report storage (defaults to cwd)
        dry_run: If True, no file is written

    Returns:
        The written (or simulated) CSV path, or None when there was nothing to export.
    """
    if not data:
        log.warning(f"No report data to export for '{base_name}'.")
        return None

    csv_path = timestamped_filename(base_name, "csv", output_dir)
    write_csv(data, csv_path, fieldnames=REPORT_COLUMNS, dry_run=dry_run)
    log.info(f"Report export completed for '{base_name}' ({'dry-run' if dry_run else 'saved'})")
    return csv_path
