"""Ship reference migration report generation.

This module renders a finished MigrationReport for people and for tools.

Key Functions:
- render_report: Plain-text report with counters, every mapping and every
  unmatched name
- build_summary_table: Rich table of per-collection counters for the console
- write_report_json: Full machine-readable report
- write_unmatched_csv: Unmatched names, the work list for new overrides

Usage:
    >>> print(render_report(report))
    >>> json_path = write_report_json(report, Path("logs"))
    >>> csv_path = write_unmatched_csv(report, Path("logs"))
"""

from __future__ import annotations

import csv
import json
from pathlib import Path
from typing import List, Optional

from rich.table import Table

from .models import MigrationReport

SEPARATOR = "=" * 40


def _result_line(report: MigrationReport) -> str:
    if report.succeeded:
        return "SUCCESS (0 unmatched)"
    return f"PARTIAL ({len(report.unmatched)} unmatched names)"


def render_report(report: MigrationReport) -> str:
    """Render the full human-readable migration report.

    Output sections:
        header (mode, timestamps, duration), collection summary, totals,
        name mappings, unmatched names, RESULT line.
    """
    lines: List[str] = [
        SEPARATOR,
        "SHIP REFERENCE MIGRATION REPORT",
        SEPARATOR,
        f"Mode: {'DRY-RUN' if report.dry_run else 'LIVE'}",
        f"Started: {report.started_at.isoformat()}",
        "Completed: "
        + (report.completed_at.isoformat() if report.completed_at else "N/A"),
        f"Duration: {report.duration_seconds:.1f}s",
        "",
        "--- Collection Summary ---",
    ]

    for name, col in report.collections.items():
        lines.append(
            f"{(name + ':').ljust(18)} {col.total} total, {col.updated} updated, "
            f"{col.skipped} skipped, {col.failed} failed"
        )

    lines += [
        "",
        "--- Totals ---",
        f"Total documents: {report.total_processed}",
        f"Total updated:   {report.total_updated}",
        f"Total skipped:   {report.total_skipped}",
        f"Total failed:    {report.total_failed}",
        "",
        f"--- Name Mappings ({len(report.mappings)} total) ---",
    ]
    for m in report.mappings:
        lines.append(
            f'[{m.collection}] doc:{m.document_id} {m.field_path}: '
            f'"{m.original_name}" -> "{m.resolved_name}" ({m.strategy})'
        )

    lines += ["", f"--- Unmatched Names ({len(report.unmatched)} total) ---"]
    for u in report.unmatched:
        lines.append(
            f'[{u.collection}] doc:{u.document_id} {u.field_path}: '
            f'"{u.name}" -- NO MATCH FOUND'
        )

    lines += ["", SEPARATOR, f"RESULT: {_result_line(report)}", SEPARATOR]
    return "\n".join(lines)


def build_summary_table(report: MigrationReport) -> Table:
    """Build a Rich table of per-collection counters with a totals row."""
    mode = "dry-run" if report.dry_run else "live"
    table = Table(title=f"Ship reference migration ({mode})")
    table.add_column("Collection")
    for column in ("Total", "Updated", "Skipped", "Failed"):
        table.add_column(column, justify="right")

    for name, col in report.collections.items():
        table.add_row(
            name, str(col.total), str(col.updated), str(col.skipped), str(col.failed)
        )
    table.add_section()
    table.add_row(
        "all",
        str(report.total_processed),
        str(report.total_updated),
        str(report.total_skipped),
        str(report.total_failed),
        style="bold",
    )
    return table


def _timestamped_path(
    output_dir: Path, prefix: str, suffix: str, report: MigrationReport
) -> Path:
    output_dir.mkdir(parents=True, exist_ok=True)
    timestamp = report.started_at.strftime("%Y%m%d_%H%M%S")
    mode = "dry_run" if report.dry_run else "live"
    return output_dir / f"{prefix}_{mode}_{timestamp}{suffix}"


def write_report_json(
    report: MigrationReport, output_dir: Optional[Path] = None
) -> Path:
    """Write the full report as JSON.

    Args:
        report: Finalized migration report.
        output_dir: Output directory (defaults to logs/)

    Returns:
        Path to the generated JSON file.
    """
    filepath = _timestamped_path(
        output_dir or Path("logs"), "ship_migration", ".json", report
    )
    with open(filepath, "w", encoding="utf-8") as f:
        json.dump(report.to_dict(), f, indent=2, ensure_ascii=False)
    return filepath


def write_unmatched_csv(
    report: MigrationReport, output_dir: Optional[Path] = None
) -> Optional[Path]:
    """Export unmatched names to CSV with a metadata header.

    CSV Format:
        # Unmatched Ship Names Export
        # Date: 2026-01-12T10:30:00+00:00
        # Mode: LIVE
        # Unmatched: 3
        collection,document_id,field_path,name
        users,u-17,ships[2].name,Totally Unknown Ship

    Returns:
        Path to the generated CSV file, or None when nothing is unmatched.
    """
    if not report.unmatched:
        return None

    filepath = _timestamped_path(
        output_dir or Path("logs"), "unmatched_ships", ".csv", report
    )
    with open(filepath, "w", newline="", encoding="utf-8") as f:
        f.write("# Unmatched Ship Names Export\n")
        f.write(f"# Date: {report.started_at.isoformat()}\n")
        f.write(f"# Mode: {'DRY-RUN' if report.dry_run else 'LIVE'}\n")
        f.write(f"# Unmatched: {len(report.unmatched)}\n")

        writer = csv.writer(f, lineterminator="\n")
        writer.writerow(report.unmatched[0].csv_headers())
        writer.writerows(entry.to_csv_row() for entry in report.unmatched)
    return filepath
