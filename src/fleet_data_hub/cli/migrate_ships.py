"""
Ship reference migration command.

Usage:
    python -m fleet_data_hub.cli migrate-ships              # Live migration
    python -m fleet_data_hub.cli migrate-ships --dry-run    # Preview, no writes

Exit codes:
    0 - every ship name resolved (failed writes are reported, not fatal)
    1 - unmatched names remain, or the run could not start
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from sqlalchemy.exc import ArgumentError

from fleet_data_hub.config import get_settings, load_ship_overrides
from fleet_data_hub.config.settings import Settings
from fleet_data_hub.domain.ship_references import (
    EXIT_FAILURE,
    MigrationOrchestrator,
    build_summary_table,
    default_migrators,
    render_report,
    write_report_json,
    write_unmatched_csv,
)
from fleet_data_hub.io.repositories import RepositoryFactory


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="fleet_data_hub.cli migrate-ships",
        description="Convert free-text ship names in all collections to catalog ids",
    )
    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Compute and report every change without writing anything",
    )
    parser.add_argument(
        "--backend",
        choices=["json", "database"],
        default=None,
        help="Storage backend (default: FDH_STORAGE_BACKEND or json)",
    )
    parser.add_argument(
        "--data-dir",
        default=None,
        help="Directory of <collection>.json files for the json backend",
    )
    parser.add_argument(
        "--overrides",
        type=Path,
        default=None,
        help="Manual override YAML file (default: FDH_SHIP_OVERRIDES_FILE)",
    )
    parser.add_argument(
        "--report-dir",
        type=Path,
        default=None,
        help="Directory for the JSON report and unmatched CSV (default: logs/)",
    )
    parser.add_argument(
        "--no-export",
        action="store_true",
        help="Print the report only; do not write report files",
    )
    return parser


def _apply_cli_settings(settings: Settings, args: argparse.Namespace) -> Settings:
    update = {}
    if args.backend:
        update["storage_backend"] = args.backend
    if args.data_dir:
        update["data_dir"] = args.data_dir
    if args.overrides:
        update["ship_overrides_file"] = str(args.overrides)
    if args.report_dir:
        update["report_output_dir"] = str(args.report_dir)
    return settings.model_copy(update=update) if update else settings


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    args = build_parser().parse_args(argv)
    console = console or Console()
    settings = _apply_cli_settings(get_settings(), args)

    try:
        overrides = load_ship_overrides(Path(settings.ship_overrides_file))
    except ValueError as e:
        console.print(f"[red]Invalid override file:[/red] {e}")
        return EXIT_FAILURE

    mode = "DRY-RUN (no writes)" if args.dry_run else "LIVE"
    console.print(f"Ship reference migration: {mode}", style="bold")

    factory = RepositoryFactory(settings)
    try:
        catalog_source = factory.for_collection(settings.ships_collection)
    except (ValueError, ArgumentError) as e:
        console.print(f"[red]Migration aborted:[/red] storage is not configured: {e}")
        return EXIT_FAILURE

    try:
        orchestrator = MigrationOrchestrator(
            catalog_source=catalog_source,
            repository_for=factory.for_collection,
            migrators=default_migrators(settings),
            overrides=overrides,
        )
        exit_code = orchestrator.run(dry_run=args.dry_run)
    finally:
        factory.dispose()

    report = orchestrator.report
    if report is None:
        console.print(
            "[red]Migration aborted:[/red] the ship catalog could not be loaded; "
            "no collection was touched."
        )
        return exit_code

    console.print(render_report(report), markup=False, highlight=False)
    console.print(build_summary_table(report))

    if not args.no_export:
        output_dir = Path(settings.report_output_dir)
        console.print(f"Report written to {write_report_json(report, output_dir)}")
        csv_path = write_unmatched_csv(report, output_dir)
        if csv_path is not None:
            console.print(f"Unmatched names written to {csv_path}")

    console.print(f"Exiting with code {exit_code}")
    return exit_code
