"""
Ship reference migration domain.

Converts free-text ship names in fleet documents to canonical catalog ids:
collection migrators walk each document shape, the orchestrator runs them in
order against one catalog index, and the report module renders the result.
"""

from .collections import CollectionMigrator, ShipReference, default_migrators
from .migrator import migrate_collection
from .models import CollectionReport, MigrationMapping, MigrationReport, UnmatchedEntry
from .orchestrator import EXIT_FAILURE, EXIT_SUCCESS, MigrationOrchestrator
from .report import (
    build_summary_table,
    render_report,
    write_report_json,
    write_unmatched_csv,
)

__all__ = [
    "EXIT_FAILURE",
    "EXIT_SUCCESS",
    "CollectionMigrator",
    "CollectionReport",
    "MigrationMapping",
    "MigrationOrchestrator",
    "MigrationReport",
    "ShipReference",
    "UnmatchedEntry",
    "build_summary_table",
    "default_migrators",
    "migrate_collection",
    "render_report",
    "write_report_json",
    "write_unmatched_csv",
]
