"""
Ship reference migration orchestrator.

Builds the catalog index once, then runs every collection migrator in order
against that shared index and a single report. The process exit code is
derived from the finished report.
"""

from typing import Callable, Dict, List, Optional

from fleet_data_hub.infrastructure.ships import (
    CatalogLoadError,
    ShipNameResolver,
    build_ships_index,
    find_slug_mismatches,
)
from fleet_data_hub.io.repositories import DocumentRepository
from fleet_data_hub.utils.logging import get_logger

from .collections import CollectionMigrator
from .migrator import migrate_collection
from .models import MigrationReport

logger = get_logger(__name__)

EXIT_SUCCESS = 0
EXIT_FAILURE = 1

RepositoryProvider = Callable[[str], DocumentRepository]


class MigrationOrchestrator:
    """
    Runs the ship reference migration across all collections.

    Attributes:
        catalog_source: Repository holding the ship catalog.
        repository_for: Returns the repository of a collection by name.
        migrators: Collection migrators, run in list order.
        overrides: Manual override table (legacy name -> slug).
        report: Report of the last run, None before a run or after a fatal error.
        resolver: Resolver of the last run (exposes resolution statistics).

    Example:
        >>> factory = RepositoryFactory(settings)
        >>> orchestrator = MigrationOrchestrator(
        ...     catalog_source=factory.for_collection(settings.ships_collection),
        ...     repository_for=factory.for_collection,
        ...     migrators=default_migrators(settings),
        ...     overrides=load_ship_overrides(),
        ... )
        >>> exit_code = orchestrator.run(dry_run=True)
    """

    def __init__(
        self,
        catalog_source: DocumentRepository,
        repository_for: RepositoryProvider,
        migrators: List[CollectionMigrator],
        overrides: Optional[Dict[str, str]] = None,
    ) -> None:
        self.catalog_source = catalog_source
        self.repository_for = repository_for
        self.migrators = list(migrators)
        self.overrides: Dict[str, str] = dict(overrides or {})
        self.report: Optional[MigrationReport] = None
        self.resolver: Optional[ShipNameResolver] = None

    def execute(self, dry_run: bool = False) -> MigrationReport:
        """
        Run the migration and return the finalized report.

        Raises:
            CatalogLoadError: If the catalog cannot be loaded. No collection
                is touched in that case.
        """
        self.report = None
        logger.info("ship_migration.run_started", dry_run=dry_run)

        index = build_ships_index(self.catalog_source)
        for ref in find_slug_mismatches(index):
            logger.warning(
                "ship_migration.catalog_slug_mismatch",
                name=ref.name,
                slug=ref.slug,
                fleetyards_id=ref.fleetyards_id,
            )

        resolver = ShipNameResolver(index, self.overrides)
        resolver.log_invalid_overrides()
        self.resolver = resolver

        report = MigrationReport(dry_run=dry_run)
        for migrator in self.migrators:
            migrate_collection(
                migrator,
                self.repository_for(migrator.collection),
                resolver,
                report,
                dry_run=dry_run,
            )

        report.finalize()
        self.report = report
        logger.info(
            "ship_migration.run_completed",
            dry_run=dry_run,
            total_processed=report.total_processed,
            total_updated=report.total_updated,
            total_skipped=report.total_skipped,
            total_failed=report.total_failed,
            mappings=len(report.mappings),
            unmatched=len(report.unmatched),
            resolution=resolver.statistics.to_dict(),
        )
        return report

    def run(self, dry_run: bool = False) -> int:
        """
        Run the migration and return the process exit code.

        Returns:
            0 when every name resolved; 1 when any name is unmatched or the
            catalog could not be loaded. Failed documents and collections are
            reported but do not change the exit code.
        """
        try:
            report = self.execute(dry_run=dry_run)
        except CatalogLoadError as e:
            logger.error("ship_migration.fatal", error=str(e))
            return EXIT_FAILURE

        return EXIT_SUCCESS if report.succeeded else EXIT_FAILURE
