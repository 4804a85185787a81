"""
Per-collection ship reference migration.

``migrate_collection`` walks every document of one collection, resolves each
ship name that does not yet carry a canonical id, and writes changed
documents back through the collection repository.

Counting rules per document:
- total is incremented for every document read;
- a document without ship references is skipped;
- each reference already holding a canonical id is skipped (idempotency);
- a document with at least one newly resolved reference is updated (or
  failed if the write raises); otherwise it is skipped.
"""

from typing import List, Tuple

from fleet_data_hub.infrastructure.ships import ShipNameResolver, is_canonical_id
from fleet_data_hub.io.repositories import (
    DOCUMENT_ID_FIELD,
    DocumentRepository,
    RepositoryError,
)
from fleet_data_hub.utils.logging import bind_context, get_logger

from .collections import CollectionMigrator, Document, ShipReference
from .models import CollectionReport, MigrationMapping, MigrationReport, UnmatchedEntry

logger = get_logger(__name__)


def migrate_collection(
    migrator: CollectionMigrator,
    repository: DocumentRepository,
    resolver: ShipNameResolver,
    report: MigrationReport,
    dry_run: bool = False,
) -> CollectionReport:
    """
    Migrate the ship references of one collection.

    Args:
        migrator: Shape of the collection's ship references.
        repository: Storage for the collection.
        resolver: Name resolver bound to the run's catalog index.
        report: Run report; mappings, unmatched entries and counters are
            appended in place.
        dry_run: Count and report everything but never write.

    Returns:
        The collection's counters (also stored on the report).
    """
    counters = report.collection(migrator.collection)
    log = bind_context(__name__, collection=migrator.collection, dry_run=dry_run)
    log.info("ship_migration.collection_started")

    try:
        documents = repository.read_all()
    except RepositoryError as e:
        # A collection that cannot be read is reported, the run goes on
        log.error("ship_migration.collection_read_failed", error=str(e))
        counters.failed += 1
        return counters

    log.info("ship_migration.documents_found", document_count=len(documents))

    for document in documents:
        _migrate_document(
            migrator, document, repository, resolver, report, counters, dry_run
        )

    log.info(
        "ship_migration.collection_done",
        total=counters.total,
        updated=counters.updated,
        skipped=counters.skipped,
        failed=counters.failed,
    )
    return counters


def _migrate_document(
    migrator: CollectionMigrator,
    document: Document,
    repository: DocumentRepository,
    resolver: ShipNameResolver,
    report: MigrationReport,
    counters: CollectionReport,
    dry_run: bool,
) -> None:
    counters.total += 1
    document_id = str(document.get(DOCUMENT_ID_FIELD, ""))

    references = migrator.find_references(document)
    if not references:
        counters.skipped += 1
        return

    resolved: List[Tuple[ShipReference, str]] = []
    for reference in references:
        if is_canonical_id(reference.current_id):
            counters.skipped += 1
            continue

        match = resolver.resolve(reference.name)
        if match is None:
            report.unmatched.append(
                UnmatchedEntry(
                    collection=migrator.collection,
                    document_id=document_id,
                    field_path=reference.field_path,
                    name=reference.name,
                )
            )
            continue

        report.mappings.append(
            MigrationMapping(
                collection=migrator.collection,
                document_id=document_id,
                field_path=reference.field_path,
                original_name=reference.name,
                resolved_name=match.matched_name,
                fleetyards_id=match.fleetyards_id,
                strategy=match.strategy.value,
            )
        )
        resolved.append((reference, match.fleetyards_id))

    if not resolved:
        counters.skipped += 1
        return

    if dry_run:
        counters.updated += 1
        return

    try:
        repository.patch_field(
            document_id, migrator.patch_field, migrator.build_patch(document, resolved)
        )
    except RepositoryError as e:
        logger.error(
            "ship_migration.document_write_failed",
            collection=migrator.collection,
            document_id=document_id,
            error=str(e),
        )
        counters.failed += 1
        return

    counters.updated += 1
