"""
Unit tests for per-collection ship reference migration.

Covers the counting rules, audit records, idempotency, dry-run behavior and
failure isolation of migrate_collection().
"""

import pytest

from fleet_data_hub.config.settings import Settings
from fleet_data_hub.domain.ship_references import (
    MigrationReport,
    default_migrators,
    migrate_collection,
)
from fleet_data_hub.io.repositories import JsonFileRepository
from tests.fixtures.ship_catalog import (
    CATERPILLAR_ID,
    CUTLASS_BLACK_ID,
    GLADIUS_ID,
    IDRIS_P_ID,
    InMemoryDocumentRepository,
)


@pytest.fixture
def migrators():
    return {m.collection: m for m in default_migrators(Settings())}


def _run(migrator, repository, resolver, dry_run=False, report=None):
    report = report or MigrationReport(dry_run=dry_run)
    counters = migrate_collection(migrator, repository, resolver, report, dry_run)
    return report, counters


@pytest.mark.unit
class TestUsersCollection:
    """Array-of-ships documents (users.ships[i].name)."""

    def test_counters(self, migrators, fleet_repositories, resolver):
        """Resolved, empty and already-canonical documents are counted."""
        _, counters = _run(migrators["users"], fleet_repositories["users"], resolver)

        assert counters.total == 3
        assert counters.updated == 1
        # u-2 has no ships; u-3 is skipped once for its canonical ship and
        # once because nothing on it changed
        assert counters.skipped == 3
        assert counters.failed == 0

    def test_resolved_ids_written(self, migrators, fleet_repositories, resolver):
        """Resolved ships gain a canonical id; unmatched ones are untouched."""
        repo = fleet_repositories["users"]
        _run(migrators["users"], repo, resolver)

        ships = repo.get("u-1")["ships"]
        assert ships[0] == {"name": "Gladius", "fleetyardsId": GLADIUS_ID}
        assert ships[1] == {"name": "cutlass black", "fleetyardsId": CUTLASS_BLACK_ID}
        assert ships[2] == {"name": "Totally Unknown Ship"}

    def test_mappings_and_unmatched(self, migrators, fleet_repositories, resolver):
        """Every resolution is audited and every miss listed with its path."""
        report, _ = _run(migrators["users"], fleet_repositories["users"], resolver)

        assert [(m.field_path, m.strategy) for m in report.mappings] == [
            ("ships[0].name", "exact"),
            ("ships[1].name", "case-insensitive"),
        ]
        assert report.mappings[1].resolved_name == "Cutlass Black"
        assert report.mappings[1].original_name == "cutlass black"
        assert len(report.unmatched) == 1
        unmatched = report.unmatched[0]
        assert (unmatched.collection, unmatched.document_id) == ("users", "u-1")
        assert unmatched.field_path == "ships[2].name"
        assert unmatched.name == "Totally Unknown Ship"

    def test_only_one_write_per_document(self, migrators, fleet_repositories, resolver):
        """All resolved ships of a document go out in a single patch."""
        repo = fleet_repositories["users"]
        _run(migrators["users"], repo, resolver)
        assert [p["document_id"] for p in repo.patches] == ["u-1"]
        assert repo.patches[0]["field"] == "ships"


@pytest.mark.unit
class TestOtherCollections:
    """Missions, planned missions, operations and resources."""

    def test_missions_slug_match(self, migrators, fleet_repositories, resolver):
        """Participants without a ship name are ignored."""
        repo = fleet_repositories["missions"]
        report, counters = _run(migrators["missions"], repo, resolver)

        assert (counters.total, counters.updated, counters.skipped) == (1, 1, 0)
        assert report.mappings[0].field_path == "participants[0].shipName"
        assert report.mappings[0].strategy == "slug"
        assert "fleetyardsId" not in repo.get("m-1")["participants"][1]

    def test_planned_missions_override(self, migrators, fleet_repositories, resolver):
        """Legacy kit names resolve through the override table."""
        repo = fleet_repositories["planned-missions"]
        report, _ = _run(migrators["planned-missions"], repo, resolver)

        assert repo.get("pm-1")["ships"][0] == {
            "shipName": "Idris-K",
            "count": 1,
            "fleetyardsId": IDRIS_P_ID,
        }
        assert report.mappings[0].strategy == "manual-override"

    def test_operations(self, migrators, fleet_repositories, resolver):
        """Both participants of the operation are resolved."""
        report, counters = _run(
            migrators["operations"], fleet_repositories["operations"], resolver
        )
        assert counters.updated == 1
        assert [m.field_path for m in report.mappings] == [
            "participants[0].shipName",
            "participants[1].shipName",
        ]

    def test_resources(self, migrators, fleet_repositories, resolver):
        """Ship resources get a top-level id; other resources are skipped."""
        repo = fleet_repositories["resources"]
        report, counters = _run(migrators["resources"], repo, resolver)

        assert (counters.total, counters.updated, counters.skipped) == (2, 1, 1)
        assert repo.get("r-1")["fleetyardsId"] == CATERPILLAR_ID
        assert "fleetyardsId" not in repo.get("r-2")
        assert report.mappings[0].field_path == "name"


@pytest.mark.unit
class TestIdempotency:
    """Running twice changes nothing the second time."""

    def test_second_run_updates_nothing(self, migrators, fleet_repositories, resolver):
        """Second run: zero updated, zero new mappings, same unmatched list."""
        repo = fleet_repositories["users"]
        _run(migrators["users"], repo, resolver)
        snapshot = repo.read_all()

        report, counters = _run(migrators["users"], repo, resolver)

        assert counters.updated == 0
        assert report.mappings == []
        assert [u.field_path for u in report.unmatched] == ["ships[2].name"]
        assert repo.read_all() == snapshot

    def test_uppercase_uuid_is_canonical(self, migrators, resolver):
        """Canonical ids are recognised regardless of case."""
        repo = InMemoryDocumentRepository(
            "users",
            [
                {
                    "id": "u-9",
                    "ships": [{"name": "Gladius", "fleetyardsId": GLADIUS_ID.upper()}],
                }
            ],
        )
        report, counters = _run(migrators["users"], repo, resolver)
        assert counters.updated == 0
        assert report.mappings == []
        assert repo.patches == []

    def test_non_uuid_id_is_replaced(self, migrators, resolver):
        """A slug sitting in the id field does not count as migrated."""
        repo = InMemoryDocumentRepository(
            "users",
            [{"id": "u-9", "ships": [{"name": "Gladius", "fleetyardsId": "gladius"}]}],
        )
        _, counters = _run(migrators["users"], repo, resolver)
        assert counters.updated == 1
        assert repo.get("u-9")["ships"][0]["fleetyardsId"] == GLADIUS_ID


@pytest.mark.unit
class TestDryRun:
    """Dry runs count everything and write nothing."""

    def test_no_writes(self, migrators, fleet_repositories, resolver):
        """The repository is never patched."""
        repo = fleet_repositories["users"]
        before = repo.read_all()
        _, counters = _run(migrators["users"], repo, resolver, dry_run=True)

        assert counters.updated == 1
        assert repo.patches == []
        assert repo.read_all() == before

    def test_parity_with_live(self, migrators, fleet_repositories, resolver):
        """Dry and live runs report identical counters and records."""
        dry_repo = InMemoryDocumentRepository(
            "users", fleet_repositories["users"].read_all()
        )
        dry, dry_counters = _run(migrators["users"], dry_repo, resolver, dry_run=True)
        live, live_counters = _run(
            migrators["users"], fleet_repositories["users"], resolver
        )

        assert dry_counters.to_dict() == live_counters.to_dict()
        assert dry.mappings == live.mappings
        assert dry.unmatched == live.unmatched


@pytest.mark.unit
class TestFailureIsolation:
    """Storage failures are counted and do not stop the collection."""

    def test_write_failure_counted(self, migrators, resolver):
        """A rejected write counts as failed; later documents still migrate."""
        repo = InMemoryDocumentRepository(
            "users",
            [
                {"id": "u-1", "ships": [{"name": "Gladius"}]},
                {"id": "u-2", "ships": [{"name": "Idris-K"}]},
            ],
            fail_on_patch={"u-1"},
        )
        report, counters = _run(migrators["users"], repo, resolver)

        assert (counters.total, counters.updated, counters.failed) == (2, 1, 1)
        assert repo.get("u-1") == {"id": "u-1", "ships": [{"name": "Gladius"}]}
        assert repo.get("u-2")["ships"][0]["fleetyardsId"] == IDRIS_P_ID
        # The resolution of the failed document is still audited
        assert [m.document_id for m in report.mappings] == ["u-1", "u-2"]

    def test_read_failure_counted(self, migrators, resolver):
        """An unreadable collection counts one failure and nothing else."""
        repo = InMemoryDocumentRepository("users", fail_on_read=True)
        report, counters = _run(migrators["users"], repo, resolver)

        assert counters.to_dict() == {
            "collection": "users",
            "total": 0,
            "updated": 0,
            "skipped": 0,
            "failed": 1,
        }
        assert report.collections["users"] is counters


@pytest.mark.unit
class TestNumericDocumentIds:
    """Documents whose id is a JSON number rather than a string."""

    def test_numeric_id_written(self, migrators, resolver, tmp_path):
        """A resource with id 7 is patched, not counted as a failed write."""
        repo = JsonFileRepository(tmp_path, "resources")
        repo.write_all([{"id": 7, "type": "Ship", "name": "Gladius"}])

        report, counters = _run(migrators["resources"], repo, resolver)

        assert (counters.updated, counters.failed) == (1, 0)
        assert repo.read_all() == [
            {"id": 7, "type": "Ship", "name": "Gladius", "fleetyardsId": GLADIUS_ID}
        ]
        assert report.mappings[0].document_id == "7"
