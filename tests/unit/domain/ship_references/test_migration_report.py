"""Unit tests for migration report rendering and export."""

import json
from datetime import datetime, timedelta, timezone

import pytest
from rich.console import Console

from fleet_data_hub.domain.ship_references import (
    MigrationMapping,
    MigrationReport,
    UnmatchedEntry,
    build_summary_table,
    render_report,
    write_report_json,
    write_unmatched_csv,
)


@pytest.fixture
def sample_report():
    """A finalized report with one mapping and one unmatched name."""
    report = MigrationReport(
        dry_run=False,
        started_at=datetime(2026, 1, 12, 10, 30, 0, tzinfo=timezone.utc),
    )
    users = report.collection("users")
    users.total, users.updated, users.skipped = 2, 1, 1
    resources = report.collection("resources")
    resources.total, resources.failed = 1, 1
    report.mappings.append(
        MigrationMapping(
            collection="users",
            document_id="u-1",
            field_path="ships[0].name",
            original_name="GLADIUS",
            resolved_name="Gladius",
            fleetyards_id="3f1c2a7e-5b9d-4e21-9a1f-0c7d8e6b5a41",
            strategy="case-insensitive",
        )
    )
    report.unmatched.append(
        UnmatchedEntry(
            collection="users",
            document_id="u-1",
            field_path="ships[2].name",
            name="Totally Unknown Ship",
        )
    )
    report.finalize()
    report.completed_at = report.started_at + timedelta(seconds=2.5)
    return report


@pytest.mark.unit
class TestMigrationReportModel:
    """Tests for MigrationReport bookkeeping."""

    def test_finalize_sums_collections(self, sample_report):
        """Totals are sums over collections."""
        assert sample_report.total_processed == 3
        assert sample_report.total_updated == 1
        assert sample_report.total_skipped == 1
        assert sample_report.total_failed == 1

    def test_collection_is_created_once(self):
        """collection() returns the same counters for the same name."""
        report = MigrationReport()
        assert report.collection("users") is report.collection("users")

    def test_succeeded(self, sample_report):
        """Only unmatched names mean the run did not succeed."""
        assert not sample_report.succeeded
        clean = MigrationReport()
        clean.finalize()
        assert clean.succeeded

    def test_failures_alone_still_succeed(self):
        """Failed documents are counted but do not fail the run."""
        report = MigrationReport()
        report.collection("users").failed = 2
        report.finalize()
        assert report.total_failed == 2
        assert report.succeeded

    def test_duration(self, sample_report):
        """Duration is computed from the timestamps."""
        assert sample_report.duration_seconds == pytest.approx(2.5)


@pytest.mark.unit
class TestRenderReport:
    """Tests for render_report()."""

    def test_sections(self, sample_report):
        """Header, counters, mappings, unmatched names and result are present."""
        text = render_report(sample_report)

        assert "SHIP REFERENCE MIGRATION REPORT" in text
        assert "Mode: LIVE" in text
        assert "Duration: 2.5s" in text
        assert "users:             2 total, 1 updated, 1 skipped, 0 failed" in text
        assert "Total documents: 3" in text
        assert "--- Name Mappings (1 total) ---" in text
        assert "--- Unmatched Names (1 total) ---" in text

    def test_mapping_line(self, sample_report):
        """Each mapping shows location, both names and the strategy."""
        text = render_report(sample_report)
        assert (
            '[users] doc:u-1 ships[0].name: "GLADIUS" -> "Gladius" (case-insensitive)'
            in text
        )

    def test_unmatched_line(self, sample_report):
        """Each unmatched name shows its exact location."""
        text = render_report(sample_report)
        assert (
            '[users] doc:u-1 ships[2].name: "Totally Unknown Ship" -- NO MATCH FOUND'
            in text
        )

    def test_partial_result(self, sample_report):
        """The result line counts unmatched names only."""
        text = render_report(sample_report)
        assert "RESULT: PARTIAL (1 unmatched names)" in text

    def test_failures_alone_report_success(self):
        """Failed writes with every name resolved still read SUCCESS."""
        report = MigrationReport()
        report.collection("operations").failed = 1
        report.finalize()
        assert "RESULT: SUCCESS (0 unmatched)" in render_report(report)

    def test_success_result(self):
        """A clean run reports success."""
        report = MigrationReport(dry_run=True)
        report.finalize()
        text = render_report(report)
        assert "Mode: DRY-RUN" in text
        assert "RESULT: SUCCESS (0 unmatched)" in text


@pytest.mark.unit
class TestSummaryTable:
    """Tests for build_summary_table()."""

    def test_rows(self, sample_report):
        """One row per collection plus a totals row."""
        table = build_summary_table(sample_report)
        assert table.row_count == 3
        assert [c.header for c in table.columns] == [
            "Collection",
            "Total",
            "Updated",
            "Skipped",
            "Failed",
        ]

    def test_renders(self, sample_report):
        """The table renders to a console without errors."""
        console = Console(record=True, width=100)
        console.print(build_summary_table(sample_report))
        output = console.export_text()
        assert "users" in output
        assert "all" in output


@pytest.mark.unit
class TestReportExport:
    """Tests for write_report_json() and write_unmatched_csv()."""

    def test_json_report(self, sample_report, tmp_path):
        """The JSON report holds counters, mappings and unmatched names."""
        path = write_report_json(sample_report, tmp_path)

        assert path.name == "ship_migration_live_20260112_103000.json"
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["dry_run"] is False
        assert data["collections"]["users"]["updated"] == 1
        assert data["mappings"][0]["strategy"] == "case-insensitive"
        assert data["unmatched"][0]["field_path"] == "ships[2].name"
        assert data["total_failed"] == 1

    def test_csv_export(self, sample_report, tmp_path):
        """The CSV starts with metadata comments, then header and rows."""
        path = write_unmatched_csv(sample_report, tmp_path)

        assert path.name == "unmatched_ships_live_20260112_103000.csv"
        lines = path.read_text(encoding="utf-8").splitlines()
        assert lines[0] == "# Unmatched Ship Names Export"
        assert lines[2] == "# Mode: LIVE"
        assert lines[3] == "# Unmatched: 1"
        assert lines[4] == "collection,document_id,field_path,name"
        assert lines[5] == "users,u-1,ships[2].name,Totally Unknown Ship"

    def test_csv_skipped_when_nothing_unmatched(self, tmp_path):
        """No file is written for a clean run."""
        report = MigrationReport(dry_run=True)
        report.finalize()
        assert write_unmatched_csv(report, tmp_path) is None
        assert list(tmp_path.iterdir()) == []

    def test_output_dir_created(self, sample_report, tmp_path):
        """Missing output directories are created."""
        path = write_report_json(sample_report, tmp_path / "nested" / "logs")
        assert path.exists()
