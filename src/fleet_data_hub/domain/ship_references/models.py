"""Report models for the ship reference migration."""

from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class CollectionReport:
    """Document counters for one collection."""

    collection: str
    total: int = 0
    updated: int = 0
    skipped: int = 0
    failed: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "collection": self.collection,
            "total": self.total,
            "updated": self.updated,
            "skipped": self.skipped,
            "failed": self.failed,
        }


@dataclass(frozen=True)
class MigrationMapping:
    """Audit record of one resolved ship reference."""

    collection: str
    document_id: str
    field_path: str  # e.g. "ships[0].name", "participants[2].shipName"
    original_name: str
    resolved_name: str
    fleetyards_id: str
    strategy: str


@dataclass(frozen=True)
class UnmatchedEntry:
    """A ship reference no resolution pass could map."""

    collection: str
    document_id: str
    field_path: str
    name: str

    @staticmethod
    def csv_headers() -> List[str]:
        return ["collection", "document_id", "field_path", "name"]

    def to_csv_row(self) -> List[str]:
        return [self.collection, self.document_id, self.field_path, self.name]


@dataclass
class MigrationReport:
    """
    Run-wide migration report.

    Created empty at run start, appended to by every collection migrator,
    and finalized once with completion time and totals.
    """

    dry_run: bool = False
    started_at: datetime = field(default_factory=_utc_now)
    completed_at: Optional[datetime] = None
    collections: Dict[str, CollectionReport] = field(default_factory=dict)
    mappings: List[MigrationMapping] = field(default_factory=list)
    unmatched: List[UnmatchedEntry] = field(default_factory=list)

    total_processed: int = 0
    total_updated: int = 0
    total_skipped: int = 0
    total_failed: int = 0

    def collection(self, name: str) -> CollectionReport:
        """Return the counters for a collection, creating them on first use."""
        if name not in self.collections:
            self.collections[name] = CollectionReport(collection=name)
        return self.collections[name]

    def finalize(self) -> None:
        self.total_processed = sum(c.total for c in self.collections.values())
        self.total_updated = sum(c.updated for c in self.collections.values())
        self.total_skipped = sum(c.skipped for c in self.collections.values())
        self.total_failed = sum(c.failed for c in self.collections.values())
        self.completed_at = _utc_now()

    @property
    def duration_seconds(self) -> float:
        end = self.completed_at or _utc_now()
        return (end - self.started_at).total_seconds()

    @property
    def succeeded(self) -> bool:
        """True when every ship name resolved; failed writes are counted, not fatal."""
        return not self.unmatched

    def to_dict(self) -> Dict[str, Any]:
        return {
            "dry_run": self.dry_run,
            "started_at": self.started_at.isoformat(),
            "completed_at": self.completed_at.isoformat()
            if self.completed_at
            else None,
            "collections": {
                name: report.to_dict() for name, report in self.collections.items()
            },
            "mappings": [asdict(m) for m in self.mappings],
            "unmatched": [asdict(u) for u in self.unmatched],
            "total_processed": self.total_processed,
            "total_updated": self.total_updated,
            "total_skipped": self.total_skipped,
            "total_failed": self.total_failed,
        }
