"""
SQL-backed document repository.

Collections are stored one table per collection with a text primary key and
a JSON document column, so the same document shapes that live in the flat
JSON files can be kept in PostgreSQL (or SQLite for tests).

Each patch runs in its own transaction: documents are updated independently
and a failed write affects only that document.
"""

from __future__ import annotations

from typing import Any, Dict, Iterable, List

import sqlalchemy as sa
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError

from fleet_data_hub.utils.logging import get_logger

from .base import DOCUMENT_ID_FIELD, RepositoryError

logger = get_logger(__name__)


def table_name_for(collection: str) -> str:
    """Map a collection name to its table name, e.g. "planned-missions"."""
    return collection.replace("-", "_")


class SqlDocumentRepository:
    """
    Repository over a ``(id, document)`` table.

    Usage:
        engine = sa.create_engine(settings.get_database_url())
        repo = SqlDocumentRepository(engine, "missions")
        for doc in repo.read_all():
            ...
        repo.patch_field("m-1", "participants", updated_participants)
    """

    def __init__(self, engine: Engine, collection: str) -> None:
        self.collection = collection
        self.engine = engine
        self.metadata = sa.MetaData()
        self.table = sa.Table(
            table_name_for(collection),
            self.metadata,
            sa.Column("id", sa.String(64), primary_key=True),
            sa.Column("document", sa.JSON, nullable=False),
        )

    def create_table(self) -> None:
        """Create the collection table if it does not exist."""
        self.metadata.create_all(self.engine, checkfirst=True)

    def insert_documents(self, documents: Iterable[Dict[str, Any]]) -> int:
        """Insert documents keyed by their ``id`` field. Returns the row count."""
        rows = [
            {"id": str(doc[DOCUMENT_ID_FIELD]), "document": doc} for doc in documents
        ]
        if not rows:
            return 0
        try:
            with self.engine.begin() as conn:
                conn.execute(sa.insert(self.table), rows)
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Cannot insert into {self.table.name}: {e}"
            ) from e
        return len(rows)

    def read_all(self) -> List[Dict[str, Any]]:
        try:
            with self.engine.connect() as conn:
                result = conn.execute(sa.select(self.table.c.document))
                return [dict(row.document) for row in result]
        except SQLAlchemyError as e:
            raise RepositoryError(f"Cannot read {self.table.name}: {e}") from e

    def patch_field(self, document_id: str, field: str, value: Any) -> None:
        try:
            with self.engine.begin() as conn:
                current = conn.execute(
                    sa.select(self.table.c.document).where(
                        self.table.c.id == document_id
                    )
                ).scalar_one_or_none()
                if current is None:
                    raise RepositoryError(
                        f"Document {document_id!r} not found in {self.table.name}"
                    )
                document = dict(current)
                document[field] = value
                conn.execute(
                    sa.update(self.table)
                    .where(self.table.c.id == document_id)
                    .values(document=document)
                )
        except SQLAlchemyError as e:
            raise RepositoryError(
                f"Cannot update {document_id!r} in {self.table.name}: {e}"
            ) from e
