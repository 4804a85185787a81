"""
Repository factory: builds collection repositories from settings.

Callers ask for a collection by name and get a backend matching
``settings.storage_backend`` without knowing which store is configured.
"""

from typing import Optional

import sqlalchemy as sa
from sqlalchemy.engine import Engine

from fleet_data_hub.config.settings import Settings, get_settings

from .base import DocumentRepository
from .json_file_repository import JsonFileRepository
from .sql_document_repository import SqlDocumentRepository


class RepositoryFactory:
    """
    Creates one repository per collection for the configured backend.

    The SQL engine is created lazily and shared by every repository the
    factory hands out.
    """

    def __init__(
        self, settings: Optional[Settings] = None, engine: Optional[Engine] = None
    ) -> None:
        self.settings = settings or get_settings()
        self._engine = engine

    @property
    def engine(self) -> Engine:
        if self._engine is None:
            self._engine = sa.create_engine(self.settings.get_database_url())
        return self._engine

    def for_collection(self, collection: str) -> DocumentRepository:
        if self.settings.storage_backend == "database":
            return SqlDocumentRepository(self.engine, collection)
        return JsonFileRepository(self.settings.data_dir, collection)

    def dispose(self) -> None:
        if self._engine is not None:
            self._engine.dispose()
