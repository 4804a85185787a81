"""Collection storage backends for fleet documents."""

from .base import DOCUMENT_ID_FIELD, DocumentRepository, RepositoryError
from .factory import RepositoryFactory
from .json_file_repository import JsonFileRepository
from .sql_document_repository import SqlDocumentRepository, table_name_for

__all__ = [
    "DOCUMENT_ID_FIELD",
    "DocumentRepository",
    "JsonFileRepository",
    "RepositoryError",
    "RepositoryFactory",
    "SqlDocumentRepository",
    "table_name_for",
]
