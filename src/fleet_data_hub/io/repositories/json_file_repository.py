"""
Flat-file document repository.

Each collection is a single JSON file holding an array of documents, e.g.
``data/operations.json``. Writes replace the whole file atomically so a
failed patch never leaves a half-written collection behind.
"""

from __future__ import annotations

import json
import os
import tempfile
from pathlib import Path
from typing import Any, Dict, List, Union

from fleet_data_hub.utils.logging import get_logger

from .base import DOCUMENT_ID_FIELD, RepositoryError

logger = get_logger(__name__)


class JsonFileRepository:
    """
    Repository over ``<data_dir>/<collection>.json``.

    A missing file is an empty collection; a file that is not a JSON array
    of objects is a read error.

    Example:
        >>> repo = JsonFileRepository("data", "operations")
        >>> docs = repo.read_all()
        >>> repo.patch_field("op-1", "participants", docs[0]["participants"])
    """

    def __init__(self, data_dir: Union[str, Path], collection: str) -> None:
        self.collection = collection
        self.file_path = Path(data_dir) / f"{collection}.json"

    def _load(self) -> List[Dict[str, Any]]:
        try:
            raw = self.file_path.read_text(encoding="utf-8")
        except OSError as e:
            raise RepositoryError(f"Cannot read {self.file_path}: {e}") from e

        try:
            documents = json.loads(raw)
        except json.JSONDecodeError as e:
            raise RepositoryError(f"Invalid JSON in {self.file_path}: {e}") from e

        if not isinstance(documents, list) or not all(
            isinstance(doc, dict) for doc in documents
        ):
            raise RepositoryError(
                f"Expected a JSON array of objects in {self.file_path}"
            )
        return documents

    def _dump(self, documents: List[Dict[str, Any]]) -> None:
        self.file_path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(
            dir=str(self.file_path.parent), prefix=f".{self.collection}.", suffix=".tmp"
        )
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(documents, f, indent=2, ensure_ascii=False)
                f.write("\n")
            os.replace(tmp_name, self.file_path)
        except OSError as e:
            Path(tmp_name).unlink(missing_ok=True)
            raise RepositoryError(f"Cannot write {self.file_path}: {e}") from e

    def read_all(self) -> List[Dict[str, Any]]:
        if not self.file_path.exists():
            logger.info(
                "json_repository.file_not_found",
                collection=self.collection,
                file_path=str(self.file_path),
            )
            return []
        return self._load()

    def patch_field(self, document_id: str, field: str, value: Any) -> None:
        documents = self._load() if self.file_path.exists() else []
        for document in documents:
            if str(document.get(DOCUMENT_ID_FIELD, "")) == str(document_id):
                document[field] = value
                break
        else:
            raise RepositoryError(
                f"Document {document_id!r} not found in {self.file_path}"
            )
        self._dump(documents)

    def write_all(self, documents: List[Dict[str, Any]]) -> None:
        """Replace the whole collection (used to seed data files)."""
        self._dump(documents)
