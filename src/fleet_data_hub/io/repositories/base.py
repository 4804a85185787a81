"""
Document repository contract shared by every collection backend.

The ship reference migration only needs two operations from a collection:
read every document, and replace one top-level field of one document. Both
the flat JSON file store and the SQL document store implement exactly that.
"""

from typing import Any, Dict, List, Protocol

# Field holding the document identifier in every collection; ids are matched
# by their text form, so a numeric id 7 and "7" name the same document
DOCUMENT_ID_FIELD = "id"


class RepositoryError(Exception):
    """Raised when a collection cannot be read or a document cannot be written."""

    pass


class DocumentRepository(Protocol):
    """Protocol for collection storage backends."""

    collection: str

    def read_all(self) -> List[Dict[str, Any]]:
        """
        Return every document of the collection.

        Raises:
            RepositoryError: If the collection cannot be read.
        """
        ...

    def patch_field(self, document_id: str, field: str, value: Any) -> None:
        """
        Replace one top-level field on the document with the given id.

        Raises:
            RepositoryError: If the document is missing or the write fails.
        """
        ...
