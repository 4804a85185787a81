"""
Collection migrator definitions.

Every migrated collection stores ship names in one of two shapes:

- an array of objects, each carrying a name key (``ships[i].name`` on users,
  ``participants[i].shipName`` on missions and operations,
  ``ships[i].shipName`` on planned missions);
- the document itself (``name`` on resources of type "Ship").

A ``CollectionMigrator`` value describes one collection's shape. The
migration loop in ``migrator.py`` is shared; only these descriptions differ.
"""

import copy
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from fleet_data_hub.config.settings import Settings
from fleet_data_hub.infrastructure.ships import CANONICAL_ID_FIELD

Document = Dict[str, Any]


@dataclass(frozen=True)
class ShipReference:
    """
    One ship name found in a document.

    Attributes:
        name: The free-text ship name.
        field_path: Location in the document, e.g. "participants[2].shipName".
        position: Index in the reference array, None for document-level refs.
        current_id: Value of the sibling canonical id field, if any.
    """

    name: str
    field_path: str
    position: Optional[int]
    current_id: Any


@dataclass(frozen=True)
class CollectionMigrator:
    """
    Shape of the ship references in one collection.

    Attributes:
        collection: Collection name (repository and report key).
        name_key: Key holding the ship name.
        array_field: Top-level array holding reference objects, or None when
            the document itself is the reference.
        document_filter: Optional predicate; documents failing it carry no
            ship references.
    """

    collection: str
    name_key: str
    array_field: Optional[str] = None
    document_filter: Optional[Callable[[Document], bool]] = None

    @property
    def patch_field(self) -> str:
        """Top-level field written back when a document changes."""
        return self.array_field or CANONICAL_ID_FIELD

    def find_references(self, document: Document) -> List[ShipReference]:
        if self.document_filter is not None and not self.document_filter(document):
            return []

        if self.array_field is None:
            name = document.get(self.name_key)
            if not _is_name(name):
                return []
            return [
                ShipReference(
                    name=name,
                    field_path=self.name_key,
                    position=None,
                    current_id=document.get(CANONICAL_ID_FIELD),
                )
            ]

        items = document.get(self.array_field)
        if not isinstance(items, list):
            return []
        references: List[ShipReference] = []
        for position, item in enumerate(items):
            if not isinstance(item, dict):
                continue
            name = item.get(self.name_key)
            if not _is_name(name):
                continue
            references.append(
                ShipReference(
                    name=name,
                    field_path=f"{self.array_field}[{position}].{self.name_key}",
                    position=position,
                    current_id=item.get(CANONICAL_ID_FIELD),
                )
            )
        return references

    def build_patch(
        self, document: Document, resolved: List[Tuple[ShipReference, str]]
    ) -> Any:
        """
        Return the new value of ``patch_field`` with canonical ids attached.

        Works on a deep copy: the document read from the repository is left
        exactly as it was, and references not in ``resolved`` keep their
        original contents.
        """
        if self.array_field is None:
            _, fleetyards_id = resolved[-1]
            return fleetyards_id

        items = copy.deepcopy(document[self.array_field])
        for reference, fleetyards_id in resolved:
            items[reference.position][CANONICAL_ID_FIELD] = fleetyards_id
        return items


def _is_name(value: Any) -> bool:
    return isinstance(value, str) and bool(value)


def _is_ship_resource(document: Document) -> bool:
    return document.get("type") == "Ship"


def default_migrators(settings: Settings) -> List[CollectionMigrator]:
    """Collection migrators in run order.

    Order: users, missions, planned missions, operations, resources.
    """
    return [
        CollectionMigrator(
            collection=settings.users_collection,
            array_field="ships",
            name_key="name",
        ),
        CollectionMigrator(
            collection=settings.missions_collection,
            array_field="participants",
            name_key="shipName",
        ),
        CollectionMigrator(
            collection=settings.planned_missions_collection,
            array_field="ships",
            name_key="shipName",
        ),
        CollectionMigrator(
            collection=settings.operations_collection,
            array_field="participants",
            name_key="shipName",
        ),
        CollectionMigrator(
            collection=settings.resources_collection,
            name_key="name",
            document_filter=_is_ship_resource,
        ),
    ]
