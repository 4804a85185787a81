"""
Ship catalog index builder.

Loads the canonical ship catalog once per run and builds the four lookup maps
used by the name resolver. The catalog is the one input the migration cannot
do without: if it cannot be read, the run stops before any collection is
touched.
"""

from typing import Any, Dict, List

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from fleet_data_hub.io.repositories import DocumentRepository, RepositoryError
from fleet_data_hub.utils.logging import get_logger

from .normalizer import name_to_slug
from .types import ShipRef, ShipsIndex

logger = get_logger(__name__)


class CatalogLoadError(Exception):
    """Raised when the ship catalog cannot be loaded; aborts the migration run."""

    pass


class CatalogShipDocument(BaseModel):
    """Projection of a catalog document onto the fields the index needs."""

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    fleetyards_id: str = Field(alias="fleetyardsId", min_length=1)
    name: str = Field(min_length=1)
    slug: str = Field(min_length=1)

    def to_ref(self) -> ShipRef:
        return ShipRef(fleetyards_id=self.fleetyards_id, name=self.name, slug=self.slug)


def build_ships_index(source: DocumentRepository) -> ShipsIndex:
    """
    Load every catalog document and build the lookup index.

    Documents missing an id, name or slug are rejected whole and logged, so
    every accepted entry appears in all four maps. Duplicate keys are not
    deduplicated: the later entry wins for that key and a warning is logged.

    Args:
        source: Repository holding the ship catalog collection.

    Returns:
        ShipsIndex keyed by name, lowercased name, slug and canonical id.

    Raises:
        CatalogLoadError: If the catalog cannot be read, or is missing or
            empty (no entry survives validation).
    """
    try:
        documents = source.read_all()
    except RepositoryError as e:
        logger.error(
            "ships_index.catalog_load_failed",
            collection=source.collection,
            error=str(e),
        )
        raise CatalogLoadError(f"Cannot load ship catalog: {e}") from e

    index = ShipsIndex()
    rejected = 0
    for position, document in enumerate(documents):
        try:
            ref = CatalogShipDocument.model_validate(document).to_ref()
        except ValidationError as e:
            rejected += 1
            logger.warning(
                "ships_index.invalid_entry",
                position=position,
                errors=e.error_count(),
            )
            continue

        _warn_on_duplicates(index, ref)
        index.add(ref)

    # A missing catalog file or table reads as an empty collection
    if len(index) == 0:
        logger.error(
            "ships_index.catalog_empty",
            collection=source.collection,
            document_count=len(documents),
            rejected=rejected,
        )
        raise CatalogLoadError(
            f"Ship catalog {source.collection!r} has no usable entries "
            f"({len(documents)} documents read, {rejected} rejected)"
        )

    logger.info(
        "ships_index.built",
        collection=source.collection,
        entry_count=len(index),
        name_count=len(index.by_name),
        rejected=rejected,
    )
    return index


def _warn_on_duplicates(index: ShipsIndex, ref: ShipRef) -> None:
    keys: Dict[str, Any] = {
        "name": (index.by_name, ref.name),
        "name_lower": (index.by_name_lower, ref.name.lower()),
        "slug": (index.by_slug, ref.slug),
        "fleetyards_id": (index.by_id, ref.fleetyards_id),
    }
    for key_type, (mapping, key) in keys.items():
        existing = mapping.get(key)
        if existing is not None and existing != ref:
            logger.warning(
                "ships_index.duplicate_key",
                key_type=key_type,
                key=key,
                replaced_id=existing.fleetyards_id,
                new_id=ref.fleetyards_id,
            )


def find_slug_mismatches(index: ShipsIndex) -> List[ShipRef]:
    """
    Return catalog entries whose stored slug differs from the slug of their name.

    Names in this list can never be reached by the slug pass from their own
    canonical spelling, which usually points at a catalog data problem.
    """
    return [
        ref for ref in index.by_id.values() if name_to_slug(ref.name) != ref.slug
    ]
