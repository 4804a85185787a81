"""
Ship catalog infrastructure: catalog index, slug normalization and name resolution.

This package is shared by every batch job that has to turn a free-text ship
name into a canonical catalog identifier.
"""

from .catalog_index import (
    CatalogLoadError,
    CatalogShipDocument,
    build_ships_index,
    find_slug_mismatches,
)
from .normalizer import name_to_slug
from .resolver import ShipNameResolver, resolve_ship_name, validate_overrides
from .types import (
    CANONICAL_ID_FIELD,
    UUID_PATTERN,
    MatchResult,
    MatchStrategy,
    ResolutionStatistics,
    ShipRef,
    ShipsIndex,
    is_canonical_id,
)

__all__ = [
    "CANONICAL_ID_FIELD",
    "UUID_PATTERN",
    "CatalogLoadError",
    "CatalogShipDocument",
    "MatchResult",
    "MatchStrategy",
    "ResolutionStatistics",
    "ShipNameResolver",
    "ShipRef",
    "ShipsIndex",
    "build_ships_index",
    "find_slug_mismatches",
    "is_canonical_id",
    "name_to_slug",
    "resolve_ship_name",
    "validate_overrides",
]
