"""
Type definitions for ship reference resolution.

This module defines the catalog entry, index and match result types shared by
the catalog index builder, the name resolver and the collection migrators.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict

# Canonical catalog identifiers are UUID v4 text; anything else sitting in a
# canonical id field (slugs, names, empty strings) is treated as unmigrated.
UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)

# Document field that carries the canonical id next to a ship name
CANONICAL_ID_FIELD = "fleetyardsId"


def is_canonical_id(value: Any) -> bool:
    """Return True if value is a string in canonical UUID form."""
    return isinstance(value, str) and UUID_PATTERN.match(value) is not None


class MatchStrategy(str, Enum):
    """Resolution pass that produced a match, in resolution order."""

    MANUAL_OVERRIDE = "manual-override"
    EXACT = "exact"
    CASE_INSENSITIVE = "case-insensitive"
    SLUG = "slug"
    CONTAINS = "contains"


@dataclass(frozen=True)
class ShipRef:
    """
    One canonical catalog entry.

    Attributes:
        fleetyards_id: Stable catalog identifier (UUID v4 text).
        name: Canonical display name.
        slug: URL-safe normalized name.
    """

    fleetyards_id: str
    name: str
    slug: str


@dataclass
class ShipsIndex:
    """
    Lookup maps over the ship catalog, built once per run.

    Every entry is present in all four maps. Maps are keyed by exact name,
    lowercased name, slug and canonical id; on duplicate keys the last
    catalog entry wins while the key keeps its first insertion position.
    """

    by_name: Dict[str, ShipRef] = field(default_factory=dict)
    by_name_lower: Dict[str, ShipRef] = field(default_factory=dict)
    by_slug: Dict[str, ShipRef] = field(default_factory=dict)
    by_id: Dict[str, ShipRef] = field(default_factory=dict)

    def add(self, ref: ShipRef) -> None:
        self.by_name[ref.name] = ref
        self.by_name_lower[ref.name.lower()] = ref
        self.by_slug[ref.slug] = ref
        self.by_id[ref.fleetyards_id] = ref

    def __len__(self) -> int:
        return len(self.by_id)


@dataclass(frozen=True)
class MatchResult:
    """Outcome of a successful name resolution."""

    fleetyards_id: str
    matched_name: str
    strategy: MatchStrategy


@dataclass
class ResolutionStatistics:
    """
    Per-run resolution counters.

    Attributes:
        total: Number of resolve calls.
        hits_by_strategy: Matches per strategy value.
        unresolved: Calls that matched nothing.
    """

    total: int = 0
    hits_by_strategy: Dict[str, int] = field(
        default_factory=lambda: {strategy.value: 0 for strategy in MatchStrategy}
    )
    unresolved: int = 0

    def to_dict(self) -> Dict[str, Any]:
        return {
            "total": self.total,
            "hits_by_strategy": dict(self.hits_by_strategy),
            "unresolved": self.unresolved,
        }
