"""
Core ship name resolution.

``resolve_ship_name`` runs the five passes in fixed order and returns the
first match. ``ShipNameResolver`` binds an index and override table for a
migration run and keeps per-strategy hit statistics.
"""

from typing import Callable, Dict, List, Optional, Tuple

from fleet_data_hub.utils.logging import get_logger

from ..types import MatchResult, ResolutionStatistics, ShipsIndex
from .name_strategy import (
    resolve_case_insensitive,
    resolve_contains,
    resolve_exact,
    resolve_slug,
)
from .override_strategy import resolve_via_override, validate_overrides

logger = get_logger(__name__)

NamePass = Callable[[str, ShipsIndex], Optional[MatchResult]]

# Automatic passes in resolution order (the override pass always runs first)
AUTOMATIC_PASSES: Tuple[NamePass, ...] = (
    resolve_exact,
    resolve_case_insensitive,
    resolve_slug,
    resolve_contains,
)


def resolve_ship_name(
    name: str,
    index: ShipsIndex,
    overrides: Optional[Dict[str, str]] = None,
) -> Optional[MatchResult]:
    """
    Resolve a free-text ship name to a catalog entry.

    Resolution order (first match wins):
    1. Manual override (exact legacy name -> slug, slug must exist)
    2. Exact name
    3. Case-insensitive name
    4. Slug of the name
    5. Contains match in either direction

    Args:
        name: Ship name as stored in a document.
        index: Catalog index built by build_ships_index().
        overrides: Legacy name -> slug table. None means no overrides.

    Returns:
        MatchResult, or None if the name is blank or no pass matched.

    Example:
        >>> result = resolve_ship_name("GLADIUS", index)
        >>> result.strategy
        <MatchStrategy.CASE_INSENSITIVE: 'case-insensitive'>
    """
    if not isinstance(name, str) or not name.strip():
        return None

    if overrides:
        result = resolve_via_override(name, index, overrides)
        if result is not None:
            return result

    for name_pass in AUTOMATIC_PASSES:
        result = name_pass(name, index)
        if result is not None:
            return result

    return None


class ShipNameResolver:
    """
    Name resolver bound to one catalog snapshot and override table.

    Attributes:
        index: Shared, read-only catalog index.
        overrides: Manual override table.
        statistics: Hit counters per strategy for the run.
    """

    def __init__(
        self, index: ShipsIndex, overrides: Optional[Dict[str, str]] = None
    ) -> None:
        self.index = index
        self.overrides: Dict[str, str] = dict(overrides or {})
        self.statistics = ResolutionStatistics()

    def resolve(self, name: str) -> Optional[MatchResult]:
        result = resolve_ship_name(name, self.index, self.overrides)
        self.statistics.total += 1
        if result is None:
            self.statistics.unresolved += 1
        else:
            self.statistics.hits_by_strategy[result.strategy.value] += 1
        return result

    def invalid_overrides(self) -> List[Tuple[str, str]]:
        """Overrides pointing at slugs that are not in the catalog."""
        return validate_overrides(self.overrides, self.index)

    def log_invalid_overrides(self) -> int:
        """Log every override with a missing target slug. Returns the count."""
        invalid = self.invalid_overrides()
        for legacy_name, slug in invalid:
            logger.warning(
                "ship_resolver.override_target_missing",
                legacy_name=legacy_name,
                target_slug=slug,
            )
        return len(invalid)
