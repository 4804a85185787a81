"""
Automatic name matching strategies (passes 2 to 5).

Each function performs one pass and returns a MatchResult or None:

2. exact            - case-sensitive lookup in by_name
3. case-insensitive - lowercased lookup in by_name_lower
4. slug             - slug of the input looked up in by_slug
5. contains         - substring match in either direction over catalog names
"""

from typing import Optional

from ..normalizer import name_to_slug
from ..types import MatchResult, MatchStrategy, ShipRef, ShipsIndex


def _result(ref: ShipRef, strategy: MatchStrategy) -> MatchResult:
    return MatchResult(
        fleetyards_id=ref.fleetyards_id, matched_name=ref.name, strategy=strategy
    )


def resolve_exact(name: str, index: ShipsIndex) -> Optional[MatchResult]:
    ref = index.by_name.get(name)
    return _result(ref, MatchStrategy.EXACT) if ref else None


def resolve_case_insensitive(name: str, index: ShipsIndex) -> Optional[MatchResult]:
    ref = index.by_name_lower.get(name.lower())
    return _result(ref, MatchStrategy.CASE_INSENSITIVE) if ref else None


def resolve_slug(name: str, index: ShipsIndex) -> Optional[MatchResult]:
    ref = index.by_slug.get(name_to_slug(name))
    return _result(ref, MatchStrategy.SLUG) if ref else None


def resolve_contains(name: str, index: ShipsIndex) -> Optional[MatchResult]:
    """
    Substring match in either direction, first hit in catalog order wins.

    Catalog order is the insertion order of by_name (dict order). When several
    catalog names overlap with the input the earliest one is returned, which
    is not necessarily the closest; callers that need a better tie-break
    should add a manual override for the name.
    """
    name_lower = name.lower()
    for ref in index.by_name.values():
        ship_lower = ref.name.lower()
        if name_lower in ship_lower or ship_lower in name_lower:
            return _result(ref, MatchStrategy.CONTAINS)
    return None
