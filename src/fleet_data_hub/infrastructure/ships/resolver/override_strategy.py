"""
Manual override resolution strategy.

Pass 1 of the resolution order: an exact lookup of the raw legacy name in the
override table, followed by a slug lookup of the override target in the
catalog. A target slug missing from the catalog is not trusted; the pass
reports no match and resolution continues with the automatic passes.
"""

from typing import Dict, List, Optional, Tuple

from ..types import MatchResult, MatchStrategy, ShipsIndex


def resolve_via_override(
    name: str, index: ShipsIndex, overrides: Dict[str, str]
) -> Optional[MatchResult]:
    target_slug = overrides.get(name)
    if not target_slug:
        return None
    ref = index.by_slug.get(target_slug)
    if ref is None:
        return None
    return MatchResult(
        fleetyards_id=ref.fleetyards_id,
        matched_name=ref.name,
        strategy=MatchStrategy.MANUAL_OVERRIDE,
    )


def validate_overrides(
    overrides: Dict[str, str], index: ShipsIndex
) -> List[Tuple[str, str]]:
    """
    Find overrides whose target slug is not in the catalog.

    Args:
        overrides: Legacy name -> slug table.
        index: Catalog index.

    Returns:
        List of (legacy_name, missing_slug) pairs, in table order.
    """
    return [
        (name, slug) for name, slug in overrides.items() if slug not in index.by_slug
    ]
