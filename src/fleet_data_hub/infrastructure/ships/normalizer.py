"""
Ship name to slug normalization.

The catalog stores a slug for every ship; legacy names that differ from the
canonical name only by case or punctuation normalize to the same slug, which
is what makes the slug pass of the resolver reachable.
"""

import re

_NON_ALNUM_RUN = re.compile(r"[^a-z0-9]+")


def name_to_slug(name: str) -> str:
    """
    Convert a ship name to catalog slug form.

    Operations (in order):
    1. Lowercase the whole string
    2. Replace every maximal run of characters outside [a-z0-9] with "-"
    3. Strip leading and trailing hyphens

    Args:
        name: Ship name as written in a document or the catalog.

    Returns:
        Slug string (may be empty for names without ASCII alphanumerics).

    Examples:
        >>> name_to_slug("F7C-M Super Hornet Mk II")
        'f7c-m-super-hornet-mk-ii'
        >>> name_to_slug("  Cutlass   Black! ")
        'cutlass-black'
    """
    if not name:
        return ""
    return _NON_ALNUM_RUN.sub("-", name.lower()).strip("-")
