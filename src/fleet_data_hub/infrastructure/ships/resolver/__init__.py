"""
Ship name resolver package.

Resolution priority:
1. Manual overrides (YAML table, legacy name -> catalog slug)
2. Exact name
3. Case-insensitive name
4. Slug match
5. Contains match (catalog order)
"""

from .core import ShipNameResolver, resolve_ship_name
from .override_strategy import validate_overrides

__all__ = [
    "ShipNameResolver",
    "resolve_ship_name",
    "validate_overrides",
]
