"""
FleetDataHub - Fleet data maintenance tooling.

Batch jobs that keep fleet documents consistent with the canonical ship
catalog, starting with the migration of free-text ship names to stable
catalog identifiers.
"""

__version__ = "0.1.0"
