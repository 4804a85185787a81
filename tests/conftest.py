"""Pytest configuration and shared fixtures for the ship migration suites.

.fdh_env is loaded FIRST (when present) with override=True so local test
runs take FDH_* variables from that file only, not from the shell.
"""

from __future__ import annotations

from pathlib import Path

from dotenv import load_dotenv

_FDH_ENV_FILE = Path(__file__).parent.parent / ".fdh_env"
if _FDH_ENV_FILE.exists():
    load_dotenv(_FDH_ENV_FILE, override=True)

from typing import Dict, Iterator

import pytest

from fleet_data_hub.config import get_settings
from fleet_data_hub.infrastructure.ships import (
    ShipNameResolver,
    ShipsIndex,
    build_ships_index,
)
from tests.fixtures.ship_catalog import (
    CATALOG_DOCUMENTS,
    OVERRIDES,
    InMemoryDocumentRepository,
    fleet_collections,
)


@pytest.fixture(autouse=True)
def _reset_settings_cache() -> Iterator[None]:
    """Every test sees settings built from its own environment."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def catalog_repository() -> InMemoryDocumentRepository:
    return InMemoryDocumentRepository("ships", [dict(d) for d in CATALOG_DOCUMENTS])


@pytest.fixture
def ships_index(catalog_repository) -> ShipsIndex:
    return build_ships_index(catalog_repository)


@pytest.fixture
def overrides() -> Dict[str, str]:
    return dict(OVERRIDES)


@pytest.fixture
def resolver(ships_index, overrides) -> ShipNameResolver:
    return ShipNameResolver(ships_index, overrides)


@pytest.fixture
def fleet_repositories() -> Dict[str, InMemoryDocumentRepository]:
    """One in-memory repository per fleet collection, seeded with fixtures."""
    return {
        name: InMemoryDocumentRepository(name, documents)
        for name, documents in fleet_collections().items()
    }
