"""Configuration management for FleetDataHub.

This module provides centralized configuration loaded from environment variables
with validation using Pydantic BaseSettings, plus the manual ship override table.

Usage:
    >>> from fleet_data_hub.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.storage_backend)
"""

from fleet_data_hub.config.override_loader import load_ship_overrides
from fleet_data_hub.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
    "load_ship_overrides",
]
