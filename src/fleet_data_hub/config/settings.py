"""
Configuration management for FleetDataHub.

This module provides environment-based configuration using Pydantic BaseSettings,
allowing the ship reference migration to run against flat JSON files during
development and against a SQL document store in production without code changes.
"""

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Determine project root for resolving .env by default
PROJECT_ROOT = Path(__file__).resolve().parents[3]
DEFAULT_ENV_FILE = PROJECT_ROOT / ".env"
ENV_FILE_OVERRIDE = os.getenv("FDH_ENV_FILE")
if ENV_FILE_OVERRIDE:
    env_file_candidate = Path(ENV_FILE_OVERRIDE).expanduser()
    if not env_file_candidate.is_absolute():
        env_file_candidate = PROJECT_ROOT / env_file_candidate
    SETTINGS_ENV_FILE = env_file_candidate
else:
    SETTINGS_ENV_FILE = DEFAULT_ENV_FILE


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    Environment variables are automatically loaded with the FDH_ prefix.
    For example, FDH_DATA_DIR will override the data_dir setting.

    Fields without prefix (uppercase names):
    - DATABASE_URL: Document store connection string (database backend only)
    - ENVIRONMENT: Deployment environment (dev, staging, prod)
    - LOG_LEVEL: Logging level (uppercase)
    """

    ENVIRONMENT: Literal["dev", "staging", "prod"] = Field(
        default="dev",
        validation_alias="ENVIRONMENT",
        description="Deployment environment",
    )
    LOG_LEVEL: str = Field(
        default="INFO",
        validation_alias="LOG_LEVEL",
        description="Logging level (uppercase)",
    )
    DATABASE_URL: Optional[str] = Field(
        default=None,
        validation_alias="DATABASE_URL",
        description="SQLAlchemy URL of the document store (database backend)",
    )

    app_name: str = Field(default="FleetDataHub", description="Application name")

    # Storage configuration
    storage_backend: Literal["json", "database"] = Field(
        default="json",
        description="Where collections live: flat JSON files or SQL document tables",
    )
    data_dir: str = Field(
        default="./data",
        description="Directory holding <collection>.json files (json backend)",
    )

    # Catalog and collections
    ships_collection: str = Field(
        default="ships", description="Collection holding the canonical ship catalog"
    )
    users_collection: str = Field(default="users", description="Users collection")
    missions_collection: str = Field(
        default="missions", description="Missions collection"
    )
    planned_missions_collection: str = Field(
        default="planned-missions", description="Planned missions collection"
    )
    operations_collection: str = Field(
        default="operations", description="Operations collection"
    )
    resources_collection: str = Field(
        default="resources", description="Resources collection"
    )

    # Manual override table and report output
    ship_overrides_file: str = Field(
        default="./config/mappings/ship_overrides.yml",
        description="YAML file mapping legacy ship names to catalog slugs",
    )
    report_output_dir: str = Field(
        default="logs/",
        description="Directory for JSON migration reports and unmatched CSV exports",
    )

    def get_database_url(self) -> str:
        """
        Get the document store connection string.

        Raises:
            ValueError: If the database backend is used without DATABASE_URL.
        """
        if not self.DATABASE_URL:
            raise ValueError(
                "DATABASE_URL must be set when storage_backend is 'database'"
            )
        return self.DATABASE_URL

    model_config = SettingsConfigDict(
        env_prefix="FDH_",
        env_file=str(SETTINGS_ENV_FILE),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Uses LRU cache to ensure settings are loaded once and reused across
    the application lifecycle.

    Returns:
        Settings instance with loaded configuration
    """
    return Settings()
