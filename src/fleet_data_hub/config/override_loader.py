"""
YAML loader for the manual ship name override table.

The override table bridges the naming used in legacy documents and the
canonical catalog: each entry maps an exact legacy ship name to the slug of
the catalog entry it should resolve to. It is versioned data, so new legacy
spellings are handled by editing the YAML file, not the resolver.

File format (flat mapping, string keys and values):

    Gladius Pirate: gladius-pirate-edition
    Idris-K: idris-p
"""

import os
from pathlib import Path
from typing import Dict, Optional

import structlog
import yaml

logger = structlog.get_logger(__name__)

DEFAULT_OVERRIDES_FILE = Path("config/mappings/ship_overrides.yml")

# Environment variable for a custom override file
OVERRIDES_FILE_ENV_VAR = "FDH_SHIP_OVERRIDES_FILE"


def _get_overrides_file() -> Path:
    """
    Get the override file path.

    Checks FDH_SHIP_OVERRIDES_FILE first, then falls back to the default
    config/mappings/ship_overrides.yml.
    """
    env_path = os.environ.get(OVERRIDES_FILE_ENV_VAR)
    if env_path:
        return Path(env_path)
    return DEFAULT_OVERRIDES_FILE


def load_ship_overrides(file_path: Optional[Path] = None) -> Dict[str, str]:
    """
    Load the manual override table.

    Behavior:
    - Missing file: Returns empty dict, logs a warning (no exception)
    - Empty file: Returns empty dict
    - Invalid YAML: Raises ValueError with filename
    - Valid file: Returns dict with whitespace-stripped slugs

    Keys are kept exactly as written: override lookup is an exact match on
    the raw legacy name, so internal spacing and case are significant.

    Args:
        file_path: Optional override file. Defaults to FDH_SHIP_OVERRIDES_FILE
            or config/mappings/ship_overrides.yml.

    Returns:
        Dict mapping legacy ship names to canonical slugs.

    Raises:
        ValueError: If the YAML is invalid or not a string -> string mapping.
    """
    if file_path is None:
        file_path = _get_overrides_file()

    if not file_path.exists():
        logger.warning("override_loader.file_not_found", file_path=str(file_path))
        return {}

    try:
        with open(file_path, "r", encoding="utf-8") as f:
            content = yaml.safe_load(f)
    except yaml.YAMLError as e:
        logger.error(
            "override_loader.yaml_parse_error",
            file_path=str(file_path),
            error=str(e),
        )
        raise ValueError(f"Invalid YAML in {file_path}: {e}") from e

    if content is None:
        logger.debug("override_loader.empty_file", file_path=str(file_path))
        return {}

    if not isinstance(content, dict):
        logger.error(
            "override_loader.invalid_format",
            file_path=str(file_path),
            actual_type=type(content).__name__,
        )
        raise ValueError(
            f"Invalid override format in {file_path}: "
            f"expected dict, got {type(content).__name__}"
        )

    result: Dict[str, str] = {}
    for key, value in content.items():
        if not isinstance(key, str) or not isinstance(value, str):
            logger.error(
                "override_loader.invalid_entry_type",
                file_path=str(file_path),
                key_type=type(key).__name__,
                value_type=type(value).__name__,
            )
            raise ValueError(
                f"Invalid override entry in {file_path}: "
                f"expected string key/value, got "
                f"{type(key).__name__}/{type(value).__name__}"
            )
        result[key] = value.strip()

    logger.info(
        "override_loader.file_loaded",
        file_path=str(file_path),
        entry_count=len(result),
    )
    return result
