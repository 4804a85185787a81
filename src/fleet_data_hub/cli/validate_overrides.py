"""
Manual override table check.

Loads the ship catalog and the override YAML and lists every override whose
target slug is not in the catalog, plus catalog entries whose stored slug
does not match the slug of their name.

Usage:
    python -m fleet_data_hub.cli validate-overrides [--overrides FILE]
"""

import argparse
from pathlib import Path
from typing import List, Optional

from rich.console import Console
from sqlalchemy.exc import ArgumentError
from rich.table import Table

from fleet_data_hub.config import get_settings, load_ship_overrides
from fleet_data_hub.infrastructure.ships import (
    CatalogLoadError,
    build_ships_index,
    find_slug_mismatches,
    validate_overrides,
)
from fleet_data_hub.io.repositories import RepositoryFactory


def main(argv: Optional[List[str]] = None, console: Optional[Console] = None) -> int:
    parser = argparse.ArgumentParser(
        prog="fleet_data_hub.cli validate-overrides",
        description="Check manual ship overrides against the catalog",
    )
    parser.add_argument("--overrides", type=Path, default=None)
    args = parser.parse_args(argv)
    console = console or Console()

    settings = get_settings()
    overrides_file = args.overrides or Path(settings.ship_overrides_file)
    try:
        overrides = load_ship_overrides(overrides_file)
    except ValueError as e:
        console.print(f"[red]Invalid override file:[/red] {e}")
        return 1

    factory = RepositoryFactory(settings)
    try:
        index = build_ships_index(factory.for_collection(settings.ships_collection))
    except (ValueError, ArgumentError) as e:
        console.print(f"[red]Storage is not configured:[/red] {e}")
        return 1
    except CatalogLoadError as e:
        console.print(f"[red]{e}[/red]")
        return 1
    finally:
        factory.dispose()

    invalid = validate_overrides(overrides, index)
    if invalid:
        table = Table(title="Overrides with missing target slug")
        table.add_column("Legacy name")
        table.add_column("Target slug")
        for legacy_name, slug in invalid:
            table.add_row(legacy_name, slug)
        console.print(table)

    for ref in find_slug_mismatches(index):
        console.print(
            f"[yellow]Catalog slug mismatch:[/yellow] {ref.name!r} has slug "
            f"{ref.slug!r}",
            highlight=False,
        )

    console.print(
        f"{len(overrides)} overrides checked against {len(index)} catalog entries, "
        f"{len(invalid)} invalid"
    )
    return 1 if invalid else 0
