"""
Unified CLI entry point for FleetDataHub.

Usage:
    python -m fleet_data_hub.cli <command> [options]

Available commands:
    migrate-ships       - Convert ship names in all collections to catalog ids
    validate-overrides  - Check the manual override table against the catalog

Examples:
    # Preview the migration
    python -m fleet_data_hub.cli migrate-ships --dry-run

    # Run against the SQL document store
    python -m fleet_data_hub.cli migrate-ships --backend database

    # Check overrides after editing config/mappings/ship_overrides.yml
    python -m fleet_data_hub.cli validate-overrides
"""

import argparse
import sys
from typing import List, Optional


def main(argv: Optional[List[str]] = None) -> int:
    """
    Main CLI entry point with subcommand routing.

    Args:
        argv: Command line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code (0 for success, non-zero for failure)
    """
    parser = argparse.ArgumentParser(
        prog="fleet_data_hub.cli",
        description="FleetDataHub CLI",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    subparsers = parser.add_subparsers(
        title="commands",
        dest="command",
        required=True,
        help="Command to execute",
    )
    subparsers.add_parser(
        "migrate-ships",
        help="Convert ship names in all collections to catalog ids",
        add_help=False,  # Let the delegated module handle help
    )
    subparsers.add_parser(
        "validate-overrides",
        help="Check the manual override table against the catalog",
        add_help=False,
    )

    args, remaining_args = parser.parse_known_args(argv)

    if args.command == "migrate-ships":
        from fleet_data_hub.cli.migrate_ships import main as migrate_main

        return migrate_main(remaining_args)

    elif args.command == "validate-overrides":
        from fleet_data_hub.cli.validate_overrides import main as validate_main

        return validate_main(remaining_args)

    parser.print_help()
    return 1


if __name__ == "__main__":
    sys.exit(main())
