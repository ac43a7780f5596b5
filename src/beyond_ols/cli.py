"""
Command-line interface for the application.

This module provides the main entry point for the CLI.
"""

from __future__ import annotations

import argparse
import sys
from typing import TYPE_CHECKING

import requests
from pydantic import ValidationError

from beyond_ols import __version__
from beyond_ols.config import get_settings
from beyond_ols.datasources.equality import EQUALITY_INPUT
from beyond_ols.datasources.immunization import COVERAGE_INPUT
from beyond_ols.datasources.worldbank import WorldBankError
from beyond_ols.flows.prepare import EQUALITY_PATH, TETANUS_PAB_PATH, WDI_PATH, prepare_all
from beyond_ols.store import DataStore

if TYPE_CHECKING:
    from beyond_ols.config import Settings

SNAPSHOTS = {
    "equality": EQUALITY_PATH,
    "tetanus_pab": TETANUS_PAB_PATH,
    "wdi": WDI_PATH,
}


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="beyond-ols",
        description="Prepare the datasets for the 'Move beyond OLS!' regression examples",
    )
    parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Enable debug mode",
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # 'prepare' command - build the snapshots
    prepare_parser = subparsers.add_parser("prepare", help="Build the dataset snapshots")
    prepare_parser.add_argument(
        "--start-year",
        type=int,
        default=None,
        help="First indicator year (default: start_year from settings)",
    )
    prepare_parser.add_argument(
        "--end-year",
        type=int,
        default=None,
        help="Last indicator year (default: end_year from settings)",
    )

    subparsers.add_parser("info", help="Show application info")
    subparsers.add_parser("show", help="Summarize existing snapshots")

    return parser


def _load_settings() -> Settings | None:
    """Read settings, reporting invalid environment values instead of raising."""
    try:
        return get_settings()
    except ValidationError as e:
        print(f"Error: invalid settings: {e}", file=sys.stderr)
        return None


def cmd_prepare(args: argparse.Namespace) -> int:
    """Handle the 'prepare' command."""
    settings = _load_settings()
    if settings is None:
        return 1
    if args.debug:
        print(f"Debug mode enabled. Settings: {settings}")

    start_year = args.start_year if args.start_year is not None else settings.start_year
    end_year = args.end_year if args.end_year is not None else settings.end_year

    try:
        result = prepare_all(
            data_dir=settings.data_dir,
            coverage_csv=settings.coverage_csv,
            start_year=start_year,
            end_year=end_year,
            equality_csv=settings.equality_csv,
            excluded_state=settings.excluded_state,
        )
    except (
        FileNotFoundError,
        ValueError,
        ValidationError,
        WorldBankError,
        requests.RequestException,
    ) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(
        f"Success: {result['equality_rows']} states, "
        f"{result['tetanus_pab_rows']} country-years "
        f"({result['unmatched_countries']} unmatched country names)"
    )
    return 0


def cmd_info(_args: argparse.Namespace) -> int:
    """Handle the 'info' command."""
    settings = _load_settings()
    if settings is None:
        return 1
    reference = DataStore(settings.data_dir).reference
    print(f"Application: {settings.app_name}")
    print(f"Version: {__version__}")
    print(f"Environment: {settings.app_env}")
    print(f"Debug: {settings.debug}")
    print(f"Data dir: {settings.data_dir}")
    print(f"Coverage file: {settings.coverage_csv or reference / COVERAGE_INPUT}")
    print(f"Equality file: {settings.equality_csv or reference / EQUALITY_INPUT}")
    print(f"Years: {settings.start_year}-{settings.end_year}")
    return 0


def cmd_show(_args: argparse.Namespace) -> int:
    """Handle the 'show' command: row counts and metadata of each snapshot."""
    settings = _load_settings()
    if settings is None:
        return 1
    store = DataStore(settings.data_dir)
    missing = 0
    for name, path in SNAPSHOTS.items():
        frame = store.read_frame(path)
        if frame is None:
            print(f"{name}: missing ({store.base / path})")
            missing += 1
            continue
        meta = store.read_meta(path)
        fetched = meta.get("fetched_at", "unknown")
        print(f"{name}: {len(frame)} rows, {len(frame.columns)} columns (written {fetched})")

    if missing:
        print("Run 'beyond-ols prepare' to build missing snapshots.", file=sys.stderr)
        return 1
    return 0


def main() -> int:
    """Main entry point for the CLI."""
    parser = create_parser()
    args = parser.parse_args()

    if args.command is None:
        parser.print_help()
        return 0

    commands = {
        "prepare": cmd_prepare,
        "info": cmd_info,
        "show": cmd_show,
    }

    handler = commands.get(args.command)
    if handler:
        return handler(args)
    else:
        parser.print_help()
        return 1


if __name__ == "__main__":
    sys.exit(main())
