"""
Database commands: init, clear, stats, export.
"""

from __future__ import annotations

import argparse

from rich.prompt import Confirm

from bxgraph.interfaces.cli.cli_ui import TableDisplay, print_error, print_info, print_success, print_warning
from bxgraph.interfaces.cli.commands import CLI_ERRORS
from bxgraph.services.infrastructure.cli_bootstrap_svc import get_database_admin_service, get_import_service


def cmd_database_init(args: argparse.Namespace) -> int:
    """Check connectivity and create missing collections and indexes."""
    try:
        info = get_database_admin_service(args.config_service).initialize()
    except CLI_ERRORS as e:
        print_error(f"Database initialization failed: {e}")
        return 1
    print_success(f"Schema initialized in '{info.get('database')}' (ArangoDB {info.get('version')})")
    return 0


def cmd_database_clear(args: argparse.Namespace) -> int:
    if not args.confirm and not Confirm.ask(
        "This will delete ALL data in the database. Are you sure?", default=False
    ):
        print_warning("Operation cancelled")
        return 0
    try:
        get_database_admin_service(args.config_service).clear()
    except CLI_ERRORS as e:
        print_error(f"Clear failed: {e}")
        return 1
    print_success("Database cleared successfully")
    return 0


def cmd_database_stats(args: argparse.Namespace) -> int:
    try:
        service = get_import_service(args.config_service)
        stats = service.get_database_stats()
        import_stats = service.get_import_statistics()
    except CLI_ERRORS as e:
        print_error(f"Could not read statistics: {e}")
        return 1
    TableDisplay.show_database_stats(stats, import_stats)
    return 0


def cmd_database_export(args: argparse.Namespace) -> int:
    if args.format != "json":
        print_error(f"Unsupported export format: {args.format}")
        return 1
    print_info(f"Exporting database to {args.output_path} (format: {args.format})")
    try:
        rows = get_import_service(args.config_service).export_to_json(args.output_path)
    except CLI_ERRORS as e:
        print_error(f"Export failed: {e}")
        return 1
    print_success(f"Database exported to JSON: {args.output_path} ({rows} rows)")
    return 0
