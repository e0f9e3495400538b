#!/usr/bin/env python3
"""
Main CLI entry point with argument parser and command dispatch.
"""

from __future__ import annotations

import argparse

from bxgraph.helpers.exceptions import ConfigError
from bxgraph.helpers.logging_helper import configure_logging
from bxgraph.interfaces.cli.cli_ui import print_error
from bxgraph.interfaces.cli.commands.database_cli import (
    cmd_database_clear,
    cmd_database_export,
    cmd_database_init,
    cmd_database_stats,
)
from bxgraph.interfaces.cli.commands.import_cli import cmd_import_directory, cmd_import_json
from bxgraph.interfaces.cli.commands.query_cli import (
    cmd_query_binary,
    cmd_query_call_path,
    cmd_query_callgraph,
    cmd_query_functions,
    cmd_query_strings,
    cmd_query_xrefs,
)
from bxgraph.services.infrastructure.cli_bootstrap_svc import get_config_service
from bxgraph.services.infrastructure.config_svc import (
    INTERNAL_DEFAULT_FILE_PATTERN,
    INTERNAL_DEFAULT_MAX_DEPTH,
    INTERNAL_DIRECTORY_BATCH_SIZE,
)


def _add_format(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--format", choices=("table", "json"), default="table", help="output format (default: table)")


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""
    p = argparse.ArgumentParser(
        prog="bxg",
        description="bxgraph - Binary analysis knowledge graph on ArangoDB",
        epilog="Examples:\n"
        "  bxg database init                          # Create collections and indexes\n"
        "  bxg import json sample.json                # Import one analysis payload\n"
        "  bxg import directory ./exports             # Import every *.json file\n"
        "  bxg query functions --pattern main         # Find functions by name\n"
        "  bxg query call-path main --show-paths      # Call paths from main",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    p.add_argument("--config", help="path to a YAML config file")
    p.add_argument("--log-level", help="override log level (DEBUG, INFO, WARNING, ...)")

    sub = p.add_subparsers(
        dest="cmd",
        title="commands",
        description="Available commands (use 'bxg <command> --help' for command-specific help)",
    )

    # import: Load analysis payloads
    s = sub.add_parser("import", help="Import binary analysis payloads")
    import_sub = s.add_subparsers(dest="import_cmd", title="import commands", required=True)

    ps = import_sub.add_parser("json", help="Import a single JSON payload file")
    ps.add_argument("file_path", help="payload file")
    ps.add_argument("--batch-size", type=int, help="functions written per round-trip")
    ps.add_argument("--no-validate", action="store_true", help="skip structural validation")
    ps.set_defaults(func=cmd_import_json)

    ps = import_sub.add_parser("directory", help="Import all matching payload files in a directory")
    ps.add_argument("dir_path", help="directory to scan (not recursive)")
    ps.add_argument("--pattern", default=INTERNAL_DEFAULT_FILE_PATTERN, help="filename pattern (default: *.json)")
    ps.add_argument(
        "--batch-size", type=int, default=INTERNAL_DIRECTORY_BATCH_SIZE, help="files per progress group (default: 10)"
    )
    ps.add_argument("--no-validate", action="store_true", help="skip structural validation")
    ps.set_defaults(func=cmd_import_directory)

    # query: Read the graph
    s = sub.add_parser("query", help="Query functions, strings, call graphs and cross-references")
    query_sub = s.add_subparsers(dest="query_cmd", title="query commands", required=True)

    ps = query_sub.add_parser("functions", help="Search functions by name or uid")
    ps.add_argument("--pattern", default="", help="substring of name or uid (default: all)")
    ps.add_argument("--binary", help="restrict to a binary (hash or filename)")
    ps.add_argument("--limit", type=int, default=100)
    _add_format(ps)
    ps.set_defaults(func=cmd_query_functions)

    ps = query_sub.add_parser("strings", help="Search string literals (case-insensitive)")
    ps.add_argument("--pattern", default="", help="substring, case-insensitive (default: all)")
    ps.add_argument("--binary", help="restrict to a binary (hash or filename)")
    ps.add_argument("--limit", type=int, default=100)
    _add_format(ps)
    ps.set_defaults(func=cmd_query_strings)

    ps = query_sub.add_parser("binary", help="Show a binary's metadata")
    ps.add_argument("--binary-name", required=True, help="SHA-256 or part of the filename")
    _add_format(ps)
    ps.set_defaults(func=cmd_query_binary)

    ps = query_sub.add_parser("callgraph", help="Show callers and callees of a function")
    ps.add_argument("function_name")
    ps.add_argument("--binary", help="restrict to a binary (hash or filename)")
    ps.add_argument("--max-depth", type=int, default=1, help="traversal depth (default: 1)")
    ps.add_argument("--show-callees", action="store_true")
    ps.add_argument("--show-callers", action="store_true")
    _add_format(ps)
    ps.set_defaults(func=cmd_query_callgraph)

    ps = query_sub.add_parser("xrefs", help="Show call edges to or from an address")
    ps.add_argument("address")
    ps.add_argument("--binary", help="restrict to a binary (hash or filename)")
    _add_format(ps)
    ps.set_defaults(func=cmd_query_xrefs)

    ps = query_sub.add_parser("call-path", help="Analyze call paths, sequences, recursion and context")
    ps.add_argument("function_name")
    ps.add_argument(
        "--max-depth", type=int, default=INTERNAL_DEFAULT_MAX_DEPTH, help="traversal depth (default: 5)"
    )
    ps.add_argument("--show-paths", action="store_true")
    ps.add_argument("--show-sequences", action="store_true")
    ps.add_argument("--show-recursive", action="store_true")
    ps.add_argument("--show-upward", action="store_true")
    ps.add_argument("--show-context", action="store_true")
    _add_format(ps)
    ps.set_defaults(func=cmd_query_call_path)

    # database: Administration
    s = sub.add_parser("database", help="Database administration")
    db_sub = s.add_subparsers(dest="database_cmd", title="database commands", required=True)

    ps = db_sub.add_parser("init", help="Verify connectivity and create collections and indexes")
    ps.set_defaults(func=cmd_database_init)

    ps = db_sub.add_parser("clear", help="Delete ALL data")
    ps.add_argument("--confirm", action="store_true", help="skip the confirmation prompt")
    ps.set_defaults(func=cmd_database_clear)

    ps = db_sub.add_parser("stats", help="Show node and relationship counts")
    ps.set_defaults(func=cmd_database_stats)

    ps = db_sub.add_parser("export", help="Export the graph to a file")
    ps.add_argument("output_path")
    ps.add_argument("--format", default="json", help="export format (only json is supported)")
    ps.set_defaults(func=cmd_database_export)

    return p


def main(argv: list[str] | None = None) -> int:
    """Main entry point for CLI."""
    parser = build_parser()
    args = parser.parse_args(argv)

    # If no command provided, show help
    if args.cmd is None:
        parser.print_help()
        return 0

    try:
        config_service = get_config_service(args.config)
    except ConfigError as e:
        print_error(f"Configuration error: {e}")
        return 1

    configure_logging(args.log_level or config_service.get("log_level", "INFO"))
    args.config_service = config_service

    result: int = args.func(args)
    return result


if __name__ == "__main__":
    raise SystemExit(main())
