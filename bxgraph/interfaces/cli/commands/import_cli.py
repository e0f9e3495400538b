"""
Import commands: `bxg import json FILE` and `bxg import directory DIR`.
"""

from __future__ import annotations

import argparse

from bxgraph.components.importing.payload_loader_comp import load_payload
from bxgraph.interfaces.cli.cli_ui import (
    InfoPanel,
    TableDisplay,
    format_statistics,
    print_error,
    print_error_list,
    print_info,
    print_success,
    print_warning,
    show_spinner,
)
from bxgraph.interfaces.cli.commands import CLI_ERRORS
from bxgraph.services.infrastructure.cli_bootstrap_svc import get_import_service
from bxgraph.services.infrastructure.config_svc import INTERNAL_ERROR_DISPLAY_LIMIT


def cmd_import_json(args: argparse.Namespace) -> int:
    """Validate (unless --no-validate) and import one payload file."""
    try:
        service = get_import_service(args.config_service)
        if args.batch_size:
            service.batch_size = args.batch_size

        print_info(f"Importing file: {args.file_path}")
        data = load_payload(args.file_path)

        if not args.no_validate:
            validation = service.validate_data(data)
            if not validation.valid:
                print_error("Validation failed:")
                for error in validation.errors:
                    print_error(f"  {error}")
                return 1
            for warning in validation.warnings:
                print_warning(warning)
            print_success("Validation passed")

        result = show_spinner("Importing data...", service.import_from_json, data)
    except CLI_ERRORS as e:
        print_error(f"Import failed: {e}")
        return 1

    title = "Import completed successfully" if result.success else "Import completed with errors"
    InfoPanel.show(title, format_statistics(result.statistics), "green" if result.success else "yellow")
    if result.skipped_calls:
        print_warning(f"Skipped {result.skipped_calls} call relationships due to unresolved addresses")
    print_error_list(result.errors, INTERNAL_ERROR_DISPLAY_LIMIT)
    return 0 if result.success else 1


def cmd_import_directory(args: argparse.Namespace) -> int:
    """Import every matching file of a directory; Ctrl-C stops between files."""
    print_info(f"Importing directory: {args.dir_path} (pattern: {args.pattern}, batch size: {args.batch_size})")

    def progress(done: int, total: int, path: str) -> None:
        print_info(f"[{done + 1}/{total}] Importing {path}...")

    try:
        service = get_import_service(args.config_service)
        result = service.import_directory(
            args.dir_path,
            pattern=args.pattern,
            batch_size=args.batch_size,
            validate=not args.no_validate,
            progress_callback=progress,
        )
    except (FileNotFoundError, *CLI_ERRORS) as e:
        print_error(f"Directory import failed: {e}")
        return 1

    if result.files_total == 0:
        print_warning(f"No files found matching pattern: {args.pattern}")
        return 0

    TableDisplay.show_directory_summary(result)
    print_error_list(result.errors, INTERNAL_ERROR_DISPLAY_LIMIT)
    return 0 if result.files_succeeded == result.files_total and not result.cancelled else 1
