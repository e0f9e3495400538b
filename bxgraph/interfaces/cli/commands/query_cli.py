"""
Query commands: functions, strings, binary, callgraph, xrefs, call-path.

Every command supports --format table (rich) or --format json.
"""

from __future__ import annotations

import argparse
from typing import Any

from bxgraph.helpers.serialization_helper import dumps_pretty
from bxgraph.interfaces.cli.cli_ui import InfoPanel, TableDisplay, print_error, print_warning
from bxgraph.interfaces.cli.commands import CLI_ERRORS
from bxgraph.services.infrastructure.cli_bootstrap_svc import get_call_path_service, get_graph_query_service


def _emit_json(obj: Any) -> None:
    # Plain print: JSON output must not be wrapped or highlighted
    print(dumps_pretty(obj))


def cmd_query_functions(args: argparse.Namespace) -> int:
    try:
        functions = get_graph_query_service(args.config_service).query_functions(
            args.pattern, binary=args.binary, limit=args.limit
        )
    except CLI_ERRORS as e:
        print_error(f"Query failed: {e}")
        return 1
    if args.format == "json":
        _emit_json(functions)
    elif functions:
        TableDisplay.show_functions(functions)
    else:
        print_warning(f"No functions match '{args.pattern}'")
    return 0


def cmd_query_strings(args: argparse.Namespace) -> int:
    try:
        hits = get_graph_query_service(args.config_service).search_strings(
            args.pattern, binary=args.binary, limit=args.limit
        )
    except CLI_ERRORS as e:
        print_error(f"Query failed: {e}")
        return 1
    if args.format == "json":
        _emit_json(hits)
    elif hits:
        TableDisplay.show_strings(hits)
    else:
        print_warning(f"No strings match '{args.pattern}'")
    return 0


def cmd_query_binary(args: argparse.Namespace) -> int:
    try:
        binary = get_graph_query_service(args.config_service).query_binary_info(args.binary_name)
    except CLI_ERRORS as e:
        print_error(f"Query failed: {e}")
        return 1
    if binary is None:
        if args.format == "json":
            _emit_json(None)
        else:
            print_warning(f"Binary not found: {args.binary_name}")
        return 1
    if args.format == "json":
        _emit_json(binary)
    else:
        TableDisplay.show_binary(binary)
    return 0


def cmd_query_callgraph(args: argparse.Namespace) -> int:
    try:
        graph = get_graph_query_service(args.config_service).query_callgraph_with_depth(
            args.function_name, args.binary, args.max_depth
        )
    except CLI_ERRORS as e:
        print_error(f"Query failed: {e}")
        return 1
    if args.format == "json":
        _emit_json(graph)
        return 0
    if not graph.callees and not graph.callers:
        print_warning(f"No call graph information found for function: '{args.function_name}'")
        return 0
    show_both = not args.show_callees and not args.show_callers
    TableDisplay.show_callgraph(graph, args.show_callees or show_both, args.show_callers or show_both)
    return 0


def cmd_query_xrefs(args: argparse.Namespace) -> int:
    try:
        xrefs = get_graph_query_service(args.config_service).query_xrefs(args.address, binary=args.binary)
    except CLI_ERRORS as e:
        print_error(f"Query failed: {e}")
        return 1
    if args.format == "json":
        _emit_json(xrefs)
    elif xrefs:
        TableDisplay.show_xrefs(xrefs, args.address)
    else:
        print_warning(f"No cross-references found for address: {args.address}")
    return 0


def cmd_query_call_path(args: argparse.Namespace) -> int:
    """Run the selected call-path analyses (all of them when no --show-* flag is given)."""
    name = args.function_name
    depth = args.max_depth
    show_all = not (args.show_paths or args.show_sequences or args.show_recursive or args.show_upward or args.show_context)
    output: dict[str, Any] = {"function_name": name, "max_depth": depth}

    try:
        service = get_call_path_service(args.config_service)
        if args.show_paths or show_all:
            output["call_paths"] = service.query_call_paths(name, depth)
        if args.show_sequences or show_all:
            output["call_sequences"] = service.query_call_sequences(name)
        if args.show_recursive or show_all:
            output["recursive_calls"] = service.find_recursive_calls(name)
        if args.show_upward or show_all:
            output["upward_chains"] = service.query_upward_call_chain(name, depth)
        if args.show_context or show_all:
            output["context"] = service.analyze_call_context(name, depth)
        if args.format == "json":
            output["enhanced_call_graph"] = service.query_enhanced_call_graph(name, depth)
    except CLI_ERRORS as e:
        print_error(f"Call path analysis failed: {e}")
        return 1

    if args.format == "json":
        _emit_json(output)
        return 0

    if "call_paths" in output:
        TableDisplay.show_call_paths(output["call_paths"])
    if "call_sequences" in output:
        TableDisplay.show_call_sequences(output["call_sequences"])
    if "recursive_calls" in output:
        if output["recursive_calls"]:
            TableDisplay.show_recursive_calls(output["recursive_calls"])
        else:
            InfoPanel.show("Recursion", f"No recursive calls found for '{name}'")
    if "upward_chains" in output:
        TableDisplay.show_upward_chains(output["upward_chains"])
    if "context" in output:
        TableDisplay.show_context(output["context"])
    return 0
