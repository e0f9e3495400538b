#!/usr/bin/env python3
"""
Rich UI components for CLI - consistent interface across all commands.
"""

from __future__ import annotations

from collections.abc import Callable

from rich import box
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table

from bxgraph.helpers.dto.call_path_dto import (
    CallContextAnalysis,
    CallerSequence,
    CallGraph,
    CallPath,
    CallSequence,
    FunctionInfo,
    RecursiveCall,
    StringHit,
    UpwardCallChain,
    Xref,
)
from bxgraph.helpers.dto.graph_dto import Binary, Function
from bxgraph.helpers.dto.import_dto import DatabaseStats, DirectoryImportResult, ImportStatistics

console = Console()

# Color scheme constants
COLOR_SUCCESS = "green"
COLOR_ERROR = "red"
COLOR_WARNING = "yellow"
COLOR_INFO = "cyan"


class InfoPanel:
    """
    Simple panel for displaying status/info.
    """

    @staticmethod
    def show(title: str, content: str, border_style: str = COLOR_INFO):
        panel = Panel(content, title=f"[bold]{title}[/bold]", border_style=border_style, box=box.ROUNDED)
        console.print(panel)


def show_spinner(message: str, task_fn: Callable, *args, **kwargs):
    """
    Show a spinner while executing a task.
    Returns the result of task_fn.
    """
    with console.status(f"[bold {COLOR_INFO}]{message}[/bold {COLOR_INFO}]"):
        return task_fn(*args, **kwargs)


def print_success(message: str):
    console.print(f"[bold {COLOR_SUCCESS}]✓[/bold {COLOR_SUCCESS}] {message}")


def print_error(message: str):
    console.print(f"[bold {COLOR_ERROR}]✗[/bold {COLOR_ERROR}] {message}")


def print_warning(message: str):
    console.print(f"[bold {COLOR_WARNING}]⚠[/bold {COLOR_WARNING}] {message}")


def print_info(message: str):
    console.print(f"[{COLOR_INFO}]ℹ[/{COLOR_INFO}] {message}")


def format_statistics(stats: ImportStatistics) -> str:
    return (
        f"[bold]Binaries:[/bold] {stats.binaries}\n"
        f"[bold]Functions:[/bold] {stats.functions}\n"
        f"[bold]Strings:[/bold] {stats.strings}\n"
        f"[bold]Libraries:[/bold] {stats.libraries}\n"
        f"[bold]Call relationships:[/bold] {stats.calls_relationships}\n"
        f"[bold]Total nodes:[/bold] {stats.total_nodes}"
    )


def print_error_list(errors: list[str], limit: int = 10):
    """Print the first `limit` errors and a count of the rest."""
    if not errors:
        return
    console.print(f"\n[bold {COLOR_ERROR}]Errors encountered ({len(errors)}):[/bold {COLOR_ERROR}]")
    for error in errors[:limit]:
        console.print(f"  - {error}", markup=False, highlight=False)
    if len(errors) > limit:
        console.print(f"  ... and {len(errors) - limit} more errors")


class TableDisplay:
    """
    Formatted tables for query results.
    """

    @staticmethod
    def _table(title: str, *columns: str) -> Table:
        table = Table(title=title, box=box.ROUNDED, show_header=True, header_style="bold")
        for column in columns:
            table.add_column(column, overflow="fold")
        return table

    @staticmethod
    def show_directory_summary(result: DirectoryImportResult):
        status = "cancelled" if result.cancelled else "completed"
        content = (
            f"[bold]Files processed:[/bold] {result.files_succeeded}/{result.files_total}\n\n"
            + format_statistics(result.statistics)
        )
        style = COLOR_SUCCESS if result.files_succeeded == result.files_total else COLOR_WARNING
        InfoPanel.show(f"Directory import {status}", content, style)

    @staticmethod
    def show_functions(functions: list[Function]):
        table = TableDisplay._table(f"Functions ({len(functions)})", "Name", "Address", "Type", "Size", "UID")
        for f in functions:
            table.add_row(f.name, f.address or "N/A", f.type.value, str(f.size) if f.size is not None else "", f.uid)
        console.print(table)

    @staticmethod
    def show_strings(hits: list[StringHit]):
        table = TableDisplay._table(f"Strings ({len(hits)})", "Value", "Address", "UID")
        for hit in hits:
            table.add_row(escape(hit.value), hit.address or "N/A", hit.uid)
        console.print(table)

    @staticmethod
    def show_binary(binary: Binary):
        content = (
            f"[bold]Filename:[/bold] {binary.filename}\n"
            f"[bold]Hash:[/bold] {binary.hash}\n"
            f"[bold]Path:[/bold] {binary.file_path}\n"
            f"[bold]Size:[/bold] {binary.file_size} bytes\n"
            f"[bold]Format:[/bold] {binary.format.value}\n"
            f"[bold]Architecture:[/bold] {binary.arch}"
        )
        InfoPanel.show("Binary Information", content)

    @staticmethod
    def _show_function_infos(title: str, infos: list[FunctionInfo]):
        table = TableDisplay._table(f"{title} ({len(infos)})", "Name", "Address", "UID")
        for info in infos:
            table.add_row(info.name, info.address or "N/A", info.uid)
        console.print(table)

    @staticmethod
    def show_callgraph(graph: CallGraph, show_callees: bool, show_callers: bool):
        if show_callees:
            TableDisplay._show_function_infos("Callees", graph.callees)
        if show_callers:
            TableDisplay._show_function_infos("Callers", graph.callers)

    @staticmethod
    def show_xrefs(xrefs: list[Xref], address: str):
        table = TableDisplay._table(f"Cross-references for {address} ({len(xrefs)})", "From", "To", "Offset")
        for x in xrefs:
            table.add_row(x.from_function, x.to_function, x.offset)
        console.print(table)

    @staticmethod
    def show_call_paths(paths: list[CallPath]):
        table = TableDisplay._table(f"Call paths ({len(paths)})", "Path", "Length", "Chain")
        for path in paths:
            chain = " -> ".join(
                f"{n.name}@{n.call_site}" if n.call_site else f"{n.name} ({n.address})" for n in path.nodes
            )
            table.add_row(path.id, str(path.length), chain)
        console.print(table)

    @staticmethod
    def show_call_sequences(sequences: list[CallSequence]):
        table = TableDisplay._table(f"Call sequence ({len(sequences)})", "#", "Caller", "Callee", "Call site")
        for seq in sequences:
            table.add_row(str(seq.order), seq.caller, seq.callee, seq.call_site)
        console.print(table)

    @staticmethod
    def show_recursive_calls(calls: list[RecursiveCall]):
        table = TableDisplay._table(f"Recursive calls ({len(calls)})", "Function", "Type", "Depth")
        for call in calls:
            table.add_row(call.function_name, call.call_type.value, str(call.depth))
        console.print(table)

    @staticmethod
    def show_upward_chains(chains: list[UpwardCallChain]):
        table = TableDisplay._table(f"Upward call chains ({len(chains)})", "Chain", "Length", "Callers")
        for chain in chains:
            callers = " -> ".join(f"{n.name}@{n.call_site}" if n.call_site else n.name for n in chain.nodes)
            table.add_row(chain.id, str(chain.length), callers)
        console.print(table)

    @staticmethod
    def show_caller_sequences(sequences: list[CallerSequence]):
        table = TableDisplay._table(f"Callers ({len(sequences)})", "#", "Caller", "Caller address", "Call site")
        for seq in sequences:
            table.add_row(str(seq.order), seq.caller_name, seq.caller_address, seq.call_site)
        console.print(table)

    @staticmethod
    def show_context(analysis: CallContextAnalysis):
        InfoPanel.show(f"Call context: {analysis.function_name}", "\n".join(analysis.context_insights))
        TableDisplay.show_upward_chains(analysis.upward_chains)
        TableDisplay.show_call_paths(analysis.downward_paths)
        TableDisplay.show_caller_sequences(analysis.caller_sequences)

    @staticmethod
    def show_database_stats(stats: DatabaseStats, import_stats: ImportStatistics):
        labels = "\n".join(f"[bold]{label}:[/bold] {count}" for label, count in stats.label_counts.items())
        content = (
            f"[bold]Total nodes:[/bold] {stats.node_count}\n"
            f"[bold]Total relationships:[/bold] {stats.relationship_count}\n\n"
            f"{labels}\n\n[bold]Call relationships:[/bold] {import_stats.calls_relationships}"
        )
        InfoPanel.show("Database Statistics", content)
