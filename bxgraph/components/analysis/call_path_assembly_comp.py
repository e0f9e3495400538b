"""Call path assembly component.

Turns raw traversal rows from persistence/database/call_paths_aql.py into
call-path DTOs. Pure functions, no store access.

When a traversal finds nothing, path/chain builders return one synthetic
single-node result for the queried function so callers always have an entry
point to render.
"""

from __future__ import annotations

from typing import Any

from bxgraph.helpers.address_helper import address_sort_key
from bxgraph.helpers.dto.call_path_dto import (
    CallerSequence,
    CallPath,
    CallPathNode,
    CallSequence,
    RecursiveCall,
    RecursiveCallType,
    UpwardCallChain,
    UpwardCallNode,
)

MISSING_ADDRESS = "N/A"
PLACEHOLDER_ADDRESS = "0x1000"


def _address_at(addresses: list[Any], i: int) -> str:
    value = addresses[i] if i < len(addresses) else None
    return str(value) if value is not None else MISSING_ADDRESS


def _offset_at(offsets: list[Any], i: int) -> str | None:
    if 0 <= i < len(offsets) and offsets[i] is not None:
        return str(offsets[i])
    return None


def build_call_paths(rows: list[dict[str, Any]], function_name: str) -> list[CallPath]:
    """Build downward CallPaths; node i's call_site is the offset of the edge into it."""
    paths: list[CallPath] = []
    for row in rows:
        names = row.get("node_names") or []
        if not names:
            continue
        addresses = row.get("node_addresses") or []
        offsets = row.get("call_offsets") or []
        path = CallPath(id=f"path_{len(paths) + 1}")
        for i, name in enumerate(names):
            path.add_node(
                CallPathNode(
                    id=f"{name}_{i}",
                    name=str(name),
                    address=_address_at(addresses, i),
                    depth=i,
                    call_site=_offset_at(offsets, i - 1) if i > 0 else None,
                    call_type="Direct",
                )
            )
        paths.append(path)

    if not paths:
        path = CallPath(id="single_path")
        path.add_node(
            CallPathNode(
                id="single_node",
                name=function_name,
                address=PLACEHOLDER_ADDRESS,
                depth=0,
                call_site=None,
                call_type="Entry",
            )
        )
        paths.append(path)
    return paths


def build_upward_chains(rows: list[dict[str, Any]], function_name: str) -> list[UpwardCallChain]:
    """Build UpwardCallChains from caller-first rows.

    Node i's call_site is the offset of its call toward node i+1; the target
    (last node) has none.
    """
    chains: list[UpwardCallChain] = []
    for row in rows:
        names = row.get("node_names") or []
        if not names:
            continue
        addresses = row.get("node_addresses") or []
        offsets = row.get("call_offsets") or []
        chain = UpwardCallChain(id=f"upward_chain_{len(chains) + 1}")
        last = len(names) - 1
        for i, name in enumerate(names):
            chain.add_node(
                UpwardCallNode(
                    id=f"{name}_{i}",
                    name=str(name),
                    address=_address_at(addresses, i),
                    depth=i,
                    call_site=_offset_at(offsets, i) if i < last else None,
                    call_type="Upward",
                )
            )
        chains.append(chain)

    if not chains:
        chain = UpwardCallChain(id="single_upward_chain")
        chain.add_node(
            UpwardCallNode(
                id="single_node",
                name=function_name,
                address=PLACEHOLDER_ADDRESS,
                depth=0,
                call_site=None,
                call_type="Root",
            )
        )
        chains.append(chain)
    return chains


def build_call_sequences(rows: list[dict[str, Any]]) -> list[CallSequence]:
    """Number direct calls 1..n in call-site order (numeric where offsets parse)."""
    ordered = sorted(rows, key=lambda r: address_sort_key(r.get("call_site")))
    return [
        CallSequence(
            id=f"seq_{order}",
            caller=str(row.get("caller")),
            callee=str(row.get("callee")),
            order=order,
            call_site=str(row.get("call_site")),
        )
        for order, row in enumerate(ordered, start=1)
    ]


def build_caller_sequences(rows: list[dict[str, Any]]) -> list[CallerSequence]:
    ordered = sorted(rows, key=lambda r: address_sort_key(r.get("call_site")))
    return [
        CallerSequence(
            id=f"caller_seq_{order}",
            caller_name=str(row.get("caller_name")),
            caller_address=str(row.get("caller_address") or MISSING_ADDRESS),
            callee_name=str(row.get("callee_name")),
            callee_address=str(row.get("callee_address") or MISSING_ADDRESS),
            order=order,
            call_site=str(row.get("call_site")),
        )
        for order, row in enumerate(ordered, start=1)
    ]


def build_recursive_calls(
    self_loop_rows: list[dict[str, Any]],
    cycle_rows: list[dict[str, Any]],
) -> list[RecursiveCall]:
    """Direct self-calls first (depth 1), then longer cycles. Not deduplicated."""
    calls = [
        RecursiveCall(function_name=str(row["function_name"]), call_type=RecursiveCallType.DIRECT, depth=1)
        for row in self_loop_rows
    ]
    calls.extend(
        RecursiveCall(
            function_name=str(row["function_name"]),
            call_type=RecursiveCallType.INDIRECT,
            depth=int(row["depth"]),
        )
        for row in cycle_rows
    )
    return calls


def build_context_insights(
    function_name: str,
    upward_chains: list[UpwardCallChain],
    downward_paths: list[CallPath],
    caller_sequences: list[CallerSequence],
) -> list[str]:
    insights = [
        f"Function '{function_name}' has {len(upward_chains)} upward call chains "
        f"and {len(downward_paths)} downward call paths"
    ]
    if caller_sequences:
        distinct_callers = {seq.caller_name for seq in caller_sequences}
        insights.append(f"Function is called by {len(distinct_callers)} different callers")
    return insights
