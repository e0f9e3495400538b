"""Read-only call-graph traversals for ArangoDB.

Every query starts from the functions whose name or uid equals the given
argument (a name may match several functions across binaries). Results are
raw rows; assembly into CallPath / UpwardCallChain DTOs happens in
components/analysis/call_path_assembly_comp.py.

Traversals use ArangoDB's default path uniqueness (an edge appears at most
once per path), so cycles terminate at the hop bound.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from bxgraph.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor

_MATCH_START = "FILTER start.name == @function_name OR start.uid == @function_name"

_BINARY_SCOPE = """
FILTER @binary_hash == null
    OR STARTS_WITH(start.uid, CONCAT(@binary_hash, ":"))
    OR STARTS_WITH(start.uid, CONCAT("imp:", @binary_hash, ":"))
"""


class CallPathsOperations:
    """Traversal queries over the calls edge collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db

    def _rows(self, query: str, bind_vars: dict[str, Any]) -> list[dict[str, Any]]:
        cursor = cast("Cursor", self.db.aql.execute(query, bind_vars=bind_vars))
        return list(cursor)

    def downward_paths(self, function_name: str, max_depth: int) -> list[dict[str, Any]]:
        """Every outbound call path of 1..max_depth hops.

        Returns:
            Rows of {node_names, node_addresses, call_offsets, path_length};
            node_names[0] is the queried function
        """
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR v, e, p IN 1..@max_depth OUTBOUND start calls
                    RETURN {{
                        node_names: p.vertices[*].name,
                        node_addresses: p.vertices[*].address,
                        call_offsets: p.edges[*].offset,
                        path_length: LENGTH(p.edges)
                    }}
            """,
            {"function_name": function_name, "max_depth": max_depth},
        )

    def upward_paths(self, function_name: str, max_depth: int) -> list[dict[str, Any]]:
        """Every inbound call path of 1..max_depth hops, shortest first.

        Paths are reversed so that node_names runs from the outermost caller to
        the queried function and call_offsets[i] is the call from node i to node i+1.
        """
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR v, e, p IN 1..@max_depth INBOUND start calls
                    LET path_length = LENGTH(p.edges)
                    SORT path_length ASC
                    RETURN {{
                        node_names: REVERSE(p.vertices[*].name),
                        node_addresses: REVERSE(p.vertices[*].address),
                        call_offsets: REVERSE(p.edges[*].offset),
                        path_length: path_length
                    }}
            """,
            {"function_name": function_name, "max_depth": max_depth},
        )

    def direct_callees(self, function_name: str) -> list[dict[str, Any]]:
        """Depth-1 outbound edges as {caller, callee, call_site}. Unordered."""
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR callee, e IN 1..1 OUTBOUND start calls
                    RETURN {{ caller: start.name, callee: callee.name, call_site: e.offset }}
            """,
            {"function_name": function_name},
        )

    def direct_callers(self, function_name: str) -> list[dict[str, Any]]:
        """Depth-1 inbound edges with both endpoint names and addresses. Unordered."""
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR caller, e IN 1..1 INBOUND start calls
                    RETURN {{
                        caller_name: caller.name,
                        caller_address: caller.address,
                        callee_name: start.name,
                        callee_address: start.address,
                        call_site: e.offset
                    }}
            """,
            {"function_name": function_name},
        )

    def self_loops(self, function_name: str) -> list[dict[str, Any]]:
        """Functions that call themselves directly, as {function_name, address}."""
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR v IN 1..1 OUTBOUND start calls
                    FILTER v._id == start._id
                    RETURN {{ function_name: start.name, address: start.address }}
            """,
            {"function_name": function_name},
        )

    def cycles(self, function_name: str, min_depth: int, max_depth: int) -> list[dict[str, Any]]:
        """Call cycles of min_depth..max_depth hops that return to the start function."""
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR v, e, p IN @min_depth..@max_depth OUTBOUND start calls
                    FILTER v._id == start._id
                    RETURN {{
                        function_name: start.name,
                        address: start.address,
                        depth: LENGTH(p.edges),
                        path_nodes: p.vertices[*].name
                    }}
            """,
            {"function_name": function_name, "min_depth": min_depth, "max_depth": max_depth},
        )

    def distinct_callees(
        self,
        function_name: str,
        max_depth: int,
        binary_hash: str | None = None,
    ) -> list[dict[str, Any]]:
        """Distinct functions reachable within max_depth hops, as {uid, name, address}."""
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                {_BINARY_SCOPE}
                FOR callee IN 1..@max_depth OUTBOUND start calls
                    RETURN DISTINCT {{ uid: callee.uid, name: callee.name, address: callee.address }}
            """,
            {"function_name": function_name, "max_depth": max_depth, "binary_hash": binary_hash},
        )

    def distinct_callers(
        self,
        function_name: str,
        max_depth: int,
        binary_hash: str | None = None,
    ) -> list[dict[str, Any]]:
        """Distinct functions that reach the start within max_depth hops."""
        return self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                {_BINARY_SCOPE}
                FOR caller IN 1..@max_depth INBOUND start calls
                    RETURN DISTINCT {{ uid: caller.uid, name: caller.name, address: caller.address }}
            """,
            {"function_name": function_name, "max_depth": max_depth, "binary_hash": binary_hash},
        )

    def callee_frequencies(self, function_name: str) -> dict[str, int]:
        """Count of direct CALLS edges per callee name."""
        rows = self._rows(
            f"""
            FOR start IN functions
                {_MATCH_START}
                FOR callee IN 1..1 OUTBOUND start calls
                    COLLECT callee_name = callee.name WITH COUNT INTO frequency
                    RETURN {{ callee_name: callee_name, frequency: frequency }}
            """,
            {"function_name": function_name},
        )
        return {str(row["callee_name"]): int(row["frequency"]) for row in rows}

    def xrefs(self, address: str, binary_hash: str | None = None) -> list[dict[str, Any]]:
        """CALLS edges where either endpoint sits at the given canonical address."""
        return self._rows(
            """
            FOR e IN calls
                LET caller = DOCUMENT(e._from)
                LET callee = DOCUMENT(e._to)
                FILTER caller.address == @address OR callee.address == @address
                FILTER @binary_hash == null
                    OR STARTS_WITH(caller.uid, CONCAT(@binary_hash, ":"))
                    OR STARTS_WITH(callee.uid, CONCAT(@binary_hash, ":"))
                    OR STARTS_WITH(caller.uid, CONCAT("imp:", @binary_hash, ":"))
                    OR STARTS_WITH(callee.uid, CONCAT("imp:", @binary_hash, ":"))
                SORT e.offset ASC
                RETURN { from_function: caller.name, to_function: callee.name, offset: e.offset }
            """,
            {"address": address, "binary_hash": binary_hash},
        )
