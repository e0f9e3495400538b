"""Graph query service - lookups over functions, binaries, strings and xrefs."""

from __future__ import annotations

import logging
from typing import Any

from bxgraph.helpers.address_helper import normalize_address
from bxgraph.helpers.dto.call_path_dto import CallGraph, FunctionInfo, StringHit, Xref
from bxgraph.helpers.dto.graph_dto import Binary, Function
from bxgraph.helpers.variants_helper import binary_format_from_store, function_type_from_store
from bxgraph.persistence.db import Database

logger = logging.getLogger(__name__)


def _function_info(row: dict[str, Any]) -> FunctionInfo:
    return FunctionInfo(uid=str(row.get("uid")), name=str(row.get("name")), address=row.get("address"))


class GraphQueryService:
    """Service for pattern searches and binary-scoped graph queries.

    Binary arguments accept a hash or a filename substring. An argument that
    matches no binary yields empty results rather than an error.
    """

    def __init__(self, db: Database):
        self.db = db

    def _resolve_binary(self, binary: str | None) -> tuple[bool, str | None]:
        """Return (found, hash). (True, None) means no binary filter was requested."""
        if binary is None:
            return True, None
        doc = self.db.binaries.find_binary(binary)
        if doc is None:
            logger.info(f"[graph_query] No binary matches {binary!r}")
            return False, None
        return True, str(doc["hash"])

    def query_functions(self, pattern: str, binary: str | None = None, limit: int = 100) -> list[Function]:
        found, binary_hash = self._resolve_binary(binary)
        if not found:
            return []
        rows = self.db.functions.search_functions(pattern, binary_hash=binary_hash, limit=limit)
        return [
            Function(
                uid=str(row["uid"]),
                name=str(row.get("name")),
                type=function_type_from_store(row.get("type")),
                address=row.get("address"),
                size=row.get("size"),
            )
            for row in rows
        ]

    def query_binary_info(self, binary_name: str) -> Binary | None:
        doc = self.db.binaries.find_binary(binary_name)
        if doc is None:
            return None
        return Binary(
            hash=str(doc["hash"]),
            filename=str(doc.get("filename", "")),
            file_path=str(doc.get("file_path") or ""),
            file_size=int(doc.get("file_size") or 0),
            format=binary_format_from_store(doc.get("format")),
            arch=str(doc.get("arch") or "unknown"),
        )

    def query_callgraph_with_depth(self, function_name: str, binary: str | None, max_depth: int) -> CallGraph:
        found, binary_hash = self._resolve_binary(binary)
        if not found:
            return CallGraph()
        callees = self.db.call_paths.distinct_callees(function_name, max_depth, binary_hash=binary_hash)
        callers = self.db.call_paths.distinct_callers(function_name, max_depth, binary_hash=binary_hash)
        return CallGraph(
            callees=[_function_info(row) for row in callees],
            callers=[_function_info(row) for row in callers],
        )

    def query_xrefs(self, address: str, binary: str | None = None) -> list[Xref]:
        """CALLS edges touching the function at address (any encoding)."""
        found, binary_hash = self._resolve_binary(binary)
        if not found:
            return []
        canonical = normalize_address(address) or address
        rows = self.db.call_paths.xrefs(canonical, binary_hash=binary_hash)
        return [
            Xref(from_function=str(row["from_function"]), to_function=str(row["to_function"]), offset=str(row["offset"]))
            for row in rows
        ]

    def search_strings(self, pattern: str, binary: str | None = None, limit: int = 100) -> list[StringHit]:
        found, binary_hash = self._resolve_binary(binary)
        if not found:
            return []
        rows = self.db.strings.search_strings(pattern, binary_hash=binary_hash, limit=limit)
        return [StringHit(uid=str(r["uid"]), value=str(r["value"]), address=r.get("address")) for r in rows]
