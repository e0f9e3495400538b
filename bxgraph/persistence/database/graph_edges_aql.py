"""Edge operations for the binary knowledge graph.

All four relationship kinds are upserted by endpoint pair (unique index on
[_from, _to]), so re-running an import never duplicates edges. Endpoints are
looked up by their entity keys; an edge whose endpoint does not exist is not
created and the method returns False.

    contains    binaries  -> functions   (internal functions of a binary)
    imports     binaries  -> libraries
    belongs_to  functions -> libraries   (import functions)
    calls       functions -> functions   (offset, call_type)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, cast

from bxgraph.helpers.dto.graph_dto import Calls
from bxgraph.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor

logger = logging.getLogger(__name__)

_BINARY_BY_HASH = "FIRST(FOR b IN binaries FILTER b.hash == @binary_hash LIMIT 1 RETURN b._id)"
_FUNCTION_BY_UID = "FIRST(FOR f IN functions FILTER f.uid == @{var} LIMIT 1 RETURN f._id)"
_LIBRARY_BY_NAME = "FIRST(FOR l IN libraries FILTER l.name == @library_name LIMIT 1 RETURN l._id)"


class GraphEdgesOperations:
    """Operations for the contains, imports, belongs_to and calls edge collections."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db

    def _upsert_edge(
        self,
        collection: str,
        from_expr: str,
        to_expr: str,
        bind_vars: dict[str, Any],
        props: dict[str, Any] | None = None,
    ) -> bool:
        query = f"""
        LET from_id = {from_expr}
        LET to_id = {to_expr}
        FILTER from_id != null AND to_id != null
        UPSERT {{ _from: from_id, _to: to_id }}
        INSERT MERGE({{ _from: from_id, _to: to_id }}, @props)
        UPDATE @props
        IN {collection}
        RETURN NEW._id
        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(query, bind_vars={**bind_vars, "props": props or {}}),
        )
        created = next(cursor, None) is not None
        if not created:
            logger.debug(f"[graph_edges] {collection} edge skipped, endpoint missing: {bind_vars}")
        return created

    def create_contains(self, binary_hash: str, function_uid: str) -> bool:
        return self._upsert_edge(
            "contains",
            _BINARY_BY_HASH,
            _FUNCTION_BY_UID.format(var="function_uid"),
            {"binary_hash": binary_hash, "function_uid": function_uid},
        )

    def create_imports(self, binary_hash: str, library_name: str) -> bool:
        return self._upsert_edge(
            "imports",
            _BINARY_BY_HASH,
            _LIBRARY_BY_NAME,
            {"binary_hash": binary_hash, "library_name": library_name.lower()},
        )

    def create_belongs_to(self, function_uid: str, library_name: str) -> bool:
        return self._upsert_edge(
            "belongs_to",
            _FUNCTION_BY_UID.format(var="function_uid"),
            _LIBRARY_BY_NAME,
            {"function_uid": function_uid, "library_name": library_name.lower()},
        )

    def create_calls(self, from_uid: str, to_uid: str, calls: Calls) -> bool:
        """Upsert a CALLS edge; offset and call_type are overwritten on re-import."""
        return self._upsert_edge(
            "calls",
            _FUNCTION_BY_UID.format(var="from_uid"),
            _FUNCTION_BY_UID.format(var="to_uid"),
            {"from_uid": from_uid, "to_uid": to_uid},
            {"offset": calls.offset, "call_type": calls.call_type},
        )
