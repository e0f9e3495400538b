"""Functions operations for ArangoDB.

Functions are keyed by uid (see helpers/keys_helper.py). Every write is an
UPSERT on uid so that the same function reported by several payload sections,
or by a re-import, merges into one vertex.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from bxgraph.helpers.dto.graph_dto import Function
from bxgraph.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


def _function_doc(function: Function) -> dict[str, Any]:
    return {
        "uid": function.uid,
        "name": function.name,
        "type": function.type,
        "address": function.address,
        "size": function.size,
    }


class FunctionsOperations:
    """Operations for the functions collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("functions")

    def upsert_function(self, function: Function) -> str:
        """Insert or update one function by uid. Returns its _id."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                UPSERT { uid: @doc.uid }
                INSERT @doc
                UPDATE UNSET(@doc, "uid")
                IN functions
                RETURN NEW._id
                """,
                bind_vars={"doc": _function_doc(function)},
            ),
        )
        return str(next(cursor))

    def upsert_functions(self, functions: list[Function]) -> int:
        """Insert or update a chunk of functions in one round-trip.

        Args:
            functions: Functions to write, one per uid; UPSERT does not see
                documents inserted earlier in the same query, so a repeated
                uid violates the unique index

        Returns:
            Number of documents written
        """
        if not functions:
            return 0
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                FOR doc IN @docs
                    UPSERT { uid: doc.uid }
                    INSERT doc
                    UPDATE UNSET(doc, "uid")
                    IN functions
                    RETURN 1
                """,
                bind_vars={"docs": [_function_doc(f) for f in functions]},
            ),
        )
        return len(list(cursor))

    def search_functions(
        self,
        pattern: str,
        binary_hash: str | None = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """Functions whose name or uid contains pattern.

        With binary_hash, only functions keyed to that binary (internal,
        export and binary-scoped import uids) are returned.
        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                FOR f IN functions
                    FILTER CONTAINS(f.name, @pattern) OR CONTAINS(f.uid, @pattern)
                    FILTER @binary_hash == null
                        OR STARTS_WITH(f.uid, CONCAT(@binary_hash, ":"))
                        OR STARTS_WITH(f.uid, CONCAT("imp:", @binary_hash, ":"))
                    SORT f.name ASC
                    LIMIT @limit
                    RETURN { uid: f.uid, name: f.name, type: f.type, address: f.address, size: f.size }
                """,
                bind_vars=cast(
                    "dict[str, Any]",
                    {"pattern": pattern, "binary_hash": binary_hash, "limit": limit},
                ),
            ),
        )
        return list(cursor)
