"""Strings operations for ArangoDB."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from bxgraph.helpers.dto.graph_dto import StringNode
from bxgraph.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


class StringsOperations:
    """Operations for the strings collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("strings")

    def upsert_string(self, node: StringNode) -> str:
        """Insert or update a string literal by uid. Returns its _id."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                UPSERT { uid: @uid }
                INSERT { uid: @uid, value: @value, address: @address }
                UPDATE { value: @value, address: @address }
                IN strings
                RETURN NEW._id
                """,
                bind_vars=cast(
                    "dict[str, Any]",
                    {"uid": node.uid, "value": node.value, "address": node.address},
                ),
            ),
        )
        return str(next(cursor))

    def search_strings(
        self,
        pattern: str,
        binary_hash: str | None = None,
        limit: int = 100,
    ) -> list[dict[str, Any]]:
        """Strings whose value contains pattern, case-insensitive."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                FOR s IN strings
                    FILTER CONTAINS(LOWER(s.value), LOWER(@pattern))
                    FILTER @binary_hash == null OR STARTS_WITH(s.uid, CONCAT("str:", @binary_hash, ":"))
                    SORT s.value ASC
                    LIMIT @limit
                    RETURN { uid: s.uid, value: s.value, address: s.address }
                """,
                bind_vars=cast(
                    "dict[str, Any]",
                    {"pattern": pattern, "binary_hash": binary_hash, "limit": limit},
                ),
            ),
        )
        return list(cursor)
