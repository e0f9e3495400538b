"""Store-wide counts and export for ArangoDB."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from bxgraph.persistence.arango_client import DatabaseLike
from bxgraph.persistence.schema import EDGE_COLLECTIONS, VERTEX_COLLECTIONS

if TYPE_CHECKING:
    from arango.cursor import Cursor


class StatsOperations:
    """Aggregate queries across every bxgraph collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db

    def collection_count(self, name: str) -> int:
        cursor = cast(
            "Cursor",
            self.db.aql.execute("RETURN COLLECTION_COUNT(@collection)", bind_vars={"collection": name}),
        )
        return int(next(cursor, 0) or 0)

    def collection_counts(self) -> dict[str, int]:
        """Document count per vertex and edge collection, in schema order."""
        return {name: self.collection_count(name) for name in (*VERTEX_COLLECTIONS, *EDGE_COLLECTIONS)}

    def export_rows(self) -> list[dict[str, Any]]:
        """Every vertex with each of its outgoing edges.

        One row per (vertex, outgoing edge); vertices without outgoing edges
        produce one row with relationship_type and target set to null.
        System attributes (_id, _key, _rev) are stripped; node carries a
        label naming its collection.
        """
        rows: list[dict[str, Any]] = []
        for name in VERTEX_COLLECTIONS:
            cursor = cast(
                "Cursor",
                self.db.aql.execute(
                    """
                    FOR v IN @@collection
                        LET out = (
                            FOR target, e IN 1..1 OUTBOUND v contains, imports, belongs_to, calls
                                RETURN {
                                    relationship_type: UPPER(PARSE_IDENTIFIER(e._id).collection),
                                    target: UNSET(target, "_id", "_key", "_rev")
                                }
                        )
                        FOR item IN (LENGTH(out) > 0 ? out : [{ relationship_type: null, target: null }])
                            RETURN {
                                node: MERGE(UNSET(v, "_id", "_key", "_rev"), { label: @label }),
                                relationship_type: item.relationship_type,
                                target: item.target
                            }
                    """,
                    bind_vars={"@collection": name, "label": name},
                ),
            )
            rows.extend(cursor)
        return rows

    def truncate_all(self) -> None:
        """Remove every document from every bxgraph collection (collections and indexes stay)."""
        for name in (*EDGE_COLLECTIONS, *VERTEX_COLLECTIONS):
            if self.db.has_collection(name):
                self.db.collection(name).truncate()
