"""Libraries operations for ArangoDB.

Library names are stored lowercase; the name is the identity.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, cast

from bxgraph.helpers.dto.graph_dto import Library
from bxgraph.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


class LibrariesOperations:
    """Operations for the libraries collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("libraries")

    def upsert_library(self, library: Library) -> str:
        """Find or create a library vertex. Returns its _id."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                UPSERT { name: @name }
                INSERT { name: @name }
                UPDATE {}
                IN libraries
                RETURN NEW._id
                """,
                bind_vars={"name": library.name.lower()},
            ),
        )
        return str(next(cursor))
