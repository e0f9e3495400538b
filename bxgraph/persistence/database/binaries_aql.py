"""Binaries operations for ArangoDB.

A binary is keyed by its content hash; re-importing the same executable
upserts the existing vertex.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, cast

from bxgraph.helpers.dto.graph_dto import Binary
from bxgraph.persistence.arango_client import DatabaseLike

if TYPE_CHECKING:
    from arango.cursor import Cursor


class BinariesOperations:
    """Operations for the binaries collection."""

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db
        self.collection = db.collection("binaries")

    def upsert_binary(self, binary: Binary) -> str:
        """Insert or update a binary vertex by hash.

        Returns:
            Binary document _id (e.g., "binaries/12345")
        """
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                UPSERT { hash: @hash }
                INSERT {
                    hash: @hash,
                    filename: @filename,
                    file_path: @file_path,
                    file_size: @file_size,
                    format: @format,
                    arch: @arch
                }
                UPDATE {
                    filename: @filename,
                    file_path: @file_path,
                    file_size: @file_size,
                    format: @format,
                    arch: @arch
                }
                IN binaries
                RETURN NEW._id
                """,
                bind_vars=cast(
                    "dict[str, Any]",
                    {
                        "hash": binary.hash,
                        "filename": binary.filename,
                        "file_path": binary.file_path,
                        "file_size": binary.file_size,
                        "format": binary.format,
                        "arch": binary.arch,
                    },
                ),
            ),
        )
        return str(next(cursor))

    def find_binary(self, binary_ref: str) -> dict[str, Any] | None:
        """Find the first binary whose hash equals, or filename contains, binary_ref."""
        cursor = cast(
            "Cursor",
            self.db.aql.execute(
                """
                FOR b IN binaries
                    FILTER b.hash == @ref OR CONTAINS(b.filename, @ref)
                    SORT b.hash == @ref DESC, b.filename ASC
                    LIMIT 1
                    RETURN {
                        hash: b.hash,
                        filename: b.filename,
                        file_path: b.file_path,
                        file_size: b.file_size,
                        format: b.format,
                        arch: b.arch
                    }
                """,
                bind_vars={"ref": binary_ref},
            ),
        )
        return next(cursor, None)
