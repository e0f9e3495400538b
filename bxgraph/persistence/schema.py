"""ArangoDB schema for the binary knowledge graph.

Collections and indexes only; all operations are idempotent (safe to run on
every `database init`). Entity identity lives in unique persistent indexes,
which is what makes the UPSERTs in persistence/database/ merge instead of
duplicate.
"""

from __future__ import annotations

import logging

from arango.exceptions import CollectionCreateError

from bxgraph.persistence.arango_client import DatabaseLike

logger = logging.getLogger(__name__)

VERTEX_COLLECTIONS = ("binaries", "functions", "strings", "libraries")
EDGE_COLLECTIONS = ("contains", "imports", "belongs_to", "calls")

# (collection, fields, unique)
_INDEXES: tuple[tuple[str, list[str], bool], ...] = (
    ("binaries", ["hash"], True),
    ("functions", ["uid"], True),
    ("strings", ["uid"], True),
    ("libraries", ["name"], True),
    ("contains", ["_from", "_to"], True),
    ("imports", ["_from", "_to"], True),
    ("belongs_to", ["_from", "_to"], True),
    ("calls", ["_from", "_to"], True),
    ("functions", ["name"], False),
    ("functions", ["address"], False),
    ("binaries", ["filename"], False),
)


def ensure_schema(db: DatabaseLike) -> None:
    """Create missing collections and indexes. Does NOT alter existing ones."""
    _create_collections(db)
    _create_indexes(db)


def _create_collections(db: DatabaseLike) -> None:
    for name in VERTEX_COLLECTIONS:
        _ensure_collection(db, name, edge=False)
    for name in EDGE_COLLECTIONS:
        _ensure_collection(db, name, edge=True)


def _ensure_collection(db: DatabaseLike, name: str, edge: bool) -> None:
    if db.has_collection(name):
        return
    try:
        db.create_collection(name, edge=edge)
        logger.info(f"[schema] Created {'edge' if edge else 'document'} collection {name}")
    except CollectionCreateError:
        # Created concurrently by another process
        if not db.has_collection(name):
            raise


def _create_indexes(db: DatabaseLike) -> None:
    for collection, fields, unique in _INDEXES:
        # ArangoDB returns the existing index when an identical one is requested
        db.collection(collection).add_persistent_index(fields=fields, unique=unique, sparse=False)
