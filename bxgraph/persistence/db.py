"""Database façade.

Holds one operations class per collection group and the schema/admin
entry points. Services receive a Database; workflows receive the same
object and call through its attributes (db.functions.upsert_functions(...)).
"""

from __future__ import annotations

import logging
from typing import Any

from bxgraph.persistence.arango_client import DatabaseLike, create_arango_client
from bxgraph.persistence.database.binaries_aql import BinariesOperations
from bxgraph.persistence.database.call_paths_aql import CallPathsOperations
from bxgraph.persistence.database.functions_aql import FunctionsOperations
from bxgraph.persistence.database.graph_edges_aql import GraphEdgesOperations
from bxgraph.persistence.database.libraries_aql import LibrariesOperations
from bxgraph.persistence.database.stats_aql import StatsOperations
from bxgraph.persistence.database.strings_aql import StringsOperations
from bxgraph.persistence.schema import ensure_schema

logger = logging.getLogger(__name__)


class Database:
    """
    Application database.

    Wraps one ArangoDB handle. Collections must exist before the operation
    classes are used for writes; run ensure_schema() first on a new database.
    """

    def __init__(self, db: DatabaseLike) -> None:
        self.db = db

        self.binaries = BinariesOperations(db)
        self.functions = FunctionsOperations(db)
        self.strings = StringsOperations(db)
        self.libraries = LibrariesOperations(db)
        self.edges = GraphEdgesOperations(db)
        self.call_paths = CallPathsOperations(db)
        self.stats = StatsOperations(db)

    @classmethod
    def connect(cls, hosts: str, username: str, password: str, db_name: str) -> Database:
        return cls(create_arango_client(hosts=hosts, username=username, password=password, db_name=db_name))

    def ensure_schema(self) -> None:
        ensure_schema(self.db)

    def verify_connectivity(self) -> dict[str, Any]:
        """Round-trip to the server. Raises python-arango errors when unreachable.

        Returns:
            {"version": <server version>, "database": <db name>}
        """
        version = self.db.version()
        logger.debug(f"[database] Connected to ArangoDB {version}")
        return {"version": version, "database": self.db.name}

    def clear_all(self) -> None:
        self.stats.truncate_all()
        logger.info("[database] All collections truncated")
