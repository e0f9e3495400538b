"""Database admin service - connectivity, schema and wipe."""

from __future__ import annotations

import logging
from typing import Any

from bxgraph.persistence.db import Database

logger = logging.getLogger(__name__)


class DatabaseAdminService:
    """Service for `bxg database init` and `bxg database clear`."""

    def __init__(self, db: Database):
        self.db = db

    def initialize(self) -> dict[str, Any]:
        """Check the server is reachable, then create missing collections and indexes.

        Returns:
            Server info from Database.verify_connectivity()
        """
        info = self.db.verify_connectivity()
        self.db.ensure_schema()
        logger.info(f"[database_admin] Schema ready in {info.get('database')}")
        return info

    def clear(self) -> None:
        logger.warning("[database_admin] Clearing all graph data")
        self.db.clear_all()
