"""CLI Bootstrap Service - Service Container for CLI Commands.

CLI commands should NOT import persistence modules directly; they get
service instances from here, built from one ConfigService.
"""

from __future__ import annotations

import logging

from bxgraph.persistence.db import Database
from bxgraph.services.domain.call_path_svc import CallPathService
from bxgraph.services.domain.graph_query_svc import GraphQueryService
from bxgraph.services.domain.import_svc import ImportService
from bxgraph.services.infrastructure.config_svc import ConfigService
from bxgraph.services.infrastructure.database_admin_svc import DatabaseAdminService

logger = logging.getLogger(__name__)


def get_config_service(config_path: str | None = None) -> ConfigService:
    """Build and validate the configuration.

    Raises:
        ConfigError: configuration invalid or explicit config file missing
    """
    config_service = ConfigService(config_path=config_path)
    config_service.validate_config()
    return config_service


def get_database(config_service: ConfigService) -> Database:
    """Get Database instance for CLI operations."""
    cfg = config_service.get_config()
    logger.debug(f"[CLI Bootstrap] Connecting to {cfg['arango_hosts']} db={cfg['arango_db_name']}")
    return Database.connect(
        hosts=str(cfg["arango_hosts"]),
        username=str(cfg["arango_username"]),
        password=str(cfg["arango_password"] or ""),
        db_name=str(cfg["arango_db_name"]),
    )


def get_import_service(config_service: ConfigService) -> ImportService:
    return ImportService(get_database(config_service), batch_size=int(config_service.get("batch_size", 1000)))


def get_call_path_service(config_service: ConfigService) -> CallPathService:
    return CallPathService(get_database(config_service))


def get_graph_query_service(config_service: ConfigService) -> GraphQueryService:
    return GraphQueryService(get_database(config_service))


def get_database_admin_service(config_service: ConfigService) -> DatabaseAdminService:
    return DatabaseAdminService(get_database(config_service))
