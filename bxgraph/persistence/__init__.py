"""
Persistence package.
"""

from .arango_client import GraphDatabase, create_arango_client
from .db import Database
from .schema import EDGE_COLLECTIONS, VERTEX_COLLECTIONS, ensure_schema

__all__ = [
    "EDGE_COLLECTIONS",
    "VERTEX_COLLECTIONS",
    "Database",
    "GraphDatabase",
    "create_arango_client",
    "ensure_schema",
]
