"""
Database operations package.

One operations class per collection group. Each *_aql.py file owns all AQL
for its collections.
"""

from .binaries_aql import BinariesOperations
from .call_paths_aql import CallPathsOperations
from .functions_aql import FunctionsOperations
from .graph_edges_aql import GraphEdgesOperations
from .libraries_aql import LibrariesOperations
from .stats_aql import StatsOperations
from .strings_aql import StringsOperations

__all__ = [
    "BinariesOperations",
    "CallPathsOperations",
    "FunctionsOperations",
    "GraphEdgesOperations",
    "LibrariesOperations",
    "StatsOperations",
    "StringsOperations",
]
