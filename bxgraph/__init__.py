"""
bxgraph - binary analysis knowledge graph.

Imports extractor JSON (functions, strings, imports, exports, call edges) into
ArangoDB and answers structural call-graph queries over the result.
"""

from bxgraph.__version__ import __version__

__all__ = ["__version__"]
