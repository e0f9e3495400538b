"""Version information for bxgraph."""

# Semantic versioning: MAJOR.MINOR.PATCH
# MAJOR: Breaking changes to the graph schema or entity keys
# MINOR: New queries or import features, backward compatible
# PATCH: Bug fixes, backward compatible

__version__ = "0.3.1"
__version_info__ = tuple(int(x) for x in __version__.split("."))

# Version history:
# 0.3.1 - Numeric ordering of call-site offsets in sequence queries
# 0.3.0 - Directory imports, payload validation, database export
#         - Binary-scoped string keys (str:<hash>:<sha256>)
# 0.2.0 - Call-path analyzer: upward chains, recursion, context analysis
# 0.1.0 - Initial import pipeline (binaries, functions, strings, imports, calls)
