"""
Domain-specific DTOs (Data Transfer Objects) used across multiple layers.

Rules for DTO modules:
- Import only stdlib and typing (no bxgraph.* imports)
- Contain ONLY dataclass/enum definitions and simple properties
- No I/O, no DB access, no business logic
"""

from __future__ import annotations

from bxgraph.helpers.dto.call_path_dto import (
    CallContextAnalysis,
    CallerSequence,
    CallGraph,
    CallPath,
    CallPathNode,
    CallSequence,
    EnhancedCallGraph,
    FunctionInfo,
    RecursiveCall,
    RecursiveCallType,
    StringHit,
    UpwardCallChain,
    UpwardCallNode,
    Xref,
)
from bxgraph.helpers.dto.graph_dto import (
    Binary,
    BinaryFormat,
    Calls,
    CallType,
    Export,
    Function,
    FunctionType,
    Import,
    Library,
    StringNode,
)
from bxgraph.helpers.dto.import_dto import (
    DatabaseStats,
    DirectoryImportResult,
    FileImportOutcome,
    ImportResult,
    ImportStatistics,
    ValidationResult,
)

__all__ = [
    "Binary",
    "BinaryFormat",
    "CallContextAnalysis",
    "CallGraph",
    "CallPath",
    "CallPathNode",
    "CallSequence",
    "CallType",
    "CallerSequence",
    "Calls",
    "DatabaseStats",
    "DirectoryImportResult",
    "EnhancedCallGraph",
    "Export",
    "FileImportOutcome",
    "Function",
    "FunctionInfo",
    "FunctionType",
    "Import",
    "ImportResult",
    "ImportStatistics",
    "Library",
    "RecursiveCall",
    "RecursiveCallType",
    "StringHit",
    "StringNode",
    "UpwardCallChain",
    "UpwardCallNode",
    "ValidationResult",
    "Xref",
]
