"""
DTOs for import operations.

Results returned by the import session workflow and the import service.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportStatistics:
    """Per-category counts for one import (or a sum of imports)."""

    binaries: int = 0
    functions: int = 0
    strings: int = 0
    libraries: int = 0
    calls_relationships: int = 0

    @property
    def total_nodes(self) -> int:
        return self.binaries + self.functions + self.strings + self.libraries

    def add(self, other: ImportStatistics) -> None:
        """Accumulate another set of counts into this one."""
        self.binaries += other.binaries
        self.functions += other.functions
        self.strings += other.strings
        self.libraries += other.libraries
        self.calls_relationships += other.calls_relationships


@dataclass
class ImportResult:
    """
    Outcome of importing one payload.

    errors holds every non-fatal problem in the order it happened.
    skipped_calls counts call edges whose endpoints could not be resolved;
    it is diagnostic only and does not affect success.
    """

    success: bool
    statistics: ImportStatistics
    errors: list[str] = field(default_factory=list)
    skipped_calls: int = 0

    def top_errors(self, limit: int = 10) -> tuple[list[str], int]:
        """Return the first `limit` errors and how many were left out."""
        shown = self.errors[:limit]
        return shown, len(self.errors) - len(shown)


@dataclass
class ValidationResult:
    """Structural validation of a payload before import."""

    valid: bool
    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)


@dataclass
class FileImportOutcome:
    """Result for one file in a directory import."""

    file_path: str
    success: bool
    errors: list[str] = field(default_factory=list)


@dataclass
class DirectoryImportResult:
    """Aggregate result of importing every matching file in a directory."""

    files_total: int
    files_succeeded: int
    statistics: ImportStatistics
    errors: list[str] = field(default_factory=list)
    files: list[FileImportOutcome] = field(default_factory=list)
    cancelled: bool = False


@dataclass
class DatabaseStats:
    """Store-wide counts: all vertices, all edges, and per-collection."""

    node_count: int = 0
    relationship_count: int = 0
    label_counts: dict[str, int] = field(default_factory=dict)
