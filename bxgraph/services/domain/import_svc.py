"""Import service - payload ingestion and store-wide statistics.

Thin facade over the import workflows: loads files, validates payloads,
runs the import session and reports what the store holds afterwards.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

from bxgraph.components.importing.payload_loader_comp import load_payload
from bxgraph.components.importing.payload_validation_comp import validate_payload
from bxgraph.helpers.dto.import_dto import (
    DatabaseStats,
    DirectoryImportResult,
    ImportResult,
    ImportStatistics,
    ValidationResult,
)
from bxgraph.persistence.db import Database
from bxgraph.persistence.schema import EDGE_COLLECTIONS, VERTEX_COLLECTIONS
from bxgraph.workflows.importing.import_directory_wf import ProgressCallback, import_directory_workflow
from bxgraph.workflows.importing.import_session_wf import DEFAULT_BATCH_SIZE, import_payload_workflow

logger = logging.getLogger(__name__)

# Display labels for vertex collections
NODE_LABELS = {
    "binaries": "Binary",
    "functions": "Function",
    "strings": "String",
    "libraries": "Library",
}


class ImportService:
    """Service for importing analysis payloads and inspecting the result."""

    def __init__(self, db: Database, batch_size: int = DEFAULT_BATCH_SIZE):
        """Initialize import service.

        Args:
            db: Database instance
            batch_size: Functions written per round-trip
        """
        self.db = db
        self.batch_size = batch_size

    def import_from_file(self, file_path: str | Path) -> ImportResult:
        """Load a JSON payload file and import it.

        Raises:
            PayloadError: file unreadable or not a JSON object
        """
        data = load_payload(file_path)
        return self.import_from_json(data)

    def import_from_json(self, data: dict[str, Any]) -> ImportResult:
        result = import_payload_workflow(self.db, data, batch_size=self.batch_size)
        if not result.success:
            logger.warning(f"[import] Import finished with {len(result.errors)} errors")
        return result

    def validate_data(self, data: Any) -> ValidationResult:
        return validate_payload(data)

    def import_directory(
        self,
        directory: str | Path,
        pattern: str = "*.json",
        batch_size: int = 10,
        validate: bool = True,
        progress_callback: ProgressCallback | None = None,
    ) -> DirectoryImportResult:
        return import_directory_workflow(
            self.db,
            directory,
            pattern=pattern,
            batch_size=batch_size,
            validate=validate,
            function_batch_size=self.batch_size,
            progress_callback=progress_callback,
        )

    def get_import_statistics(self) -> ImportStatistics:
        """Counts of everything currently in the store."""
        counts = self.db.stats.collection_counts()
        return ImportStatistics(
            binaries=counts.get("binaries", 0),
            functions=counts.get("functions", 0),
            strings=counts.get("strings", 0),
            libraries=counts.get("libraries", 0),
            calls_relationships=counts.get("calls", 0),
        )

    def get_database_stats(self) -> DatabaseStats:
        counts = self.db.stats.collection_counts()
        return DatabaseStats(
            node_count=sum(counts.get(name, 0) for name in VERTEX_COLLECTIONS),
            relationship_count=sum(counts.get(name, 0) for name in EDGE_COLLECTIONS),
            label_counts={NODE_LABELS[name]: counts.get(name, 0) for name in VERTEX_COLLECTIONS},
        )

    def export_to_json(self, file_path: str | Path) -> int:
        """Write every vertex with its outgoing edges as pretty JSON.

        Returns:
            Number of rows written
        """
        rows = self.db.stats.export_rows()
        path = Path(file_path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as fh:
            json.dump(rows, fh, indent=2, ensure_ascii=False)
        logger.info(f"[import] Exported {len(rows)} rows to {path}")
        return len(rows)
