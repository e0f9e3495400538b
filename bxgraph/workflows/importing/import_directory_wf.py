"""
Directory import workflow.

Imports every matching file of one directory, one file at a time, in groups
of batch_size files. A failing file is recorded and the loop moves on; Ctrl-C
stops the loop between files and the partial summary is returned.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from pathlib import Path
from typing import TYPE_CHECKING

from arango.exceptions import ArangoError

from bxgraph.components.importing.file_matching_comp import list_matching_files
from bxgraph.components.importing.payload_loader_comp import load_payload
from bxgraph.components.importing.payload_validation_comp import validate_payload
from bxgraph.helpers.dto.import_dto import DirectoryImportResult, FileImportOutcome, ImportStatistics
from bxgraph.helpers.exceptions import PayloadError
from bxgraph.workflows.importing.import_session_wf import DEFAULT_BATCH_SIZE, import_payload_workflow

if TYPE_CHECKING:
    from bxgraph.persistence.db import Database

logger = logging.getLogger(__name__)

# (files_done, files_total, current_file)
ProgressCallback = Callable[[int, int, str], None]


def import_directory_workflow(
    db: Database,
    directory: str | Path,
    pattern: str = "*.json",
    batch_size: int = 10,
    validate: bool = True,
    function_batch_size: int = DEFAULT_BATCH_SIZE,
    progress_callback: ProgressCallback | None = None,
) -> DirectoryImportResult:
    """
    Import all files in a directory that match pattern.

    Args:
        db: Database instance
        directory: Directory to scan (not recursive)
        pattern: Filename pattern, see file_matching_comp.matches_pattern
        batch_size: Files per progress group
        validate: Validate each payload before importing it
        function_batch_size: Functions written per round-trip inside each import
        progress_callback: Called before each file

    Returns:
        DirectoryImportResult; errors are prefixed with the file path

    Raises:
        FileNotFoundError: directory does not exist
    """
    root = Path(directory)
    if not root.is_dir():
        raise FileNotFoundError(f"Directory not found: {root}")

    files = list_matching_files(root, pattern)
    result = DirectoryImportResult(files_total=len(files), files_succeeded=0, statistics=ImportStatistics())
    if not files:
        logger.info(f"[import_directory] No files in {root} match {pattern}")
        return result

    group = max(1, batch_size)
    total_groups = (len(files) + group - 1) // group
    logger.info(f"[import_directory] {len(files)} files in {total_groups} batches")

    for index, path in enumerate(files):
        if index % group == 0:
            logger.info(f"[import_directory] Batch {index // group + 1}/{total_groups}")
        if progress_callback is not None:
            progress_callback(index, len(files), str(path))
        try:
            outcome = _import_one(db, path, validate, function_batch_size, result)
        except KeyboardInterrupt:
            logger.warning(f"[import_directory] Cancelled after {index}/{len(files)} files")
            result.cancelled = True
            break
        result.files.append(outcome)
        if outcome.success:
            result.files_succeeded += 1
        result.errors.extend(f"{path}: {error}" for error in outcome.errors)

    return result


def _import_one(
    db: Database,
    path: Path,
    validate: bool,
    function_batch_size: int,
    result: DirectoryImportResult,
) -> FileImportOutcome:
    try:
        data = load_payload(path)
        if validate:
            validation = validate_payload(data)
            if not validation.valid:
                return FileImportOutcome(
                    file_path=str(path),
                    success=False,
                    errors=[f"Validation failed: {e}" for e in validation.errors],
                )
        file_result = import_payload_workflow(db, data, batch_size=function_batch_size)
    except (PayloadError, ArangoError) as e:
        logger.error(f"[import_directory] Failed to import {path}: {e}")
        return FileImportOutcome(file_path=str(path), success=False, errors=[str(e)])

    result.statistics.add(file_result.statistics)
    return FileImportOutcome(file_path=str(path), success=file_result.success, errors=list(file_result.errors))
