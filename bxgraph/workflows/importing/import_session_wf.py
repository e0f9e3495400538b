"""
Import session workflow: one JSON payload into the graph.

Phases run strictly in order because the calls phase resolves endpoints
through the address map filled by the earlier phases:

    binary -> functions -> strings -> imports -> exports -> calls

Failure model:
- binary_info missing or unusable: nothing is written, result.success is False
- a section that is not an array, or a record missing a required field:
  that phase stops, one error is recorded, later phases still run
- a single failed store write: recorded, the phase continues
- unresolved call endpoints: counted in skipped_calls, not an error

There is no rollback; whatever was written before an error stays written.
Store failures while writing the Binary itself propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Any

from arango.exceptions import ArangoError

from bxgraph.components.importing.binary_info_comp import parse_binary_info
from bxgraph.components.importing.record_parsing_comp import (
    dedupe_strings,
    iter_call_records,
    parse_exports,
    parse_functions,
    parse_imports,
    parse_strings,
)
from bxgraph.helpers.address_helper import normalize_address, parse_address
from bxgraph.helpers.dto.graph_dto import Function, FunctionType
from bxgraph.helpers.dto.import_dto import ImportResult, ImportStatistics
from bxgraph.helpers.exceptions import BinaryInfoError, SectionError
from bxgraph.helpers.keys_helper import function_uid, library_key, scoped_import_uid
from bxgraph.helpers.logging_helper import clear_log_context, set_log_context

if TYPE_CHECKING:
    from bxgraph.persistence.db import Database

logger = logging.getLogger(__name__)

DEFAULT_BATCH_SIZE = 1000


@dataclass
class ImportAccumulator:
    """Working state of one import session. Never persisted."""

    binary_hash: str
    address_map: dict[str, str] = field(default_factory=dict)
    stats: ImportStatistics = field(default_factory=ImportStatistics)
    errors: list[str] = field(default_factory=list)
    skipped_calls: int = 0

    def register_address(self, raw: str, uid: str, canonical: str | None = None) -> None:
        """Map both the canonical and the raw form of an address to uid.

        canonical overrides the form derived from raw; functions whose raw
        address is unparseable are stored (and resolvable) at 0x0.
        """
        normalized = canonical or normalize_address(raw)
        if normalized is not None:
            self.address_map[normalized] = uid
        self.address_map[raw] = uid

    def resolve(self, raw: str) -> str | None:
        normalized = normalize_address(raw) or raw
        return self.address_map.get(normalized) or self.address_map.get(raw)

    def result(self) -> ImportResult:
        return ImportResult(
            success=not self.errors,
            statistics=self.stats,
            errors=self.errors,
            skipped_calls=self.skipped_calls,
        )


def import_payload_workflow(db: Database, data: Any, batch_size: int = DEFAULT_BATCH_SIZE) -> ImportResult:
    """
    Import one binary-analysis payload.

    Args:
        db: Database instance
        data: Parsed JSON payload (binary_info plus optional sections)
        batch_size: Functions written per round-trip

    Returns:
        ImportResult with per-category counts, ordered errors and skipped_calls

    Raises:
        ArangoError: the Binary vertex itself could not be written
    """
    if not isinstance(data, dict) or "binary_info" not in data:
        return ImportResult(success=False, statistics=ImportStatistics(), errors=["Missing binary_info in data"])

    try:
        binary = parse_binary_info(data["binary_info"])
    except BinaryInfoError as e:
        return ImportResult(
            success=False,
            statistics=ImportStatistics(),
            errors=[f"Failed to parse binary info: {e}"],
        )

    set_log_context(binary=binary.hash[:12])
    try:
        db.binaries.upsert_binary(binary)
        acc = ImportAccumulator(binary_hash=binary.hash)
        acc.stats.binaries = 1
        logger.info(f"[import_session] Importing {binary.filename} ({binary.format.value}, {binary.arch})")

        if "functions" in data:
            _import_functions(db, acc, data["functions"], batch_size)
        if "strings" in data:
            _import_strings(db, acc, data["strings"])
        if "imports" in data:
            _import_imports(db, acc, data["imports"])
        if "exports" in data:
            _import_exports(db, acc, data["exports"])
        if "calls" in data:
            _import_calls(db, acc, data["calls"])

        if acc.skipped_calls:
            logger.warning(
                f"[import_session] Skipped {acc.skipped_calls} call relationships due to unresolved addresses"
            )
        logger.info(
            f"[import_session] Done: {acc.stats.total_nodes} nodes, "
            f"{acc.stats.calls_relationships} calls, {len(acc.errors)} errors"
        )
        return acc.result()
    finally:
        clear_log_context()


def _import_functions(db: Database, acc: ImportAccumulator, section: Any, batch_size: int) -> None:
    try:
        parsed = parse_functions(section, acc.binary_hash)
    except SectionError as e:
        acc.errors.append(f"Failed to parse functions: {e}")
        return

    for item in parsed:
        acc.register_address(item.raw_address, item.function.uid, item.function.address)

    functions = [item.function for item in parsed]
    size = max(1, batch_size)
    for start in range(0, len(functions), size):
        chunk = functions[start : start + size]
        # One document per uid per query; the last record for a uid wins
        unique = list({function.uid: function for function in chunk}.values())
        try:
            db.functions.upsert_functions(unique)
        except ArangoError as e:
            acc.errors.append(f"Failed to import functions: {e}")
            continue
        acc.stats.functions += len(chunk)

        for function in unique:
            try:
                db.edges.create_contains(acc.binary_hash, function.uid)
            except ArangoError as e:
                acc.errors.append(f"Failed to create CONTAINS relationship: {e}")


def _import_strings(db: Database, acc: ImportAccumulator, section: Any) -> None:
    try:
        nodes = dedupe_strings(parse_strings(section, acc.binary_hash))
    except SectionError as e:
        acc.errors.append(f"Failed to parse strings: {e}")
        return

    for node in nodes:
        try:
            db.strings.upsert_string(node)
        except ArangoError as e:
            acc.errors.append(f"Failed to import string: {e}")
            continue
        acc.stats.strings += 1


def _import_imports(db: Database, acc: ImportAccumulator, section: Any) -> None:
    try:
        libraries, imports = parse_imports(section)
    except SectionError as e:
        acc.errors.append(f"Failed to parse imports: {e}")
        return

    for library in libraries:
        try:
            db.libraries.upsert_library(library)
            acc.stats.libraries += 1
        except ArangoError as e:
            acc.errors.append(f"Failed to import library: {e}")
        try:
            db.edges.create_imports(acc.binary_hash, library.name)
        except ArangoError as e:
            acc.errors.append(f"Failed to create IMPORTS relationship: {e}")

    for record in imports:
        raw_address = record.address or "0x0"
        function = Function(
            uid=scoped_import_uid(acc.binary_hash, record.library, record.name),
            name=record.name,
            type=FunctionType.IMPORT,
            address=normalize_address(raw_address) or raw_address,
        )
        acc.register_address(raw_address, function.uid)

        try:
            db.functions.upsert_function(function)
        except ArangoError as e:
            acc.errors.append(f"Failed to import function: {e}")
        try:
            db.edges.create_belongs_to(function.uid, library_key(record.library))
        except ArangoError as e:
            acc.errors.append(f"Failed to create BELONGS_TO relationship: {e}")


def _import_exports(db: Database, acc: ImportAccumulator, section: Any) -> None:
    try:
        exports = parse_exports(section)
    except SectionError as e:
        acc.errors.append(f"Failed to parse exports: {e}")
        return

    for export in exports:
        value = parse_address(export.address)
        if value is None:
            acc.errors.append(f"Invalid export address: {export.address}")
            continue
        uid = function_uid(acc.binary_hash, value)
        canonical = normalize_address(export.address)
        function = Function(uid=uid, name=export.name, type=FunctionType.EXPORT, address=canonical)

        # Functions and imports already mapped at this address take precedence
        if canonical is not None and canonical not in acc.address_map:
            acc.address_map[canonical] = uid

        try:
            db.functions.upsert_function(function)
        except ArangoError as e:
            acc.errors.append(f"Failed to import export function: {e}")


def _import_calls(db: Database, acc: ImportAccumulator, section: Any) -> None:
    try:
        for record in iter_call_records(section):
            from_uid = acc.resolve(record.from_address)
            to_uid = acc.resolve(record.to_address)
            if from_uid is None or to_uid is None:
                acc.skipped_calls += 1
                continue
            try:
                created = db.edges.create_calls(from_uid, to_uid, record.calls)
            except ArangoError as e:
                acc.errors.append(f"Failed to create CALLS relationship: {e}")
                continue
            if created:
                acc.stats.calls_relationships += 1
            else:
                # Mapped endpoint whose vertex never reached the store
                acc.skipped_calls += 1
    except SectionError as e:
        acc.errors.append(f"Failed to import calls: {e}")
