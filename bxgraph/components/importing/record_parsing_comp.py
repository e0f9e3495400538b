"""Payload section parsing component.

One parser per payload section. Parsers only build entities; they never touch
the store or the address map. Section-level problems (not an array, a record
missing a required field) raise SectionError with the message the import
result reports.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from typing import Any

from bxgraph.helpers.address_helper import address_text, format_address, normalize_address, parse_address
from bxgraph.helpers.dto.graph_dto import Calls, Export, Function, FunctionType, Import, Library, StringNode
from bxgraph.helpers.exceptions import SectionError
from bxgraph.helpers.keys_helper import function_uid, library_key, normalize_string_value, string_uid
from bxgraph.helpers.variants_helper import parse_call_type

logger = logging.getLogger(__name__)

DEFAULT_ADDRESS = "0x0"


# Component-local DTOs (not promoted to helpers/dto)
@dataclass
class ParsedFunction:
    """A function plus the address text it was reported under."""

    function: Function
    raw_address: str


@dataclass
class CallRecord:
    from_address: str
    to_address: str
    calls: Calls


def _require_array(data: Any, section: str) -> list[Any]:
    if not isinstance(data, list):
        raise SectionError(f"{section} must be an array")
    return data


def _optional_size(value: Any) -> int | None:
    if isinstance(value, int) and not isinstance(value, bool) and value >= 0:
        return value
    return None


def parse_functions(data: Any, binary_hash: str) -> list[ParsedFunction]:
    """Parse the functions section into Internal functions.

    Missing name becomes "unknown"; a missing or unparseable address becomes 0x0.
    """
    records = _require_array(data, "functions")
    parsed: list[ParsedFunction] = []
    for record in records:
        fields = record if isinstance(record, dict) else {}
        name = fields.get("name")
        if not isinstance(name, str):
            name = "unknown"
        raw_address = address_text(fields.get("address")) or DEFAULT_ADDRESS
        value = parse_address(raw_address)
        if value is None:
            logger.debug(f"[record_parsing] Function {name!r} has unparseable address {raw_address!r}, using 0x0")
            value = 0
        uid = function_uid(binary_hash, value)
        parsed.append(
            ParsedFunction(
                function=Function(
                    uid=uid,
                    name=name,
                    type=FunctionType.INTERNAL,
                    address=format_address(value),
                    size=_optional_size(fields.get("size")),
                ),
                raw_address=raw_address,
            )
        )
    return parsed


def parse_strings(data: Any, binary_hash: str) -> list[StringNode]:
    """Parse the strings section. Records without a string value are skipped.

    Accepts {"value": ..., "address": ...} objects and bare strings.
    """
    records = _require_array(data, "strings")
    nodes: list[StringNode] = []
    for record in records:
        address = None
        if isinstance(record, dict) and isinstance(record.get("value"), str):
            value = record["value"]
            raw_address = address_text(record.get("address"))
            if raw_address is not None:
                address = normalize_address(raw_address) or raw_address
        elif isinstance(record, str):
            value = record
        else:
            continue
        nodes.append(
            StringNode(
                uid=string_uid(binary_hash, value),
                value=normalize_string_value(value),
                address=address,
            )
        )
    return nodes


def dedupe_strings(nodes: list[StringNode]) -> list[StringNode]:
    """Collapse nodes sharing a uid; the last occurrence wins, first-seen order is kept."""
    unique: dict[str, StringNode] = {}
    for node in nodes:
        unique[node.uid] = node
    return list(unique.values())


def parse_imports(data: Any) -> tuple[list[Library], list[Import]]:
    """Parse the imports section.

    Returns:
        (libraries deduplicated by lowercase name in first-seen order, imports)

    Raises:
        SectionError: not an array, or any record lacks name or library
    """
    records = _require_array(data, "imports")
    libraries: dict[str, Library] = {}
    imports: list[Import] = []
    for record in records:
        fields = record if isinstance(record, dict) else {}
        name = fields.get("name")
        if not isinstance(name, str):
            raise SectionError("Import missing name")
        library = fields.get("library")
        if not isinstance(library, str):
            raise SectionError("Import missing library")
        address = address_text(fields.get("address")) or DEFAULT_ADDRESS

        key = library_key(library)
        libraries.setdefault(key, Library(name=key))
        imports.append(Import(name=name, library=library, address=address))
    return list(libraries.values()), imports


def parse_exports(data: Any) -> list[Export]:
    """Parse the exports section. Addresses are kept raw; the workflow validates them."""
    records = _require_array(data, "exports")
    exports: list[Export] = []
    for record in records:
        fields = record if isinstance(record, dict) else {}
        name = fields.get("name")
        if not isinstance(name, str):
            raise SectionError("Export missing name")
        address = address_text(fields.get("address"))
        if address is None:
            raise SectionError("Export missing address")
        exports.append(Export(name=name, address=address))
    return exports


def iter_call_records(data: Any) -> Iterator[CallRecord]:
    """Yield call records one at a time.

    Lazy so that edges for the records before a malformed one are still
    written: SectionError is raised when the malformed record is reached.
    """
    records = _require_array(data, "calls")
    for record in records:
        fields = record if isinstance(record, dict) else {}
        from_address = address_text(fields.get("from_address"))
        if from_address is None:
            raise SectionError("Call missing from_address")
        to_address = address_text(fields.get("to_address"))
        if to_address is None:
            raise SectionError("Call missing to_address")
        offset = address_text(fields.get("offset")) or DEFAULT_ADDRESS
        yield CallRecord(
            from_address=from_address,
            to_address=to_address,
            calls=Calls(offset=offset, call_type=parse_call_type(fields.get("type"))),
        )
