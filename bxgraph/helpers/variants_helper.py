"""
Classification of free-form extractor tokens into closed enums.

Each function has an explicit default instead of raising: extractors disagree
on spelling ("PE32+", "pe", "ELF64", "Mach-O") and an unknown token should not
abort an import. The defaults are deliberate leniency and are logged at debug
level so that masked input problems remain traceable.
"""

from __future__ import annotations

import logging

from bxgraph.helpers.dto.graph_dto import BinaryFormat, CallType, FunctionType

logger = logging.getLogger(__name__)

_CALL_TYPES = {
    "direct": CallType.DIRECT,
    "indirect": CallType.INDIRECT,
    "virtual": CallType.VIRTUAL,
    "tail": CallType.TAIL,
}


def infer_binary_format(type_text: str) -> BinaryFormat:
    """
    Infer the container format by case-insensitive substring match.

    Checked in order PE, ELF, MACH. Anything else defaults to PE.
    """
    upper = type_text.upper()
    if "PE" in upper:
        return BinaryFormat.PE
    if "ELF" in upper:
        return BinaryFormat.ELF
    if "MACH" in upper:
        return BinaryFormat.MACHO
    logger.debug(f"[variants] Unrecognized file type {type_text!r}, defaulting to PE")
    return BinaryFormat.PE


def parse_call_type(token: object) -> CallType:
    """Map a call type token (case-insensitive) to CallType. Unknown or non-string tokens are Direct."""
    if not isinstance(token, str):
        return CallType.DIRECT
    call_type = _CALL_TYPES.get(token.strip().lower())
    if call_type is None:
        logger.debug(f"[variants] Unknown call type {token!r}, defaulting to Direct")
        return CallType.DIRECT
    return call_type


def binary_format_from_store(value: object) -> BinaryFormat:
    """Decode a stored format value; unknown values read back as PE."""
    for fmt in BinaryFormat:
        if fmt.value == value:
            return fmt
    return BinaryFormat.PE


def function_type_from_store(value: object) -> FunctionType:
    """Decode a stored function type; unknown values read back as Internal."""
    for ftype in FunctionType:
        if ftype.value == value:
            return ftype
    return FunctionType.INTERNAL
