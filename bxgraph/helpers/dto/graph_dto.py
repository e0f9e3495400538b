"""
DTOs for the canonical graph entities.

Cross-layer data contracts for everything the import pipeline writes to the
graph store (workflows → persistence) and the store reads back (persistence →
services → interfaces).

Keys are derived by helpers/keys_helper.py; classification of free-form
extractor tokens into the enums below lives in helpers/variants_helper.py.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class BinaryFormat(Enum):
    """Executable container format."""

    PE = "PE"
    ELF = "Elf"
    MACHO = "MachO"


class FunctionType(Enum):
    """Where a function comes from relative to its binary."""

    INTERNAL = "Internal"
    IMPORT = "Import"
    EXPORT = "Export"
    THUNK = "Thunk"


class CallType(Enum):
    """Kind of call instruction behind a CALLS edge."""

    DIRECT = "Direct"
    INDIRECT = "Indirect"
    VIRTUAL = "Virtual"
    TAIL = "Tail"


@dataclass
class Binary:
    """One analyzed executable, keyed by content hash (typically SHA-256)."""

    hash: str
    filename: str
    file_path: str
    file_size: int
    format: BinaryFormat
    arch: str


@dataclass
class Function:
    """
    A code unit inside, or referenced by, a binary.

    address is the canonical hex form when known; plain imports have none.
    """

    uid: str
    name: str
    type: FunctionType
    address: str | None = None
    size: int | None = None


@dataclass
class StringNode:
    """A string literal found in a binary (value has trailing NULs stripped)."""

    uid: str
    value: str
    address: str | None = None


@dataclass
class Library:
    """An imported library. name is always lowercase."""

    name: str


@dataclass
class Import:
    """Transient import record; converted into an Import-type Function."""

    name: str
    library: str
    address: str | None = None


@dataclass
class Export:
    """Transient export record; converted into an Export-type Function."""

    name: str
    address: str


@dataclass
class Calls:
    """Properties of a CALLS edge between two functions."""

    offset: str
    call_type: CallType = CallType.DIRECT
