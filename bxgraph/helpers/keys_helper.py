"""
Deterministic entity key derivation.

Every key is a pure function of its inputs so that re-importing the same
payload upserts the same documents instead of creating duplicates.

Key formats:
    Function (internal/export):  "{binary_hash}:{canonical_address}"
    Function (import, global):   "imp:{library_lower}:{symbol}"
    Function (import, scoped):   "imp:{binary_hash}:{library_lower}:{symbol}"
    String:                      "str:{binary_hash}:{sha256(key_value)}"
    Library:                     "{library_lower}"

String content is hashed with SHA-256 because the key is persisted and must
stay stable and collision-free across runs.
"""

from __future__ import annotations

import hashlib
import string

from bxgraph.helpers.address_helper import format_address

_TRAILING_NOISE = "\0" + string.whitespace


def library_key(name: str) -> str:
    """Libraries are identified by their lowercase name."""
    return name.lower()


def function_uid(binary_hash: str, address: int) -> str:
    """Key for an internal or exported function at a known address."""
    return f"{binary_hash}:{format_address(address)}"


def import_uid(library: str, symbol: str) -> str:
    """Global key for an imported symbol with no in-binary address."""
    return f"imp:{library_key(library)}:{symbol}"


def scoped_import_uid(binary_hash: str, library: str, symbol: str) -> str:
    """Binary-scoped key for an imported symbol that has an IAT slot address."""
    return f"imp:{binary_hash}:{library_key(library)}:{symbol}"


def normalize_string_value(value: str) -> str:
    """Stored form of a string literal: trailing NUL terminators removed."""
    return value.rstrip("\0")


def content_hash(value: str) -> str:
    """SHA-256 hex digest of a string's UTF-8 encoding."""
    return hashlib.sha256(value.encode("utf-8", errors="surrogatepass")).hexdigest()


def string_uid(binary_hash: str, value: str) -> str:
    """
    Key for a string literal within one binary.

    Trailing NULs and whitespace are not part of the identity, so extractor
    variations like "usage\\0" and "usage\\n" collapse onto "usage".
    """
    return f"str:{binary_hash}:{content_hash(value.rstrip(_TRAILING_NOISE))}"
