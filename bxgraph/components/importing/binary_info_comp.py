"""Binary info parsing component.

Turns the payload's binary_info object into a Binary entity. Every field the
rest of the import depends on is checked here; a missing one raises
BinaryInfoError and the whole payload is rejected.
"""

from __future__ import annotations

from typing import Any

from bxgraph.helpers.dto.graph_dto import Binary
from bxgraph.helpers.exceptions import BinaryInfoError
from bxgraph.helpers.variants_helper import infer_binary_format


def _str_field(obj: Any, *keys: str) -> str | None:
    if not isinstance(obj, dict):
        return None
    for key in keys:
        value = obj.get(key)
        if isinstance(value, str):
            return value
    return None


def parse_binary_info(binary_info: Any) -> Binary:
    """Build a Binary from a binary_info object.

    Args:
        binary_info: The payload's binary_info value

    Returns:
        Binary with format inferred from file_type.type

    Raises:
        BinaryInfoError: hashes, sha256, filename, file_type or file_type.type missing
    """
    hashes = binary_info.get("hashes") if isinstance(binary_info, dict) else None
    if hashes is None:
        raise BinaryInfoError("Missing hashes")

    sha256 = _str_field(hashes, "sha256", "SHA256")
    if sha256 is None:
        raise BinaryInfoError("Missing sha256 hash")

    filename = _str_field(binary_info, "name", "filename")
    if filename is None:
        raise BinaryInfoError("Missing filename")

    file_path = _str_field(binary_info, "file_path") or ""

    file_size = binary_info.get("file_size")
    if not isinstance(file_size, int) or isinstance(file_size, bool) or file_size < 0:
        file_size = 0

    file_type = binary_info.get("file_type")
    if file_type is None:
        raise BinaryInfoError("Missing file_type")

    format_text = _str_field(file_type, "type")
    if format_text is None:
        raise BinaryInfoError("Missing file type")

    arch = _str_field(file_type, "architecture") or "unknown"

    return Binary(
        hash=sha256,
        filename=filename,
        file_path=file_path,
        file_size=file_size,
        format=infer_binary_format(format_text),
        arch=arch,
    )
