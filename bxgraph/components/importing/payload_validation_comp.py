"""Structural payload validation, run before an import when validation is on."""

from __future__ import annotations

from typing import Any

from bxgraph.helpers.dto.import_dto import ValidationResult

REQUIRED_BINARY_INFO_FIELDS = ("name", "file_path", "file_size", "file_type", "hashes")
ARRAY_SECTIONS = ("functions", "strings", "imports", "exports")


def validate_payload(data: Any) -> ValidationResult:
    """Check the shape of a payload without importing it.

    Stricter than the import itself: binary_info must carry every field in
    REQUIRED_BINARY_INFO_FIELDS, although the import can default some of them.
    """
    errors: list[str] = []
    warnings: list[str] = []

    if not isinstance(data, dict):
        return ValidationResult(valid=False, errors=["payload must be a JSON object"])

    if "binary_info" not in data:
        errors.append("binary_info is required")
    elif not isinstance(data["binary_info"], dict):
        errors.append("binary_info must be an object")
    else:
        binary_info = data["binary_info"]
        for field in REQUIRED_BINARY_INFO_FIELDS:
            if field not in binary_info:
                errors.append(f"binary_info missing required field: {field}")

    for section in ARRAY_SECTIONS:
        if section in data and not isinstance(data[section], list):
            errors.append(f"{section} must be an array")

    if "calls" in data and not isinstance(data["calls"], list):
        warnings.append("calls is not an array and will be reported as an import error")

    return ValidationResult(valid=not errors, errors=errors, warnings=warnings)
