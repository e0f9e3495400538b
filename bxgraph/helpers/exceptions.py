"""Custom exceptions used across multiple layers.

Rules:
- Only put exceptions here if they need to be raised in one layer and caught in another.
- Keep exceptions simple and focused.
- No I/O, no config loading, no complex logic.
"""

from __future__ import annotations


class PayloadError(Exception):
    """Raised when an import payload cannot be read or is not a JSON object."""


class BinaryInfoError(Exception):
    """Raised when binary_info lacks a field the whole import depends on."""


class ConfigError(Exception):
    """Raised when the composed configuration is invalid."""


class SectionError(Exception):
    """Raised when a payload section (functions, imports, ...) is malformed as a whole."""
