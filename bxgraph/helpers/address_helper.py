"""
Address parsing and canonicalization.

Extractors emit addresses in several encodings ("0x1A", "1A", "26"). Every
address that enters the graph goes through normalize_address() so that all
sections of one payload agree on a single textual form.

Parsing policy, in priority order:
  1) "0x"/"0X" prefix  -> remainder is hexadecimal
  2) contains a-f/A-F  -> whole string is hexadecimal
  3) otherwise         -> decimal
  4) fallback          -> whole string as hexadecimal

Canonical form is "0x" + lowercase hex without leading zeros ("0x0" for zero).
Values must fit in an unsigned 64-bit integer.
"""

from __future__ import annotations

import string

MAX_ADDRESS = 0xFFFF_FFFF_FFFF_FFFF

_HEX_DIGITS = frozenset(string.hexdigits)
_HEX_LETTERS = frozenset("abcdefABCDEF")
_DEC_DIGITS = frozenset(string.digits)


def _parse_hex(text: str) -> int | None:
    if not text or not _HEX_DIGITS.issuperset(text):
        return None
    value = int(text, 16)
    return value if value <= MAX_ADDRESS else None


def _parse_decimal(text: str) -> int | None:
    # str.isdigit() accepts superscripts and other unicode digits; int() does not
    if not text or not _DEC_DIGITS.issuperset(text):
        return None
    value = int(text, 10)
    return value if value <= MAX_ADDRESS else None


def address_text(raw: object) -> str | None:
    """
    Coerce a JSON address value to text.

    Strings pass through. Integers are rendered in decimal so that the normal
    parsing policy applies. Anything else (bool, float, null, objects) yields None.
    """
    if isinstance(raw, str):
        return raw
    if isinstance(raw, int) and not isinstance(raw, bool):
        return str(raw)
    return None


def parse_address(address: str | None) -> int | None:
    """
    Parse an address string into an unsigned 64-bit integer.

    Args:
        address: Address text in any supported encoding

    Returns:
        Integer value, or None if the text is empty, malformed or out of range
    """
    if address is None:
        return None
    trimmed = address.strip()
    if not trimmed:
        return None

    if trimmed[:2] in ("0x", "0X"):
        return _parse_hex(trimmed[2:])

    if not _HEX_LETTERS.isdisjoint(trimmed):
        return _parse_hex(trimmed)

    decimal = _parse_decimal(trimmed)
    if decimal is not None:
        return decimal

    return _parse_hex(trimmed)


def format_address(value: int) -> str:
    """Render an integer address in canonical form."""
    if value < 0 or value > MAX_ADDRESS:
        raise ValueError(f"Address out of range: {value}")
    return f"0x{value:x}"


def normalize_address(address: str | None) -> str | None:
    """Return the canonical form of an address string, or None if unparseable."""
    value = parse_address(address)
    if value is None:
        return None
    return format_address(value)


def address_sort_key(address: str | None) -> tuple[int, int, str]:
    """
    Sort key that orders parseable addresses numerically, unparseable ones last.

    Used for call-site offsets, which are stored as text and would otherwise
    sort lexicographically ("0x200" after "0x1000").
    """
    value = parse_address(address)
    if value is None:
        return (1, 0, address or "")
    return (0, value, address or "")
