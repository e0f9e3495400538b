"""Unit tests for address parsing and canonicalization."""

import pytest

from bxgraph.helpers.address_helper import (
    MAX_ADDRESS,
    address_sort_key,
    address_text,
    format_address,
    normalize_address,
    parse_address,
)


class TestParseAddress:
    """parse_address() priority: 0x prefix, hex letters, decimal, hex fallback."""

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("0x1A", 26),
            ("0X1a", 26),
            ("1A", 26),
            ("ff", 255),
            ("26", 26),
            ("1000", 1000),
            ("0", 0),
            ("  0x10  ", 16),
            ("0xFFFFFFFFFFFFFFFF", MAX_ADDRESS),
        ],
    )
    def test_valid_encodings(self, text: str, expected: int) -> None:
        assert parse_address(text) == expected

    @pytest.mark.unit
    @pytest.mark.parametrize("text", [None, "", "   ", "0x", "0xZZ", "xyz", "12g4", "-5", "0x10000000000000000"])
    def test_invalid_returns_none(self, text) -> None:
        assert parse_address(text) is None

    @pytest.mark.unit
    def test_decimal_overflow_is_rejected(self) -> None:
        assert parse_address(str(MAX_ADDRESS + 1)) is None

    @pytest.mark.unit
    def test_unicode_digits_are_not_decimal(self) -> None:
        # superscript two passes str.isdigit() but is not an address
        assert parse_address("²") is None


class TestFormatAndNormalize:
    @pytest.mark.unit
    def test_format_is_lowercase_without_leading_zeros(self) -> None:
        assert format_address(0x00AB) == "0xab"
        assert format_address(0) == "0x0"

    @pytest.mark.unit
    def test_format_rejects_out_of_range(self) -> None:
        with pytest.raises(ValueError):
            format_address(-1)
        with pytest.raises(ValueError):
            format_address(MAX_ADDRESS + 1)

    @pytest.mark.unit
    def test_all_encodings_normalize_to_same_form(self) -> None:
        assert normalize_address("0x1A") == normalize_address("1a") == normalize_address("26") == "0x1a"

    @pytest.mark.unit
    def test_normalize_is_idempotent(self) -> None:
        once = normalize_address("0x00401000")
        assert once == "0x401000"
        assert normalize_address(once) == once

    @pytest.mark.unit
    def test_normalize_unparseable(self) -> None:
        assert normalize_address("not-an-address") is None


class TestAddressText:
    @pytest.mark.unit
    def test_strings_pass_through(self) -> None:
        assert address_text("0x10") == "0x10"

    @pytest.mark.unit
    def test_integers_render_decimal(self) -> None:
        assert address_text(4096) == "4096"
        assert normalize_address(address_text(4096)) == "0x1000"

    @pytest.mark.unit
    @pytest.mark.parametrize("value", [None, True, 1.5, {"a": 1}, ["0x1"]])
    def test_other_types_are_rejected(self, value) -> None:
        assert address_text(value) is None


class TestAddressSortKey:
    @pytest.mark.unit
    def test_numeric_order_not_lexicographic(self) -> None:
        offsets = ["0x1000", "0x200", "0x30"]
        assert sorted(offsets, key=address_sort_key) == ["0x30", "0x200", "0x1000"]

    @pytest.mark.unit
    def test_unparseable_sort_last(self) -> None:
        offsets = ["bogus", "0x2", None, "0x1"]
        assert sorted(offsets, key=address_sort_key)[:2] == ["0x1", "0x2"]
