"""Unit tests for enum classification of extractor tokens."""

import pytest

from bxgraph.helpers.dto.graph_dto import BinaryFormat, CallType, FunctionType
from bxgraph.helpers.variants_helper import (
    binary_format_from_store,
    function_type_from_store,
    infer_binary_format,
    parse_call_type,
)


class TestInferBinaryFormat:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("PE32+ executable", BinaryFormat.PE),
            ("pe", BinaryFormat.PE),
            ("ELF 64-bit LSB", BinaryFormat.ELF),
            ("elf", BinaryFormat.ELF),
            ("Mach-O 64-bit", BinaryFormat.MACHO),
            ("COFF object", BinaryFormat.PE),
            ("", BinaryFormat.PE),
        ],
    )
    def test_substring_match(self, text: str, expected: BinaryFormat) -> None:
        assert infer_binary_format(text) is expected

    @pytest.mark.unit
    def test_pe_checked_before_elf(self) -> None:
        # "PE" appears inside "PELF": PE wins because it is checked first
        assert infer_binary_format("PELF") is BinaryFormat.PE


class TestParseCallType:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("token", "expected"),
        [
            ("direct", CallType.DIRECT),
            ("INDIRECT", CallType.INDIRECT),
            ("Virtual", CallType.VIRTUAL),
            (" tail ", CallType.TAIL),
            ("jump", CallType.DIRECT),
            (None, CallType.DIRECT),
            (3, CallType.DIRECT),
        ],
    )
    def test_tokens(self, token, expected: CallType) -> None:
        assert parse_call_type(token) is expected


class TestStoreDecoding:
    @pytest.mark.unit
    def test_known_values_round_trip(self) -> None:
        assert binary_format_from_store("MachO") is BinaryFormat.MACHO
        assert function_type_from_store("Import") is FunctionType.IMPORT

    @pytest.mark.unit
    def test_unknown_values_default(self) -> None:
        assert binary_format_from_store("Wasm") is BinaryFormat.PE
        assert function_type_from_store(None) is FunctionType.INTERNAL
