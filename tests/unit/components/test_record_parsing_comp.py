"""Unit tests for payload section parsing."""

import pytest

from bxgraph.components.importing.record_parsing_comp import (
    dedupe_strings,
    iter_call_records,
    parse_exports,
    parse_functions,
    parse_imports,
    parse_strings,
)
from bxgraph.helpers.dto.graph_dto import CallType, FunctionType
from bxgraph.helpers.exceptions import SectionError
from bxgraph.helpers.keys_helper import string_uid

HASH = "abc"


class TestParseFunctions:
    @pytest.mark.unit
    def test_canonical_uid_and_address(self) -> None:
        parsed = parse_functions([{"name": "main", "address": "0x00401000", "size": 32}], HASH)

        fn = parsed[0].function
        assert fn.uid == "abc:0x401000"
        assert fn.address == "0x401000"
        assert fn.type is FunctionType.INTERNAL
        assert fn.size == 32
        assert parsed[0].raw_address == "0x00401000"

    @pytest.mark.unit
    def test_defaults_for_missing_fields(self) -> None:
        fn = parse_functions([{}], HASH)[0].function

        assert fn.name == "unknown"
        assert fn.uid == "abc:0x0"
        assert fn.size is None

    @pytest.mark.unit
    def test_unparseable_address_becomes_zero(self) -> None:
        parsed = parse_functions([{"name": "f", "address": "zzz"}], HASH)[0]

        assert parsed.function.address == "0x0"
        assert parsed.raw_address == "zzz"

    @pytest.mark.unit
    def test_integer_address_is_decimal(self) -> None:
        assert parse_functions([{"name": "f", "address": 4096}], HASH)[0].function.address == "0x1000"

    @pytest.mark.unit
    def test_negative_size_dropped(self) -> None:
        assert parse_functions([{"name": "f", "size": -1}], HASH)[0].function.size is None

    @pytest.mark.unit
    def test_not_an_array(self) -> None:
        with pytest.raises(SectionError, match="functions must be an array"):
            parse_functions({"name": "f"}, HASH)


class TestParseStrings:
    @pytest.mark.unit
    def test_objects_and_bare_strings(self) -> None:
        nodes = parse_strings([{"value": "usage\0", "address": "3000"}, "hello", 42, {"value": None}], HASH)

        assert [n.value for n in nodes] == ["usage", "hello"]
        assert nodes[0].address == "0xbb8"
        assert nodes[1].address is None

    @pytest.mark.unit
    def test_unparseable_address_kept_raw(self) -> None:
        assert parse_strings([{"value": "x", "address": "?"}], HASH)[0].address == "?"

    @pytest.mark.unit
    def test_five_variants_collapse_to_two(self) -> None:
        nodes = dedupe_strings(parse_strings(["usage", "usage\0", "usage\n", "help", "help \0"], HASH))

        assert [n.uid for n in nodes] == [string_uid(HASH, "usage"), string_uid(HASH, "help")]

    @pytest.mark.unit
    def test_dedupe_last_wins_first_order(self) -> None:
        nodes = dedupe_strings(
            parse_strings([{"value": "a", "address": "0x1"}, "b", {"value": "a\0", "address": "0x2"}], HASH)
        )

        assert [n.value for n in nodes] == ["a", "b"]
        assert nodes[0].address == "0x2"


class TestParseImports:
    @pytest.mark.unit
    def test_libraries_deduplicated_lowercase(self) -> None:
        libraries, imports = parse_imports(
            [
                {"name": "CreateFileW", "library": "KERNEL32.dll", "address": "0x2000"},
                {"name": "ExitProcess", "library": "kernel32.DLL"},
                {"name": "MessageBoxW", "library": "user32.dll"},
            ]
        )

        assert [lib.name for lib in libraries] == ["kernel32.dll", "user32.dll"]
        assert [i.address for i in imports] == ["0x2000", "0x0", "0x0"]
        assert imports[1].library == "kernel32.DLL"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        ("record", "message"),
        [({"library": "k.dll"}, "Import missing name"), ({"name": "f"}, "Import missing library")],
    )
    def test_missing_fields_fail_section(self, record, message) -> None:
        with pytest.raises(SectionError, match=message):
            parse_imports([{"name": "ok", "library": "k.dll"}, record])


class TestParseExports:
    @pytest.mark.unit
    def test_raw_address_kept(self) -> None:
        assert parse_exports([{"name": "DllMain", "address": "1A"}])[0].address == "1A"

    @pytest.mark.unit
    def test_missing_address(self) -> None:
        with pytest.raises(SectionError, match="Export missing address"):
            parse_exports([{"name": "DllMain"}])


class TestIterCallRecords:
    @pytest.mark.unit
    def test_defaults(self) -> None:
        record = next(iter_call_records([{"from_address": "0x1", "to_address": "0x2"}]))

        assert record.calls.offset == "0x0"
        assert record.calls.call_type is CallType.DIRECT

    @pytest.mark.unit
    def test_lazy_failure_after_valid_records(self) -> None:
        records = iter_call_records(
            [{"from_address": "0x1", "to_address": "0x2", "type": "tail"}, {"from_address": "0x1"}]
        )

        first = next(records)
        assert first.calls.call_type is CallType.TAIL
        with pytest.raises(SectionError, match="Call missing to_address"):
            next(records)

    @pytest.mark.unit
    def test_not_an_array_raises_on_first_next(self) -> None:
        with pytest.raises(SectionError, match="calls must be an array"):
            list(iter_call_records("nope"))
