"""Unit tests for the ArangoDB connection and bind var conversion."""

from dataclasses import dataclass
from enum import Enum
from unittest.mock import MagicMock, patch

import pytest

from bxgraph.helpers.dto.graph_dto import BinaryFormat, CallType, Function, FunctionType
from bxgraph.persistence.arango_client import GraphDatabase, create_arango_client, to_bind_value


class _ListValued(Enum):
    BAD = (1, 2)


@dataclass(frozen=True)
class _HasValue:
    value: str


class TestToBindValue:
    @pytest.mark.unit
    @pytest.mark.parametrize("value", ["hello", 42, 3.14, True, False, None])
    def test_scalars_pass_through(self, value) -> None:
        assert to_bind_value(value) == value

    @pytest.mark.unit
    def test_entity_enums_become_stored_strings(self) -> None:
        assert to_bind_value(BinaryFormat.MACHO) == "MachO"
        assert to_bind_value(CallType.INDIRECT) == "Indirect"

    @pytest.mark.unit
    def test_nested_in_containers(self) -> None:
        result = to_bind_value({"docs": [{"type": FunctionType.IMPORT}], "pair": (CallType.TAIL, 1)})
        assert result == {"docs": [{"type": "Import"}], "pair": ["Tail", 1]}

    @pytest.mark.unit
    def test_enum_with_non_scalar_value_names_path(self) -> None:
        with pytest.raises(TypeError, match=r"\$\.props\.bad"):
            to_bind_value({"props": {"bad": _ListValued.BAD}})

    @pytest.mark.unit
    def test_non_enum_with_value_attribute_is_rejected(self) -> None:
        with pytest.raises(TypeError, match=r"\$\[0\]"):
            to_bind_value([_HasValue("x")])

    @pytest.mark.unit
    def test_dataclass_dto_is_rejected(self) -> None:
        fn = Function(uid="h:0x1", name="f", type=FunctionType.INTERNAL)
        with pytest.raises(TypeError, match="not JSON-serializable"):
            to_bind_value({"doc": fn})


class TestGraphDatabase:
    @pytest.mark.unit
    def test_execute_converts_bind_vars(self) -> None:
        raw = MagicMock()

        GraphDatabase(raw).aql.execute("RETURN @x", bind_vars={"x": CallType.VIRTUAL}, count=True)

        raw.aql.execute.assert_called_once_with("RETURN @x", bind_vars={"x": "Virtual"}, count=True)

    @pytest.mark.unit
    def test_missing_bind_vars_become_empty_dict(self) -> None:
        raw = MagicMock()
        GraphDatabase(raw).aql.execute("RETURN 1")
        assert raw.aql.execute.call_args[1]["bind_vars"] == {}

    @pytest.mark.unit
    def test_schema_and_server_calls_reach_driver(self) -> None:
        raw = MagicMock()
        raw.name = "bxgraph"
        raw.version.return_value = "3.12.0"
        raw.has_collection.return_value = False
        db = GraphDatabase(raw)

        assert db.name == "bxgraph"
        assert db.version() == "3.12.0"
        assert db.has_collection("calls") is False
        db.create_collection("calls", edge=True)
        db.collection("functions")

        raw.create_collection.assert_called_once_with("calls", edge=True)
        raw.collection.assert_called_once_with("functions")


class TestCreateArangoClient:
    @pytest.mark.unit
    def test_connects_with_credentials(self) -> None:
        with patch("bxgraph.persistence.arango_client.ArangoClient") as client_cls:
            db = create_arango_client(hosts="http://arango:8529", username="u", password="p", db_name="g")

        client_cls.assert_called_once_with(hosts="http://arango:8529")
        client_cls.return_value.db.assert_called_once_with("g", username="u", password="p")
        assert isinstance(db, GraphDatabase)
