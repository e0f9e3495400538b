"""Unit tests for CallPathsOperations (call_paths_aql.py)."""

from unittest.mock import MagicMock

import pytest

from bxgraph.persistence.database.call_paths_aql import CallPathsOperations


@pytest.fixture
def mock_db():
    db = MagicMock()
    db.aql.execute.return_value = iter([])
    return db


@pytest.fixture
def ops(mock_db):
    return CallPathsOperations(mock_db)


def _query(mock_db) -> str:
    return mock_db.aql.execute.call_args[0][0]


def _bind_vars(mock_db) -> dict:
    return mock_db.aql.execute.call_args[1]["bind_vars"]


class TestTraversals:
    @pytest.mark.unit
    def test_downward_is_outbound_with_depth(self, ops, mock_db) -> None:
        rows = [{"node_names": ["main", "f"], "node_addresses": ["0x1", "0x2"], "call_offsets": ["0x4"]}]
        mock_db.aql.execute.return_value = iter(rows)

        assert ops.downward_paths("main", 3) == rows
        assert "1..@max_depth OUTBOUND start calls" in _query(mock_db)
        assert _bind_vars(mock_db) == {"function_name": "main", "max_depth": 3}

    @pytest.mark.unit
    def test_upward_is_inbound_reversed_shortest_first(self, ops, mock_db) -> None:
        ops.upward_paths("f", 2)

        query = _query(mock_db)
        assert "INBOUND start calls" in query
        assert "REVERSE(p.vertices[*].name)" in query
        assert "SORT path_length ASC" in query

    @pytest.mark.unit
    def test_start_matches_name_or_uid(self, ops, mock_db) -> None:
        ops.direct_callees("h:0x10")

        assert "start.name == @function_name OR start.uid == @function_name" in _query(mock_db)

    @pytest.mark.unit
    def test_cycles_bounds(self, ops, mock_db) -> None:
        ops.cycles("f", 2, 10)

        assert _bind_vars(mock_db) == {"function_name": "f", "min_depth": 2, "max_depth": 10}
        assert "FILTER v._id == start._id" in _query(mock_db)

    @pytest.mark.unit
    def test_distinct_callers_binary_scope(self, ops, mock_db) -> None:
        ops.distinct_callers("f", 1, binary_hash="abc")

        query = _query(mock_db)
        assert "RETURN DISTINCT" in query
        assert "STARTS_WITH(start.uid, CONCAT(@binary_hash" in query
        assert _bind_vars(mock_db)["binary_hash"] == "abc"


class TestAggregates:
    @pytest.mark.unit
    def test_callee_frequencies(self, ops, mock_db) -> None:
        mock_db.aql.execute.return_value = iter(
            [{"callee_name": "printf", "frequency": 3}, {"callee_name": "exit", "frequency": 1}]
        )

        assert ops.callee_frequencies("main") == {"printf": 3, "exit": 1}
        assert "WITH COUNT INTO frequency" in _query(mock_db)

    @pytest.mark.unit
    def test_xrefs_by_address(self, ops, mock_db) -> None:
        ops.xrefs("0x1000")

        assert "caller.address == @address OR callee.address == @address" in _query(mock_db)
        assert _bind_vars(mock_db) == {"address": "0x1000", "binary_hash": None}
