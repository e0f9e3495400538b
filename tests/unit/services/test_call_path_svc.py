"""Unit tests for CallPathService."""

from unittest.mock import MagicMock

import pytest

from bxgraph.services.domain.call_path_svc import CallPathService


@pytest.fixture
def mock_db():
    db = MagicMock()
    db.call_paths.downward_paths.return_value = [
        {"node_names": ["main", "parse"], "node_addresses": ["0x10", "0x20"], "call_offsets": ["0x14"]},
        {"node_names": ["main", "parse", "read"], "node_addresses": ["0x10", "0x20", "0x30"], "call_offsets": ["0x14", "0x24"]},
    ]
    db.call_paths.upward_paths.return_value = []
    db.call_paths.direct_callers.return_value = [
        {"caller_name": "start", "caller_address": "0x1", "callee_name": "main", "callee_address": "0x10", "call_site": "0x5"},
    ]
    return db


@pytest.fixture
def service(mock_db):
    return CallPathService(mock_db)


class TestCallPaths:
    @pytest.mark.unit
    def test_paths_from_rows(self, service, mock_db) -> None:
        paths = service.query_call_paths("main", 3)

        mock_db.call_paths.downward_paths.assert_called_once_with("main", 3)
        assert [p.length for p in paths] == [1, 2]
        assert paths[1].nodes[2].call_site == "0x24"

    @pytest.mark.unit
    def test_upward_fallback(self, service) -> None:
        chains = service.query_upward_call_chain("main", 5)

        assert [c.id for c in chains] == ["single_upward_chain"]


class TestRecursion:
    @pytest.mark.unit
    def test_cycle_bounds(self, service, mock_db) -> None:
        mock_db.call_paths.self_loops.return_value = []
        mock_db.call_paths.cycles.return_value = [{"function_name": "a", "depth": 2}]

        calls = service.find_recursive_calls("a")

        mock_db.call_paths.cycles.assert_called_once_with("a", 2, 10)
        assert calls[0].depth == 2


class TestContext:
    @pytest.mark.unit
    def test_analyze_call_context(self, service) -> None:
        analysis = service.analyze_call_context("main", 5)

        assert analysis.function_name == "main"
        assert len(analysis.downward_paths) == 2
        assert len(analysis.upward_chains) == 1
        assert analysis.context_insights == [
            "Function 'main' has 1 upward call chains and 2 downward call paths",
            "Function is called by 1 different callers",
        ]

    @pytest.mark.unit
    def test_enhanced_call_graph(self, service, mock_db) -> None:
        mock_db.call_paths.distinct_callees.return_value = [{"uid": "h:0x20", "name": "parse", "address": "0x20"}]
        mock_db.call_paths.callee_frequencies.return_value = {"parse": 2}

        graph = service.query_enhanced_call_graph("main", 2)

        assert [c.name for c in graph.callees] == ["parse"]
        assert graph.call_frequencies == {"parse": 2}
        assert len(graph.call_paths) == 2
