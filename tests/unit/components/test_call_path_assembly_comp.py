"""Unit tests for call path assembly from traversal rows."""

import pytest

from bxgraph.components.analysis.call_path_assembly_comp import (
    build_call_paths,
    build_call_sequences,
    build_caller_sequences,
    build_context_insights,
    build_recursive_calls,
    build_upward_chains,
)
from bxgraph.helpers.dto.call_path_dto import RecursiveCallType


class TestBuildCallPaths:
    @pytest.mark.unit
    def test_call_site_is_offset_of_incoming_edge(self) -> None:
        rows = [
            {
                "node_names": ["main", "parse", "read"],
                "node_addresses": ["0x10", "0x20", None],
                "call_offsets": ["0x14", "0x24"],
                "path_length": 2,
            }
        ]

        path = build_call_paths(rows, "main")[0]

        assert path.id == "path_1"
        assert path.length == 2
        assert [n.id for n in path.nodes] == ["main_0", "parse_1", "read_2"]
        assert [n.call_site for n in path.nodes] == [None, "0x14", "0x24"]
        assert path.nodes[2].address == "N/A"
        assert path.entry_function().name == "main"

    @pytest.mark.unit
    def test_no_rows_gives_placeholder(self) -> None:
        paths = build_call_paths([], "lonely")

        assert len(paths) == 1
        node = paths[0].nodes[0]
        assert paths[0].id == "single_path"
        assert (node.id, node.name, node.address, node.call_type) == ("single_node", "lonely", "0x1000", "Entry")


class TestBuildUpwardChains:
    @pytest.mark.unit
    def test_caller_first_with_outgoing_call_sites(self) -> None:
        rows = [
            {
                "node_names": ["start", "main", "target"],
                "node_addresses": ["0x1", "0x2", "0x3"],
                "call_offsets": ["0x5", "0x6"],
            }
        ]

        chain = build_upward_chains(rows, "target")[0]

        assert chain.id == "upward_chain_1"
        assert [n.call_site for n in chain.nodes] == ["0x5", "0x6", None]
        assert chain.root_caller().name == "start"
        assert chain.target_function().name == "target"
        assert chain.nodes[0].call_type == "Upward"

    @pytest.mark.unit
    def test_no_rows_gives_root_placeholder(self) -> None:
        chain = build_upward_chains([], "orphan")[0]

        assert chain.id == "single_upward_chain"
        assert chain.nodes[0].call_type == "Root"


class TestSequences:
    @pytest.mark.unit
    def test_call_sequences_numeric_order(self) -> None:
        rows = [
            {"caller": "main", "callee": "c", "call_site": "0x1000"},
            {"caller": "main", "callee": "a", "call_site": "0x200"},
            {"caller": "main", "callee": "b", "call_site": "0x300"},
        ]

        seqs = build_call_sequences(rows)

        assert [s.callee for s in seqs] == ["a", "b", "c"]
        assert [s.id for s in seqs] == ["seq_1", "seq_2", "seq_3"]
        assert [s.order for s in seqs] == [1, 2, 3]

    @pytest.mark.unit
    def test_caller_sequences_missing_address(self) -> None:
        rows = [
            {
                "caller_name": "main",
                "caller_address": None,
                "callee_name": "f",
                "callee_address": "0x20",
                "call_site": "0x8",
            }
        ]

        seq = build_caller_sequences(rows)[0]

        assert seq.id == "caller_seq_1"
        assert seq.caller_address == "N/A"
        assert seq.callee_address == "0x20"


class TestRecursion:
    @pytest.mark.unit
    def test_direct_first_then_indirect(self) -> None:
        calls = build_recursive_calls(
            [{"function_name": "fact", "address": "0x1"}],
            [{"function_name": "fact", "address": "0x1", "depth": 3, "path_nodes": ["fact", "a", "b", "fact"]}],
        )

        assert [(c.call_type, c.depth) for c in calls] == [
            (RecursiveCallType.DIRECT, 1),
            (RecursiveCallType.INDIRECT, 3),
        ]

    @pytest.mark.unit
    def test_none(self) -> None:
        assert build_recursive_calls([], []) == []


class TestContextInsights:
    @pytest.mark.unit
    def test_counts_distinct_callers(self) -> None:
        callers = build_caller_sequences(
            [
                {"caller_name": "a", "callee_name": "f", "call_site": "0x1"},
                {"caller_name": "a", "callee_name": "f", "call_site": "0x2"},
                {"caller_name": "b", "callee_name": "f", "call_site": "0x3"},
            ]
        )
        upward = build_upward_chains([], "f")
        downward = build_call_paths([], "f")

        insights = build_context_insights("f", upward, downward, callers)

        assert insights == [
            "Function 'f' has 1 upward call chains and 1 downward call paths",
            "Function is called by 2 different callers",
        ]

    @pytest.mark.unit
    def test_no_callers_single_insight(self) -> None:
        assert len(build_context_insights("f", [], [], [])) == 1
