"""Call path service - cross-reference queries over the call graph.

Read-only. Every query takes a function name or uid; a name shared by
functions in several binaries matches all of them.
"""

from __future__ import annotations

import logging

from bxgraph.components.analysis.call_path_assembly_comp import (
    build_call_paths,
    build_call_sequences,
    build_caller_sequences,
    build_context_insights,
    build_recursive_calls,
    build_upward_chains,
)
from bxgraph.helpers.dto.call_path_dto import (
    CallContextAnalysis,
    CallerSequence,
    CallPath,
    CallSequence,
    EnhancedCallGraph,
    FunctionInfo,
    RecursiveCall,
    UpwardCallChain,
)
from bxgraph.persistence.db import Database
from bxgraph.services.infrastructure.config_svc import INTERNAL_MAX_CYCLE_LENGTH

logger = logging.getLogger(__name__)


class CallPathService:
    """Service for call paths, call sequences, recursion and call context."""

    def __init__(self, db: Database):
        self.db = db

    def query_call_paths(self, function_name: str, max_depth: int) -> list[CallPath]:
        """Every outbound call path of 1..max_depth hops from the function.

        Returns a single placeholder path when the function calls nothing
        (or does not exist).
        """
        rows = self.db.call_paths.downward_paths(function_name, max_depth)
        logger.debug(f"[call_paths] {len(rows)} downward paths for {function_name}")
        return build_call_paths(rows, function_name)

    def query_call_sequences(self, function_name: str) -> list[CallSequence]:
        return build_call_sequences(self.db.call_paths.direct_callees(function_name))

    def find_recursive_calls(self, function_name: str) -> list[RecursiveCall]:
        """Direct self-calls plus cycles of 2..10 hops back to the function."""
        self_loops = self.db.call_paths.self_loops(function_name)
        cycles = self.db.call_paths.cycles(function_name, 2, INTERNAL_MAX_CYCLE_LENGTH)
        return build_recursive_calls(self_loops, cycles)

    def query_upward_call_chain(self, function_name: str, max_depth: int) -> list[UpwardCallChain]:
        rows = self.db.call_paths.upward_paths(function_name, max_depth)
        logger.debug(f"[call_paths] {len(rows)} upward chains for {function_name}")
        return build_upward_chains(rows, function_name)

    def query_caller_sequences(self, function_name: str) -> list[CallerSequence]:
        return build_caller_sequences(self.db.call_paths.direct_callers(function_name))

    def analyze_call_context(self, function_name: str, max_depth: int) -> CallContextAnalysis:
        """Upward chains, downward paths and direct callers, with summary insights."""
        upward_chains = self.query_upward_call_chain(function_name, max_depth)
        downward_paths = self.query_call_paths(function_name, max_depth)
        caller_sequences = self.query_caller_sequences(function_name)
        return CallContextAnalysis(
            function_name=function_name,
            upward_chains=upward_chains,
            downward_paths=downward_paths,
            caller_sequences=caller_sequences,
            context_insights=build_context_insights(function_name, upward_chains, downward_paths, caller_sequences),
        )

    def query_enhanced_call_graph(self, function_name: str, max_depth: int) -> EnhancedCallGraph:
        callees = [
            FunctionInfo(uid=str(row.get("uid")), name=str(row.get("name")), address=row.get("address"))
            for row in self.db.call_paths.distinct_callees(function_name, max_depth)
        ]
        return EnhancedCallGraph(
            callees=callees,
            call_paths=self.query_call_paths(function_name, max_depth),
            call_frequencies=self.db.call_paths.callee_frequencies(function_name),
        )
