"""
DTOs for call-graph and cross-reference queries.

Produced by services/domain/call_path_svc.py and graph_query_svc.py,
rendered by interfaces/cli (tables) or serialized to JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


@dataclass
class FunctionInfo:
    """Minimal function identity returned by traversal queries."""

    uid: str
    name: str
    address: str | None = None


@dataclass
class CallGraph:
    """Distinct callees and callers of a function within a depth bound."""

    callees: list[FunctionInfo] = field(default_factory=list)
    callers: list[FunctionInfo] = field(default_factory=list)


@dataclass
class Xref:
    """A CALLS edge reported relative to an address."""

    from_function: str
    to_function: str
    offset: str


@dataclass
class StringHit:
    """A string literal matched by a search."""

    uid: str
    value: str
    address: str | None = None


@dataclass
class CallPathNode:
    """One function on a downward call path. call_site is the offset of the call that reached it."""

    id: str
    name: str
    address: str | None
    depth: int
    call_site: str | None
    call_type: str


@dataclass
class CallPath:
    """A chain of calls starting at the queried function."""

    id: str
    nodes: list[CallPathNode] = field(default_factory=list)
    length: int = 0

    def add_node(self, node: CallPathNode) -> None:
        self.length = node.depth
        self.nodes.append(node)

    def entry_function(self) -> CallPathNode | None:
        return self.nodes[0] if self.nodes else None


@dataclass
class CallSequence:
    """A direct call made by a function, numbered in call-site order."""

    id: str
    caller: str
    callee: str
    order: int
    call_site: str


@dataclass
class UpwardCallNode:
    """One function on an upward chain. call_site is the offset of the call it makes toward the target."""

    id: str
    name: str
    address: str | None
    depth: int
    call_site: str | None
    call_type: str


@dataclass
class UpwardCallChain:
    """A chain of callers ending at the queried function (outermost caller first)."""

    id: str
    nodes: list[UpwardCallNode] = field(default_factory=list)
    length: int = 0

    def add_node(self, node: UpwardCallNode) -> None:
        self.length = node.depth
        self.nodes.append(node)

    def root_caller(self) -> UpwardCallNode | None:
        return self.nodes[0] if self.nodes else None

    def target_function(self) -> UpwardCallNode | None:
        return self.nodes[-1] if self.nodes else None


@dataclass
class CallerSequence:
    """A direct call into a function, numbered in call-site order."""

    id: str
    caller_name: str
    caller_address: str
    callee_name: str
    callee_address: str
    order: int
    call_site: str


class RecursiveCallType(Enum):
    DIRECT = "Direct"
    INDIRECT = "Indirect"


@dataclass
class RecursiveCall:
    """A call cycle returning to the queried function."""

    function_name: str
    call_type: RecursiveCallType
    depth: int


@dataclass
class CallContextAnalysis:
    """Upward chains, downward paths and callers of one function, plus summary insights."""

    function_name: str
    upward_chains: list[UpwardCallChain] = field(default_factory=list)
    downward_paths: list[CallPath] = field(default_factory=list)
    caller_sequences: list[CallerSequence] = field(default_factory=list)
    context_insights: list[str] = field(default_factory=list)


@dataclass
class EnhancedCallGraph:
    """Callees within depth, every call path, and direct-call counts per callee name."""

    callees: list[FunctionInfo] = field(default_factory=list)
    call_paths: list[CallPath] = field(default_factory=list)
    call_frequencies: dict[str, int] = field(default_factory=dict)
