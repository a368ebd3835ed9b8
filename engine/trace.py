"""
trace.py — Trace Flags
=======================
The per-node / per-edge annotations the renderer paints from.

    NodeFlags   is_visited, is_in_shortest_path, is_in_cycle
    EdgeFlags   is_used_in_traversal, is_used_in_shortest_path, is_used_in_cycle

Edges are keyed by `"from-to"` (see edge_key).

Design decisions:
  - Flags only ever flip False → True, so applying the same step twice is
    the same as applying it once.
  - derive_trace() rebuilds from an empty TraceFlags every time.  Nothing
    depends on the flags of a previous index, which is what makes seeking
    backwards and forwards reproduce a straight forward walk exactly.
  - The root edge (`from == -1`) marks its node only.
"""

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional, Sequence

from algorithms.step import AlgorithmStep, StepType
from graph import GraphSnapshot


def edge_key(source: int, target: int) -> str:
    return f"{source}-{target}"


@dataclass
class NodeFlags:
    is_visited:          bool = False
    is_in_shortest_path: bool = False
    is_in_cycle:         bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "isVisited":        self.is_visited,
            "isInShortestPath": self.is_in_shortest_path,
            "isInCycle":        self.is_in_cycle,
        }


@dataclass
class EdgeFlags:
    is_used_in_traversal:     bool = False
    is_used_in_shortest_path: bool = False
    is_used_in_cycle:         bool = False

    def to_dict(self) -> Dict[str, bool]:
        return {
            "isUsedInTraversal":    self.is_used_in_traversal,
            "isUsedInShortestPath": self.is_used_in_shortest_path,
            "isUsedInCycle":        self.is_used_in_cycle,
        }


@dataclass
class TraceFlags:
    nodes: Dict[int, NodeFlags] = field(default_factory=dict)
    edges: Dict[str, EdgeFlags] = field(default_factory=dict)

    def node(self, node_id: int) -> NodeFlags:
        """Flags for `node_id`, created on first access."""
        if node_id not in self.nodes:
            self.nodes[node_id] = NodeFlags()
        return self.nodes[node_id]

    def edge(self, source: int, target: int) -> EdgeFlags:
        key = edge_key(source, target)
        if key not in self.edges:
            self.edges[key] = EdgeFlags()
        return self.edges[key]

    def node_flags(self, node_id: int) -> NodeFlags:
        """Read-only lookup; unknown nodes read as all-False."""
        return self.nodes.get(node_id, NodeFlags())

    def edge_flags(self, source: int, target: int) -> EdgeFlags:
        return self.edges.get(edge_key(source, target), EdgeFlags())

    def is_empty(self) -> bool:
        return not self.nodes and not self.edges

    def to_dict(self) -> Dict[str, dict]:
        return {
            "nodes": {str(n): f.to_dict() for n, f in self.nodes.items()},
            "edges": {k: f.to_dict() for k, f in self.edges.items()},
        }


# ---------------------------------------------------------------------------
# Annotation rule
# ---------------------------------------------------------------------------
def apply_step(
    trace: TraceFlags,
    step: AlgorithmStep,
    snapshot: Optional[GraphSnapshot] = None,
) -> TraceFlags:
    """
    Mark the step's target node and (unless it is the root edge) the edge.
    When `snapshot` says the edge is undirected, the reverse key is marked
    as well.  Mutates and returns `trace`.
    """
    edge = step.edge
    keys = []
    if not edge.is_root:
        keys.append((edge.source, edge.target))
        if snapshot is not None:
            info = snapshot.find_edge(edge.source, edge.target)
            if info is not None and info.is_undirected:
                keys.append((edge.target, edge.source))

    node = trace.node(edge.target)
    if step.type is StepType.VISIT:
        node.is_visited = True
        for s, t in keys:
            trace.edge(s, t).is_used_in_traversal = True
    elif step.type is StepType.RESULT:
        node.is_in_shortest_path = True
        for s, t in keys:
            trace.edge(s, t).is_used_in_shortest_path = True
    elif step.type is StepType.CYCLE:
        node.is_in_cycle = True
        for s, t in keys:
            trace.edge(s, t).is_used_in_cycle = True
    return trace


def apply_steps(
    trace: TraceFlags,
    steps: Iterable[AlgorithmStep],
    snapshot: Optional[GraphSnapshot] = None,
) -> TraceFlags:
    for step in steps:
        apply_step(trace, step, snapshot)
    return trace


def derive_trace(
    steps: Sequence[AlgorithmStep],
    index: int,
    snapshot: Optional[GraphSnapshot] = None,
) -> TraceFlags:
    """TraceFlags for `steps[0..index]` inclusive, built from scratch."""
    if index < 0:
        return TraceFlags()
    return apply_steps(TraceFlags(), steps[: index + 1], snapshot)
