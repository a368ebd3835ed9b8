"""
snapshot.py — Algorithm-facing Graph Snapshot
==============================================
The read-only view every algorithm consumes.  Built fresh per run from the
live editor Graph (see Graph.to_snapshot) and discarded afterwards.

    snapshot.adjacency_list   {node_id: [EdgeInfo, …]}   every node is a key
    snapshot.nodes            [NodeInfo, …]
    snapshot.start_node_id    int
    snapshot.end_node_id      Optional[int]

An undirected logical edge is stored as TWO EdgeInfo records, one per
direction, with the same weight and type.  Algorithms only look at
`EdgeInfo.type` to skip the "there-and-back" edge in cycle detection and
to reject directed graphs in Prim's.
"""

from dataclasses import dataclass, field, replace
from typing import Dict, Iterable, Iterator, List, Optional

from graph.edge import EdgeType


@dataclass(frozen=True)
class NodeInfo:
    id: int


@dataclass(frozen=True)
class EdgeInfo:
    source: int
    target: int
    weight: float = 1
    type:   EdgeType = EdgeType.DIRECTED

    @property
    def is_undirected(self) -> bool:
        return self.type is EdgeType.UNDIRECTED


@dataclass(frozen=True)
class GraphSnapshot:
    adjacency_list: Dict[int, List[EdgeInfo]] = field(default_factory=dict)
    nodes:          List[NodeInfo]            = field(default_factory=list)
    start_node_id:  int                       = 0
    end_node_id:    Optional[int]             = None

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_edges(
        cls,
        node_ids: Iterable[int],
        edges: Iterable[dict],
        start_node_id: int,
        end_node_id: Optional[int] = None,
    ) -> "GraphSnapshot":
        """
        Build a snapshot from plain edge dicts:
            {"source": 1, "target": 2, "weight": 3, "type": "undirected"}

        `weight` defaults to 1 and `type` to directed.  Undirected edges get
        their reverse record added automatically.
        """
        adjacency: Dict[int, List[EdgeInfo]] = {nid: [] for nid in node_ids}
        for raw in edges:
            edge_type = EdgeType(raw.get("type", EdgeType.DIRECTED.value))
            weight = raw.get("weight", 1)
            src, tgt = raw["source"], raw["target"]
            adjacency.setdefault(src, []).append(EdgeInfo(src, tgt, weight, edge_type))
            if edge_type is EdgeType.UNDIRECTED:
                adjacency.setdefault(tgt, []).append(EdgeInfo(tgt, src, weight, edge_type))
        return cls(
            adjacency_list=adjacency,
            nodes=[NodeInfo(nid) for nid in adjacency],
            start_node_id=start_node_id,
            end_node_id=end_node_id,
        )

    def with_endpoints(self, start_node_id: int, end_node_id: Optional[int] = None) -> "GraphSnapshot":
        return replace(self, start_node_id=start_node_id, end_node_id=end_node_id)

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------
    def neighbours(self, node_id: int) -> List[EdgeInfo]:
        return self.adjacency_list.get(node_id, [])

    def all_edges(self) -> Iterator[EdgeInfo]:
        """Every stored record, in adjacency order (undirected edges appear twice)."""
        for edges in self.adjacency_list.values():
            yield from edges

    def node_ids(self) -> List[int]:
        return [n.id for n in self.nodes]

    def find_edge(self, source: int, target: int) -> Optional[EdgeInfo]:
        for edge in self.adjacency_list.get(source, []):
            if edge.target == target:
                return edge
        return None

    def weight_of(self, source: int, target: int) -> Optional[float]:
        edge = self.find_edge(source, target)
        return edge.weight if edge else None

    def has_directed_edges(self) -> bool:
        return any(e.type is EdgeType.DIRECTED for e in self.all_edges())

    def has_negative_weights(self) -> bool:
        return any(e.weight < 0 for e in self.all_edges())
