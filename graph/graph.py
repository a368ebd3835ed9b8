"""
graph.py — Graph Container & Generator
=======================================
The live editor graph.  The UI mutates this object; every algorithm run
takes a fresh, read-only GraphSnapshot of it via `to_snapshot()`.

Responsibilities:
  1. CRUD on nodes & edges                  (add / remove / get / retype)
  2. Adjacency queries                      (neighbours, get_edge_between)
  3. Snapshot for algorithm runs            (to_snapshot)
  4. Random graph generation                (generate_random)
  5. Import from adjacency-list text        (from_adjacency_list)
  6. Serialisation round-trip               (to_dict / from_dict)

Design decisions:
  - Nodes stored in a plain dict keyed by integer id for O(1) lookup.
  - Edges are kept per source node, in insertion order.  That order is the
    "adjacency order" every algorithm iterates, so it is preserved through
    snapshot and serialisation.
  - Node ids come from a monotonically increasing counter and are never
    reused, so a snapshot's ids stay stable for its lifetime.
"""

import math
import random
from typing import Dict, List, Optional, Set, Tuple

from graph.edge import Edge, EdgeType
from graph.node import Node
from graph.snapshot import EdgeInfo, GraphSnapshot, NodeInfo


class GraphFormatError(ValueError):
    """Raised when imported graph text cannot be parsed."""


class Graph:
    """
    Attributes:
        nodes        : {node_id: Node}
        directed     : default directedness for new edges
        weighted     : whether weights are meaningful
        node_counter : next id handed out by create_node
        _out         : {node_id: [Edge, …]}   edges stored under their source
    """

    def __init__(self, directed: bool = False, weighted: bool = True):
        self.nodes:        Dict[int, Node]       = {}
        self.directed:     bool                  = directed
        self.weighted:     bool                  = weighted
        self.node_counter: int                   = 0
        self._out:         Dict[int, List[Edge]] = {}

    # ==================================================================
    # NODE CRUD
    # ==================================================================
    def add_node(self, node: Node) -> Node:
        self.nodes[node.id] = node
        self._out.setdefault(node.id, [])
        self.node_counter = max(self.node_counter, node.id + 1)
        return node

    def create_node(
        self,
        x: float = 0.0,
        y: float = 0.0,
        label: Optional[str] = None,
        node_id: Optional[int] = None,
    ) -> Node:
        """Convenience: create + add in one call."""
        if node_id is None:
            node_id = self.node_counter
        return self.add_node(Node(node_id=node_id, x=x, y=y, label=label))

    def remove_node(self, node_id: int) -> None:
        if node_id not in self.nodes:
            return
        # remove every edge touching this node
        for src in list(self._out):
            self._out[src] = [e for e in self._out[src] if e.target != node_id]
        del self.nodes[node_id]
        self._out.pop(node_id, None)

    def get_node(self, node_id: int) -> Optional[Node]:
        return self.nodes.get(node_id)

    # ==================================================================
    # EDGE CRUD
    # ==================================================================
    def add_edge(self, edge: Edge) -> Edge:
        if edge.source not in self.nodes or edge.target not in self.nodes:
            raise KeyError(f"Both endpoints must exist: {edge.source} → {edge.target}")
        self._out.setdefault(edge.source, []).append(edge)
        return edge

    def create_edge(
        self,
        source: int,
        target: int,
        weight: float = 1,
        directed: Optional[bool] = None,
    ) -> Edge:
        if directed is None:
            directed = self.directed
        if not self.weighted:
            weight = 1
        return self.add_edge(Edge(source=source, target=target, weight=weight, directed=directed))

    def remove_edge(self, source: int, target: int) -> None:
        edge = self.get_edge_between(source, target)
        if edge is None:
            return
        self._out[edge.source].remove(edge)

    def set_edge_weight(self, source: int, target: int, weight: float) -> None:
        edge = self._require_edge(source, target)
        edge.weight = weight

    def set_edge_type(self, source: int, target: int, edge_type: EdgeType) -> None:
        edge = self._require_edge(source, target)
        edge.directed = edge_type is EdgeType.DIRECTED

    def reverse_edge(self, source: int, target: int) -> Edge:
        edge = self._require_edge(source, target)
        self._out[edge.source].remove(edge)
        return self.add_edge(Edge(edge.target, edge.source, edge.weight, edge.directed))

    def get_edge_between(self, a: int, b: int) -> Optional[Edge]:
        """First edge connecting a and b (direction-aware)."""
        for e in self._out.get(a, []):
            if e.target == b:
                return e
        for e in self._out.get(b, []):
            if e.target == a and not e.directed:
                return e
        return None

    def _require_edge(self, source: int, target: int) -> Edge:
        edge = self.get_edge_between(source, target)
        if edge is None:
            raise KeyError(f"No edge {source} → {target}")
        return edge

    # ==================================================================
    # ADJACENCY QUERIES
    # ==================================================================
    def edges(self) -> List[Edge]:
        return [e for edges in self._out.values() for e in edges]

    def neighbours(self, node_id: int) -> List[Tuple[int, Edge]]:
        """Return [(neighbour_id, edge)] for every neighbour reachable in one hop."""
        result = [(e.target, e) for e in self._out.get(node_id, [])]
        for src, edges in self._out.items():
            for e in edges:
                if e.target == node_id and not e.directed and src != node_id:
                    result.append((src, e))
        return result

    # ==================================================================
    # SNAPSHOT
    # ==================================================================
    def adjacency_list(self) -> Dict[int, List[EdgeInfo]]:
        """
        Algorithm-facing adjacency: every node present as a key, undirected
        edges stored once per direction.
        """
        adjacency: Dict[int, List[EdgeInfo]] = {nid: [] for nid in self.nodes}
        for src, edges in self._out.items():
            for e in edges:
                adjacency[src].append(EdgeInfo(e.source, e.target, e.weight, e.type))
                if not e.directed:
                    adjacency[e.target].append(EdgeInfo(e.target, e.source, e.weight, e.type))
        return adjacency

    def to_snapshot(self, start_node_id: int, end_node_id: Optional[int] = None) -> GraphSnapshot:
        return GraphSnapshot(
            adjacency_list=self.adjacency_list(),
            nodes=[NodeInfo(nid) for nid in self.nodes],
            start_node_id=start_node_id,
            end_node_id=end_node_id,
        )

    # ==================================================================
    # SERIALISATION
    # ==================================================================
    def to_dict(self) -> dict:
        return {
            "directed":     self.directed,
            "weighted":     self.weighted,
            "node_counter": self.node_counter,
            "nodes":        [n.to_dict() for n in self.nodes.values()],
            "edges":        [e.to_dict() for e in self.edges()],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Graph":
        g = cls(directed=data.get("directed", False), weighted=data.get("weighted", True))
        for nd in data.get("nodes", []):
            g.add_node(Node.from_dict(nd))
        for ed in data.get("edges", []):
            g.add_edge(Edge.from_dict(ed))
        g.node_counter = max(g.node_counter, data.get("node_counter", 0))
        return g

    # ==================================================================
    # GENERATORS — Factory class-methods
    # ==================================================================
    @classmethod
    def generate_random(
        cls,
        num_nodes: int = 8,
        edge_probability: float = 0.3,
        directed: bool = False,
        weighted: bool = True,
        weight_range: Tuple[int, int] = (1, 10),
        seed: Optional[int] = None,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Erdős–Rényi style random graph.
        Each possible edge is included with probability `edge_probability`,
        then a shuffled backbone guarantees every node is reachable.
        """
        rng = random.Random(seed)
        g = cls(directed=directed, weighted=weighted)
        margin = 40

        # place nodes in a circle with jitter so it looks natural
        for i in range(num_nodes):
            angle  = 2 * math.pi * i / max(num_nodes, 1)
            radius = min(canvas_w, canvas_h) * 0.35
            cx, cy = canvas_w / 2, canvas_h / 2
            x = cx + radius * math.cos(angle) + rng.uniform(-30, 30)
            y = cy + radius * math.sin(angle) + rng.uniform(-30, 30)
            x = max(margin, min(canvas_w - margin, x))
            y = max(margin, min(canvas_h - margin, y))
            g.create_node(x, y, node_id=i)

        def weight() -> int:
            return rng.randint(*weight_range) if weighted else 1

        for i in range(num_nodes):
            targets = range(num_nodes) if directed else range(i + 1, num_nodes)
            for j in targets:
                if i == j:
                    continue
                if rng.random() < edge_probability:
                    g.create_edge(i, j, weight=weight())

        # guarantee connectivity: add a spanning-tree backbone
        order = list(range(num_nodes))
        rng.shuffle(order)
        for k in range(1, len(order)):
            if not g.get_edge_between(order[k - 1], order[k]):
                g.create_edge(order[k - 1], order[k], weight=weight())

        return g

    @classmethod
    def from_adjacency_list(
        cls,
        text: str,
        directed: bool = False,
        weighted: bool = True,
        canvas_w: float = 800,
        canvas_h: float = 500,
    ) -> "Graph":
        """
        Parse a simple text adjacency list.

        Supported formats (one node per line):
            1: 2 3 4            → 1 connects to 2, 3, 4  (weight 1)
            1: 2(3) 3(7)        → 1→2 weight 3, 1→3 weight 7
            0 -> 1, 2           → alternate arrow syntax

        Nodes are auto-laid-out in a circle.
        """
        adjacency: Dict[int, List[Tuple[int, float]]] = {}

        for lineno, line in enumerate(text.strip().splitlines(), start=1):
            line = line.strip()
            if not line or line.startswith("#"):
                continue

            for sep in (":", "→", "->"):
                if sep in line:
                    head, _, tail = line.partition(sep)
                    break
            else:
                raise GraphFormatError(f"line {lineno}: expected ':' or '->' in {line!r}")

            src = _parse_node_id(head.strip(), lineno)
            adjacency.setdefault(src, [])

            for token in tail.replace(",", " ").split():
                if "(" in token and token.endswith(")"):
                    tgt_str, w_str = token[:-1].split("(", 1)
                    try:
                        w = float(w_str)
                    except ValueError:
                        raise GraphFormatError(f"line {lineno}: bad weight {w_str!r}") from None
                else:
                    tgt_str, w = token, 1.0
                tgt = _parse_node_id(tgt_str, lineno)
                adjacency.setdefault(tgt, [])
                adjacency[src].append((tgt, w))

        g = cls(directed=directed, weighted=weighted)
        n = len(adjacency)
        if n == 0:
            return g

        cx, cy = canvas_w / 2, canvas_h / 2
        radius = min(canvas_w, canvas_h) * 0.35
        for i, nid in enumerate(adjacency):
            angle = 2 * math.pi * i / n
            g.create_node(cx + radius * math.cos(angle), cy + radius * math.sin(angle), node_id=nid)

        # add edges (deduplicate for undirected)
        seen: Set = set()
        for src, targets in adjacency.items():
            for tgt, w in targets:
                key = (src, tgt) if directed else frozenset((src, tgt))
                if key in seen:
                    continue
                seen.add(key)
                g.create_edge(src, tgt, weight=w)

        return g

    # ==================================================================
    # UTILITY
    # ==================================================================
    def node_count(self) -> int:
        return len(self.nodes)

    def edge_count(self) -> int:
        return sum(len(edges) for edges in self._out.values())

    def has_negative_edges(self) -> bool:
        return any(e.weight < 0 for e in self.edges())

    def node_ids(self) -> List[int]:
        return list(self.nodes.keys())

    def __repr__(self) -> str:
        kind = "directed" if self.directed else "undirected"
        return f"Graph({kind}, nodes={self.node_count()}, edges={self.edge_count()})"


def _parse_node_id(token: str, lineno: int) -> int:
    try:
        return int(token)
    except ValueError:
        raise GraphFormatError(f"line {lineno}: node ids must be integers, got {token!r}") from None
