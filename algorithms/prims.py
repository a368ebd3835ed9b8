"""
prims.py — Prim's Minimum Spanning Tree
========================================
Grows a tree from the start node, always adding the cheapest edge that
connects the tree to a new vertex.

    key[v]     min weight of an edge joining v to the tree (∞ until seen)
    parent[v]  the tree node at the other end of that edge

Each node added to the tree yields one VISIT step on `{parent[v] → v}`
(the start node uses the root edge).  There is no RESULT phase: the VISIT
sequence IS the spanning tree.

Preconditions (checked by the adapter, see algorithms/__init__.py):
  • every edge must be undirected; the generator yields nothing otherwise
  • every node must be reached; fewer VISIT steps than nodes means the
    graph is disconnected
"""

from typing import Dict, List, Optional, Set

from graph import GraphSnapshot
from algorithms.adapter import AlgorithmResult, StepGenerator
from algorithms.step import (
    AlgorithmStep,
    DataStructureSnapshot,
    EdgeRef,
    StepTrace,
    StepType,
    TraceItem,
    fmt_dist,
    nid,
)

INF = float("inf")

DIRECTED_EDGES_ERROR = "MST requires an undirected graph. Found directed edges."
DISCONNECTED_ERROR   = "Graph is not connected. MST requires a connected graph."


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def Prim(graph, source):",                    # 0
    "    key ← {v: ∞ for v in V}",                 # 1
    "    key[source] ← 0",                         # 2
    "    tree ← {}",                               # 3
    "    repeat |V| times:",                       # 4
    "        node ← argmin(key, V - tree)",        # 5
    "        tree.add(node)",                      # 6
    "        for (neighbour, w) in adj(node):",    # 7
    "            if nbr ∉ tree and w < key[nbr]:", # 8
    "                key[nbr] ← w",                # 9
    "                parent[nbr] ← node",          # 10
]


def prims(snapshot: GraphSnapshot) -> StepGenerator:
    if snapshot.has_directed_edges():
        return

    start = snapshot.start_node_id
    key: Dict[int, float] = {n: INF for n in snapshot.adjacency_list}
    key[start] = 0
    parent: Dict[int, int] = {}
    in_tree: Set[int] = set()

    for _ in range(len(snapshot.nodes)):
        node: Optional[int] = None
        best = INF
        for candidate, k in key.items():
            if candidate not in in_tree and k < best:
                best = k
                node = candidate

        if node is None:
            break

        in_tree.add(node)
        source = parent.get(node, EdgeRef.ROOT)

        updated: List[int] = []
        for edge in snapshot.neighbours(node):
            if edge.target not in in_tree and edge.weight < key.get(edge.target, INF):
                key[edge.target] = edge.weight
                parent[edge.target] = node
                updated.append(edge.target)

        if source == EdgeRef.ROOT:
            message = f"**Starting MST at node {nid(node)}**"
        else:
            message = f"**Added edge {nid(source)}→{nid(node)}** (weight: {fmt_dist(best)})"
        if updated:
            message += f", updated keys of **{', '.join(nid(n) for n in updated)}**"

        frontier = sorted(
            (n for n, k in key.items() if n not in in_tree and k != INF),
            key=lambda n: key[n],
        )
        yield AlgorithmStep(
            StepType.VISIT,
            EdgeRef(source, node),
            StepTrace(
                message,
                DataStructureSnapshot(
                    "priority-queue",
                    [TraceItem(n, key[n]) for n in frontier],
                    TraceItem(node, best),
                    updated or None,
                ),
                pseudocode_line=6,
            ),
        )


# ---------------------------------------------------------------------------
# Adapter checks
# ---------------------------------------------------------------------------
def check_undirected(snapshot: GraphSnapshot) -> Optional[str]:
    if snapshot.has_directed_edges():
        return DIRECTED_EDGES_ERROR
    return None


def check_connected(snapshot: GraphSnapshot, result: AlgorithmResult) -> Optional[str]:
    if len(result.visited_edges) != len(snapshot.nodes):
        return DISCONNECTED_ERROR
    return None
