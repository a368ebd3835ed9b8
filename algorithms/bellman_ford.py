"""
bellman_ford.py — Bellman–Ford Algorithm
=========================================
The only single-source shortest-path algorithm here that handles NEGATIVE
edge weights (but not negative cycles).

Structure:
  • The edge list is flattened from the adjacency list once, up front.
  • Up to V-1 rounds of relaxing every edge; a round with no update ends
    the loop early.
  • One extra "detector" round: if any edge can still be relaxed from a
    finite distance, a negative cycle is reachable from the source.

Yields a VISIT step for:
  1. The start node, on the root edge
  2. Each SUCCESSFUL relaxation (edges examined without improvement are
     not yielded)

followed by the RESULT path, unless a negative cycle was found or the end
node stayed at ∞.

Overlay:
  • "distances" – the relaxed node with its new distance
"""

from typing import Dict, List

from graph import EdgeInfo, GraphSnapshot
from algorithms.adapter import StepGenerator
from algorithms.paths import reconstruct_path, result_steps, same_endpoint_steps
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


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BellmanFord(graph, source, target):",     # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    prev ← {}",                               # 3
    "    for i in 1 … |V|-1:",                     # 4
    "        for each edge (u, v, w):",            # 5
    "            if dist[u] + w < dist[v]:",       # 6
    "                dist[v] ← dist[u] + w",       # 7
    "                prev[v] ← u",                 # 8
    "        if nothing changed: break",           # 9
    "    for each edge (u, v, w):",                # 10
    "        if dist[u] + w < dist[v]:",           # 11
    "            return NEGATIVE CYCLE",           # 12
    "    return path(prev, target)",               # 13
]


def bellman_ford(snapshot: GraphSnapshot) -> StepGenerator:
    start, end = snapshot.start_node_id, snapshot.end_node_id
    if end is None:
        return

    if start == end:
        yield from same_endpoint_steps(start, "distances", 0)
        return

    all_edges: List[EdgeInfo] = list(snapshot.all_edges())

    distances: Dict[int, float] = {}
    for node in snapshot.nodes:
        distances[node.id] = INF
    for node_id in snapshot.adjacency_list:
        distances.setdefault(node_id, INF)
    distances[start] = 0
    previous: Dict[int, int] = {}

    def reachable() -> int:
        return sum(1 for d in distances.values() if d != INF)

    yield AlgorithmStep(
        StepType.VISIT,
        EdgeRef.root(start),
        StepTrace(
            f"**Starting at node {nid(start)}** (distance: 0). 1 node reachable.",
            DataStructureSnapshot("distances", [], TraceItem(start, 0)),
            pseudocode_line=2,
        ),
    )

    # -- V-1 relaxation rounds ----------------------------------------------
    vertex_count = max(len(snapshot.nodes), len(distances))
    for round_no in range(1, vertex_count):
        updated = False
        for edge in all_edges:
            dist_from = distances.get(edge.source, INF)
            dist_to = distances.get(edge.target, INF)
            if dist_from == INF:
                continue
            candidate = dist_from + edge.weight
            if candidate >= dist_to:
                continue

            distances[edge.target] = candidate
            previous[edge.target] = edge.source
            updated = True

            prefix = "**Found destination!** " if edge.target == end else ""
            yield AlgorithmStep(
                StepType.VISIT,
                EdgeRef(edge.source, edge.target),
                StepTrace(
                    f"Iteration {round_no}: {prefix}Relaxed **{nid(edge.source)}→{nid(edge.target)}**, "
                    f"d: **{fmt_dist(dist_to)}→{fmt_dist(candidate)}**\n"
                    f"**{reachable()}** nodes reachable",
                    DataStructureSnapshot("distances", [], TraceItem(edge.target, candidate)),
                    pseudocode_line=7,
                ),
            )

        if not updated:
            break

    # -- negative-cycle detector --------------------------------------------
    for edge in all_edges:
        dist_from = distances.get(edge.source, INF)
        if dist_from != INF and dist_from + edge.weight < distances.get(edge.target, INF):
            return

    if distances.get(end, INF) == INF:
        return

    yield from result_steps(reconstruct_path(previous, start, end), line=13)
