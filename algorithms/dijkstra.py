"""
dijkstra.py — Dijkstra's Shortest-Path Algorithm
==================================================
Generator-based Dijkstra over an explicit `unvisited` set.

Yields a VISIT step at:
  1. The start node (after its neighbours are relaxed)
  2. Each node settled afterwards, on the edge from its predecessor
  3. The end node  →  "Found destination", then the RESULT path

If the unvisited minimum is ∞ before the end node is settled, the
generator stops without RESULT steps.

Overlay exposes:
  • "priority-queue" – unvisited nodes with a finite distance, sorted by it

Design decisions:
  - The minimum is picked by a linear scan in insertion order with a
    strict `<`, so ties go to the node that entered the distance table
    first (adjacency-key order).  A heap would break ties by node id.
  - `previous` only changes on strict improvement.
  - Dijkstra requires non-negative weights; the session refuses to start
    it on graphs with negative edges.
"""

from typing import Dict, List, Optional

from graph import GraphSnapshot
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
    "def Dijkstra(graph, source, target):",        # 0
    "    dist ← {v: ∞ for v in V}",                # 1
    "    dist[source] ← 0",                        # 2
    "    unvisited ← V",                           # 3
    "    prev ← {}",                               # 4
    "    while unvisited is not empty:",           # 5
    "        node ← argmin(dist, unvisited)",      # 6
    "        if dist[node] == ∞: return NOT FOUND", # 7
    "        unvisited.remove(node)",              # 8
    "        for (neighbour, w) in adj(node):",    # 9
    "            if dist[node] + w < dist[nbr]:",  # 10
    "                dist[nbr] ← dist[node] + w",  # 11
    "                prev[nbr] ← node",            # 12
    "        if node == target: return path",      # 13
]


def _queue_state(unvisited: Dict[int, None], distances: Dict[int, float]) -> List[TraceItem]:
    reachable = [n for n in unvisited if distances[n] != INF]
    reachable.sort(key=lambda n: distances[n])
    return [TraceItem(n, distances[n]) for n in reachable]


def _relax(
    snapshot: GraphSnapshot,
    node: int,
    distances: Dict[int, float],
    previous: Dict[int, int],
    unvisited: Dict[int, None],
) -> List[int]:
    updated: List[int] = []
    for edge in snapshot.neighbours(node):
        if edge.target not in unvisited:
            continue
        candidate = distances[node] + edge.weight
        if candidate < distances.get(edge.target, INF):
            distances[edge.target] = candidate
            previous[edge.target] = node
            updated.append(edge.target)
    return updated


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def dijkstra(snapshot: GraphSnapshot) -> StepGenerator:
    start, end = snapshot.start_node_id, snapshot.end_node_id
    if end is None:
        return

    if start == end:
        yield from same_endpoint_steps(start, "priority-queue", 0)
        return

    # dicts double as ordered sets: iteration order is insertion order
    distances: Dict[int, float] = {n: INF for n in snapshot.adjacency_list}
    distances.setdefault(start, INF)
    distances.setdefault(end, INF)
    distances[start] = 0
    unvisited: Dict[int, None] = dict.fromkeys(distances)
    previous: Dict[int, int] = {}

    # -- start node ----------------------------------------------------------
    del unvisited[start]
    updated = _relax(snapshot, start, distances, previous, unvisited)
    message = f"**Starting at node {nid(start)}**"
    if updated:
        message += f", updated **{', '.join(nid(n) for n in updated)}**"
    yield AlgorithmStep(
        StepType.VISIT,
        EdgeRef.root(start),
        StepTrace(
            message,
            DataStructureSnapshot("priority-queue", _queue_state(unvisited, distances), TraceItem(start, 0), updated or None),
            pseudocode_line=2,
        ),
    )

    # -- main loop -----------------------------------------------------------
    while unvisited:
        current: Optional[int] = None
        best = INF
        for node in unvisited:
            if distances[node] < best:
                best = distances[node]
                current = node

        if current is None:
            return

        del unvisited[current]
        updated = _relax(snapshot, current, distances, previous, unvisited)
        edge = EdgeRef(previous.get(current, EdgeRef.ROOT), current)

        if current == end:
            yield AlgorithmStep(
                StepType.VISIT,
                edge,
                StepTrace(
                    f"**Found destination node {nid(current)}!** (distance: {fmt_dist(best)})",
                    DataStructureSnapshot("priority-queue", _queue_state(unvisited, distances), TraceItem(current, best)),
                    pseudocode_line=13,
                ),
            )
            yield from result_steps(reconstruct_path(previous, start, end), line=13)
            return

        message = f"**Visiting node {nid(current)}** (distance: {fmt_dist(best)})"
        if updated:
            message += f", updated **{', '.join(nid(n) for n in updated)}**"
        yield AlgorithmStep(
            StepType.VISIT,
            edge,
            StepTrace(
                message,
                DataStructureSnapshot("priority-queue", _queue_state(unvisited, distances), TraceItem(current, best), updated or None),
                pseudocode_line=11 if updated else 9,
            ),
        )
