"""
floyd_warshall.py — Floyd–Warshall (All-Pairs Shortest Paths)
===============================================================
The "matrix algorithm".  Computes every pair's distance, then shows the
shortest-path tree from the node the user clicked.

Structure:
  for k in nodes:          ← "intermediate" node
      for i in nodes:
          for j in nodes:
              if dist[i][k] + dist[k][j] < dist[i][j]:
                  dist[i][j] = dist[i][k] + dist[k][j]

Yields:
  1. VISIT on the root edge of the start node
  2. VISIT for every adjacency record, in adjacency order (these seed the
     matrix; an undirected edge appears once per direction)
  3. RESULT on the root edge, then one RESULT per tree edge, walking the
     next-hop matrix from the start node to every reachable node in node
     order.  An edge shared by several paths is yielded once.

Negative edges are fine; negative cycles are not detected.  A next-hop
walk that revisits a node stops there instead of looping.

Overlay:
  • "distances" – row `dist[start][*]` for the finite entries
"""

from typing import List, Optional, Set, Tuple

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

NO_NODES_ERROR = "No nodes in the graph."
NO_PATHS_ERROR = "No paths found from the selected node."


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def FloydWarshall(graph, source):",           # 0
    "    dist ← adjacency matrix",                 # 1
    "    next ← initialise next-hop matrix",       # 2
    "    for k in 0 … n-1:",                       # 3
    "        for i in 0 … n-1:",                   # 4
    "            for j in 0 … n-1:",               # 5
    "                if dist[i][k]+dist[k][j]",    # 6
    "                      < dist[i][j]:",         # 7
    "                    dist[i][j] = …",          # 8
    "                    next[i][j] = next[i][k]", # 9
    "    return paths from source via next",       # 10
]


# ---------------------------------------------------------------------------
# Generator
# ---------------------------------------------------------------------------
def floyd_warshall(snapshot: GraphSnapshot) -> StepGenerator:
    nodes = snapshot.node_ids()
    n     = len(nodes)
    if n == 0:
        return

    start = snapshot.start_node_id
    idx   = {node_id: i for i, node_id in enumerate(nodes)}   # id → matrix index

    # --- initialise dist & next matrices ---
    dist: List[List[float]]         = [[INF] * n for _ in range(n)]
    nxt:  List[List[Optional[int]]] = [[None] * n for _ in range(n)]
    for i in range(n):
        dist[i][i] = 0

    for edge in snapshot.all_edges():
        u, v = idx.get(edge.source), idx.get(edge.target)
        if u is None or v is None:
            continue
        if edge.weight < dist[u][v]:
            dist[u][v] = edge.weight
            nxt[u][v]  = v

    yield AlgorithmStep(
        StepType.VISIT,
        EdgeRef.root(start),
        StepTrace(
            f"**Starting at node {nid(start)}**: {n}×{n} distance matrix, diagonal 0, rest ∞",
            pseudocode_line=1,
        ),
    )
    for edge in snapshot.all_edges():
        yield AlgorithmStep(
            StepType.VISIT,
            EdgeRef(edge.source, edge.target),
            StepTrace(
                f"Edge **{nid(edge.source)}→{nid(edge.target)}** enters the matrix "
                f"(weight: {fmt_dist(edge.weight)})",
                pseudocode_line=2,
            ),
        )

    # ==============================================================
    # MAIN TRIPLE LOOP
    # ==============================================================
    for k in range(n):
        for i in range(n):
            if dist[i][k] == INF:
                continue
            for j in range(n):
                if dist[k][j] == INF:
                    continue
                new_dist = dist[i][k] + dist[k][j]
                if new_dist < dist[i][j]:
                    dist[i][j] = new_dist
                    nxt[i][j]  = nxt[i][k]

    si = idx.get(start)
    if si is None:
        return

    row = dist[si]
    reachable = sorted((j for j in range(n) if row[j] != INF), key=lambda j: row[j])
    yield AlgorithmStep(
        StepType.RESULT,
        EdgeRef.root(start),
        StepTrace(
            f"All pairs computed. **{len(reachable) - 1}** node(s) reachable from {nid(start)}",
            DataStructureSnapshot(
                "distances",
                [TraceItem(nodes[j], row[j]) for j in reachable],
                TraceItem(start, 0),
            ),
            pseudocode_line=10,
        ),
    )

    added: Set[Tuple[int, int]] = set()
    for j in range(n):
        if j == si or row[j] == INF:
            continue
        for u, v in _next_hops(nxt, si, j):
            key = (nodes[u], nodes[v])
            if key in added:
                continue
            added.add(key)
            yield AlgorithmStep(
                StepType.RESULT,
                EdgeRef(*key),
                StepTrace(
                    f"Path to {nid(nodes[j])} uses **{nid(key[0])}→{nid(key[1])}** "
                    f"(distance: {fmt_dist(row[j])})",
                    pseudocode_line=10,
                ),
            )


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------
def _next_hops(nxt: List[List[Optional[int]]], si: int, ti: int) -> List[Tuple[int, int]]:
    """Matrix-index hops from si to ti.  Stops early on a missing or repeated hop."""
    hops: List[Tuple[int, int]] = []
    seen = {si}
    cur  = si
    while cur != ti:
        step = nxt[cur][ti]
        if step is None or step in seen:
            break
        hops.append((cur, step))
        seen.add(step)
        cur = step
    return hops


# ---------------------------------------------------------------------------
# Adapter checks
# ---------------------------------------------------------------------------
def check_has_nodes(snapshot: GraphSnapshot) -> Optional[str]:
    return NO_NODES_ERROR if not snapshot.nodes else None


def check_paths_found(snapshot: GraphSnapshot, result: AlgorithmResult) -> Optional[str]:
    # the root edge alone means nothing was reachable
    if not result.result_edges or len(result.result_edges) <= 1:
        return NO_PATHS_ERROR
    return None
