"""
cycle_detection.py — Cycle Detection (DFS three-colouring)
============================================================
    WHITE  unvisited
    GRAY   on the current recursion path
    BLACK  fully explored

DFS runs from the start node and then from every node still WHITE, in
adjacency order, so every component is checked.  Reaching a GRAY
neighbour means a back edge, i.e. a cycle, with one exception: an
UNDIRECTED edge leading straight back to the node's own parent is the
same edge walked in reverse and is skipped.  The check is per edge, so
graphs mixing directed and undirected edges are handled.

The first cycle found wins.  Its edges are yielded as CYCLE steps in
traversal order, closing edge last.  Without a cycle only VISIT steps are
yielded.

The walk keeps an explicit stack of frames instead of recursing, so long
chains never hit the interpreter recursion limit.

Overlay:
  • "recursion-stack" – the GRAY path, outermost call first
"""

from enum import Enum
from typing import Dict, Iterator, List, Tuple

from graph import EdgeInfo, GraphSnapshot
from algorithms.adapter import StepGenerator
from algorithms.step import (
    AlgorithmStep,
    DataStructureSnapshot,
    EdgeRef,
    StepTrace,
    StepType,
    TraceItem,
    items_of,
    nid,
)


class Color(Enum):
    WHITE = 0
    GRAY  = 1
    BLACK = 2


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(node, parent):",                      # 0
    "    color[node] ← GRAY",                      # 1
    "    for neighbour in adj(node):",             # 2
    "        if color[nbr] == WHITE:",             # 3
    "            if DFS(nbr, node): return True",  # 4
    "        elif color[nbr] == GRAY:",            # 5
    "            if undirected and nbr == parent: continue", # 6
    "            return CYCLE(node → nbr)",        # 7
    "    color[node] ← BLACK",                     # 8
    "    return False",                            # 9
]


def _cycle_edges(node: int, back_to: int, parent: Dict[int, int]) -> List[EdgeRef]:
    """Follow parents from `node` up to `back_to`, then close the loop."""
    path = [node]
    current = node
    while current != back_to and current in parent:
        current = parent[current]
        path.append(current)
    edges = [EdgeRef(path[i + 1], path[i]) for i in reversed(range(len(path) - 1))]
    edges.append(EdgeRef(node, back_to))
    return edges


def cycle_detection(snapshot: GraphSnapshot) -> StepGenerator:
    color: Dict[int, Color] = {n: Color.WHITE for n in snapshot.adjacency_list}
    parent: Dict[int, int] = {}
    # One frame per GRAY node: (node, parent, remaining out-edges).
    frames: List[Tuple[int, int, Iterator[EdgeInfo]]] = []
    cycle: List[EdgeRef] = []

    def recursion_stack(current: int) -> DataStructureSnapshot:
        return DataStructureSnapshot(
            "recursion-stack", items_of([f[0] for f in frames]), TraceItem(current)
        )

    def enter(node: int, parent_id: int) -> AlgorithmStep:
        color[node] = Color.GRAY
        parent[node] = parent_id
        frames.append((node, parent_id, iter(snapshot.neighbours(node))))
        return AlgorithmStep(
            StepType.VISIT,
            EdgeRef(parent_id, node),
            StepTrace(
                f"**Visiting node {nid(node)}**, marked gray",
                recursion_stack(node),
                pseudocode_line=1,
            ),
        )

    roots = [snapshot.start_node_id, *snapshot.adjacency_list]
    for root in roots:
        if cycle:
            break
        if color.get(root, Color.WHITE) is not Color.WHITE:
            continue
        yield enter(root, EdgeRef.ROOT)

        while frames and not cycle:
            node, parent_id, edges = frames[-1]
            edge = next(edges, None)
            if edge is None:
                color[node] = Color.BLACK
                frames.pop()
                continue

            neighbour = edge.target
            state = color.get(neighbour, Color.WHITE)
            if state is Color.WHITE:
                yield enter(neighbour, node)
            elif state is Color.GRAY:
                if edge.is_undirected and neighbour == parent_id:
                    continue
                yield AlgorithmStep(
                    StepType.VISIT,
                    EdgeRef(node, neighbour),
                    StepTrace(
                        f"**Back edge {nid(node)}→{nid(neighbour)}**: cycle found!",
                        recursion_stack(neighbour),
                        pseudocode_line=7,
                    ),
                )
                cycle.extend(_cycle_edges(node, neighbour, parent))

    for i, edge in enumerate(cycle):
        yield AlgorithmStep(
            StepType.CYCLE,
            edge,
            StepTrace(f"Cycle edge {i + 1}: **{nid(edge.source)}→{nid(edge.target)}**", pseudocode_line=7),
        )
