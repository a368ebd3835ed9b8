"""
dfs.py — Depth-First Search
=============================
Generator-based DFS using an explicit stack (no Python recursion limit
issues).  Two generators share the LIFO discipline:

  dfs(snapshot)        – traversal.  One VISIT per reachable node.
  dfs_path(snapshot)   – pathfinding.  Stops when the end node is popped
                         and yields the path found as RESULT steps.  DFS
                         does NOT guarantee the shortest path.

Neighbours are pushed in REVERSE adjacency order so that the first listed
neighbour is popped first.  Nodes are marked seen when pushed, which means
a node keeps the parent that first discovered it.

The overlay exposes the full stack at every step (bottom first) so the UI
can render the stack panel.
"""

from typing import Dict, List, Set

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
    items_of,
    nid,
)


# ---------------------------------------------------------------------------
# Pseudocode
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def DFS(graph, source):",                  # 0
    "    stack ← [source]",                     # 1
    "    seen ← {source}",                      # 2
    "    while stack is not empty:",            # 3
    "        node ← stack.pop()",               # 4
    "        visit(node)",                      # 5
    "        for neighbour in reversed(adj(node)):", # 6
    "            if neighbour not in seen:",    # 7
    "                seen.add(neighbour)",      # 8
    "                stack.push(neighbour)",    # 9
]

PATH_PSEUDOCODE: List[str] = [
    "def DFSPath(graph, source, target):",      # 0
    "    stack ← [source]",                     # 1
    "    seen ← {source}",                      # 2
    "    parent ← {}",                          # 3
    "    while stack is not empty:",            # 4
    "        (p, node) ← stack.pop()",          # 5
    "        parent[node] = p",                 # 6
    "        if node == target: return path",   # 7
    "        for neighbour in reversed(adj(node)):", # 8
    "            if neighbour not in seen:",    # 9
    "                seen.add(neighbour)",      # 10
    "                stack.push(neighbour)",    # 11
    "    return NOT FOUND",                     # 12
]


def _push_neighbours(snapshot: GraphSnapshot, node: int, stack: List[EdgeRef], seen: Set[int]) -> List[int]:
    """Push unseen neighbours in reverse order; return them in natural order."""
    added: List[int] = []
    for edge in reversed(snapshot.neighbours(node)):
        if edge.target not in seen:
            seen.add(edge.target)
            stack.append(EdgeRef(node, edge.target))
            added.insert(0, edge.target)
    return added


def _visit_step(node: int, current: EdgeRef, stack: List[EdgeRef], added: List[int], line: int) -> AlgorithmStep:
    message = f"**Visiting node {nid(node)}**"
    if added:
        message += f", pushed **{', '.join(nid(n) for n in added)}** to stack"
    return AlgorithmStep(
        StepType.VISIT,
        current,
        StepTrace(
            message,
            DataStructureSnapshot("stack", items_of([e.target for e in stack]), TraceItem(node), added or None),
            pseudocode_line=line,
        ),
    )


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------
def dfs(snapshot: GraphSnapshot) -> StepGenerator:
    start = snapshot.start_node_id
    stack: List[EdgeRef] = [EdgeRef.root(start)]
    seen: Set[int] = {start}

    while stack:
        current = stack.pop()
        node = current.target
        added = _push_neighbours(snapshot, node, stack, seen)
        yield _visit_step(node, current, stack, added, line=5)


# ---------------------------------------------------------------------------
# Pathfinding
# ---------------------------------------------------------------------------
def dfs_path(snapshot: GraphSnapshot) -> StepGenerator:
    start, end = snapshot.start_node_id, snapshot.end_node_id
    if end is None:
        return

    if start == end:
        yield from same_endpoint_steps(start, "stack")
        return

    stack: List[EdgeRef] = [EdgeRef.root(start)]
    seen: Set[int] = {start}
    parent: Dict[int, int] = {}
    found = False

    while stack:
        current = stack.pop()
        node = current.target
        parent[node] = current.source

        if node == end:
            found = True
            yield AlgorithmStep(
                StepType.VISIT,
                current,
                StepTrace(
                    f"**Found destination node {nid(node)}!**",
                    DataStructureSnapshot("stack", items_of([e.target for e in stack]), TraceItem(node)),
                    pseudocode_line=7,
                ),
            )
            break

        added = _push_neighbours(snapshot, node, stack, seen)
        yield _visit_step(node, current, stack, added, line=6)

    if found:
        yield from result_steps(reconstruct_path(parent, start, end), line=7)
