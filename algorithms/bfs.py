"""
bfs.py — Breadth-First Search
==============================
Two generators share the FIFO discipline:

  bfs(snapshot)        – traversal.  One VISIT per reachable node, in
                         level order.  Nodes are marked seen when they are
                         ENQUEUED, so no node is ever yielded twice.
  bfs_path(snapshot)   – pathfinding.  Nodes are marked visited when they
                         are DEQUEUED (a node may sit in the queue more than
                         once; the extra copies are skipped).  Stops at the
                         end node and yields the path as RESULT steps.
                         The path is shortest by edge count.

Pseudocode lines are 0-indexed and match the PSEUDOCODE constants so the
UI can highlight them live.
"""

from collections import deque
from typing import Deque, Dict, List, Set

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
# Pseudocode — each string is one displayed line; index = pseudocode_line
# ---------------------------------------------------------------------------
PSEUDOCODE: List[str] = [
    "def BFS(graph, source):",                  # 0
    "    queue ← [source]",                     # 1
    "    seen ← {source}",                      # 2
    "    while queue is not empty:",            # 3
    "        node ← queue.dequeue()",           # 4
    "        visit(node)",                      # 5
    "        for neighbour in adj(node):",      # 6
    "            if neighbour not in seen:",    # 7
    "                seen.add(neighbour)",      # 8
    "                queue.enqueue(neighbour)", # 9
]

PATH_PSEUDOCODE: List[str] = [
    "def BFSPath(graph, source, target):",      # 0
    "    queue ← [source]",                     # 1
    "    visited ← {}",                         # 2
    "    parent ← {}",                          # 3
    "    while queue is not empty:",            # 4
    "        (p, node) ← queue.dequeue()",      # 5
    "        if node in visited: continue",     # 6
    "        visited.add(node); parent[node] = p", # 7
    "        if node == target: return path",   # 8
    "        for neighbour in adj(node):",      # 9
    "            if neighbour not visited:",    # 10
    "                queue.enqueue(neighbour)", # 11
    "    return NOT FOUND",                     # 12
]


def _queue_items(queue: Deque[EdgeRef]) -> List[TraceItem]:
    return items_of([pending.target for pending in queue])


# ---------------------------------------------------------------------------
# Traversal
# ---------------------------------------------------------------------------
def bfs(snapshot: GraphSnapshot) -> StepGenerator:
    """
    Yields one VISIT step per reachable node.

    The VISIT edge is `{discovering node → node}`; the start node's edge
    is the root edge `{-1 → start}`.
    """
    start = snapshot.start_node_id
    queue: Deque[EdgeRef] = deque([EdgeRef.root(start)])
    seen: Set[int] = {start}

    while queue:
        current = queue.popleft()
        node = current.target

        added: List[int] = []
        for edge in snapshot.neighbours(node):
            if edge.target not in seen:
                seen.add(edge.target)
                queue.append(EdgeRef(node, edge.target))
                added.append(edge.target)

        message = f"**Visiting node {nid(node)}**"
        if added:
            message += f", added **{', '.join(nid(n) for n in added)}** to queue"

        yield AlgorithmStep(
            StepType.VISIT,
            current,
            StepTrace(
                message,
                DataStructureSnapshot("queue", _queue_items(queue), TraceItem(node), added or None),
                pseudocode_line=5,
            ),
        )


# ---------------------------------------------------------------------------
# Pathfinding
# ---------------------------------------------------------------------------
def bfs_path(snapshot: GraphSnapshot) -> StepGenerator:
    """
    Yields VISIT steps until the end node is dequeued, then the RESULT
    path.  Yields no RESULT steps if the end node is unreachable.
    """
    start, end = snapshot.start_node_id, snapshot.end_node_id
    if end is None:
        return

    if start == end:
        yield from same_endpoint_steps(start, "queue")
        return

    queue: Deque[EdgeRef] = deque([EdgeRef.root(start)])
    visited: Set[int] = set()
    parent: Dict[int, int] = {}
    found = False

    while queue:
        current = queue.popleft()
        node = current.target
        if node in visited:
            continue

        visited.add(node)
        parent[node] = current.source

        if node == end:
            found = True
            yield AlgorithmStep(
                StepType.VISIT,
                current,
                StepTrace(
                    f"**Found destination node {nid(node)}!**",
                    DataStructureSnapshot("queue", _queue_items(queue), TraceItem(node)),
                    pseudocode_line=8,
                ),
            )
            break

        added: List[int] = []
        for edge in snapshot.neighbours(node):
            if edge.target not in visited:
                queue.append(EdgeRef(node, edge.target))
                added.append(edge.target)

        message = f"**Visiting node {nid(node)}**"
        if added:
            message += f", added **{', '.join(nid(n) for n in added)}** to queue"

        yield AlgorithmStep(
            StepType.VISIT,
            current,
            StepTrace(
                message,
                DataStructureSnapshot("queue", _queue_items(queue), TraceItem(node), added or None),
                pseudocode_line=7,
            ),
        )

    if found:
        yield from result_steps(reconstruct_path(parent, start, end), line=8)
