"""
paths.py — shared path reconstruction for the pathfinding generators.
"""

from typing import Dict, List, Optional

from algorithms.step import (
    AlgorithmStep,
    DataStructureSnapshot,
    EdgeRef,
    StepTrace,
    StepType,
    TraceItem,
    nid,
)


def reconstruct_path(parent: Dict[int, int], start: int, end: int) -> List[EdgeRef]:
    """
    Walk `parent` backwards from `end` to `start` and return the path as
    edges in start → end order, beginning with the synthetic root edge.

    The walk stops early on a ROOT sentinel, a missing parent, or a node
    seen twice, so a broken chain yields a partial path instead of looping.
    """
    path: List[EdgeRef] = []
    current = end
    seen = {current}
    while current != start:
        prev = parent.get(current)
        if prev is None or prev == EdgeRef.ROOT or prev in seen:
            break
        path.append(EdgeRef(prev, current))
        seen.add(prev)
        current = prev
    path.append(EdgeRef.root(start))
    path.reverse()
    return path


def result_steps(path: List[EdgeRef], line: Optional[int] = None) -> List[AlgorithmStep]:
    steps = []
    for i, edge in enumerate(path):
        if edge.is_root:
            message = f"Path starts at **{nid(edge.target)}**"
        else:
            message = f"Path edge {i}: **{nid(edge.source)}→{nid(edge.target)}**"
        steps.append(AlgorithmStep(StepType.RESULT, edge, StepTrace(message, pseudocode_line=line)))
    return steps


def same_endpoint_steps(start: int, kind: str, value: Optional[float] = None) -> List[AlgorithmStep]:
    """Start == end: one VISIT and one RESULT step, both on the root edge."""
    root = EdgeRef.root(start)
    visit = AlgorithmStep(
        StepType.VISIT,
        root,
        StepTrace(
            f"**Start and destination are the same** (node {nid(start)})",
            DataStructureSnapshot(kind, [], TraceItem(start, value)),
        ),
    )
    return [visit, AlgorithmStep(StepType.RESULT, root)]
