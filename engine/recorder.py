"""
recorder.py — Run Summary & Analytics
======================================
Condenses a finished run into the numbers the Analytics panel renders.

Usage:
    summary = summarize(adapter, snapshot, steps, error=result.error, wall_time_ms=t)

or, to time a fresh run:

    summary = record_run(adapter, snapshot)

Comparison Mode:
    Run two adapters on the SAME snapshot, then compare(left, right).
"""

import time
from dataclasses import asdict, dataclass, field
from typing import List, Optional, Sequence

from algorithms import AlgorithmAdapter, AlgorithmStep, StepType
from graph import GraphSnapshot


# ---------------------------------------------------------------------------
# RunSummary — what the Analytics panel renders
# ---------------------------------------------------------------------------
@dataclass
class RunSummary:
    algorithm_id:   str           = ""
    algorithm_name: str           = ""
    start_node_id:  int           = 0
    end_node_id:    Optional[int] = None
    visit_steps:    int           = 0     # number of VISIT steps
    nodes_visited:  int           = 0     # distinct nodes reached by a VISIT
    result_edges:   int           = 0     # RESULT / CYCLE edges, root edge excluded
    path_cost:      float         = 0.0   # total weight along the result edges
    total_steps:    int           = 0
    wall_time_ms:   float         = 0.0
    error:          Optional[str] = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    def to_dict(self) -> dict:
        return asdict(self)


@dataclass
class ComparisonResult:
    left:  RunSummary = field(default_factory=RunSummary)
    right: RunSummary = field(default_factory=RunSummary)
    # derived
    winner_nodes: str = ""   # which algorithm visited fewer nodes
    winner_steps: str = ""
    winner_cost:  str = ""   # which algorithm found the cheaper result


def summarize(
    adapter: AlgorithmAdapter,
    snapshot: GraphSnapshot,
    steps: Sequence[AlgorithmStep],
    error: Optional[str] = None,
    wall_time_ms: float = 0.0,
) -> RunSummary:
    visits = [s for s in steps if s.type is StepType.VISIT]
    results = [s.edge for s in steps if s.type is not StepType.VISIT and not s.edge.is_root]

    # path cost: sum snapshot weights along the result edges
    cost = 0.0
    for edge in results:
        weight = snapshot.weight_of(edge.source, edge.target)
        if weight is not None:
            cost += weight

    return RunSummary(
        algorithm_id=adapter.metadata.id,
        algorithm_name=adapter.metadata.name,
        start_node_id=snapshot.start_node_id,
        end_node_id=snapshot.end_node_id,
        visit_steps=len(visits),
        nodes_visited=len({s.edge.target for s in visits}),
        result_edges=len(results),
        path_cost=cost,
        total_steps=len(steps),
        wall_time_ms=round(wall_time_ms, 2),
        error=error,
    )


def record_run(adapter: AlgorithmAdapter, snapshot: GraphSnapshot) -> RunSummary:
    """Drain the generator once, time it, and summarise."""
    started = time.monotonic()
    steps: List[AlgorithmStep] = list(adapter.generator(snapshot))
    wall_ms = (time.monotonic() - started) * 1000
    error = adapter.execute(snapshot).error
    return summarize(adapter, snapshot, steps, error=error, wall_time_ms=wall_ms)


# ---------------------------------------------------------------------------
# Comparison helper
# ---------------------------------------------------------------------------
def compare(left: RunSummary, right: RunSummary) -> ComparisonResult:
    """Given two summaries of runs on the same graph, pick the winners."""

    def winner(l_val, r_val):
        if l_val == r_val:
            return "tie"
        return left.algorithm_name if l_val < r_val else right.algorithm_name

    return ComparisonResult(
        left=left,
        right=right,
        winner_nodes=winner(left.nodes_visited, right.nodes_visited),
        winner_steps=winner(left.total_steps, right.total_steps),
        winner_cost=winner(left.path_cost, right.path_cost),
    )
