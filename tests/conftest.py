"""Pytest configuration and fixtures for the visualizer tests."""

from typing import Callable, Iterable, List, Optional, Tuple

import pytest

from algorithms import AlgorithmRegistry, DEFAULT_ADAPTERS, EdgeRef, build_registry
from engine import ManualClock, Scheduler
from graph import GraphSnapshot

EdgeSpec = Tuple  # (source, target) | (source, target, weight) | (source, target, weight, "undirected")


def make_snapshot(
    edges: Iterable[EdgeSpec],
    start: int = 1,
    end: Optional[int] = None,
    nodes: Optional[Iterable[int]] = None,
) -> GraphSnapshot:
    """
    Build a snapshot from compact edge tuples.  Edges are directed with
    weight 1 unless stated; undirected edges get their reverse record.
    Every endpoint (and every id in `nodes`) becomes an adjacency key.
    """
    raw = []
    node_ids: List[int] = list(nodes or [])
    for spec in edges:
        source, target = spec[0], spec[1]
        weight = spec[2] if len(spec) > 2 else 1
        kind = spec[3] if len(spec) > 3 else "directed"
        raw.append({"source": source, "target": target, "weight": weight, "type": kind})
        for n in (source, target):
            if n not in node_ids:
                node_ids.append(n)
    for n in (start, end):
        if n is not None and n not in node_ids:
            node_ids.append(n)
    return GraphSnapshot.from_edges(node_ids, raw, start, end)


def undirected(*pairs) -> List[EdgeSpec]:
    """(a, b) or (a, b, w) tuples → undirected edge specs."""
    return [(p[0], p[1], p[2] if len(p) > 2 else 1, "undirected") for p in pairs]


def edge_pairs(edges: Iterable[EdgeRef]) -> List[Tuple[int, int]]:
    return [(e.source, e.target) for e in edges]


@pytest.fixture
def snapshot_of() -> Callable[..., GraphSnapshot]:
    """The make_snapshot builder."""
    return make_snapshot


@pytest.fixture
def undirected_edges() -> Callable[..., List[EdgeSpec]]:
    return undirected


@pytest.fixture
def pairs() -> Callable[[Iterable[EdgeRef]], List[Tuple[int, int]]]:
    return edge_pairs


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def scheduler(clock: ManualClock) -> Scheduler:
    """A scheduler that only moves when the test advances the clock."""
    return Scheduler(clock)


@pytest.fixture
def fresh_registry() -> AlgorithmRegistry:
    """An isolated registry holding the default adapters."""
    return build_registry(DEFAULT_ADAPTERS)


@pytest.fixture
def diamond(snapshot_of) -> GraphSnapshot:
    """
    Weighted directed diamond, 1 → 4:
        1→2 (1), 1→3 (4), 2→3 (1), 2→4 (5), 3→4 (1)
    Shortest path 1→2→3→4, cost 3.
    """
    return snapshot_of([(1, 2, 1), (1, 3, 4), (2, 3, 1), (2, 4, 5), (3, 4, 1)], start=1, end=4)


@pytest.fixture
def flask_client():
    from main import create_app

    app = create_app({"TESTING": True, "SECRET_KEY": "test", "DEFAULT_GRAPH_SEED": 7})
    with app.test_client() as client:
        yield client
