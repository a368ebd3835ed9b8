"""Tests for the BFS / DFS traversal adapters."""

from collections import deque

import pytest

from algorithms import StepType, get_algorithm
from algorithms.bfs import bfs
from algorithms.dfs import dfs
from graph import Graph


def hop_distances(snapshot):
    dist = {snapshot.start_node_id: 0}
    queue = deque([snapshot.start_node_id])
    while queue:
        node = queue.popleft()
        for edge in snapshot.neighbours(node):
            if edge.target not in dist:
                dist[edge.target] = dist[node] + 1
                queue.append(edge.target)
    return dist


class TestBFS:
    """Tests for breadth-first traversal."""

    def test_level_order(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (1, 3), (2, 4), (3, 4)], start=1)

        result = get_algorithm("bfs").execute(snap)

        assert result.error is None
        assert pairs(result.visited_edges) == [(-1, 1), (1, 2), (1, 3), (2, 4)]
        assert result.result_edges is None

    def test_each_reachable_node_once(self, snapshot_of):
        snap = snapshot_of([(1, 2), (2, 1), (2, 3), (3, 1), (1, 3)], start=1, nodes=[9])

        targets = [s.edge.target for s in bfs(snap)]

        assert sorted(targets) == [1, 2, 3]
        assert 9 not in targets

    def test_isolated_start(self, snapshot_of, pairs):
        snap = snapshot_of([(2, 3)], start=1)

        assert pairs(get_algorithm("bfs").execute(snap).visited_edges) == [(-1, 1)]

    @pytest.mark.parametrize("seed", range(5))
    def test_hop_distance_never_decreases(self, seed):
        snap = Graph.generate_random(num_nodes=12, edge_probability=0.25, seed=seed).to_snapshot(0)
        dist = hop_distances(snap)

        order = [s.edge.target for s in bfs(snap)]

        assert len(order) == 12
        assert [dist[n] for n in order] == sorted(dist[n] for n in order)

    def test_queue_trace(self, snapshot_of):
        snap = snapshot_of([(1, 2), (1, 3), (2, 4)], start=1)

        first = next(bfs(snap))
        ds = first.trace.data_structure

        assert first.type is StepType.VISIT
        assert ds.kind == "queue"
        assert [i.id for i in ds.items] == [2, 3]
        assert ds.processing.id == 1
        assert ds.just_added == [2, 3]
        assert "{n:1}" in first.trace.message


class TestDFS:
    """Tests for depth-first traversal."""

    def test_first_listed_neighbour_first(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (1, 3), (2, 4), (3, 4)], start=1)

        result = get_algorithm("dfs").execute(snap)

        assert pairs(result.visited_edges) == [(-1, 1), (1, 2), (2, 4), (1, 3)]

    def test_node_keeps_first_discoverer(self, snapshot_of, pairs):
        # 3 is seen when 1 is expanded, so it is later popped via 1→3
        snap = snapshot_of([(1, 2), (1, 3), (2, 3)], start=1)

        assert pairs(get_algorithm("dfs").execute(snap).visited_edges) == [(-1, 1), (1, 2), (1, 3)]

    def test_stack_trace(self, snapshot_of):
        snap = snapshot_of([(1, 2), (1, 3)], start=1)

        first = next(dfs(snap))
        ds = first.trace.data_structure

        assert ds.kind == "stack"
        # bottom first: 3 was pushed before 2
        assert [i.id for i in ds.items] == [3, 2]
        assert ds.just_added == [2, 3]

    def test_undirected_graph_visits_all(self, snapshot_of, undirected_edges):
        snap = snapshot_of(undirected_edges((1, 2), (2, 3), (3, 4)), start=3)

        targets = [s.edge.target for s in dfs(snap)]

        assert sorted(targets) == [1, 2, 3, 4]
        assert targets[0] == 3
