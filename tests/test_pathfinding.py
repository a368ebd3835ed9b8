"""Tests for the BFS / DFS pathfinding adapters."""

from collections import deque

import pytest

from algorithms import END_NODE_REQUIRED, StepType, get_algorithm
from algorithms.bfs import bfs_path
from algorithms.paths import reconstruct_path
from graph import Graph

NO_PATH = "No path found between the selected nodes."


class TestBFSPath:
    """Tests for BFS pathfinding."""

    def test_fewest_edges(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (2, 3), (3, 5), (1, 4), (4, 5)], start=1, end=5)

        result = get_algorithm("bfs-pathfinding").execute(snap)

        assert result.error is None
        assert pairs(result.result_edges) == [(-1, 1), (1, 4), (4, 5)]

    def test_stops_at_destination(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (1, 3), (2, 4), (3, 4), (4, 5)], start=1, end=4)

        steps = list(bfs_path(snap))
        visits = [s for s in steps if s.type is StepType.VISIT]

        assert pairs(s.edge for s in visits) == [(-1, 1), (1, 2), (1, 3), (2, 4)]
        assert "Found destination" in visits[-1].trace.message
        assert all(s.edge.target != 5 for s in steps)

    def test_duplicate_queue_entries_skipped(self, snapshot_of):
        # 4 is enqueued twice (from 2 and from 3) but visited once
        snap = snapshot_of([(1, 2), (1, 3), (2, 4), (3, 4), (4, 6)], start=1, end=5, nodes=[5])

        result = get_algorithm("bfs-pathfinding").execute(snap)
        targets = [e.target for e in result.visited_edges]

        assert targets.count(4) == 1
        assert result.error == NO_PATH

    @pytest.mark.parametrize("seed", range(4))
    def test_path_length_is_minimum(self, seed):
        graph = Graph.generate_random(num_nodes=10, edge_probability=0.2, directed=True, seed=seed)
        start, end = 0, 9
        snap = graph.to_snapshot(start, end)

        hops = {start: 0}
        queue = deque([start])
        while queue:
            node = queue.popleft()
            for edge in snap.neighbours(node):
                if edge.target not in hops:
                    hops[edge.target] = hops[node] + 1
                    queue.append(edge.target)

        result = get_algorithm("bfs-pathfinding").execute(snap)

        if end in hops:
            assert len(result.result_edges) - 1 == hops[end]
        else:
            assert result.error == NO_PATH


class TestDFSPath:
    """Tests for DFS pathfinding."""

    def test_may_return_longer_path(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (2, 3), (3, 5), (1, 4), (4, 5)], start=1, end=5)

        result = get_algorithm("dfs-pathfinding").execute(snap)

        assert pairs(result.result_edges) == [(-1, 1), (1, 2), (2, 3), (3, 5)]

    def test_unreachable(self, snapshot_of):
        snap = snapshot_of([(1, 2), (3, 4)], start=1, end=4)

        result = get_algorithm("dfs-pathfinding").execute(snap)

        assert result.error == NO_PATH
        assert result.result_edges is None
        assert [e.target for e in result.visited_edges] == [1, 2]


class TestPathfindingCommon:
    """Behaviour shared by every pathfinding adapter."""

    PATHFINDERS = ["bfs-pathfinding", "dfs-pathfinding", "dijkstra", "bellman-ford"]

    @pytest.mark.parametrize("algo_id", PATHFINDERS)
    def test_missing_end_node(self, algo_id, snapshot_of):
        snap = snapshot_of([(1, 2)], start=1)
        adapter = get_algorithm(algo_id)

        assert list(adapter.generator(snap)) == []
        result = adapter.execute(snap)
        assert result.error == END_NODE_REQUIRED
        assert result.visited_edges == []

    @pytest.mark.parametrize("algo_id", PATHFINDERS)
    def test_same_start_and_end(self, algo_id, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (2, 1)], start=2, end=2)
        adapter = get_algorithm(algo_id)

        steps = list(adapter.generator(snap))

        assert [s.type for s in steps] == [StepType.VISIT, StepType.RESULT]
        assert pairs(s.edge for s in steps) == [(-1, 2), (-1, 2)]
        assert adapter.execute(snap).error is None


class TestReconstructPath:
    """Tests for parent-chain reconstruction."""

    def test_forward_order_with_root(self, pairs):
        parent = {1: -1, 2: 1, 3: 2}

        assert pairs(reconstruct_path(parent, 1, 3)) == [(-1, 1), (1, 2), (2, 3)]

    def test_broken_chain_stops(self, pairs):
        parent = {3: 2}

        assert pairs(reconstruct_path(parent, 1, 3)) == [(-1, 1), (2, 3)]

    def test_loop_in_parents_terminates(self, pairs):
        parent = {2: 3, 3: 2}

        assert pairs(reconstruct_path(parent, 1, 3)) == [(-1, 1), (2, 3)]
