"""Tests for the Floyd-Warshall adapter."""

from algorithms import StepType, get_algorithm
from algorithms.floyd_warshall import NO_NODES_ERROR, NO_PATHS_ERROR, floyd_warshall
from graph import GraphSnapshot


class TestFloydWarshall:

    def test_shortest_path_tree(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 3, 10), (1, 2, 1), (2, 3, 1)], start=1)

        result = get_algorithm("floyd-warshall").execute(snap)

        assert result.error is None
        assert pairs(result.visited_edges) == [(-1, 1), (1, 3), (1, 2), (2, 3)]
        assert pairs(result.result_edges) == [(-1, 1), (1, 2), (2, 3)]

    def test_shared_edges_yielded_once(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2, 1), (2, 3, 1), (3, 4, 1)], start=1)

        result = get_algorithm("floyd-warshall").execute(snap)

        assert pairs(result.result_edges) == [(-1, 1), (1, 2), (2, 3), (3, 4)]

    def test_negative_edge(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2, 4), (1, 3, 1), (3, 2, -2)], start=1)

        result = get_algorithm("floyd-warshall").execute(snap)

        assert pairs(result.result_edges) == [(-1, 1), (1, 3), (3, 2)]

    def test_unreachable_nodes_left_out(self, snapshot_of):
        snap = snapshot_of([(1, 2, 1)], start=1, nodes=[3])

        result = get_algorithm("floyd-warshall").execute(snap)

        assert result.error is None
        assert 3 not in {e.target for e in result.result_edges}

    def test_undirected_records_seed_both_directions(self, snapshot_of, undirected_edges, pairs):
        snap = snapshot_of(undirected_edges((1, 2, 3)), start=2)

        result = get_algorithm("floyd-warshall").execute(snap)

        assert pairs(result.visited_edges) == [(-1, 2), (1, 2), (2, 1)]
        assert pairs(result.result_edges) == [(-1, 2), (2, 1)]

    def test_isolated_start(self, snapshot_of):
        snap = snapshot_of([], start=1)

        result = get_algorithm("floyd-warshall").execute(snap)

        assert result.error == NO_PATHS_ERROR

    def test_empty_graph(self):
        snap = GraphSnapshot()

        assert list(floyd_warshall(snap)) == []
        assert get_algorithm("floyd-warshall").execute(snap).error == NO_NODES_ERROR

    def test_negative_cycle_terminates(self, snapshot_of):
        snap = snapshot_of([(1, 2, 1), (2, 1, -3)], start=1)

        steps = list(floyd_warshall(snap))

        assert steps[-1].type is StepType.RESULT

    def test_distance_row_trace(self, snapshot_of):
        snap = snapshot_of([(1, 2, 5), (1, 3, 2)], start=1)

        root_result = next(s for s in floyd_warshall(snap) if s.type is StepType.RESULT)
        ds = root_result.trace.data_structure

        assert ds.kind == "distances"
        assert [(i.id, i.value) for i in ds.items] == [(1, 0), (3, 2), (2, 5)]
