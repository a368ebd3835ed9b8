"""Tests for run summaries and comparison."""

from algorithms import get_algorithm
from engine import RunSummary, compare, record_run, summarize


class TestSummarize:

    def test_dijkstra_on_diamond(self, diamond):
        adapter = get_algorithm("dijkstra")
        steps = list(adapter.generator(diamond))

        summary = summarize(adapter, diamond, steps)

        assert summary.algorithm_name == "Dijkstra's"
        assert summary.visit_steps == 4
        assert summary.nodes_visited == 4
        assert summary.result_edges == 3
        assert summary.path_cost == 3
        assert summary.total_steps == 8
        assert summary.succeeded

    def test_record_run_keeps_error(self, snapshot_of):
        snap = snapshot_of([(1, 2), (3, 4)], start=1, end=4)

        summary = record_run(get_algorithm("bfs-pathfinding"), snap)

        assert not summary.succeeded
        assert summary.result_edges == 0
        assert summary.nodes_visited == 2
        assert summary.wall_time_ms >= 0

    def test_to_dict(self, diamond):
        data = record_run(get_algorithm("bfs"), diamond).to_dict()

        assert data["algorithm_id"] == "bfs"
        assert data["end_node_id"] == 4
        assert data["error"] is None


class TestCompare:

    def test_winners(self, diamond):
        bfs = record_run(get_algorithm("bfs-pathfinding"), diamond)
        dij = record_run(get_algorithm("dijkstra"), diamond)

        result = compare(bfs, dij)

        # BFS takes 1→2→4 (cost 6), Dijkstra 1→2→3→4 (cost 3)
        assert result.winner_cost == "Dijkstra's"
        assert bfs.path_cost == 6

    def test_tie(self):
        left = RunSummary(algorithm_name="A", nodes_visited=3, total_steps=5, path_cost=2)
        right = RunSummary(algorithm_name="B", nodes_visited=3, total_steps=4, path_cost=2)

        result = compare(left, right)

        assert result.winner_nodes == "tie"
        assert result.winner_cost == "tie"
        assert result.winner_steps == "B"
