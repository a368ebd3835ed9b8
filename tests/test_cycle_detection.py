"""Tests for the cycle detection adapter."""

from algorithms import StepType, get_algorithm
from algorithms.cycle_detection import cycle_detection

NO_CYCLE = "No cycle found in the graph."


class TestCycleDetection:
    """Tests for DFS three-colour cycle detection."""

    def test_directed_triangle(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (2, 3), (3, 1)], start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert result.error is None
        assert result.result_step_type is StepType.CYCLE
        assert pairs(result.result_edges) == [(1, 2), (2, 3), (3, 1)]
        assert pairs(result.visited_edges) == [(-1, 1), (1, 2), (2, 3), (3, 1)]

    def test_undirected_line_has_no_cycle(self, snapshot_of, undirected_edges):
        snap = snapshot_of(undirected_edges((1, 2), (2, 3)), start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert result.error == NO_CYCLE
        assert result.result_edges is None
        assert len(result.visited_edges) == 3

    def test_self_loop(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 1)], start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert result.error is None
        assert pairs(result.result_edges) == [(1, 1)]

    def test_undirected_triangle(self, snapshot_of, undirected_edges, pairs):
        snap = snapshot_of(undirected_edges((1, 2), (2, 3), (3, 1)), start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert pairs(result.result_edges) == [(1, 2), (2, 3), (3, 1)]

    def test_parent_skip_is_per_edge(self, snapshot_of, undirected_edges):
        # a directed edge elsewhere must not turn the undirected 1-2 into a cycle
        snap = snapshot_of(undirected_edges((1, 2)) + [(3, 4)], start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert result.error == NO_CYCLE

    def test_directed_diamond_is_acyclic(self, snapshot_of):
        # 4 is BLACK when reached the second time
        snap = snapshot_of([(1, 2), (1, 3), (2, 4), (3, 4)], start=1)

        assert get_algorithm("cycle-detection").execute(snap).error == NO_CYCLE

    def test_other_components_are_searched(self, snapshot_of, pairs):
        snap = snapshot_of([(1, 2), (3, 4), (4, 3)], start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert pairs(result.visited_edges) == [(-1, 1), (1, 2), (-1, 3), (3, 4), (4, 3)]
        assert pairs(result.result_edges) == [(3, 4), (4, 3)]

    def test_stops_at_first_cycle(self, snapshot_of):
        snap = snapshot_of([(1, 2), (2, 1), (3, 4), (4, 3)], start=1)

        steps = list(cycle_detection(snap))

        assert all(s.edge.target in (1, 2) for s in steps)

    def test_recursion_stack_trace(self, snapshot_of):
        snap = snapshot_of([(1, 2), (2, 3), (3, 1)], start=1)

        visits = [s for s in cycle_detection(snap) if s.type is StepType.VISIT]

        assert visits[2].trace.data_structure.kind == "recursion-stack"
        assert [i.id for i in visits[2].trace.data_structure.items] == [1, 2, 3]
        assert "Back edge" in visits[-1].trace.message

    def test_end_node_equal_to_start_still_reports_no_cycle(self, snapshot_of, undirected_edges):
        snap = snapshot_of(undirected_edges((1, 2), (2, 3)), start=1, end=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert result.error == NO_CYCLE
        assert result.result_edges is None

    def test_long_chain_does_not_recurse(self, snapshot_of, pairs):
        chain = [(n, n + 1) for n in range(1, 2000)] + [(2000, 1)]
        snap = snapshot_of(chain, start=1)

        result = get_algorithm("cycle-detection").execute(snap)

        assert result.error is None
        assert len(result.visited_edges) == 2001
        assert len(result.result_edges) == 2000
        assert pairs(result.result_edges)[-1] == (2000, 1)

    def test_long_acyclic_chain(self, snapshot_of):
        snap = snapshot_of([(n, n + 1) for n in range(1, 2000)], start=1)

        assert get_algorithm("cycle-detection").execute(snap).error == NO_CYCLE
