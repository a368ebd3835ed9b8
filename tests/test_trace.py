"""Tests for the trace-flag annotation rule and replay derivation."""

import random

import pytest

from algorithms import AlgorithmStep, EdgeRef, StepType, get_algorithm
from engine import TraceFlags, apply_step, apply_steps, derive_trace, edge_key
from graph import Graph


def visit(s, t):
    return AlgorithmStep(StepType.VISIT, EdgeRef(s, t))


def result(s, t):
    return AlgorithmStep(StepType.RESULT, EdgeRef(s, t))


def cycle(s, t):
    return AlgorithmStep(StepType.CYCLE, EdgeRef(s, t))


class TestApplyStep:

    def test_visit_marks_node_and_edge(self):
        trace = apply_step(TraceFlags(), visit(1, 2))

        assert trace.node_flags(2).is_visited
        assert trace.edge_flags(1, 2).is_used_in_traversal
        assert not trace.edge_flags(2, 1).is_used_in_traversal
        assert not trace.node_flags(1).is_visited

    def test_root_edge_marks_node_only(self):
        trace = apply_step(TraceFlags(), visit(EdgeRef.ROOT, 5))

        assert trace.node_flags(5).is_visited
        assert trace.edges == {}

    def test_result_and_cycle_flags(self):
        trace = apply_steps(TraceFlags(), [result(1, 2), cycle(2, 3)])

        assert trace.node_flags(2).is_in_shortest_path
        assert trace.edge_flags(1, 2).is_used_in_shortest_path
        assert trace.node_flags(3).is_in_cycle
        assert trace.edge_flags(2, 3).is_used_in_cycle
        assert not trace.node_flags(2).is_visited

    def test_undirected_edge_marks_reverse_key(self, snapshot_of, undirected_edges):
        snap = snapshot_of(undirected_edges((1, 2)) + [(2, 3)], start=1)

        trace = apply_steps(TraceFlags(), [visit(1, 2), visit(2, 3)], snap)

        assert trace.edge_flags(2, 1).is_used_in_traversal
        assert trace.edge_flags(2, 3).is_used_in_traversal
        assert edge_key(3, 2) not in trace.edges

    def test_idempotent(self):
        steps = [visit(EdgeRef.ROOT, 1), visit(1, 2), result(1, 2)]

        once = apply_steps(TraceFlags(), steps)
        twice = apply_steps(apply_steps(TraceFlags(), steps), steps)

        assert once.to_dict() == twice.to_dict()

    def test_flags_never_unset(self):
        trace = apply_steps(TraceFlags(), [visit(1, 2), result(1, 2)])

        assert trace.edge_flags(1, 2).is_used_in_traversal
        assert trace.edge_flags(1, 2).is_used_in_shortest_path

    def test_to_dict_shape(self):
        trace = apply_step(TraceFlags(), visit(1, 2))

        data = trace.to_dict()

        assert data["nodes"]["2"] == {"isVisited": True, "isInShortestPath": False, "isInCycle": False}
        assert data["edges"]["1-2"]["isUsedInTraversal"] is True


class TestDeriveTrace:

    def test_negative_index_is_empty(self):
        assert derive_trace([visit(EdgeRef.ROOT, 1)], -1).is_empty()

    def test_inclusive_prefix(self):
        steps = [visit(EdgeRef.ROOT, 1), visit(1, 2), visit(2, 3)]

        trace = derive_trace(steps, 1)

        assert trace.node_flags(2).is_visited
        assert not trace.node_flags(3).is_visited

    @pytest.mark.parametrize("seed", range(4))
    def test_any_jump_sequence_matches_straight_walk(self, seed):
        snap = Graph.generate_random(num_nodes=9, seed=seed).to_snapshot(0, 8)
        steps = list(get_algorithm("dijkstra").generator(snap))
        rng = random.Random(seed)

        for _ in range(20):
            index = rng.randint(-1, len(steps) - 1)
            expected = TraceFlags()
            for step in steps[: index + 1]:
                apply_step(expected, step, snap)
            assert derive_trace(steps, index, snap).to_dict() == expected.to_dict()
