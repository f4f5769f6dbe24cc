import math
import random

import pytest

from roadassign.assigner import AssignmentResult, PairAssigner, calculate_deviation
from roadassign.graph import GraphProcessor
from roadassign.network import Edge
from roadassign.tasks import TaskGenerator, TimeWindow


def _generator():
    # Two separate components: a -> b -> d and p -> q.
    lengths = {"a": 1.0, "b": 2.0, "d": 3.0, "p": 1.0, "q": 4.0}
    links = {"a": ["b"], "b": ["d"], "d": [], "p": ["q"], "q": []}
    to_edges = {
        src: [Edge(dst, lengths[dst], 1.0) for dst in dsts] for src, dsts in links.items()
    }
    edges = {name: (length, 1.0) for name, length in lengths.items()}
    return TaskGenerator({}, to_edges, edges, rng=random.Random(1))


WIDE = TimeWindow(0.0, 1000.0)


def test_deviation_values():
    window = TimeWindow(10.0, 20.0)
    assert calculate_deviation(window.early_time - 4.0, window) == 4.0
    assert calculate_deviation(window.late_time + 1.5, window) == 1.5
    assert calculate_deviation(12.0, window) == 0.0
    assert calculate_deviation(math.inf, window) == math.inf


def test_single_pair_uses_shortest_path():
    gen = _generator()
    results = PairAssigner([("a", 0.0)], {"d": WIDE}, gen).assign()
    expected_cost = GraphProcessor({}, gen.to_edges).cheap_cost("a", "d")
    assert results == [AssignmentResult("a", expected_cost, ["a", "b", "d"], WIDE)]


def test_departure_includes_start_time():
    gen = _generator()
    start = 10.0
    late = PairAssigner([("a", start)], {"d": WIDE}, gen).assign()
    early = PairAssigner([("a", 0.0)], {"d": WIDE}, gen).assign()
    assert late[0].departure_time == early[0].departure_time + start


def test_pairs_follow_reachability():
    gen = _generator()
    targets = {"q": WIDE, "d": TimeWindow(0.0, 500.0)}
    results = PairAssigner([("a", 0.0), ("p", 0.0)], targets, gen).assign()
    paired = {r.source: r.path[-1] for r in results}
    assert paired == {"a": "d", "p": "q"}
    for result in results:
        assert result.path[0] == result.source
        assert result.time_window == targets[result.path[-1]]


def test_cost_matrix_shape_and_values():
    gen = _generator()
    assigner = PairAssigner([("a", 0.0), ("p", 0.0)], {"d": WIDE, "q": WIDE}, gen)
    matrix = assigner.build_cost_matrix()
    assert len(matrix) == 2
    assert all(len(row) == 2 for row in matrix)
    assert matrix[0][0] == 0.0
    assert matrix[0][1] == math.inf
    assert matrix[1][0] == math.inf
    assert matrix[1][1] == 0.0


def test_fewer_targets_pads_and_skips():
    gen = _generator()
    assigner = PairAssigner([("a", 0.0), ("p", 0.0)], {"q": WIDE}, gen)
    matrix = assigner.build_cost_matrix()
    assert all(len(row) == 2 for row in matrix)
    results = assigner.assign()
    assert [(r.source, r.path[-1]) for r in results] == [("p", "q")]


def test_no_sources_gives_no_results():
    gen = _generator()
    assert PairAssigner([], {"d": WIDE}, gen).assign() == []


@pytest.mark.parametrize("start", [0.0, 5.0])
def test_deviation_reflects_shifted_window(start):
    gen = _generator()
    window = TimeWindow(start + 100.0, start + 200.0)
    assigner = PairAssigner([("a", start)], {"d": window}, gen)
    matrix = assigner.build_cost_matrix()
    result = assigner.assign()[0]
    assert matrix[0][0] == calculate_deviation(result.departure_time, window)