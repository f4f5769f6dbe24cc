import math
import random
from itertools import permutations

import pytest

from roadassign.hungarian import solve_hungarian


def _assignment_cost(matrix, assignment):
    return sum(matrix[r][c] for r, c in enumerate(assignment) if c >= 0)


def _best_cost(matrix):
    rows = len(matrix)
    cols = len(matrix[0])
    if rows <= cols:
        return min(
            sum(matrix[r][c] for r, c in enumerate(perm))
            for perm in permutations(range(cols), rows)
        )
    return min(
        sum(matrix[r][c] for c, r in enumerate(perm))
        for perm in permutations(range(rows), cols)
    )


def _random_matrix(seed, rows, cols):
    rng = random.Random(seed)
    return [[float(rng.randint(0, 20)) for _ in range(cols)] for _ in range(rows)]


def test_empty_matrix_gives_empty_result():
    assert solve_hungarian([]) == []


def test_empty_first_row_gives_empty_result():
    assert solve_hungarian([[]]) == []


def test_two_by_two_picks_cheaper_diagonal():
    assert solve_hungarian([[4.0, 1.0], [2.0, 5.0]]) == [1, 0]


def test_single_cell_is_assigned():
    assert solve_hungarian([[7.5]]) == [0]


@pytest.mark.parametrize("seed", range(8))
@pytest.mark.parametrize("size", [3, 4, 5])
def test_square_assignment_is_optimal_permutation(seed, size):
    matrix = _random_matrix(seed, size, size)
    assignment = solve_hungarian(matrix)
    assert sorted(assignment) == list(range(size))
    assert _assignment_cost(matrix, assignment) == pytest.approx(_best_cost(matrix))


@pytest.mark.parametrize("seed", range(6))
def test_more_rows_than_columns_leaves_rows_unassigned(seed):
    matrix = _random_matrix(seed, 4, 2)
    assignment = solve_hungarian(matrix)
    assert len(assignment) == 4
    assigned = [c for c in assignment if c >= 0]
    assert sorted(assigned) == [0, 1]
    assert assignment.count(-1) == 2
    assert _assignment_cost(matrix, assignment) == pytest.approx(_best_cost(matrix))


@pytest.mark.parametrize("seed", range(6))
def test_more_columns_than_rows_assigns_every_row(seed):
    matrix = _random_matrix(seed, 2, 4)
    assignment = solve_hungarian(matrix)
    assert len(assignment) == 2
    assert all(0 <= c < 4 for c in assignment)
    assert len(set(assignment)) == 2
    assert _assignment_cost(matrix, assignment) == pytest.approx(_best_cost(matrix))


def test_ragged_matrix_is_rejected():
    with pytest.raises(ValueError):
        solve_hungarian([[1.0, 2.0], [3.0]])


def test_all_infinite_costs_are_rejected():
    with pytest.raises(ValueError):
        solve_hungarian([[math.inf]])