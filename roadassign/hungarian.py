"""Minimum-cost assignment by the Hungarian method with potentials."""

from __future__ import annotations

import math
from typing import Sequence


def solve_hungarian(cost_matrix: Sequence[Sequence[float]]) -> list[int]:
    """Assign rows to columns so that the total cost is minimal.

    The matrix may be rectangular; it is padded with zeros to a square.
    Returns, for every row, the index of its column, or -1 when the row is
    left unassigned. An empty matrix, or one whose first row is empty,
    gives an empty list.

    Raises ValueError for ragged rows or when no finite assignment exists.
    """
    if not cost_matrix or not cost_matrix[0]:
        return []

    rows = len(cost_matrix)
    cols = len(cost_matrix[0])
    n = max(rows, cols)

    cost = [[0.0] * n for _ in range(n)]
    for r, row in enumerate(cost_matrix):
        if len(row) != cols:
            raise ValueError("cost matrix rows must all have the same length")
        cost[r][:cols] = (float(value) for value in row)

    u = [0.0] * n
    v = [0.0] * n
    # match[j] is the 1-based row matched to 1-based column j; match[0] holds
    # the row whose augmenting path is being searched.
    match = [0] * (n + 1)
    way = [0] * (n + 1)

    for row_index in range(1, n + 1):
        match[0] = row_index
        minv = [math.inf] * (n + 1)
        used = [False] * (n + 1)
        j0 = 0
        while True:
            used[j0] = True
            i0 = match[j0]
            row_cost = cost[i0 - 1]
            row_potential = u[i0 - 1]
            delta = math.inf
            j1 = -1
            for j in range(1, n + 1):
                if used[j]:
                    continue
                slack = row_cost[j - 1] - row_potential - v[j - 1]
                if slack < minv[j]:
                    minv[j] = slack
                    way[j] = j0
                if minv[j] < delta:
                    delta = minv[j]
                    j1 = j
            if j1 == -1:
                raise ValueError("cost matrix has no finite assignment")
            for j in range(n + 1):
                if used[j]:
                    u[match[j] - 1] += delta
                    if j > 0:
                        v[j - 1] -= delta
                else:
                    minv[j] -= delta
            j0 = j1
            if match[j0] == 0:
                break

        while j0 != 0:
            previous = way[j0]
            match[j0] = match[previous]
            j0 = previous

    result = [-1] * rows
    for column, matched_row in enumerate(match[1:]):
        row = matched_row - 1
        if 0 <= row < rows and column < cols:
            result[row] = column
    return result