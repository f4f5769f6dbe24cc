"""Pairing of vehicle sources with target time windows."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from roadassign.hungarian import solve_hungarian
from roadassign.tasks import TaskGenerator, TimeWindow


@dataclass
class AssignmentResult:
    """A source paired with its path, departure time and target window."""

    source: str
    departure_time: float
    path: list[str]
    time_window: TimeWindow


def calculate_deviation(arrival: float, window: TimeWindow) -> float:
    """Return how far ``arrival`` falls outside ``window``."""
    if arrival < window.early_time:
        return window.early_time - arrival
    if arrival > window.late_time:
        return arrival - window.late_time
    return 0.0


def _relative(window: TimeWindow, start: float) -> TimeWindow:
    return TimeWindow(window.early_time - start, window.late_time - start)


class PairAssigner:
    """Assigns each ``(source edge, start time)`` to one target window.

    Costs are the deviations of the best time-window paths; the pairing
    minimising their sum is chosen.
    """

    def __init__(
        self,
        sources: Sequence[tuple[str, float]],
        targets: Mapping[str, TimeWindow],
        task_generator: TaskGenerator,
        edges: Optional[Mapping[str, tuple[float, float]]] = None,
    ) -> None:
        self.sources = list(sources)
        self.targets = dict(targets)
        self.edges = dict(edges or {})
        self.task_generator = task_generator
        self._path_cache: dict[tuple[int, int], tuple[list[str], float]] = {}

    def build_cost_matrix(self) -> list[list[float]]:
        """Return one row per source and one column per target, zero-padded."""
        width = max(len(self.sources), len(self.targets))
        matrix = [[0.0] * width for _ in self.sources]
        for i, (source, start) in enumerate(self.sources):
            for j, (target_id, window) in enumerate(self.targets.items()):
                shifted = _relative(window, start)
                path, arrival = self.task_generator.find_best_time_window_path(
                    source, (target_id, shifted)
                )
                matrix[i][j] = calculate_deviation(arrival, shifted)
                self._path_cache[(i, j)] = (path, arrival)
        return matrix

    def assign(self) -> list[AssignmentResult]:
        """Return the assignments, in source order, of sources that got a target."""
        matrix = self.build_cost_matrix()
        if not matrix:
            return []
        if not matrix[0]:
            return []
        assignment = solve_hungarian(matrix)
        targets = list(self.targets.items())

        results = []
        for i, target_index in enumerate(assignment):
            if not 0 <= target_index < len(targets):
                continue
            source, start = self.sources[i]
            _, window = targets[target_index]
            path, arrival = self._path_cache[(i, target_index)]
            results.append(AssignmentResult(source, arrival + start, list(path), window))
        return results