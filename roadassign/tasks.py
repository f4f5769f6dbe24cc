"""Target time windows and time-window-aware routing over a road network."""

from __future__ import annotations

import heapq
import itertools
import math
import random
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

from roadassign.graph import GraphProcessor
from roadassign.network import Edge

# Limits of single-precision floats, used as the starting extremes.
_FLOAT_MAX = 3.4028234663852886e38
_FLOAT_MIN = 1.1754943508222875e-38


@dataclass(frozen=True)
class TimeWindow:
    """An interval of acceptable arrival times."""

    early_time: float
    late_time: float


def time_window_penalty(arrival: float, window: TimeWindow) -> float:
    """Return how far ``arrival`` falls outside ``window``; infinite stays infinite."""
    if arrival == math.inf:
        return math.inf
    if arrival < window.early_time:
        return window.early_time - arrival
    if arrival > window.late_time:
        return arrival - window.late_time
    return 0.0


def reconstruct_node_path(
    prev: Mapping[str, str], source: str, target: str
) -> list[str]:
    """Follow ``prev`` back from ``target`` to ``source``; [] if the chain breaks."""
    path: list[str] = []
    current = target
    while current in prev or current == source:
        path.append(current)
        if current == source:
            break
        current = prev[current]
    if not path or path[-1] != source:
        return []
    path.reverse()
    return path


def _ratio(length: float, speed: float) -> float:
    if speed == 0:
        return math.inf
    return length / speed


class TaskGenerator:
    """Generates target time windows and finds paths that try to meet them.

    ``edges`` maps an edge id to ``(length, speed)``; ``from_edges`` and
    ``to_edges`` describe the connections as in a road network.
    """

    def __init__(
        self,
        from_edges: Optional[Mapping[str, Sequence[Edge]]] = None,
        to_edges: Optional[Mapping[str, Sequence[Edge]]] = None,
        edges: Optional[Mapping[str, tuple[float, float]]] = None,
        rng: Optional[random.Random] = None,
    ) -> None:
        self.from_edges: dict[str, list[Edge]] = {k: list(v) for k, v in (from_edges or {}).items()}
        self.to_edges: dict[str, list[Edge]] = {k: list(v) for k, v in (to_edges or {}).items()}
        self.edges: dict[str, tuple[float, float]] = dict(edges or {})
        self.rng = rng if rng is not None else random.Random()
        self.graph = GraphProcessor(self.from_edges, self.to_edges)

    def gen_time_windows(self, n: int) -> dict[str, TimeWindow]:
        """Pick up to ``n`` random edges and give each a random time window.

        The window opens between one and two times the longest single-edge
        travel time and lasts between one and two times the shortest.
        """
        candidates: set[str] = set()
        min_time = _FLOAT_MAX
        max_time = _FLOAT_MIN
        for source, targets in self.from_edges.items():
            candidates.add(source)
            for edge in targets:
                candidates.add(edge.id)
                travel = _ratio(edge.length, edge.speed)
                min_time = min(min_time, travel)
                max_time = max(max_time, travel)

        chosen = sorted(candidates)
        self.rng.shuffle(chosen)
        chosen = chosen[: max(0, min(n, len(chosen)))]

        windows: dict[str, TimeWindow] = {}
        for edge_id in chosen:
            early = self.rng.uniform(max_time, 2 * max_time)
            extra = self.rng.uniform(min_time, 2 * min_time)
            windows[edge_id] = TimeWindow(early, early + extra)
        return windows

    def join_path(self, path: Sequence[str]) -> str:
        """Join edge ids, each followed by a space."""
        return "".join(f"{node} " for node in path)

    def travel_time(self, path: Sequence[str]) -> float:
        """Sum length over speed for every known edge on ``path``."""
        return sum(
            _ratio(*self.edges[edge]) for edge in path if edge in self.edges
        )

    def find_best_time_window_path(
        self, source: str, target: tuple[str, TimeWindow]
    ) -> tuple[list[str], float]:
        """Return ``(path, arrival)`` to ``target`` trying to arrive in its window.

        When the shortest path arrives too early, detours branching off one
        of the last few edges are tried and the one with the smallest
        penalty is kept. An unreachable target gives ``([], inf)``.
        """
        target_id, window = target
        _, (initial_path, initial_arrival) = self.graph.find_shortest_path(source, target_id)
        if initial_arrival == math.inf:
            return [], initial_arrival
        if initial_arrival >= window.early_time:
            return initial_path, initial_arrival

        best_penalty = time_window_penalty(initial_arrival, window)
        best_time = initial_arrival
        best_path = initial_path

        limit = min(len(initial_path) - 1, 3)
        for back in range(1, limit + 1):
            idx = len(initial_path) - back
            current_edge = initial_path[idx]
            figures = self.edges.get(current_edge)
            if figures is None or figures[1] == 0.0:
                continue
            prefix = initial_path[:idx]
            if not prefix:
                break
            following = self.to_edges.get(prefix[-1])
            if following is None:
                continue
            for next_edge in following:
                if next_edge.id == current_edge:
                    continue
                _, (alt_path, alt_arrival) = self.graph.find_shortest_path(next_edge.id, target_id)
                if alt_arrival == math.inf:
                    continue
                candidate = prefix + alt_path
                candidate_time = self.travel_time(candidate)
                penalty = time_window_penalty(candidate_time, window)
                if penalty < best_penalty:
                    best_penalty = penalty
                    best_time = candidate_time
                    best_path = candidate
                    if penalty == 0.0:
                        return best_path, best_time
        return best_path, best_time

    def k_shortest_paths(self, source: str, target: str, k: int) -> dict[float, list[str]]:
        """Return up to ``k`` loopless shortest paths keyed by total length.

        Length counts every edge entered after the source. Paths of equal
        length share a key, the later one winning. Unreachable gives {}.
        """
        adjacency = {node: list(edges) for node, edges in self.to_edges.items()}
        counter = itertools.count()

        def dijkstra(start: str, end: str) -> tuple[list[str], float]:
            heap: list[tuple[float, int, list[str]]] = [(0.0, next(counter), [start])]
            visited: set[str] = set()
            while heap:
                length, _, nodes = heapq.heappop(heap)
                current = nodes[-1]
                if current == end:
                    return nodes, length
                if current in visited:
                    continue
                visited.add(current)
                for edge in adjacency.get(current, ()):
                    heapq.heappush(heap, (length + edge.length, next(counter), nodes + [edge.id]))
            return [], _FLOAT_MAX

        first_nodes, first_length = dijkstra(source, target)
        if not first_nodes:
            return {}

        shortest: list[tuple[list[str], float]] = [(first_nodes, first_length)]
        seen: set[tuple[str, ...]] = {tuple(first_nodes)}
        candidates: list[tuple[float, int, list[str]]] = []

        for k_index in range(1, k):
            last_nodes = shortest[k_index - 1][0]
            for i in range(len(last_nodes) - 1):
                spur_node = last_nodes[i]
                root_path = last_nodes[: i + 1]
                removed: list[Edge] = []
                for nodes, _ in shortest:
                    if len(nodes) > i + 1 and nodes[: i + 1] == root_path:
                        origin, dest = nodes[i], nodes[i + 1]
                        if origin not in adjacency:
                            continue
                        kept = [e for e in adjacency[origin] if e.id != dest]
                        removed.extend(e for e in adjacency[origin] if e.id == dest)
                        adjacency[origin] = kept

                spur_nodes, _ = dijkstra(spur_node, target)
                if removed:
                    adjacency.setdefault(spur_node, []).extend(removed)

                if not spur_nodes:
                    continue
                total_path = root_path + spur_nodes[1:]
                if tuple(total_path) in seen:
                    continue
                total_length = 0.0
                for here, there in zip(total_path, total_path[1:]):
                    if here not in adjacency:
                        total_length = _FLOAT_MAX
                        break
                    match = next((e for e in adjacency[here] if e.id == there), None)
                    if match is not None:
                        total_length += match.length
                heapq.heappush(candidates, (total_length, next(counter), total_path))
                seen.add(tuple(total_path))

            if not candidates:
                break
            length, _, nodes = heapq.heappop(candidates)
            shortest.append((nodes, length))

        return {length: nodes for nodes, length in shortest}

    def feasible(self, sources: Sequence[str], targets: Sequence[str]) -> bool:
        """Return True if a greedy pairing links every source to a distinct target."""
        if len(sources) != len(targets):
            return False
        used: set[str] = set()
        for source in sources:
            for target in targets:
                if target in used:
                    continue
                if self.graph.shortest_path(source, target):
                    used.add(target)
                    break
            else:
                return False
        return True