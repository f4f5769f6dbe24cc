"""Shortest travel-time paths between edges of a road network."""

from __future__ import annotations

import heapq
import math
from typing import Mapping, Optional, Sequence

from roadassign.network import Edge

PathResult = tuple[tuple[str, str], tuple[list[str], float]]


def _weight(edge: Edge) -> float:
    return edge.length / (edge.speed if edge.speed > 0 else 1.0)


class GraphProcessor:
    """Dijkstra over edges, where entering an edge costs length over speed.

    Only edges that are keys of ``to_edges`` (or the source itself) can be
    reached; a zero or negative speed counts as one. Solved queries are
    cached.
    """

    def __init__(
        self,
        from_edges: Optional[Mapping[str, Sequence[Edge]]] = None,
        to_edges: Optional[Mapping[str, Sequence[Edge]]] = None,
    ) -> None:
        self.from_edges: dict[str, list[Edge]] = {k: list(v) for k, v in (from_edges or {}).items()}
        self.to_edges: dict[str, list[Edge]] = {k: list(v) for k, v in (to_edges or {}).items()}
        self._results: dict[tuple[str, str], tuple[list[str], float]] = {}

    def find_shortest_path(self, source: str, target: str) -> PathResult:
        """Return ``((source, target), (path, cost))``.

        An unreachable target gives an empty path and an infinite cost,
        which is not cached.
        """
        dist = dict.fromkeys(self.to_edges, math.inf)
        dist[source] = 0.0
        prev: dict[str, str] = {}
        heap = [(0.0, source)]

        while heap:
            current, node = heapq.heappop(heap)
            if current > dist[node]:
                continue
            if node == target:
                continue
            for edge in self.to_edges.get(node, ()):
                candidate = dist[node] + _weight(edge)
                if candidate < dist.get(edge.id, 0.0):
                    dist[edge.id] = candidate
                    prev[edge.id] = node
                    heapq.heappush(heap, (candidate, edge.id))

        key = (source, target)
        if target != source and target not in prev:
            return key, ([], math.inf)

        path = [target]
        while path[-1] != source:
            path.append(prev[path[-1]])
        path.reverse()
        self._results[key] = (path, dist[target])
        return key, (list(path), dist[target])

    def _solve(self, source: str, target: str) -> tuple[list[str], float]:
        cached = self._results.get((source, target))
        if cached is not None:
            return list(cached[0]), cached[1]
        return self.find_shortest_path(source, target)[1]

    def shortest_path(self, source: str, target: str) -> list[str]:
        """Return the path from ``source`` to ``target``, or [] if unreachable."""
        return self._solve(source, target)[0]

    def cheap_cost(self, source: str, target: str) -> float:
        """Return the travel time to ``target``, or infinity if unreachable."""
        return self._solve(source, target)[1]