"""Shortest paths over edges weighted by the length of the edge entered."""

from __future__ import annotations

import heapq
import math
from dataclasses import dataclass
from typing import Mapping, Optional, Sequence

_NO_PATH = -1.0


@dataclass
class EdgeInfo:
    """Length and speed of an edge."""

    length: float = 0.0
    speed: float = 0.0


class DijkstraPath:
    """Shortest paths with a cache of every solved source prefix.

    ``to_edge`` maps an edge to the edges reachable from it; ``edge_dict``
    gives each edge's figures. Entering an edge costs its length.
    """

    def __init__(
        self,
        to_edge: Optional[Mapping[str, Sequence[str]]] = None,
        edge_dict: Optional[Mapping[str, EdgeInfo]] = None,
    ) -> None:
        self.to_edge: dict[str, list[str]] = {k: list(v) for k, v in (to_edge or {}).items()}
        self.edge_dict: dict[str, EdgeInfo] = dict(edge_dict or {})
        self._cache: dict[tuple[str, str], tuple[list[str], float]] = {}

    def find_shortest(self, source: str, target: str) -> tuple[list[str], float]:
        """Solve one query and return ``(path, cost)``.

        The returned cost counts the length of every edge on the path,
        the source included. The cached costs of ``(source, edge)`` for
        each edge on the path leave the source's length out. An unknown
        endpoint or an unreachable target gives ``([], -1.0)``.
        """
        if source not in self.edge_dict or target not in self.edge_dict:
            return [], _NO_PATH

        dist = dict.fromkeys(self.edge_dict, math.inf)
        dist[source] = 0.0
        parent: dict[str, str] = {}
        heap = [(0.0, source)]

        while heap:
            current, node = heapq.heappop(heap)
            if current > dist[node]:
                continue
            if node == target:
                break
            for nxt in self.to_edge.get(node, ()):
                info = self.edge_dict.get(nxt)
                if info is None:
                    continue
                candidate = current + info.length
                if candidate < dist[nxt]:
                    dist[nxt] = candidate
                    parent[nxt] = node
                    heapq.heappush(heap, (candidate, nxt))

        if dist[target] == math.inf:
            self._cache[(source, target)] = ([], _NO_PATH)
            return [], _NO_PATH

        path = [target]
        while path[-1] != source:
            path.append(parent[path[-1]])
        path.reverse()

        total = sum(self.edge_dict[edge].length for edge in path)
        self._cache[(source, target)] = (path, total)

        running = 0.0
        for index, edge in enumerate(path[1:], start=1):
            running += self.edge_dict[edge].length
            self._cache[(source, edge)] = (path[: index + 1], running)

        return list(path), total

    def _lookup(self, source: str, target: str) -> Optional[tuple[list[str], float]]:
        key = (source, target)
        if key not in self._cache:
            _, cost = self.find_shortest(source, target)
            if cost == _NO_PATH:
                return None
        return self._cache[key]

    def shortest_path(self, source: str, target: str) -> list[str]:
        """Return the cached or freshly solved path, or [] when there is none."""
        found = self._lookup(source, target)
        return [] if found is None else list(found[0])

    def shortest_cost(self, source: str, target: str) -> float:
        """Return the cached or freshly solved cost, or -1.0 when there is none."""
        found = self._lookup(source, target)
        return _NO_PATH if found is None else found[1]