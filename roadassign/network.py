"""Road network read from a SUMO-style network document."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

from roadassign.element import Element

_NON_INTERNAL = "^[^:].*"


@dataclass(frozen=True)
class Edge:
    """A directed road reached through a connection, with its lane's figures."""

    id: str
    length: float = 0.0
    speed: float = 0.0


def _lane(edge: Element, index: int) -> Element:
    if not 0 <= index < len(edge.children):
        raise ValueError(f"edge {edge.get('id')!r} has no lane {index}")
    return edge.children[index]


@dataclass
class RoadNetwork:
    """Edge lengths and speeds plus the connections between edges.

    ``edges`` maps an edge id to ``(length, speed)`` of its first lane.
    ``to_edges`` maps an edge to the edges it leads to; ``from_edges`` maps
    an edge to the edges that lead into it.
    """

    edges: dict[str, tuple[float, float]] = field(default_factory=dict)
    from_edges: dict[str, list[Edge]] = field(default_factory=dict)
    to_edges: dict[str, list[Edge]] = field(default_factory=dict)

    @classmethod
    def from_element(cls, root: Element) -> RoadNetwork:
        """Build the network from a parsed document, skipping internal edges."""
        network = cls()
        by_id: dict[str, Element] = {}

        for edge in root.find_all("edge", {"id": _NON_INTERNAL}):
            edge_id = edge.get("id")
            by_id[edge_id] = edge
            lane = _lane(edge, 0)
            network.edges[edge_id] = (float(lane.get("length")), float(lane.get("speed")))

        connections = root.find_all(
            "connection", {"from": _NON_INTERNAL, "to": _NON_INTERNAL}
        )
        for connection in connections:
            source = connection.get("from")
            target = connection.get("to")
            if target not in by_id:
                continue
            from_index = int(connection.get("fromLane"))
            to_index = int(connection.get("toLane"))
            if source not in by_id:
                raise ValueError(f"connection from unknown edge {source!r}")
            from_lane = _lane(by_id[source], from_index)
            to_lane = _lane(by_id[target], to_index)
            network.to_edges.setdefault(source, []).append(
                Edge(target, float(to_lane.get("length")), float(to_lane.get("speed")))
            )
            network.from_edges.setdefault(target, []).append(
                Edge(source, float(from_lane.get("length")), float(from_lane.get("speed")))
            )
        return network

    @classmethod
    def from_file(cls, path: str | os.PathLike[str]) -> RoadNetwork:
        """Read and build the network from the document at ``path``."""
        root = Element("root")
        root.load_xml(path)
        return cls.from_element(root)