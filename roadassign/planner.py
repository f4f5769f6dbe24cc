"""Roadside route planning: pairs vehicles with target windows and answers them."""

from __future__ import annotations

import argparse
import os
import random
import shlex
import subprocess
import sys
import time
from dataclasses import dataclass, field
from typing import Optional, Sequence

from roadassign.assigner import PairAssigner
from roadassign.constants import FIRST, rsu_address
from roadassign.element import Element
from roadassign.flatjson import FlatJson
from roadassign.network import RoadNetwork
from roadassign.tasks import TaskGenerator, TimeWindow

CHANGE_ROUTE = "changeRoute"
CSV_HEADER = "Xe_ID,OriginalRoute,Thoi_gian_chay,Do_lech,Gia_tri_ham_muc_tieu"
SUMMARY_HEADER = "totalcar,timeExecute"

_WHITESPACE = " \t\n\r\f\v"


@dataclass
class Prediction:
    """The planned route for a vehicle and the window it should arrive in."""

    route_id: str
    start_time: float
    time_window: TimeWindow
    departure_time: float


@dataclass
class VehicleStatus:
    """What a vehicle reports about itself."""

    speed: float
    road_id: str
    route_id: str
    lane_id: str = ""
    sender_id: int = 0


def encode_command(target_id: str, action: str, data: str) -> str:
    """Return the command message addressed to ``target_id``."""
    return FlatJson({"targetId": target_id, "action": action, "data": data}).to_json()


def decode_vehicle_status(text: str) -> VehicleStatus:
    """Read a vehicle's status message.

    Raises ValueError when the message or its data is malformed or the
    speed is not a number.
    """
    message = FlatJson()
    message.parse(text)
    data = FlatJson()
    data.parse(message.get("data"))
    return VehicleStatus(
        speed=float(data.get("speed")),
        road_id=data.get("roadId"),
        route_id=data.get("routeId"),
    )


def _fixed(value: float) -> str:
    return f"{value:f}"


@dataclass
class RoutePlanner:
    """Planned routes keyed by each vehicle's original route."""

    source_cars: dict[str, tuple[str, float]] = field(default_factory=dict)
    routes: dict[str, Prediction] = field(default_factory=dict)
    total_cars: int = 0
    time_execute: float = 0.0

    @classmethod
    def from_files(
        cls,
        net_path: str | os.PathLike[str],
        routes_path: str | os.PathLike[str],
        rng: Optional[random.Random] = None,
    ) -> RoutePlanner:
        """Read the network and the vehicles' routes, then plan every vehicle.

        Vehicles are keyed by the first edge of their route; a later
        vehicle starting on the same edge replaces an earlier one.
        """
        network = RoadNetwork.from_file(net_path)
        root = Element("root")
        root.load_xml(routes_path)
        vehicles = root.find_all("vehicle")

        planner = cls(total_cars=len(vehicles))
        for vehicle in vehicles:
            route_node = vehicle.find("route")
            if route_node is None:
                raise ValueError(f"vehicle {vehicle.get('id')!r} has no route")
            route = route_node.get("edges")
            edges = route.split()
            if not edges:
                raise ValueError(f"vehicle {vehicle.get('id')!r} has an empty route")
            planner.source_cars[edges[0]] = (route, float(vehicle.get("depart")))

        generator = TaskGenerator(network.from_edges, network.to_edges, network.edges, rng)
        sources = [(source, start) for source, (_, start) in planner.source_cars.items()]
        windows = generator.gen_time_windows(len(sources))
        assigner = PairAssigner(sources, windows, generator, network.edges)

        started = time.perf_counter()
        results = assigner.assign()
        planner.time_execute = (time.perf_counter() - started) * 1000.0

        for result in results:
            original, start = planner.source_cars[result.source]
            planner.routes[original] = Prediction(
                " ".join(result.path), start, result.time_window, result.departure_time
            )
        return planner

    def new_route(self, original_route: str) -> Prediction:
        """Return the plan for ``original_route``; surrounding whitespace is ignored.

        Raises KeyError when no plan exists for the route.
        """
        key = original_route.strip(_WHITESPACE)
        try:
            return self.routes[key]
        except KeyError:
            raise KeyError(f"no route planned for {key!r}") from None

    def respond(self, message: str, sender_id: int) -> Optional[str]:
        """Answer a vehicle's first message with a route change command.

        Messages of any other type get no answer.
        """
        envelope = FlatJson()
        envelope.parse(message)
        if envelope.get("type") != FIRST:
            return None

        status = decode_vehicle_status(message)
        status.sender_id = sender_id
        prediction = self.new_route(status.route_id)

        data = FlatJson()
        data.add("roadIds", prediction.route_id)
        data.add("starttime", _fixed(prediction.start_time))
        data.add("early", _fixed(prediction.time_window.early_time))
        data.add("lately", _fixed(prediction.time_window.late_time))
        data.add("departureTime", _fixed(prediction.departure_time))
        return encode_command(rsu_address(status.sender_id), CHANGE_ROUTE, data.to_json())


def _append_lines(path: str, lines: Sequence[str]) -> None:
    with open(path, "a", encoding="utf-8") as handle:
        handle.writelines(f"{line}\n" for line in lines)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Plan routes for the vehicles of a network and log the run to a CSV file."""
    parser = argparse.ArgumentParser(
        prog="roadassign", description="Assign vehicles to target time windows."
    )
    parser.add_argument("net", help="network document")
    parser.add_argument("routes", help="vehicle routes document")
    parser.add_argument("--csv", default="vehicle.csv", help="CSV log to append to")
    parser.add_argument("--seed", type=int, default=None, help="random seed")
    parser.add_argument("--post-command", default=None, help="command run after logging")
    args = parser.parse_args(argv)

    rng = random.Random(args.seed)
    try:
        planner = RoutePlanner.from_files(args.net, args.routes, rng)
        _append_lines(args.csv, [CSV_HEADER])
    except (OSError, ValueError) as error:
        print(f"roadassign: {error}", file=sys.stderr)
        return 1

    for original, prediction in planner.routes.items():
        window = prediction.time_window
        print(
            f"{original} -> {prediction.route_id} "
            f"[{window.early_time:g}, {window.late_time:g}] "
            f"departure {prediction.departure_time:g}"
        )

    try:
        _append_lines(
            args.csv,
            [SUMMARY_HEADER, f"{planner.total_cars},{planner.time_execute:g}"],
        )
    except OSError as error:
        print(f"roadassign: {error}", file=sys.stderr)
        return 1

    if args.post_command:
        subprocess.run(shlex.split(args.post_command), check=False)
    return 0