"""A vehicle's side of the exchange with the roadside unit."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from roadassign.constants import FIRST, rsu_address
from roadassign.flatjson import FlatJson
from roadassign.tasks import TimeWindow

CHANGE_ROUTE = "changeRoute"


def deviation(window: TimeWindow, departure_time: float) -> float:
    """Return how far ``departure_time`` falls outside ``window``."""
    if departure_time < window.early_time:
        return window.early_time - departure_time
    if departure_time > window.late_time:
        return departure_time - window.late_time
    return 0.0


def _number(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class RouteCommand:
    """A route change received from the roadside unit."""

    road_ids: tuple[str, ...]
    start_time: float
    time_window: TimeWindow
    departure_time: float

    @property
    def target(self) -> str:
        """The last edge of the new route."""
        return self.road_ids[-1]


@dataclass
class VehicleAgent:
    """State of one vehicle: its messages, its assigned route and its arrival."""

    node_id: int
    first_message: bool = True
    awaiting_command: bool = True
    target: str = ""
    route: tuple[str, ...] = ()
    start_time: float = 0.0
    time_window: TimeWindow = field(default_factory=lambda: TimeWindow(0.0, 0.0))
    departure_time: float = 0.0
    has_arrived: bool = False

    def status_message(
        self, speed: float, road_id: str, planned_roads: Sequence[str]
    ) -> str:
        """Return the status message to send; the first one is marked as such.

        Reaching the assigned target edge marks the vehicle as arrived.
        """
        if self.target and road_id == self.target:
            self.has_arrived = True
        data = FlatJson()
        data.add("speed", f"{speed:f}")
        data.add("roadId", road_id)
        data.add("routeId", "".join(f" {road}" for road in planned_roads))
        message = FlatJson()
        message.add("type", FIRST if self.first_message else "casual")
        message.add("data", data.to_json())
        self.first_message = False
        return message.to_json()

    def handle_message(self, message: str) -> Optional[RouteCommand]:
        """Take the first message addressed to this vehicle.

        Returns the route command when it is a route change, None for
        messages to others, later messages and other actions. Raises
        ValueError on a malformed command.
        """
        envelope = FlatJson()
        envelope.parse(message)
        if envelope.get("targetId") != rsu_address(self.node_id):
            return None
        if not self.awaiting_command:
            return None
        self.awaiting_command = False
        if envelope.get("action") != CHANGE_ROUTE:
            return None

        data = FlatJson()
        data.parse(envelope.get("data"))
        road_ids = tuple(data.get("roadIds").split())
        if not road_ids:
            raise ValueError("route change carries no roads")
        command = RouteCommand(
            road_ids=road_ids,
            start_time=float(data.get("starttime")),
            time_window=TimeWindow(float(data.get("early")), float(data.get("lately"))),
            departure_time=float(data.get("departureTime")),
        )
        self.route = command.road_ids
        self.target = command.target
        self.start_time = command.start_time
        self.time_window = command.time_window
        self.departure_time = command.departure_time
        return command

    def report_row(self, run_time: float) -> str:
        """Return the CSV row for this vehicle after driving for ``run_time``.

        The reported time adds the planned start time to ``run_time``.
        """
        total = run_time + self.start_time
        arrived = "true" if self.has_arrived else "false"
        return (
            f"{self.node_id},{arrived},{_number(total)},"
            f"{_number(deviation(self.time_window, total))},"
            f"{_number(self.departure_time)}"
        )