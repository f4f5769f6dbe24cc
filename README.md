# roadassign

Plan routes for a fleet of vehicles on a road network so that each one
reaches its own destination edge inside a time window.

Given a network document (edges with their lanes, and connections between
edges) and a routes document (vehicles with a `depart` time and a
`route` whose `edges` attribute lists the original route), `roadassign`:

1. builds a directed edge graph from the network, skipping internal edges
   whose id starts with `:` (`roadassign.network.RoadNetwork`);
2. picks up to one random destination edge per vehicle, each with a
   random arrival time window (`TaskGenerator.gen_time_windows`);
3. finds the shortest travel-time path (length over speed) from each
   vehicle's first edge to each destination, trying detours off the last
   few edges when the vehicle would arrive too early
   (`TaskGenerator.find_best_time_window_path`);
4. pairs vehicles with destinations using the Hungarian method so the sum
   of time-window deviations is minimal (`roadassign.assigner.PairAssigner`,
   `roadassign.hungarian.solve_hungarian`);
5. answers a vehicle's first status message with a `changeRoute` command
   carrying the new route and its window (`RoutePlanner.respond`).

Vehicles are keyed by the first edge of their route: when two vehicles
start on the same edge, the later one in the document replaces the earlier.

## Installation

```
pip install .
```

The package has no runtime dependencies. To run its tests:

```
pip install ".[test]"
pytest
```

## Command line

```
roadassign NET_FILE ROUTES_FILE [--csv PATH] [--seed N] [--post-command CMD]
```

reads both documents, computes an assignment and prints one line per
planned vehicle: original route, new route, time window and departure
time. It appends a header line, then a `totalcar,timeExecute` summary
(the number of vehicles and the assignment time in milliseconds) to the
CSV file (`vehicle.csv` by default). `--seed` makes the random windows
reproducible; `--post-command` is run once logging is done. It exits
with status 1 when a file cannot be read or is malformed.

## Library use

```python
import random

from roadassign.planner import RoutePlanner

planner = RoutePlanner.from_files("map.net.xml", "map.rou.xml", random.Random(1))
prediction = planner.new_route("e1 e2 e3")   # KeyError if nothing is planned
print(prediction.route_id, prediction.time_window, prediction.departure_time)
```

Building blocks are usable on their own:

```python
from roadassign.hungarian import solve_hungarian
from roadassign.flatjson import FlatJson

solve_hungarian([[4, 1], [2, 3]])    # [1, 0]

message = FlatJson()
message.add("type", "casual")
message.to_json()                    # '{"type": "casual"}'
```

- `roadassign.element.Element` — a forgiving XML tree; `find` and
  `find_all` match a tag and attribute values against regular expressions.
- `roadassign.flatjson` — a flat string-to-string JSON object
  (`FlatJson`), with `escape_string`, `unescape_string` and `is_valid`.
  `parse` raises `ValueError` on malformed input.
- `roadassign.graph.GraphProcessor` — cached travel-time shortest paths.
- `roadassign.dijkstra.DijkstraPath` — cached length-weighted shortest
  paths; unknown or unreachable endpoints give `([], -1.0)`.
- `roadassign.tasks.TaskGenerator` — time windows, time-window-aware
  paths, `k_shortest_paths` (loopless paths keyed by length) and a greedy
  `feasible` check.
- `roadassign.constants.rsu_address` — the address string (`"RSU<id>"`)
  that targets a node.

On the vehicle side, `roadassign.vehicle.VehicleAgent` builds status
messages (`status_message`), takes the first route-change command
addressed to it (`handle_message`, returning a `RouteCommand`) and
produces a CSV row with its arrival flag, run time and deviation from
the time window (`report_row`).

## What it does not do

`roadassign` does not simulate traffic or radio links. Messages are plain
strings passed to `RoutePlanner.respond` and `VehicleAgent.handle_message`
by the caller, and a route change is only returned as a `RouteCommand`;
nothing drives a vehicle along it. Arrival is recorded only when the
caller reports, through `status_message`, that the vehicle is on its
target edge.