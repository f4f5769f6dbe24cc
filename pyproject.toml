[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "roadassign"
version = "0.1.0"
description = "Assign vehicles to time-windowed destinations on a road network and plan their routes"
requires-python = ">=3.10"
dependencies = []
keywords = [
    "routing",
    "road network",
    "vehicle routing",
    "hungarian algorithm",
    "dijkstra",
    "k shortest paths",
    "time windows",
    "assignment",
]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Environment :: Console",
    "Intended Audience :: Science/Research",
    "Operating System :: OS Independent",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Topic :: Scientific/Engineering",
]

[project.optional-dependencies]
test = ["pytest"]

[project.scripts]
roadassign = "roadassign.planner:main"

[tool.hatch.build.targets.wheel]
packages = ["roadassign"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
