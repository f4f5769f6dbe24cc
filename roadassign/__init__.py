"""Time-window-aware vehicle-to-destination assignment and route planning on road networks."""

__version__ = "0.1.0"