"""AirPerf - takeoff/landing performance and weight & balance for a light aircraft."""

__version__ = "0.1.0"
