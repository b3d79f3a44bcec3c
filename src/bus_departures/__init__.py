"""Bus departures: timetable and live-tracking aggregation for a fixed set of stops."""

__version__ = "0.1.0"
