"""Flight waypoints, densification and trajectories."""

from .densify import densify_waypoints, max_gap_m
from .trajectory import Flight, Lifetime, Trajectory
from .waypoints import (
    Waypoint,
    WaypointError,
    load_location_data_json,
    parse_flight_records,
    parse_location_data,
)

__all__ = [
    "densify_waypoints",
    "max_gap_m",
    "Flight",
    "Lifetime",
    "Trajectory",
    "Waypoint",
    "WaypointError",
    "load_location_data_json",
    "parse_flight_records",
    "parse_location_data",
]
