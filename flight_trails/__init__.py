"""Flight trail animation core."""

from .config import AnimationConfig, load_config
from .flight.trajectory import Flight, Lifetime, Trajectory
from .flight.waypoints import Waypoint, WaypointError, load_location_data_json
from .simulation.engine import FlightAnimator, SimulationContext

__all__ = [
    "AnimationConfig",
    "load_config",
    "Flight",
    "Lifetime",
    "Trajectory",
    "Waypoint",
    "WaypointError",
    "load_location_data_json",
    "FlightAnimator",
    "SimulationContext",
]
