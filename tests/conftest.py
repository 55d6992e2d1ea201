"""Shared fixtures for the flight trail tests."""
import pytest

from flight_trails.flight.waypoints import Waypoint


@pytest.fixture
def equator_waypoints():
    """Three samples along the equator, 2 degrees apart, one every 100 s."""
    return [
        Waypoint(time_s=0.0, lat_deg=0.0, lon_deg=0.0, alt_ft=30_000.0),
        Waypoint(time_s=100.0, lat_deg=0.0, lon_deg=2.0, alt_ft=32_000.0),
        Waypoint(time_s=200.0, lat_deg=0.0, lon_deg=4.0, alt_ft=34_000.0),
    ]


@pytest.fixture
def raw_location_data():
    """Location data in the loader's input shape, including two bad flights."""
    return {
        "AAL100": {
            "1000": {"altitude": 35000, "latitude": 40.6, "longitude": -73.8},
            "1600": {"altitude": 36000, "latitude": 42.0, "longitude": -60.0},
            "2200": {"altitude": 36000, "latitude": 50.0, "longitude": -30.0},
            "2800": {"altitude": 34000, "latitude": 51.5, "longitude": -0.4},
        },
        "BAW200": {
            "1300": {"altitude": 30000, "latitude": 51.5, "longitude": -0.4},
            "1900": {"altitude": 31000, "latitude": 48.8, "longitude": 2.5},
        },
        "SOLO1": {
            "1500": {"altitude": 10000, "latitude": 10.0, "longitude": 10.0},
        },
        "BROKEN": {
            "1500": {"altitude": 10000, "latitude": "north", "longitude": 10.0},
            "1600": {"altitude": 10000, "latitude": 11.0, "longitude": 10.0},
        },
    }
