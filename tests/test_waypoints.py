"""Tests for location data ingestion."""
import json

import pytest

from flight_trails.flight.waypoints import (
    Waypoint,
    WaypointError,
    load_location_data_json,
    parse_flight_records,
    parse_location_data,
    validate_waypoints,
)


class TestParseFlightRecords:
    """Tests for per-flight validation."""

    def test_sorted_by_time(self):
        records = {
            "300": {"altitude": 3, "latitude": 3.0, "longitude": 3.0},
            "100": {"altitude": 1, "latitude": 1.0, "longitude": 1.0},
            "200": {"altitude": 2, "latitude": 2.0, "longitude": 2.0},
        }
        wps = parse_flight_records("F1", records)
        assert [w.time_s for w in wps] == [100.0, 200.0, 300.0]
        assert wps[0] == Waypoint(time_s=100.0, lat_deg=1.0, lon_deg=1.0, alt_ft=1.0)

    def test_missing_field(self):
        records = {
            "100": {"altitude": 1, "latitude": 1.0},
            "200": {"altitude": 2, "latitude": 2.0, "longitude": 2.0},
        }
        with pytest.raises(WaypointError, match="longitude"):
            parse_flight_records("F1", records)

    @pytest.mark.parametrize("bad", ["abc", None, float("nan"), True])
    def test_non_numeric_coordinate(self, bad):
        records = {
            "100": {"altitude": 1, "latitude": bad, "longitude": 1.0},
            "200": {"altitude": 2, "latitude": 2.0, "longitude": 2.0},
        }
        with pytest.raises(WaypointError):
            parse_flight_records("F1", records)

    @pytest.mark.parametrize(
        "field,value",
        [("latitude", 91.0), ("latitude", -90.5), ("longitude", 180.5), ("altitude", -10.0)],
    )
    def test_out_of_range(self, field, value):
        record = {"altitude": 1, "latitude": 1.0, "longitude": 1.0}
        record[field] = value
        records = {"100": record, "200": {"altitude": 2, "latitude": 2.0, "longitude": 2.0}}
        with pytest.raises(WaypointError):
            parse_flight_records("F1", records)

    def test_duplicate_times(self):
        records = {
            "100": {"altitude": 1, "latitude": 1.0, "longitude": 1.0},
            "100.0": {"altitude": 2, "latitude": 2.0, "longitude": 2.0},
        }
        with pytest.raises(WaypointError, match="duplicate"):
            parse_flight_records("F1", records)

    def test_single_waypoint(self):
        with pytest.raises(WaypointError, match="two waypoints"):
            parse_flight_records("F1", {"100": {"altitude": 1, "latitude": 1.0, "longitude": 1.0}})

    def test_bad_time_key(self):
        records = {
            "noon": {"altitude": 1, "latitude": 1.0, "longitude": 1.0},
            "200": {"altitude": 2, "latitude": 2.0, "longitude": 2.0},
        }
        with pytest.raises(WaypointError):
            parse_flight_records("F1", records)


class TestValidateWaypoints:
    """Tests for checks on already-constructed waypoints."""

    def test_sorts_valid_waypoints(self):
        wps = [Waypoint(200.0, 1.0, 1.0, 0.0), Waypoint(100.0, 0.0, 0.0, 0.0)]
        assert [w.time_s for w in validate_waypoints("F1", wps)] == [100.0, 200.0]

    @pytest.mark.parametrize(
        "bad",
        [
            Waypoint(150.0, float("nan"), 0.0, 0.0),
            Waypoint(150.0, 0.0, float("inf"), 0.0),
            Waypoint(float("nan"), 0.0, 0.0, 0.0),
            Waypoint(150.0, 95.0, 0.0, 0.0),
            Waypoint(150.0, 0.0, -181.0, 0.0),
            Waypoint(150.0, 0.0, 0.0, -5.0),
        ],
    )
    def test_rejects_invalid_values(self, bad):
        wps = [Waypoint(100.0, 0.0, 0.0, 0.0), bad, Waypoint(200.0, 1.0, 1.0, 0.0)]
        with pytest.raises(WaypointError):
            validate_waypoints("F1", wps)


class TestParseLocationData:
    """Tests for whole-dataset ingestion."""

    def test_bad_flights_excluded(self, raw_location_data):
        flights, excluded = parse_location_data(raw_location_data)
        assert set(flights) == {"AAL100", "BAW200"}
        assert set(excluded) == {"SOLO1", "BROKEN"}
        assert "two waypoints" in excluded["SOLO1"]

    def test_root_must_be_mapping(self):
        with pytest.raises(ValueError):
            parse_location_data([1, 2, 3])

    def test_load_json(self, tmp_path, raw_location_data):
        path = tmp_path / "location_data.json"
        path.write_text(json.dumps(raw_location_data), encoding="utf-8")
        assert load_location_data_json(path) == raw_location_data

    def test_load_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_location_data_json(tmp_path / "missing.json")

    def test_load_rejects_list_root(self, tmp_path):
        path = tmp_path / "list.json"
        path.write_text("[]", encoding="utf-8")
        with pytest.raises(ValueError):
            load_location_data_json(path)
