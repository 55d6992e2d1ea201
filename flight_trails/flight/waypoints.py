"""Waypoint ingestion and validation of per-flight location data."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Mapping

logger = logging.getLogger(__name__)

_REQUIRED_FIELDS = ("latitude", "longitude", "altitude")


class WaypointError(ValueError):
    """A flight's waypoint records violate the input contract."""


@dataclass(frozen=True, slots=True)
class Waypoint:
    time_s: float
    lat_deg: float
    lon_deg: float
    alt_ft: float


def _finite_number(value: Any, name: str, flight_id: str, time_key: str) -> float:
    if isinstance(value, bool):
        raise WaypointError(f"{flight_id}@{time_key}: {name} must be numeric, got {value!r}")
    try:
        number = float(value)
    except (TypeError, ValueError) as exc:
        raise WaypointError(f"{flight_id}@{time_key}: {name} must be numeric, got {value!r}") from exc
    if not math.isfinite(number):
        raise WaypointError(f"{flight_id}@{time_key}: {name} must be finite")
    return number


def _parse_time_key(time_key: Any, flight_id: str) -> float:
    try:
        t = float(time_key)
    except (TypeError, ValueError) as exc:
        raise WaypointError(f"{flight_id}: time key {time_key!r} is not a number of seconds") from exc
    if not math.isfinite(t):
        raise WaypointError(f"{flight_id}: time key {time_key!r} must be finite")
    return t


def parse_flight_records(flight_id: str, records: Mapping[str, Mapping[str, Any]]) -> list[Waypoint]:
    """
    Validate one flight's ``{time_key: {altitude, latitude, longitude}}`` records.

    Returns the waypoints sorted by time. Raises :class:`WaypointError` for
    missing fields, non-numeric or out-of-range values, duplicate times and
    flights with fewer than two records.
    """
    if not isinstance(records, Mapping):
        raise WaypointError(f"{flight_id}: records must be a mapping of time to position")

    waypoints: list[Waypoint] = []
    for time_key, item in records.items():
        t = _parse_time_key(time_key, flight_id)
        if not isinstance(item, Mapping):
            raise WaypointError(f"{flight_id}@{time_key}: record must be an object")
        missing = [name for name in _REQUIRED_FIELDS if name not in item]
        if missing:
            raise WaypointError(f"{flight_id}@{time_key}: missing field(s) {', '.join(missing)}")

        lat = _finite_number(item["latitude"], "latitude", flight_id, time_key)
        lon = _finite_number(item["longitude"], "longitude", flight_id, time_key)
        alt = _finite_number(item["altitude"], "altitude", flight_id, time_key)
        waypoints.append(Waypoint(time_s=t, lat_deg=lat, lon_deg=lon, alt_ft=alt))

    return validate_waypoints(flight_id, waypoints)


def _check_waypoint(flight_id: str, w: Waypoint) -> None:
    values = (w.time_s, w.lat_deg, w.lon_deg, w.alt_ft)
    if not all(math.isfinite(v) for v in values):
        raise WaypointError(f"{flight_id}@{w.time_s}: waypoint values must be finite, got {w}")
    if not -90.0 <= w.lat_deg <= 90.0:
        raise WaypointError(f"{flight_id}@{w.time_s}: latitude {w.lat_deg} outside [-90, 90]")
    if not -180.0 <= w.lon_deg <= 180.0:
        raise WaypointError(f"{flight_id}@{w.time_s}: longitude {w.lon_deg} outside [-180, 180]")
    if w.alt_ft < 0.0:
        raise WaypointError(f"{flight_id}@{w.time_s}: altitude {w.alt_ft} must be >= 0 ft")


def validate_waypoints(flight_id: str, waypoints: Iterable[Waypoint]) -> list[Waypoint]:
    """
    Check one flight's waypoints and return them sorted by time.

    Every waypoint must be finite and in range, times must be unique and at
    least two waypoints are required. Violations raise :class:`WaypointError`.
    """
    ordered = sorted(waypoints, key=lambda w: w.time_s)
    for w in ordered:
        _check_waypoint(flight_id, w)
    if len(ordered) < 2:
        raise WaypointError(f"{flight_id}: at least two waypoints are required, got {len(ordered)}")
    for a, b in zip(ordered[:-1], ordered[1:]):
        if a.time_s == b.time_s:
            raise WaypointError(f"{flight_id}: duplicate waypoint time {a.time_s}")
    return ordered


def parse_location_data(
    raw: Mapping[str, Any],
) -> tuple[dict[str, list[Waypoint]], dict[str, str]]:
    """
    Split raw location data into valid flights and excluded flights.

    A bad flight never aborts the others; it is logged and reported with
    the reason it was rejected.
    """
    if not isinstance(raw, Mapping):
        raise ValueError("Location data must be a mapping of flight id to records")

    flights: dict[str, list[Waypoint]] = {}
    excluded: dict[str, str] = {}
    for flight_id, records in raw.items():
        flight_id = str(flight_id)
        try:
            flights[flight_id] = parse_flight_records(flight_id, records)
        except WaypointError as exc:
            logger.warning("Excluding flight %s: %s", flight_id, exc)
            excluded[flight_id] = str(exc)
    return flights, excluded


def load_location_data_json(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Location data file not found: {p}")

    with p.open("r", encoding="utf-8") as f:
        raw = json.load(f)

    if not isinstance(raw, dict):
        raise ValueError("Location data JSON must be an object keyed by flight id")
    return raw
