"""Great-circle densification of sparse waypoint sequences."""

from __future__ import annotations

from typing import Sequence

from ..core.geodesy import distance_between, intermediate_point
from .waypoints import Waypoint

DEFAULT_GAP_THRESHOLD_M = 800_000.0
DEFAULT_INSERTION_STEP_M = 400_000.0


def _gap_m(a: Waypoint, b: Waypoint) -> float:
    return distance_between(a.lat_deg, a.lon_deg, b.lat_deg, b.lon_deg)


def _step_towards(this: Waypoint, nxt: Waypoint, fraction: float) -> Waypoint:
    lat, lon = intermediate_point(this.lat_deg, this.lon_deg, nxt.lat_deg, nxt.lon_deg, fraction)
    return Waypoint(
        time_s=this.time_s + fraction * (nxt.time_s - this.time_s),
        lat_deg=lat,
        lon_deg=lon,
        alt_ft=this.alt_ft + fraction * (nxt.alt_ft - this.alt_ft),
    )


def densify_waypoints(
    waypoints: Sequence[Waypoint],
    gap_threshold_m: float = DEFAULT_GAP_THRESHOLD_M,
    insertion_step_m: float = DEFAULT_INSERTION_STEP_M,
) -> list[Waypoint]:
    """
    Insert great-circle waypoints until no consecutive gap exceeds ``gap_threshold_m``.

    Walking each original pair, a point ``insertion_step_m`` along the great
    circle is inserted while the remaining gap is above the threshold.
    Altitude and time are interpolated linearly by the same fraction.
    Original waypoints are kept unchanged and in order.
    """
    if insertion_step_m <= 0:
        raise ValueError("insertion_step_m must be positive")
    if insertion_step_m >= gap_threshold_m:
        raise ValueError("insertion_step_m must be smaller than gap_threshold_m")

    ordered = sorted(waypoints, key=lambda w: w.time_s)
    if len(ordered) < 2:
        return list(ordered)

    out: list[Waypoint] = [ordered[0]]
    for nxt in ordered[1:]:
        this = out[-1]
        distance = _gap_m(this, nxt)
        while distance > gap_threshold_m:
            fraction = insertion_step_m / distance
            inserted = _step_towards(this, nxt, fraction)
            remaining = _gap_m(inserted, nxt)
            assert remaining < distance, (
                f"densification stalled at {remaining:.1f} m between t={this.time_s} and t={nxt.time_s}"
            )
            out.append(inserted)
            this = inserted
            distance = remaining
        out.append(nxt)
    return out


def max_gap_m(waypoints: Sequence[Waypoint]) -> float:
    if len(waypoints) < 2:
        return 0.0
    return max(_gap_m(a, b) for a, b in zip(waypoints[:-1], waypoints[1:]))
