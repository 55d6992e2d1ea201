"""Time-parameterized flight trajectories on the scene globe."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

import numpy as np

from ..config import AnimationConfig, CurveConfig, GlobeConfig
from ..core.coordinates import altitude_to_radius, polar_to_cartesian
from ..core.curves import build_curve
from .densify import densify_waypoints
from .waypoints import Waypoint, validate_waypoints


@dataclass(frozen=True, slots=True)
class Lifetime:
    start: float
    stop: float

    @classmethod
    def of(cls, waypoints: Iterable[Waypoint]) -> "Lifetime":
        times = [w.time_s for w in waypoints]
        return cls(start=float(min(times)), stop=float(max(times)))

    @property
    def duration_s(self) -> float:
        return self.stop - self.start

    def clamp(self, t):
        clamped = np.clip(t, self.start, self.stop)
        if np.ndim(clamped) == 0:
            return float(clamped)
        return clamped

    def contains(self, t: float) -> bool:
        return self.start <= t <= self.stop


class Trajectory:
    """Smooth curve through projected waypoints plus a time -> parameter lookup.

    Curve parameters are spaced by waypoint count (``linspace(0, 1, n)``), not
    by elapsed time or arc length, so apparent speed along the curve is uneven
    where samples are unevenly spaced.
    """

    def __init__(
        self,
        waypoints: Sequence[Waypoint],
        globe: GlobeConfig | None = None,
        curve: CurveConfig | None = None,
    ):
        self.waypoints = tuple(waypoints)
        if len(self.waypoints) < 2:
            raise ValueError("Trajectory requires at least two waypoints")
        self.globe = globe or GlobeConfig()
        curve_cfg = curve or CurveConfig()

        self._times = np.array([w.time_s for w in self.waypoints], dtype=float)
        if not np.all(np.diff(self._times) > 0.0):
            raise ValueError("Waypoint times must be strictly increasing")
        self._params = np.linspace(0.0, 1.0, len(self.waypoints))

        lat = np.array([w.lat_deg for w in self.waypoints], dtype=float)
        lon = np.array([w.lon_deg for w in self.waypoints], dtype=float)
        alt = np.array([w.alt_ft for w in self.waypoints], dtype=float)
        radius = altitude_to_radius(alt, self.globe.radius, self.globe.feet_per_unit)
        self._points = polar_to_cartesian(lat, lon, radius)
        self.curve = build_curve(self._points, curve_cfg.curve_type, curve_cfg.tension)

    @classmethod
    def build(
        cls,
        waypoints: Sequence[Waypoint],
        globe: GlobeConfig | None = None,
        curve: CurveConfig | None = None,
    ) -> "Trajectory":
        return cls(waypoints, globe=globe, curve=curve)

    @property
    def control_points(self) -> np.ndarray:
        return self._points.copy()

    @property
    def lookup_times(self) -> np.ndarray:
        return self._times.copy()

    @property
    def lookup_params(self) -> np.ndarray:
        return self._params.copy()

    @property
    def start_time(self) -> float:
        return float(self._times[0])

    @property
    def end_time(self) -> float:
        return float(self._times[-1])

    def parameter_at(self, time_s):
        """Curve parameter for ``time_s``, clamped to [0, 1] outside the waypoint times."""
        u = np.interp(np.asarray(time_s, dtype=float), self._times, self._params)
        if np.ndim(u) == 0:
            return float(u)
        return u

    def time_at_parameter(self, u):
        """Inverse lookup: time the object passes curve parameter ``u``."""
        t = np.interp(np.clip(np.asarray(u, dtype=float), 0.0, 1.0), self._params, self._times)
        if np.ndim(t) == 0:
            return float(t)
        return t

    def location_at(self, time_s) -> np.ndarray:
        return self.curve.get_point(self.parameter_at(time_s))

    def sample_vertices(self, resolution: int) -> tuple[np.ndarray, np.ndarray]:
        """Fixed vertex buffer of ``resolution + 1`` curve points and their pass times."""
        if resolution < 1:
            raise ValueError("resolution must be >= 1")
        u = np.linspace(0.0, 1.0, resolution + 1)
        return self.curve.get_point(u), self.time_at_parameter(u)


@dataclass(frozen=True, slots=True)
class Flight:
    """One animated object: its frozen waypoints and everything derived from them."""

    flight_id: str
    waypoints: tuple[Waypoint, ...]
    trajectory: Trajectory
    lifetime: Lifetime
    original_mask: tuple[bool, ...]

    @classmethod
    def from_waypoints(
        cls,
        flight_id: str,
        waypoints: Iterable[Waypoint],
        config: AnimationConfig | None = None,
    ) -> "Flight":
        cfg = config or AnimationConfig()
        ordered = validate_waypoints(flight_id, waypoints)
        if cfg.densify.enabled:
            dense = densify_waypoints(
                ordered,
                gap_threshold_m=cfg.densify.gap_threshold_m,
                insertion_step_m=cfg.densify.insertion_step_m,
            )
        else:
            dense = ordered
        trajectory = Trajectory.build(dense, globe=cfg.globe, curve=cfg.curve)
        originals = set(ordered)
        return cls(
            flight_id=flight_id,
            waypoints=trajectory.waypoints,
            trajectory=trajectory,
            lifetime=Lifetime.of(dense),
            original_mask=tuple(w in originals for w in trajectory.waypoints),
        )

    @property
    def original_count(self) -> int:
        return sum(self.original_mask)

    @property
    def inserted_count(self) -> int:
        return len(self.waypoints) - self.original_count

    def location_at(self, time_s) -> np.ndarray:
        return self.trajectory.location_at(time_s)
