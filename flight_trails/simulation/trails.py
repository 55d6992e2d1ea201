"""Trail window engine.

Everything here is a pure function of an object's static lifetime (and
trajectory) and the current virtual time, so recomputing a window for the
same time always gives the same result.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

import numpy as np

from ..flight.trajectory import Lifetime, Trajectory


class TrailPhase(str, Enum):
    HIDDEN = "hidden"
    GROWING = "growing"
    FULL = "full"
    FADING = "fading"


@dataclass(frozen=True, slots=True)
class TrailWindow:
    phase: TrailPhase
    time_s: float
    start_time_s: float | None = None
    end_time_s: float | None = None
    start_param: float | None = None
    end_param: float | None = None

    @property
    def position_visible(self) -> bool:
        return self.phase in (TrailPhase.GROWING, TrailPhase.FULL)

    @property
    def trail_visible(self) -> bool:
        return self.phase is not TrailPhase.HIDDEN

    @property
    def span_s(self) -> float:
        if self.start_time_s is None or self.end_time_s is None:
            return 0.0
        return self.end_time_s - self.start_time_s


@dataclass(frozen=True, slots=True)
class TrailSamples:
    """Trail as evenly time-spaced curve samples, oldest first."""

    positions: np.ndarray
    ages: np.ndarray
    times_s: np.ndarray


@dataclass(frozen=True, slots=True)
class TrailRange:
    """Lit slice ``[start_index, end_index)`` of a pre-sampled vertex buffer."""

    start_index: int
    end_index: int
    ages: np.ndarray
    leading_edge: np.ndarray

    @property
    def count(self) -> int:
        return self.end_index - self.start_index


def trail_phase(lifetime: Lifetime, t: float, duration_s: float) -> TrailPhase:
    if t < lifetime.start or t > lifetime.stop + duration_s:
        return TrailPhase.HIDDEN
    if t > lifetime.stop:
        return TrailPhase.FADING
    if t < lifetime.start + duration_s:
        return TrailPhase.GROWING
    return TrailPhase.FULL


def trail_window(
    lifetime: Lifetime,
    t: float,
    duration_s: float,
    trajectory: Trajectory | None = None,
) -> TrailWindow:
    """
    Visible trail bounds for virtual time ``t``.

    The window is ``[t - duration_s, t]`` clamped into the lifetime. While
    fading out, its end stays pinned at ``lifetime.stop`` and its start
    advances until the window is empty.
    """
    if duration_s < 0:
        raise ValueError("duration_s must be non-negative")

    t = float(t)
    phase = trail_phase(lifetime, t, duration_s)
    if phase is TrailPhase.HIDDEN:
        return TrailWindow(phase=phase, time_s=t)

    start = lifetime.clamp(t - duration_s)
    end = lifetime.clamp(t)
    start_param = end_param = None
    if trajectory is not None:
        start_param = trajectory.parameter_at(start)
        end_param = trajectory.parameter_at(end)
    return TrailWindow(
        phase=phase,
        time_s=t,
        start_time_s=start,
        end_time_s=end,
        start_param=start_param,
        end_param=end_param,
    )


def sample_trail(
    trajectory: Trajectory,
    lifetime: Lifetime,
    t: float,
    duration_s: float,
    sample_count: int,
) -> TrailSamples:
    """
    Sample ``sample_count`` points evenly spaced in time over ``[t - duration_s, t]``.

    Each sample time is clamped into the lifetime, so a young trail bunches
    its oldest samples at the first waypoint and a fading one bunches its
    newest samples at the last.
    """
    if sample_count < 2:
        raise ValueError("sample_count must be >= 2")

    times = lifetime.clamp(np.linspace(float(t) - duration_s, float(t), sample_count))
    positions = trajectory.location_at(times)
    ages = np.linspace(0.0, 1.0, sample_count)
    return TrailSamples(positions=positions, ages=ages, times_s=times)


class TrailVertexBuffer:
    """Fixed per-object trail geometry with the time each vertex is passed."""

    def __init__(self, trajectory: Trajectory, resolution: int = 500):
        self.trajectory = trajectory
        self.resolution = int(resolution)
        self.vertices, self.pass_times = trajectory.sample_vertices(self.resolution)
        self.params = np.linspace(0.0, 1.0, self.resolution + 1)

    @classmethod
    def from_trajectory(cls, trajectory: Trajectory, resolution: int = 500) -> "TrailVertexBuffer":
        return cls(trajectory, resolution)

    def __len__(self) -> int:
        return int(self.vertices.shape[0])

    def lit_range(self, window: TrailWindow) -> TrailRange | None:
        """
        Vertices whose parameter lies in ``[start_param, end_param]``.

        Ages run from 0 at the window start to 1 at the window end. Returns
        ``None`` for a hidden window.
        """
        if not window.trail_visible:
            return None

        if window.start_param is None or window.end_param is None:
            u_start = self.trajectory.parameter_at(window.start_time_s)
            u_end = self.trajectory.parameter_at(window.end_time_s)
        else:
            u_start = window.start_param
            u_end = window.end_param

        start_index = int(np.searchsorted(self.params, u_start, side="left"))
        end_index = int(np.searchsorted(self.params, u_end, side="right"))
        end_index = max(start_index, end_index)

        lit = self.params[start_index:end_index]
        span = u_end - u_start
        if span > 0.0:
            ages = np.clip((lit - u_start) / span, 0.0, 1.0)
        else:
            ages = np.ones_like(lit)

        leading_edge = self.trajectory.curve.get_point(u_end)
        return TrailRange(
            start_index=start_index,
            end_index=end_index,
            ages=ages,
            leading_edge=leading_edge,
        )
