"""Per-tick frame containers and serialization helpers."""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import numpy as np

from .trails import TrailPhase, TrailRange, TrailSamples


@dataclass(frozen=True, slots=True)
class FlightFrame:
    flight_id: str
    phase: TrailPhase
    position: np.ndarray | None
    trail: TrailSamples | TrailRange | None

    @property
    def position_visible(self) -> bool:
        return self.position is not None


@dataclass(frozen=True, slots=True)
class FrameResult:
    tick: int
    time_s: float
    flights: dict[str, FlightFrame] = field(default_factory=dict)
    hidden_ids: tuple[str, ...] = ()

    def visible_ids(self) -> list[str]:
        return list(self.flights)

    def markers(self) -> dict[str, np.ndarray]:
        """Current marker positions for the flights that show one."""
        return {fid: f.position for fid, f in self.flights.items() if f.position is not None}


@dataclass(slots=True)
class FlightSummary:
    flight_id: str
    start_time_s: float
    stop_time_s: float
    original_waypoints: int
    inserted_waypoints: int


@dataclass(slots=True)
class AnimationResult:
    frames: list[FrameResult]
    flights: list[FlightSummary]
    excluded: dict[str, str] = field(default_factory=dict)
    trail_mode: str = "samples"
    trail_vertices: np.ndarray | None = None
    config_dict: dict[str, Any] = field(default_factory=dict)

    @property
    def flight_ids(self) -> list[str]:
        return [f.flight_id for f in self.flights]

    def times(self) -> np.ndarray:
        return np.array([frame.time_s for frame in self.frames], dtype=float)

    def positions_array(self) -> np.ndarray:
        """Marker positions, shape (ticks, flights, 3), NaN where no marker is shown."""
        ids = self.flight_ids
        out = np.full((len(self.frames), len(ids), 3), np.nan, dtype=float)
        for i, frame in enumerate(self.frames):
            for j, fid in enumerate(ids):
                f = frame.flights.get(fid)
                if f is not None and f.position is not None:
                    out[i, j] = f.position
        return out

    def phases_array(self) -> np.ndarray:
        ids = self.flight_ids
        out = np.full((len(self.frames), len(ids)), TrailPhase.HIDDEN.value, dtype="<U8")
        for i, frame in enumerate(self.frames):
            for j, fid in enumerate(ids):
                f = frame.flights.get(fid)
                if f is not None:
                    out[i, j] = f.phase.value
        return out

    def to_summary_dict(self) -> dict[str, Any]:
        times = self.times()
        visible_counts = [len(frame.flights) for frame in self.frames]
        return {
            "num_flights": len(self.flights),
            "num_excluded": len(self.excluded),
            "num_ticks": len(self.frames),
            "first_time_s": float(times[0]) if times.size else None,
            "last_time_s": float(times[-1]) if times.size else None,
            "max_visible": int(max(visible_counts)) if visible_counts else 0,
            "trail_mode": self.trail_mode,
            "flights": [
                {
                    "flight_id": f.flight_id,
                    "start_time_s": f.start_time_s,
                    "stop_time_s": f.stop_time_s,
                    "original_waypoints": f.original_waypoints,
                    "inserted_waypoints": f.inserted_waypoints,
                }
                for f in self.flights
            ],
            "excluded": dict(self.excluded),
            "config": self.config_dict,
        }

    def save_json_summary(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        with p.open("w", encoding="utf-8") as f:
            json.dump(self.to_summary_dict(), f, indent=2)

    def save_npz(self, path: str | Path) -> None:
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)

        ids = self.flight_ids
        payload: dict[str, np.ndarray] = {
            "flight_ids": np.array(ids, dtype=str),
            "times_s": self.times(),
            "positions": self.positions_array(),
            "phases": self.phases_array(),
        }

        if self.trail_mode == "samples":
            sample_count = 0
            for frame in self.frames:
                for f in frame.flights.values():
                    if isinstance(f.trail, TrailSamples):
                        sample_count = f.trail.positions.shape[0]
                        break
                if sample_count:
                    break
            trail_positions = np.full((len(self.frames), len(ids), sample_count, 3), np.nan, dtype=float)
            for i, frame in enumerate(self.frames):
                for j, fid in enumerate(ids):
                    f = frame.flights.get(fid)
                    if f is not None and isinstance(f.trail, TrailSamples):
                        trail_positions[i, j] = f.trail.positions
            payload["trail_positions"] = trail_positions
            payload["trail_ages"] = np.linspace(0.0, 1.0, sample_count) if sample_count else np.zeros(0)
        else:
            start_index = np.full((len(self.frames), len(ids)), -1, dtype=np.int64)
            end_index = np.full((len(self.frames), len(ids)), -1, dtype=np.int64)
            leading_edge = np.full((len(self.frames), len(ids), 3), np.nan, dtype=float)
            for i, frame in enumerate(self.frames):
                for j, fid in enumerate(ids):
                    f = frame.flights.get(fid)
                    if f is not None and isinstance(f.trail, TrailRange):
                        start_index[i, j] = f.trail.start_index
                        end_index[i, j] = f.trail.end_index
                        leading_edge[i, j] = f.trail.leading_edge
            payload["trail_start_index"] = start_index
            payload["trail_end_index"] = end_index
            payload["trail_leading_edge"] = leading_edge
            if self.trail_vertices is not None:
                payload["trail_vertices"] = self.trail_vertices

        np.savez_compressed(p, **payload)
