"""Simulation context and the tick-driven animation loop."""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Iterator, Mapping

import numpy as np

from ..config import AnimationConfig
from ..flight.trajectory import Flight
from ..flight.waypoints import Waypoint, WaypointError, load_location_data_json, parse_location_data
from .clock import VirtualClock
from .outputs import AnimationResult, FlightFrame, FlightSummary, FrameResult
from .trails import TrailPhase, TrailVertexBuffer, sample_trail, trail_window

logger = logging.getLogger(__name__)


@dataclass(slots=True)
class SimulationContext:
    """Everything the driving loop owns: the clock and the animated flights."""

    clock: VirtualClock
    flights: dict[str, Flight]
    excluded: dict[str, str] = field(default_factory=dict)
    vertex_buffers: dict[str, TrailVertexBuffer] = field(default_factory=dict)

    @property
    def flight_ids(self) -> list[str]:
        return list(self.flights)


class FlightAnimator:
    def __init__(self, config: AnimationConfig | None = None):
        self.config = config or AnimationConfig()

    def _build_flight(self, flight_id: str, waypoints: list[Waypoint]) -> Flight:
        return Flight.from_waypoints(flight_id, waypoints, self.config)

    def build_flights(
        self,
        waypoints_by_flight: Mapping[str, list[Waypoint]],
    ) -> tuple[dict[str, Flight], dict[str, str]]:
        items = list(waypoints_by_flight.items())
        workers = int(self.config.runtime.build_workers)

        if workers > 1 and len(items) > 1:
            with ThreadPoolExecutor(max_workers=workers) as pool:
                futures = [(fid, pool.submit(self._build_flight, fid, wps)) for fid, wps in items]
                results = []
                for fid, fut in futures:
                    try:
                        results.append((fid, fut.result()))
                    except WaypointError as exc:
                        results.append((fid, exc))
        else:
            results = []
            for fid, wps in items:
                try:
                    results.append((fid, self._build_flight(fid, wps)))
                except WaypointError as exc:
                    results.append((fid, exc))

        flights: dict[str, Flight] = {}
        excluded: dict[str, str] = {}
        for fid, outcome in results:
            if isinstance(outcome, Exception):
                logger.warning("Excluding flight %s: %s", fid, outcome)
                excluded[fid] = str(outcome)
            else:
                flights[fid] = outcome
                if outcome.inserted_count:
                    logger.debug("Flight %s: inserted %d great-circle waypoints", fid, outcome.inserted_count)
        return flights, excluded

    def build(self, raw_location_data: Mapping[str, Any]) -> SimulationContext:
        """Validate raw location data and build a ready-to-run simulation context."""
        waypoints_by_flight, excluded = parse_location_data(raw_location_data)
        flights, build_excluded = self.build_flights(waypoints_by_flight)
        excluded.update(build_excluded)
        if not flights:
            raise ValueError("No valid flights to animate")

        clock_cfg = self.config.clock
        clock = VirtualClock.spanning((f.lifetime for f in flights.values()), step_s=clock_cfg.step_s)
        if clock_cfg.start_time_s is not None or clock_cfg.end_time_s is not None:
            clock = VirtualClock(
                start=clock.start if clock_cfg.start_time_s is None else clock_cfg.start_time_s,
                end=clock.end if clock_cfg.end_time_s is None else clock_cfg.end_time_s,
                step_s=clock_cfg.step_s,
            )

        vertex_buffers: dict[str, TrailVertexBuffer] = {}
        if self.config.trail.mode == "vertex_buffer":
            vertex_buffers = {
                fid: TrailVertexBuffer.from_trajectory(f.trajectory, self.config.curve.vertex_resolution)
                for fid, f in flights.items()
            }

        logger.info(
            "Built %d flight(s), excluded %d; clock %.0f -> %.0f step %.1fs",
            len(flights),
            len(excluded),
            clock.start,
            clock.end,
            clock.step_s,
        )
        return SimulationContext(clock=clock, flights=flights, excluded=excluded, vertex_buffers=vertex_buffers)

    def flight_frame(self, context: SimulationContext, flight: Flight, t: float) -> FlightFrame | None:
        """One flight's output at time ``t``, or ``None`` when it is hidden."""
        trail_cfg = self.config.trail
        window = trail_window(flight.lifetime, t, trail_cfg.duration_s, flight.trajectory)
        if window.phase is TrailPhase.HIDDEN:
            return None

        position = flight.location_at(t) if window.position_visible else None
        if trail_cfg.mode == "vertex_buffer":
            trail = context.vertex_buffers[flight.flight_id].lit_range(window)
        else:
            trail = sample_trail(flight.trajectory, flight.lifetime, t, trail_cfg.duration_s, trail_cfg.sample_count)
        return FlightFrame(flight_id=flight.flight_id, phase=window.phase, position=position, trail=trail)

    def frame_at(self, context: SimulationContext, t: float, tick: int = 0) -> FrameResult:
        visible: dict[str, FlightFrame] = {}
        hidden: list[str] = []
        for fid, flight in context.flights.items():
            frame = self.flight_frame(context, flight, t)
            if frame is None:
                hidden.append(fid)
            else:
                visible[fid] = frame
        return FrameResult(tick=tick, time_s=float(t), flights=visible, hidden_ids=tuple(hidden))

    def step(self, context: SimulationContext) -> FrameResult:
        """Compute the frame at the current clock time, then advance the clock."""
        clock = context.clock
        frame = self.frame_at(context, clock.current, tick=clock.ticks)
        clock.tick()
        return frame

    def iter_frames(self, context: SimulationContext, max_ticks: int | None = None) -> Iterator[FrameResult]:
        """
        Yield frames until every trail has faded out or ``max_ticks`` is reached.

        The loop ends once the clock passes ``end + trail duration``.
        """
        limit = self.config.runtime.max_ticks if max_ticks is None else max_ticks
        stop_time = context.clock.end + self.config.trail.duration_s
        produced = 0
        while context.clock.current <= stop_time:
            if limit is not None and produced >= limit:
                break
            frame = self.step(context)
            produced += 1
            logger.debug(
                "tick %d t=%.0f visible=%d hidden=%d",
                frame.tick,
                frame.time_s,
                len(frame.flights),
                len(frame.hidden_ids),
            )
            yield frame

    def run(self, context: SimulationContext, max_ticks: int | None = None) -> AnimationResult:
        frames = list(self.iter_frames(context, max_ticks=max_ticks))

        trail_vertices = None
        if context.vertex_buffers:
            trail_vertices = np.stack([context.vertex_buffers[fid].vertices for fid in context.flight_ids])

        summaries = [
            FlightSummary(
                flight_id=f.flight_id,
                start_time_s=f.lifetime.start,
                stop_time_s=f.lifetime.stop,
                original_waypoints=f.original_count,
                inserted_waypoints=f.inserted_count,
            )
            for f in context.flights.values()
        ]
        return AnimationResult(
            frames=frames,
            flights=summaries,
            excluded=dict(context.excluded),
            trail_mode=self.config.trail.mode,
            trail_vertices=trail_vertices,
            config_dict=self.config.to_dict(),
        )

    def run_from_location_file(self, path: str | Path, max_ticks: int | None = None) -> tuple[SimulationContext, AnimationResult]:
        raw = load_location_data_json(path)
        context = self.build(raw)
        return context, self.run(context, max_ticks=max_ticks)
