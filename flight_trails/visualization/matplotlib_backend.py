"""Matplotlib diagnostic plots of densified tracks and animation frames."""

from __future__ import annotations

from pathlib import Path

import numpy as np

from ..core.geodesy import normalize_lon_deg
from ..simulation.engine import SimulationContext
from ..simulation.outputs import AnimationResult, FrameResult
from ..simulation.trails import TrailRange, TrailSamples


def _trail_points(context: SimulationContext, fid: str, trail) -> np.ndarray | None:
    if isinstance(trail, TrailSamples):
        return trail.positions
    if isinstance(trail, TrailRange) and trail.count:
        vertices = context.vertex_buffers[fid].vertices[trail.start_index : trail.end_index]
        return np.vstack([vertices, trail.leading_edge])
    return None


def _busiest_frame(result: AnimationResult) -> FrameResult | None:
    if not result.frames:
        return None
    return max(result.frames, key=lambda frame: len(frame.flights))


def render_matplotlib_bundle(
    result: AnimationResult,
    context: SimulationContext,
    output_dir: str | Path,
    *,
    max_flights: int = 200,
):
    try:
        import matplotlib

        matplotlib.use("Agg")
        import matplotlib.pyplot as plt
    except ImportError as exc:
        raise ImportError("matplotlib is required for matplotlib backend") from exc

    out_dir = Path(output_dir)
    out_dir.mkdir(parents=True, exist_ok=True)
    generated = {}

    # Track map: input samples in black, great-circle insertions hollow orange
    fig, ax = plt.subplots(figsize=(12, 6))
    labeled = False
    for fid in context.flight_ids[:max_flights]:
        flight = context.flights[fid]
        lats = np.array([w.lat_deg for w in flight.waypoints], dtype=float)
        lons = normalize_lon_deg(np.array([w.lon_deg for w in flight.waypoints], dtype=float))
        original = np.array(flight.original_mask, dtype=bool)
        ax.plot(lons, lats, linewidth=0.8, alpha=0.6)
        ax.scatter(
            lons[original],
            lats[original],
            s=6,
            color="black",
            alpha=0.6,
            label=None if labeled else "original waypoint",
        )
        ax.scatter(
            lons[~original],
            lats[~original],
            s=10,
            facecolors="none",
            edgecolors="darkorange",
            linewidths=0.6,
            label=None if labeled else "inserted waypoint",
        )
        labeled = True
    if labeled:
        ax.legend(loc="lower left", fontsize=8)
    ax.set_xlim(-180.0, 180.0)
    ax.set_ylim(-90.0, 90.0)
    ax.set_xlabel("Longitude (deg)")
    ax.set_ylabel("Latitude (deg)")
    ax.set_title("Densified Flight Tracks")
    ax.grid(True, alpha=0.25)

    p_tracks = out_dir / "matplotlib_tracks.png"
    fig.tight_layout()
    fig.savefig(p_tracks, dpi=150)
    plt.close(fig)
    generated["tracks_png"] = str(p_tracks)

    # 3D snapshot of the busiest tick
    frame = _busiest_frame(result)
    if frame is not None and frame.flights:
        fig2 = plt.figure(figsize=(10, 10))
        ax2 = fig2.add_subplot(111, projection="3d")
        for fid, flight_frame in list(frame.flights.items())[:max_flights]:
            pts = _trail_points(context, fid, flight_frame.trail)
            if pts is not None and len(pts) > 1:
                ax2.plot(pts[:, 0], pts[:, 2], pts[:, 1], color="#1f77b4", alpha=0.5, linewidth=0.8)
            if flight_frame.position is not None:
                p = flight_frame.position
                ax2.scatter([p[0]], [p[2]], [p[1]], s=6, color="crimson")

        r = context.flights[next(iter(context.flights))].trajectory.globe.radius
        for axis_set in (ax2.set_xlim, ax2.set_ylim, ax2.set_zlim):
            axis_set(-1.1 * r, 1.1 * r)
        ax2.set_xlabel("x")
        ax2.set_ylabel("z")
        ax2.set_zlabel("y (up)")
        ax2.set_title(f"Positions and Trails at t={frame.time_s:.0f}s")

        p_frame = out_dir / "matplotlib_frame.png"
        fig2.tight_layout()
        fig2.savefig(p_frame, dpi=150)
        plt.close(fig2)
        generated["frame_png"] = str(p_frame)

    return generated
