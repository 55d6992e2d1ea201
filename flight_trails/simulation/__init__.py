"""Simulation orchestration APIs."""

from .clock import VirtualClock
from .engine import FlightAnimator, SimulationContext
from .outputs import AnimationResult, FlightFrame, FlightSummary, FrameResult
from .trails import (
    TrailPhase,
    TrailRange,
    TrailSamples,
    TrailVertexBuffer,
    TrailWindow,
    sample_trail,
    trail_phase,
    trail_window,
)

__all__ = [
    "VirtualClock",
    "FlightAnimator",
    "SimulationContext",
    "AnimationResult",
    "FlightFrame",
    "FlightSummary",
    "FrameResult",
    "TrailPhase",
    "TrailRange",
    "TrailSamples",
    "TrailVertexBuffer",
    "TrailWindow",
    "sample_trail",
    "trail_phase",
    "trail_window",
]
