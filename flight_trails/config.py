"""Configuration model for the flight trail animation core."""

from __future__ import annotations

import json
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Any

from .core.constants import FEET_PER_GLOBE_UNIT, GLOBE_RADIUS
from .core.curves import CURVE_TYPES

TRAIL_MODES = ("samples", "vertex_buffer")


@dataclass(slots=True)
class GlobeConfig:
    radius: float = GLOBE_RADIUS
    feet_per_unit: float = FEET_PER_GLOBE_UNIT


@dataclass(slots=True)
class DensifyConfig:
    enabled: bool = True
    gap_threshold_m: float = 800_000.0
    insertion_step_m: float = 400_000.0


@dataclass(slots=True)
class CurveConfig:
    curve_type: str = "centripetal"
    tension: float = 0.5
    vertex_resolution: int = 500


@dataclass(slots=True)
class TrailConfig:
    duration_s: float = 1_200.0
    sample_count: int = 20
    mode: str = "samples"


@dataclass(slots=True)
class ClockConfig:
    step_s: float = 15.0
    start_time_s: float | None = None
    end_time_s: float | None = None


@dataclass(slots=True)
class RuntimeConfig:
    max_ticks: int | None = None
    build_workers: int = 0


@dataclass(slots=True)
class OutputConfig:
    output_dir: str = "outputs"
    write_npz: bool = True
    enable_matplotlib: bool = False


@dataclass(slots=True)
class AnimationConfig:
    globe: GlobeConfig = field(default_factory=GlobeConfig)
    densify: DensifyConfig = field(default_factory=DensifyConfig)
    curve: CurveConfig = field(default_factory=CurveConfig)
    trail: TrailConfig = field(default_factory=TrailConfig)
    clock: ClockConfig = field(default_factory=ClockConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)
    output: OutputConfig = field(default_factory=OutputConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "AnimationConfig":
        cfg = cls(
            globe=GlobeConfig(**data.get("globe", {})),
            densify=DensifyConfig(**data.get("densify", {})),
            curve=CurveConfig(**data.get("curve", {})),
            trail=TrailConfig(**data.get("trail", {})),
            clock=ClockConfig(**data.get("clock", {})),
            runtime=RuntimeConfig(**data.get("runtime", {})),
            output=OutputConfig(**data.get("output", {})),
        )
        cfg.validate()
        return cfg

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)

    def validate(self) -> None:
        if self.globe.radius <= 0:
            raise ValueError("globe.radius must be positive")
        if self.densify.insertion_step_m <= 0:
            raise ValueError("densify.insertion_step_m must be positive")
        if self.densify.insertion_step_m >= self.densify.gap_threshold_m:
            raise ValueError("densify.insertion_step_m must be smaller than densify.gap_threshold_m")
        if self.curve.curve_type not in CURVE_TYPES:
            raise ValueError(f"curve.curve_type must be one of {CURVE_TYPES}")
        if self.curve.vertex_resolution < 1:
            raise ValueError("curve.vertex_resolution must be >= 1")
        if self.trail.duration_s < 0:
            raise ValueError("trail.duration_s must be non-negative")
        if self.trail.sample_count < 2:
            raise ValueError("trail.sample_count must be >= 2")
        if self.trail.mode not in TRAIL_MODES:
            raise ValueError(f"trail.mode must be one of {TRAIL_MODES}")
        if self.clock.step_s <= 0:
            raise ValueError("clock.step_s must be positive")
        start, end = self.clock.start_time_s, self.clock.end_time_s
        if start is not None and end is not None and end < start:
            raise ValueError("clock.end_time_s must not precede clock.start_time_s")


def load_config(path: str | Path | None) -> AnimationConfig:
    if path is None:
        return AnimationConfig()

    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    if config_path.suffix.lower() != ".json":
        raise ValueError("Only JSON config files are supported")

    with config_path.open("r", encoding="utf-8") as f:
        raw = json.load(f)
    if not isinstance(raw, dict):
        raise ValueError("Config root must be a JSON object")
    return AnimationConfig.from_dict(raw)
