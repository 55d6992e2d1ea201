"""Virtual animation clock, decoupled from wall-clock time."""

from __future__ import annotations

from typing import Iterable

from ..flight.trajectory import Lifetime


class VirtualClock:
    def __init__(self, start: float, end: float, step_s: float = 15.0, current: float | None = None):
        if step_s <= 0:
            raise ValueError("step_s must be positive")
        if end < start:
            raise ValueError("Clock end must not precede its start")
        self.start = float(start)
        self.end = float(end)
        self.step_s = float(step_s)
        self.current = self.start if current is None else float(current)
        self.ticks = 0
        self._origin = self.current

    @classmethod
    def spanning(cls, lifetimes: Iterable[Lifetime], step_s: float = 15.0) -> "VirtualClock":
        """Clock running from the earliest lifetime start to the latest stop."""
        lifetimes = list(lifetimes)
        if not lifetimes:
            raise ValueError("Cannot build a clock without any lifetimes")
        return cls(
            start=min(lt.start for lt in lifetimes),
            end=max(lt.stop for lt in lifetimes),
            step_s=step_s,
        )

    @property
    def elapsed(self) -> float:
        return self.current - self.start

    @property
    def finished(self) -> bool:
        return self.current > self.end

    def tick(self) -> float:
        self.ticks += 1
        self.current = self._origin + self.ticks * self.step_s
        return self.current

    def reset(self) -> None:
        self.current = self.start
        self.ticks = 0
        self._origin = self.start

    def __repr__(self) -> str:
        return f"VirtualClock(start={self.start}, end={self.end}, current={self.current}, step_s={self.step_s})"
