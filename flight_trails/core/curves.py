"""Interpolating piecewise-cubic space curves parameterized on [0, 1].

Both curve families put control point ``i`` of ``n`` at parameter
``u = i / (n - 1)``, so a waypoint-count time lookup addresses either one.
"""

from __future__ import annotations

import numpy as np
from scipy.interpolate import CubicSpline

CURVE_TYPES = ("centripetal", "chordal", "catmullrom", "spline")

# Chord lengths below this are treated as repeated points.
_MIN_CHORD = 1e-4


def _control_points(points) -> np.ndarray:
    pts = np.asarray(points, dtype=float)
    if pts.ndim != 2 or pts.shape[1] != 3:
        raise ValueError("Curve control points must have shape (n, 3)")
    if pts.shape[0] < 2:
        raise ValueError("A curve requires at least two control points")
    if not np.all(np.isfinite(pts)):
        raise ValueError("Curve control points must be finite")
    return pts


class _Curve:
    points: np.ndarray

    def get_point(self, u):
        raise NotImplementedError

    def get_points(self, divisions: int) -> np.ndarray:
        if divisions < 1:
            raise ValueError("divisions must be >= 1")
        return self.get_point(np.linspace(0.0, 1.0, divisions + 1))

    @property
    def num_points(self) -> int:
        return int(self.points.shape[0])


class CatmullRomCurve(_Curve):
    """Open Catmull-Rom curve through every control point.

    ``centripetal`` and ``chordal`` use the non-uniform knot spacing
    (chord length to the power 0.25 / 0.5); ``catmullrom`` is the uniform
    variant with a tension factor. End tangents come from mirrored phantom
    points ``2 * p0 - p1`` and ``2 * pn - pn-1``.
    """

    def __init__(self, points, curve_type: str = "centripetal", tension: float = 0.5):
        if curve_type not in ("centripetal", "chordal", "catmullrom"):
            raise ValueError(f"Unsupported Catmull-Rom curve type: {curve_type!r}")
        self.points = _control_points(points)
        self.curve_type = curve_type
        self.tension = float(tension)

        pts = self.points
        padded = np.concatenate([[2.0 * pts[0] - pts[1]], pts, [2.0 * pts[-1] - pts[-2]]])
        p0 = padded[:-3]
        p1 = padded[1:-2]
        p2 = padded[2:-1]
        p3 = padded[3:]

        if curve_type == "catmullrom":
            t1 = self.tension * (p2 - p0)
            t2 = self.tension * (p3 - p1)
        else:
            power = 0.5 if curve_type == "chordal" else 0.25
            dt0 = np.sum((p1 - p0) ** 2, axis=1) ** power
            dt1 = np.sum((p2 - p1) ** 2, axis=1) ** power
            dt2 = np.sum((p3 - p2) ** 2, axis=1) ** power

            dt1 = np.where(dt1 < _MIN_CHORD, 1.0, dt1)
            dt0 = np.where(dt0 < _MIN_CHORD, dt1, dt0)
            dt2 = np.where(dt2 < _MIN_CHORD, dt1, dt2)

            dt0 = dt0[:, None]
            dt1 = dt1[:, None]
            dt2 = dt2[:, None]
            t1 = (p1 - p0) / dt0 - (p2 - p0) / (dt0 + dt1) + (p2 - p1) / dt1
            t2 = (p2 - p1) / dt1 - (p3 - p1) / (dt1 + dt2) + (p3 - p2) / dt2
            # rescale tangents for a [0, 1] segment parameter
            t1 = t1 * dt1
            t2 = t2 * dt1

        # Hermite coefficients per segment: c0 + c1 w + c2 w^2 + c3 w^3
        self._c0 = p1
        self._c1 = t1
        self._c2 = -3.0 * p1 + 3.0 * p2 - 2.0 * t1 - t2
        self._c3 = 2.0 * p1 - 2.0 * p2 + t1 + t2

    def get_point(self, u):
        u_arr = np.clip(np.asarray(u, dtype=float), 0.0, 1.0)
        segments = self.num_points - 1

        p = u_arr * segments
        idx = np.floor(p).astype(int)
        idx = np.minimum(idx, segments - 1)
        w = (p - idx)[..., None]

        out = self._c0[idx] + self._c1[idx] * w + self._c2[idx] * w * w + self._c3[idx] * w * w * w
        return out


class SplineCurve(_Curve):
    """Natural cubic spline (C2) through the control points."""

    def __init__(self, points):
        self.points = _control_points(points)
        knots = np.linspace(0.0, 1.0, self.num_points)
        self._spline = CubicSpline(knots, self.points, axis=0, bc_type="natural")

    def get_point(self, u):
        u_arr = np.clip(np.asarray(u, dtype=float), 0.0, 1.0)
        return self._spline(u_arr)


def build_curve(points, curve_type: str = "centripetal", tension: float = 0.5) -> _Curve:
    if curve_type == "spline":
        return SplineCurve(points)
    if curve_type in CURVE_TYPES:
        return CatmullRomCurve(points, curve_type=curve_type, tension=tension)
    raise ValueError(f"Unknown curve type {curve_type!r}; expected one of {CURVE_TYPES}")
