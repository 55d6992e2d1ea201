"""Core numerical and coordinate utilities."""

from .coordinates import altitude_to_radius, cartesian_to_polar, polar_to_cartesian
from .curves import CURVE_TYPES, CatmullRomCurve, SplineCurve, build_curve
from .geodesy import distance_between, intermediate_point, normalize_lon_deg

__all__ = [
    "altitude_to_radius",
    "cartesian_to_polar",
    "polar_to_cartesian",
    "CURVE_TYPES",
    "CatmullRomCurve",
    "SplineCurve",
    "build_curve",
    "distance_between",
    "intermediate_point",
    "normalize_lon_deg",
]
