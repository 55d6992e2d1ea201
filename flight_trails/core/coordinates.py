"""Geodetic <-> scene Cartesian mapping on a globe of configurable radius.

The scene convention has +y as "up" (latitude 90 deg), the 0 deg meridian
on +x and the 90 deg E meridian on -z.
"""

from __future__ import annotations

import numpy as np

from .constants import FEET_PER_GLOBE_UNIT, GLOBE_RADIUS
from .geodesy import normalize_lon_deg


def polar_to_cartesian(lat_deg, lon_deg, radius):
    phi = np.deg2rad(90.0 - np.asarray(lat_deg, dtype=float))
    theta = np.deg2rad(np.asarray(lon_deg, dtype=float) + 180.0)
    r = np.asarray(radius, dtype=float)

    x = -r * np.sin(phi) * np.cos(theta)
    y = r * np.cos(phi)
    z = r * np.sin(phi) * np.sin(theta)
    return np.stack(np.broadcast_arrays(x, y, z), axis=-1)


def cartesian_to_polar(xyz):
    """
    Recover ``(lat_deg, lon_deg)`` from scene coordinates.

    Diagnostic inverse of :func:`polar_to_cartesian`. Longitude is undefined
    at the poles; whatever ``arctan2`` yields there is returned.
    """
    p = np.asarray(xyz, dtype=float)
    x = p[..., 0]
    y = p[..., 1]
    z = p[..., 2]

    # atan2(x, -z) is 90 deg - lon.
    lon = normalize_lon_deg(90.0 - np.rad2deg(np.arctan2(x, -z)))
    horizontal = np.sqrt(x * x + z * z)
    lat = np.rad2deg(np.arctan2(y, horizontal))
    if np.ndim(lat) == 0:
        return float(lat), float(lon)
    return lat, lon


def altitude_to_radius(alt_ft, globe_radius: float = GLOBE_RADIUS, feet_per_unit: float = FEET_PER_GLOBE_UNIT):
    if feet_per_unit <= 0:
        raise ValueError("feet_per_unit must be positive")
    r = np.asarray(alt_ft, dtype=float) / feet_per_unit + globe_radius
    if np.ndim(r) == 0:
        return float(r)
    return r
