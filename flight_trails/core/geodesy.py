"""Spherical-earth geodesy used to densify flight tracks."""

from __future__ import annotations

import numpy as np

from .constants import EARTH_RADIUS_M, MIN_ANGULAR_SEPARATION_RAD


def _as_finite(*values):
    arrays = [np.asarray(v, dtype=float) for v in values]
    for a in arrays:
        if not np.all(np.isfinite(a)):
            raise ValueError("Geodetic coordinates must be finite")
    return arrays


def _angular_separation(lat1, lon1, lat2, lon2):
    dlat = lat2 - lat1
    dlon = lon2 - lon1
    a = np.sin(dlat / 2.0) ** 2 + np.cos(lat1) * np.cos(lat2) * np.sin(dlon / 2.0) ** 2
    a = np.clip(a, 0.0, 1.0)
    return 2.0 * np.arctan2(np.sqrt(a), np.sqrt(1.0 - a))


def distance_between(lat1_deg, lon1_deg, lat2_deg, lon2_deg):
    """Haversine great-circle distance in meters on a sphere of mean earth radius."""
    lat1, lon1, lat2, lon2 = (np.deg2rad(v) for v in _as_finite(lat1_deg, lon1_deg, lat2_deg, lon2_deg))
    d = EARTH_RADIUS_M * _angular_separation(lat1, lon1, lat2, lon2)
    if np.ndim(d) == 0:
        return float(d)
    return d


def intermediate_point(lat1_deg, lon1_deg, lat2_deg, lon2_deg, fraction):
    """
    Point at ``fraction`` of the great-circle distance from the first to the second point.

    Coincident endpoints have no defined great circle; the first endpoint is
    returned for them.

    Returns
    -------
    (lat_deg, lon_deg)
    """
    lat1, lon1, lat2, lon2 = (np.deg2rad(v) for v in _as_finite(lat1_deg, lon1_deg, lat2_deg, lon2_deg))
    f = np.asarray(fraction, dtype=float)

    delta = _angular_separation(lat1, lon1, lat2, lon2)
    coincident = delta < MIN_ANGULAR_SEPARATION_RAD
    sin_delta = np.where(coincident, 1.0, np.sin(delta))

    A = np.sin((1.0 - f) * delta) / sin_delta
    B = np.sin(f * delta) / sin_delta

    x = A * np.cos(lat1) * np.cos(lon1) + B * np.cos(lat2) * np.cos(lon2)
    y = A * np.cos(lat1) * np.sin(lon1) + B * np.cos(lat2) * np.sin(lon2)
    z = A * np.sin(lat1) + B * np.sin(lat2)

    lat = np.rad2deg(np.arctan2(z, np.sqrt(x * x + y * y)))
    lon = np.rad2deg(np.arctan2(y, x))

    lat = np.where(coincident, np.rad2deg(lat1), lat)
    lon = np.where(coincident, np.rad2deg(lon1), lon)
    if np.ndim(lat) == 0:
        return float(lat), float(lon)
    return lat, lon


def normalize_lon_deg(lon_deg):
    lon = np.asarray(lon_deg, dtype=float)
    return (lon + 180.0) % 360.0 - 180.0
