"""Physical and scene constants."""

EARTH_RADIUS_M = 6_371_000.0

GLOBE_RADIUS = 100.0
FEET_PER_GLOBE_UNIT = 10_000.0

# Below this angular separation (radians) two points are treated as coincident.
MIN_ANGULAR_SEPARATION_RAD = 1e-12
