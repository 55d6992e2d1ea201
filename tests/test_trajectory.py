"""Tests for curves, trajectories and flights."""
import numpy as np
import pytest

from flight_trails.config import AnimationConfig, CurveConfig, GlobeConfig
from flight_trails.core.coordinates import altitude_to_radius, polar_to_cartesian
from flight_trails.core.curves import CatmullRomCurve, SplineCurve, build_curve
from flight_trails.flight.trajectory import Flight, Lifetime, Trajectory
from flight_trails.flight.waypoints import Waypoint, WaypointError

CONTROL_POINTS = np.array(
    [
        [0.0, 0.0, 0.0],
        [1.0, 2.0, 0.0],
        [3.0, 2.5, 1.0],
        [4.0, 0.0, 1.5],
        [6.0, -1.0, 1.0],
    ]
)


class TestCurves:
    """Tests for the interpolating curves."""

    @pytest.mark.parametrize("curve_type", ["centripetal", "chordal", "catmullrom", "spline"])
    def test_passes_through_control_points(self, curve_type):
        curve = build_curve(CONTROL_POINTS, curve_type)
        u = np.linspace(0.0, 1.0, len(CONTROL_POINTS))
        np.testing.assert_allclose(curve.get_point(u), CONTROL_POINTS, atol=1e-9)

    @pytest.mark.parametrize("curve_type", ["centripetal", "chordal", "catmullrom", "spline"])
    def test_continuous_between_segments(self, curve_type):
        curve = build_curve(CONTROL_POINTS, curve_type)
        eps = 1e-7
        for i in range(1, len(CONTROL_POINTS) - 1):
            u = i / (len(CONTROL_POINTS) - 1)
            np.testing.assert_allclose(curve.get_point(u - eps), curve.get_point(u + eps), atol=1e-5)

    def test_two_points_is_a_straight_line(self):
        a = np.array([1.0, 1.0, 1.0])
        b = np.array([3.0, 5.0, -1.0])
        for curve in (CatmullRomCurve([a, b]), CatmullRomCurve([a, b], curve_type="catmullrom")):
            np.testing.assert_allclose(curve.get_point(0.5), (a + b) / 2.0, atol=1e-12)

    def test_get_points_shape(self):
        curve = CatmullRomCurve(CONTROL_POINTS)
        pts = curve.get_points(10)
        assert pts.shape == (11, 3)
        np.testing.assert_allclose(pts[0], CONTROL_POINTS[0])
        np.testing.assert_allclose(pts[-1], CONTROL_POINTS[-1], atol=1e-12)

    def test_parameter_clamped(self):
        curve = SplineCurve(CONTROL_POINTS)
        np.testing.assert_allclose(curve.get_point(-0.5), CONTROL_POINTS[0], atol=1e-12)
        np.testing.assert_allclose(curve.get_point(1.5), CONTROL_POINTS[-1], atol=1e-9)

    def test_repeated_points_stay_finite(self):
        pts = np.array([[0.0, 0.0, 0.0], [0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
        curve = CatmullRomCurve(pts)
        assert np.all(np.isfinite(curve.get_points(20)))

    def test_invalid_curves(self):
        with pytest.raises(ValueError):
            build_curve(CONTROL_POINTS[:1])
        with pytest.raises(ValueError):
            build_curve(CONTROL_POINTS, "bezier")
        with pytest.raises(ValueError):
            build_curve(np.zeros((4, 2)))


class TestTrajectory:
    """Tests for Trajectory lookups."""

    def test_parameter_at_lifetime_bounds(self, equator_waypoints):
        traj = Trajectory.build(equator_waypoints)
        assert traj.parameter_at(0.0) == 0.0
        assert traj.parameter_at(200.0) == 1.0

    def test_parameter_clamped_outside_domain(self, equator_waypoints):
        traj = Trajectory.build(equator_waypoints)
        assert traj.parameter_at(-1_000.0) == 0.0
        assert traj.parameter_at(10_000.0) == 1.0
        np.testing.assert_allclose(traj.location_at(-50.0), traj.location_at(0.0))

    def test_lookup_monotonic(self, equator_waypoints):
        traj = Trajectory.build(equator_waypoints)
        u = traj.parameter_at(np.linspace(-100.0, 300.0, 401))
        assert np.all(np.diff(u) >= 0.0)
        assert u.min() >= 0.0 and u.max() <= 1.0

    def test_count_based_parameterization(self):
        wps = [
            Waypoint(time_s=0.0, lat_deg=0.0, lon_deg=0.0, alt_ft=0.0),
            Waypoint(time_s=10.0, lat_deg=0.0, lon_deg=0.1, alt_ft=0.0),
            Waypoint(time_s=1_000.0, lat_deg=0.0, lon_deg=1.0, alt_ft=0.0),
        ]
        traj = Trajectory.build(wps)
        assert traj.parameter_at(10.0) == pytest.approx(0.5)
        assert traj.parameter_at(505.0) == pytest.approx(0.75)

    def test_location_at_waypoint_times(self, equator_waypoints):
        globe = GlobeConfig(radius=100.0, feet_per_unit=10_000.0)
        traj = Trajectory.build(equator_waypoints, globe=globe)
        for w in equator_waypoints:
            expected = polar_to_cartesian(w.lat_deg, w.lon_deg, altitude_to_radius(w.alt_ft, 100.0, 10_000.0))
            np.testing.assert_allclose(traj.location_at(w.time_s), expected, atol=1e-9)

    def test_time_at_parameter_inverts_lookup(self, equator_waypoints):
        traj = Trajectory.build(equator_waypoints)
        for t in (0.0, 37.5, 100.0, 180.0, 200.0):
            assert traj.time_at_parameter(traj.parameter_at(t)) == pytest.approx(t)
        assert traj.time_at_parameter(2.0) == 200.0

    def test_sample_vertices(self, equator_waypoints):
        traj = Trajectory.build(equator_waypoints)
        vertices, pass_times = traj.sample_vertices(50)
        assert vertices.shape == (51, 3)
        assert pass_times[0] == 0.0 and pass_times[-1] == 200.0
        assert np.all(np.diff(pass_times) > 0.0)

    def test_requires_two_waypoints(self, equator_waypoints):
        with pytest.raises(ValueError):
            Trajectory.build(equator_waypoints[:1])

    def test_rejects_duplicate_times(self, equator_waypoints):
        dup = [equator_waypoints[0], equator_waypoints[0]]
        with pytest.raises(ValueError):
            Trajectory.build(dup)

    @pytest.mark.parametrize("curve_type", ["centripetal", "spline"])
    def test_densified_path_stays_above_globe(self, curve_type):
        wps = [
            Waypoint(time_s=0.0, lat_deg=40.6, lon_deg=-73.8, alt_ft=35_000.0),
            Waypoint(time_s=30_000.0, lat_deg=35.7, lon_deg=139.7, alt_ft=35_000.0),
        ]
        cfg = AnimationConfig(curve=CurveConfig(curve_type=curve_type))
        flight = Flight.from_waypoints("NRT", wps, cfg)
        radii = np.linalg.norm(flight.trajectory.curve.get_points(2_000), axis=1)
        assert radii.min() > cfg.globe.radius


class TestFlight:
    """Tests for Flight construction."""

    def test_lifetime(self, equator_waypoints):
        flight = Flight.from_waypoints("EQ1", equator_waypoints)
        assert flight.lifetime == Lifetime(start=0.0, stop=200.0)
        assert flight.lifetime.duration_s == 200.0
        assert flight.inserted_count == 0

    def test_densifies_on_build(self):
        wps = [
            Waypoint(time_s=0.0, lat_deg=0.0, lon_deg=0.0, alt_ft=30_000.0),
            Waypoint(time_s=3_600.0, lat_deg=0.0, lon_deg=20.0, alt_ft=30_000.0),
        ]
        flight = Flight.from_waypoints("LONG", wps)
        assert flight.original_count == 2
        assert flight.inserted_count > 0
        assert len(flight.trajectory.waypoints) == len(flight.waypoints)
        np.testing.assert_allclose(flight.location_at(3_600.0), flight.trajectory.control_points[-1], atol=1e-9)

    def test_densify_disabled(self):
        wps = [
            Waypoint(time_s=0.0, lat_deg=0.0, lon_deg=0.0, alt_ft=30_000.0),
            Waypoint(time_s=3_600.0, lat_deg=0.0, lon_deg=20.0, alt_ft=30_000.0),
        ]
        cfg = AnimationConfig()
        cfg.densify.enabled = False
        flight = Flight.from_waypoints("LONG", wps, cfg)
        assert flight.inserted_count == 0

    def test_original_waypoints_hit_after_densify(self):
        wps = [
            Waypoint(time_s=0.0, lat_deg=10.0, lon_deg=0.0, alt_ft=20_000.0),
            Waypoint(time_s=5_000.0, lat_deg=20.0, lon_deg=30.0, alt_ft=38_000.0),
            Waypoint(time_s=9_000.0, lat_deg=15.0, lon_deg=50.0, alt_ft=10_000.0),
        ]
        flight = Flight.from_waypoints("HIT", wps)
        for w in wps:
            expected = polar_to_cartesian(w.lat_deg, w.lon_deg, altitude_to_radius(w.alt_ft))
            np.testing.assert_allclose(flight.location_at(w.time_s), expected, atol=1e-9)

    def test_single_waypoint_rejected(self, equator_waypoints):
        with pytest.raises(WaypointError):
            Flight.from_waypoints("ONE", equator_waypoints[:1])

    def test_original_mask_marks_input_samples(self):
        wps = [
            Waypoint(time_s=0.0, lat_deg=0.0, lon_deg=0.0, alt_ft=30_000.0),
            Waypoint(time_s=3_600.0, lat_deg=0.0, lon_deg=20.0, alt_ft=30_000.0),
        ]
        flight = Flight.from_waypoints("LONG", wps)
        assert len(flight.original_mask) == len(flight.waypoints)
        assert flight.original_mask[0] and flight.original_mask[-1]
        assert not any(flight.original_mask[1:-1])
        assert flight.original_count == 2
        kept = [w for w, original in zip(flight.waypoints, flight.original_mask) if original]
        assert kept == wps

    def test_invalid_coordinates_rejected(self, equator_waypoints):
        bad = Waypoint(time_s=50.0, lat_deg=float("inf"), lon_deg=0.0, alt_ft=0.0)
        with pytest.raises(WaypointError):
            Flight.from_waypoints("INF", [*equator_waypoints, bad])
