import math

import pytest

from atlas_sim.core.frames import dot, norm, rot_x, rot_y
from atlas_sim.physics.orbit import (
    OrbitParams,
    heading,
    heading_rotation,
    orbit_path,
    orbit_tangent,
    orbital_position,
)


@pytest.fixture
def tilted():
    return OrbitParams(radius=9.5, inclination=math.pi * 0.25, raan=math.pi * 0.67, phase=math.pi * 0.4, period=1.2)


class TestOrbitalPosition:
    def test_is_deterministic(self, tilted):
        for t in [0.0, 0.3, 7.25, 123.4]:
            assert orbital_position(tilted, t) == orbital_position(tilted, t)

    def test_periodic_over_full_revolution(self, tilted):
        t = 1.7
        p0 = orbital_position(tilted, t)
        for k in [1, 2, -1]:
            pk = orbital_position(tilted, t + k * tilted.period * 2 * math.pi)
            assert pk == pytest.approx(p0, abs=1e-9)

    def test_flat_orbit_reduces_to_circle_in_xz_plane(self):
        params = OrbitParams(radius=9.0, inclination=0.0, raan=0.0, phase=0.3, period=2.0)
        for t in [0.0, 0.5, 3.0, 10.0]:
            angle = t / 2.0 + 0.3
            x, y, z = orbital_position(params, t)
            assert x == pytest.approx(9.0 * math.cos(angle))
            assert y == 0.0
            assert z == pytest.approx(9.0 * math.sin(angle))

    def test_radius_constant(self, tilted):
        for t in [0.0, 0.25, 1.0, 4.0, 9.9]:
            assert norm(orbital_position(tilted, t)) == pytest.approx(tilted.radius)

    def test_matches_inclination_then_raan_rotation(self, tilted):
        t = 2.2
        angle = t / tilted.period + tilted.phase
        planar = (tilted.radius * math.cos(angle), 0.0, tilted.radius * math.sin(angle))
        expected = rot_y(tilted.raan, rot_x(tilted.inclination, planar))
        assert orbital_position(tilted, t) == pytest.approx(expected, abs=1e-12)

    def test_default_period_is_one(self):
        params = OrbitParams(radius=1.0, inclination=0.0, raan=0.0)
        assert params.period == 1.0
        assert params.revolution_time == pytest.approx(2 * math.pi)


class TestOrbitPath:
    def test_sample_count_and_closed(self, tilted):
        points = orbit_path(tilted, segments=128)
        assert len(points) == 129
        assert points[-1] == pytest.approx(points[0], abs=1e-9)

    def test_points_lie_on_orbit(self, tilted):
        for p in orbit_path(tilted, segments=16):
            assert norm(p) == pytest.approx(tilted.radius)

    def test_rejects_too_few_segments(self, tilted):
        with pytest.raises(ValueError, match="at least 3 segments"):
            orbit_path(tilted, segments=2)


class TestHeading:
    def test_heading_is_unit_and_tangent(self, tilted):
        for t in [0.0, 1.3, 5.0]:
            h = heading(tilted, t)
            r = orbital_position(tilted, t)
            assert norm(h) == pytest.approx(1.0)
            # nearly perpendicular to the radius vector on a circle
            assert abs(dot(h, r) / norm(r)) < 0.01

    def test_heading_flat_orbit_at_start(self):
        params = OrbitParams(radius=9.0, inclination=0.0, raan=0.0)
        assert heading(params, 0.0) == pytest.approx((0.0, 0.0, 1.0), abs=1e-2)

    def test_tangent_matches_lookahead_heading(self, tilted):
        for t in [0.0, 2.2, 7.9]:
            assert heading(tilted, t) == pytest.approx(orbit_tangent(tilted, t), abs=1e-2)

    def test_heading_when_lookahead_is_lost_to_rounding(self, tilted):
        t = 1e15
        assert t + 0.01 == t
        h = heading(tilted, t)
        r = orbital_position(tilted, t)
        assert h == orbit_tangent(tilted, t)
        assert norm(h) == pytest.approx(1.0)
        assert abs(dot(h, r) / norm(r)) < 1e-9

    def test_rejects_non_positive_lookahead(self, tilted):
        with pytest.raises(ValueError, match="Lookahead must be positive"):
            heading(tilted, 0.0, lookahead=0.0)

    def test_heading_rotation(self):
        assert heading_rotation((0.0, 0.0, 1.0)) == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)
        assert heading_rotation((1.0, 0.0, 0.0)) == pytest.approx((0.0, math.pi / 2, 0.0))
        pitch, _yaw, roll = heading_rotation((0.0, 1.0, 0.0))
        assert pitch == pytest.approx(-math.pi / 2)
        assert roll == 0.0
