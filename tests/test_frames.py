"""
Tests for coordinate frame transformations.
"""
import math

from orrery.core.frames import rot1, rot3, add, perifocal_to_inertial, to_render_axes


def norm(v):
    return math.sqrt(v[0]**2 + v[1]**2 + v[2]**2)


class TestVectorOperations:
    def test_add(self):
        assert add((1.0, 2.0, 3.0), (0.5, -2.0, 1.0)) == (1.5, 0.0, 4.0)


class TestRotations:
    def test_rot3_90_degrees(self):
        x, y, z = rot3(math.pi / 2, (1.0, 0.0, 0.0))
        assert math.isclose(x, 0.0, abs_tol=1e-12)
        assert math.isclose(y, 1.0, abs_tol=1e-12)
        assert z == 0.0

    def test_rot1_90_degrees(self):
        x, y, z = rot1(math.pi / 2, (0.0, 1.0, 0.0))
        assert x == 0.0
        assert math.isclose(y, 0.0, abs_tol=1e-12)
        assert math.isclose(z, 1.0, abs_tol=1e-12)

    def test_rotation_preserves_length(self):
        v = (1.0, 2.0, 3.0)
        assert math.isclose(norm(rot3(0.7, rot1(1.3, v))), norm(v))


class TestPerifocal:
    def test_identity_when_all_angles_zero(self):
        v = (2.0, 3.0, 0.0)
        assert perifocal_to_inertial(v, 0.0, 0.0, 0.0) == v

    def test_raan_turns_node_line(self):
        x, y, z = perifocal_to_inertial((1.0, 0.0, 0.0), math.pi / 2, 0.3, 0.0)
        assert math.isclose(x, 0.0, abs_tol=1e-12)
        assert math.isclose(y, 1.0, abs_tol=1e-12)
        assert math.isclose(z, 0.0, abs_tol=1e-12)

    def test_polar_orbit_reaches_pole(self):
        x, y, z = perifocal_to_inertial((0.0, 1.0, 0.0), 0.0, math.pi / 2, 0.0)
        assert math.isclose(z, 1.0, abs_tol=1e-12)


def test_render_axes_swap_is_involution():
    v = (1.0, 2.0, 3.0)
    assert to_render_axes(v) == (1.0, 3.0, 2.0)
    assert to_render_axes(to_render_axes(v)) == v
