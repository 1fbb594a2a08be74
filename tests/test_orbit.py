import math
import pytest

from orrery.core.config import SimulationConfig
from orrery.core.constants import TIME_FACTOR_DEFAULT
from orrery.physics.anomaly import orbital_period_s, true_anomaly_at
from orrery.physics.orbit import (
    OrbitalElements,
    radial_distance,
    inertial_position,
    inertial_position_rotated,
    render_position,
    position_at,
    propagate,
)
from orrery.physics.rotation import circular_position


def deg(x):
    return x * math.pi / 180.0


def norm(v):
    return math.sqrt(v[0]**2 + v[1]**2 + v[2]**2)


@pytest.fixture
def reference_elements():
    return OrbitalElements(e=0.2, a=10.0, period_days=100.0)


def test_semi_latus_rectum_is_derived(reference_elements):
    assert math.isclose(reference_elements.p, 10.0 * 0.96)


def test_reference_body_at_start(reference_elements):
    r = position_at(reference_elements, 0.0)
    assert math.isclose(r[0], 8.0, abs_tol=1e-12)
    assert math.isclose(r[1], 0.0, abs_tol=1e-12)
    assert math.isclose(r[2], 0.0, abs_tol=1e-12)


def test_radial_distance_bounds():
    elements = OrbitalElements(e=0.6, a=4.0, period_days=30.0)
    for k in range(72):
        nu = -math.pi + 2.0 * math.pi * k / 72
        r = radial_distance(nu, elements.p, elements.e)
        assert elements.perigee_distance - 1e-12 <= r <= elements.apogee_distance + 1e-12


def test_propagated_radius_within_bounds():
    elements = OrbitalElements.from_degrees(e=0.35, a=12.0, period_days=20.0,
                                            inc_deg=30.0, argp_deg=60.0, raan_deg=120.0)
    for t, r in propagate(elements, [0.0, 1.0, 7.5, 33.0, 120.0]):
        assert elements.perigee_distance - 1e-9 <= norm(r) <= elements.apogee_distance + 1e-9


def test_closed_form_matches_rotation_sequence():
    elements = OrbitalElements.from_degrees(e=0.3, a=7.0, period_days=50.0,
                                            inc_deg=51.6, argp_deg=40.0, raan_deg=30.0)
    for nu in [0.0, 0.7, 2.0, -2.5]:
        a = inertial_position(nu, elements)
        b = inertial_position_rotated(nu, elements)
        for i in range(3):
            assert math.isclose(a[i], b[i], abs_tol=1e-12)


def test_render_axes_swap():
    elements = OrbitalElements.from_degrees(e=0.1, a=5.0, period_days=10.0, inc_deg=45.0)
    nu = 1.0
    x, y, z = inertial_position(nu, elements)
    assert render_position(nu, elements) == (x, z, y)


def test_inclined_orbit_leaves_plane():
    elements = OrbitalElements.from_degrees(e=0.1, a=5.0, period_days=10.0, inc_deg=90.0)
    _, y_up, _ = render_position(math.pi / 2, elements)
    assert y_up > 0.0


def test_determinism():
    elements = OrbitalElements.from_degrees(e=0.5, a=3.0, period_days=7.0,
                                            inc_deg=10.0, argp_deg=20.0, raan_deg=30.0)
    assert position_at(elements, 42.123) == position_at(elements, 42.123)


def test_periodicity():
    elements = OrbitalElements.from_degrees(e=0.25, a=10.0, period_days=10.0,
                                            inc_deg=5.0, argp_deg=15.0, raan_deg=25.0)
    T = orbital_period_s(elements.period_days, TIME_FACTOR_DEFAULT)
    for t in [0.0, 2.5, 17.0]:
        r1 = position_at(elements, t)
        r2 = position_at(elements, t + T)
        for i in range(3):
            assert math.isclose(r1[i], r2[i], abs_tol=1e-6)


def test_circular_orbit_agrees_with_fallback():
    # Full propagator forced with e=0 vs circular sweep, phases matched
    elements = OrbitalElements(e=0.0, a=5.0, period_days=365.0, daylength_hours=24.0)
    for t in [0.0, 10.0, 250.0, 999.0]:
        nu = true_anomaly_at(t, elements.period_days, elements.e, TIME_FACTOR_DEFAULT)
        full = render_position(nu, elements)
        circ = circular_position(math.pi / 2.0 - nu, elements.a)
        for i in range(3):
            assert math.isclose(full[i], circ[i], abs_tol=1e-6)


def test_time_factor_from_config():
    elements = OrbitalElements(e=0.2, a=10.0, period_days=100.0)
    slow = SimulationConfig(time_factor=1.0)
    assert position_at(elements, 30.0, slow) != position_at(elements, 30.0)


def test_propagate_returns_samples():
    elements = OrbitalElements(e=0.2, a=10.0, period_days=100.0)
    out = propagate(elements, [0.0, 1.0, 2.0])
    assert [t for t, _ in out] == [0.0, 1.0, 2.0]
    assert all(len(r) == 3 for _, r in out)


def test_from_degrees_converts_once():
    elements = OrbitalElements.from_degrees(e=0.1, a=1.0, period_days=1.0,
                                            inc_deg=180.0, argp_deg=90.0, raan_deg=45.0)
    assert math.isclose(elements.inc_rad, math.pi)
    assert math.isclose(elements.argp_rad, math.pi / 2)
    assert math.isclose(elements.raan_rad, math.pi / 4)
