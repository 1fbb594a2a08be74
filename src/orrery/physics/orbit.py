# src/orrery/physics/orbit.py

from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Tuple

from orrery.core.config import SimulationConfig
from orrery.core.constants import DEG_TO_RAD
from orrery.core.errors import ConfigurationError
from orrery.core.frames import Vector3, perifocal_to_inertial, to_render_axes
from orrery.physics.anomaly import true_anomaly_at


@dataclass(frozen=True)
class OrbitalElements:
    """
    Per-body orbital constants, fixed at construction.

    Units:
        e: eccentricity (0<=e<1)
        a: semi-major axis in scaled render distance
        period_days: orbital period in days
        daylength_hours: sidereal day in hours (0 disables axial spin)
        inc_rad: inclination in radians
        argp_rad: argument of perigee in radians
        raan_rad: right ascension of ascending node in radians
        phase_offset_rad: starting phase in radians
        p: semi-latus rectum a(1 - e^2), derived once
    """
    e: float
    a: float
    period_days: float
    daylength_hours: float = 0.0
    inc_rad: float = 0.0
    argp_rad: float = 0.0
    raan_rad: float = 0.0
    phase_offset_rad: float = 0.0
    p: float = field(init=False)

    def __post_init__(self):
        if not (math.isfinite(self.period_days) and self.period_days > 0):
            raise ConfigurationError(f"Period must be positive. Got: {self.period_days}")
        if not (0.0 <= self.e < 1.0):
            raise ConfigurationError(f"Eccentricity must be in range [0, 1). Got: {self.e}")
        if not (math.isfinite(self.a) and self.a > 0):
            raise ConfigurationError(f"Semi-major axis must be positive. Got: {self.a}")
        if not (math.isfinite(self.daylength_hours) and self.daylength_hours >= 0):
            raise ConfigurationError(f"Day length must be non-negative. Got: {self.daylength_hours}")
        for label, value in (("Inclination", self.inc_rad),
                             ("Argument of perigee", self.argp_rad),
                             ("RAAN", self.raan_rad),
                             ("Phase offset", self.phase_offset_rad)):
            if not math.isfinite(value):
                raise ConfigurationError(f"{label} must be finite. Got: {value}")

        object.__setattr__(self, "p", self.a * (1.0 - self.e * self.e))

    @classmethod
    def from_degrees(cls, e: float, a: float, period_days: float,
                     daylength_hours: float = 0.0,
                     inc_deg: float = 0.0, argp_deg: float = 0.0, raan_deg: float = 0.0,
                     phase_offset_rad: float = 0.0) -> "OrbitalElements":
        return cls(
            e=e,
            a=a,
            period_days=period_days,
            daylength_hours=daylength_hours,
            inc_rad=inc_deg * DEG_TO_RAD,
            argp_rad=argp_deg * DEG_TO_RAD,
            raan_rad=raan_deg * DEG_TO_RAD,
            phase_offset_rad=phase_offset_rad,
        )

    @property
    def perigee_distance(self) -> float:
        return self.a * (1.0 - self.e)

    @property
    def apogee_distance(self) -> float:
        return self.a * (1.0 + self.e)


def radial_distance(nu_rad: float, p: float, e: float) -> float:
    """r = p / (1 + e cos ν)."""
    return p / (1.0 + e * math.cos(nu_rad))


def perifocal_position(nu_rad: float, elements: OrbitalElements) -> Vector3:
    r = radial_distance(nu_rad, elements.p, elements.e)
    return (r * math.cos(nu_rad), r * math.sin(nu_rad), 0.0)


def inertial_position(nu_rad: float, elements: OrbitalElements) -> Vector3:
    """
    Closed form of the perifocal -> inertial 3-1-3 rotation for a position
    on the orbit at true anomaly ν. Matches perifocal_to_inertial().
    """
    r = radial_distance(nu_rad, elements.p, elements.e)
    u = elements.argp_rad + nu_rad  # argument of latitude
    cos_u, sin_u = math.cos(u), math.sin(u)
    cos_O, sin_O = math.cos(elements.raan_rad), math.sin(elements.raan_rad)
    cos_i, sin_i = math.cos(elements.inc_rad), math.sin(elements.inc_rad)

    x = r * (cos_u * cos_O - cos_i * sin_u * sin_O)
    y = r * (cos_u * sin_O + cos_i * sin_u * cos_O)
    z = r * (sin_u * sin_i)
    return (x, y, z)


def inertial_position_rotated(nu_rad: float, elements: OrbitalElements) -> Vector3:
    """Same as inertial_position() but built from the explicit rotations."""
    return perifocal_to_inertial(
        perifocal_position(nu_rad, elements),
        elements.raan_rad, elements.inc_rad, elements.argp_rad,
    )


def render_position(nu_rad: float, elements: OrbitalElements) -> Vector3:
    return to_render_axes(inertial_position(nu_rad, elements))


def position_at(elements: OrbitalElements, t_s: float,
                config: Optional[SimulationConfig] = None) -> Vector3:
    """
    Render-space position at elapsed time t_s (real seconds).

    Raises:
        NumericalDivergence: Kepler solver did not converge
    """
    cfg = config or SimulationConfig()
    nu = true_anomaly_at(t_s, elements.period_days, elements.e, cfg.time_factor,
                         tol=cfg.kepler_tol, max_iter=cfg.kepler_max_iter)
    return render_position(nu, elements)


def propagate(elements: OrbitalElements, times_s: Iterable[float],
              config: Optional[SimulationConfig] = None) -> List[Tuple[float, Vector3]]:
    """
    Propagate an orbit across a list of elapsed times.
    Returns list of (t, r_render).
    """
    cfg = config or SimulationConfig()
    out: List[Tuple[float, Vector3]] = []
    for t in times_s:
        out.append((t, position_at(elements, t, cfg)))
    return out
