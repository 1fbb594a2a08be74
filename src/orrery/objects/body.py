from __future__ import annotations

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Union

from orrery.core.config import SimulationConfig
from orrery.core.constants import DEG_TO_RAD
from orrery.core.errors import ConfigurationError, NumericalDivergence
from orrery.core.frames import Vector3
from orrery.physics.orbit import OrbitalElements, position_at, render_position
from orrery.physics.rotation import (
    spin_angle,
    orbit_sweep_angle,
    circular_position,
    spin_axis_for,
)

logger = logging.getLogger(__name__)

REQUIRED_FIELDS = ("name", "type", "radius", "distance", "period", "daylength", "textures")


@dataclass(frozen=True)
class BodyConfig:
    """
    Raw body record as it comes from the configuration layer.

    Units:
        radius_km, inner_radius_km, outer_radius_km: km (scaled down at body construction)
        distance: render distance of the circular path
        semi_major_axis: render distance of the elliptical path
        period_days: days; daylength_hours: hours
        tilt_deg, inclination_deg, arg_perigee_deg, raan_deg: degrees
        offset_rad: optional fixed starting phase (radians)
    """
    name: str
    body_type: str
    radius_km: float
    distance: float
    period_days: float
    daylength_hours: float
    textures: Dict[str, str]
    tilt_deg: float = 0.0
    eccentricity: float = 0.0
    inclination_deg: float = 0.0
    semi_major_axis: float = 0.0
    arg_perigee_deg: float = 0.0
    raan_deg: float = 0.0
    offset_rad: Optional[float] = None
    orbits: Optional[str] = None
    inner_radius_km: float = 0.0
    outer_radius_km: float = 0.0
    traversable: bool = False
    labels: List[Dict[str, Any]] = field(default_factory=list)

    def __post_init__(self):
        if not self.name or not self.name.strip():
            raise ConfigurationError("Body name cannot be empty.")
        if not self.textures.get("map"):
            raise ConfigurationError(f"{self.name}: textures.map is required.")
        if not (math.isfinite(self.period_days) and self.period_days > 0):
            raise ConfigurationError(f"{self.name}: Period must be positive. Got: {self.period_days}")
        if not (0.0 <= self.eccentricity < 1.0):
            raise ConfigurationError(
                f"{self.name}: Eccentricity must be in range [0, 1). Got: {self.eccentricity}"
            )
        if self.radius_km < 0:
            raise ConfigurationError(f"{self.name}: Radius must be non-negative. Got: {self.radius_km}")
        if self.body_type == "ring" and self.outer_radius_km <= self.inner_radius_km:
            raise ConfigurationError(f"{self.name}: Ring outer radius must exceed inner radius.")

    @classmethod
    def from_dict(cls, record: Dict[str, Any]) -> "BodyConfig":
        missing = [k for k in REQUIRED_FIELDS if k not in record]
        if missing:
            name = record.get("name", "<unnamed>")
            raise ConfigurationError(f"{name}: missing required field(s): {', '.join(missing)}")
        if not isinstance(record["textures"], dict):
            raise ConfigurationError(f"{record['name']}: textures must be an object.")

        try:
            return cls(
                name=str(record["name"]),
                body_type=str(record["type"]),
                radius_km=float(record["radius"]),
                distance=float(record["distance"]),
                period_days=float(record["period"]),
                daylength_hours=float(record["daylength"]),
                textures=dict(record["textures"]),
                tilt_deg=float(record.get("tilt", 0.0)),
                eccentricity=float(record.get("eccentricity", 0.0)),
                inclination_deg=float(record.get("inclination", 0.0)),
                semi_major_axis=float(record.get("semiMajorAxis", 0.0)),
                arg_perigee_deg=float(record.get("argPerigee", 0.0)),
                raan_deg=float(record.get("raan", 0.0)),
                offset_rad=None if record.get("offset") is None else float(record["offset"]),
                orbits=record.get("orbits"),
                inner_radius_km=float(record.get("innerRadius", 0.0)),
                outer_radius_km=float(record.get("outerRadius", 0.0)),
                traversable=bool(record.get("traversable", False)),
                labels=list(record.get("labels") or []),
            )
        except ConfigurationError:
            raise
        except (TypeError, ValueError) as exc:
            raise ConfigurationError(f"{record['name']}: {exc}") from exc


@dataclass(frozen=True)
class RenderTransform:
    """
    Per-tick output for the rendering layer.
    orbit_angle is only set on the circular path.
    """
    position: Vector3
    rotation_axis: str
    rotation_angle: float
    orbit_angle: Optional[float] = None

    @classmethod
    def default(cls, rotation_axis: str = "y") -> "RenderTransform":
        return cls(position=(0.0, 0.0, 0.0), rotation_axis=rotation_axis, rotation_angle=0.0)


@dataclass(frozen=True)
class CircularOrbit:
    """Flat circular path of radius `distance`, swept linearly in time."""
    distance: float
    period_days: float
    daylength_hours: float
    phase_offset_rad: float

    def __post_init__(self):
        if not (math.isfinite(self.distance) and self.distance >= 0):
            raise ConfigurationError(f"Distance must be non-negative. Got: {self.distance}")
        if not (math.isfinite(self.period_days) and self.period_days > 0):
            raise ConfigurationError(f"Period must be positive. Got: {self.period_days}")
        if not math.isfinite(self.phase_offset_rad):
            raise ConfigurationError(f"Phase offset must be finite. Got: {self.phase_offset_rad}")

    @property
    def mean_distance(self) -> float:
        return self.distance

    def sweep_angle_at(self, t_s: float, config: SimulationConfig) -> Optional[float]:
        return orbit_sweep_angle(t_s, self.daylength_hours, self.period_days,
                                 self.phase_offset_rad, config.time_factor)

    def position_at(self, t_s: float, config: SimulationConfig) -> Vector3:
        return circular_position(self.sweep_angle_at(t_s, config), self.distance)

    def path(self, samples: int) -> List[Vector3]:
        return [circular_position(2.0 * math.pi * k / samples, self.distance) for k in range(samples)]


@dataclass(frozen=True)
class EllipticalOrbit:
    """Full Keplerian path driven by the anomaly solver."""
    elements: OrbitalElements

    @property
    def mean_distance(self) -> float:
        return self.elements.a

    def sweep_angle_at(self, t_s: float, config: SimulationConfig) -> Optional[float]:
        return None

    def position_at(self, t_s: float, config: SimulationConfig) -> Vector3:
        return position_at(self.elements, t_s, config)

    def path(self, samples: int) -> List[Vector3]:
        return [render_position(2.0 * math.pi * k / samples, self.elements) for k in range(samples)]


Orbit = Union[CircularOrbit, EllipticalOrbit]


class PlanetaryBody:
    """
    A celestial body: fixed orbital constants plus the latest render transform.

    The orbit variant is picked once here: e > circular_eccentricity_eps uses
    the elliptical propagator, anything else the circular approximation.
    """

    def __init__(self, body: BodyConfig,
                 config: Optional[SimulationConfig] = None,
                 rng: Optional[random.Random] = None):
        self.config = config or SimulationConfig()
        scale = self.config.distance_scale_km

        self.name = body.name
        self.body_type = body.body_type
        self.orbits = body.orbits
        self.traversable = body.traversable
        self.textures = dict(body.textures)
        self.labels = list(body.labels)

        self.radius = body.radius_km / scale
        self.inner_radius = body.inner_radius_km / scale
        self.outer_radius = body.outer_radius_km / scale
        self.tilt_rad = body.tilt_deg * DEG_TO_RAD
        self.period_days = body.period_days
        self.daylength_hours = body.daylength_hours

        if body.offset_rad is not None:
            self.phase_offset_rad = body.offset_rad
        else:
            self.phase_offset_rad = (rng or random.Random()).uniform(0.0, 2.0 * math.pi)

        try:
            self.orbit: Orbit = self._build_orbit(body)
        except ConfigurationError as exc:
            raise ConfigurationError(f"{self.name}: {exc}") from exc
        self.rotation_axis = spin_axis_for(self.body_type)
        self.transform = RenderTransform.default(self.rotation_axis)
        self._converged = False

        logger.debug("Created body %s (%s orbit, phase %.3f rad)",
                     self.name, type(self.orbit).__name__, self.phase_offset_rad)

    def _build_orbit(self, body: BodyConfig) -> Orbit:
        if body.eccentricity > self.config.circular_eccentricity_eps:
            elements = OrbitalElements.from_degrees(
                e=body.eccentricity,
                a=body.semi_major_axis,
                period_days=body.period_days,
                daylength_hours=body.daylength_hours,
                inc_deg=body.inclination_deg,
                argp_deg=body.arg_perigee_deg,
                raan_deg=body.raan_deg,
                phase_offset_rad=self.phase_offset_rad,
            )
            return EllipticalOrbit(elements)
        return CircularOrbit(
            distance=body.distance,
            period_days=body.period_days,
            daylength_hours=body.daylength_hours,
            phase_offset_rad=self.phase_offset_rad,
        )

    @property
    def is_elliptical(self) -> bool:
        return isinstance(self.orbit, EllipticalOrbit)

    def tick(self, t_s: float) -> RenderTransform:
        """
        Transform at cumulative elapsed time t_s (real seconds).

        The result only depends on t_s; it is also kept on `transform` for
        the render layer. If the Kepler solver diverges the previous
        converged position is reused (or the circular approximation if
        there is none yet).
        """
        cfg = self.config
        spin = spin_angle(t_s, self.daylength_hours, cfg.time_factor)
        sweep = self.orbit.sweep_angle_at(t_s, cfg)

        try:
            position = self.orbit.position_at(t_s, cfg)
            self._converged = True
        except NumericalDivergence as exc:
            logger.warning("%s: %s; reusing last position", self.name, exc)
            position = self._fallback_position(t_s)

        self.transform = RenderTransform(
            position=position,
            rotation_axis=self.rotation_axis,
            rotation_angle=spin,
            orbit_angle=sweep,
        )
        return self.transform

    def _fallback_position(self, t_s: float) -> Vector3:
        if self._converged:
            return self.transform.position
        angle = orbit_sweep_angle(t_s, self.daylength_hours, self.period_days,
                                  self.phase_offset_rad, self.config.time_factor)
        return circular_position(angle, self.orbit.mean_distance)

    def orbit_path(self, samples: int = 128) -> List[Vector3]:
        """Closed polyline of the orbit in render space (first point repeated)."""
        if samples < 3:
            raise ValueError("samples must be >= 3.")
        points = self.orbit.path(samples)
        points.append(points[0])
        return points

    def min_camera_distance(self) -> float:
        return self.radius * 0.5
