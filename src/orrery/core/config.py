from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict, List, Union

from orrery.core.constants import (
    TIME_FACTOR_DEFAULT,
    DISTANCE_SCALE_KM,
    KEPLER_TOL_RAD,
    KEPLER_MAX_ITER,
)
from orrery.core.errors import ConfigurationError

LOG_FORMAT = '%(asctime)s - %(levelname)s - %(module)s - %(message)s'


def configure_logging(level: int = logging.INFO) -> None:
    """Basic logging setup for scripts; library modules only create loggers."""
    logging.basicConfig(level=level, format=LOG_FORMAT)


@dataclass(frozen=True)
class SimulationConfig:
    """
    Simulation-wide settings passed explicitly into propagation.

    Units:
        time_factor: simulated-angle scale, rad per real second per hour
            of day length (16*pi => 1 s real time is 8 h simulated)
        kepler_tol: Newton-Raphson step tolerance (rad)
        kepler_max_iter: Newton-Raphson iteration cap
        distance_scale_km: divisor applied to raw radii (km)
        circular_eccentricity_eps: bodies with e <= eps use the circular path
    """
    time_factor: float = TIME_FACTOR_DEFAULT
    kepler_tol: float = KEPLER_TOL_RAD
    kepler_max_iter: int = KEPLER_MAX_ITER
    distance_scale_km: float = DISTANCE_SCALE_KM
    circular_eccentricity_eps: float = 0.0

    def __post_init__(self):
        self.validate()

    def validate(self) -> None:
        if not (math.isfinite(self.time_factor) and self.time_factor > 0):
            raise ConfigurationError(f"time_factor must be positive and finite. Got: {self.time_factor}")
        if not (self.kepler_tol > 0):
            raise ConfigurationError(f"kepler_tol must be positive. Got: {self.kepler_tol}")
        if self.kepler_max_iter < 1:
            raise ConfigurationError(f"kepler_max_iter must be >= 1. Got: {self.kepler_max_iter}")
        if not (math.isfinite(self.distance_scale_km) and self.distance_scale_km > 0):
            raise ConfigurationError(f"distance_scale_km must be positive. Got: {self.distance_scale_km}")
        if not (0.0 <= self.circular_eccentricity_eps < 1.0):
            raise ConfigurationError(
                f"circular_eccentricity_eps must be in range [0, 1). Got: {self.circular_eccentricity_eps}"
            )


def load_bodies_file(path: Union[str, Path]) -> List[Dict[str, Any]]:
    """
    Read raw body records from JSON.

    Accepted shapes:
      [ {"name": "Earth", ...}, ... ]
      { "bodies": [ {...}, ... ] }
    """
    with open(path, "r", encoding="utf-8") as f:
        data = json.load(f)

    if isinstance(data, dict):
        data = data.get("bodies")
    if not isinstance(data, list):
        raise ConfigurationError(f"{path}: expected a list of body records.")
    for i, record in enumerate(data):
        if not isinstance(record, dict):
            raise ConfigurationError(f"{path}: body record #{i} is not an object.")
    return data
