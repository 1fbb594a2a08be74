from __future__ import annotations

import math

from orrery.core.constants import HOURS_PER_DAY
from orrery.core.frames import Vector3

SPIN_AXIS_RING = "z"
SPIN_AXIS_DEFAULT = "y"


def spin_angle(t_s: float, daylength_hours: float, time_factor: float) -> float:
    """Axial spin angle (rad); 0 when the body has no day length."""
    if daylength_hours > 0:
        return (t_s * time_factor) / daylength_hours
    return 0.0


def orbit_sweep_angle(t_s: float, daylength_hours: float, period_days: float,
                      phase_offset_rad: float, time_factor: float) -> float:
    """
    Orbital sweep angle for the circular path (rad).
    A body without day length does not sweep; it stays at its phase offset.
    """
    sweep = 0.0
    if daylength_hours > 0:
        sweep = (t_s * time_factor) / (period_days * HOURS_PER_DAY)
    return sweep + phase_offset_rad


def circular_position(angle_rad: float, distance: float) -> Vector3:
    """Render-space position on a flat circle: x = sin(θ)d, z = cos(θ)d."""
    return (math.sin(angle_rad) * distance, 0.0, math.cos(angle_rad) * distance)


def spin_axis_for(body_type: str) -> str:
    return SPIN_AXIS_RING if body_type == "ring" else SPIN_AXIS_DEFAULT
