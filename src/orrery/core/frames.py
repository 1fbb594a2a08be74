from __future__ import annotations

import math
from typing import Tuple

Vector3 = Tuple[float, float, float]


def rot3(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (c * x - s * y, s * x + c * y, z)


def rot1(angle_rad: float, v: Vector3) -> Vector3:
    c = math.cos(angle_rad)
    s = math.sin(angle_rad)
    x, y, z = v
    return (x, c * y - s * z, s * y + c * z)


def add(a: Vector3, b: Vector3) -> Vector3:
    return (a[0]+b[0], a[1]+b[1], a[2]+b[2])


def perifocal_to_inertial(r_pqw: Vector3, raan_rad: float, inc_rad: float, argp_rad: float) -> Vector3:
    """
    Rotate a perifocal (PQW) vector into the inertial reference frame.

    Rotation sequence R3(raan) * R1(inc) * R3(argp): the vector is first
    turned by the argument of perigee inside the orbital plane, then the
    plane is tilted by the inclination, then swung around by the RAAN.

    Args:
        r_pqw: Vector in the perifocal frame
        raan_rad: Right ascension of ascending node (radians)
        inc_rad: Inclination (radians)
        argp_rad: Argument of perigee (radians)

    Returns:
        Vector in the inertial frame
    """
    r_temp = rot3(argp_rad, r_pqw)
    r_temp = rot1(inc_rad, r_temp)
    return rot3(raan_rad, r_temp)


def to_render_axes(v: Vector3) -> Vector3:
    """
    Inertial (x, y, z) -> render (x, z, y).
    The renderer's vertical axis is the orbital-plane normal.
    """
    x, y, z = v
    return (x, z, y)
