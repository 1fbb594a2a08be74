# Mean -> eccentric -> true anomaly

from __future__ import annotations

import math

from orrery.core.constants import HOURS_PER_DAY, KEPLER_TOL_RAD, KEPLER_MAX_ITER
from orrery.core.errors import NumericalDivergence


def wrap_to_2pi(angle_rad: float) -> float:
    """Wrap angle to [0, 2π)."""
    two_pi = 2.0 * math.pi
    return angle_rad % two_pi


def wrap_to_pi(angle_rad: float) -> float:
    """Wrap angle to (-π, π]."""
    a = wrap_to_2pi(angle_rad)
    if a > math.pi:
        a -= 2.0 * math.pi
    return a


def mean_angular_rate(period_days: float, time_factor: float) -> float:
    """ω = time_factor / (period * 24)."""
    return time_factor / (period_days * HOURS_PER_DAY)


def mean_anomaly(t_s: float, period_days: float, time_factor: float) -> float:
    """
    Mean anomaly for a cumulative elapsed time:
        M = ω * ((t * ω) mod (period * 24)),  ω = time_factor / (period * 24)

    The modulo keeps the argument bounded; M lies in [0, time_factor).
    """
    omega = mean_angular_rate(period_days, time_factor)
    return omega * ((t_s * omega) % (period_days * HOURS_PER_DAY))


def orbital_period_s(period_days: float, time_factor: float) -> float:
    """Elapsed real time for M to advance by one full revolution."""
    omega = mean_angular_rate(period_days, time_factor)
    return 2.0 * math.pi / (omega * omega)


def kepler_residual(E_rad: float, e: float, M_rad: float) -> float:
    return E_rad - e * math.sin(E_rad) - M_rad


def solve_keplers_equation(M_rad: float, e: float,
                           tol: float = KEPLER_TOL_RAD,
                           max_iter: int = KEPLER_MAX_ITER) -> float:
    """
    Solve Kepler's equation for elliptic orbits:
        M = E - e sin(E)
    using Newton-Raphson seeded with E0 = M, or E0 = π for e >= 0.8.

    Iteration stops once the Newton step |f/f'| drops below tol; the step
    is applied before returning, so the result is the latest iterate.

    Args:
        M_rad: Mean anomaly (rad), any value; wrapped to [0, 2π)
        e: eccentricity (0 <= e < 1)
        tol: step tolerance (rad)
        max_iter: iteration cap

    Returns:
        E_rad: Eccentric anomaly (rad)

    Raises:
        ValueError: eccentricity outside [0, 1)
        NumericalDivergence: no convergence within max_iter
    """
    if not (0.0 <= e < 1.0):
        raise ValueError("Elliptic Kepler solver requires 0 <= e < 1.")

    M = wrap_to_2pi(M_rad)
    E = M if e < 0.8 else math.pi

    for _ in range(max_iter):
        f = E - e * math.sin(E) - M
        fp = 1.0 - e * math.cos(E)
        ratio = f / fp
        E -= ratio
        if not math.isfinite(E):
            break
        if abs(ratio) < tol:
            return E

    raise NumericalDivergence(
        f"Kepler solver did not converge within {max_iter} iterations (M={M}, e={e}).",
        mean_anomaly_rad=M,
        e=e,
        last_estimate_rad=E,
    )


def true_anomaly(E_rad: float, e: float) -> float:
    """
    ν = 2 atan( sqrt((1+e)/(1-e)) tan(E/2) ), normalised to (-π, π].

    Evaluated with atan2 on the half-angle terms so E = π maps to π
    instead of tripping over tan(π/2).
    """
    half = 0.5 * E_rad
    nu = 2.0 * math.atan2(math.sqrt(1.0 + e) * math.sin(half),
                          math.sqrt(1.0 - e) * math.cos(half))
    return wrap_to_pi(nu)


def true_anomaly_at(t_s: float, period_days: float, e: float, time_factor: float,
                    tol: float = KEPLER_TOL_RAD, max_iter: int = KEPLER_MAX_ITER) -> float:
    """Elapsed time -> true anomaly (rad)."""
    M = mean_anomaly(t_s, period_days, time_factor)
    E = solve_keplers_equation(M, e, tol=tol, max_iter=max_iter)
    return true_anomaly(E, e)
