from __future__ import annotations


class ConfigurationError(ValueError):
    """
    Raised when a body or simulation configuration is invalid.

    Always surfaced at construction time, never from inside a tick.
    """


class NumericalDivergence(ArithmeticError):
    """
    Raised when the Kepler solver fails to converge within its iteration bound.

    Attributes:
        mean_anomaly_rad: Mean anomaly the solver was given (rad)
        e: Eccentricity
        last_estimate_rad: Last eccentric anomaly iterate (rad)
    """

    def __init__(self, message: str, mean_anomaly_rad: float, e: float, last_estimate_rad: float):
        super().__init__(message)
        self.mean_anomaly_rad = mean_anomaly_rad
        self.e = e
        self.last_estimate_rad = last_estimate_rad
