"""Keplerian orbital propagation and time-stepping for animated orreries."""

__version__ = "0.1.0"
