"""
Exceptions raised by the rod heat models.

Setup problems (grid too small, non-positive length, time span or step)
raise InvalidConfiguration. A state vector whose length does not match the
configured grid raises InvalidState on every evaluator call.
"""


class HeatModelError(Exception):
    """Base class for all errors raised by rodheat."""


class InvalidConfiguration(HeatModelError, ValueError):
    """A parameter set, grid or time span that cannot be simulated."""


class InvalidState(HeatModelError, ValueError):
    """A state vector whose dimension does not match the model."""
