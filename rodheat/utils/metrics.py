"""
Evaluation metrics for rod simulations.

All metrics take time series data and return scalar values, so runs with
different boundary conditions or controllers can be compared directly.
"""

import numpy as np
from scipy.integrate import trapezoid


def total_heat(theta, dx):
    """
    Discrete heat content per unit capacity: trapezoidal sum of theta * dx.

    The boundary nodes carry half weight. This is the quantity the
    ghost-point Neumann operator conserves exactly.

    Parameters
    ----------
    theta : ndarray of shape (n_points,) or (n_points, nt)
        Temperature profile(s).
    dx : float
        Grid spacing.
    """
    return trapezoid(np.asarray(theta), dx=dx, axis=0)


def steady_state_error(y, y_ref):
    """Tracking error y_ref - y at the last sample."""
    return y_ref - np.asarray(y)[-1]


def temperature_rmse(t, y, y_ref):
    """
    Time-averaged tracking error of the output temperature.

        rmse = sqrt( 1/(t_f - t_0) * int (y(t) - y_ref)^2 dt )

    A single sample has no duration and gives 0.
    """
    t = np.asarray(t, dtype=float)
    span = t[-1] - t[0]
    if not span > 0:
        return 0.0
    squared = (np.asarray(y, dtype=float) - y_ref) ** 2
    return float(np.sqrt(trapezoid(squared, t) / span))


def max_overshoot(y, y_ref):
    """Largest excursion of y above y_ref, 0 when y stays below."""
    return float(np.clip(np.max(y) - y_ref, 0.0, None))


def settling_time(t, y, y_ref, band=0.5):
    """
    First sample time after which y stays within y_ref +/- band.

    Returns t[0] if y never leaves the band and np.inf if the last
    sample is still outside.
    """
    outside = np.flatnonzero(np.abs(np.asarray(y) - y_ref) > band)
    if outside.size == 0:
        return t[0]
    if outside[-1] == len(t) - 1:
        return np.inf
    return t[outside[-1] + 1]


def is_bounded(y, lower, upper):
    """True if every entry of y is finite and within [lower, upper]."""
    y = np.asarray(y)
    return bool(np.all(np.isfinite(y)) and y.min() >= lower and y.max() <= upper)


def energy_input(t, u):
    """Integral of the actuation signal over the run."""
    return trapezoid(u, t)


def compute_all_metrics(t, y, u, y_ref, band=0.5):
    """
    Compute all tracking metrics in one call.

    Parameters
    ----------
    t : ndarray
        Time array.
    y : ndarray
        Output temperature (right end of the rod).
    u : ndarray
        Control input.
    y_ref : float
        Reference temperature.

    Returns
    -------
    metrics : dict
    """
    return {
        'energy': energy_input(t, u),
        'rmse': temperature_rmse(t, y, y_ref),
        'max_overshoot': max_overshoot(y, y_ref),
        'settling_time': settling_time(t, y, y_ref, band=band),
        'steady_state_error': steady_state_error(y, y_ref),
    }
