"""
Fixed-step time integration of the semi-discrete rod models.

    state_{k+1} = state_k + dt * f(t_k, state_k)        (forward Euler)

The right-hand side follows the scipy convention f(t, y). Forward Euler is
only stable for dt < 0.5 * dx^2 / alpha; the integrator does not check this,
an unstable step shows up as a diverging trajectory.

RK45 through scipy.integrate.solve_ivp is available as an alternative
explicit stepper with max_step = dt.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import numpy as np
from scipy.integrate import solve_ivp

from rodheat.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


@dataclass
class Trajectory:
    """
    Time series of state vectors.

    Attributes
    ----------
    t : ndarray of shape (nt,)
        Sample times.
    y : ndarray of shape (n_state, nt)
        States, y[:, j] is the state at t[j].
    x : ndarray of shape (n_points,), optional
        Grid positions of the temperature entries.
    n_points : int, optional
        Number of temperature entries; the remaining rows (PI control)
        hold the integral error.
    """

    t: np.ndarray
    y: np.ndarray
    x: Optional[np.ndarray] = None
    n_points: Optional[int] = None

    def __post_init__(self):
        if self.n_points is None:
            self.n_points = self.y.shape[0]

    @property
    def temperatures(self):
        """Temperature field, shape (n_points, nt)."""
        return self.y[:self.n_points]

    @property
    def integral_error(self):
        """Integrated tracking error over time, or None without PI state."""
        if self.y.shape[0] == self.n_points:
            return None
        return self.y[self.n_points]

    @property
    def final_state(self):
        return self.y[:, -1]

    def profile_at(self, time):
        """Spatial temperature profile at the sample closest to ``time``."""
        idx = int(np.argmin(np.abs(self.t - time)))
        return self.temperatures[:, idx]

    def trace_at(self, position):
        """Temperature history at the grid point closest to ``position``."""
        if self.x is None:
            raise InvalidConfiguration("Trajectory has no grid attached")
        idx = int(np.argmin(np.abs(self.x - position)))
        return self.temperatures[idx, :]


def _check_span(t_span, dt):
    t0, tf = float(t_span[0]), float(t_span[1])
    if not tf > t0:
        raise InvalidConfiguration(
            f"Time span must be increasing, got ({t0}, {tf})")
    if not dt > 0:
        raise InvalidConfiguration(f"Step size must be strictly positive, got {dt}")
    return t0, tf


def forward_euler(rhs, y0, t_span, dt, saveat=None):
    """
    Integrate y' = rhs(t, y) with the explicit Euler method.

    Parameters
    ----------
    rhs : callable(t, y) -> ndarray
        Derivative function.
    y0 : array-like
        Initial state.
    t_span : tuple (t0, tf)
        Integration interval. The last step is shortened to end on tf.
    dt : float
        Step size.
    saveat : float, optional
        Sampling interval of the stored trajectory. Every step is stored
        when omitted. The initial and the final state are always stored.

    Returns
    -------
    Trajectory
    """
    t0, tf = _check_span(t_span, dt)
    y = np.array(y0, dtype=float)

    n_steps = int(np.ceil((tf - t0) / dt - 1e-9))
    if saveat is None:
        stride = 1
    else:
        if not saveat > 0:
            raise InvalidConfiguration(f"saveat must be positive, got {saveat}")
        stride = max(1, int(round(saveat / dt)))

    t_list = [t0]
    y_list = [y.copy()]

    t = t0
    for k in range(n_steps):
        h = min(dt, tf - t)
        y = y + h * rhs(t, y)
        t = t0 + (k + 1) * dt if k < n_steps - 1 else tf
        if (k + 1) % stride == 0 or k == n_steps - 1:
            t_list.append(t)
            y_list.append(y.copy())

    logger.info("Forward Euler finished: %d steps to t=%.6g", n_steps, tf)
    return Trajectory(t=np.array(t_list), y=np.column_stack(y_list))


def integrate(rhs, y0, t_span, dt, saveat=None, method="Euler"):
    """
    Integrate with forward Euler or with scipy's RK45 (max_step = dt).

    RK45 reports the solution on the saveat grid (every dt when omitted).
    """
    if method == "Euler":
        return forward_euler(rhs, y0, t_span, dt, saveat=saveat)
    if method != "RK45":
        raise InvalidConfiguration(f"Unknown integration method: {method}")

    t0, tf = _check_span(t_span, dt)
    step = dt if saveat is None else saveat
    t_eval = np.arange(t0, tf, step)
    # solve_ivp rejects repeated sample times
    t_eval = t_eval[t_eval < tf - 1e-12 * max(1.0, abs(tf))]
    t_eval = np.append(t_eval, tf)

    sol = solve_ivp(
        rhs,
        [t0, tf],
        np.asarray(y0, dtype=float),
        t_eval=t_eval,
        max_step=dt,
        method='RK45'
    )
    logger.info("RK45 finished: %d evaluations to t=%.6g", sol.nfev, tf)
    return Trajectory(t=sol.t, y=sol.y)
