"""
1D PDE Model: heat equation along a rod of length L.

    d theta/dt = alpha * d^2 theta/dx^2,    alpha = lambda / (c * rho)

Boundary conditions:
    Dirichlet: theta(t, 0) and theta(t, L) are held at their initial value.
    Neumann:   zero flux (insulated ends).
    Robin:     convective and radiative loss on both ends,

        phi_out(theta) = -h * (theta - T_a) - k * (theta^4 - T_a^4),   k = eps * sigma

Method: Method of Lines. After the spatial discretisation

    d theta/dt = alpha/dx^2 * M * theta + 2*alpha/dx * Phi_out(theta)

where Phi_out is zero except at the two boundary nodes. The ODE system is
advanced with a fixed-step explicit solver (models.integrator).

References:
- Strikwerda JC. Finite Difference Schemes and Partial Differential
  Equations. 2nd ed. SIAM, 2004.
  (Chapters 7-8: Heat equation discretisation, stability analysis)
"""

import logging

import numpy as np

from rodheat.errors import InvalidConfiguration, InvalidState
from rodheat.models.discretization import BoundaryCondition, build_discretization
from rodheat.models.integrator import integrate
from rodheat.utils.parameters import ParameterSet

logger = logging.getLogger(__name__)


def outward_flux(theta, h, k, T_a):
    """
    Heat flux from the rod surface into the environment.

        phi_out = -h * (theta - T_a) - k * (theta^4 - T_a^4)

    Temperatures must be absolute (Kelvin). No clamping is applied.
    """
    return -h * (theta - T_a) - k * (theta ** 4 - T_a ** 4)


class RodModel:
    """
    Common part of all rod evaluators: grid, state checks and simulation.

    Subclasses implement ``rhs(t, state)``. An existing Discretization can
    be passed as ``disc`` to share the grid and operator with another model.
    """

    def __init__(self, params, boundary, disc=None):
        if params is None:
            params = ParameterSet()
        self.params = params
        self.alpha = params.diffusivity
        if disc is None:
            disc = build_discretization(params.length, params.n_points, boundary)
        self.disc = disc
        self.boundary = self.disc.boundary
        self.dx = self.disc.dx
        self.n_points = self.disc.n_points
        self.M = self.disc.operator

    @property
    def grid(self):
        return self.disc.grid

    @property
    def state_size(self):
        return self.n_points

    @property
    def stability_limit(self):
        return 0.5 * self.dx ** 2 / self.alpha

    def _check_state(self, state):
        state = np.asarray(state, dtype=float)
        if state.shape != (self.state_size,):
            raise InvalidState(
                f"Expected a state vector of length {self.state_size}, "
                f"got shape {state.shape}")
        return state

    def initial_state(self, theta0):
        """Expand a scalar temperature to a uniform profile and validate."""
        if np.isscalar(theta0):
            theta0 = np.full(self.n_points, float(theta0))
        return self._check_state(theta0)

    def rhs(self, t, state):
        raise NotImplementedError

    def simulate(self, theta0, t_end=None, dt=None, saveat=None, method="Euler"):
        """
        Run the model from ``theta0`` up to ``t_end``.

        Parameters
        ----------
        theta0 : float or ndarray
            Initial state (scalar for a uniform rod).
        t_end : float, optional
            Final time, defaults to params.t_end.
        dt : float, optional
            Step size, defaults to params.dt.
        saveat : float, optional
            Sampling interval of the returned trajectory.
        method : str
            "Euler" (default) or "RK45".

        Returns
        -------
        Trajectory
            With the grid attached; y has shape (state_size, nt).
        """
        t_end = self.params.t_end if t_end is None else t_end
        dt = self.params.dt if dt is None else dt
        if not t_end > 0:
            raise InvalidConfiguration(f"Final time must be positive, got {t_end}")

        if method == "Euler" and dt >= self.stability_limit:
            logger.warning(
                "Step size dt=%.4g exceeds the forward Euler stability limit "
                "%.4g; the trajectory may diverge", dt, self.stability_limit)

        y0 = self.initial_state(theta0)
        traj = integrate(self.rhs, y0, (0.0, t_end), dt, saveat=saveat,
                         method=method)
        traj.x = self.grid
        traj.n_points = self.n_points
        return traj


class HeatEquation1D(RodModel):
    """
    Heat equation on a rod without control input.

    Parameters
    ----------
    params : ParameterSet
        Physical and discretisation constants.
    boundary : BoundaryCondition or str
        DIRICHLET or NEUMANN (linear, no forcing) or ROBIN (radiative loss
        on both ends).
    """

    def __init__(self, params=None, boundary=BoundaryCondition.NEUMANN):
        boundary = BoundaryCondition.parse(boundary)
        if boundary is BoundaryCondition.ACTUATED:
            raise InvalidConfiguration(
                "An actuated boundary needs a controller, "
                "use ProportionalLoop or PIClosedLoop")
        super().__init__(params, boundary)
        self.A = (self.alpha / self.dx ** 2) * self.M
        self.k_rad = self.params.radiation_coefficient

    def boundary_flux(self, theta):
        """Forcing vector Phi_out: phi_out at both ends, zero inside."""
        phi = np.zeros(self.n_points)
        p = self.params
        phi[0] = outward_flux(theta[0], p.h, self.k_rad, p.T_a)
        phi[-1] = outward_flux(theta[-1], p.h, self.k_rad, p.T_a)
        return phi

    def rhs(self, t, theta):
        """
        Right-hand side of the semi-discrete system.

        Parameters
        ----------
        t : float
            Current time (the model is autonomous).
        theta : ndarray of shape (n_points,)
            Temperature at each grid point.
        """
        theta = self._check_state(theta)
        dtheta = self.A @ theta
        if self.boundary is BoundaryCondition.ROBIN:
            dtheta = dtheta + (2 * self.alpha / self.dx) * self.boundary_flux(theta)
        return dtheta
