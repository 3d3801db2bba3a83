"""
State-space form of the actuated rod and its feedback loops.

Heat is induced at x = 0 by the actuator flux b * u(t); at x = L the rod
loses heat by convection and radiation, phi_out(theta_{N-1}), which enters
as a disturbance w(t). After the spatial discretisation

    d theta/dt = A theta + B u + E w,      y = C theta

with
    A = alpha/dx^2 * M                     (ghost-point operator)
    B = 2*alpha/(lambda*dx) * b * e_0      (input vector)
    E = 2*alpha/(lambda*dx) * e_{N-1}      (disturbance vector)
    C = e_{N-1}^T                          (output, right end)
"""

import logging

import numpy as np

from rodheat.controllers.pi import PIController
from rodheat.controllers.proportional import ProportionalController
from rodheat.errors import InvalidState
from rodheat.models.discretization import BoundaryCondition
from rodheat.models.heat_1d_model import RodModel, outward_flux

logger = logging.getLogger(__name__)


class RodStateSpace:
    """
    Open-loop matrices A, B, C, E of the actuated rod.

    Parameters
    ----------
    params : ParameterSet, optional
    """

    def __init__(self, params=None):
        self.model = RodModel(params, BoundaryCondition.ACTUATED)
        self.params = self.model.params
        n = self.model.n_points
        alpha, dx = self.model.alpha, self.model.dx
        gain = 2 * alpha / (self.params.conductivity * dx)

        self.A = (alpha / dx ** 2) * self.model.M
        self.B = np.zeros(n)
        self.B[0] = gain * self.params.b
        self.E = np.zeros(n)
        self.E[-1] = gain
        self.C = np.zeros(n)
        self.C[-1] = 1.0
        self.k_rad = self.params.radiation_coefficient

    def output(self, theta):
        """y = C theta, the temperature at x = L."""
        return theta[-1]

    def disturbance(self, theta):
        """w = phi_out at the right end."""
        p = self.params
        return outward_flux(theta[-1], p.h, self.k_rad, p.T_a)


class ProportionalLoop(RodModel):
    """
    Rod with proportional feedback from the right end to the heater at x = 0.

        d theta/dt = A theta + B * Kp * (y_ref - theta_{N-1}) + E * w(theta_{N-1})
    """

    def __init__(self, plant=None, controller=None):
        if plant is None:
            plant = RodStateSpace()
        if controller is None:
            controller = ProportionalController(Kp=plant.params.Kp,
                                                y_ref=plant.params.y_ref)
        super().__init__(plant.params, BoundaryCondition.ACTUATED, disc=plant.model.disc)
        self.plant = plant
        self.controller = controller

    def rhs(self, t, theta):
        theta = self._check_state(theta)
        p = self.plant
        u = self.controller.get_u(t, p.output(theta))
        return p.A @ theta + p.B * u + p.E * p.disturbance(theta)

    def control_signal(self, traj):
        """Reconstruct u(t) along a simulated trajectory."""
        y = traj.temperatures[-1]
        return np.array([self.controller.get_u(ti, yi) for ti, yi in zip(traj.t, y)])


class PIClosedLoop(RodModel):
    """
    Rod with PI feedback; the state is z = [theta; eps] of length N + 1.

    The closed-loop matrices are assembled once at construction.
    """

    def __init__(self, plant=None, controller=None):
        if plant is None:
            plant = RodStateSpace()
        if controller is None:
            controller = PIController(Kp=plant.params.Kp, Ki=plant.params.Ki,
                                      y_ref=plant.params.y_ref)
        super().__init__(plant.params, BoundaryCondition.ACTUATED, disc=plant.model.disc)
        self.plant = plant
        self.controller = controller
        self.Acl, self.Bcl, self.Ecl = controller.closed_loop(
            plant.A, plant.B, plant.C, plant.E)
        self._forcing = self.Bcl * controller.y_ref
        logger.debug("Assembled PI closed loop of size %d", self.Acl.shape[0])

    @property
    def state_size(self):
        return self.n_points + 1

    def initial_state(self, theta0, eps0=0.0):
        """Augment an initial temperature profile with the integral error."""
        if np.isscalar(theta0):
            theta0 = np.full(self.n_points, float(theta0))
        theta0 = np.asarray(theta0, dtype=float)
        if theta0.shape == (self.state_size,):
            return theta0.copy()
        if theta0.shape != (self.n_points,):
            raise InvalidState(
                f"Initial profile must have {self.n_points} entries, "
                f"got shape {theta0.shape}")
        return np.append(theta0, eps0)

    def rhs(self, t, z):
        z = self._check_state(z)
        w = self.plant.disturbance(z[:self.n_points])
        return self.Acl @ z + self._forcing + self.Ecl * w

    def eigenvalues(self):
        """Spectrum of the closed-loop matrix Acl."""
        return np.linalg.eigvals(self.Acl.toarray())

    def control_signal(self, traj):
        """Reconstruct u(t) = Kp e + Ki eps along a simulated trajectory."""
        y = traj.temperatures[-1]
        eps = traj.integral_error
        return np.array([self.controller.get_u(ti, yi, ei)
                         for ti, yi, ei in zip(traj.t, y, eps)])
