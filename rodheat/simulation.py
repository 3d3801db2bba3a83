"""
Build an evaluator for a configuration and run it to the final time.
"""

import logging

from rodheat.controllers.pi import PIController
from rodheat.controllers.proportional import ProportionalController
from rodheat.errors import InvalidConfiguration
from rodheat.models.discretization import BoundaryCondition
from rodheat.models.heat_1d_model import HeatEquation1D
from rodheat.models.state_space import PIClosedLoop, ProportionalLoop, RodStateSpace
from rodheat.utils.parameters import ParameterSet

logger = logging.getLogger(__name__)


def build_model(params=None, boundary=BoundaryCondition.NEUMANN, controller=None):
    """
    Create the evaluator matching a boundary kind and controller.

    Parameters
    ----------
    params : ParameterSet, optional
    boundary : BoundaryCondition or str
        DIRICHLET, NEUMANN or ROBIN without controller; a controller
        implies the ACTUATED rod.
    controller : {"P", "PI"}, ProportionalController or PIController, optional
        Feedback law. String kinds take their gains from ``params``.
    """
    if params is None:
        params = ParameterSet()
    boundary = BoundaryCondition.parse(boundary)

    if controller is None:
        return HeatEquation1D(params, boundary)

    if boundary is not BoundaryCondition.ACTUATED:
        logger.debug("Controller given, using the actuated rod instead of %s",
                     boundary.value)
    plant = RodStateSpace(params)

    if controller == "P":
        controller = ProportionalController(Kp=params.Kp, y_ref=params.y_ref)
    elif controller == "PI":
        controller = PIController(Kp=params.Kp, Ki=params.Ki, y_ref=params.y_ref)

    if isinstance(controller, PIController):
        return PIClosedLoop(plant, controller)
    if isinstance(controller, ProportionalController):
        return ProportionalLoop(plant, controller)
    raise InvalidConfiguration(f"Unknown controller: {controller!r}")


def run_simulation(params=None, boundary=BoundaryCondition.NEUMANN, theta0=None,
                   controller=None, saveat=None, method="Euler"):
    """
    Simulate one configuration from t = 0 to params.t_end with step params.dt.

    Parameters
    ----------
    theta0 : float or ndarray, optional
        Initial temperature; scalar for a uniform rod. Defaults to the
        ambient temperature.

    Returns
    -------
    model : RodModel
        The evaluator that was integrated.
    traj : Trajectory
    """
    if params is None:
        params = ParameterSet()
    model = build_model(params, boundary, controller)
    if theta0 is None:
        theta0 = params.T_a
    traj = model.simulate(theta0, t_end=params.t_end, dt=params.dt,
                          saveat=saveat, method=method)
    return model, traj
