"""
Finite difference models of heat conduction in a rod with Dirichlet,
Neumann and radiative Robin boundaries, and P / PI temperature control.
"""

from rodheat.errors import HeatModelError, InvalidConfiguration, InvalidState
from rodheat.models.discretization import BoundaryCondition, build_discretization
from rodheat.models.heat_1d_model import HeatEquation1D, outward_flux
from rodheat.models.integrator import Trajectory, forward_euler
from rodheat.models.state_space import PIClosedLoop, ProportionalLoop, RodStateSpace
from rodheat.simulation import build_model, run_simulation
from rodheat.utils.parameters import ParameterSet

__version__ = "0.1.0"
