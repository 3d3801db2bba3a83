"""
Finite difference discretisation of the 1D rod.

    d^2 theta / dx^2  ~  1/dx^2 * M * theta

with the uniform grid x^n = n * dx, dx = L / (N - 1), and M the tridiagonal
[1, -2, 1] stencil. Only the first and last rows depend on the boundary:

    Dirichlet:            rows 0 and N-1 are zero (boundary values are held).
    Neumann/Robin/actuated: the ghost points x^{-1}, x^{N} are eliminated with
                          the flux condition, which doubles the off-diagonal
                          entry of both boundary rows:

        M = [-2  2             ]
            [ 1 -2  1          ]
            [      ...         ]
            [          1 -2  1 ]
            [             2 -2 ]

Any boundary flux (radiation, actuation) enters as a separate forcing term
scaled by 2/dx, see heat_1d_model and state_space.
"""

import logging
from dataclasses import dataclass
from enum import Enum

import numpy as np
import scipy.sparse as sps

from rodheat.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


class BoundaryCondition(str, Enum):
    DIRICHLET = "dirichlet"
    NEUMANN = "neumann"
    ROBIN = "robin"
    ACTUATED = "actuated"

    @property
    def is_flux(self):
        """True when the boundary rows use the ghost-point substitution."""
        return self is not BoundaryCondition.DIRICHLET

    @classmethod
    def parse(cls, kind):
        """Look up a boundary kind given as member or value, e.g. "robin"."""
        try:
            return cls(kind)
        except ValueError:
            known = ", ".join(member.value for member in cls)
            raise InvalidConfiguration(
                f"Unknown boundary condition {kind!r}, expected one of: {known}"
            ) from None


@dataclass(frozen=True)
class Discretization:
    """
    Grid and diffusion operator for one configuration.

    The operator is shared read-only by every evaluator built on it.
    """

    grid: np.ndarray
    operator: sps.csr_matrix
    boundary: BoundaryCondition
    dx: float

    @property
    def n_points(self):
        return self.grid.shape[0]


def _check_grid(length, n_points):
    if not 3 <= n_points < float("inf") or int(n_points) != n_points:
        raise InvalidConfiguration(
            f"At least 3 grid points are needed for the interior stencil, "
            f"got {n_points}")
    if not length > 0:
        raise InvalidConfiguration(f"Rod length must be positive, got {length}")


def build_grid(length, n_points):
    """Uniform grid x[n] = n * L / (N - 1), n = 0..N-1 (read-only)."""
    _check_grid(length, n_points)
    n_points = int(n_points)
    dx = length / (n_points - 1)
    x = np.arange(n_points) * dx
    x.setflags(write=False)
    return x


def build_diffusion_operator(n_points, boundary):
    """
    Tridiagonal second-difference matrix with boundary rows set by ``boundary``.

    Parameters
    ----------
    n_points : int
        Number of grid points N (>= 3).
    boundary : BoundaryCondition or str
        Boundary condition kind.

    Returns
    -------
    M : scipy.sparse.csr_matrix of shape (N, N)
    """
    if not 3 <= n_points < float("inf") or int(n_points) != n_points:
        raise InvalidConfiguration(
            f"At least 3 grid points are needed for the interior stencil, "
            f"got {n_points}")
    n = int(n_points)
    boundary = BoundaryCondition.parse(boundary)

    off = np.ones(n - 1)
    main = -2.0 * np.ones(n)
    M = sps.diags([off, main, off], offsets=[-1, 0, 1], format="lil")

    if boundary is BoundaryCondition.DIRICHLET:
        M[0, 0] = M[0, 1] = 0.0
        M[n - 1, n - 1] = M[n - 1, n - 2] = 0.0
    else:
        # ghost-point substitution at x^{-1} and x^{N}
        M[0, 1] = 2.0
        M[n - 1, n - 2] = 2.0

    M = M.tocsr()
    M.eliminate_zeros()
    return M


def build_discretization(length, n_points, boundary):
    """
    Build grid and diffusion operator for a rod of length ``length``.

    Raises
    ------
    InvalidConfiguration
        If ``n_points < 3`` or ``length <= 0``.
    """
    boundary = BoundaryCondition.parse(boundary)
    x = build_grid(length, n_points)
    M = build_diffusion_operator(n_points, boundary)
    dx = length / (int(n_points) - 1)
    logger.debug("Built %s operator on %d points (dx=%.3g)",
                 boundary.value, x.shape[0], dx)
    return Discretization(grid=x, operator=M, boundary=boundary, dx=dx)


def stability_limit(alpha, dx):
    """Upper limit of the forward Euler step: dt < 0.5 * dx^2 / alpha."""
    return 0.5 * dx ** 2 / alpha
