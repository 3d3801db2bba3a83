"""
Closed-form solutions of the 1D heat equation.

Separation of variables theta(t, x) = f(t) g(x) gives f(t) = exp(p t) and
g'' = q g with q = p / alpha. The boundary conditions select the
eigenfunctions, and for the initial data

    theta_0(x) = m * (L x - x^2)

the coefficients are known in closed form:

Dirichlet (theta = 0 at both ends), odd indices only:

    theta(t, x) = 8 m L^2 / pi^3 * sum_i (2i-1)^-3
                  * exp(-alpha (2i-1)^2 (pi/L)^2 t) * sin((2i-1) pi x / L)

Neumann (insulated ends), even indices only, plus the mean value eta_0:

    theta(t, x) = m L^2 / 6 - m L^2 / pi^2 * sum_i i^-2
                  * exp(-4 alpha (i pi / L)^2 t) * cos(2 i pi x / L)

eta_0 = m L^2 / 6 follows from theta(0, 0) = 0 and zeta(2) = pi^2 / 6.

The heat kernel is the fundamental solution on the unbounded domain.
"""

import numpy as np

from rodheat.errors import InvalidConfiguration


def parabolic_profile(x, L, m):
    """Initial data theta_0(x) = m * (L x - x^2)."""
    x = np.asarray(x, dtype=float)
    return m * (L * x - x ** 2)


def _indices(order):
    if int(order) != order or order < 1:
        raise InvalidConfiguration(f"Series order must be a positive integer, got {order}")
    return np.arange(1, int(order) + 1)


def dirichlet_eigenvalues(order, L):
    """q_i = -(i pi / L)^2 for i = 1..order."""
    i = _indices(order)
    return -(i * np.pi / L) ** 2


def dirichlet_eigenfunction(i, x, L):
    """Orthonormal eigenfunction sqrt(2/L) * sin(i pi x / L)."""
    return np.sqrt(2.0 / L) * np.sin(i * np.pi * np.asarray(x) / L)


def dirichlet_coefficients(order, L, m):
    """
    Projection of m*(L x - x^2) onto the Dirichlet eigenfunctions.

    C_i = sqrt(2/L) * m * (L / (i pi))^3 * 2 * (1 - (-1)^i), zero for even i.
    """
    i = _indices(order)
    return np.sqrt(2.0 / L) * m * (L / (i * np.pi)) ** 3 * 2 * (1 - (-1.0) ** i)


def neumann_eigenfunction(i, x, L):
    """Orthonormal eigenfunction sqrt(2/L) * cos(i pi x / L) for i >= 1."""
    return np.sqrt(2.0 / L) * np.cos(i * np.pi * np.asarray(x) / L)


def dirichlet_series(t, x, order, alpha, L, m):
    """
    Truncated series solution with zero Dirichlet boundaries.

    Parameters
    ----------
    t : float
        Time.
    x : float or ndarray
        Position(s) in [0, L].
    order : int
        Number of (odd) terms kept.
    alpha : float
        Thermal diffusivity.
    L : float
        Rod length.
    m : float
        Gain of the parabolic initial data.
    """
    x = np.asarray(x, dtype=float)
    n = 2 * _indices(order) - 1
    n = n.reshape((-1,) + (1,) * x.ndim)
    terms = (n ** -3.0) * np.exp(-alpha * n ** 2 * (np.pi / L) ** 2 * t) \
        * np.sin(n * np.pi * x / L)
    return 8 * m * L ** 2 / np.pi ** 3 * terms.sum(axis=0)


def neumann_series(t, x, order, alpha, L, m):
    """Truncated series solution with insulated (zero-flux) boundaries."""
    x = np.asarray(x, dtype=float)
    i = _indices(order).reshape((-1,) + (1,) * x.ndim)
    terms = (1.0 / i ** 2) * np.exp(-4 * alpha * (i * np.pi / L) ** 2 * t) \
        * np.cos(2 * i * np.pi * x / L)
    eta0 = m * L ** 2 / 6
    return eta0 - m * L ** 2 / np.pi ** 2 * terms.sum(axis=0)


def heat_kernel(t, x, y, dim=1):
    """
    Fundamental solution (4 pi t)^(-d/2) * exp(-|x - y|^2 / (4 t)), t > 0.
    """
    if t <= 0:
        raise InvalidConfiguration(f"Heat kernel needs t > 0, got {t}")
    dist2 = np.abs(np.asarray(x, dtype=float) - y) ** 2
    return np.exp(-dist2 / (4 * t)) / (4 * np.pi * t) ** (dim / 2)
