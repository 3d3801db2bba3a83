"""
Shared physical parameters for the heated rod models.

All units are SI, temperatures in Kelvin. The defaults describe a steel
rod of 10 cm with convective and radiative loss to a 298 K environment.
"""

import dataclasses
from dataclasses import dataclass

from rodheat.errors import InvalidConfiguration

# --- Rod geometry & discretisation ---
ROD_LENGTH = 0.1          # Length of rod (m)
N_GRID = 101              # Number of grid points

# --- Material (steel) ---
CONDUCTIVITY = 45.0       # Thermal conductivity lambda (W/(m K))
DENSITY = 7800.0          # Mass density rho (kg/m^3)
CAPACITY = 480.0          # Specific heat capacity c (J/(kg K))

# --- Heat transfer at the boundary ---
H_TRANSFER = 10.0         # Heat transfer coefficient h (W/(m^2 K))
EMISSIVITY = 0.6          # Emissivity epsilon, in (0, 1)
STEFAN_BOLTZMANN = 5.67e-8  # Stefan-Boltzmann constant (W/(m^2 K^4))
T_AMBIENT = 298.0         # Ambient temperature (K)

# --- Initial data ---
T_INITIAL = 300.0         # Uniform initial temperature (K)
AMPLITUDE = 10.0          # Gain m of the parabolic profile m*(L*x - x^2)

# --- Feedback control ---
KP = 1000.0               # Proportional gain
KI = 0.1                  # Integral gain
B_GAIN = 1.0              # Actuation gain b at x = 0
Y_REF = 400.0             # Reference temperature at x = L (K)

# --- Simulation ---
T_END = 2000.0            # Final simulation time (s)
DT = 1e-2                 # Sampling time of the fixed-step solver (s)

# --- Analytical series ---
SERIES_ORDER = 10         # Truncation order of the eigenfunction series


@dataclass(frozen=True)
class ParameterSet:
    """
    Immutable parameter record for one simulation run.

    Parameters
    ----------
    length : float
        Rod length L (m).
    n_points : int
        Number of grid points N, at least 3.
    conductivity, capacity, density : float
        Material constants lambda, c and rho.
    h : float
        Heat transfer coefficient.
    emissivity : float
        Emissivity of the rod surface.
    sigma : float
        Stefan-Boltzmann constant.
    T_a : float
        Ambient temperature.
    t_end : float
        Final simulation time.
    dt : float
        Step size of the fixed-step solver.
    Kp, Ki : float
        Controller gains (only used by the feedback models).
    b : float
        Actuation gain at x = 0.
    y_ref : float
        Reference temperature for the output at x = L.
    """

    length: float = ROD_LENGTH
    n_points: int = N_GRID
    conductivity: float = CONDUCTIVITY
    capacity: float = CAPACITY
    density: float = DENSITY
    h: float = H_TRANSFER
    emissivity: float = EMISSIVITY
    sigma: float = STEFAN_BOLTZMANN
    T_a: float = T_AMBIENT
    t_end: float = T_END
    dt: float = DT
    Kp: float = KP
    Ki: float = KI
    b: float = B_GAIN
    y_ref: float = Y_REF

    def __post_init__(self):
        if not 3 <= self.n_points < float("inf") or int(self.n_points) != self.n_points:
            raise InvalidConfiguration(
                f"n_points must be an integer >= 3, got {self.n_points}")
        if not self.length > 0:
            raise InvalidConfiguration(
                f"Rod length must be positive, got {self.length}")
        if not self.t_end > 0:
            raise InvalidConfiguration(
                f"Final time must be positive, got {self.t_end}")
        if not self.dt > 0:
            raise InvalidConfiguration(
                f"Step size must be strictly positive, got {self.dt}")
        for name in ("conductivity", "capacity", "density"):
            if not getattr(self, name) > 0:
                raise InvalidConfiguration(
                    f"{name} must be positive, got {getattr(self, name)}")

    @property
    def diffusivity(self):
        """alpha = lambda / (c * rho)."""
        return self.conductivity / (self.capacity * self.density)

    @property
    def radiation_coefficient(self):
        """k = emissivity * Stefan-Boltzmann constant."""
        return self.emissivity * self.sigma

    @property
    def dx(self):
        return self.length / (self.n_points - 1)

    @property
    def stability_limit(self):
        """Largest forward Euler step for the diffusion term: 0.5 dx^2 / alpha."""
        return 0.5 * self.dx ** 2 / self.diffusivity

    def replace(self, **changes):
        """Return a validated copy with some fields changed."""
        return dataclasses.replace(self, **changes)

    @classmethod
    def from_mapping(cls, cfg):
        """Create a parameter set from a plain config dict."""
        known = {f.name for f in dataclasses.fields(cls)}
        unknown = sorted(set(cfg) - known)
        if unknown:
            raise InvalidConfiguration(
                f"Unknown parameter(s): {', '.join(unknown)}")
        return cls(**cfg)
