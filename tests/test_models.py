"""Tests for the free and radiative rod models (Dirichlet, Neumann, Robin)."""

import logging

import numpy as np
import pytest

from rodheat.errors import InvalidConfiguration, InvalidState
from rodheat.models.analytical import dirichlet_series, neumann_series, parabolic_profile
from rodheat.models.discretization import BoundaryCondition
from rodheat.models.heat_1d_model import HeatEquation1D, outward_flux
from rodheat.utils.metrics import is_bounded, total_heat
from rodheat.utils.parameters import ParameterSet


# ===================== Boundary flux =====================

class TestOutwardFlux:
    def test_zero_at_ambient(self):
        assert outward_flux(298.0, 10.0, 3.4e-8, 298.0) == 0.0

    def test_hot_surface_loses_heat(self):
        """Above ambient both convection and radiation point outwards."""
        k = 0.6 * 5.67e-8
        phi = outward_flux(1000.0, 10.0, k, 298.0)
        expected = -10.0 * 702.0 - k * (1000.0 ** 4 - 298.0 ** 4)
        assert phi == pytest.approx(expected)
        assert phi < 0

    def test_vectorised_and_unclamped(self):
        theta = np.array([-50.0, 0.0, 298.0, 600.0])
        phi = outward_flux(theta, 10.0, 3.4e-8, 298.0)
        assert phi.shape == (4,)
        assert np.all(np.isfinite(phi))
        assert phi[0] > phi[1] > phi[2] > phi[3]


# ===================== Evaluator =====================

class TestHeatEquation1D:
    def test_actuated_boundary_rejected(self):
        with pytest.raises(InvalidConfiguration):
            HeatEquation1D(ParameterSet(n_points=11), BoundaryCondition.ACTUATED)

    def test_unknown_boundary_rejected(self):
        with pytest.raises(InvalidConfiguration, match="periodic"):
            HeatEquation1D(ParameterSet(n_points=11), "periodic")

    @pytest.mark.parametrize("kind", ["dirichlet", "neumann", "robin"])
    def test_state_length_checked(self, kind):
        model = HeatEquation1D(ParameterSet(n_points=11), kind)
        with pytest.raises(InvalidState):
            model.rhs(0.0, np.zeros(12))
        with pytest.raises(InvalidState):
            model.rhs(0.0, np.zeros(10))

    @pytest.mark.parametrize("kind", ["dirichlet", "neumann", "robin"])
    def test_ambient_rod_is_at_rest(self, kind):
        model = HeatEquation1D(ParameterSet(n_points=11), kind)
        dtheta = model.rhs(0.0, np.full(11, 298.0))
        assert np.allclose(dtheta, 0.0)

    def test_linear_rhs(self):
        """Free diffusion is alpha/dx^2 * M * theta."""
        p = ParameterSet(n_points=11)
        model = HeatEquation1D(p, "neumann")
        theta = np.linspace(300.0, 400.0, 11) ** 1.5
        expected = p.diffusivity / p.dx ** 2 * (model.M @ theta)
        assert np.allclose(model.rhs(0.0, theta), expected)

    def test_robin_forcing_only_at_boundaries(self):
        """A uniform hot rod only changes at the two end nodes."""
        p = ParameterSet(n_points=11)
        model = HeatEquation1D(p, BoundaryCondition.ROBIN)
        dtheta = model.rhs(0.0, np.full(11, 1000.0))
        phi = outward_flux(1000.0, p.h, p.radiation_coefficient, p.T_a)
        expected_end = 2 * p.diffusivity / p.dx * phi
        assert np.allclose(dtheta[1:-1], 0.0)
        assert dtheta[0] == pytest.approx(expected_end)
        assert dtheta[-1] == pytest.approx(expected_end)

    def test_uniform_initial_condition_from_scalar(self):
        model = HeatEquation1D(ParameterSet(n_points=7), "neumann")
        traj = model.simulate(350.0, t_end=10.0, dt=0.5)
        assert traj.y.shape[0] == 7
        assert np.allclose(traj.temperatures, 350.0)
        assert np.array_equal(traj.x, model.grid)


# ===================== Numerical properties =====================

class TestDirichlet:
    def test_boundary_values_held(self):
        p = ParameterSet(length=0.5, n_points=21, dt=0.8)
        model = HeatEquation1D(p, "dirichlet")
        theta0 = parabolic_profile(model.grid, 0.5, 10.0)
        theta0[0], theta0[-1] = 1.0, 2.0
        traj = model.simulate(theta0, t_end=200.0)
        assert np.allclose(traj.temperatures[0], 1.0)
        assert np.allclose(traj.temperatures[-1], 2.0)

    def test_matches_series_solution(self):
        """Finite differences agree with the eigenfunction series at x = L/2."""
        L, m, t_end = 0.5, 10.0, 1000.0
        p = ParameterSet(length=L, n_points=101, dt=0.8)
        model = HeatEquation1D(p, "dirichlet")
        traj = model.simulate(parabolic_profile(model.grid, L, m), t_end=t_end,
                              saveat=100.0)
        numerical = traj.trace_at(L / 2)[-1]
        analytical = dirichlet_series(t_end, L / 2, 10, p.diffusivity, L, m)
        assert numerical == pytest.approx(analytical, rel=1e-2), \
            f"FD {numerical:.5f} vs series {analytical:.5f}"


class TestNeumann:
    def test_heat_content_conserved(self):
        """The trapezoidal heat content is invariant for insulated ends."""
        L = 0.5
        p = ParameterSet(length=L, n_points=51, dt=0.8)
        model = HeatEquation1D(p, "neumann")
        theta0 = parabolic_profile(model.grid, L, 50.0) + 300.0
        traj = model.simulate(theta0, t_end=2000.0, saveat=40.0)
        heat = total_heat(traj.temperatures, p.dx)
        assert np.allclose(heat, heat[0], rtol=1e-9, atol=0.0), \
            f"heat drifted by {np.ptp(heat):.3e}"
        # the profile itself does evolve
        assert np.ptp(traj.final_state) < 0.5 * np.ptp(theta0)

    def test_matches_series_solution(self):
        L, m, t_end = 0.5, 10.0, 1000.0
        p = ParameterSet(length=L, n_points=101, dt=0.8)
        model = HeatEquation1D(p, "neumann")
        traj = model.simulate(parabolic_profile(model.grid, L, m), t_end=t_end)
        for x in (0.0, L / 4, L / 2):
            numerical = traj.trace_at(x)[-1]
            analytical = neumann_series(t_end, x, 10, p.diffusivity, L, m)
            assert numerical == pytest.approx(analytical, rel=1e-2), \
                f"x={x}: FD {numerical:.5f} vs series {analytical:.5f}"

    def test_rk45_agrees_with_euler(self):
        p = ParameterSet(length=0.5, n_points=21, dt=5.0)
        model = HeatEquation1D(p, "neumann")
        theta0 = parabolic_profile(model.grid, 0.5, 10.0)
        euler = model.simulate(theta0, t_end=500.0)
        rk = model.simulate(theta0, t_end=500.0, method="RK45")
        assert np.allclose(euler.final_state, rk.final_state, rtol=1e-2)


class TestStability:
    def _run(self, factor, caplog=None):
        p = ParameterSet(n_points=21)
        dt = factor * p.stability_limit
        model = HeatEquation1D(p, "neumann")
        n = np.arange(p.n_points)
        theta0 = 300.0 + parabolic_profile(model.grid, p.length, 1000.0) \
            + 1e-3 * (-1.0) ** n
        traj = model.simulate(theta0, t_end=2000 * dt, dt=dt, saveat=100 * dt)
        return theta0, traj

    def test_above_limit_diverges(self):
        _, traj = self._run(1.01)
        assert np.max(np.abs(traj.final_state)) > 1e6, \
            "Forward Euler above the stability limit should blow up"

    def test_below_limit_stays_bounded(self):
        theta0, traj = self._run(0.99)
        assert is_bounded(traj.y, theta0.min() - 1e-9, theta0.max() + 1e-9)

    def test_warning_logged_above_limit(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rodheat"):
            self._run(1.01)
        assert any("stability limit" in r.getMessage() for r in caplog.records)

    def test_no_warning_below_limit(self, caplog):
        with caplog.at_level(logging.WARNING, logger="rodheat"):
            self._run(0.99)
        assert not [r for r in caplog.records if r.levelno >= logging.WARNING]


class TestRobin:
    def test_cools_to_ambient(self):
        """A 1000 K rod settles at the ambient temperature."""
        p = ParameterSet(n_points=11, h=10.0, emissivity=0.6, T_a=298.0)
        model = HeatEquation1D(p, "robin")
        traj = model.simulate(1000.0, t_end=10000.0, dt=0.5, saveat=500.0)
        final = traj.final_state
        assert np.max(np.abs(final - 298.0)) < 0.5, f"final profile {final}"
        heat = total_heat(traj.temperatures, p.dx)
        assert np.all(np.diff(heat) <= 1e-12), "heat content should not rise"
