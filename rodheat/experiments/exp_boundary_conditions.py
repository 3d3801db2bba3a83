"""
Experiment: free heat conduction under the three boundary regimes.

1. Dirichlet and Neumann rods (L = 0.5 m) from the parabolic initial data,
   finite differences against the eigenfunction series.
2. Robin rod (L = 0.1 m) cooling from 1000 K by convection and radiation.
"""

import os

import numpy as np

from rodheat.models.analytical import dirichlet_series, neumann_series, parabolic_profile
from rodheat.models.discretization import BoundaryCondition
from rodheat.models.heat_1d_model import HeatEquation1D
from rodheat.utils.metrics import total_heat
from rodheat.utils.parameters import AMPLITUDE, SERIES_ORDER, ParameterSet
from rodheat.utils.plotting import plot_heatmap, plot_profile, plot_series_vs_numerical


def compare_with_series(boundary, t_end=1000.0, dt=0.8, n_points=101, length=0.5,
                        m=AMPLITUDE, order=SERIES_ORDER):
    """
    Simulate the parabolic initial data and evaluate the series at t_end.

    Returns
    -------
    x, numerical, analytical, traj
    """
    params = ParameterSet(length=length, n_points=n_points, t_end=t_end, dt=dt)
    model = HeatEquation1D(params, boundary)
    theta0 = parabolic_profile(model.grid, length, m)
    traj = model.simulate(theta0, saveat=t_end / 50)

    series = dirichlet_series if boundary is BoundaryCondition.DIRICHLET else neumann_series
    analytical = series(traj.t[-1], model.grid, order, params.diffusivity, length, m)
    return model.grid, traj.final_state, analytical, traj


def robin_cooldown(t_end=60.0, dt=1e-2, n_points=101, theta0=1000.0):
    """Cool a uniform rod by convection and radiation at both ends."""
    params = ParameterSet(n_points=n_points, t_end=t_end, dt=dt)
    model = HeatEquation1D(params, BoundaryCondition.ROBIN)
    return model, model.simulate(theta0, saveat=t_end / 100)


def run(output_dir=None, quick=False):
    """Run all boundary-condition studies, return a summary dict."""
    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)

    def path(name):
        return os.path.join(output_dir, name) if output_dir else None

    summary = {}
    t_series = 100.0 if quick else 1000.0
    n_points = 51 if quick else 101

    for boundary in (BoundaryCondition.DIRICHLET, BoundaryCondition.NEUMANN):
        x, num, ana, traj = compare_with_series(boundary, t_end=t_series,
                                                n_points=n_points)
        rel = np.max(np.abs(num - ana)) / np.max(np.abs(ana))
        summary[boundary.value] = {
            'max_rel_error': rel,
            'heat_start': total_heat(traj.y[:, 0], x[1] - x[0]),
            'heat_end': total_heat(traj.final_state, x[1] - x[0]),
        }
        print(f"  {boundary.value:10s}: max relative deviation from series = {rel:.2e}")
        plot_series_vs_numerical(x, ana, num,
                                 title=f"{boundary.value.capitalize()} rod, t = {traj.t[-1]:.0f} s",
                                 save_path=path(f"{boundary.value}_series.png"))

    t_robin = 5.0 if quick else 60.0
    model, traj = robin_cooldown(t_end=t_robin, n_points=n_points)
    summary['robin'] = {
        'final_min': traj.final_state.min(),
        'final_max': traj.final_state.max(),
    }
    print(f"  robin     : final temperature in [{traj.final_state.min():.1f}, "
          f"{traj.final_state.max():.1f}] K")
    plot_profile(model.grid, traj.final_state,
                 title=f"Robin rod at t = {traj.t[-1]:.0f} s",
                 save_path=path("robin_profile.png"))
    plot_heatmap(traj.t, model.grid, traj.temperatures,
                 title="Robin rod: evolution of temperature",
                 save_path=path("robin_heatmap.png"))
    return summary


def main():
    print("=" * 70)
    print("Heat equation on a rod: Dirichlet / Neumann / Robin boundaries")
    print("=" * 70)

    output_dir = os.path.join(os.getcwd(), 'results')
    run(output_dir=output_dir)


if __name__ == '__main__':
    main()
