"""
Experiment: temperature control of the rod end x = L.

Heat is induced at x = 0, the right end loses heat by convection and
radiation. Compares proportional and PI feedback tracking y_ref = 400 K
from a uniform 300 K rod.
"""

import os

from rodheat.controllers.pi import PIController
from rodheat.controllers.proportional import ProportionalController
from rodheat.models.state_space import PIClosedLoop, ProportionalLoop, RodStateSpace
from rodheat.utils.metrics import compute_all_metrics
from rodheat.utils.parameters import T_INITIAL, ParameterSet
from rodheat.utils.plotting import plot_boundary_traces, plot_comparison, plot_heatmap


def run_controller(loop, theta0=T_INITIAL, saveat=1.0):
    """Simulate one loop; return trajectory, output y(t) and input u(t)."""
    traj = loop.simulate(theta0, saveat=saveat)
    y = traj.temperatures[-1]
    u = loop.control_signal(traj)
    return traj, y, u


def run(params=None, output_dir=None):
    """
    Run P and PI control on the same plant.

    Returns
    -------
    metrics : dict
        {controller name: metrics dict}
    """
    if params is None:
        params = ParameterSet()
    if output_dir is not None:
        os.makedirs(output_dir, exist_ok=True)

    def path(name):
        return os.path.join(output_dir, name) if output_dir else None

    plant = RodStateSpace(params)
    loops = {
        'P': ProportionalLoop(plant, ProportionalController(params.Kp, params.y_ref)),
        'PI': PIClosedLoop(plant, PIController(params.Kp, params.Ki, params.y_ref)),
    }

    results, metrics = {}, {}
    saveat = max(params.dt, params.t_end / 2000)
    for name, loop in loops.items():
        traj, y, u = run_controller(loop, saveat=saveat)
        results[name] = (traj.t, y, u)
        metrics[name] = compute_all_metrics(traj.t, y, u, params.y_ref)
        print(f"  {name:3s}: y(Tf) = {y[-1]:.3f} K, "
              f"error = {metrics[name]['steady_state_error']:+.3f} K, "
              f"RMSE = {metrics[name]['rmse']:.2f} K")

        plot_heatmap(traj.t, traj.x, traj.temperatures,
                     title=f"{name} control: evolution of temperature",
                     save_path=path(f"{name.lower()}_heatmap.png"))
        plot_boundary_traces(traj.t, traj.temperatures[0], y, y_ref=params.y_ref,
                             title=f"{name} control: temperature at the left/right end",
                             save_path=path(f"{name.lower()}_traces.png"))

    plot_comparison(results, params.y_ref, save_path=path("control_comparison.png"))
    return metrics


def main():
    print("=" * 70)
    print("Heated rod: proportional vs. PI control")
    print("=" * 70)

    output_dir = os.path.join(os.getcwd(), 'results')
    run(output_dir=output_dir)


if __name__ == '__main__':
    main()
