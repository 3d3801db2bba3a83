"""
Plotting utilities for the heated rod experiments.

Every function draws on a fresh figure, optionally saves it and returns it.
"""

import logging

import numpy as np
import matplotlib
matplotlib.use('Agg')
import matplotlib.pyplot as plt

logger = logging.getLogger(__name__)


def _finish(fig, save_path):
    plt.tight_layout()
    if save_path:
        fig.savefig(save_path, dpi=150, bbox_inches='tight')
        logger.info("Saved: %s", save_path)
    plt.close(fig)
    return fig


def plot_profile(x, theta, title="Temperature profile", label=None,
                 save_path=None):
    """
    Spatial temperature profile at a fixed time.

    Parameters
    ----------
    x : ndarray of shape (nx,)
    theta : ndarray of shape (nx,) or (nx, k)
        One profile, or k profiles as columns.
    """
    fig, ax = plt.subplots(figsize=(10, 6))
    ax.plot(x, theta, linewidth=1.5, label=label)
    ax.set_xlabel('Position x (m)', fontsize=12)
    ax.set_ylabel('Temperature (K)', fontsize=12)
    ax.set_title(title, fontsize=14)
    if label is not None:
        ax.legend(fontsize=10)
    ax.grid(True, alpha=0.3)
    return _finish(fig, save_path)


def plot_boundary_traces(t, left, right, title="Temperature at the left/right end",
                         y_ref=None, save_path=None):
    """Temperature history at x = 0 and x = L."""
    fig, ax = plt.subplots(figsize=(12, 6))
    ax.plot(t, left, 'r-', linewidth=1.5, label='Left')
    ax.plot(t, right, 'b-', linewidth=1.5, label='Right')
    if y_ref is not None:
        ax.axhline(y=y_ref, color='k', linestyle='--', alpha=0.5,
                   label=f'$y_{{ref}} = {y_ref}$ K')
    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('Temperature (K)', fontsize=12)
    ax.set_title(title, fontsize=14)
    ax.legend(loc='lower right', fontsize=10)
    ax.grid(True, alpha=0.3)
    return _finish(fig, save_path)


def plot_heatmap(t, x, T_field, title="Evolution of temperature", save_path=None):
    """
    Heatmap of theta(x, t).

    Parameters
    ----------
    t : ndarray of shape (nt,)
    x : ndarray of shape (nx,)
    T_field : ndarray of shape (nx, nt)
    """
    fig, ax = plt.subplots(figsize=(12, 6))

    im = ax.pcolormesh(t, x, T_field, shading='auto', cmap='hot')
    plt.colorbar(im, ax=ax, label='Temperature (K)')
    ax.set_xlabel('Time (s)', fontsize=12)
    ax.set_ylabel('Position x (m)', fontsize=12)
    ax.set_title(title, fontsize=14)
    return _finish(fig, save_path)


def plot_comparison(results_dict, y_ref, save_path=None):
    """
    Overlay output temperature and control input of several controllers.

    Parameters
    ----------
    results_dict : dict
        {name: (t, y, u)} for each controller.
    y_ref : float
        Reference temperature.
    """
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(14, 8), sharex=True,
                                   gridspec_kw={'height_ratios': [3, 1]})

    colors = plt.cm.tab10(np.linspace(0, 1, max(len(results_dict), 1)))

    for (name, (t, y, u)), color in zip(results_dict.items(), colors):
        ax1.plot(t, y, linewidth=1.5, label=name, color=color)
        ax2.plot(t, u, linewidth=1.2, label=name, color=color)

    ax1.axhline(y=y_ref, color='k', linestyle='--', alpha=0.5,
                label=f'$y_{{ref}} = {y_ref}$ K')
    ax1.set_ylabel('Temperature at x = L (K)', fontsize=12)
    ax1.set_title('Controller Comparison', fontsize=14)
    ax1.legend(fontsize=9)
    ax1.grid(True, alpha=0.3)

    ax2.set_xlabel('Time (s)', fontsize=12)
    ax2.set_ylabel('Control Input', fontsize=12)
    ax2.legend(fontsize=9)
    ax2.grid(True, alpha=0.3)
    return _finish(fig, save_path)


def plot_series_vs_numerical(x, analytical, numerical, title="Series vs. finite differences",
                             save_path=None):
    """Analytical and numerical profile at the same time, with their difference."""
    fig, (ax1, ax2) = plt.subplots(2, 1, figsize=(10, 8), sharex=True,
                                   gridspec_kw={'height_ratios': [3, 1]})
    ax1.plot(x, analytical, 'k-', linewidth=1.5, label='Series')
    ax1.plot(x, numerical, 'r--', linewidth=1.5, label='Finite differences')
    ax1.set_ylabel('Temperature', fontsize=12)
    ax1.set_title(title, fontsize=14)
    ax1.legend(fontsize=10)
    ax1.grid(True, alpha=0.3)

    ax2.plot(x, np.asarray(numerical) - np.asarray(analytical), 'b-', linewidth=1.0)
    ax2.set_xlabel('Position x (m)', fontsize=12)
    ax2.set_ylabel('Difference', fontsize=12)
    ax2.grid(True, alpha=0.3)
    return _finish(fig, save_path)
