"""Visualization tools for sphere sampling and coupling scans."""

from typing import Optional, Tuple
import numpy as np
import matplotlib.pyplot as plt
from matplotlib.figure import Figure
from matplotlib.axes import Axes

from ..core.geometry import polar_to_cartesian
from ..models import CouplingResult


def _axes_3d(ax: Optional[Axes], figsize: Tuple[float, float]) -> Tuple[Figure, Axes]:
    if ax is None:
        fig = plt.figure(figsize=figsize)
        ax = fig.add_subplot(projection='3d')
    else:
        fig = ax.figure
    return fig, ax


def plot_unit_sphere(
    n_points: int = 20,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (6, 6),
    color: str = 'grey',
    alpha: float = 0.3,
) -> Tuple[Figure, Axes]:
    """Draw a unit sphere; n_points sets the mesh density."""
    fig, ax = _axes_3d(ax, figsize)

    theta = np.linspace(0, np.pi, n_points)
    phi = np.linspace(0, 2 * np.pi, n_points)
    x, y, z = polar_to_cartesian(theta, phi, np.ones(n_points))

    ax.plot_surface(x, y, z, color=color, alpha=alpha, linewidth=0)
    ax.set_box_aspect((1, 1, 1))
    return fig, ax


def plot_sphere_samples(
    x, y, z,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (6, 6),
    show_sphere: bool = True,
    title: str = "Sampled Directions",
    **kwargs
) -> Tuple[Figure, Axes]:
    """Scatter sampled unit vectors, optionally over the unit sphere.

    Args:
        x, y, z: Cartesian components of the samples
        ax: Optional 3D matplotlib axes to plot on
        figsize: Figure size (width, height) in inches
        show_sphere: Draw the unit sphere underneath the samples
        title: Plot title
        **kwargs: Additional keyword arguments passed to scatter()

    Returns:
        Tuple of (figure, axes) containing the plot
    """
    fig, ax = _axes_3d(ax, figsize)
    if show_sphere:
        plot_unit_sphere(ax=ax)

    ax.scatter(np.atleast_1d(x), np.atleast_1d(y), np.atleast_1d(z), **kwargs)
    ax.set_xlabel('x')
    ax.set_ylabel('y')
    ax.set_zlabel('z')
    ax.set_title(title)
    return fig, ax


def plot_coupling_vs_distance(
    result: CouplingResult,
    ax: Optional[Axes] = None,
    figsize: Tuple[float, float] = (8, 5),
    title: str = "Dipole-Dipole Coupling",
) -> Tuple[Figure, Axes]:
    """Plot Omega and Gamma from a distance scan."""
    if ax is None:
        fig, ax = plt.subplots(figsize=figsize)
    else:
        fig = ax.figure

    distances = result.data['distances']
    ax.plot(distances, np.real(result.data['omega']), label='Ω₁₂')
    ax.plot(distances, np.real(result.data['gamma']), label='Γ₁₂')
    ax.axhline(0, color='black', linewidth=0.8)

    ax.set_xlabel('Separation (λ)')
    ax.set_ylabel('Coupling rate')
    ax.set_title(title)
    ax.grid(True, alpha=0.3)
    ax.legend()
    return fig, ax
