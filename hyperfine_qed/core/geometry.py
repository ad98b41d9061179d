"""Sampling of directions and positions on the unit sphere."""

from typing import Optional, Tuple

import numpy as np
from scipy.spatial.transform import Rotation


def _rng(rng: Optional[np.random.Generator]) -> np.random.Generator:
    return np.random.default_rng() if rng is None else rng


def polar_to_cartesian(theta, phi, r=1, grid: bool = True):
    """Convert polar coordinates to Cartesian.

    With grid=True the result is evaluated on the theta x phi grid (theta
    along rows); r may then be a scalar or one radius per theta. With
    grid=False the inputs are broadcast elementwise.
    """
    theta = np.asarray(theta, dtype=float)
    phi = np.asarray(phi, dtype=float)
    r = np.asarray(r, dtype=float)

    if grid and (theta.ndim or phi.ndim):
        theta, phi = np.meshgrid(np.atleast_1d(theta), np.atleast_1d(phi), indexing="ij")
        if r.ndim == 1:
            r = r[:, None]

    x = r * np.sin(theta) * np.cos(phi)
    y = r * np.sin(theta) * np.sin(phi)
    z = r * np.cos(theta) * np.ones_like(phi)
    return x, y, z


def cartesian_to_polar(x, y, z):
    """Convert Cartesian coordinates to (theta, phi, r)."""
    x = np.asarray(x, dtype=float)
    y = np.asarray(y, dtype=float)
    z = np.asarray(z, dtype=float)
    r = np.sqrt(x**2 + y**2 + z**2)
    theta = np.arccos(z / r)
    phi = np.arctan2(y, x)
    return theta, phi, r


def sample_sphere(n: int, rng: Optional[np.random.Generator] = None):
    """Uniform random points on the unit sphere.

    Returns floats for n == 1 and arrays of length n otherwise.
    """
    if n < 1:
        raise ValueError(f"Number of samples must be positive, got {n}")
    rng = _rng(rng)
    theta = np.arccos(1 - 2 * rng.random(n))
    phi = 2 * np.pi * rng.random(n)
    x = np.sin(theta) * np.cos(phi)
    y = np.sin(theta) * np.sin(phi)
    z = np.cos(theta)
    if n == 1:
        return float(x[0]), float(y[0]), float(z[0])
    return x, y, z


def fibonacci_sphere(n: int) -> Tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Deterministic, evenly spread points on the unit sphere (Fibonacci lattice)."""
    if n < 1:
        raise ValueError(f"Number of samples must be positive, got {n}")
    indices = np.arange(n) + 0.5
    theta = np.arccos(1 - 2 * indices / n)
    phi = np.pi * (1 + 5**0.5) * indices
    return np.cos(phi) * np.sin(theta), np.sin(phi) * np.sin(theta), np.cos(theta)


def cone_rotation(theta: float, phi: float) -> Rotation:
    """Rotation Rz(phi) Rx(theta) that points the local +z axis at the cone centre."""
    return Rotation.from_euler("z", phi) * Rotation.from_euler("x", theta)


def cone_axis(theta: float, phi: float) -> np.ndarray:
    """Unit vector along the centre of the cone returned by sample_cone."""
    return cone_rotation(theta, phi).apply([0.0, 0.0, 1.0])


def sample_cone(n: int, na: float, theta: float, phi: float,
                rng: Optional[np.random.Generator] = None):
    """Random unit vectors within a numerical aperture.

    Polar angles are drawn uniformly in [-asin(na), asin(na)] and azimuths in
    [0, 2 pi) around +z, then rotated by Rz(phi) Rx(theta).

    Returns:
        Arrays x, y, z of length n
    """
    if n < 1:
        raise ValueError(f"Number of samples must be positive, got {n}")
    if not 0 <= na <= 1:
        raise ValueError(f"Numerical aperture must lie in [0, 1], got {na}")
    rng = _rng(rng)

    ang = np.arcsin(na)
    theta_sample = 2 * ang * (rng.random(n) - 0.5)
    phi_sample = 2 * np.pi * rng.random(n)
    local = np.stack([
        np.sin(theta_sample) * np.cos(phi_sample),
        np.sin(theta_sample) * np.sin(phi_sample),
        np.cos(theta_sample),
    ], axis=-1)

    u = cone_rotation(theta, phi).apply(local)
    return u[:, 0], u[:, 1], u[:, 2]
