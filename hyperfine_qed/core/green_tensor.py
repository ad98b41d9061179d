"""Dyadic Green's tensor for dipole-dipole coupling between point dipoles."""

from typing import Tuple

import numpy as np


def green_tensor(r, k: float = 1.0) -> np.ndarray:
    """Electromagnetic dyadic Green's tensor at displacement r.

    The k/(4 pi) prefactor is absorbed into the coupling rates, so the
    imaginary part at r = 0 is 2/3 on the diagonal.

    Args:
        r: Displacement vector (3 components)
        k: Wavenumber

    Returns:
        Complex 3x3 array
    """
    r = np.asarray(r, dtype=float)
    if r.shape != (3,):
        raise ValueError(f"Displacement must have 3 components, got shape {r.shape}")

    n = np.linalg.norm(r)
    if n == 0:
        return 2j / 3 * np.eye(3)

    rn = r / n
    kn = k * n
    return np.exp(1j * kn) * (
        (1 / kn + 1j / kn**2 - 1 / kn**3) * np.eye(3)
        - (1 / kn + 3j / kn**2 - 3 / kn**3) * np.outer(rn, rn)
    )


def dipole_coupling(r, d1, d2, k: float = 1.0, gamma: float = 1.0) -> Tuple[complex, complex]:
    """Coherent (Omega) and dissipative (Gamma) coupling between two dipoles.

    Omega = 3/4 gamma d1^* . Re(G) . d2 and Gamma = 3/2 gamma d1^* . Im(G) . d2,
    so a unit dipole paired with itself at r = 0 gives Gamma = gamma.
    """
    G = green_tensor(r, k)
    d1 = np.asarray(d1, dtype=complex)
    d2 = np.asarray(d2, dtype=complex)
    omega = 0.75 * gamma * (d1.conj() @ G.real @ d2)
    rate = 1.5 * gamma * (d1.conj() @ G.imag @ d2)
    return complex(omega), complex(rate)
