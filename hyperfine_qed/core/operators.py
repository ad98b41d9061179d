"""Angular-momentum operators for atoms with hyperfine structure.

Every manifold F is represented by a (2F+1)-dimensional spin basis ordered
m = F, F-1, ..., -F. A multi-level atom lives in the direct sum of the spin
bases of all of its manifolds, taken in the order they are listed. Two atoms
live in the tensor product of two such direct sums.
"""

import warnings
from functools import lru_cache
from typing import Callable, List, Sequence

import numpy as np
import qutip as qt
from scipy import sparse as sps
from sympy import Rational
from sympy.physics.wigner import clebsch_gordan as _sympy_clebsch_gordan

from .errors import OutOfRangeSublevel, InvalidPolarizationIndex, InvalidAtomIndex

CGFunction = Callable[[float, float, float, float, float], float]


def _doubled(x, name: str = "F") -> int:
    """Return 2*x as an int, checking that x is integer or half-integer."""
    two_x = 2 * x
    if two_x != round(two_x):
        raise ValueError(f"{name} must be integer or half-integer, got {x}")
    return int(round(two_x))


def _check_spin(F) -> int:
    two_F = _doubled(F, "F")
    if two_F < 0:
        raise ValueError(f"F must be non-negative, got {F}")
    return two_F


def _check_polarization(q) -> int:
    if q not in (-1, 0, 1):
        raise InvalidPolarizationIndex("Argument q must be one of [-1, 0, 1]")
    return int(q)


@lru_cache(maxsize=None)
def _cg_doubled(two_j1, two_m1, two_j2, two_m2, two_j3):
    return float(_sympy_clebsch_gordan(
        Rational(two_j1, 2), Rational(two_j2, 2), Rational(two_j3, 2),
        Rational(two_m1, 2), Rational(two_m2, 2), Rational(two_m1 + two_m2, 2),
    ))


def clebsch_gordan(j1, m1, j2, m2, j3) -> float:
    """Clebsch-Gordan coefficient <j1 m1; j2 m2 | j3 m1+m2> (Condon-Shortley)."""
    return _cg_doubled(
        _doubled(j1, "j1"), _doubled(m1, "m1"),
        _doubled(j2, "j2"), _doubled(m2, "m2"),
        _doubled(j3, "j3"),
    )


def dimension(F) -> int:
    """Dimension 2F+1 of the spin basis of manifold F."""
    return _check_spin(F) + 1


def sublevels(F) -> List[float]:
    """Magnetic quantum numbers of manifold F in basis order (m = F first)."""
    two_F = _check_spin(F)
    return [(two_F - 2 * n) / 2 for n in range(two_F + 1)]


def composite_dimension(F_i: Sequence) -> int:
    """Dimension of the direct sum of the spin bases of all manifolds."""
    return sum(dimension(F) for F in F_i)


def manifold_offsets(F_i: Sequence) -> List[int]:
    """Index of the first (m = F) state of each manifold in the direct sum."""
    offsets = []
    start = 0
    for F in F_i:
        offsets.append(start)
        start += dimension(F)
    return offsets


def spin_state(F, m) -> qt.Qobj:
    """Return the basis ket |F, m> of the spin-F basis.

    The state sits at position F - m, so m = F is the first basis vector.
    """
    two_F = _check_spin(F)
    if abs(m) > F:
        raise OutOfRangeSublevel("m must be in the range [-F, F]")
    two_m = _doubled(m, "m")
    if (two_F - two_m) % 2:
        raise ValueError(f"F - m must be an integer, got F={F}, m={m}")
    return qt.basis(two_F + 1, (two_F - two_m) // 2)


def spherical_basis(q) -> np.ndarray:
    """Spherical unit vector e_q for q in {-1, 0, 1}."""
    q = _check_polarization(q)
    if q == 0:
        return np.array([0, 0, 1], dtype=complex)
    return -q / np.sqrt(2) * np.array([1, q * 1j, 0], dtype=complex)


def _direct_sum_ket(*kets: qt.Qobj) -> qt.Qobj:
    data = np.vstack([ket.full() for ket in kets])
    return qt.Qobj(data, dims=[[data.shape[0]], [1]])


def coherence_operator(F1, m1, F2, m2) -> qt.Qobj:
    """Atomic coherence |F1, m1><F2, m2| on the excited (+) ground space.

    The excited ket |F1, m1> occupies the first 2F1+1 states and the ground
    ket |F2, m2> the following 2F2+1 states.
    """
    psi_e = _direct_sum_ket(spin_state(F1, m1), qt.Qobj(np.zeros((dimension(F2), 1))))
    psi_g = _direct_sum_ket(qt.Qobj(np.zeros((dimension(F1), 1))), spin_state(F2, m2))
    return (psi_e * psi_g.dag()).to("csr")


def _check_manifold_pair(F_i: Sequence, k: int, l: int) -> None:
    n = len(F_i)
    for name, idx in (("k", k), ("l", l)):
        if not 1 <= idx <= n:
            raise ValueError(f"Manifold index {name}={idx} outside [1, {n}]")
    if k == l:
        raise ValueError("Upper and lower manifold indices must differ")


def hyperfine_lowering(q, F_i: Sequence, k: int = 1, l: int = 2,
                       cg: CGFunction = clebsch_gordan) -> qt.Qobj:
    """Atomic lowering operator with hyperfine structure, F_i[k] -> F_i[l].

    Args:
        q: Spherical component of the light field (-1, 0, 1)
        F_i: Spin of every hyperfine manifold of the atom
        k: 1-based index of the upper manifold
        l: 1-based index of the lower manifold
        cg: Clebsch-Gordan evaluator called as cg(j1, m1, j2, m2, j3)

    Returns:
        Sparse operator on the direct sum of the spin bases of all of F_i
    """
    q = _check_polarization(q)
    _check_manifold_pair(F_i, k, l)
    F_k, F_l = F_i[k - 1], F_i[l - 1]
    d_k, d_l = dimension(F_k), dimension(F_l)

    block = np.zeros((d_k + d_l, d_k + d_l), dtype=complex)
    for m in sublevels(F_l):
        if abs(m - q) > F_k:
            continue
        sign = (-1) ** int(round(2 * m - q))
        weight = sign * cg(F_l, m, 1, -q, F_k)
        block += weight * coherence_operator(F_k, m - q, F_l, m).dag().full()

    if not np.any(block):
        warnings.warn(
            f"No dipole-allowed sublevel pair for F={F_k} -> F={F_l} with q={q}; "
            "returning the zero operator"
        )

    # place the (upper, lower) block at manifolds k and l of the full atom
    offsets = manifold_offsets(F_i)
    index = np.concatenate([
        offsets[k - 1] + np.arange(d_k),
        offsets[l - 1] + np.arange(d_l),
    ])
    size = composite_dimension(F_i)
    full = np.zeros((size, size), dtype=complex)
    full[np.ix_(index, index)] = block
    return qt.Qobj(sps.csr_matrix(full), dims=[[size], [size]]).to("csr")


def hyperfine_raising(q, F_i: Sequence, k: int = 1, l: int = 2,
                      cg: CGFunction = clebsch_gordan) -> qt.Qobj:
    """Hermitian conjugate of hyperfine_lowering, F_i[l] -> F_i[k]."""
    return hyperfine_lowering(q, F_i, k, l, cg=cg).dag()


def two_atom_lowering(i: int, q, F_i: Sequence, k: int = 1, l: int = 2,
                      cg: CGFunction = clebsch_gordan) -> qt.Qobj:
    """Hyperfine lowering operator of atom i in a pair of identical atoms."""
    if i not in (1, 2):
        raise InvalidAtomIndex("Argument i must be one of [1, 2]")
    q = _check_polarization(q)
    single = hyperfine_lowering(q, F_i, k, l, cg=cg)
    identity = qt.qeye(single.shape[0])
    if i == 1:
        op = qt.tensor(single, identity)
    else:
        op = qt.tensor(identity, single)
    return op.to("csr")
