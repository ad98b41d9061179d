"""
Test Suite: Hyperfine Operator Algebra
======================================

Checks the basis ordering convention (m = F first, manifolds in listed
order), the Clebsch-Gordan weighting of the lowering operator, and the
two-atom tensor-product embedding.
"""

import warnings

import pytest
import numpy as np
import qutip as qt

from hyperfine_qed.core.operators import (
    clebsch_gordan,
    spin_state,
    spherical_basis,
    coherence_operator,
    hyperfine_lowering,
    hyperfine_raising,
    two_atom_lowering,
    composite_dimension,
    manifold_offsets,
    sublevels,
)
from hyperfine_qed.core.errors import (
    OutOfRangeSublevel,
    InvalidPolarizationIndex,
    InvalidAtomIndex,
)
from hyperfine_qed.models import Polarization


# =============================================================================
# SPIN STATES AND SPHERICAL BASIS
# =============================================================================

@pytest.mark.parametrize("F", [0, 0.5, 1, 1.5, 2, 3.5])
def test_spin_state_is_single_unit_entry(F):
    dim = int(2 * F + 1)
    for m in sublevels(F):
        vec = spin_state(F, m).full().ravel()
        assert vec.shape == (dim,)
        expected = np.zeros(dim)
        expected[int(round(F - m))] = 1.0
        assert np.allclose(vec, expected)


def test_spin_state_ordering_puts_stretched_state_first():
    assert spin_state(1, 1).full()[0, 0] == 1
    assert spin_state(1, -1).full()[2, 0] == 1


def test_spin_state_out_of_range():
    with pytest.raises(OutOfRangeSublevel):
        spin_state(1, 2)
    with pytest.raises(ValueError):
        spin_state(0.5, -1.5)


def test_spin_state_rejects_non_integer_steps():
    with pytest.raises(ValueError):
        spin_state(1, 0.5)
    with pytest.raises(ValueError):
        spin_state(0.3, 0)


def test_spherical_basis_pi():
    assert np.allclose(spherical_basis(0), [0, 0, 1])


def test_spherical_basis_circular_components():
    e_plus = spherical_basis(1)
    e_minus = spherical_basis(-1)
    assert np.isclose(np.linalg.norm(e_plus), 1.0)
    assert np.isclose(np.linalg.norm(e_minus), 1.0)
    # e_{-q} = (-1)^q e_q^*
    assert np.allclose(e_minus, -e_plus.conj())
    assert np.isclose(np.vdot(e_minus, e_plus), 0.0)


def test_spherical_basis_accepts_enum():
    assert np.allclose(spherical_basis(Polarization.SIGMA_PLUS), spherical_basis(1))


@pytest.mark.parametrize("q", [2, -2, 0.5])
def test_spherical_basis_invalid(q):
    with pytest.raises(InvalidPolarizationIndex):
        spherical_basis(q)


# =============================================================================
# CLEBSCH-GORDAN COEFFICIENTS
# =============================================================================

def test_clebsch_gordan_known_values():
    # <1/2 1/2; 1/2 -1/2 | 1 0> = 1/sqrt(2)
    assert np.isclose(clebsch_gordan(0.5, 0.5, 0.5, -0.5, 1), 1 / np.sqrt(2))
    # <1/2 1/2; 1/2 -1/2 | 0 0> = 1/sqrt(2), <1/2 -1/2; 1/2 1/2 | 0 0> = -1/sqrt(2)
    assert np.isclose(clebsch_gordan(0.5, 0.5, 0.5, -0.5, 0), 1 / np.sqrt(2))
    assert np.isclose(clebsch_gordan(0.5, -0.5, 0.5, 0.5, 0), -1 / np.sqrt(2))
    # <1 1; 1 -1 | 0 0> = 1/sqrt(3)
    assert np.isclose(clebsch_gordan(1, 1, 1, -1, 0), 1 / np.sqrt(3))


def test_clebsch_gordan_triangle_violation_is_zero():
    assert clebsch_gordan(0, 0, 1, 0, 0) == 0.0


# =============================================================================
# COHERENCE OPERATOR
# =============================================================================

def test_coherence_operator_two_level():
    op = coherence_operator(0.5, 0.5, 0.5, -0.5)
    mat = op.full()
    assert mat.shape == (4, 4)
    expected = np.zeros((4, 4))
    expected[0, 3] = 1.0
    assert np.allclose(mat, expected)


def test_coherence_operator_excited_block_comes_first():
    op = coherence_operator(1, 0, 0.5, 0.5)
    mat = op.full()
    assert mat.shape == (5, 5)
    assert mat[1, 3] == 1
    assert np.count_nonzero(mat) == 1


def test_coherence_operator_out_of_range():
    with pytest.raises(OutOfRangeSublevel):
        coherence_operator(0.5, 1.5, 0.5, 0.5)


# =============================================================================
# BASIS LAYOUT
# =============================================================================

def test_composite_layout():
    F_i = [1.5, 0.5, 2.5]
    assert composite_dimension(F_i) == 4 + 2 + 6
    assert manifold_offsets(F_i) == [0, 4, 6]


# =============================================================================
# HYPERFINE LOWERING OPERATOR
# =============================================================================

def test_lowering_two_level_pi():
    mat = hyperfine_lowering(0, [0.5, 0.5]).full()
    assert mat.shape == (4, 4)
    assert np.count_nonzero(np.abs(mat) > 1e-12) == 2
    # |g, m><e, m| for m = +1/2, -1/2
    assert np.isclose(abs(mat[2, 0]), 1 / np.sqrt(3))
    assert np.isclose(abs(mat[3, 1]), 1 / np.sqrt(3))
    assert mat[2, 0].real * mat[3, 1].real < 0


def test_lowering_two_level_sigma():
    mat = hyperfine_lowering(-1, [0.5, 0.5]).full()
    # only |g, -1/2><e, 1/2| survives
    assert np.count_nonzero(np.abs(mat) > 1e-12) == 1
    assert np.isclose(abs(mat[3, 0]), np.sqrt(2 / 3))

    mat = hyperfine_lowering(1, [0.5, 0.5]).full()
    assert np.count_nonzero(np.abs(mat) > 1e-12) == 1
    assert np.isclose(abs(mat[2, 1]), np.sqrt(2 / 3))


def test_lowering_uses_injected_coefficients():
    calls = []

    def unit_cg(j1, m1, j2, m2, j3):
        calls.append((j1, m1, j2, m2, j3))
        return 1.0

    mat = hyperfine_lowering(0, [0.5, 0.5], cg=unit_cg).full()
    # weight (-1)^(2m - q) for m = +1/2 and m = -1/2
    expected = np.zeros((4, 4))
    expected[2, 0] = -1.0
    expected[3, 1] = -1.0
    assert np.allclose(mat, expected)
    assert (0.5, 0.5, 1, 0, 0.5) in calls
    assert (0.5, -0.5, 1, 0, 0.5) in calls


def test_lowering_skips_out_of_window_sublevels():
    def strict_cg(j1, m1, j2, m2, j3):
        assert abs(m1 + m2) <= j3
        return 1.0

    hyperfine_lowering(1, [0.5, 1.5], k=1, l=2, cg=strict_cg)
    hyperfine_lowering(-1, [2, 1], k=1, l=2, cg=strict_cg)


@pytest.mark.parametrize("F_i, k, l", [
    ([0.5, 0.5], 1, 2),
    ([1, 0], 1, 2),
    ([1.5, 0.5, 2.5], 1, 2),
    ([1.5, 0.5, 2.5], 1, 3),
    ([0.5, 1.5], 2, 1),
    ([2, 1, 3], 3, 1),
])
def test_lowering_completeness(F_i, k, l):
    """sum_q S_q^dag S_q is the projector onto the upper manifold."""
    total = sum(
        (hyperfine_lowering(q, F_i, k, l).dag() * hyperfine_lowering(q, F_i, k, l)).full()
        for q in (-1, 0, 1)
    )
    size = composite_dimension(F_i)
    start = manifold_offsets(F_i)[k - 1]
    projector = np.zeros((size, size))
    for n in range(int(2 * F_i[k - 1] + 1)):
        projector[start + n, start + n] = 1.0
    assert np.allclose(total, projector)


def test_lowering_embedding_blocks():
    F_i = [1.5, 0.5, 2.5]
    mat = hyperfine_lowering(0, F_i, k=1, l=3).full()
    assert mat.shape == (12, 12)
    rows, cols = np.nonzero(np.abs(mat) > 1e-12)
    # lower manifold (F=5/2) rows, upper manifold (F=3/2) columns
    assert np.all((rows >= 6) & (rows < 12))
    assert np.all(cols < 4)

    mat = hyperfine_lowering(0, [0.5, 1.5], k=2, l=1).full()
    rows, cols = np.nonzero(np.abs(mat) > 1e-12)
    assert np.all(rows < 2)
    assert np.all((cols >= 2) & (cols < 6))


def test_lowering_is_sparse_qobj():
    op = hyperfine_lowering(0, [0.5, 0.5])
    assert isinstance(op, qt.Qobj)
    assert op.dims == [[4], [4]]
    assert isinstance(op.data, qt.data.CSR)


def test_raising_is_hermitian_conjugate():
    F_i = [1, 2]
    for q in (-1, 0, 1):
        lower = hyperfine_lowering(q, F_i).full()
        raise_ = hyperfine_raising(q, F_i).full()
        assert np.allclose(raise_, lower.conj().T)


def test_lowering_is_deterministic():
    a = hyperfine_lowering(1, [1.5, 2.5]).full()
    b = hyperfine_lowering(1, [1.5, 2.5]).full()
    assert np.array_equal(a, b)


def test_lowering_forbidden_transition_warns():
    with pytest.warns(UserWarning):
        op = hyperfine_lowering(0, [0, 0])
    assert not np.any(op.full())


def test_lowering_allowed_transition_does_not_warn():
    with warnings.catch_warnings():
        warnings.simplefilter("error", UserWarning)
        hyperfine_lowering(0, [1, 0])


@pytest.mark.parametrize("q", [2, -3])
def test_lowering_invalid_polarization(q):
    with pytest.raises(InvalidPolarizationIndex):
        hyperfine_lowering(q, [0.5, 0.5])


@pytest.mark.parametrize("k, l", [(1, 1), (0, 2), (1, 3)])
def test_lowering_invalid_manifold_indices(k, l):
    with pytest.raises(ValueError):
        hyperfine_lowering(0, [0.5, 0.5], k, l)


# =============================================================================
# TWO-ATOM EMBEDDING
# =============================================================================

def test_two_atom_dimension():
    F_i = [1.5, 0.5]
    d = composite_dimension(F_i)
    for i in (1, 2):
        op = two_atom_lowering(i, 0, F_i)
        assert op.shape == (d * d, d * d)
        assert op.dims == [[d, d], [d, d]]


def test_two_atom_matches_tensor_product():
    F_i = [0.5, 0.5]
    single = hyperfine_lowering(-1, F_i)
    identity = qt.qeye(4)
    assert np.allclose(two_atom_lowering(1, -1, F_i).full(),
                       qt.tensor(single, identity).full())
    assert np.allclose(two_atom_lowering(2, -1, F_i).full(),
                       qt.tensor(identity, single).full())


@pytest.mark.parametrize("q1, q2", [(0, 0), (-1, 1), (1, 0)])
def test_two_atom_operators_commute(q1, q2):
    F_i = [1, 0]
    A1 = two_atom_lowering(1, q1, F_i)
    A2 = two_atom_lowering(2, q2, F_i)
    assert np.allclose((A1 * A2 - A2 * A1).full(), 0)
    assert np.allclose((A1.dag() * A2 - A2 * A1.dag()).full(), 0)


@pytest.mark.parametrize("i", [0, 3, -1])
def test_two_atom_invalid_atom(i):
    with pytest.raises(InvalidAtomIndex):
        two_atom_lowering(i, 0, [0.5, 0.5])


def test_two_atom_invalid_polarization():
    with pytest.raises(InvalidPolarizationIndex):
        two_atom_lowering(1, 2, [0.5, 0.5])
