"""Dipole-dipole coupling of two hyperfine atoms."""

import numpy as np
import qutip as qt
from typing import Tuple, Dict, List, Optional, Sequence
from dataclasses import asdict

from ..models import HyperfineAtom, AtomPair, CouplingResult
from .green_tensor import green_tensor, dipole_coupling
from .operators import spherical_basis, two_atom_lowering

POLARIZATIONS = (-1, 0, 1)


def channel_index(i: int, q: int) -> int:
    """Row of the (atom, polarization) channel in the coupling matrices."""
    return 3 * (i - 1) + (q + 1)


class CollectiveCouplingCalculator:
    """Assembles coupling rates and operators for a pair of hyperfine atoms.

    Channels are labelled by (atom i, polarization q) and ordered as
    (1,-1), (1,0), (1,1), (2,-1), (2,0), (2,1).
    """

    def __init__(self, atom: HyperfineAtom, pair: AtomPair):
        self.atom = atom
        self.pair = pair
        self._lowering = None
        self._couplings = None

    @property
    def positions(self) -> Tuple[np.ndarray, np.ndarray]:
        return np.asarray(self.pair.r1, dtype=float), np.asarray(self.pair.r2, dtype=float)

    def lowering_operators(self) -> Dict[Tuple[int, int], qt.Qobj]:
        """Two-atom lowering operators keyed by (atom, polarization)."""
        if self._lowering is None:
            self._lowering = {
                (i, q): two_atom_lowering(i, q, self.atom.F_levels,
                                          self.atom.upper, self.atom.lower)
                for i in (1, 2) for q in POLARIZATIONS
            }
        return self._lowering

    def coupling_matrices(self) -> Tuple[np.ndarray, np.ndarray]:
        """Coherent (Omega) and dissipative (Gamma) coupling matrices, 6x6."""
        if self._couplings is not None:
            return self._couplings

        positions = self.positions
        omega = np.zeros((6, 6), dtype=complex)
        gamma = np.zeros((6, 6), dtype=complex)
        for i in (1, 2):
            for j in (1, 2):
                r = positions[i - 1] - positions[j - 1]
                for q in POLARIZATIONS:
                    for qp in POLARIZATIONS:
                        a, b = channel_index(i, q), channel_index(j, qp)
                        omega[a, b], gamma[a, b] = dipole_coupling(
                            r, spherical_basis(q), spherical_basis(qp),
                            k=self.atom.wavenumber, gamma=self.atom.linewidth,
                        )
        self._couplings = (omega, gamma)
        return self._couplings

    def hamiltonian(self) -> qt.Qobj:
        """Coherent exchange H = sum_{i != j} Omega_ab S_a^dag S_b."""
        omega, _ = self.coupling_matrices()
        ops = self.lowering_operators()
        d = self.atom.dimension
        H = qt.qzero([d, d])
        for (i, q), S_a in ops.items():
            for (j, qp), S_b in ops.items():
                if i == j:
                    continue
                coeff = omega[channel_index(i, q), channel_index(j, qp)]
                if coeff != 0:
                    H += complex(coeff) * S_a.dag() * S_b
        return H

    def jump_operators(self, tol: float = 1e-12) -> List[qt.Qobj]:
        """Collective jump operators diagonalizing the Gamma matrix.

        With Gamma = V diag(lambda) V^dag the operators are
        J_n = sqrt(lambda_n) sum_b V_bn^* S_b, so that
        sum_n J_n^dag J_n = sum_ab Gamma_ab S_a^dag S_b.
        """
        _, gamma = self.coupling_matrices()
        ops = self.lowering_operators()
        rates, vectors = np.linalg.eigh(gamma)
        jumps = []
        for n, rate in enumerate(rates):
            if rate <= tol:
                continue
            J = qt.qzero([self.atom.dimension] * 2)
            for (j, qp), S_b in ops.items():
                coeff = vectors[channel_index(j, qp), n].conj()
                if coeff != 0:
                    J += complex(coeff) * S_b
            jumps.append(float(np.sqrt(rate)) * J)
        return jumps

    def analyze(self) -> CouplingResult:
        """Summarize the coupling between the two atoms."""
        omega, gamma = self.coupling_matrices()
        r = self.pair.displacement
        collective_rates = np.linalg.eigvalsh(gamma)
        return CouplingResult(
            parameters={
                'atom': asdict(self.atom),
                'pair': asdict(self.pair),
            },
            data={
                'omega': omega,
                'gamma': gamma,
                'green_tensor': green_tensor(r, self.atom.wavenumber),
            },
            metadata={
                'separation': self.pair.separation,
                'kr': self.atom.wavenumber * self.pair.separation,
                'collective_rates': collective_rates,
                'max_exchange': float(np.max(np.abs(omega))),
            },
        )

    def coupling_vs_distance(
        self,
        distances: Sequence[float],
        direction: Sequence[float] = (0.0, 0.0, 1.0),
        q: int = 0,
        qp: Optional[int] = None,
    ) -> CouplingResult:
        """Scan the inter-atomic Omega and Gamma along a direction."""
        qp = q if qp is None else qp
        distances = np.asarray(distances, dtype=float)
        direction = np.asarray(direction, dtype=float)
        direction = direction / np.linalg.norm(direction)

        omega = np.zeros(len(distances), dtype=complex)
        gamma = np.zeros(len(distances), dtype=complex)
        for n, dist in enumerate(distances):
            omega[n], gamma[n] = dipole_coupling(
                dist * direction, spherical_basis(q), spherical_basis(qp),
                k=self.atom.wavenumber, gamma=self.atom.linewidth,
            )

        return CouplingResult(
            parameters={
                'direction': direction,
                'q': q,
                'qp': qp,
                'wavenumber': self.atom.wavenumber,
                'linewidth': self.atom.linewidth,
            },
            data={
                'distances': distances,
                'omega': omega,
                'gamma': gamma,
            },
        )
