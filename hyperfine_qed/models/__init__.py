"""Core data models for hyperfine atom coupling calculations."""

from dataclasses import dataclass, field
from enum import Enum
from fractions import Fraction
from typing import Tuple, Optional, Dict, Any, Sequence
import numpy as np

from ..core.geometry import sample_sphere, fibonacci_sphere, sample_cone
from ..core.operators import composite_dimension


class Polarization(int, Enum):
    SIGMA_MINUS = -1
    PI = 0
    SIGMA_PLUS = 1


def parse_spin(value) -> float:
    """Parse a spin given as a number or a string such as '3/2'."""
    return float(Fraction(str(value)))


@dataclass
class HyperfineAtom:
    """A multi-level atom and the transition driven between two manifolds."""
    F_levels: Sequence[float]
    upper: int = 1  # 1-based index into F_levels
    lower: int = 2
    wavenumber: float = 2 * np.pi  # transition wavenumber (1/wavelength units)
    linewidth: float = 1.0  # single-atom decay rate

    def __post_init__(self):
        self.F_levels = tuple(parse_spin(F) for F in self.F_levels)

    @property
    def dimension(self) -> int:
        return composite_dimension(self.F_levels)


@dataclass
class AtomPair:
    """Positions of two atoms."""
    r1: Tuple[float, float, float]
    r2: Tuple[float, float, float]

    @property
    def displacement(self) -> np.ndarray:
        return np.asarray(self.r1, dtype=float) - np.asarray(self.r2, dtype=float)

    @property
    def separation(self) -> float:
        return float(np.linalg.norm(self.displacement))


@dataclass
class SamplingParameters:
    """Parameters for sampling directions on the unit sphere."""
    n_samples: int = 50
    method: str = "fibonacci"  # "uniform", "fibonacci" or "cone"
    numerical_aperture: float = 0.5
    theta: float = 0.0
    phi: float = 0.0
    seed: Optional[int] = None

    def sample_directions(self, rng: Optional[np.random.Generator] = None) -> np.ndarray:
        """Draw unit vectors, one per row."""
        if rng is None:
            rng = np.random.default_rng(self.seed)
        if self.method == "uniform":
            xyz = sample_sphere(self.n_samples, rng=rng)
        elif self.method == "fibonacci":
            xyz = fibonacci_sphere(self.n_samples)
        elif self.method == "cone":
            xyz = sample_cone(self.n_samples, self.numerical_aperture,
                              self.theta, self.phi, rng=rng)
        else:
            raise ValueError("method must be 'uniform', 'fibonacci' or 'cone'")
        return np.stack([np.atleast_1d(c) for c in xyz], axis=-1)


def _serialize(value):
    if isinstance(value, np.ndarray):
        if np.iscomplexobj(value):
            return {"real": value.real.tolist(), "imag": value.imag.tolist()}
        return value.tolist()
    if isinstance(value, complex):
        return {"real": value.real, "imag": value.imag}
    if isinstance(value, np.generic):
        return _serialize(value.item())
    if isinstance(value, dict):
        return {k: _serialize(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_serialize(v) for v in value]
    return value


@dataclass
class CouplingResult:
    """Container for coupling results and analysis."""
    parameters: Dict[str, Any]
    data: Dict[str, np.ndarray]
    metadata: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable dictionary."""
        return {
            "parameters": _serialize(self.parameters),
            "data": _serialize(self.data),
            "metadata": _serialize(self.metadata),
        }
