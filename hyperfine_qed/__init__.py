"""Hyperfine atom operators for collective light-matter simulations.

This package builds correctly normalized coherence, lowering and raising
operators for atoms with hyperfine structure, embeds them into two-atom
spaces, and provides the dyadic Green's tensor and sphere sampling used to
set up dipole-dipole couplings.
"""

__version__ = "0.1.0"

from .core.errors import (
    OutOfRangeSublevel,
    InvalidPolarizationIndex,
    InvalidAtomIndex
)

from .core.operators import (
    clebsch_gordan,
    spin_state,
    spherical_basis,
    coherence_operator,
    hyperfine_lowering,
    hyperfine_raising,
    two_atom_lowering,
    composite_dimension,
    manifold_offsets
)

from .core.green_tensor import green_tensor, dipole_coupling

from .core.geometry import (
    polar_to_cartesian,
    cartesian_to_polar,
    sample_sphere,
    fibonacci_sphere,
    sample_cone,
    cone_axis
)

from .models import (
    Polarization,
    HyperfineAtom,
    AtomPair,
    SamplingParameters,
    CouplingResult
)

from .core.physics import CollectiveCouplingCalculator
from .config import ConfigManager, get_default_config

__all__ = [
    'OutOfRangeSublevel',
    'InvalidPolarizationIndex',
    'InvalidAtomIndex',
    'clebsch_gordan',
    'spin_state',
    'spherical_basis',
    'coherence_operator',
    'hyperfine_lowering',
    'hyperfine_raising',
    'two_atom_lowering',
    'composite_dimension',
    'manifold_offsets',
    'green_tensor',
    'dipole_coupling',
    'polar_to_cartesian',
    'cartesian_to_polar',
    'sample_sphere',
    'fibonacci_sphere',
    'sample_cone',
    'cone_axis',
    'Polarization',
    'HyperfineAtom',
    'AtomPair',
    'SamplingParameters',
    'CouplingResult',
    'CollectiveCouplingCalculator',
    'ConfigManager',
    'get_default_config'
]
