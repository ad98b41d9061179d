"""Input validation errors raised by the operator and coupling builders."""


class OutOfRangeSublevel(ValueError):
    """Raised when a magnetic sublevel m lies outside [-F, F]."""


class InvalidPolarizationIndex(ValueError):
    """Raised when a spherical component q is not one of -1, 0, 1."""


class InvalidAtomIndex(ValueError):
    """Raised when an atom label is not 1 or 2."""
