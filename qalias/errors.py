from __future__ import annotations


class PrecisionUnsupportedError(ValueError):
    """Requested fixed-point precision is outside ``[1, 31]`` bits."""


class TooFewCoefficientsError(ValueError):
    """An alias table needs at least two bins."""


class DegenerateDistributionError(ValueError):
    """All weights are zero, so there is nothing to normalise."""


class AliasConvergenceError(RuntimeError):
    """Source/sink resolution hit its iteration ceiling (strict mode only)."""


class AliasConvergenceWarning(RuntimeWarning):
    """Source/sink resolution hit its iteration ceiling; the table is unresolved."""
