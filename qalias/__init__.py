"""qalias: fixed-precision alias tables for weighted state preparation."""

from importlib.metadata import PackageNotFoundError, version as _dist_version

from qalias.discretize import (
    AliasTable,
    bin_mass,
    discretize,
    implied_distribution,
    max_bin_error,
    signs_from_weights,
)
from qalias.errors import (
    AliasConvergenceError,
    AliasConvergenceWarning,
    DegenerateDistributionError,
    PrecisionUnsupportedError,
    TooFewCoefficientsError,
)
from qalias.plan import AliasSamplingPlan, build_plan
from qalias.precision import MAX_BITS_PRECISION, bar_height, bits_precision_from_error, index_bits
from qalias.resources import ResourceCounts, plan_resources

try:
    __version__ = _dist_version("qalias")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.1.0"

__all__ = [
    "__version__",
    # Tables and plans
    "AliasTable",
    "AliasSamplingPlan",
    "ResourceCounts",
    # Core functions
    "build_plan",
    "discretize",
    "plan_resources",
    # Precision helpers
    "MAX_BITS_PRECISION",
    "bar_height",
    "bits_precision_from_error",
    "index_bits",
    # Diagnostics
    "bin_mass",
    "implied_distribution",
    "max_bin_error",
    "signs_from_weights",
    # Errors
    "AliasConvergenceError",
    "AliasConvergenceWarning",
    "DegenerateDistributionError",
    "PrecisionUnsupportedError",
    "TooFewCoefficientsError",
]
