from __future__ import annotations

import warnings
from dataclasses import dataclass

import numpy as np

from . import config
from .errors import (
    AliasConvergenceError,
    AliasConvergenceWarning,
    DegenerateDistributionError,
    TooFewCoefficientsError,
)
from .precision import check_bits_precision


def _readonly(a: np.ndarray) -> np.ndarray:
    a = np.array(a, copy=True, order="C")
    a.setflags(write=False)
    return a


@dataclass(frozen=True)
class AliasTable:
    """Fixed-precision alias table.

    Sampling bin ``i`` uniformly and then keeping it with probability
    ``keep_coeff[i] / bar_height`` (otherwise jumping to ``alt_index[i]``)
    reproduces ``|weights| / one_norm`` up to the rounding error of
    ``bits_precision`` bits.

    Attributes
    ----------
    one_norm
        Sum of absolute input weights.
    keep_coeff
        int64 array of shape (n,) with values in [0, bar_height].
    alt_index
        int64 array of shape (n,) with alias indices in [0, n).
    bits_precision
        Fixed-point precision of ``keep_coeff``.
    signs, alt_signs
        Optional bool arrays of shape (n,): sign of bin ``i`` and of its alias
        (True means negative).
    data, alt_data
        Optional bool arrays of shape (n, data_bits): opaque bit-string of bin
        ``i`` and of its alias.
    """

    one_norm: float
    keep_coeff: np.ndarray
    alt_index: np.ndarray
    bits_precision: int
    signs: np.ndarray | None = None
    alt_signs: np.ndarray | None = None
    data: np.ndarray | None = None
    alt_data: np.ndarray | None = None

    def __post_init__(self) -> None:
        keep = np.asarray(self.keep_coeff, dtype=np.int64).ravel()
        alt = np.asarray(self.alt_index, dtype=np.int64).ravel()
        if keep.size != alt.size:
            raise ValueError("keep_coeff and alt_index must have the same size")
        if (self.signs is None) != (self.alt_signs is None):
            raise ValueError("signs and alt_signs must be given together")
        if (self.data is None) != (self.alt_data is None):
            raise ValueError("data and alt_data must be given together")
        object.__setattr__(self, "one_norm", float(self.one_norm))
        object.__setattr__(self, "bits_precision", check_bits_precision(self.bits_precision))
        object.__setattr__(self, "keep_coeff", _readonly(keep))
        object.__setattr__(self, "alt_index", _readonly(alt))
        if self.signs is not None:
            object.__setattr__(self, "signs", _readonly(np.asarray(self.signs, dtype=np.bool_)))
            object.__setattr__(self, "alt_signs", _readonly(np.asarray(self.alt_signs, dtype=np.bool_)))
        if self.data is not None:
            object.__setattr__(self, "data", _readonly(np.asarray(self.data, dtype=np.bool_)))
            object.__setattr__(self, "alt_data", _readonly(np.asarray(self.alt_data, dtype=np.bool_)))

    @property
    def bar_height(self) -> int:
        return (1 << self.bits_precision) - 1

    @property
    def n_bins(self) -> int:
        return int(self.keep_coeff.size)

    @property
    def has_sign(self) -> bool:
        return self.signs is not None

    @property
    def data_bits(self) -> int:
        if self.data is None:
            return 0
        return int(self.data.shape[1])

    def as_tuple(self) -> tuple[float, np.ndarray, np.ndarray]:
        return self.one_norm, self.keep_coeff, self.alt_index


def _as_weights(weights) -> np.ndarray:
    w = np.asarray(weights, dtype=np.float64)
    if w.ndim != 1:
        raise ValueError("weights must be 1D")
    if not np.all(np.isfinite(w)):
        raise ValueError("weights must be finite")
    return w


def _as_signs(signs, n: int) -> np.ndarray:
    s = np.asarray(signs, dtype=np.bool_)
    if s.shape != (n,):
        raise ValueError(f"signs must have shape ({n},), got {s.shape}")
    return s


def _as_data(data, n: int) -> np.ndarray:
    d = np.asarray(data, dtype=np.bool_)
    if d.ndim != 2 or int(d.shape[0]) != n:
        raise ValueError(f"data must have shape ({n}, data_bits), got {d.shape}")
    return d


def signs_from_weights(weights) -> np.ndarray:
    """Sign flags for ``weights`` (True where the weight is negative)."""

    return _as_weights(weights) < 0.0


def _round_half_away(x: np.ndarray) -> list[int]:
    # x >= 0, so half-away-from-zero is floor + (frac >= 0.5).
    fl = np.floor(x)
    up = (x - fl) >= 0.5
    return [int(v) + int(u) for v, u in zip(fl, up)]


def _absorb_excess(keep: list[int], excess: int) -> None:
    """Shift ``excess`` rounding units off (or onto) the leading bins, one unit per bin.

    Decrements skip empty bins. Every rounded-up bin is non-empty and there
    are at least ``excess`` of them, so a positive excess is always absorbed.
    """

    step = -1 if excess > 0 else 1
    remaining = abs(int(excess))
    for i in range(len(keep)):
        if remaining == 0:
            break
        if step < 0 and keep[i] == 0:
            continue
        keep[i] += step
        remaining -= 1
    if remaining != 0:
        raise RuntimeError("rounding excess could not be absorbed")


def discretize(
    bits_precision: int,
    weights,
    *,
    signs=None,
    data=None,
    max_iter_factor: int | None = None,
    strict: bool | None = None,
) -> AliasTable:
    """Build a fixed-precision alias table for sampling ``i`` with probability ∝ ``|weights[i]|``.

    Each bin is first rounded (half away from zero) to an integer share of the
    budget ``n * bar_height``; the rounding excess is then pushed onto the
    leading bins so the budget is met exactly. Bins above ``bar_height``
    (sources) donate to bins below it (sinks), which alias to their donor.

    Parameters
    ----------
    bits_precision
        Fixed-point precision in [1, 31].
    weights
        1D sequence of at least two finite weights; only magnitudes are used.
    signs
        Optional per-bin sign flags, carried through as ``signs``/``alt_signs``.
    data
        Optional (n, data_bits) boolean payload, carried through as
        ``data``/``alt_data``.
    max_iter_factor, strict
        Override ``QALIAS_MAX_ITER_FACTOR`` / ``QALIAS_STRICT_CONVERGENCE``.

    Notes
    -----
    Every transfer permanently resolves its sink, so the loop converges in at
    most ``n`` iterations. If the ceiling ``max_iter_factor * n`` is hit anyway,
    the unresolved table is returned with an ``AliasConvergenceWarning``
    (or ``AliasConvergenceError`` is raised in strict mode).
    """

    bits = check_bits_precision(bits_precision)
    w = _as_weights(weights)
    n = int(w.size)
    if n <= 1:
        raise TooFewCoefficientsError(f"need at least 2 coefficients, got {n}")
    s = None if signs is None else _as_signs(signs, n)
    d = None if data is None else _as_data(data, n)

    abs_w = np.abs(w)
    with np.errstate(over="ignore"):
        one_norm = float(abs_w.sum())
    if not np.isfinite(one_norm):
        raise ValueError("weights sum must be finite")
    if one_norm == 0.0:
        raise DegenerateDistributionError("weights must not all be zero")

    bar = (1 << bits) - 1
    keep = _round_half_away(abs_w / one_norm * n * bar)
    alt = list(range(n))

    excess = sum(keep) - n * bar
    if excess != 0:
        _absorb_excess(keep, excess)

    sources = [i for i in range(n) if keep[i] > bar]
    sinks = [i for i in range(n) if keep[i] < bar]

    max_iter = config.max_iter_factor(max_iter_factor) * n
    for _ in range(max_iter):
        if sources and sinks:
            sink = sinks.pop()
            source = sources.pop()
            keep[source] = keep[source] - bar + keep[sink]
            alt[sink] = source
            if keep[source] > bar:
                sources.append(source)
            elif keep[source] < bar:
                sinks.append(source)
        elif sources:
            # No sink left to absorb residual slack.
            keep[sources.pop()] = bar
        else:
            break

    if sources or sinks:
        msg = (
            f"alias resolution did not converge within {max_iter} iterations "
            f"({len(sources)} sources, {len(sinks)} sinks left)"
        )
        if config.strict_convergence(strict):
            raise AliasConvergenceError(msg)
        warnings.warn(msg, AliasConvergenceWarning, stacklevel=2)

    keep_arr = np.asarray(keep, dtype=np.int64)
    alt_arr = np.asarray(alt, dtype=np.int64)
    return AliasTable(
        one_norm=one_norm,
        keep_coeff=keep_arr,
        alt_index=alt_arr,
        bits_precision=bits,
        signs=s,
        alt_signs=None if s is None else s[alt_arr],
        data=d,
        alt_data=None if d is None else d[alt_arr],
    )


def bin_mass(table: AliasTable) -> np.ndarray:
    """Integer mass (out of ``n * bar_height``) the keep-or-alias draw assigns to each bin.

    ``keep_coeff[i]`` plus every ``bar_height - keep_coeff[j]`` redirected to ``i``.
    """

    keep = table.keep_coeff
    mass = keep.copy()
    np.add.at(mass, table.alt_index, table.bar_height - keep)
    return mass


def implied_distribution(table: AliasTable) -> np.ndarray:
    """Exact probability that the keep-or-alias draw lands on each bin."""

    return bin_mass(table).astype(np.float64) / float(table.n_bins * table.bar_height)


def max_bin_error(table: AliasTable, weights) -> float:
    """``max_i | |w_i| / one_norm - p_i | * n`` for the implied distribution ``p``."""

    w = _as_weights(weights)
    if int(w.size) != table.n_bins:
        raise ValueError("weights and table must have the same number of bins")
    target = np.abs(w) / float(np.sum(np.abs(w)))
    p = implied_distribution(table)
    return float(np.max(np.abs(target - p))) * table.n_bins
