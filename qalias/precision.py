from __future__ import annotations

import math

from .errors import PrecisionUnsupportedError

MIN_BITS_PRECISION = 1
MAX_BITS_PRECISION = 31


def check_bits_precision(bits_precision: int) -> int:
    bits = int(bits_precision)
    if bits > MAX_BITS_PRECISION:
        raise PrecisionUnsupportedError(
            f"bits_precision must be <= {MAX_BITS_PRECISION}, got: {bits}"
        )
    if bits < MIN_BITS_PRECISION:
        raise PrecisionUnsupportedError(
            f"bits_precision must be >= {MIN_BITS_PRECISION}, got: {bits}"
        )
    return bits


def bits_precision_from_error(target_error: float) -> int:
    """Fixed-point bits needed so each bin is represented to within ``target_error``.

    Uses ``bits = -ceil(log2(target_error / 2)) + 1``, e.g. 11 bits for 1e-3.

    Raises
    ------
    ValueError
        If ``target_error`` is not a finite positive number.
    PrecisionUnsupportedError
        If the resulting precision falls outside ``[1, 31]``.
    """

    eps = float(target_error)
    if not math.isfinite(eps) or eps <= 0.0:
        raise ValueError("target_error must be a finite positive number")
    bits = -int(math.ceil(math.log2(0.5 * eps))) + 1
    return check_bits_precision(bits)


def bar_height(bits_precision: int) -> int:
    """Common integer capacity ``2**bits - 1`` every bin is normalised against."""

    return (1 << check_bits_precision(bits_precision)) - 1


def index_bits(n_coefficients: int) -> int:
    """``ceil(log2(n))``: bits needed to address ``n`` bins."""

    n = int(n_coefficients)
    if n < 1:
        raise ValueError("n_coefficients must be >= 1")
    return (n - 1).bit_length()
