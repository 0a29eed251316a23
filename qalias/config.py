from __future__ import annotations

import os

DEFAULT_MAX_ITER_FACTOR = 10


def _bool_env(key: str) -> bool:
    val = os.environ.get(key, "").strip().lower()
    return val not in ("", "0", "false", "no", "off")


def _int_env(key: str, default: int) -> int:
    raw = os.environ.get(key, "").strip()
    if raw == "":
        return int(default)
    try:
        out = int(raw)
    except ValueError as e:
        raise ValueError(f"{key} must be an integer, got: {raw!r}") from e
    if out < 0:
        raise ValueError(f"{key} must be >= 0, got: {out}")
    return out


def max_iter_factor(override: int | None = None) -> int:
    """Iteration ceiling for source/sink resolution, as a multiple of the bin count.

    ``override`` wins over ``QALIAS_MAX_ITER_FACTOR``.
    """

    if override is not None:
        out = int(override)
        if out < 0:
            raise ValueError("max_iter_factor must be >= 0")
        return out
    return _int_env("QALIAS_MAX_ITER_FACTOR", DEFAULT_MAX_ITER_FACTOR)


def strict_convergence(override: bool | None = None) -> bool:
    if override is not None:
        return bool(override)
    return _bool_env("QALIAS_STRICT_CONVERGENCE")
