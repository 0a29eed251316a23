from __future__ import annotations

from dataclasses import dataclass

from .precision import bits_precision_from_error, index_bits


@dataclass(frozen=True)
class ResourceCounts:
    """Register widths a consumer reserves to host an alias table.

    ``aux_bits`` covers the alias-index register, the keep-coefficient
    register, the uniform comparison register, one comparison flag, and the
    optional alias sign and alias data registers.
    """

    total: int
    index_bits: int
    aux_bits: int
    bits_precision: int
    has_sign: bool = False
    data_bits: int = 0

    def as_tuple(self) -> tuple[int, tuple[int, int]]:
        return self.total, (self.index_bits, self.aux_bits)


def plan_resources(
    target_error: float,
    n_coefficients: int,
    has_sign: bool,
    *,
    data_bits: int = 0,
) -> ResourceCounts:
    """Slot counts for an ``n_coefficients``-bin table at ``target_error``.

    With ``data_bits == 0``:
      aux_bits = index_bits + 2 * bits_precision + 1 (+ 1 with sign)
      total    = aux_bits + index_bits
    A per-bin payload adds ``data_bits`` to both the data register and the
    alias-data register.
    """

    n_index = index_bits(n_coefficients)
    bits = bits_precision_from_error(target_error)
    data_bits = int(data_bits)
    if data_bits < 0:
        raise ValueError("data_bits must be >= 0")
    has_sign = bool(has_sign)

    aux = n_index + 2 * bits + 1 + (1 if has_sign else 0) + data_bits
    return ResourceCounts(
        total=aux + n_index + data_bits,
        index_bits=n_index,
        aux_bits=aux,
        bits_precision=bits,
        has_sign=has_sign,
        data_bits=data_bits,
    )
