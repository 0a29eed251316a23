from __future__ import annotations

from dataclasses import dataclass

from .discretize import AliasTable, discretize, signs_from_weights
from .precision import bits_precision_from_error
from .resources import ResourceCounts, plan_resources


@dataclass(frozen=True)
class AliasSamplingPlan:
    resources: ResourceCounts
    one_norm: float
    table: AliasTable

    def as_tuple(self) -> tuple[tuple[int, tuple[int, int]], float, AliasTable]:
        return self.resources.as_tuple(), self.one_norm, self.table


def build_plan(
    target_error: float,
    weights,
    *,
    signed: bool = False,
    signs=None,
    data=None,
    max_iter_factor: int | None = None,
    strict: bool | None = None,
) -> AliasSamplingPlan:
    """Discretize ``weights`` at ``target_error`` and size the consumer's registers.

    ``signed=True`` tracks the sign of each weight; explicit ``signs`` take
    precedence. Sign and data widths in the resource counts are taken from the
    built table so the two stay in lock-step.
    """

    bits = bits_precision_from_error(target_error)
    if signs is None and bool(signed):
        signs = signs_from_weights(weights)
    table = discretize(
        bits,
        weights,
        signs=signs,
        data=data,
        max_iter_factor=max_iter_factor,
        strict=strict,
    )
    resources = plan_resources(
        target_error,
        table.n_bins,
        table.has_sign,
        data_bits=table.data_bits,
    )
    return AliasSamplingPlan(resources=resources, one_norm=table.one_norm, table=table)
