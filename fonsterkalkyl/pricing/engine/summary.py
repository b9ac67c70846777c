from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, Optional

from ..calculators.money import round_half_up
from ..price_table.table import PriceTable
from .context import SASH_COUNTS, OpeningDirection, Unit, UnitKind


@dataclass(frozen=True)
class UnitSummary:
    """Aggregate counts of the unit list (the old hidden form fields)."""

    kind_counts: Dict[UnitKind, int] = field(default_factory=dict)
    sash_tier_counts: Dict[int, int] = field(default_factory=dict)
    units_with_sprigs: int = 0
    average_sprigs: int = 0

    def count(self, kind: UnitKind) -> int:
        return self.kind_counts.get(kind, 0)


def summarize_units(units: Iterable[Unit]) -> UnitSummary:
    units = list(units)

    kind_counts = {kind: 0 for kind in UnitKind}
    sash_tiers = {n: 0 for n in SASH_COUNTS}

    for u in units:
        if u.kind is not None:
            kind_counts[u.kind] += 1
        if u.kind is UnitKind.WINDOW and u.sash_count in sash_tiers:
            sash_tiers[u.sash_count] += 1

    with_sprigs = [u.sprig_count for u in units if u.sprig_count is not None and u.sprig_count > 0]
    average = round_half_up(sum(with_sprigs) / len(with_sprigs)) if with_sprigs else 0

    return UnitSummary(
        kind_counts=kind_counts,
        sash_tier_counts=sash_tiers,
        units_with_sprigs=len(with_sprigs),
        average_sprigs=average,
    )


def legacy_base_components(
    summary: UnitSummary,
    table: PriceTable,
    opening: Optional[OpeningDirection] = None,
) -> float:
    """
    Old aggregate base cost: flat-priced units plus sash tiers scaled by the
    sheet's opening multiplier. Informational, compute_quote never uses it.
    """
    total = 0.0
    for kind in (UnitKind.DOOR, UnitKind.BASEMENT_HATCH, UnitKind.BALCONY_DOUBLE_DOOR):
        total += summary.count(kind) * table.unit_price(kind)

    opening_mult = table.opening_multiplier(opening)
    for n, count in summary.sash_tier_counts.items():
        total += count * table.sash_price(n) * opening_mult

    return total
