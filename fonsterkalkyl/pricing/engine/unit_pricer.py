from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Tuple

from ..calculators.money import round_half_up
from ..calculators.muntin import calc_sprig_surcharge
from ..calculators.opening import apply_opening_direction
from ..calculators.window_type import calc_window_type_delta
from ..calculators.work_scope import apply_unit_work_scope
from ..price_table.table import PriceTable
from .context import KINDS_WITH_EXTRA_SASH, Unit, UnitKind
from .units import sash_equivalent

# Surcharge per extra sash on panels / balcony double doors (kr).
# Fixed; the sheet's flak_extra_* columns are not used for pricing.
EXTRA_SASH_UNIT_PRICE = 2750


@dataclass(frozen=True)
class PriceStep:
    code: str
    amount: float  # running total after this step
    meta: Dict[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class UnitPriceExplanation:
    unit_id: int
    price: int
    steps: Tuple[PriceStep, ...]


def calc_base_price(unit: Unit, table: PriceTable) -> Tuple[float, Dict[str, Any]]:
    if unit.kind is UnitKind.WINDOW:
        return table.sash_price(unit.sash_count or 0), {"sash_count": unit.sash_count}

    if unit.kind in KINDS_WITH_EXTRA_SASH:
        extra = unit.extra_sash or 0
        base = table.unit_price(unit.kind) + extra * EXTRA_SASH_UNIT_PRICE
        return base, {"kind": unit.kind.value, "extra_sash": extra}

    if unit.kind is not None:
        return table.unit_price(unit.kind), {"kind": unit.kind.value}

    return 0.0, {"reason": "no_kind"}


def explain_unit_price(unit: Unit, table: PriceTable) -> UnitPriceExplanation:
    """
    Price one parti, keeping every intermediate total.

    Order is fixed, later steps compound on earlier ones:
      BASE -> WORK_SCOPE (rounded) -> WINDOW_TYPE -> OPENING (rounded) -> SPRIGS -> final round
    Callers gate on completeness first (see units.is_complete); an incomplete
    unit prices with neutral values instead of raising.
    """
    steps: List[PriceStep] = []
    sash_eq = sash_equivalent(unit)

    total, meta = calc_base_price(unit, table)
    steps.append(PriceStep("BASE", total, meta))

    total, meta = apply_unit_work_scope(total, unit.work_scope)
    steps.append(PriceStep("WORK_SCOPE", total, meta))

    delta, meta = calc_window_type_delta(unit.window_type, sash_eq, table)
    total += delta
    steps.append(PriceStep("WINDOW_TYPE", total, meta))

    total, meta = apply_opening_direction(total, unit.opening)
    steps.append(PriceStep("OPENING", total, meta))

    surcharge, meta = calc_sprig_surcharge(unit.sprig_count, sash_eq)
    total += surcharge
    steps.append(PriceStep("SPRIGS", total, meta))

    price = round_half_up(total)
    steps.append(PriceStep("FINAL", float(price)))

    return UnitPriceExplanation(unit_id=unit.id, price=price, steps=tuple(steps))


def compute_unit_price(unit: Unit, table: PriceTable) -> int:
    return explain_unit_price(unit, table).price
