from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, List

from ..engine.context import KINDS_WITH_EXTRA_SASH, UNIT_KIND_LABELS, Unit, UnitKind
from ..engine.unit_pricer import compute_unit_price
from ..engine.units import is_complete
from ..price_table.table import PriceTable


@dataclass(frozen=True)
class OfferLineItem:
    unit_id: int
    name: str
    price_ex_vat: int


def describe_unit(unit: Unit) -> str:
    label = UNIT_KIND_LABELS.get(unit.kind, "Okänt parti") if unit.kind else "Okänt parti"
    parts = [f"Parti {unit.id}: {label}"]
    if unit.kind is UnitKind.WINDOW and unit.sash_count:
        parts.append(f"{unit.sash_count} luftare")
    if unit.kind in KINDS_WITH_EXTRA_SASH and unit.extra_sash:
        parts.append(f"{unit.extra_sash} extra luftare")
    if unit.sprig_count:
        parts.append(f"{unit.sprig_count} spröjs")
    return ", ".join(parts)


def build_line_items(units: Iterable[Unit], table: PriceTable) -> List[OfferLineItem]:
    """One line per complete unit; the price is recomputed so stale unit.price never leaks."""
    items: List[OfferLineItem] = []
    for unit in units:
        if not is_complete(unit):
            continue
        items.append(OfferLineItem(
            unit_id=unit.id,
            name=describe_unit(unit),
            price_ex_vat=compute_unit_price(unit, table),
        ))
    return items
