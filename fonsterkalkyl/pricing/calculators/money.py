from __future__ import annotations

import math
from dataclasses import dataclass


def round_half_up(x: float) -> int:
    """Round to the nearest whole currency unit, ties towards +inf (UI arithmetic)."""
    return int(math.floor(x + 0.5))


@dataclass(frozen=True)
class VatBreakdown:
    subtotal_excl_vat: float
    vat_rate: float
    vat_amount: float
    total_incl_vat: float


def calc_vat(subtotal_excl_vat: float, vat_rate: float) -> VatBreakdown:
    # no rounding here, display layers round
    vat_amount = subtotal_excl_vat * vat_rate
    return VatBreakdown(
        subtotal_excl_vat=subtotal_excl_vat,
        vat_rate=vat_rate,
        vat_amount=vat_amount,
        total_incl_vat=subtotal_excl_vat + vat_amount,
    )
