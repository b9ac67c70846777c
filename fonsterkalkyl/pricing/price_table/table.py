from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple

from ..engine.context import (
    OpeningDirection,
    RenovationType,
    UnitKind,
    WindowType,
    WorkScope,
)
from .parsing import multiplier_to_cell


class PriceSource(str, Enum):
    REMOTE = "remote"
    CACHE = "cache"
    DEFAULT = "default"


# =============================================================================
# Sheet field identifiers (external contract with the price list service)
# =============================================================================

UNIT_PRICE_FIELDS: Dict[UnitKind, str] = {
    UnitKind.DOOR: "dorrparti",
    UnitKind.BALCONY_DOUBLE_DOOR: "pardorr_balong_altan",
    UnitKind.BASEMENT_HATCH: "kallare_glugg",
    UnitKind.PANEL: "flak_bas",
}

SASH_PRICE_FIELDS: Dict[int, str] = {n: f"luftare_{n}_pris" for n in range(1, 7)}

RENOVATION_FIELDS: Dict[RenovationType, str] = {
    RenovationType.MODERN: "renov_modern_alcro_mult",
    RenovationType.TRADITIONAL: "renov_trad_linolja_mult",
}

OPENING_FIELDS: Dict[OpeningDirection, str] = {
    OpeningDirection.INWARD: "oppning_inat_mult",
    OpeningDirection.OUTWARD: "oppning_utat_mult",
}

WINDOW_TYPE_FIELDS: Dict[WindowType, str] = {
    WindowType.COUPLED_STANDARD: "typ_kopplade_standard_delta",
    WindowType.COUPLED_INSULATED_GLASS: "typ_kopplade_isolerglas_delta",
    WindowType.INSULATED_GLASS: "typ_isolerglas_delta",
    WindowType.INSERT_OUTER: "typ_insats_yttre_delta",
    WindowType.INSERT_INNER: "typ_insats_inre_delta",
    WindowType.INSERT_COMPLETE: "typ_insats_komplett_delta",
}

WORK_DESCRIPTION_FIELDS: Dict[WorkScope, str] = {
    WorkScope.EXTERIOR: "arb_utvandig_mult",
    WorkScope.INTERIOR: "arb_invandig_mult",
    WorkScope.EXTERIOR_INNER_SASH: "arb_utv_plus_innermal_mult",
}

EXTRA_PANEL_SASH_FIELDS: Tuple[str, ...] = tuple(f"flak_extra_{n}" for n in range(1, 6))

SPRIG_LOW_FIELD = "sprojs_low_price"
SPRIG_HIGH_FIELD = "sprojs_high_price"
SPRIG_THRESHOLD_FIELD = "sprojs_threshold"
GLASS_FIELD = "le_glas_per_kvm"
VAT_FIELD = "vat"
VERSION_FIELD = "version"

# Percentage-or-multiplier fields (normalized with to_multiplier)
MULTIPLIER_FIELDS: Tuple[str, ...] = (
    *RENOVATION_FIELDS.values(),
    *OPENING_FIELDS.values(),
    *WORK_DESCRIPTION_FIELDS.values(),
)

RAW_PRICE_FIELDS: Tuple[str, ...] = (
    *UNIT_PRICE_FIELDS.values(),
    *SASH_PRICE_FIELDS.values(),
    *RENOVATION_FIELDS.values(),
    *OPENING_FIELDS.values(),
    *WINDOW_TYPE_FIELDS.values(),
    *WORK_DESCRIPTION_FIELDS.values(),
    SPRIG_LOW_FIELD,
    SPRIG_HIGH_FIELD,
    SPRIG_THRESHOLD_FIELD,
    GLASS_FIELD,
    *EXTRA_PANEL_SASH_FIELDS,
    VAT_FIELD,
    VERSION_FIELD,
)

# ROT: fixed 50% of labour cost, never read from the sheet
DEDUCTION_RATE = 0.5


# =============================================================================
# Value objects
# =============================================================================


def _frozen(mapping: Mapping[Any, float]) -> Mapping[Any, float]:
    return MappingProxyType(dict(mapping))


@dataclass(frozen=True)
class ExtrasPricing:
    sprig_low_price: float
    sprig_high_price: float
    sprig_threshold: float
    glass_per_sqm: float
    vat_rate: float
    deduction_rate: float = DEDUCTION_RATE
    # flak_extra_1..5: carried for the admin sheet, pricing uses EXTRA_SASH_UNIT_PRICE
    extra_panel_sash_prices: Tuple[float, ...] = ()


@dataclass(frozen=True)
class PriceTable:
    """
    Resolved price list. Built once per load (see resolver.resolve_price_table),
    read-only afterwards. Provenance fields are informational and excluded from equality.
    """

    unit_prices: Mapping[UnitKind, float]
    sash_prices: Mapping[int, float]
    renovation_multipliers: Mapping[RenovationType, float]
    opening_multipliers: Mapping[OpeningDirection, float]
    window_type_deltas: Mapping[WindowType, float]
    work_description_multipliers: Mapping[WorkScope, float]
    extras: ExtrasPricing
    version: int = 0
    source: PriceSource = field(default=PriceSource.DEFAULT, compare=False)
    loaded_at: Optional[datetime] = field(default=None, compare=False)

    def __post_init__(self) -> None:
        for name in (
            "unit_prices",
            "sash_prices",
            "renovation_multipliers",
            "opening_multipliers",
            "window_type_deltas",
            "work_description_multipliers",
        ):
            object.__setattr__(self, name, _frozen(getattr(self, name)))

    # --- lookups (missing keys are neutral) ---

    def unit_price(self, kind: UnitKind) -> float:
        return self.unit_prices.get(kind, 0.0)

    def sash_price(self, sash_count: int) -> float:
        return self.sash_prices.get(sash_count, 0.0)

    def renovation_multiplier(self, renovation_type: Optional[RenovationType]) -> float:
        if renovation_type is None:
            return 1.0
        return self.renovation_multipliers.get(renovation_type, 1.0)

    def opening_multiplier(self, opening: Optional[OpeningDirection]) -> float:
        if opening is None:
            return 1.0
        return self.opening_multipliers.get(opening, 1.0)

    def window_type_delta(self, window_type: Optional[WindowType]) -> float:
        if window_type is None:
            return 0.0
        return self.window_type_deltas.get(window_type, 0.0)

    def work_description_multiplier(self, work_description: Optional[WorkScope]) -> float:
        if work_description is None:
            return 1.0
        return self.work_description_multipliers.get(work_description, 1.0)

    # --- export ---

    def to_raw_row(self) -> Dict[str, float]:
        """Flatten back to sheet field ids (VAT as percent, multipliers as cells that read back unchanged)."""
        row: Dict[str, float] = {}
        for kind, key in UNIT_PRICE_FIELDS.items():
            row[key] = self.unit_price(kind)
        for n, key in SASH_PRICE_FIELDS.items():
            row[key] = self.sash_price(n)
        for rt, key in RENOVATION_FIELDS.items():
            row[key] = multiplier_to_cell(self.renovation_multiplier(rt))
        for od, key in OPENING_FIELDS.items():
            row[key] = multiplier_to_cell(self.opening_multiplier(od))
        for wt, key in WINDOW_TYPE_FIELDS.items():
            row[key] = self.window_type_delta(wt)
        for ws, key in WORK_DESCRIPTION_FIELDS.items():
            row[key] = multiplier_to_cell(self.work_description_multiplier(ws))
        row[SPRIG_LOW_FIELD] = self.extras.sprig_low_price
        row[SPRIG_HIGH_FIELD] = self.extras.sprig_high_price
        row[SPRIG_THRESHOLD_FIELD] = self.extras.sprig_threshold
        row[GLASS_FIELD] = self.extras.glass_per_sqm
        for key, value in zip(EXTRA_PANEL_SASH_FIELDS, self.extras.extra_panel_sash_prices):
            row[key] = value
        row[VAT_FIELD] = round(self.extras.vat_rate * 100, 4)
        row[VERSION_FIELD] = self.version
        return row
