from __future__ import annotations

from dataclasses import asdict, dataclass
from enum import Enum
from typing import Dict, Optional


# -----------------------------
# Vocabulary (wire values = UI / price sheet contract)
# -----------------------------


class UnitKind(str, Enum):
    WINDOW = "fonster"
    DOOR = "dorr"
    BASEMENT_HATCH = "kallare_glugg"
    BALCONY_DOUBLE_DOOR = "pardorr_balkong"
    PANEL = "flak"


class WorkScope(str, Enum):
    """
    Arbetsbeskrivning. Used twice with different tables:
    per unit (fixed markup on the unit base) and per job (sheet-driven markup on the subtotal).
    """

    EXTERIOR = "utvandig"
    INTERIOR = "invandig"
    EXTERIOR_INNER_SASH = "utv_plus_innermal"


class OpeningDirection(str, Enum):
    INWARD = "inatgaende"
    OUTWARD = "utatgaende"


class WindowType(str, Enum):
    COUPLED_STANDARD = "kopplade_standard"
    INSULATED_GLASS = "isolerglas"
    COUPLED_INSULATED_GLASS = "kopplade_isolerglas"
    INSERT_OUTER = "insats_yttre"
    INSERT_INNER = "insats_inre"
    INSERT_COMPLETE = "insats_komplett"


class RenovationType(str, Enum):
    MODERN = "modern_alcro"
    TRADITIONAL = "trad_linolja"


KINDS_WITH_EXTRA_SASH = (UnitKind.PANEL, UnitKind.BALCONY_DOUBLE_DOOR)

SASH_COUNTS = (1, 2, 3, 4, 5, 6)
MAX_EXTRA_SASH = 5

UNIT_KIND_LABELS: Dict[UnitKind, str] = {
    UnitKind.WINDOW: "Fönsterparti",
    UnitKind.DOOR: "Dörrparti",
    UnitKind.BASEMENT_HATCH: "Källare/Glugg",
    UnitKind.BALCONY_DOUBLE_DOOR: "Pardörr balkong/altan",
    UnitKind.PANEL: "Flak",
}

WORK_SCOPE_LABELS: Dict[WorkScope, str] = {
    WorkScope.EXTERIOR: "Utvändig renovering",
    WorkScope.INTERIOR: "Invändig renovering",
    WorkScope.EXTERIOR_INNER_SASH: "Utvändig renovering samt målning av innerbågens insida",
}

RENOVATION_TYPE_LABELS: Dict[RenovationType, str] = {
    RenovationType.MODERN: "Modern - Alcro bestå",
    RenovationType.TRADITIONAL: "Traditionell - Linoljebehandling",
}


# -----------------------------
# Input models
# -----------------------------


@dataclass
class Unit:
    """
    One parti (window / door / panel opening).

    `price` is derived: recomputed on every edit, None while the unit is incomplete.
    """

    id: int
    kind: Optional[UnitKind] = None
    sash_count: Optional[int] = None
    extra_sash: Optional[int] = None
    work_scope: Optional[WorkScope] = None
    opening: Optional[OpeningDirection] = None
    window_type: Optional[WindowType] = None
    sprig_count: Optional[int] = None
    price: Optional[int] = None


CONFIGURABLE_UNIT_FIELDS = (
    "kind",
    "sash_count",
    "extra_sash",
    "work_scope",
    "opening",
    "window_type",
    "sprig_count",
)


@dataclass(frozen=True)
class JobOptions:
    """Job-wide inputs to the aggregator (everything except the units)."""

    renovation_type: Optional[RenovationType] = None
    work_description: Optional[WorkScope] = None
    adjustment_plus: float = 0.0
    adjustment_minus: float = 0.0
    material_percentage: float = 0.0
    glazing_enabled: bool = False
    glazing_area_m2: float = 0.0
    has_tax_deduction: bool = False
    is_shared_deduction: bool = False


# -----------------------------
# Output model
# -----------------------------


@dataclass(frozen=True)
class QuoteBreakdown:
    """
    Snapshot of one full recomputation. All amounts are unrounded floats;
    rounding happens in the display layer (see offer.summary).
    """

    units_subtotal: float
    extras_cost: float
    price_adjustment: float
    renovation_multiplier: float
    renovation_adjusted_total: float
    work_description_markup: float
    subtotal_excl_vat: float
    vat_amount: float
    total_incl_vat: float
    material_cost: float
    work_cost: float
    tax_deduction: float
    final_customer_price: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)
