from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from ..engine.context import WorkScope
from .money import round_half_up

# Per-unit arbetsbeskrivning markup. Fixed, NOT the sheet's arb_*_mult
# (those apply to the whole job subtotal, see quote_engine).
UNIT_WORK_SCOPE_MULTIPLIERS: Dict[WorkScope, float] = {
    WorkScope.EXTERIOR: 1.00,
    WorkScope.INTERIOR: 1.25,
    WorkScope.EXTERIOR_INNER_SASH: 1.05,
}


def unit_work_scope_multiplier(scope: Optional[WorkScope]) -> float:
    if scope is None:
        return 1.0
    return UNIT_WORK_SCOPE_MULTIPLIERS.get(scope, 1.0)


def apply_unit_work_scope(total: float, scope: Optional[WorkScope]) -> Tuple[float, Dict[str, Any]]:
    mult = unit_work_scope_multiplier(scope)
    if mult == 1.0:
        # exterior: no-op, intentionally not rounded
        return total, {"multiplier": mult, "reason": "no_markup"}
    return float(round_half_up(total * mult)), {"multiplier": mult}
