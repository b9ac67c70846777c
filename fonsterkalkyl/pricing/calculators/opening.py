from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from ..engine.context import OpeningDirection
from .money import round_half_up

OUTWARD_OPENING_MULTIPLIER = 1.05


def apply_opening_direction(
    total: float, opening: Optional[OpeningDirection]
) -> Tuple[float, Dict[str, Any]]:
    if opening is not OpeningDirection.OUTWARD:
        return total, {"multiplier": 1.0, "reason": "inward"}
    return float(round_half_up(total * OUTWARD_OPENING_MULTIPLIER)), {
        "multiplier": OUTWARD_OPENING_MULTIPLIER
    }
