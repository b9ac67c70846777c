from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

SPRIG_LOW_RATE = 250
SPRIG_HIGH_RATE = 400
# counts at or above this use the high rate
SPRIG_HIGH_FROM = 4


def sprig_rate(sprig_count: int) -> int:
    return SPRIG_HIGH_RATE if sprig_count >= SPRIG_HIGH_FROM else SPRIG_LOW_RATE


def calc_sprig_surcharge(
    sprig_count: Optional[int], sash_equivalent: int
) -> Tuple[float, Dict[str, Any]]:
    """
    rate x spröjs per ruta x sash-equivalent.
    None / 0 means no muntins.
    """
    if not sprig_count or sprig_count <= 0:
        return 0.0, {"reason": "no_sprigs"}
    if sash_equivalent <= 0:
        return 0.0, {"reason": "no_sashes"}

    rate = sprig_rate(sprig_count)
    surcharge = float(rate * sprig_count * sash_equivalent)
    return surcharge, {"rate": rate, "count": sprig_count, "sash_equivalent": sash_equivalent}
