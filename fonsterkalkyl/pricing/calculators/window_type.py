from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

from ..engine.context import WindowType
from ..price_table.table import PriceTable


def calc_window_type_delta(
    window_type: Optional[WindowType], sash_equivalent: int, table: PriceTable
) -> Tuple[float, Dict[str, Any]]:
    """Signed delta per sash-equivalent. Not rounded."""
    per_sash = table.window_type_delta(window_type)
    if sash_equivalent <= 0 or per_sash == 0:
        return 0.0, {"per_sash": per_sash, "sash_equivalent": sash_equivalent, "reason": "zero"}
    return per_sash * sash_equivalent, {"per_sash": per_sash, "sash_equivalent": sash_equivalent}
