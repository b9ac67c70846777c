from __future__ import annotations

import re
from typing import Any, List, Optional

from .context import KINDS_WITH_EXTRA_SASH, Unit, UnitKind

_SASH_SELECTOR_RE = re.compile(r"^\s*(\d+)(?:_luftare)?\s*$")


def parse_sash_selector(value: Any) -> Optional[int]:
    """
    Accepts 3, "3" and the legacy selector "3_luftare".
    Returns None for anything else (range is checked by validation).
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    m = _SASH_SELECTOR_RE.match(str(value))
    if not m:
        return None
    return int(m.group(1))


def sash_equivalent(unit: Unit) -> int:
    """
    Effective sash count for the window-type delta and the muntin surcharge.

    door / basement hatch -> 1
    panel                 -> 1 + extra sashes
    balcony double door   -> 2 + extra sashes
    window                -> selected sash count
    unset kind            -> 0
    """
    extra = unit.extra_sash or 0

    if unit.kind in (UnitKind.DOOR, UnitKind.BASEMENT_HATCH):
        return 1
    if unit.kind is UnitKind.PANEL:
        return 1 + extra
    if unit.kind is UnitKind.BALCONY_DOUBLE_DOOR:
        return 2 + extra
    if unit.kind is UnitKind.WINDOW:
        return unit.sash_count or 0
    return 0


def missing_fields(unit: Unit) -> List[str]:
    """Required attributes still unset, in the order the form asks for them."""
    missing: List[str] = []
    if unit.kind is None:
        missing.append("kind")
    if unit.kind is UnitKind.WINDOW and unit.sash_count is None:
        missing.append("sash_count")
    if unit.kind in KINDS_WITH_EXTRA_SASH and unit.extra_sash is None:
        missing.append("extra_sash")
    if unit.work_scope is None:
        missing.append("work_scope")
    if unit.opening is None:
        missing.append("opening")
    if unit.window_type is None:
        missing.append("window_type")
    return missing


def is_complete(unit: Unit) -> bool:
    return not missing_fields(unit)


def new_unit_batch(count: int) -> List[Unit]:
    if count < 0:
        raise ValueError(f"unit count must be >= 0, got {count}")
    return [Unit(id=i) for i in range(1, count + 1)]
