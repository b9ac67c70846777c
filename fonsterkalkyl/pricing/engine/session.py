from __future__ import annotations

import uuid
from dataclasses import replace
from typing import Any, Dict, List, Optional

from ...logging_config import get_logger
from ..price_table.table import PriceTable
from .context import (
    CONFIGURABLE_UNIT_FIELDS,
    KINDS_WITH_EXTRA_SASH,
    JobOptions,
    OpeningDirection,
    QuoteBreakdown,
    Unit,
    UnitKind,
    WindowType,
    WorkScope,
)
from .quote_engine import compute_quote
from .unit_pricer import compute_unit_price
from .units import new_unit_batch, parse_sash_selector
from .validation import ValidationIssue, validate_job, validate_units

logger = get_logger(__name__)

_ENUM_FIELDS = {
    "kind": UnitKind,
    "work_scope": WorkScope,
    "opening": OpeningDirection,
    "window_type": WindowType,
}


def _coerce(name: str, value: Any) -> Any:
    if value is None or value == "":
        return None
    if name in _ENUM_FIELDS:
        return _ENUM_FIELDS[name](value)
    if name == "sash_count":
        parsed = parse_sash_selector(value)
        if parsed is None:
            raise ValueError(f"invalid sash count: {value!r}")
        return parsed
    # extra_sash / sprig_count
    if isinstance(value, bool):
        raise ValueError(f"invalid {name}: {value!r}")
    return int(value)


class QuoteSession:
    """
    Caller-owned quoting state: the unit list, job options and the price table
    they are priced against. Every edit reprices the touched unit(s); the
    pricing functions themselves stay pure.
    """

    def __init__(self, table: PriceTable, job: Optional[JobOptions] = None, session_id: Optional[str] = None):
        self.session_id = session_id or uuid.uuid4().hex[:12]
        self.table = table
        self.job = job or JobOptions()
        self.units: List[Unit] = []

    # --- units ---

    def _get(self, unit_id: int) -> Unit:
        for u in self.units:
            if u.id == unit_id:
                return u
        raise KeyError(unit_id)

    def _reprice(self, unit: Unit) -> None:
        if validate_units([unit]):
            unit.price = None
        else:
            unit.price = compute_unit_price(unit, self.table)

    def set_unit_count(self, count: int) -> List[Unit]:
        if count < 0:
            raise ValueError(f"unit count must be >= 0, got {count}")
        if count == len(self.units):
            return self.units
        self.units = new_unit_batch(count)
        logger.debug(f"units_recreated session={self.session_id} count={count}")
        return self.units

    def update_unit(self, unit_id: int, **changes: Any) -> Unit:
        unknown = [k for k in changes if k not in CONFIGURABLE_UNIT_FIELDS]
        if unknown:
            raise ValueError(f"unknown unit attribute(s): {', '.join(sorted(unknown))}")

        unit = self._get(unit_id)
        for name, value in changes.items():
            setattr(unit, name, _coerce(name, value))

        if "kind" in changes:
            if unit.kind is not UnitKind.WINDOW:
                unit.sash_count = None
            if unit.kind not in KINDS_WITH_EXTRA_SASH:
                unit.extra_sash = None

        self._reprice(unit)
        return unit

    def duplicate_previous(self, unit_id: int) -> Unit:
        target = self._get(unit_id)
        try:
            source = self._get(unit_id - 1)
        except KeyError:
            raise ValueError(f"unit {unit_id} has no previous unit to copy from") from None

        for name in CONFIGURABLE_UNIT_FIELDS:
            setattr(target, name, getattr(source, name))
        self._reprice(target)
        return target

    # --- job / table ---

    def update_job(self, **changes: Any) -> JobOptions:
        self.job = replace(self.job, **changes)
        return self.job

    def apply_price_table(self, table: PriceTable) -> None:
        """Swap in a newly loaded table and reprice everything (last write wins)."""
        self.table = table
        for unit in self.units:
            self._reprice(unit)
        logger.info(
            f"session_repriced session={self.session_id} source={table.source.value} version={table.version}"
        )

    # --- results ---

    def validate(self) -> List[ValidationIssue]:
        return validate_units(self.units) + validate_job(self.job)

    def quote(self) -> QuoteBreakdown:
        return compute_quote(self.units, self.job, self.table)

    def unit_prices(self) -> Dict[int, Optional[int]]:
        return {u.id: u.price for u in self.units}
