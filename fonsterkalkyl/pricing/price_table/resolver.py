from __future__ import annotations

from datetime import datetime, timezone
from typing import Any, Callable, List, Mapping, Optional

from ...logging_config import get_logger
from .defaults import DEFAULT_PRICE_ROW
from .parsing import to_int_loose, to_multiplier, to_number_loose, to_str, to_vat_rate
from .table import (
    EXTRA_PANEL_SASH_FIELDS,
    GLASS_FIELD,
    OPENING_FIELDS,
    RENOVATION_FIELDS,
    SASH_PRICE_FIELDS,
    SPRIG_HIGH_FIELD,
    SPRIG_LOW_FIELD,
    SPRIG_THRESHOLD_FIELD,
    UNIT_PRICE_FIELDS,
    VAT_FIELD,
    VERSION_FIELD,
    WINDOW_TYPE_FIELDS,
    WORK_DESCRIPTION_FIELDS,
    ExtrasPricing,
    PriceSource,
    PriceTable,
)

logger = get_logger(__name__)


class _RowReader:
    """
    Reads one field at a time: remote value if it parses (and passes `accept`),
    otherwise the default. Remembers which non-empty remote values were rejected.
    """

    def __init__(self, remote: Mapping[str, Any], defaults: Mapping[str, Any]):
        self.remote = remote
        self.defaults = defaults
        self.rejected: List[str] = []

    def _pick(
        self,
        key: str,
        parse: Callable[[Any], Optional[float]],
        accept: Callable[[float], bool],
        fallback: float,
    ) -> float:
        raw = self.remote.get(key)
        value = parse(raw)
        if value is not None and accept(value):
            return value
        if to_str(raw) != "":
            self.rejected.append(key)

        value = parse(self.defaults.get(key))
        if value is not None and accept(value):
            return value
        return fallback

    def amount(self, key: str) -> float:
        return self._pick(key, to_number_loose, lambda v: True, 0.0)

    def multiplier(self, key: str) -> float:
        return self._pick(key, to_multiplier, lambda v: v > 0, 1.0)

    def vat_rate(self, key: str) -> float:
        return self._pick(key, to_vat_rate, lambda v: 0 <= v <= 1, 0.25)

    def version(self, key: str) -> int:
        v = to_int_loose(self.remote.get(key))
        if v is None:
            v = to_int_loose(self.defaults.get(key))
        return v if v is not None else 0


def resolve_price_table(
    remote: Optional[Mapping[str, Any]],
    defaults: Mapping[str, Any] = DEFAULT_PRICE_ROW,
    *,
    source: PriceSource = PriceSource.DEFAULT,
    loaded_at: Optional[datetime] = None,
) -> PriceTable:
    """
    Merge a (partial) raw price row over the defaults into a PriceTable.

    Field by field: the remote value wins when it parses; otherwise the default is used.
    Multipliers must end up > 0 and the VAT rate inside [0, 1]; window-type deltas may be negative.
    Unknown keys are ignored.
    """
    reader = _RowReader(remote or {}, defaults)

    unit_prices = {kind: reader.amount(key) for kind, key in UNIT_PRICE_FIELDS.items()}
    sash_prices = {n: reader.amount(key) for n, key in SASH_PRICE_FIELDS.items()}
    renovation = {rt: reader.multiplier(key) for rt, key in RENOVATION_FIELDS.items()}
    opening = {od: reader.multiplier(key) for od, key in OPENING_FIELDS.items()}
    deltas = {wt: reader.amount(key) for wt, key in WINDOW_TYPE_FIELDS.items()}
    work = {ws: reader.multiplier(key) for ws, key in WORK_DESCRIPTION_FIELDS.items()}

    extras = ExtrasPricing(
        sprig_low_price=reader.amount(SPRIG_LOW_FIELD),
        sprig_high_price=reader.amount(SPRIG_HIGH_FIELD),
        sprig_threshold=reader.amount(SPRIG_THRESHOLD_FIELD),
        glass_per_sqm=reader.amount(GLASS_FIELD),
        vat_rate=reader.vat_rate(VAT_FIELD),
        extra_panel_sash_prices=tuple(reader.amount(key) for key in EXTRA_PANEL_SASH_FIELDS),
    )

    if reader.rejected:
        logger.warning(f"price_row_fields_defaulted fields={','.join(reader.rejected)}")

    return PriceTable(
        unit_prices=unit_prices,
        sash_prices=sash_prices,
        renovation_multipliers=renovation,
        opening_multipliers=opening,
        window_type_deltas=deltas,
        work_description_multipliers=work,
        extras=extras,
        version=reader.version(VERSION_FIELD),
        source=source,
        loaded_at=loaded_at or datetime.now(timezone.utc),
    )


def default_price_table() -> PriceTable:
    return resolve_price_table({}, DEFAULT_PRICE_ROW, source=PriceSource.DEFAULT)
