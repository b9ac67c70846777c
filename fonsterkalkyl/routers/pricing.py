# fonsterkalkyl/routers/pricing.py
from fastapi import APIRouter, Depends

from ..dependencies import get_price_loader
from ..logging_config import get_logger
from ..pricing.price_table.loader import PriceTableLoader
from ..pricing.price_table.parsing import multiplier_to_percent
from ..pricing.price_table.table import MULTIPLIER_FIELDS, PriceTable
from ..schemas.pricing import PriceRowIn, PriceTableOut

router = APIRouter(prefix="/api/pricing", tags=["pricing"])
logger = get_logger(__name__)


def _table_out(table: PriceTable) -> PriceTableOut:
    row = table.to_raw_row()
    return PriceTableOut(
        source=table.source.value,
        loaded_at=table.loaded_at,
        version=table.version,
        prices=row,
        percentages={key: multiplier_to_percent(row[key]) for key in MULTIPLIER_FIELDS},
    )


@router.get("", response_model=PriceTableOut, summary="Current price table")
async def get_pricing(loader: PriceTableLoader = Depends(get_price_loader)):
    table = await loader.ready()
    return _table_out(table)


# PriceListError -> 502 via the handler in main.py; admin paths never fall back
@router.post("/refresh", response_model=PriceTableOut, summary="Fresh load from the sheet (admin)")
async def refresh_pricing(loader: PriceTableLoader = Depends(get_price_loader)):
    logger.info("admin_price_refresh requested")
    table = await loader.load_fresh()
    return _table_out(table)


@router.put("", response_model=PriceTableOut, summary="Save a price row to the sheet (admin)")
async def save_pricing(payload: PriceRowIn, loader: PriceTableLoader = Depends(get_price_loader)):
    logger.info(f"admin_price_save requested fields={len(payload.pricing)}")
    table = await loader.save(payload.pricing)
    return _table_out(table)
