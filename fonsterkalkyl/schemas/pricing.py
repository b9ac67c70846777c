# fonsterkalkyl/schemas/pricing.py
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel


class PriceTableOut(BaseModel):
    source: str
    loaded_at: Optional[datetime] = None
    version: int
    # flat sheet row (field ids as in the price list)
    prices: Dict[str, float]
    # admin display: multiplier fields as +/- percent
    percentages: Dict[str, Optional[float]]


class PriceRowIn(BaseModel):
    # raw sheet row; values are parsed loosely (numbers or numeric strings)
    pricing: Dict[str, Any]
