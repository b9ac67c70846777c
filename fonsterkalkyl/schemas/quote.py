# fonsterkalkyl/schemas/quote.py
from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, Field

from ..pricing.engine.context import OpeningDirection, RenovationType, UnitKind, WindowType, WorkScope


class UnitIn(BaseModel):
    # units are numbered by position (Parti 1, 2, ...)
    kind: Optional[UnitKind] = None
    # 3 or legacy "3_luftare"
    sash_count: Optional[Union[int, str]] = None
    extra_sash: Optional[int] = None
    work_scope: Optional[WorkScope] = None
    opening: Optional[OpeningDirection] = None
    window_type: Optional[WindowType] = None
    sprig_count: Optional[int] = None


class CustomerIn(BaseModel):
    company: str = ""
    contact: str = ""
    personnummer: str = ""
    address: str = ""
    postal: str = ""
    city: str = ""
    fastighet: str = ""
    phone: str = ""
    email: str = ""


class QuoteRequest(BaseModel):
    units: List[UnitIn] = Field(default_factory=list)
    renovation_type: Optional[RenovationType] = None
    work_description: Optional[WorkScope] = None
    adjustment_plus: float = Field(0.0, allow_inf_nan=False)
    adjustment_minus: float = Field(0.0, allow_inf_nan=False)
    material_percentage: float = Field(0.0, allow_inf_nan=False)
    glazing_enabled: bool = False
    glazing_area_m2: float = Field(0.0, allow_inf_nan=False)
    has_tax_deduction: bool = False
    is_shared_deduction: bool = False
    customer: Optional[CustomerIn] = None
    gdpr_consent: bool = False


class LineItemOut(BaseModel):
    unit_id: int
    name: str
    price_ex_vat: int


class QuoteResponse(BaseModel):
    quote_id: str
    price_source: str
    price_version: int
    unit_prices: Dict[int, Optional[int]]
    breakdown: Dict[str, float]
    summary: Dict[str, Any]
    line_items: List[LineItemOut]
    offer_text: Optional[str] = None
