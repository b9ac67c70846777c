from .cache import PriceListCache
from .client import PriceListClient
from .defaults import DEFAULT_PRICE_ROW
from .loader import PriceTableLoader
from .parsing import (
    multiplier_to_percent,
    percent_to_multiplier,
    to_multiplier,
    to_number_loose,
    to_vat_rate,
)
from .resolver import default_price_table, resolve_price_table
from .table import ExtrasPricing, PriceSource, PriceTable

__all__ = [
    "DEFAULT_PRICE_ROW",
    "ExtrasPricing",
    "PriceListCache",
    "PriceListClient",
    "PriceSource",
    "PriceTable",
    "PriceTableLoader",
    "default_price_table",
    "multiplier_to_percent",
    "percent_to_multiplier",
    "resolve_price_table",
    "to_multiplier",
    "to_number_loose",
    "to_vat_rate",
]
