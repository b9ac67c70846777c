from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from .config import Settings, get_settings
from .pricing.price_table.cache import PriceListCache
from .pricing.price_table.client import PriceListClient
from .pricing.price_table.loader import PriceTableLoader
from .pricing.price_table.table import PriceTable


def build_price_loader(settings: Settings) -> PriceTableLoader:
    client = PriceListClient(
        url=settings.price_list_url,
        api_token=settings.price_list_api_token,
        timeout=settings.price_fetch_timeout_seconds,
    )
    cache = PriceListCache(settings.price_cache_path, ttl_seconds=settings.price_cache_ttl_seconds)
    return PriceTableLoader(client, cache)


@lru_cache(maxsize=1)
def get_price_loader() -> PriceTableLoader:
    """Process-wide loader; the current table is shared by all requests."""
    return build_price_loader(get_settings())


async def get_price_table(loader: PriceTableLoader = Depends(get_price_loader)) -> PriceTable:
    return await loader.ready()
