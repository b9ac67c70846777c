from __future__ import annotations

import asyncio
from datetime import datetime, timezone
from typing import Any, Callable, Dict, List, Mapping, Optional

from ...logging_config import get_logger
from ...metrics import PRICE_TABLE_LOAD_FAILURES, PRICE_TABLE_LOADS
from ..errors import PriceListFetchError, PriceListSaveError
from .cache import PriceListCache
from .client import PriceListClient
from .defaults import DEFAULT_PRICE_ROW
from .parsing import to_int_loose
from .resolver import resolve_price_table
from .table import VERSION_FIELD, PriceSource, PriceTable

logger = get_logger(__name__)

# Metadata the sheet may echo back; never part of a price row
_META_KEYS = ("source", "loadedAt", "loaded_at")

TableListener = Callable[[PriceTable], None]


def _strip_meta(data: Mapping[str, Any]) -> Dict[str, Any]:
    return {k: v for k, v in data.items() if k not in _META_KEYS}


class PriceTableLoader:
    """
    Owns the current PriceTable.

    load():       remote -> cache (TTL) -> defaults, never raises
    ready():      current table while it is a fresh remote one, otherwise load()
    load_fresh(): remote only, raises PriceListFetchError (admin editing)
    save():       admin save to the sheet, then publish

    Concurrent load() calls share one in-flight task. A late result simply
    replaces `current` (last write wins).
    """

    def __init__(
        self,
        client: PriceListClient,
        cache: PriceListCache,
        defaults: Mapping[str, Any] = DEFAULT_PRICE_ROW,
    ):
        self.client = client
        self.cache = cache
        self.defaults = defaults
        self.current: Optional[PriceTable] = None
        self.last_seen_version: Optional[int] = None
        self._inflight: Optional["asyncio.Future[PriceTable]"] = None
        self._published_at: Optional[float] = None
        self._listeners: List[TableListener] = []

    # ------------------------------------------------------------------
    # Listeners (sessions reprice when a new table is published)
    # ------------------------------------------------------------------

    def add_listener(self, listener: TableListener) -> None:
        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------

    def _resolve(self, data: Mapping[str, Any], source: PriceSource) -> PriceTable:
        return resolve_price_table(
            data,
            self.defaults,
            source=source,
            loaded_at=datetime.now(timezone.utc),
        )

    def _track_version(self, table: PriceTable) -> None:
        if table.source is PriceSource.DEFAULT:
            return
        if self.last_seen_version != table.version:
            if self.last_seen_version is not None:
                logger.info(
                    f"price_list_new_version old={self.last_seen_version} new={table.version}"
                )
            self.last_seen_version = table.version

    def _publish(self, table: PriceTable) -> PriceTable:
        self.current = table
        self._published_at = self.cache.clock()
        self._track_version(table)
        PRICE_TABLE_LOADS.labels(source=table.source.value).inc()
        logger.info(f"price_table_published source={table.source.value} version={table.version}")
        for listener in list(self._listeners):
            try:
                listener(table)
            except Exception as e:
                logger.exception(f"price_table_listener_failed listener={listener!r} error={e}")
        return table

    def _write_cache(self, data: Mapping[str, Any]) -> None:
        try:
            self.cache.write(dict(data))
        except OSError as e:
            PRICE_TABLE_LOAD_FAILURES.labels(path="cache").inc()
            logger.warning(f"price_cache_write_failed error={e}")

    async def _load_with_fallback(self) -> PriceTable:
        try:
            data = _strip_meta(await self.client.fetch())
        except PriceListFetchError as e:
            PRICE_TABLE_LOAD_FAILURES.labels(path="fetch").inc()
            logger.warning(f"price_list_fetch_failed error={e}; trying cache")
        else:
            self._write_cache(data)
            return self._publish(self._resolve(data, PriceSource.REMOTE))

        cached = self.cache.read()
        if cached is not None:
            return self._publish(self._resolve(_strip_meta(cached), PriceSource.CACHE))

        logger.warning("price_list_using_defaults")
        return self._publish(self._resolve({}, PriceSource.DEFAULT))

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    async def load(self) -> PriceTable:
        if self._inflight is None or self._inflight.done():
            self._inflight = asyncio.ensure_future(self._load_with_fallback())
        # shield: one cancelled caller must not cancel the shared load
        return await asyncio.shield(self._inflight)

    def is_stale(self) -> bool:
        """True when the current table should be reloaded before use."""
        if self.current is None or self._published_at is None:
            return True
        # cache/default tables are stopgaps; retry the sheet on the next use
        if self.current.source is not PriceSource.REMOTE:
            return True
        return self.cache.clock() - self._published_at >= self.cache.ttl_seconds

    async def ready(self) -> PriceTable:
        """Current table, reloading it first when missing, a fallback or older than the TTL."""
        if not self.is_stale():
            return self.current
        return await self.load()

    async def load_fresh(self) -> PriceTable:
        self.cache.clear()
        try:
            data = _strip_meta(await self.client.fetch())
        except PriceListFetchError as e:
            PRICE_TABLE_LOAD_FAILURES.labels(path="admin_fetch").inc()
            logger.error(f"price_list_admin_fetch_failed error={e}")
            raise

        self._write_cache(data)
        return self._publish(self._resolve(data, PriceSource.REMOTE))

    async def save(self, pricing: Mapping[str, Any]) -> PriceTable:
        row = _strip_meta(pricing)
        try:
            body = await self.client.save(row)
        except PriceListSaveError as e:
            PRICE_TABLE_LOAD_FAILURES.labels(path="admin_save").inc()
            logger.error(f"price_list_admin_save_failed error={e}")
            raise

        version = to_int_loose(body.get(VERSION_FIELD))
        if version is not None:
            row[VERSION_FIELD] = version

        self._write_cache(row)
        return self._publish(self._resolve(row, PriceSource.REMOTE))
