import asyncio
import json

import pytest

from fonsterkalkyl.pricing.errors import PriceListFetchError, PriceListSaveError
from fonsterkalkyl.pricing.price_table.client import PriceListClient
from fonsterkalkyl.pricing.price_table.loader import PriceTableLoader
from fonsterkalkyl.pricing.price_table.resolver import default_price_table
from fonsterkalkyl.pricing.price_table.table import PriceSource

pytestmark = pytest.mark.anyio


# ---------------------------------------------------------------------------
# Cache
# ---------------------------------------------------------------------------


async def test_cache_round_trip_and_ttl(cache, clock):
    assert cache.read() is None
    cache.write({"luftare_1_pris": 4321})
    assert cache.read() == {"luftare_1_pris": 4321}

    clock.advance(599)
    assert cache.read() is not None
    clock.advance(1)
    assert cache.read() is None


async def test_cache_malformed_file_is_a_miss(cache):
    cache.path.write_text("{not json", encoding="utf-8")
    assert cache.read() is None
    cache.path.write_text(json.dumps({"ts": "yesterday", "data": {}}), encoding="utf-8")
    assert cache.read() is None


async def test_cache_clear(cache):
    cache.write({"vat": 25})
    cache.clear()
    assert not cache.path.exists()
    cache.clear()  # missing file is fine


# ---------------------------------------------------------------------------
# Client
# ---------------------------------------------------------------------------


async def test_fetch_sends_cache_busting_request(client, sheet):
    data = await client.fetch()
    assert data["luftare_1_pris"] == 4000

    request = sheet.requests[0]
    assert "nocache" in request.url.params
    assert "no-store" in request.headers["Cache-Control"]


@pytest.mark.parametrize(
    "fail, body",
    [
        ("network", None),
        (500, None),
        (None, ""),
        (None, "<html>not json</html>"),
        (None, json.dumps({"ok": False, "error": "sheet locked"})),
    ],
)
async def test_fetch_failures_raise(client, sheet, fail, body):
    sheet.fail = fail
    sheet.body_override = body
    with pytest.raises(PriceListFetchError):
        await client.fetch()


async def test_fetch_without_url_fails_fast():
    with pytest.raises(PriceListFetchError):
        await PriceListClient(None).fetch()


async def test_fetch_with_malformed_url_raises_fetch_error():
    with pytest.raises(PriceListFetchError):
        await PriceListClient("https://prices.example.test/\x00").fetch()


async def test_save_posts_pricing_with_bearer_token(client, sheet):
    body = await client.save({"luftare_1_pris": 4100})
    assert body["ok"] is True
    assert sheet.saved == [{"luftare_1_pris": 4100}]
    assert sheet.requests[-1].headers["Authorization"] == "Bearer secret"


# ---------------------------------------------------------------------------
# Loader fallback chain
# ---------------------------------------------------------------------------


async def test_load_remote_caches_result(loader, cache):
    table = await loader.load()
    assert table.source is PriceSource.REMOTE
    assert loader.current is table
    assert cache.read()["luftare_1_pris"] == 4000


async def test_load_falls_back_to_fresh_cache(loader, cache, sheet):
    cache.write({"luftare_1_pris": 4321})
    sheet.fail = "network"

    table = await loader.load()
    assert table.source is PriceSource.CACHE
    assert table.sash_price(1) == 4321


async def test_load_falls_back_to_defaults_when_cache_expired(loader, cache, sheet, clock):
    cache.write({"luftare_1_pris": 4321})
    clock.advance(601)
    sheet.fail = 500

    table = await loader.load()
    assert table.source is PriceSource.DEFAULT
    assert table == default_price_table()


async def test_load_ignores_echoed_metadata(loader, sheet):
    sheet.row = {**sheet.row, "source": "remote", "loadedAt": 123}
    table = await loader.load()
    assert table == default_price_table()


async def test_concurrent_loads_share_one_fetch(loader, sheet):
    tables = await asyncio.gather(loader.load(), loader.load(), loader.load())
    assert len(sheet.requests) == 1
    assert tables[0] is tables[1] is tables[2]


async def test_ready_loads_once(loader, sheet):
    first = await loader.ready()
    second = await loader.ready()
    assert first is second
    assert len(sheet.requests) == 1


async def test_ready_retries_sheet_after_fallback(loader, sheet):
    sheet.fail = "network"
    first = await loader.ready()
    assert first.source is PriceSource.DEFAULT

    sheet.fail = None
    sheet.row = {**sheet.row, "luftare_1_pris": 4999}
    second = await loader.ready()
    assert second.source is PriceSource.REMOTE
    assert second.sash_price(1) == 4999
    assert loader.current is second


async def test_ready_reloads_after_ttl(loader, sheet, clock):
    await loader.ready()
    clock.advance(599)
    await loader.ready()
    assert len(sheet.requests) == 1

    clock.advance(1)
    await loader.ready()
    assert len(sheet.requests) == 2


async def test_malformed_url_falls_back_to_defaults(cache):
    loader = PriceTableLoader(PriceListClient("https://prices.example.test/\x00"), cache)
    table = await loader.load()
    assert table.source is PriceSource.DEFAULT


async def test_failing_listener_does_not_break_load(loader):
    seen = []

    def broken(table):
        raise RuntimeError("listener blew up")

    loader.add_listener(broken)
    loader.add_listener(seen.append)
    table = await loader.load()
    assert loader.current is table
    assert seen == [table]


async def test_later_load_replaces_current(loader, sheet):
    await loader.load()
    sheet.row = {**sheet.row, "luftare_1_pris": 4500, "version": 2}
    table = await loader.load()
    assert loader.current is table
    assert table.sash_price(1) == 4500
    assert loader.last_seen_version == 2


async def test_listeners_get_new_tables(loader):
    seen = []
    loader.add_listener(seen.append)
    table = await loader.load()
    assert seen == [table]


# ---------------------------------------------------------------------------
# Admin paths
# ---------------------------------------------------------------------------


async def test_load_fresh_raises_instead_of_falling_back(loader, cache, sheet):
    cache.write({"luftare_1_pris": 4321})
    sheet.fail = 503

    with pytest.raises(PriceListFetchError):
        await loader.load_fresh()
    # stale cache was dropped, nothing published
    assert cache.read() is None
    assert loader.current is None


async def test_load_fresh_publishes_remote(loader, sheet):
    sheet.row = {**sheet.row, "luftare_2_pris": "5600"}
    table = await loader.load_fresh()
    assert table.source is PriceSource.REMOTE
    assert table.sash_price(2) == 5600


async def test_save_publishes_with_new_version(loader, cache, sheet):
    table = await loader.save({"luftare_1_pris": 4100, "source": "remote"})
    assert sheet.saved == [{"luftare_1_pris": 4100}]
    assert table.version == 8
    assert table.sash_price(1) == 4100
    assert loader.current is table
    assert cache.read()["version"] == 8


async def test_save_failure_raises(loader, sheet):
    sheet.body_override = json.dumps({"ok": False, "error": "unauthorized"})
    with pytest.raises(PriceListSaveError, match="unauthorized"):
        await loader.save({"luftare_1_pris": 4100})
    assert loader.current is None
