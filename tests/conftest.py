from __future__ import annotations

import os

os.environ.setdefault("LOG_TO_FILE", "0")  # geen logbestanden tijdens tests
os.environ.setdefault("PRICE_LIST_URL", "")

import json
from typing import Any, Dict, List

import httpx
import pytest

from fonsterkalkyl.pricing.engine.context import (
    JobOptions,
    OpeningDirection,
    RenovationType,
    Unit,
    UnitKind,
    WindowType,
    WorkScope,
)
from fonsterkalkyl.pricing.price_table.cache import PriceListCache
from fonsterkalkyl.pricing.price_table.client import PriceListClient
from fonsterkalkyl.pricing.price_table.defaults import DEFAULT_PRICE_ROW
from fonsterkalkyl.pricing.price_table.loader import PriceTableLoader
from fonsterkalkyl.pricing.price_table.resolver import default_price_table

PRICE_URL = "https://prices.example.test/exec"


@pytest.fixture
def anyio_backend():
    # anyio alleen met asyncio (geen Trio nodig)
    return "asyncio"


@pytest.fixture
def table():
    return default_price_table()


@pytest.fixture
def window_unit():
    """1 luftare, exterior, inward, standard coupled: prices at 4000 on defaults."""
    return Unit(
        id=1,
        kind=UnitKind.WINDOW,
        sash_count=1,
        work_scope=WorkScope.EXTERIOR,
        opening=OpeningDirection.INWARD,
        window_type=WindowType.COUPLED_STANDARD,
    )


@pytest.fixture
def modern_job():
    return JobOptions(renovation_type=RenovationType.MODERN)


class FakeClock:
    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def cache(tmp_path, clock):
    return PriceListCache(tmp_path / "price_list.json", ttl_seconds=600, clock=clock)


class SheetStub:
    """
    httpx.MockTransport handler that plays the price list proxy.
    Set `fail` to a status code (or "network") to make requests fail.
    """

    def __init__(self, row: Dict[str, Any] | None = None):
        self.row = dict(row if row is not None else DEFAULT_PRICE_ROW)
        self.fail: Any = None
        self.body_override: str | None = None
        self.requests: List[httpx.Request] = []
        self.saved: List[Dict[str, Any]] = []
        self.version = 7

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.fail == "network":
            raise httpx.ConnectError("connection refused", request=request)
        if isinstance(self.fail, int):
            return httpx.Response(self.fail, text="boom")
        if self.body_override is not None:
            return httpx.Response(200, text=self.body_override)

        if request.method == "POST":
            payload = json.loads(request.content)
            self.saved.append(payload["pricing"])
            self.version += 1
            return httpx.Response(200, json={"ok": True, "version": self.version})

        return httpx.Response(200, json={"ok": True, "data": self.row})


@pytest.fixture
def sheet():
    return SheetStub()


@pytest.fixture
def client(sheet):
    return PriceListClient(PRICE_URL, api_token="secret", transport=httpx.MockTransport(sheet))


@pytest.fixture
def loader(client, cache):
    return PriceTableLoader(client, cache)
