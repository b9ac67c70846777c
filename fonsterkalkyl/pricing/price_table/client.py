from __future__ import annotations

import json
import time
from typing import Any, Dict, Mapping, Optional

import httpx

from ...logging_config import get_logger
from ..errors import PriceListFetchError, PriceListSaveError

logger = get_logger(__name__)

NO_STORE_HEADERS = {
    "Cache-Control": "no-store, no-cache, must-revalidate",
    "Pragma": "no-cache",
}


class PriceListClient:
    """
    Talks to the price list proxy in front of the pricing sheet.

    GET  <url>?nocache=<ms>   -> {"ok": true, "data": {...raw price row...}}
    POST <url> {"pricing": {}} -> {"ok": true, "version": <int>}
    """

    def __init__(
        self,
        url: Optional[str],
        api_token: Optional[str] = None,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.url = url
        self.api_token = api_token
        self.timeout = timeout
        self._transport = transport

    def _client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(timeout=self.timeout, transport=self._transport)

    @staticmethod
    def _parse_body(response: httpx.Response, error_cls: type) -> Dict[str, Any]:
        text = response.text
        if not text.strip():
            raise error_cls("Empty response from price list")
        try:
            body = json.loads(text)
        except ValueError as e:
            raise error_cls(f"Invalid JSON from price list: {text[:200]}") from e
        if not isinstance(body, dict):
            raise error_cls("Unexpected price list response")
        return body

    async def fetch(self) -> Dict[str, Any]:
        if not self.url:
            raise PriceListFetchError("Price list URL is not configured")

        params = {"nocache": str(int(time.time() * 1000))}
        try:
            async with self._client() as client:
                r = await client.get(self.url, params=params, headers=NO_STORE_HEADERS)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PriceListFetchError(f"Price list request failed: {e}") from e

        if not r.is_success:
            raise PriceListFetchError(f"HTTP {r.status_code}: {r.reason_phrase}")

        body = self._parse_body(r, PriceListFetchError)
        if body.get("ok") is not True:
            raise PriceListFetchError(str(body.get("error") or "Price list returned ok=false"))

        data = body.get("data") or {}
        if not isinstance(data, dict):
            raise PriceListFetchError("Price list data is not an object")

        logger.debug(f"price_list_fetched fields={len(data)}")
        return data

    async def save(self, pricing: Mapping[str, Any]) -> Dict[str, Any]:
        if not self.url:
            raise PriceListSaveError("Price list URL is not configured")

        headers = dict(NO_STORE_HEADERS)
        if self.api_token:
            headers["Authorization"] = f"Bearer {self.api_token}"

        try:
            async with self._client() as client:
                r = await client.post(self.url, json={"pricing": dict(pricing)}, headers=headers)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise PriceListSaveError(f"Price list save failed: {e}") from e

        if not r.is_success:
            raise PriceListSaveError(f"HTTP {r.status_code}: {r.reason_phrase}")

        body = self._parse_body(r, PriceListSaveError)
        if body.get("ok") is not True:
            raise PriceListSaveError(str(body.get("error") or "Failed to save pricing"))

        logger.info(f"price_list_saved version={body.get('version')}")
        return body
