from __future__ import annotations

import json
import time
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Union

from ...logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TTL_SECONDS = 600  # 10 min


class PriceListCache:
    """
    Last successful remote price row on disk: {"ts": <epoch ms>, "data": {...}}.

    `read()` only returns data younger than the TTL. A missing, unreadable or
    malformed file reads as a cache miss.
    """

    def __init__(
        self,
        path: Union[str, Path],
        ttl_seconds: float = DEFAULT_TTL_SECONDS,
        clock: Callable[[], float] = time.time,
    ):
        self.path = Path(path)
        self.ttl_seconds = ttl_seconds
        self.clock = clock

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def read(self) -> Optional[Dict[str, Any]]:
        if not self.path.exists():
            return None

        try:
            payload = json.loads(self.path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning(f"price_cache_unreadable path={self.path} error={e}")
            return None

        if not isinstance(payload, dict):
            logger.warning(f"price_cache_malformed path={self.path}")
            return None

        ts = payload.get("ts")
        data = payload.get("data")
        if not isinstance(ts, (int, float)) or isinstance(ts, bool) or not isinstance(data, dict):
            logger.warning(f"price_cache_malformed path={self.path}")
            return None

        age_ms = self._now_ms() - ts
        if age_ms >= self.ttl_seconds * 1000:
            logger.debug(f"price_cache_expired age_s={age_ms / 1000:.0f}")
            return None

        return data

    def write(self, data: Dict[str, Any]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        payload = {"ts": self._now_ms(), "data": dict(data)}
        self.path.write_text(json.dumps(payload, ensure_ascii=False), encoding="utf-8")

    def clear(self) -> None:
        self.path.unlink(missing_ok=True)
