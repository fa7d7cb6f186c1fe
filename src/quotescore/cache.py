"""In-memory TTL cache shared by provider adapters."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass
from typing import Any, Callable

logger = logging.getLogger(__name__)


class CacheTTL:
    """TTL tiers in seconds, chosen by data volatility."""

    STOCK_QUOTE = 60
    MARKET_DATA = 5 * 60
    STOCK_METRICS = 60 * 60
    STOCK_PROFILE = 24 * 60 * 60
    TICKER_LIST = 24 * 60 * 60


class CacheKeys:
    """Key namespace helpers. Callers pick the TTL tier by namespace."""

    @staticmethod
    def market_indices() -> str:
        return "market:indices"

    @staticmethod
    def market_indicators() -> str:
        return "market:indicators"

    @staticmethod
    def market_commodities() -> str:
        return "market:commodities"

    @staticmethod
    def stock_quote(symbol: str) -> str:
        return f"stock:quote:{symbol.upper()}"

    @staticmethod
    def stock_metrics(symbol: str) -> str:
        return f"stock:metrics:{symbol.upper()}"

    @staticmethod
    def stock_profile(symbol: str) -> str:
        return f"stock:profile:{symbol.upper()}"

    @staticmethod
    def ticker_list() -> str:
        return "stock:tickers"


@dataclass(frozen=True)
class CacheEntry:
    value: Any
    created_at: float
    expires_at: float


class TTLCache:
    """Process-wide key/value store with per-entry expiration.

    Expired entries are evicted lazily on ``get`` or by an explicit
    ``cleanup`` sweep. Entries are replaced wholesale on ``set`` and never
    mutated in place, so no locking is needed under asyncio.
    """

    DEFAULT_TTL = CacheTTL.MARKET_DATA

    def __init__(
        self,
        default_ttl: float = DEFAULT_TTL,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.default_ttl = default_ttl
        self._clock = clock
        self._store: dict[str, CacheEntry] = {}

    def get(self, key: str) -> Any | None:
        """Return the cached value, or None on miss or expiry."""
        entry = self._store.get(key)
        if entry is None:
            logger.debug("Cache MISS: %s", key)
            return None
        if self._clock() >= entry.expires_at:
            self._store.pop(key, None)
            logger.debug("Cache EXPIRED: %s", key)
            return None
        logger.debug("Cache HIT: %s", key)
        return entry.value

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        """Store ``value`` under ``key``; expiry restarts from now."""
        now = self._clock()
        self._store[key] = CacheEntry(
            value=value,
            created_at=now,
            expires_at=now + (self.default_ttl if ttl is None else ttl),
        )

    def delete(self, key: str) -> None:
        self._store.pop(key, None)

    def clear(self) -> None:
        self._store.clear()

    def cleanup(self) -> int:
        """Evict every expired entry. Returns the number removed."""
        now = self._clock()
        expired = [k for k, e in self._store.items() if now >= e.expires_at]
        for k in expired:
            del self._store[k]
        if expired:
            logger.debug("Cache cleanup evicted %d entries", len(expired))
        return len(expired)

    def stats(self) -> dict[str, Any]:
        return {"size": len(self._store), "keys": list(self._store)}


class NoCache(TTLCache):
    """No-op cache that always misses."""

    def get(self, key: str) -> Any | None:
        return None

    def set(self, key: str, value: Any, ttl: float | None = None) -> None:
        pass


def create_cache(backend: str) -> TTLCache:
    """Build a cache for a ``MarketDataConfig.cache_backend`` value."""
    if backend == "memory":
        return TTLCache()
    if backend != "none":
        logger.warning("Unknown cache backend '%s', caching disabled", backend)
    return NoCache()
