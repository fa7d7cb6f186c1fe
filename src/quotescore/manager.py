"""MarketDataManager: one read API over the configured providers."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, TypeVar

import httpx

from quotescore.cache import TTLCache, create_cache
from quotescore.config import MarketDataConfig, MarketDataProviderType
from quotescore.defaults import default_snapshot
from quotescore.models.market import MarketData
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker
from quotescore.providers import create_provider
from quotescore.providers.base import BaseMarketDataProvider, ProviderStatus, utcnow
from quotescore.rate_limiter import SlidingWindowRateLimiter
from quotescore.scoring import ScoreResult, score
from quotescore.sentiment import calculate_fear_greed, volatility_status

logger = logging.getLogger(__name__)

T = TypeVar("T")


class MarketDataManager:
    """Central orchestrator: provider -> cache -> fallback.

    The market provider serves the overview, quotes and profiles. Ticker
    listings and metrics come from the stock provider, which is the same
    object unless the config names a different one. Both share one cache
    and each gets its own rate limiter.

    No method raises for provider trouble. Stock lookups come back empty;
    ``get_market_data`` fills any failed section from the default snapshot.

    Usage::

        from quotescore import create_manager_from_env
        async with create_manager_from_env() as mgr:
            overview = await mgr.get_market_data()
    """

    def __init__(
        self,
        config: MarketDataConfig | None = None,
        *,
        provider: BaseMarketDataProvider | None = None,
        stock_provider: BaseMarketDataProvider | None = None,
        cache: TTLCache | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.config = config or MarketDataConfig()
        self.cache = cache if cache is not None else create_cache(self.config.cache_backend)
        self._client = client

        self.provider = provider or self._build(self.config.provider)
        stock_type = self.config.resolved_stock_provider
        if stock_provider is not None:
            self.stock_provider = stock_provider
        elif provider is None and stock_type is not self.config.provider:
            self.stock_provider = self._build(stock_type)
        else:
            self.stock_provider = self.provider

    def _build(self, provider_type: MarketDataProviderType) -> BaseMarketDataProvider:
        return create_provider(
            provider_type,
            api_key=self.config.api_key_for(provider_type),
            cache=self.cache,
            rate_limiter=SlidingWindowRateLimiter.for_provider(provider_type.value),
            client=self._client,
            timeout=self.config.request_timeout,
        )

    @property
    def provider_name(self) -> str:
        return self.provider.display_name

    # ------------------------------------------------------------- overview

    async def get_market_data(self) -> MarketData:
        """Indices, indicators and commodities, fetched concurrently.

        Each section falls back to the default snapshot on its own;
        ``connected`` is True only when all three came from the provider.
        """
        indices, indicators, commodities = await asyncio.gather(
            self._section("indices", self.provider.get_indices),
            self._section("indicators", self.provider.get_indicators),
            self._section("commodities", self.provider.get_commodities),
        )
        connected = bool(indices and indicators and commodities)

        if not connected:
            snapshot = default_snapshot()
            indices = indices or snapshot.indices
            indicators = indicators or snapshot.indicators
            commodities = commodities or snapshot.commodities

        return MarketData(
            indices=indices,
            indicators=indicators,
            commodities=commodities,
            fear_greed=calculate_fear_greed(indicators),
            last_update=utcnow(),
            source=self.provider_name,
            connected=connected,
        )

    async def _section(
        self,
        name: str,
        fetch: Callable[[], Awaitable[list[Any]]],
    ) -> list[Any]:
        try:
            rows = await fetch()
        except Exception:
            logger.warning(
                "%s %s raised; using defaults", self.provider_name, name, exc_info=True,
            )
            return []
        if not rows:
            logger.warning("%s returned no %s; using defaults", self.provider_name, name)
        return rows

    # --------------------------------------------------------------- stocks

    async def get_stock_quote(self, symbol: str) -> Quote | None:
        return await self._guarded(
            self.provider,
            f"get_quote({symbol})",
            lambda: self.provider.get_quote(symbol),
            None,
        )

    async def get_stock_quotes(self, symbols: list[str]) -> list[Quote]:
        return await self._guarded(
            self.provider,
            f"get_quotes({len(symbols)})",
            lambda: self.provider.get_quotes(symbols),
            [],
        )

    async def get_company_profile(self, symbol: str) -> CompanyProfile | None:
        return await self._guarded(
            self.provider,
            f"get_company_profile({symbol})",
            lambda: self.provider.get_company_profile(symbol),
            None,
        )

    async def list_tickers(self) -> list[Ticker]:
        return await self._guarded(
            self.stock_provider, "list_tickers", self.stock_provider.list_tickers, [],
        )

    async def get_metrics(self, symbol: str) -> Metrics | None:
        return await self._guarded(
            self.stock_provider,
            f"get_metrics({symbol})",
            lambda: self.stock_provider.get_metrics(symbol),
            None,
        )

    async def _guarded(
        self,
        provider: BaseMarketDataProvider,
        op: str,
        fetch: Callable[[], Awaitable[T]],
        empty: T,
    ) -> T:
        try:
            return await fetch()
        except Exception:
            logger.warning("%s %s raised", provider.display_name, op, exc_info=True)
            return empty

    async def score_symbol(self, symbol: str) -> ScoreResult | None:
        """Fetch metrics and score them. None when no metrics are available."""
        metrics = await self.get_metrics(symbol)
        if metrics is None:
            return None
        return score(metrics)

    # ------------------------------------------------------------- housekeeping

    def status(self) -> list[ProviderStatus]:
        return [p.status() for p in self._providers()]

    def clear_cache(self) -> None:
        self.cache.clear()

    async def aclose(self) -> None:
        for p in self._providers():
            await p.aclose()

    async def __aenter__(self) -> "MarketDataManager":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    def _providers(self) -> list[BaseMarketDataProvider]:
        if self.stock_provider is self.provider:
            return [self.provider]
        return [self.provider, self.stock_provider]


__all__ = ["MarketDataManager", "calculate_fear_greed", "volatility_status"]
