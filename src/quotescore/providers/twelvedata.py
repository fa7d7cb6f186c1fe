"""Twelve Data provider.

Free tier: 8 calls/min, 800/day. The batch ``/quote`` endpoint takes a
comma-separated symbol list, so each market-overview section costs one
call. Numbers arrive as strings.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from quotescore.cache import CacheKeys, CacheTTL
from quotescore.calibration import (
    COMMODITY_CALIBRATIONS,
    INDEX_CALIBRATIONS,
    INDICATOR_CALIBRATIONS,
    to_commodity,
    to_index,
    to_indicator,
)
from quotescore.errors import MarketDataError, MarketDataErrorCode
from quotescore.models.market import Commodity, MarketIndex, MarketIndicator
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile
from quotescore.providers.base import BaseMarketDataProvider, VendorModel, from_epoch

logger = logging.getLogger(__name__)

USDKRW = "USD/KRW"
BTCUSD = "BTC/USD"

_ERROR_CODES = {
    401: MarketDataErrorCode.AUTH_FAILED,
    403: MarketDataErrorCode.AUTH_FAILED,
    404: MarketDataErrorCode.NOT_FOUND,
    429: MarketDataErrorCode.RATE_LIMITED,
}


class TwelveDataQuote(VendorModel):
    symbol: str | None = None
    name: str | None = None
    exchange: str | None = None
    timestamp: int | None = None
    open: float | None = None
    high: float | None = None
    low: float | None = None
    close: float | None = None
    volume: float | None = None
    previous_close: float | None = None
    change: float | None = None
    percent_change: float | None = None


class TwelveDataProfile(VendorModel):
    symbol: str | None = None
    name: str | None = None
    exchange: str | None = None
    sector: str | None = None
    industry: str | None = None
    employees: int | None = None
    website: str | None = None
    description: str | None = None
    country: str | None = None


class TwelveDataProvider(BaseMarketDataProvider):
    """Fetch quotes, profiles and market overview from twelvedata.com.

    Capabilities: quotes, profile, indices, indicators, commodities.
    No fundamentals and no ticker listing on this vendor.
    """

    name = "twelvedata"
    display_name = "Twelve Data"
    base_url = "https://api.twelvedata.com"
    api_key_param = "apikey"
    api_key_env = "TWELVE_DATA_API_KEY"

    def capabilities(self) -> set[str]:
        return {"quotes", "profile", "indices", "indicators", "commodities"}

    # --- Stock data ---

    async def get_quote(self, symbol: str) -> Quote | None:
        symbol = symbol.upper()
        return await self._cached(
            CacheKeys.stock_quote(symbol),
            CacheTTL.STOCK_QUOTE,
            lambda: self._fetch_quote(symbol),
            op=f"get_quote({symbol})",
            empty=None,
        )

    async def get_quotes(self, symbols: list[str]) -> list[Quote]:
        """Quotes via the batch endpoint; only uncached symbols are requested."""
        wanted = [s.upper() for s in symbols]
        found: dict[str, Quote] = {}
        missing: list[str] = []
        for symbol in wanted:
            cached = self.cache.get(self._key(CacheKeys.stock_quote(symbol)))
            if cached is not None:
                found[symbol] = cached
            else:
                missing.append(symbol)

        size = self.quote_batch_size
        for i in range(0, len(missing), size):
            chunk = missing[i:i + size]
            batch = await self._optional(f"get_quotes({len(chunk)})", self._batch(chunk))
            for symbol, raw in (batch or {}).items():
                try:
                    quote = self._to_quote(symbol, raw)
                except MarketDataError as exc:
                    self._record_failure(f"get_quotes({symbol})", exc)
                    continue
                if quote is not None:
                    self.cache.set(
                        self._key(CacheKeys.stock_quote(symbol)), quote, CacheTTL.STOCK_QUOTE,
                    )
                    found[symbol] = quote
            if i + size < len(missing):
                await asyncio.sleep(self.quote_batch_delay)

        return [found[s] for s in wanted if s in found]

    async def get_company_profile(self, symbol: str) -> CompanyProfile | None:
        symbol = symbol.upper()
        return await self._cached(
            CacheKeys.stock_profile(symbol),
            CacheTTL.STOCK_PROFILE,
            lambda: self._fetch_profile(symbol),
            op=f"get_company_profile({symbol})",
            empty=None,
        )

    # --- Market overview ---

    async def get_indices(self) -> list[MarketIndex]:
        return await self._cached(
            CacheKeys.market_indices(),
            CacheTTL.MARKET_DATA,
            self._fetch_indices,
            op="get_indices",
            empty=[],
        )

    async def get_indicators(self) -> list[MarketIndicator]:
        return await self._cached(
            CacheKeys.market_indicators(),
            CacheTTL.MARKET_DATA,
            self._fetch_indicators,
            op="get_indicators",
            empty=[],
        )

    async def get_commodities(self) -> list[Commodity]:
        return await self._cached(
            CacheKeys.market_commodities(),
            CacheTTL.MARKET_DATA,
            self._fetch_commodities,
            op="get_commodities",
            empty=[],
        )

    # ------------------------------------------------------------- fetchers

    def _check_payload(self, data: Any) -> None:
        if isinstance(data, dict) and data.get("status") == "error":
            status = data.get("code")
            raise MarketDataError(
                f"Twelve Data API error: {data.get('message', status)}",
                code=_ERROR_CODES.get(status, MarketDataErrorCode.PROVIDER_ERROR),
                retryable=status == 429,
            )

    async def _batch(self, symbols: list[str]) -> dict[str, TwelveDataQuote]:
        """One ``/quote`` call for ``symbols``, keyed by requested symbol.

        Per-symbol error entries inside a batch are skipped.
        """
        data = await self._get_json("/quote", {"symbol": ",".join(symbols)})
        # A single-symbol request returns the bare quote object.
        if len(symbols) == 1:
            data = {symbols[0]: data}
        if not isinstance(data, dict):
            raise MarketDataError(
                "Twelve Data batch quote was not an object",
                code=MarketDataErrorCode.VALIDATION_FAILED,
            )

        quotes: dict[str, TwelveDataQuote] = {}
        for symbol in symbols:
            entry = data.get(symbol)
            if not isinstance(entry, dict) or entry.get("status") == "error":
                logger.debug("Twelve Data had no quote for %s", symbol)
                continue
            quote = self._parse(TwelveDataQuote, entry)
            if quote.close:
                quotes[symbol] = quote
        return quotes

    def _to_quote(self, symbol: str, q: TwelveDataQuote) -> Quote | None:
        if not q.close:
            return None
        return self._accept_quote(Quote(
            symbol=symbol,
            price=q.close,
            change=q.change or 0.0,
            change_percent=q.percent_change or 0.0,
            timestamp=from_epoch(q.timestamp),
            open=q.open,
            high=q.high,
            low=q.low,
            previous_close=q.previous_close,
            volume=q.volume,
        ))

    async def _fetch_quote(self, symbol: str) -> Quote | None:
        batch = await self._batch([symbol])
        if symbol not in batch:
            raise MarketDataError(
                f"No Twelve Data quote for {symbol}",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        return self._to_quote(symbol, batch[symbol])

    async def _fetch_profile(self, symbol: str) -> CompanyProfile | None:
        data = await self._get_json("/profile", {"symbol": symbol})
        p = self._parse(TwelveDataProfile, data)
        if not p.name:
            return None
        return CompanyProfile(
            symbol=p.symbol or symbol,
            name=p.name,
            exchange=p.exchange,
            sector=p.sector,
            industry=p.industry,
            employees=p.employees,
            description=p.description,
            website=p.website,
            country=p.country,
        )

    async def _fetch_indices(self) -> list[MarketIndex]:
        batch = await self._batch([cal.proxy for cal in INDEX_CALIBRATIONS])
        indices: list[MarketIndex] = []
        for cal in INDEX_CALIBRATIONS:
            q = batch.get(cal.proxy)
            if q is not None:
                indices.append(to_index(
                    cal, q.close, q.change, q.percent_change,
                    q.previous_close, from_epoch(q.timestamp),
                ))
        return indices

    async def _fetch_indicators(self) -> list[MarketIndicator]:
        symbols = [cal.proxy for cal in INDICATOR_CALIBRATIONS] + [USDKRW]
        batch = await self._batch(symbols)
        indicators = [
            to_indicator(cal, batch[cal.proxy].close, batch[cal.proxy].change,
                         batch[cal.proxy].percent_change)
            for cal in INDICATOR_CALIBRATIONS
            if cal.proxy in batch
        ]
        fx = batch.get(USDKRW)
        if fx is not None:
            indicators.append(MarketIndicator(
                symbol="USDKRW",
                name="USD/KRW",
                value=round(fx.close, 2),
                change=fx.change,
                change_percent=fx.percent_change,
            ))
        return indicators

    async def _fetch_commodities(self) -> list[Commodity]:
        symbols = [cal.proxy for cal in COMMODITY_CALIBRATIONS] + [BTCUSD]
        batch = await self._batch(symbols)
        commodities = [
            to_commodity(cal, batch[cal.proxy].close, batch[cal.proxy].change,
                         batch[cal.proxy].percent_change)
            for cal in COMMODITY_CALIBRATIONS
            if cal.proxy in batch
        ]
        btc = batch.get(BTCUSD)
        if btc is not None:
            commodities.append(Commodity(
                symbol="BTC",
                name="Bitcoin",
                price=round(btc.close, 2),
                change=round(btc.change or 0.0, 2),
                change_percent=btc.percent_change or 0.0,
            ))
        return commodities
