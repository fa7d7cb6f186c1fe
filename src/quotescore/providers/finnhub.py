"""Finnhub data provider.

Free tier: 30 calls/s, no daily cap. Serves quotes, fundamentals and
profiles directly; index levels, VIX, DXY, 10Y yield, gold and oil are
approximated from ETF proxies (see ``quotescore.calibration``).
"""

from __future__ import annotations

import asyncio
from typing import Any

from pydantic import Field

from quotescore.cache import CacheKeys, CacheTTL
from quotescore.calibration import (
    COMMODITY_CALIBRATIONS,
    INDEX_CALIBRATIONS,
    INDICATOR_CALIBRATIONS,
    ProxyCalibration,
    to_commodity,
    to_index,
    to_indicator,
)
from quotescore.errors import MarketDataError, MarketDataErrorCode
from quotescore.models.market import Commodity, MarketIndex, MarketIndicator
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker
from quotescore.providers.base import BaseMarketDataProvider, VendorModel, from_epoch
from quotescore.providers.universe import large_cap_tickers


class FinnhubQuote(VendorModel):
    c: float | None = None   # current price
    d: float | None = None   # change
    dp: float | None = None  # percent change
    h: float | None = None
    l: float | None = None
    o: float | None = None
    pc: float | None = None  # previous close
    t: int | None = None


class FinnhubProfile(VendorModel):
    ticker: str | None = None
    name: str | None = None
    exchange: str | None = None
    finnhubIndustry: str | None = None
    marketCapitalization: float | None = None  # millions USD
    employeeTotal: float | None = None
    weburl: str | None = None
    logo: str | None = None
    country: str | None = None
    ipo: str | None = None


class FinnhubBasicMetrics(VendorModel):
    """Subset of ``/stock/metric`` fields. Percent-valued unless noted."""

    week52_high: float | None = Field(None, alias="52WeekHigh")
    week52_low: float | None = Field(None, alias="52WeekLow")
    pe: float | None = Field(None, alias="peBasicExclExtraTTM")
    ps: float | None = Field(None, alias="psTTM")
    pb: float | None = Field(None, alias="pbQuarterly")
    roe: float | None = Field(None, alias="roeTTM")
    roic: float | None = Field(None, alias="roicTTM")
    revenue_growth: float | None = Field(None, alias="revenueGrowthTTMYoy")
    eps_growth: float | None = Field(None, alias="epsGrowthTTMYoy")
    gross_margin: float | None = Field(None, alias="grossMarginTTM")
    operating_margin: float | None = Field(None, alias="operatingMarginTTM")
    net_margin: float | None = Field(None, alias="netProfitMarginTTM")
    current_ratio: float | None = Field(None, alias="currentRatioQuarterly")
    debt_to_equity: float | None = Field(None, alias="totalDebtToEquityQuarterly")
    beta: float | None = None
    dividend_yield: float | None = Field(None, alias="dividendYieldIndicatedAnnual")
    fcf: float | None = Field(None, alias="freeCashFlowTTM")  # USD


class FinnhubMetricResponse(VendorModel):
    metric: FinnhubBasicMetrics = Field(default_factory=FinnhubBasicMetrics)


class FinnhubCandle(VendorModel):
    s: str
    c: list[float] = Field(default_factory=list)
    o: list[float] = Field(default_factory=list)


def _fraction(pct: float | None) -> float | None:
    return None if pct is None else pct / 100


class FinnhubProvider(BaseMarketDataProvider):
    """Fetch quotes, fundamentals and market overview from Finnhub.io.

    Capabilities: tickers (bundled list), quotes, metrics, profile,
    indices, indicators, commodities.
    USD/KRW is not available on the free tier and is left out.
    """

    name = "finnhub"
    display_name = "Finnhub"
    base_url = "https://finnhub.io/api/v1"
    api_key_param = "token"
    api_key_env = "FINNHUB_API_KEY"

    def capabilities(self) -> set[str]:
        return {
            "tickers", "quotes", "metrics", "profile",
            "indices", "indicators", "commodities",
        }

    # --- Stock data ---

    async def list_tickers(self) -> list[Ticker]:
        return large_cap_tickers()

    async def get_quote(self, symbol: str) -> Quote | None:
        symbol = symbol.upper()
        return await self._cached(
            CacheKeys.stock_quote(symbol),
            CacheTTL.STOCK_QUOTE,
            lambda: self._fetch_quote(symbol),
            op=f"get_quote({symbol})",
            empty=None,
        )

    async def get_metrics(self, symbol: str) -> Metrics | None:
        symbol = symbol.upper()
        return await self._cached(
            CacheKeys.stock_metrics(symbol),
            CacheTTL.STOCK_METRICS,
            lambda: self._fetch_metrics(symbol),
            op=f"get_metrics({symbol})",
            empty=None,
        )

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
        if isinstance(data, dict) and "error" in data:
            message = str(data["error"])
            code = (
                MarketDataErrorCode.AUTH_FAILED
                if "api key" in message.lower()
                else MarketDataErrorCode.PROVIDER_ERROR
            )
            raise MarketDataError(f"Finnhub API error: {message}", code=code)

    async def _quote(self, symbol: str) -> FinnhubQuote:
        data = await self._get_json("/quote", {"symbol": symbol})
        quote = self._parse(FinnhubQuote, data)
        # Unknown symbols come back as all zeros.
        if not quote.c:
            raise MarketDataError(
                f"No Finnhub quote for {symbol}",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        return quote

    async def _profile(self, symbol: str) -> FinnhubProfile:
        data = await self._get_json("/stock/profile2", {"symbol": symbol})
        profile = self._parse(FinnhubProfile, data)
        if not profile.name:
            raise MarketDataError(
                f"No Finnhub profile for {symbol}",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        return profile

    async def _basic_metrics(self, symbol: str) -> FinnhubBasicMetrics:
        data = await self._get_json("/stock/metric", {"symbol": symbol, "metric": "all"})
        return self._parse(FinnhubMetricResponse, data).metric

    async def _fetch_quote(self, symbol: str) -> Quote | None:
        q = await self._quote(symbol)
        return self._accept_quote(Quote(
            symbol=symbol,
            price=q.c,
            change=q.d or 0.0,
            change_percent=q.dp or 0.0,
            timestamp=from_epoch(q.t),
            open=q.o,
            high=q.h,
            low=q.l,
            previous_close=q.pc,
        ))

    async def _fetch_metrics(self, symbol: str) -> Metrics | None:
        quote, profile, basic = await asyncio.gather(
            self._optional(f"quote {symbol}", self._quote(symbol)),
            self._optional(f"profile {symbol}", self._profile(symbol)),
            self._optional(f"metric {symbol}", self._basic_metrics(symbol)),
        )
        if quote is None:
            return None
        m = basic or FinnhubBasicMetrics()
        market_cap = profile.marketCapitalization if profile else None
        return Metrics(
            symbol=symbol,
            price=quote.c,
            market_cap=market_cap * 1_000_000 if market_cap else None,
            pe=m.pe,
            ps=m.ps,
            pb=m.pb,
            roe=_fraction(m.roe),
            roic=_fraction(m.roic),
            fcf=m.fcf,
            revenue_growth_yoy=_fraction(m.revenue_growth),
            eps_growth_yoy=_fraction(m.eps_growth),
            gross_margin=_fraction(m.gross_margin),
            operating_margin=_fraction(m.operating_margin),
            net_margin=_fraction(m.net_margin),
            debt_to_equity=m.debt_to_equity,
            current_ratio=m.current_ratio,
            beta=m.beta,
            dividend_yield=_fraction(m.dividend_yield),
            week52_high=m.week52_high,
            week52_low=m.week52_low,
        )

    async def _fetch_profile(self, symbol: str) -> CompanyProfile:
        p = await self._profile(symbol)
        return CompanyProfile(
            symbol=p.ticker or symbol,
            name=p.name or symbol,
            exchange=p.exchange,
            sector=p.finnhubIndustry,
            industry=p.finnhubIndustry,
            market_cap=p.marketCapitalization * 1_000_000 if p.marketCapitalization else None,
            employees=int(p.employeeTotal) if p.employeeTotal is not None else None,
            website=p.weburl,
            logo=p.logo,
            country=p.country,
            ipo=p.ipo,
        )

    async def _proxy_quotes(
        self, calibrations: tuple[ProxyCalibration, ...],
    ) -> list[tuple[ProxyCalibration, FinnhubQuote]]:
        quotes = await asyncio.gather(*(
            self._optional(f"proxy {cal.proxy}", self._quote(cal.proxy))
            for cal in calibrations
        ))
        return [(cal, q) for cal, q in zip(calibrations, quotes) if q is not None]

    async def _fetch_indices(self) -> list[MarketIndex]:
        return [
            to_index(cal, q.c, q.d, q.dp, q.pc, from_epoch(q.t))
            for cal, q in await self._proxy_quotes(INDEX_CALIBRATIONS)
        ]

    async def _fetch_indicators(self) -> list[MarketIndicator]:
        return [
            to_indicator(cal, q.c, q.d, q.dp)
            for cal, q in await self._proxy_quotes(INDICATOR_CALIBRATIONS)
        ]

    async def _fetch_commodities(self) -> list[Commodity]:
        proxied, btc = await asyncio.gather(
            self._proxy_quotes(COMMODITY_CALIBRATIONS),
            self._optional("crypto BTC", self._bitcoin()),
        )
        commodities = [to_commodity(cal, q.c, q.d, q.dp) for cal, q in proxied]
        if btc is not None:
            commodities.append(btc)
        return commodities

    async def _bitcoin(self) -> Commodity:
        data = await self._get_json(
            "/crypto/candle",
            {"symbol": "BINANCE:BTCUSDT", "resolution": "D", "count": 1},
        )
        candle = self._parse(FinnhubCandle, data)
        if candle.s != "ok" or not candle.c:
            raise MarketDataError(
                "Finnhub returned no BTC candle",
                code=MarketDataErrorCode.NO_DATA,
            )
        close = candle.c[-1]
        open_ = candle.o[-1] if candle.o else close
        change = close - open_
        return Commodity(
            symbol="BTC",
            name="Bitcoin",
            price=round(close, 2),
            change=round(change, 2),
            change_percent=round(change / open_ * 100, 2) if open_ else 0.0,
        )
