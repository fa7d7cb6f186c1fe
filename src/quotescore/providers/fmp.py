"""Financial Modeling Prep (FMP) provider.

Primary fundamentals source: full US ticker listing, quotes and TTM key
metrics/ratios. Market overview uses the same multi-symbol ``/quote``
endpoint with ETF proxies.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any

from pydantic import AliasChoices, Field

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
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker
from quotescore.providers.base import BaseMarketDataProvider, VendorModel, from_epoch

logger = logging.getLogger(__name__)

US_EXCHANGES = frozenset({"NYSE", "NASDAQ", "AMEX"})
USDKRW = "USDKRW"
BTCUSD = "BTCUSD"


def _alias(*names: str) -> Any:
    return Field(None, validation_alias=AliasChoices(*names))


class FmpTicker(VendorModel):
    symbol: str
    name: str
    exchange: str | None = None
    exchangeShortName: str | None = None
    sector: str | None = None
    industry: str | None = None


class FmpQuote(VendorModel):
    symbol: str
    price: float | None = None
    change: float | None = None
    changesPercentage: float | None = None
    open: float | None = None
    dayHigh: float | None = None
    dayLow: float | None = None
    volume: float | None = None
    previousClose: float | None = None
    timestamp: int | None = None


class FmpProfile(VendorModel):
    symbol: str
    companyName: str | None = None
    price: float | None = None
    mktCap: float | None = None
    range: str | None = None  # "52.00-100.00"
    beta: float | None = None
    exchangeShortName: str | None = None
    sector: str | None = None
    industry: str | None = None
    fullTimeEmployees: int | None = None
    description: str | None = None
    website: str | None = None
    image: str | None = None
    country: str | None = None
    ipoDate: str | None = None


class FmpKeyMetrics(VendorModel):
    """``/key-metrics-ttm`` row. Older and TTM-suffixed names both accepted."""

    market_cap: float | None = _alias("marketCap", "marketCapTTM")
    pe: float | None = _alias("peRatio", "peRatioTTM")
    ps: float | None = _alias("priceToSalesRatio", "priceToSalesRatioTTM")
    pb: float | None = _alias("pbRatio", "pbRatioTTM")
    peg: float | None = _alias("pegRatio", "pegRatioTTM")
    roe: float | None = _alias("roe", "roeTTM")
    roic: float | None = _alias("roic", "roicTTM")
    fcf: float | None = _alias("freeCashFlow", "freeCashFlowTTM")
    revenue_growth: float | None = _alias("revenueGrowth", "revenueGrowthTTM")
    eps_growth: float | None = _alias("epsgrowth", "epsGrowthTTM")
    gross_margin: float | None = _alias("grossProfitMargin")
    operating_margin: float | None = _alias("operatingProfitMargin")
    net_margin: float | None = _alias("netProfitMargin")
    debt_to_equity: float | None = _alias("debtToEquity", "debtToEquityTTM")
    current_ratio: float | None = _alias("currentRatio", "currentRatioTTM")
    beta: float | None = _alias("beta")
    dividend_yield: float | None = _alias("dividendYield", "dividendYieldTTM")


class FmpRatios(VendorModel):
    """``/ratios-ttm`` row; fills gaps left by key metrics."""

    pe: float | None = _alias("priceEarningsRatioTTM", "peRatioTTM")
    ps: float | None = _alias("priceToSalesRatioTTM")
    pb: float | None = _alias("priceToBookRatioTTM")
    peg: float | None = _alias("pegRatioTTM", "priceEarningsToGrowthRatioTTM")
    roe: float | None = _alias("returnOnEquityTTM")
    gross_margin: float | None = _alias("grossProfitMarginTTM")
    operating_margin: float | None = _alias("operatingProfitMarginTTM")
    net_margin: float | None = _alias("netProfitMarginTTM")
    debt_to_equity: float | None = _alias("debtEquityRatioTTM", "debtToEquityRatioTTM")
    current_ratio: float | None = _alias("currentRatioTTM")
    dividend_yield: float | None = _alias("dividendYieldTTM")


def _first(*values: float | None) -> float | None:
    for value in values:
        if value is not None:
            return value
    return None


def parse_range(text: str | None) -> tuple[float | None, float | None]:
    """Split FMP's ``"low-high"`` 52-week range into ``(low, high)``."""
    if not text:
        return None, None
    low, _, high = text.partition("-")
    try:
        return float(low), float(high)
    except ValueError:
        logger.debug("Unparseable FMP range %r", text)
        return None, None


class FmpProvider(BaseMarketDataProvider):
    """Fetch listings, quotes, fundamentals and market overview from FMP.

    Capabilities: tickers, quotes, metrics, profile, indices, indicators,
    commodities.
    """

    name = "fmp"
    display_name = "FMP"
    base_url = "https://financialmodelingprep.com/api/v3"
    api_key_param = "apikey"
    api_key_env = "FMP_API_KEY"

    def capabilities(self) -> set[str]:
        return {
            "tickers", "quotes", "metrics", "profile",
            "indices", "indicators", "commodities",
        }

    # --- Stock data ---

    async def list_tickers(self) -> list[Ticker]:
        return await self._cached(
            CacheKeys.ticker_list(),
            CacheTTL.TICKER_LIST,
            self._fetch_tickers,
            op="list_tickers",
            empty=[],
        )

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
        if isinstance(data, dict) and "Error Message" in data:
            message = str(data["Error Message"])
            code = (
                MarketDataErrorCode.AUTH_FAILED
                if "api key" in message.lower()
                else MarketDataErrorCode.PROVIDER_ERROR
            )
            raise MarketDataError(f"FMP API error: {message}", code=code)

    async def _rows(self, path: str, params: dict[str, Any] | None = None) -> list[Any]:
        data = await self._get_json(path, params)
        if not isinstance(data, list):
            raise MarketDataError(
                f"FMP {path} returned {type(data).__name__}, expected a list",
                code=MarketDataErrorCode.VALIDATION_FAILED,
            )
        return data

    async def _first_row(self, path: str) -> Any:
        rows = await self._rows(path)
        if not rows:
            raise MarketDataError(
                f"FMP {path} returned no rows",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        return rows[0]

    async def _fetch_tickers(self) -> list[Ticker]:
        tickers: list[Ticker] = []
        skipped = 0
        for item in await self._rows("/stock/list"):
            try:
                parsed = self._parse(FmpTicker, item)
            except MarketDataError:
                skipped += 1
                continue
            exchange = parsed.exchangeShortName or parsed.exchange
            if exchange in US_EXCHANGES:
                tickers.append(Ticker(
                    symbol=parsed.symbol,
                    name=parsed.name,
                    exchange=exchange,
                    sector=parsed.sector,
                    industry=parsed.industry,
                ))
        if skipped:
            logger.debug("FMP ticker list: skipped %d malformed rows", skipped)
        logger.info("FMP ticker list: %d US tickers", len(tickers))
        return tickers

    def _to_quote(self, q: FmpQuote) -> Quote | None:
        change = q.change or 0.0
        return self._accept_quote(Quote(
            symbol=q.symbol,
            price=q.price,
            change=change,
            change_percent=q.changesPercentage or 0.0,
            timestamp=from_epoch(q.timestamp),
            open=q.open,
            high=q.dayHigh,
            low=q.dayLow,
            previous_close=q.previousClose if q.previousClose is not None else q.price - change,
            volume=q.volume,
        ))

    async def _fetch_quote(self, symbol: str) -> Quote | None:
        q = self._parse(FmpQuote, await self._first_row(f"/quote/{symbol}"))
        if not q.price:
            raise MarketDataError(
                f"No FMP price for {symbol}",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        return self._to_quote(q)

    async def _quotes(self, symbols: list[str]) -> dict[str, FmpQuote]:
        rows = await self._rows(f"/quote/{','.join(symbols)}")
        quotes = {}
        for row in rows:
            q = self._parse(FmpQuote, row)
            if q.price:
                quotes[q.symbol] = q
        return quotes

    async def _fetch_metrics(self, symbol: str) -> Metrics | None:
        profile_row, metrics_row, ratios_row = await asyncio.gather(
            self._optional(f"profile {symbol}", self._first_row(f"/profile/{symbol}")),
            self._optional(f"key-metrics {symbol}", self._first_row(f"/key-metrics-ttm/{symbol}")),
            self._optional(f"ratios {symbol}", self._first_row(f"/ratios-ttm/{symbol}")),
        )
        if profile_row is None and metrics_row is None:
            return None

        profile = self._parse(FmpProfile, profile_row) if profile_row is not None else None
        km = self._parse(FmpKeyMetrics, metrics_row) if metrics_row is not None else FmpKeyMetrics()
        ratios = self._parse(FmpRatios, ratios_row) if ratios_row is not None else FmpRatios()
        week52_low, week52_high = parse_range(profile.range if profile else None)

        return Metrics(
            symbol=symbol,
            price=profile.price if profile else None,
            market_cap=_first(profile.mktCap if profile else None, km.market_cap),
            pe=_first(km.pe, ratios.pe),
            ps=_first(km.ps, ratios.ps),
            pb=_first(km.pb, ratios.pb),
            peg=_first(km.peg, ratios.peg),
            roe=_first(km.roe, ratios.roe),
            roic=km.roic,
            fcf=km.fcf,
            revenue_growth_yoy=km.revenue_growth,
            eps_growth_yoy=km.eps_growth,
            gross_margin=_first(km.gross_margin, ratios.gross_margin),
            operating_margin=_first(km.operating_margin, ratios.operating_margin),
            net_margin=_first(km.net_margin, ratios.net_margin),
            debt_to_equity=_first(km.debt_to_equity, ratios.debt_to_equity),
            current_ratio=_first(km.current_ratio, ratios.current_ratio),
            beta=_first(profile.beta if profile else None, km.beta),
            dividend_yield=_first(km.dividend_yield, ratios.dividend_yield),
            week52_high=week52_high,
            week52_low=week52_low,
        )

    async def _fetch_profile(self, symbol: str) -> CompanyProfile:
        p = self._parse(FmpProfile, await self._first_row(f"/profile/{symbol}"))
        return CompanyProfile(
            symbol=p.symbol,
            name=p.companyName or p.symbol,
            exchange=p.exchangeShortName,
            sector=p.sector,
            industry=p.industry,
            market_cap=p.mktCap,
            employees=p.fullTimeEmployees,
            description=p.description,
            website=p.website,
            logo=p.image,
            country=p.country,
            ipo=p.ipoDate,
        )

    async def _fetch_indices(self) -> list[MarketIndex]:
        quotes = await self._quotes([cal.proxy for cal in INDEX_CALIBRATIONS])
        indices: list[MarketIndex] = []
        for cal in INDEX_CALIBRATIONS:
            q = quotes.get(cal.proxy)
            if q is not None:
                indices.append(to_index(
                    cal, q.price, q.change, q.changesPercentage,
                    q.previousClose, from_epoch(q.timestamp),
                ))
        return indices

    async def _fetch_indicators(self) -> list[MarketIndicator]:
        quotes = await self._quotes([cal.proxy for cal in INDICATOR_CALIBRATIONS] + [USDKRW])
        indicators: list[MarketIndicator] = []
        for cal in INDICATOR_CALIBRATIONS:
            q = quotes.get(cal.proxy)
            if q is not None:
                indicators.append(to_indicator(cal, q.price, q.change, q.changesPercentage))
        fx = quotes.get(USDKRW)
        if fx is not None:
            indicators.append(MarketIndicator(
                symbol="USDKRW",
                name="USD/KRW",
                value=round(fx.price, 2),
                change=fx.change,
                change_percent=fx.changesPercentage,
            ))
        return indicators

    async def _fetch_commodities(self) -> list[Commodity]:
        quotes = await self._quotes([cal.proxy for cal in COMMODITY_CALIBRATIONS] + [BTCUSD])
        commodities: list[Commodity] = []
        for cal in COMMODITY_CALIBRATIONS:
            q = quotes.get(cal.proxy)
            if q is not None:
                commodities.append(to_commodity(cal, q.price, q.change, q.changesPercentage))
        btc = quotes.get(BTCUSD)
        if btc is not None:
            commodities.append(Commodity(
                symbol="BTC",
                name="Bitcoin",
                price=round(btc.price, 2),
                change=round(btc.change or 0.0, 2),
                change_percent=btc.changesPercentage or 0.0,
            ))
        return commodities
