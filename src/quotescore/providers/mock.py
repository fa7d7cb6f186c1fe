"""Mock provider for testing and CI. No API key, no network."""

from __future__ import annotations

from collections import Counter

from quotescore.models.market import Commodity, MarketIndex, MarketIndicator
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker
from quotescore.providers.base import BaseMarketDataProvider, utcnow
from quotescore.sentiment import volatility_status


class MockProvider(BaseMarketDataProvider):
    """In-memory provider that returns configurable static data.

    Use ``set_quote``, ``set_metrics``, ``set_indices`` etc. to pre-load
    data, or leave defaults for deterministic synthetic data. Pre-loading
    an empty list makes that section come back empty.
    """

    name = "mock"
    display_name = "Mock"

    def __init__(self, **kwargs) -> None:
        super().__init__(**kwargs)
        self._tickers: list[Ticker] | None = None
        self._quotes: dict[str, Quote | None] = {}
        self._metrics: dict[str, Metrics | None] = {}
        self._profiles: dict[str, CompanyProfile | None] = {}
        self._indices: list[MarketIndex] | None = None
        self._indicators: list[MarketIndicator] | None = None
        self._commodities: list[Commodity] | None = None
        self.calls: Counter[str] = Counter()

    # --- Pre-load helpers ---

    def set_tickers(self, tickers: list[Ticker]) -> None:
        self._tickers = tickers

    def set_quote(self, symbol: str, quote: Quote | None) -> None:
        self._quotes[symbol.upper()] = quote

    def set_metrics(self, symbol: str, metrics: Metrics | None) -> None:
        self._metrics[symbol.upper()] = metrics

    def set_profile(self, symbol: str, profile: CompanyProfile | None) -> None:
        self._profiles[symbol.upper()] = profile

    def set_indices(self, indices: list[MarketIndex]) -> None:
        self._indices = indices

    def set_indicators(self, indicators: list[MarketIndicator]) -> None:
        self._indicators = indicators

    def set_commodities(self, commodities: list[Commodity]) -> None:
        self._commodities = commodities

    # --- Provider implementation ---

    def capabilities(self) -> set[str]:
        return {
            "tickers", "quotes", "metrics", "profile",
            "indices", "indicators", "commodities",
        }

    async def list_tickers(self) -> list[Ticker]:
        self.calls["list_tickers"] += 1
        if self._tickers is not None:
            return list(self._tickers)
        return [
            Ticker("AAPL", "Apple Inc.", "NASDAQ", "Technology", "Consumer Electronics"),
            Ticker("MSFT", "Microsoft Corporation", "NASDAQ", "Technology", "Software"),
            Ticker("JPM", "JPMorgan Chase & Co.", "NYSE", "Financial Services", "Banks"),
        ]

    async def get_quote(self, symbol: str) -> Quote | None:
        self.calls["get_quote"] += 1
        key = symbol.upper()
        if key in self._quotes:
            return self._quotes[key]
        return Quote(
            symbol=key,
            price=150.00,
            change=1.50,
            change_percent=1.01,
            timestamp=utcnow(),
            open=148.75,
            high=151.20,
            low=148.10,
            previous_close=148.50,
            volume=1_000_000.0,
        )

    async def get_metrics(self, symbol: str) -> Metrics | None:
        self.calls["get_metrics"] += 1
        key = symbol.upper()
        if key in self._metrics:
            return self._metrics[key]
        return Metrics(
            symbol=key,
            price=150.00,
            market_cap=2.5e12,
            pe=24.0,
            ps=6.5,
            pb=8.0,
            peg=1.8,
            roe=0.28,
            roic=0.22,
            fcf=9.0e10,
            revenue_growth_yoy=0.08,
            eps_growth_yoy=0.11,
            gross_margin=0.44,
            operating_margin=0.30,
            net_margin=0.25,
            debt_to_equity=1.4,
            current_ratio=1.1,
            beta=1.2,
            dividend_yield=0.005,
            week52_high=180.00,
            week52_low=120.00,
        )

    async def get_company_profile(self, symbol: str) -> CompanyProfile | None:
        self.calls["get_company_profile"] += 1
        key = symbol.upper()
        if key in self._profiles:
            return self._profiles[key]
        return CompanyProfile(symbol=key, name=f"{key} Inc.", exchange="NASDAQ")

    async def get_indices(self) -> list[MarketIndex]:
        self.calls["get_indices"] += 1
        if self._indices is not None:
            return list(self._indices)
        return [
            MarketIndex("SPX", "S&P 500", 6000.00, 30.00, 0.50),
            MarketIndex("IXIC", "NASDAQ", 21000.00, -42.00, -0.20),
            MarketIndex("DJI", "DOW 30", 44000.00, 88.00, 0.20),
            MarketIndex("RUT", "Russell 2000", 2300.00, 4.60, 0.20),
        ]

    async def get_indicators(self) -> list[MarketIndicator]:
        self.calls["get_indicators"] += 1
        if self._indicators is not None:
            return list(self._indicators)
        return [
            MarketIndicator("VIX", "Volatility Index", 16.0, status=volatility_status(16.0)),
            MarketIndicator("DXY", "Dollar Index", 104.0),
            MarketIndicator("TNX", "US 10Y Treasury", 4.2, unit="%"),
            MarketIndicator("USDKRW", "USD/KRW", 1400.0),
        ]

    async def get_commodities(self) -> list[Commodity]:
        self.calls["get_commodities"] += 1
        if self._commodities is not None:
            return list(self._commodities)
        return [
            Commodity("GC", "Gold", 2600.0),
            Commodity("CL", "Crude Oil (WTI)", 72.0),
            Commodity("BTC", "Bitcoin", 100000.0),
        ]
