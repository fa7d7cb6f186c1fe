"""Fallback market snapshot used when the active provider returns nothing.

Values are last-known-reasonable levels, not live data. Update them here;
nothing else in the package hardcodes market numbers.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from quotescore.models.market import Commodity, MarketIndex, MarketIndicator

DEFAULT_VIX = 20.0


@dataclass(frozen=True)
class DefaultSnapshot:
    indices: list[MarketIndex] = field(default_factory=list)
    indicators: list[MarketIndicator] = field(default_factory=list)
    commodities: list[Commodity] = field(default_factory=list)


def default_indices() -> list[MarketIndex]:
    return [
        MarketIndex("SPX", "S&P 500", 5998.74),
        MarketIndex("IXIC", "NASDAQ", 21234.56),
        MarketIndex("DJI", "DOW 30", 44642.15),
        MarketIndex("RUT", "Russell 2000", 2342.87),
    ]


def default_indicators() -> list[MarketIndicator]:
    return [
        MarketIndicator("VIX", "Volatility Index", 14.5, status="low"),
        MarketIndicator("DXY", "Dollar Index", 106.8, change=0.0),
        MarketIndicator("TNX", "US 10Y Treasury", 4.35, unit="%"),
        MarketIndicator("USDKRW", "USD/KRW", 1435.0, change=0.0),
    ]


def default_commodities() -> list[Commodity]:
    return [
        Commodity("GC", "Gold", 2650.0),
        Commodity("CL", "Crude Oil (WTI)", 70.5),
        Commodity("BTC", "Bitcoin", 101500.0),
    ]


def default_snapshot() -> DefaultSnapshot:
    """Fresh copy of the fallback snapshot."""
    return DefaultSnapshot(
        indices=default_indices(),
        indicators=default_indicators(),
        commodities=default_commodities(),
    )
