"""Market overview data models: indices, indicators, commodities."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime


@dataclass(frozen=True)
class MarketIndex:
    """Equity index level.

    Attributes:
        symbol: Display symbol (SPX, IXIC, DJI, RUT).
        name: Display name.
        price: Index level.
        change: Absolute change from previous close.
        change_percent: Percent change from previous close.
        previous_close: Previous close level.
        open: Session open level.
        high: Session high level.
        low: Session low level.
        timestamp: Quote time, if the vendor supplied one.
        approximate: True when derived from a proxy instrument.
        proxy: Proxy instrument symbol the level was derived from.
    """

    symbol: str
    name: str
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    previous_close: float | None = None
    open: float | None = None
    high: float | None = None
    low: float | None = None
    timestamp: datetime | None = None
    approximate: bool = False
    proxy: str | None = None


@dataclass(frozen=True)
class MarketIndicator:
    """Macro indicator (volatility, dollar index, treasury yield, FX).

    Attributes:
        symbol: Indicator symbol (VIX, DXY, TNX, USDKRW).
        name: Display name.
        value: Indicator value.
        change: Absolute change, when known.
        change_percent: Percent change, when known.
        unit: Display unit ("%" for yields).
        status: "low" / "normal" / "high" classification (volatility only).
        approximate: True when derived from a proxy instrument.
        proxy: Proxy instrument symbol the value was derived from.
    """

    symbol: str
    name: str
    value: float
    change: float | None = None
    change_percent: float | None = None
    unit: str | None = None
    status: str | None = None
    approximate: bool = False
    proxy: str | None = None


@dataclass(frozen=True)
class Commodity:
    """Commodity or crypto price.

    Attributes:
        symbol: Symbol (GC, CL, BTC).
        name: Display name.
        price: Price in ``currency``.
        change: Absolute change.
        change_percent: Percent change.
        currency: Quote currency.
        approximate: True when derived from a proxy instrument.
        proxy: Proxy instrument symbol the price was derived from.
    """

    symbol: str
    name: str
    price: float
    change: float = 0.0
    change_percent: float = 0.0
    currency: str = "USD"
    approximate: bool = False
    proxy: str | None = None


@dataclass(frozen=True)
class FearGreed:
    """Composite sentiment score derived from volatility."""

    value: int
    label: str


@dataclass(frozen=True)
class MarketData:
    """Full market overview returned by ``MarketDataManager.get_market_data``.

    Attributes:
        indices: Equity index levels.
        indicators: Macro indicators.
        commodities: Commodity and crypto prices.
        fear_greed: Volatility-derived sentiment.
        last_update: When this response was assembled (UTC).
        source: Name of the provider that was asked.
        connected: False when any section was filled from the default snapshot.
    """

    indices: list[MarketIndex] = field(default_factory=list)
    indicators: list[MarketIndicator] = field(default_factory=list)
    commodities: list[Commodity] = field(default_factory=list)
    fear_greed: FearGreed = field(default_factory=lambda: FearGreed(50, "Neutral"))
    last_update: datetime | None = None
    source: str = ""
    connected: bool = False
