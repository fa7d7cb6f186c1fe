"""Proxy-instrument calibration for indices, indicators and commodities.

Free-tier vendors do not expose index levels, VIX, DXY, treasury yields or
spot commodities directly. We approximate them from tradable ETFs with a
fixed linear mapping::

    target = proxy_price * scale + offset

The constants below were derived from one reference close and drift as
fund expense ratios, leverage decay and roll yield accumulate. Every value
produced here is flagged ``approximate=True`` downstream.

Recalibration procedure:
    1. Pick one session close and record the real target level and the
       proxy ETF close for that same session.
    2. Compute ``calibrate(target_level, proxy_close)`` for a pure ratio.
    3. Replace the ``scale`` of the matching entry and update
       ``REFERENCE_NOTE``.
Offset-based entries (DXY, TNX) are heuristic fits, not ratios; refit them
against at least two reference points before changing them.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime

from quotescore.models.market import Commodity, MarketIndex, MarketIndicator
from quotescore.sentiment import volatility_status

logger = logging.getLogger(__name__)

REFERENCE_NOTE = (
    "Index ratios: single reference close (SPX 6827.41 / SPY 681.76, "
    "IXIC 23195.17 / QQQ 613.62, DJI 43856 / DIA 485.40, RUT 2361 / IWM 253.85)."
)


@dataclass(frozen=True)
class ProxyCalibration:
    """Linear mapping from a proxy ETF price to a target instrument.

    Attributes:
        target: Display symbol of the approximated instrument.
        name: Display name.
        proxy: Tradable proxy symbol actually quoted.
        scale: Multiplier applied to the proxy price.
        offset: Constant added after scaling.
        unit: Display unit of the target, if any.
    """

    target: str
    name: str
    proxy: str
    scale: float
    offset: float = 0.0
    unit: str | None = None

    def convert(self, proxy_price: float) -> float:
        value = round(proxy_price * self.scale + self.offset, 2)
        logger.debug(
            "Approximating %s from %s: %.4f -> %.2f",
            self.target, self.proxy, proxy_price, value,
        )
        return value

    def convert_change(self, proxy_change: float | None) -> float:
        # Offsets cancel in a difference; only the scale applies.
        if proxy_change is None:
            return 0.0
        return round(proxy_change * self.scale, 2)


def calibrate(target_level: float, proxy_price: float) -> float:
    """Scale factor mapping ``proxy_price`` onto ``target_level``."""
    if proxy_price == 0:
        raise ValueError("proxy_price must be non-zero")
    return target_level / proxy_price


INDEX_CALIBRATIONS: tuple[ProxyCalibration, ...] = (
    ProxyCalibration("SPX", "S&P 500", "SPY", calibrate(6827.41, 681.76)),
    ProxyCalibration("IXIC", "NASDAQ", "QQQ", calibrate(23195.17, 613.62)),
    ProxyCalibration("DJI", "DOW 30", "DIA", calibrate(43856.0, 485.40)),
    ProxyCalibration("RUT", "Russell 2000", "IWM", calibrate(2361.0, 253.85)),
)

# UVXY tracks 1.5x short-term VIX futures, not spot VIX.
VIX = ProxyCalibration("VIX", "Volatility Index", "UVXY", 1 / 1.5)
# Heuristic fit (UUP - 25) * 4 + 100, which reduces to UUP * 4.
DXY = ProxyCalibration("DXY", "Dollar Index", "UUP", 4.0)
# TLT moves inversely to long yields: 4.0 + (100 - TLT) * 0.05.
TNX = ProxyCalibration("TNX", "US 10Y Treasury", "TLT", -0.05, offset=9.0, unit="%")

INDICATOR_CALIBRATIONS: tuple[ProxyCalibration, ...] = (VIX, DXY, TNX)

# GLD holds roughly 1/10 oz of gold per share.
GOLD = ProxyCalibration("GC", "Gold", "GLD", 10.0)
# USO does not track spot WTI; direction only.
OIL = ProxyCalibration("CL", "Crude Oil (WTI)", "USO", 1.0)

COMMODITY_CALIBRATIONS: tuple[ProxyCalibration, ...] = (GOLD, OIL)


def all_calibrations() -> tuple[ProxyCalibration, ...]:
    return INDEX_CALIBRATIONS + INDICATOR_CALIBRATIONS + COMMODITY_CALIBRATIONS


def by_proxy(proxy: str) -> ProxyCalibration | None:
    for cal in all_calibrations():
        if cal.proxy == proxy:
            return cal
    return None


def _change_percent(cal: ProxyCalibration, proxy_percent: float | None) -> float | None:
    # A pure positive ratio preserves percent moves; offsets and inverse fits do not.
    if proxy_percent is None or cal.offset or cal.scale <= 0:
        return None
    return round(proxy_percent, 2)


def to_index(
    cal: ProxyCalibration,
    price: float,
    change: float | None = None,
    change_percent: float | None = None,
    previous_close: float | None = None,
    timestamp: datetime | None = None,
) -> MarketIndex:
    return MarketIndex(
        symbol=cal.target,
        name=cal.name,
        price=cal.convert(price),
        change=cal.convert_change(change),
        change_percent=_change_percent(cal, change_percent) or 0.0,
        previous_close=cal.convert(previous_close) if previous_close else None,
        timestamp=timestamp,
        approximate=True,
        proxy=cal.proxy,
    )


def to_indicator(
    cal: ProxyCalibration,
    price: float,
    change: float | None = None,
    change_percent: float | None = None,
) -> MarketIndicator:
    value = cal.convert(price)
    return MarketIndicator(
        symbol=cal.target,
        name=cal.name,
        value=value,
        change=cal.convert_change(change),
        change_percent=_change_percent(cal, change_percent),
        unit=cal.unit,
        status=volatility_status(value) if cal is VIX else None,
        approximate=True,
        proxy=cal.proxy,
    )


def to_commodity(
    cal: ProxyCalibration,
    price: float,
    change: float | None = None,
    change_percent: float | None = None,
) -> Commodity:
    return Commodity(
        symbol=cal.target,
        name=cal.name,
        price=cal.convert(price),
        change=cal.convert_change(change),
        change_percent=_change_percent(cal, change_percent) or 0.0,
        approximate=True,
        proxy=cal.proxy,
    )
