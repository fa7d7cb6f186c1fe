"""Volatility-derived market sentiment."""

from __future__ import annotations

from quotescore.defaults import DEFAULT_VIX
from quotescore.models.market import FearGreed, MarketIndicator

LOW_VOLATILITY = 20.0
HIGH_VOLATILITY = 30.0

# (minimum score, label), highest first
FEAR_GREED_LABELS: tuple[tuple[int, str], ...] = (
    (75, "Extreme Greed"),
    (55, "Greed"),
    (45, "Neutral"),
    (25, "Fear"),
    (0, "Extreme Fear"),
)


def volatility_status(vix: float) -> str:
    if vix < LOW_VOLATILITY:
        return "low"
    if vix > HIGH_VOLATILITY:
        return "high"
    return "normal"


def fear_greed_score(vix: float) -> int:
    """Piecewise-linear map from VIX to a 0-100 greed score.

    Lower volatility means more greed; the score never rises as
    ``vix`` rises.
    """
    if vix <= 12:
        raw = 90 + (12 - vix) * 5
    elif vix <= 18:
        raw = 60 + (18 - vix) * 5
    elif vix <= 25:
        raw = 30 + (25 - vix) * 4
    elif vix <= 35:
        raw = 10 + (35 - vix) * 2
    else:
        raw = max(0.0, 10 - (vix - 35))
    return max(0, min(100, round(raw)))


def fear_greed_label(value: int) -> str:
    for threshold, label in FEAR_GREED_LABELS:
        if value >= threshold:
            return label
    return FEAR_GREED_LABELS[-1][1]


def calculate_fear_greed(indicators: list[MarketIndicator]) -> FearGreed:
    """Fear & Greed from the VIX entry of ``indicators`` (20 when absent)."""
    vix = next((i.value for i in indicators if i.symbol == "VIX"), DEFAULT_VIX)
    value = fear_greed_score(vix)
    return FearGreed(value=value, label=fear_greed_label(value))
