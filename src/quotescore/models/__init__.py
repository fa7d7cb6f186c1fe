"""Shared data models."""

from quotescore.models.market import (
    Commodity,
    FearGreed,
    MarketData,
    MarketIndex,
    MarketIndicator,
)
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker

__all__ = [
    "Quote",
    "Metrics",
    "Ticker",
    "CompanyProfile",
    "MarketIndex",
    "MarketIndicator",
    "Commodity",
    "FearGreed",
    "MarketData",
]
