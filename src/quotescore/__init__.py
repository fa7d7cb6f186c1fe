"""quotescore: multi-provider quotes, fundamentals and scoring for US equities.

Finnhub, Twelve Data and FMP behind one async interface, with a shared TTL
cache, per-provider rate limiting, a default-snapshot fallback for the
market overview and a fundamentals score calculator.

Quick start::

    from quotescore import create_manager_from_env
    async with create_manager_from_env() as mgr:
        overview = await mgr.get_market_data()
        result = await mgr.score_symbol("AAPL")
"""

from __future__ import annotations

import os

from quotescore.cache import CacheKeys, CacheTTL, NoCache, TTLCache
from quotescore.config import MarketDataConfig, MarketDataProviderType
from quotescore.defaults import DefaultSnapshot, default_snapshot
from quotescore.errors import MarketDataError, MarketDataErrorCode
from quotescore.manager import MarketDataManager
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
from quotescore.providers import create_provider
from quotescore.providers.base import BaseMarketDataProvider, ProviderStatus
from quotescore.rate_limiter import SlidingWindowRateLimiter
from quotescore.refresh import RefreshReport, ScoredMetrics, refresh_metrics
from quotescore.scoring import (
    AlertCriteria,
    ScoreResult,
    drawdown,
    matches_alert_criteria,
    normalize,
    score,
    screen,
)
from quotescore.sentiment import calculate_fear_greed, volatility_status

__version__ = "0.1.0"

__all__ = [
    # Manager
    "MarketDataManager",
    "create_manager_from_env",
    # Providers
    "BaseMarketDataProvider",
    "ProviderStatus",
    "create_provider",
    # Infrastructure
    "TTLCache",
    "NoCache",
    "CacheKeys",
    "CacheTTL",
    "SlidingWindowRateLimiter",
    # Config
    "MarketDataConfig",
    "MarketDataProviderType",
    # Errors
    "MarketDataError",
    "MarketDataErrorCode",
    # Models
    "Quote",
    "Metrics",
    "Ticker",
    "CompanyProfile",
    "MarketIndex",
    "MarketIndicator",
    "Commodity",
    "FearGreed",
    "MarketData",
    # Fallback
    "DefaultSnapshot",
    "default_snapshot",
    # Scoring
    "ScoreResult",
    "AlertCriteria",
    "normalize",
    "score",
    "drawdown",
    "matches_alert_criteria",
    "screen",
    "calculate_fear_greed",
    "volatility_status",
    # Batch refresh
    "RefreshReport",
    "ScoredMetrics",
    "refresh_metrics",
]


def create_manager_from_env() -> MarketDataManager:
    """Zero-config factory: reads providers and API keys from env vars.

    Environment variables:
        MARKET_DATA_PROVIDER: Market provider, finnhub / twelvedata / fmp / mock
            (default: "finnhub").
        STOCK_PROVIDER: Provider for ticker lists and metrics
            (default: same as MARKET_DATA_PROVIDER).
        MARKET_DATA_CACHE: Cache backend, "memory" or "none" (default: "memory").
        MARKET_DATA_TIMEOUT: Request timeout in seconds (default: 10).
        FINNHUB_API_KEY: Finnhub API key.
        TWELVE_DATA_API_KEY: Twelve Data API key.
        FMP_API_KEY: Financial Modeling Prep API key.

    Raises:
        ValueError: a provider variable names an unknown provider.
    """
    stock_provider = os.getenv("STOCK_PROVIDER")

    config = MarketDataConfig(
        provider=MarketDataProviderType.parse(os.getenv("MARKET_DATA_PROVIDER", "finnhub")),
        stock_provider=MarketDataProviderType.parse(stock_provider) if stock_provider else None,
        cache_backend=os.getenv("MARKET_DATA_CACHE", "memory"),
        request_timeout=float(os.getenv("MARKET_DATA_TIMEOUT", "10")),
        finnhub_api_key=os.getenv("FINNHUB_API_KEY"),
        twelve_data_api_key=os.getenv("TWELVE_DATA_API_KEY"),
        fmp_api_key=os.getenv("FMP_API_KEY"),
    )

    return MarketDataManager(config)
