"""Provider and cache configuration."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class MarketDataProviderType(Enum):
    """Supported data provider backends."""

    FINNHUB = "finnhub"
    TWELVEDATA = "twelvedata"
    FMP = "fmp"
    MOCK = "mock"

    @classmethod
    def parse(cls, name: str) -> "MarketDataProviderType":
        """Resolve a provider from a config string (case/whitespace tolerant)."""
        cleaned = name.strip().lower().replace("_", "").replace("-", "")
        for member in cls:
            if member.value == cleaned:
                return member
        valid = ", ".join(m.value for m in cls)
        raise ValueError(f"Unknown provider '{name}'. Valid: {valid}")


# Env var holding each provider's API key. ``None`` means no key is needed.
PROVIDER_KEY_ENV: dict[MarketDataProviderType, str | None] = {
    MarketDataProviderType.FINNHUB: "FINNHUB_API_KEY",
    MarketDataProviderType.TWELVEDATA: "TWELVE_DATA_API_KEY",
    MarketDataProviderType.FMP: "FMP_API_KEY",
    MarketDataProviderType.MOCK: None,
}


@dataclass
class MarketDataConfig:
    """Configuration for MarketDataManager.

    Read once at service start; changing it afterwards has no effect on a
    manager that was already built.

    Attributes:
        provider: Provider serving market data, quotes and profiles.
        stock_provider: Provider serving ticker lists and metrics.
            ``None`` means the same as ``provider``.
        cache_backend: Cache type, "memory" or "none".
        request_timeout: Per-request HTTP timeout in seconds.
        finnhub_api_key: Finnhub API key.
        twelve_data_api_key: Twelve Data API key.
        fmp_api_key: Financial Modeling Prep API key.
    """

    provider: MarketDataProviderType = MarketDataProviderType.FINNHUB
    stock_provider: MarketDataProviderType | None = None
    cache_backend: str = "memory"
    request_timeout: float = 10.0

    finnhub_api_key: str | None = None
    twelve_data_api_key: str | None = None
    fmp_api_key: str | None = None

    def api_key_for(self, provider: MarketDataProviderType) -> str | None:
        return {
            MarketDataProviderType.FINNHUB: self.finnhub_api_key,
            MarketDataProviderType.TWELVEDATA: self.twelve_data_api_key,
            MarketDataProviderType.FMP: self.fmp_api_key,
        }.get(provider)

    @property
    def resolved_stock_provider(self) -> MarketDataProviderType:
        return self.stock_provider or self.provider
