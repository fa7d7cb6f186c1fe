"""Market data provider registry."""

from __future__ import annotations

from quotescore.config import MarketDataProviderType
from quotescore.providers.base import BaseMarketDataProvider, ProviderStatus

# Lazy registry; adapter modules are imported on first use.
PROVIDER_CLASSES: dict[MarketDataProviderType, str] = {
    MarketDataProviderType.FINNHUB: "quotescore.providers.finnhub.FinnhubProvider",
    MarketDataProviderType.TWELVEDATA: "quotescore.providers.twelvedata.TwelveDataProvider",
    MarketDataProviderType.FMP: "quotescore.providers.fmp.FmpProvider",
    MarketDataProviderType.MOCK: "quotescore.providers.mock.MockProvider",
}


def create_provider(
    provider_type: MarketDataProviderType | str,
    **kwargs,
) -> BaseMarketDataProvider:
    """Instantiate a provider by type, forwarding kwargs to its constructor.

    Raises:
        ValueError: ``provider_type`` names no known provider.
    """
    import importlib

    if isinstance(provider_type, str):
        provider_type = MarketDataProviderType.parse(provider_type)
    dotted = PROVIDER_CLASSES[provider_type]
    module_path, cls_name = dotted.rsplit(".", 1)
    module = importlib.import_module(module_path)
    cls = getattr(module, cls_name)
    return cls(**kwargs)


__all__ = ["BaseMarketDataProvider", "PROVIDER_CLASSES", "ProviderStatus", "create_provider"]
