"""Tests for MockProvider."""

import asyncio

from quotescore.models.market import MarketIndex
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import Ticker
from quotescore.providers.mock import MockProvider


class TestMockDefaults:
    def test_name(self, mock_provider):
        assert mock_provider.name == "mock"
        assert mock_provider.display_name == "Mock"

    def test_quote(self, mock_provider):
        quote = asyncio.run(mock_provider.get_quote("aapl"))
        assert isinstance(quote, Quote)
        assert quote.symbol == "AAPL"
        assert quote.price == 150.0

    def test_quotes_keep_every_symbol(self, mock_provider):
        quotes = asyncio.run(mock_provider.get_quotes(["AAPL", "MSFT", "JPM"]))
        assert sorted(q.symbol for q in quotes) == ["AAPL", "JPM", "MSFT"]

    def test_metrics(self, mock_provider):
        metrics = asyncio.run(mock_provider.get_metrics("MSFT"))
        assert metrics.symbol == "MSFT"
        assert metrics.week52_high == 180.0
        assert metrics.roe == 0.28

    def test_market_sections(self, mock_provider):
        indices = asyncio.run(mock_provider.get_indices())
        indicators = asyncio.run(mock_provider.get_indicators())
        commodities = asyncio.run(mock_provider.get_commodities())
        assert [i.symbol for i in indices] == ["SPX", "IXIC", "DJI", "RUT"]
        assert [i.symbol for i in indicators] == ["VIX", "DXY", "TNX", "USDKRW"]
        assert [c.symbol for c in commodities] == ["GC", "CL", "BTC"]
        assert indicators[0].status == "low"

    def test_tickers(self, mock_provider):
        tickers = asyncio.run(mock_provider.list_tickers())
        assert all(isinstance(t, Ticker) for t in tickers)
        assert "AAPL" in {t.symbol for t in tickers}

    def test_capabilities(self, mock_provider):
        assert {"quotes", "metrics", "indices"} <= mock_provider.capabilities()

    def test_no_api_key_needed(self, mock_provider):
        status = mock_provider.status()
        assert status.available is True
        assert status.last_error is None


class TestMockPreload:
    def test_set_quote(self, mock_provider, sample_quote):
        mock_provider.set_quote("aapl", sample_quote)
        assert asyncio.run(mock_provider.get_quote("AAPL")) is sample_quote

    def test_set_quote_none(self, mock_provider):
        mock_provider.set_quote("GONE", None)
        assert asyncio.run(mock_provider.get_quote("GONE")) is None
        quotes = asyncio.run(mock_provider.get_quotes(["GONE", "AAPL"]))
        assert [q.symbol for q in quotes] == ["AAPL"]

    def test_set_metrics(self, mock_provider):
        mock_provider.set_metrics("X", Metrics(symbol="X", pe=9.0))
        assert asyncio.run(mock_provider.get_metrics("x")).pe == 9.0

    def test_empty_section(self, mock_provider):
        mock_provider.set_indices([])
        assert asyncio.run(mock_provider.get_indices()) == []

    def test_custom_section(self, mock_provider):
        mock_provider.set_indices([MarketIndex("SPX", "S&P 500", 1.0)])
        assert asyncio.run(mock_provider.get_indices())[0].price == 1.0

    def test_call_counter(self):
        provider = MockProvider()
        asyncio.run(provider.get_quote("A"))
        asyncio.run(provider.get_quote("B"))
        assert provider.calls["get_quote"] == 2
        assert provider.calls["get_metrics"] == 0
