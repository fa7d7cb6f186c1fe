"""Tests for data models."""

from datetime import datetime, timezone

import pytest

from quotescore.models.market import Commodity, MarketData, MarketIndex, MarketIndicator
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker


class TestQuote:
    def test_create(self, sample_quote):
        assert sample_quote.symbol == "AAPL"
        assert sample_quote.price == 150.0
        assert sample_quote.previous_close == 148.5

    def test_optional_fields_default_none(self):
        q = Quote(
            symbol="AAPL", price=100.0, change=0.0, change_percent=0.0,
            timestamp=datetime(2024, 1, 15, tzinfo=timezone.utc),
        )
        assert q.open is None
        assert q.volume is None

    def test_frozen(self, sample_quote):
        with pytest.raises(AttributeError):
            sample_quote.price = 999.0  # type: ignore[misc]


class TestMetrics:
    def test_all_optional(self):
        m = Metrics(symbol="X")
        assert m.pe is None
        assert m.populated() == []

    def test_populated(self, favorable_metrics):
        assert set(favorable_metrics.populated()) == {
            "roe", "peg", "revenue_growth_yoy", "debt_to_equity",
            "current_ratio", "beta", "fcf",
        }

    def test_from_dict_snake_case(self):
        m = Metrics.from_dict({"symbol": "AAPL", "pe": 28.5, "week52_high": 199.6})
        assert m.symbol == "AAPL"
        assert m.pe == 28.5
        assert m.week52_high == 199.6

    def test_from_dict_camel_case(self):
        m = Metrics.from_dict({
            "symbol": "AAPL",
            "marketCap": 3.0e12,
            "week52High": 199.6,
            "revenueGrowthYoy": 0.08,
            "debtToEquity": 1.5,
            "fcfMargin": 0.25,
        })
        assert m.market_cap == 3.0e12
        assert m.week52_high == 199.6
        assert m.revenue_growth_yoy == 0.08
        assert m.debt_to_equity == 1.5
        assert m.fcf_margin == 0.25

    def test_from_dict_ignores_unknown(self):
        m = Metrics.from_dict({"symbol": "AAPL", "updatedAt": "2024-01-15", "score": 70})
        assert m == Metrics(symbol="AAPL")

    def test_from_dict_without_symbol(self):
        assert Metrics.from_dict({"pe": 10.0}).symbol == ""


class TestTicker:
    def test_defaults(self):
        t = Ticker("AAPL", "Apple Inc.")
        assert t.exchange is None
        assert t.sector is None

    def test_profile(self):
        p = CompanyProfile("AAPL", "Apple Inc.", exchange="NASDAQ", employees=161000)
        assert p.employees == 161000
        assert p.logo is None


class TestMarketModels:
    def test_index_defaults(self):
        idx = MarketIndex("SPX", "S&P 500", 6000.0)
        assert idx.change == 0.0
        assert idx.approximate is False
        assert idx.proxy is None

    def test_indicator_optional_change(self):
        ind = MarketIndicator("TNX", "US 10Y Treasury", 4.2, unit="%")
        assert ind.change is None
        assert ind.status is None

    def test_commodity_currency(self):
        assert Commodity("GC", "Gold", 2600.0).currency == "USD"

    def test_market_data_defaults(self):
        md = MarketData()
        assert md.indices == []
        assert md.fear_greed.value == 50
        assert md.fear_greed.label == "Neutral"
        assert md.connected is False
