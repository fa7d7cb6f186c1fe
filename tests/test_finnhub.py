"""Tests for FinnhubProvider against a canned vendor."""

import asyncio
import logging
from datetime import datetime, timezone

import httpx
import pytest

from quotescore.calibration import INDEX_CALIBRATIONS
from quotescore.providers.finnhub import FinnhubProvider
from quotescore.rate_limiter import SlidingWindowRateLimiter

AAPL_QUOTE = {
    "c": 150.0, "d": 1.5, "dp": 1.01, "h": 151.2, "l": 148.1,
    "o": 148.75, "pc": 148.5, "t": 1705330800,
}

AAPL_PROFILE = {
    "ticker": "AAPL",
    "name": "Apple Inc",
    "exchange": "NASDAQ NMS - GLOBAL MARKET",
    "finnhubIndustry": "Technology",
    "marketCapitalization": 2_900_000.0,
    "employeeTotal": 161000,
    "weburl": "https://www.apple.com/",
    "logo": "",
    "country": "US",
    "ipo": "1980-12-12",
}

AAPL_METRIC = {
    "metric": {
        "52WeekHigh": 199.62,
        "52WeekLow": 164.08,
        "peBasicExclExtraTTM": 29.5,
        "psTTM": 7.6,
        "pbQuarterly": 45.1,
        "roeTTM": 156.1,
        "roicTTM": 55.2,
        "revenueGrowthTTMYoy": -2.8,
        "epsGrowthTTMYoy": 1.4,
        "operatingMarginTTM": 29.8,
        "netProfitMarginTTM": 25.3,
        "currentRatioQuarterly": 0.99,
        "totalDebtToEquityQuarterly": 1.8,
        "beta": 1.29,
        "dividendYieldIndicatedAnnual": 0.5,
        "freeCashFlowTTM": 9.9e10,
        "someUnknownField": "ignored",
    },
    "series": {},
}


@pytest.fixture
def no_env_key(monkeypatch):
    monkeypatch.delenv("FINNHUB_API_KEY", raising=False)


@pytest.fixture
def finnhub(make_provider):
    return make_provider(FinnhubProvider)


def _aapl_routes(vendor):
    vendor.add("/quote", AAPL_QUOTE, symbol="AAPL")
    vendor.add("/stock/profile2", AAPL_PROFILE, symbol="AAPL")
    vendor.add("/stock/metric", AAPL_METRIC, symbol="AAPL")


class TestQuote:
    def test_maps_fields(self, finnhub, vendor):
        _aapl_routes(vendor)
        quote = asyncio.run(finnhub.get_quote("aapl"))
        assert quote.symbol == "AAPL"
        assert quote.price == 150.0
        assert quote.change == 1.5
        assert quote.change_percent == 1.01
        assert quote.high == 151.2
        assert quote.previous_close == 148.5
        assert quote.volume is None
        assert quote.timestamp == datetime(2024, 1, 15, 15, 0, tzinfo=timezone.utc)

    def test_sends_token(self, finnhub, vendor):
        _aapl_routes(vendor)
        asyncio.run(finnhub.get_quote("AAPL"))
        params = vendor.requests[0].url.params
        assert params["token"] == "test-key"
        assert params["symbol"] == "AAPL"

    def test_cached(self, finnhub, vendor):
        _aapl_routes(vendor)

        async def run():
            await finnhub.get_quote("AAPL")
            return await finnhub.get_quote("AAPL")

        assert asyncio.run(run()).price == 150.0
        assert len(vendor.requests) == 1
        assert "finnhub:stock:quote:AAPL" in finnhub.cache.stats()["keys"]

    def test_unknown_symbol_not_cached(self, finnhub, vendor):
        vendor.add("/quote", {"c": 0, "d": None, "dp": None, "h": 0, "l": 0, "o": 0, "pc": 0, "t": 0})

        async def run():
            first = await finnhub.get_quote("NOPE")
            second = await finnhub.get_quote("NOPE")
            return first, second

        assert asyncio.run(run()) == (None, None)
        assert len(vendor.requests) == 2
        assert "No Finnhub quote for NOPE" in finnhub.last_error

    def test_rate_limited(self, finnhub, vendor):
        vendor.add("/quote", {"error": "API limit reached"}, status=429)
        assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert finnhub.last_error == "Finnhub rate limited"

    def test_auth_failed(self, finnhub, vendor, caplog):
        vendor.add("/quote", {"error": "Invalid API key"}, status=401)
        with caplog.at_level(logging.WARNING, logger="quotescore.providers.base"):
            assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert "auth_failed" in caplog.text

    def test_error_payload_with_200(self, finnhub, vendor):
        vendor.add("/quote", {"error": "Invalid API key."})
        assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert finnhub.last_error == "Finnhub API error: Invalid API key."

    def test_timestamp_out_of_range(self, finnhub, vendor, caplog):
        # Microseconds where seconds are expected.
        vendor.add("/quote", dict(AAPL_QUOTE, t=1705330800000000))
        with caplog.at_level(logging.WARNING, logger="quotescore.providers.base"):
            assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert "timestamp out of range: 1705330800000000" in finnhub.last_error
        assert "validation_failed" in caplog.text

    def test_timeout(self, finnhub, vendor):
        vendor.add("/quote", httpx.ReadTimeout("slow"))
        assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert "timed out" in finnhub.last_error

    def test_server_error(self, finnhub, vendor):
        vendor.add("/quote", {"error": "oops"}, status=502)
        assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert finnhub.last_error == "Finnhub API error: 502"

    def test_non_json_body(self, finnhub, vendor):
        vendor.add("/quote", lambda request: httpx.Response(200, text="<html>busy</html>"))
        assert asyncio.run(finnhub.get_quote("AAPL")) is None
        assert "non-JSON" in finnhub.last_error

    def test_invalid_quote_discarded(self, finnhub, vendor):
        vendor.add("/quote", dict(AAPL_QUOTE, h=100.0, l=200.0))
        assert asyncio.run(finnhub.get_quote("AAPL")) is None

    def test_quotes_batch(self, finnhub, vendor):
        vendor.add("/quote", AAPL_QUOTE, symbol="AAPL")
        vendor.add("/quote", dict(AAPL_QUOTE, c=400.0), symbol="MSFT")
        vendor.add("/quote", {"c": 0}, symbol="NOPE")
        quotes = asyncio.run(finnhub.get_quotes(["AAPL", "NOPE", "MSFT"]))
        assert sorted(q.symbol for q in quotes) == ["AAPL", "MSFT"]


class TestMissingKey:
    def test_returns_empty_without_requests(self, make_provider, vendor, no_env_key):
        provider = make_provider(FinnhubProvider, api_key=None)

        async def run():
            return (
                await provider.get_quote("AAPL"),
                await provider.get_metrics("AAPL"),
                await provider.get_indices(),
            )

        assert asyncio.run(run()) == (None, None, [])
        assert vendor.requests == []
        assert provider.status().available is False

    def test_warns_at_construction(self, make_provider, no_env_key, caplog):
        with caplog.at_level(logging.WARNING, logger="quotescore.providers.base"):
            make_provider(FinnhubProvider, api_key=None)
        assert "Finnhub API key not set" in caplog.text

    def test_env_fallback(self, make_provider, monkeypatch):
        monkeypatch.setenv("FINNHUB_API_KEY", "from-env")
        provider = make_provider(FinnhubProvider, api_key=None)
        assert provider.api_key == "from-env"


class TestMetrics:
    def test_maps_and_converts(self, finnhub, vendor):
        _aapl_routes(vendor)
        m = asyncio.run(finnhub.get_metrics("AAPL"))
        assert m.symbol == "AAPL"
        assert m.price == 150.0
        assert m.market_cap == pytest.approx(2.9e12)
        assert m.pe == 29.5
        assert m.roe == pytest.approx(1.561)
        assert m.revenue_growth_yoy == pytest.approx(-0.028)
        assert m.operating_margin == pytest.approx(0.298)
        assert m.debt_to_equity == 1.8
        assert m.dividend_yield == pytest.approx(0.005)
        assert m.week52_high == 199.62
        assert m.fcf == 9.9e10
        assert m.peg is None

    def test_partial_without_metric_endpoint(self, finnhub, vendor):
        vendor.add("/quote", AAPL_QUOTE, symbol="AAPL")
        vendor.add("/stock/profile2", AAPL_PROFILE, symbol="AAPL")
        m = asyncio.run(finnhub.get_metrics("AAPL"))
        assert m.price == 150.0
        assert m.market_cap == pytest.approx(2.9e12)
        assert m.pe is None
        assert m.week52_high is None

    def test_no_quote_no_metrics(self, finnhub, vendor):
        vendor.add("/stock/metric", AAPL_METRIC, symbol="AAPL")
        assert asyncio.run(finnhub.get_metrics("AAPL")) is None

    def test_cached_for_hour(self, finnhub, vendor):
        _aapl_routes(vendor)

        async def run():
            await finnhub.get_metrics("AAPL")
            await finnhub.get_metrics("AAPL")

        asyncio.run(run())
        assert len(vendor.requests) == 3


class TestProfile:
    def test_maps_fields(self, finnhub, vendor):
        _aapl_routes(vendor)
        p = asyncio.run(finnhub.get_company_profile("AAPL"))
        assert p.name == "Apple Inc"
        assert p.sector == "Technology"
        assert p.employees == 161000
        assert p.logo is None
        assert p.ipo == "1980-12-12"

    def test_empty_profile(self, finnhub, vendor):
        vendor.add("/stock/profile2", {})
        assert asyncio.run(finnhub.get_company_profile("ZZZZ")) is None


class TestMarketOverview:
    def test_indices_from_etf_proxies(self, finnhub, vendor):
        vendor.add("/quote", {"c": 600.0, "d": 6.0, "dp": 1.0, "pc": 594.0, "t": 1705330800})
        indices = asyncio.run(finnhub.get_indices())
        assert [i.symbol for i in indices] == ["SPX", "IXIC", "DJI", "RUT"]
        spx = indices[0]
        assert spx.price == INDEX_CALIBRATIONS[0].convert(600.0)
        assert spx.approximate is True
        assert spx.proxy == "SPY"
        assert sorted(r.url.params["symbol"] for r in vendor.requests) == ["DIA", "IWM", "QQQ", "SPY"]

    def test_failed_proxy_skipped(self, finnhub, vendor):
        vendor.add("/quote", {"error": "boom"}, status=500, symbol="QQQ")
        vendor.add("/quote", {"c": 600.0, "d": 6.0, "dp": 1.0, "pc": 594.0})
        indices = asyncio.run(finnhub.get_indices())
        assert [i.symbol for i in indices] == ["SPX", "DJI", "RUT"]

    def test_indicators(self, finnhub, vendor):
        vendor.add("/quote", {"c": 30.0, "d": 1.5, "dp": 5.0}, symbol="UVXY")
        vendor.add("/quote", {"c": 27.0, "d": 0.1, "dp": 0.4}, symbol="UUP")
        vendor.add("/quote", {"c": 90.0, "d": -1.0, "dp": -1.1}, symbol="TLT")
        indicators = asyncio.run(finnhub.get_indicators())
        by_symbol = {i.symbol: i for i in indicators}
        assert set(by_symbol) == {"VIX", "DXY", "TNX"}
        assert by_symbol["VIX"].value == pytest.approx(20.0)
        assert by_symbol["VIX"].status == "normal"
        assert by_symbol["DXY"].value == pytest.approx(108.0)
        assert by_symbol["TNX"].value == pytest.approx(4.5)
        assert by_symbol["TNX"].unit == "%"

    def test_commodities_with_bitcoin(self, finnhub, vendor):
        vendor.add("/quote", {"c": 240.0, "d": 2.4, "dp": 1.0}, symbol="GLD")
        vendor.add("/quote", {"c": 72.0, "d": -0.5, "dp": -0.7}, symbol="USO")
        vendor.add("/crypto/candle", {"s": "ok", "c": [101000.0], "o": [100000.0]})
        commodities = asyncio.run(finnhub.get_commodities())
        by_symbol = {c.symbol: c for c in commodities}
        assert by_symbol["GC"].price == pytest.approx(2400.0)
        assert by_symbol["CL"].price == pytest.approx(72.0)
        btc = by_symbol["BTC"]
        assert btc.price == 101000.0
        assert btc.change == 1000.0
        assert btc.change_percent == 1.0
        assert btc.approximate is False

    def test_no_bitcoin_candle(self, finnhub, vendor):
        vendor.add("/quote", {"c": 240.0}, symbol="GLD")
        vendor.add("/quote", {"c": 72.0}, symbol="USO")
        vendor.add("/crypto/candle", {"s": "no_data"})
        commodities = asyncio.run(finnhub.get_commodities())
        assert [c.symbol for c in commodities] == ["GC", "CL"]

    def test_empty_sections_not_cached(self, finnhub, vendor):
        async def run():
            await finnhub.get_indices()
            await finnhub.get_indices()

        asyncio.run(run())
        assert "finnhub:market:indices" not in finnhub.cache.stats()["keys"]
        assert len(vendor.requests) == 8

    def test_section_cached(self, finnhub, vendor):
        vendor.add("/quote", {"c": 600.0})

        async def run():
            await finnhub.get_indices()
            await finnhub.get_indices()

        asyncio.run(run())
        assert len(vendor.requests) == 4
        assert "finnhub:market:indices" in finnhub.cache.stats()["keys"]


class TestTickersAndLimits:
    def test_bundled_tickers(self, finnhub, vendor):
        tickers = asyncio.run(finnhub.list_tickers())
        assert len(tickers) > 90
        assert tickers[0].symbol == "AAPL"
        assert vendor.requests == []

    def test_rate_limiter_paces_requests(self, make_provider, vendor, clock):
        limiter = SlidingWindowRateLimiter(1, 1.0, clock=clock, sleep=clock.sleep)
        provider = make_provider(FinnhubProvider, rate_limiter=limiter)
        vendor.add("/quote", AAPL_QUOTE)

        async def run():
            await provider.get_quote("AAPL")
            await provider.get_quote("MSFT")

        asyncio.run(run())
        assert clock.sleeps == [pytest.approx(1.0)]
        assert len(vendor.requests) == 2

    def test_status_reports_last_error(self, finnhub, vendor):
        vendor.add("/quote", {}, status=429)
        asyncio.run(finnhub.get_quote("AAPL"))
        status = finnhub.status()
        assert status.name == "Finnhub"
        assert status.available is True
        assert status.last_error == "Finnhub rate limited"
        assert status.remaining_calls == 999

    def test_capabilities(self, finnhub):
        assert finnhub.capabilities() == {
            "tickers", "quotes", "metrics", "profile",
            "indices", "indicators", "commodities",
        }
