"""Shared fixtures for quotescore tests."""

from __future__ import annotations

import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Callable

import httpx
import pytest

# Ensure src/ is on the path for editable-style imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "src"))

from quotescore.cache import TTLCache
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.providers.mock import MockProvider
from quotescore.rate_limiter import SlidingWindowRateLimiter


class FakeClock:
    """Manually advanced monotonic clock. ``sleep`` advances it."""

    def __init__(self, start: float = 1000.0) -> None:
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds

    async def sleep(self, seconds: float) -> None:
        self.sleeps.append(seconds)
        self.now += seconds


class FakeVendor:
    """Canned vendor API served through ``httpx.MockTransport``.

    Routes match on URL path suffix and, optionally, the ``symbol`` query
    parameter. A payload may be JSON data, an exception to raise, or a
    callable taking the request and returning an ``httpx.Response``.
    Unrouted requests get a 404.
    """

    def __init__(self) -> None:
        self.routes: list[tuple[str, str | None, int, Any]] = []
        self.requests: list[httpx.Request] = []

    def add(self, path: str, payload: Any, *, status: int = 200, symbol: str | None = None) -> None:
        self.routes.append((path, symbol, status, payload))

    def handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        symbol = request.url.params.get("symbol")
        # Symbol-specific routes win over generic ones.
        ordered = sorted(self.routes, key=lambda r: r[1] is None)
        for path, sym, status, payload in ordered:
            if not request.url.path.endswith(path):
                continue
            if sym is not None and sym != symbol:
                continue
            if isinstance(payload, Exception):
                raise payload
            if callable(payload):
                return payload(request)
            return httpx.Response(status, json=payload)
        return httpx.Response(404, json={"error": "not routed"})

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handle))

    def paths(self) -> list[str]:
        return [r.url.path for r in self.requests]


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def vendor() -> FakeVendor:
    return FakeVendor()


@pytest.fixture
def make_provider(vendor: FakeVendor) -> Callable[..., Any]:
    """Build an HTTP provider wired to the fake vendor with a roomy limiter."""

    def _make(cls, api_key: str | None = "test-key", **kwargs):
        kwargs.setdefault("cache", TTLCache())
        kwargs.setdefault("rate_limiter", SlidingWindowRateLimiter(1000, 1.0))
        provider = cls(api_key=api_key, client=vendor.client(), **kwargs)
        provider.quote_batch_delay = 0.0
        return provider

    return _make


@pytest.fixture
def mock_provider() -> MockProvider:
    return MockProvider()


@pytest.fixture
def sample_quote() -> Quote:
    return Quote(
        symbol="AAPL",
        price=150.00,
        change=1.50,
        change_percent=1.01,
        timestamp=datetime(2024, 1, 15, 15, 0, tzinfo=timezone.utc),
        open=148.75,
        high=151.20,
        low=148.10,
        previous_close=148.50,
        volume=1_000_000.0,
    )


@pytest.fixture
def favorable_metrics() -> Metrics:
    """Strong quality, growth, value and risk profile; everything else absent."""
    return Metrics(
        symbol="GOOD",
        roe=0.20,
        peg=1.0,
        revenue_growth_yoy=0.25,
        debt_to_equity=0.5,
        current_ratio=2.0,
        beta=1.0,
        fcf=1.0,
    )
