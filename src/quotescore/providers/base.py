"""Abstract base class for market data providers."""

from __future__ import annotations

import asyncio
import logging
import os
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Any, Awaitable, Callable, TypeVar

import httpx
from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from quotescore.cache import TTLCache
from quotescore.errors import MarketDataError, MarketDataErrorCode
from quotescore.models.market import Commodity, MarketIndex, MarketIndicator
from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote
from quotescore.models.ticker import CompanyProfile, Ticker
from quotescore.quality import validate_quote
from quotescore.rate_limiter import SlidingWindowRateLimiter

logger = logging.getLogger(__name__)

T = TypeVar("T")
M = TypeVar("M", bound=BaseModel)


class VendorModel(BaseModel):
    """Base for vendor payload schemas.

    Unknown vendor fields are ignored and empty strings read as missing.
    """

    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    @field_validator("*", mode="before")
    @classmethod
    def blank_is_missing(cls, value: Any) -> Any:
        return None if value == "" else value


@dataclass(frozen=True)
class ProviderStatus:
    """Provider health snapshot for diagnostics.

    Attributes:
        name: Provider display name.
        available: Whether the provider is configured (has its API key).
        remaining_calls: Free slots in the current rate-limit window.
        last_error: Message of the most recent failure, if any.
    """

    name: str
    available: bool
    remaining_calls: int | None = None
    last_error: str | None = None


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def from_epoch(epoch: int | None) -> datetime:
    """UTC datetime for a vendor epoch in seconds; now when the vendor sent none.

    Raises:
        MarketDataError: the epoch is outside the platform's datetime range.
    """
    if not epoch:
        return utcnow()
    try:
        return datetime.fromtimestamp(epoch, tz=timezone.utc)
    except (ValueError, OverflowError, OSError) as exc:
        raise MarketDataError(
            f"Vendor timestamp out of range: {epoch}",
            code=MarketDataErrorCode.VALIDATION_FAILED,
        ) from exc


class BaseMarketDataProvider(ABC):
    """Abstract base for all market data providers.

    Subclasses must implement ``get_quote``. Every other operation defaults
    to an empty result; providers implement the endpoints they support and
    advertise them via ``capabilities()``.

    Public methods never raise for upstream problems. Internally the HTTP
    plumbing raises ``MarketDataError``; ``_cached`` catches it at the
    method boundary, logs it and returns the empty value.

    Args:
        api_key: Vendor API key. Falls back to the provider's env var.
        cache: Shared TTL cache. A private one is created when omitted.
        rate_limiter: Shared limiter. Defaults to the provider's budget.
        client: ``httpx.AsyncClient`` to issue requests with.
        timeout: Per-request timeout in seconds.
    """

    name: str = "base"
    display_name: str = "Base"
    base_url: str = ""
    api_key_param: str = "apikey"
    api_key_env: str | None = None

    quote_batch_size: int = 10
    quote_batch_delay: float = 0.1

    def __init__(
        self,
        api_key: str | None = None,
        *,
        cache: TTLCache | None = None,
        rate_limiter: SlidingWindowRateLimiter | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = 10.0,
    ) -> None:
        self.api_key = api_key or (os.getenv(self.api_key_env) if self.api_key_env else None)
        self.cache = cache if cache is not None else TTLCache()
        self.rate_limiter = rate_limiter or SlidingWindowRateLimiter.for_provider(self.name)
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None
        self.last_error: str | None = None

        if self.requires_api_key and not self.api_key:
            logger.warning(
                "%s API key not set (%s); all calls will return empty results",
                self.display_name, self.api_key_env,
            )

    # --- Stock data ---

    async def list_tickers(self) -> list[Ticker]:
        """List tradable US tickers."""
        return []

    @abstractmethod
    async def get_quote(self, symbol: str) -> Quote | None:
        """Get the current quote for a symbol, or None."""
        ...

    async def get_quotes(self, symbols: list[str]) -> list[Quote]:
        """Quotes for many symbols, in small batches with a delay between.

        Symbols without a quote are dropped; order is not guaranteed.
        """
        quotes: list[Quote] = []
        size = self.quote_batch_size
        for i in range(0, len(symbols), size):
            batch = symbols[i:i + size]
            results = await asyncio.gather(*(self.get_quote(s) for s in batch))
            quotes.extend(q for q in results if q is not None)
            if i + size < len(symbols):
                await asyncio.sleep(self.quote_batch_delay)
        return quotes

    async def get_metrics(self, symbol: str) -> Metrics | None:
        """Get fundamentals for scoring."""
        return None

    async def get_company_profile(self, symbol: str) -> CompanyProfile | None:
        """Get static company reference data."""
        return None

    # --- Market overview ---

    async def get_indices(self) -> list[MarketIndex]:
        return []

    async def get_indicators(self) -> list[MarketIndicator]:
        return []

    async def get_commodities(self) -> list[Commodity]:
        return []

    # --- Capabilities / health ---

    def capabilities(self) -> set[str]:
        """Return the set of supported features.

        Possible values: ``tickers``, ``quotes``, ``metrics``, ``profile``,
        ``indices``, ``indicators``, ``commodities``.
        """
        return {"quotes"}

    @property
    def requires_api_key(self) -> bool:
        return self.api_key_env is not None

    def status(self) -> ProviderStatus:
        return ProviderStatus(
            name=self.display_name,
            available=bool(self.api_key) or not self.requires_api_key,
            remaining_calls=self.rate_limiter.remaining,
            last_error=self.last_error,
        )

    # --- Lifecycle ---

    @property
    def client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=httpx.Timeout(self.timeout))
        return self._client

    async def aclose(self) -> None:
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "BaseMarketDataProvider":
        return self

    async def __aexit__(self, *exc: Any) -> None:
        await self.aclose()

    # ------------------------------------------------------------ internals

    def _key(self, key: str) -> str:
        """Namespace a cache key by provider."""
        return f"{self.name}:{key}"

    async def _cached(
        self,
        key: str,
        ttl: float,
        fetch: Callable[[], Awaitable[T]],
        *,
        op: str,
        empty: T,
    ) -> T:
        """Cache check, fetch on miss, store non-empty results.

        ``MarketDataError`` from ``fetch`` is logged and turned into
        ``empty``.
        """
        full_key = self._key(key)
        cached = self.cache.get(full_key)
        if cached is not None:
            return cached
        try:
            value = await fetch()
        except MarketDataError as exc:
            self._record_failure(op, exc)
            return empty
        if not value:
            return empty
        self.cache.set(full_key, value, ttl)
        return value

    async def _optional(self, op: str, fetch: Awaitable[T]) -> T | None:
        """Await one part of a composite fetch; a failed part becomes None."""
        try:
            return await fetch
        except MarketDataError as exc:
            self._record_failure(op, exc)
            return None

    def _record_failure(self, op: str, exc: MarketDataError) -> None:
        self.last_error = str(exc)
        if exc.code is MarketDataErrorCode.CONFIG_MISSING:
            logger.debug("%s %s skipped: %s", self.display_name, op, exc)
        else:
            logger.warning(
                "%s %s failed (%s): %s", self.display_name, op, exc.code.value, exc,
            )

    async def _get_json(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """Authenticated GET returning decoded JSON.

        Raises:
            MarketDataError: missing key, malformed URL, timeout, transport failure,
                non-2xx status, undecodable body or vendor error payload.
        """
        if self.requires_api_key and not self.api_key:
            raise MarketDataError(
                f"{self.display_name} API key not configured",
                code=MarketDataErrorCode.CONFIG_MISSING,
            )

        await self.rate_limiter.acquire()

        query = dict(params or {})
        if self.api_key:
            query[self.api_key_param] = self.api_key

        try:
            resp = await self.client.get(
                f"{self.base_url}{path}", params=query, timeout=self.timeout,
            )
        except httpx.InvalidURL as exc:
            raise MarketDataError(
                f"{self.display_name} rejected request URL for {path}: {exc}",
                code=MarketDataErrorCode.VALIDATION_FAILED,
            ) from exc
        except httpx.TimeoutException as exc:
            raise MarketDataError(
                f"{self.display_name} request to {path} timed out",
                code=MarketDataErrorCode.TIMEOUT,
                retryable=True,
            ) from exc
        except httpx.HTTPError as exc:
            raise MarketDataError(
                f"{self.display_name} request to {path} failed: {exc}",
                code=MarketDataErrorCode.PROVIDER_ERROR,
                retryable=True,
            ) from exc

        self._check_response(resp)
        try:
            data = resp.json()
        except ValueError as exc:
            raise MarketDataError(
                f"{self.display_name} returned non-JSON body for {path}",
                code=MarketDataErrorCode.VALIDATION_FAILED,
            ) from exc
        self._check_payload(data)
        return data

    def _check_response(self, resp: httpx.Response) -> None:
        if resp.status_code == 429:
            raise MarketDataError(
                f"{self.display_name} rate limited",
                code=MarketDataErrorCode.RATE_LIMITED,
                retryable=True,
            )
        if resp.status_code in (401, 403):
            raise MarketDataError(
                f"{self.display_name} authentication failed",
                code=MarketDataErrorCode.AUTH_FAILED,
            )
        if resp.status_code == 404:
            raise MarketDataError(
                f"Not found on {self.display_name}",
                code=MarketDataErrorCode.NOT_FOUND,
            )
        if resp.is_error:
            raise MarketDataError(
                f"{self.display_name} API error: {resp.status_code}",
                code=MarketDataErrorCode.PROVIDER_ERROR,
                retryable=resp.status_code >= 500,
            )

    def _check_payload(self, data: Any) -> None:
        """Hook for vendors that report errors inside a 200 response."""

    def _parse(self, schema: type[M], payload: Any) -> M:
        """Validate one vendor object; shape mismatches become errors."""
        try:
            return schema.model_validate(payload)
        except ValidationError as exc:
            raise MarketDataError(
                f"{self.display_name} payload did not match {schema.__name__}: "
                f"{exc.error_count()} errors",
                code=MarketDataErrorCode.VALIDATION_FAILED,
            ) from exc

    def _accept_quote(self, quote: Quote) -> Quote | None:
        result = validate_quote(quote)
        if result.passed:
            return quote
        msgs = "; ".join(f"{c.name}: {c.message}" for c in result.failed_checks)
        logger.warning("%s discarded quote for %s: %s", self.display_name, quote.symbol, msgs)
        return None


__all__ = [
    "BaseMarketDataProvider",
    "ProviderStatus",
    "VendorModel",
    "from_epoch",
    "utcnow",
]
