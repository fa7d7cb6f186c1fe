"""Ticker listing and company profile data models."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Ticker:
    """Listed symbol as returned by ``list_tickers``.

    Attributes:
        symbol: Ticker symbol.
        name: Company name.
        exchange: Listing exchange short name (NYSE, NASDAQ, AMEX).
        sector: Sector classification.
        industry: Industry classification.
    """

    symbol: str
    name: str
    exchange: str | None = None
    sector: str | None = None
    industry: str | None = None


@dataclass(frozen=True)
class CompanyProfile:
    """Static company reference data (cached for 24h).

    Attributes:
        symbol: Ticker symbol.
        name: Company name.
        exchange: Listing exchange.
        sector: Sector classification.
        industry: Industry classification.
        market_cap: Market capitalization in USD.
        employees: Full-time employee count.
        description: Business description.
        website: Company website.
        logo: Logo image URL.
        country: Country of domicile.
        ipo: IPO date as reported by the vendor (ISO string).
    """

    symbol: str
    name: str
    exchange: str | None = None
    sector: str | None = None
    industry: str | None = None
    market_cap: float | None = None
    employees: int | None = None
    description: str | None = None
    website: str | None = None
    logo: str | None = None
    country: str | None = None
    ipo: str | None = None
