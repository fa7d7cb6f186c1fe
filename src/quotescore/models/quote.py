"""Quote (last price + daily range) data model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Quote:
    """Snapshot quote for a single symbol.

    Re-fetched on every refresh cycle; nothing keeps history.

    Attributes:
        symbol: Ticker symbol.
        price: Current (last) price.
        change: Absolute change from previous close.
        change_percent: Percent change from previous close.
        open: Session open.
        high: Session high.
        low: Session low.
        previous_close: Previous session close.
        volume: Session volume. Several vendors omit it.
        timestamp: When the quote was produced (UTC).
    """

    symbol: str
    price: float
    change: float
    change_percent: float
    timestamp: datetime
    open: float | None = None
    high: float | None = None
    low: float | None = None
    previous_close: float | None = None
    volume: float | None = None
