"""Fundamental metrics data model."""

from __future__ import annotations

import re
from dataclasses import dataclass, fields
from typing import Any, Mapping


def _snake(name: str) -> str:
    # week52High -> week52_high, revenueGrowthYoy -> revenue_growth_yoy
    return re.sub(r"(?<=[a-z0-9])([A-Z])", r"_\1", name).lower()


@dataclass(frozen=True)
class Metrics:
    """Fundamentals for one symbol. Every numeric field is independently
    optional; ``None`` means the provider had no value, never zero.

    Ratios and growth rates are fractions (``0.2`` is 20%). Valuation
    multiples (pe, ps, pb, peg) and leverage/liquidity ratios are plain
    numbers. ``market_cap`` and ``fcf`` are in USD.
    """

    symbol: str
    price: float | None = None
    market_cap: float | None = None
    pe: float | None = None
    ps: float | None = None
    pb: float | None = None
    peg: float | None = None
    roe: float | None = None
    roic: float | None = None
    fcf: float | None = None
    fcf_margin: float | None = None
    revenue_growth_yoy: float | None = None
    eps_growth_yoy: float | None = None
    gross_margin: float | None = None
    operating_margin: float | None = None
    net_margin: float | None = None
    debt_to_equity: float | None = None
    current_ratio: float | None = None
    beta: float | None = None
    dividend_yield: float | None = None
    week52_high: float | None = None
    week52_low: float | None = None

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Metrics":
        """Build from a persisted row or payload.

        Accepts snake_case or camelCase keys; unknown keys are ignored.
        """
        known = {f.name for f in fields(cls)}
        values: dict[str, Any] = {}
        for key, val in data.items():
            name = key if key in known else _snake(key)
            if name in known:
                values[name] = val
        values.setdefault("symbol", "")
        return cls(**values)

    def populated(self) -> list[str]:
        """Names of numeric fields that carry a value."""
        return [
            f.name for f in fields(self)
            if f.name != "symbol" and getattr(self, f.name) is not None
        ]
