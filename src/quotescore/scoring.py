"""Fundamental scoring: quality, growth, value and risk sub-scores.

Every component is normalized into [0, 100] against a fixed "reasonable
range". A component whose metric is missing scores a neutral 50 and still
counts toward its sub-score's mean, so tickers with sparse data stay
comparable with fully populated ones.

The total is a fixed weighted sum (see ``WEIGHTS``). An alternative
40/30/20/10 weighting exists in older product material; it is not used.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any, Iterable, Mapping

from quotescore.models.metrics import Metrics

NEUTRAL = 50.0

WEIGHTS: dict[str, float] = {
    "quality": 0.30,
    "growth": 0.25,
    "value": 0.25,
    "risk": 0.20,
}

PEG_WEIGHT = 1.5
MAX_FACTORS = 3
NO_FACTORS = "Insufficient data"


@dataclass(frozen=True)
class ScoreResult:
    """Four sub-scores and their weighted total, all in [0, 100].

    Attributes:
        quality: Profitability and cash generation.
        growth: Revenue and EPS growth.
        value: Valuation multiples (lower multiple scores higher).
        risk: Leverage, liquidity and beta. Higher means safer.
        total: Weighted sum of the four sub-scores.
        explanation: Up to three notable factors, comma separated, one per
            area first (quality, growth, value, risk).
    """

    quality: float
    growth: float
    value: float
    risk: float
    total: float
    explanation: str


def normalize(
    value: float | None,
    low: float,
    high: float,
    inverse: bool = False,
) -> float:
    """Map ``value`` onto [0, 100] over the range [low, high].

    Values outside the range are clamped. ``inverse`` flips the scale for
    metrics where lower is better. Missing or NaN values score 50.
    """
    if value is None or math.isnan(value):
        return NEUTRAL
    pct = (value - low) / (high - low) * 100
    pct = max(0.0, min(100.0, pct))
    return 100 - pct if inverse else pct


class _SubScore:
    """Weighted running mean plus the factor phrases it produced."""

    def __init__(self) -> None:
        self.total = 0.0
        self.weight = 0.0
        self.factors: list[str] = []

    def add(self, score: float, weight: float = 1.0) -> None:
        self.total += score * weight
        self.weight += weight

    @property
    def score(self) -> float:
        return self.total / self.weight if self.weight else NEUTRAL


def _pct(fraction: float | None) -> float | None:
    return None if fraction is None else fraction * 100


def _multiple(value: float | None) -> float | None:
    # A negative or zero multiple (loss-making company) carries no valuation signal.
    if value is None or value <= 0:
        return None
    return value


def _quality(m: Metrics) -> _SubScore:
    sub = _SubScore()

    roe = _pct(m.roe)
    sub.add(normalize(roe, 0, 30))
    if roe is not None and roe >= 15:
        sub.factors.append(f"ROE {roe:.1f}% strong")

    roic = _pct(m.roic)
    sub.add(normalize(roic, 0, 25))
    if roic is not None and roic >= 12:
        sub.factors.append(f"ROIC {roic:.1f}% solid")

    om = _pct(m.operating_margin)
    sub.add(normalize(om, 0, 40))
    if om is not None and om >= 20:
        sub.factors.append(f"Operating margin {om:.1f}%")

    nm = _pct(m.net_margin)
    sub.add(normalize(nm, 0, 30))
    if nm is not None and nm >= 15:
        sub.factors.append(f"Net margin {nm:.1f}%")

    if m.fcf is None:
        sub.add(NEUTRAL)
    elif m.fcf > 0:
        sub.add(80.0)
        sub.factors.append("Positive free cash flow")
    else:
        sub.add(30.0)

    return sub


def _growth(m: Metrics) -> _SubScore:
    sub = _SubScore()

    rev = _pct(m.revenue_growth_yoy)
    sub.add(normalize(rev, -10, 40))
    if rev is not None and rev >= 10:
        sub.factors.append(f"Revenue growth {rev:.1f}%")

    eps = _pct(m.eps_growth_yoy)
    sub.add(normalize(eps, -20, 50))
    if eps is not None and eps >= 15:
        sub.factors.append(f"EPS growth {eps:.1f}%")

    return sub


def _value(m: Metrics) -> _SubScore:
    sub = _SubScore()

    pe = _multiple(m.pe)
    sub.add(normalize(pe, 5, 50, inverse=True))
    if pe is not None:
        if pe <= 15:
            sub.factors.append(f"P/E {pe:.1f} undervalued")
        elif pe <= 25:
            sub.factors.append(f"P/E {pe:.1f} fair")

    pb = _multiple(m.pb)
    sub.add(normalize(pb, 0.5, 10, inverse=True))
    if pb is not None and pb <= 3:
        sub.factors.append(f"P/B {pb:.1f}")

    ps = _multiple(m.ps)
    sub.add(normalize(ps, 0.5, 15, inverse=True))
    if ps is not None and ps <= 5:
        sub.factors.append(f"P/S {ps:.1f}")

    peg = _multiple(m.peg)
    sub.add(normalize(peg, 0.5, 3, inverse=True), PEG_WEIGHT)
    if peg is not None:
        if peg <= 1:
            sub.factors.append(f"PEG {peg:.2f} undervalued")
        elif peg <= 1.5:
            sub.factors.append(f"PEG {peg:.2f} fair")

    return sub


def _risk(m: Metrics) -> _SubScore:
    sub = _SubScore()

    de = m.debt_to_equity
    sub.add(normalize(de, 0, 3, inverse=True))
    if de is not None and de <= 1:
        sub.factors.append(f"D/E {de:.2f} stable")

    cr = m.current_ratio
    sub.add(normalize(cr, 0.5, 3))
    if cr is not None and cr >= 1.5:
        sub.factors.append(f"Current ratio {cr:.2f}")

    beta = m.beta
    sub.add(normalize(None if beta is None else abs(beta - 1), 0, 1.5, inverse=True))
    if beta is not None and 0.8 <= beta <= 1.2:
        sub.factors.append(f"Beta {beta:.2f} stable")

    return sub


def score(metrics: Metrics | Mapping[str, Any]) -> ScoreResult:
    """Score one symbol's fundamentals.

    Args:
        metrics: A ``Metrics`` record, or a mapping with snake_case or
            camelCase metric names.

    Returns:
        ScoreResult with every score rounded to one decimal.
    """
    m = metrics if isinstance(metrics, Metrics) else Metrics.from_dict(metrics)

    parts = {
        "quality": _quality(m),
        "growth": _growth(m),
        "value": _value(m),
        "risk": _risk(m),
    }
    total = sum(parts[name].score * w for name, w in WEIGHTS.items())

    explanation = ", ".join(_pick_factors(parts.values())) or NO_FACTORS

    return ScoreResult(
        quality=round(parts["quality"].score, 1),
        growth=round(parts["growth"].score, 1),
        value=round(parts["value"].score, 1),
        risk=round(parts["risk"].score, 1),
        total=round(total, 1),
        explanation=explanation,
    )


def _pick_factors(parts: Iterable[_SubScore]) -> list[str]:
    """Lead phrase of each sub-score in order, then the rest, up to ``MAX_FACTORS``."""
    parts = list(parts)
    leads = [sub.factors[0] for sub in parts if sub.factors]
    rest = [f for sub in parts for f in sub.factors[1:]]
    return (leads + rest)[:MAX_FACTORS]


def drawdown(price: float | None, week52_high: float | None) -> float | None:
    """Percent decline of ``price`` from its 52-week high.

    None when either input is missing or zero.
    """
    if not price or not week52_high:
        return None
    return (week52_high - price) / week52_high * 100


# --------------------------------------------------------------- screening


@dataclass(frozen=True)
class AlertCriteria:
    """Thresholds a stock must meet to be reported in an alert.

    Attributes:
        drawdown_min: Minimum drawdown from the 52-week high, in percent.
        drawdown_max: Maximum drawdown from the 52-week high, in percent.
        peg_max: Maximum PEG. Stocks without a PEG are not excluded.
        min_score: Minimum total score. Unscored stocks are not excluded.
    """

    drawdown_min: float = 20.0
    drawdown_max: float = 60.0
    peg_max: float = 1.5
    min_score: float = 60.0


@dataclass(frozen=True)
class ScreenMatch:
    metrics: Metrics
    drawdown: float
    score_total: float | None = None


def matches_alert_criteria(
    metrics: Metrics,
    criteria: AlertCriteria,
    score_total: float | None = None,
) -> bool:
    dd = drawdown(metrics.price, metrics.week52_high)
    if dd is None:
        return False
    if dd < criteria.drawdown_min or dd > criteria.drawdown_max:
        return False
    if metrics.peg is not None and metrics.peg > criteria.peg_max:
        return False
    if score_total is not None and score_total < criteria.min_score:
        return False
    return True


def screen(
    rows: Iterable[tuple[Metrics, float | None]],
    criteria: AlertCriteria,
    limit: int = 30,
) -> list[ScreenMatch]:
    """Filter ``(metrics, score_total)`` rows and rank by score, best first.

    Rows with equal scores keep their input order.
    """
    matches = [
        ScreenMatch(m, drawdown(m.price, m.week52_high), total)
        for m, total in rows
        if matches_alert_criteria(m, criteria, total)
    ]
    matches.sort(key=lambda s: s.score_total or 0.0, reverse=True)
    return matches[:limit]
