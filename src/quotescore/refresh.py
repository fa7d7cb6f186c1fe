"""Batch metrics refresh: fetch and score a list of symbols."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field

from quotescore.models.metrics import Metrics
from quotescore.providers.base import BaseMarketDataProvider
from quotescore.quality import validate_metrics
from quotescore.scoring import ScoreResult, score

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ScoredMetrics:
    metrics: Metrics
    score: ScoreResult


@dataclass
class RefreshReport:
    """Outcome of one ``refresh_metrics`` run.

    Attributes:
        results: Scored metrics, in input order.
        updated: Number of symbols that produced metrics.
        failed: Symbols that produced nothing usable.
    """

    results: list[ScoredMetrics] = field(default_factory=list)
    updated: int = 0
    failed: list[str] = field(default_factory=list)


async def refresh_metrics(
    provider: BaseMarketDataProvider,
    symbols: list[str],
    *,
    delay: float = 0.2,
) -> RefreshReport:
    """Fetch and score metrics for ``symbols`` one at a time.

    Symbols are processed sequentially with ``delay`` seconds between
    them. Storing the results is up to the caller.
    """
    report = RefreshReport()
    for i, symbol in enumerate(symbols):
        if i and delay:
            await asyncio.sleep(delay)

        metrics = await provider.get_metrics(symbol)
        if metrics is None:
            report.failed.append(symbol)
            continue

        check = validate_metrics(metrics)
        if not check.passed:
            msgs = "; ".join(c.message for c in check.failed_checks)
            logger.warning("Discarding metrics for %s: %s", symbol, msgs)
            report.failed.append(symbol)
            continue

        report.results.append(ScoredMetrics(metrics, score(metrics)))
        report.updated += 1

    logger.info(
        "Metrics refresh via %s: %d updated, %d failed",
        provider.display_name, report.updated, len(report.failed),
    )
    return report
