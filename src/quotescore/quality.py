"""Sanity checks for normalized quotes and metrics."""

from __future__ import annotations

import math
from dataclasses import dataclass, field, fields

from quotescore.models.metrics import Metrics
from quotescore.models.quote import Quote


@dataclass
class ValidationCheck:
    """Single validation check result."""

    name: str
    passed: bool
    message: str = ""


@dataclass
class ValidationResult:
    """Aggregate validation result."""

    checks: list[ValidationCheck] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return all(c.passed for c in self.checks)

    @property
    def failed_checks(self) -> list[ValidationCheck]:
        return [c for c in self.checks if not c.passed]


def _finite(value: float | None) -> bool:
    return value is None or not (math.isnan(value) or math.isinf(value))


def validate_quote(quote: Quote) -> ValidationResult:
    """Run sanity checks on a normalized quote.

    Checks:
        1. Price is finite and positive
        2. No NaN/Inf in optional fields
        3. High >= low when both are present
        4. Volume non-negative when present
    """
    result = ValidationResult()

    if _finite(quote.price) and quote.price > 0:
        result.checks.append(ValidationCheck("price_positive", True))
    else:
        result.checks.append(
            ValidationCheck("price_positive", False, f"price={quote.price}")
        )

    optional = (quote.change, quote.change_percent, quote.open, quote.high,
                quote.low, quote.previous_close, quote.volume)
    bad = sum(1 for v in optional if not _finite(v))
    if bad:
        result.checks.append(ValidationCheck("no_nan", False, f"{bad} NaN/Inf values"))
    else:
        result.checks.append(ValidationCheck("no_nan", True))

    if quote.high is not None and quote.low is not None and quote.high < quote.low:
        result.checks.append(
            ValidationCheck("range_consistency", False, f"high {quote.high} < low {quote.low}")
        )
    else:
        result.checks.append(ValidationCheck("range_consistency", True))

    if quote.volume is not None and quote.volume < 0:
        result.checks.append(ValidationCheck("volume_sanity", False, "negative volume"))
    else:
        result.checks.append(ValidationCheck("volume_sanity", True))

    return result


def validate_metrics(metrics: Metrics) -> ValidationResult:
    """Check that every populated metric is a finite number.

    Missing values are fine; they score as neutral downstream.
    """
    result = ValidationResult()
    bad = [
        f.name for f in fields(metrics)
        if f.name != "symbol" and not _finite(getattr(metrics, f.name))
    ]
    if bad:
        result.checks.append(
            ValidationCheck("finite_values", False, "non-finite: " + ", ".join(bad))
        )
    else:
        result.checks.append(ValidationCheck("finite_values", True))

    if metrics.week52_high is not None and metrics.week52_low is not None \
            and metrics.week52_high < metrics.week52_low:
        result.checks.append(ValidationCheck("range_consistency", False, "52w high < 52w low"))
    else:
        result.checks.append(ValidationCheck("range_consistency", True))

    return result
