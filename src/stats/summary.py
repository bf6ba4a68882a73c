"""Flush summaries: the named fields a statsd-style backend emits per metric."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field

import structlog

from src.common.constants import DEFAULT_QUANTILES, FIELD_SEPARATOR
from src.stats.errors import DuplicateQuantileError, NaNValueError, QuantileRangeError
from src.stats.values import ValueSlice

log = structlog.get_logger("summary")


@dataclass(frozen=True)
class TimerSummary:
    count: int
    count_unique: int
    lower: float
    upper: float
    mean: float
    median: float
    sum: float
    quantiles: dict[str, float] = field(default_factory=dict)
    degraded: bool = False


@dataclass(frozen=True)
class SetSummary:
    count: int
    count_unique: int


def percent_label(quantile: float) -> str:
    """``0.9`` → ``"90"``, ``0.999`` → ``"99_9"``, ``1.0`` → ``"100"``."""
    if not 0.0 <= quantile <= 1.0:
        raise QuantileRangeError(quantile)
    pct = f"{quantile * 100:.4f}".rstrip("0").rstrip(".")
    return pct.replace(".", "_")


def quantile_labels(quantiles: Iterable[float]) -> dict[str, float]:
    """Map each requested quantile to its field label, in request order.

    Raises ``QuantileRangeError`` for a quantile outside ``[0, 1]`` and
    ``DuplicateQuantileError`` when two quantiles share a label, e.g.
    ``0.9999999`` and ``1.0`` both report as ``upper_100``.
    """
    labels: dict[str, float] = {}
    for q in quantiles:
        label = percent_label(q)
        if label in labels:
            raise DuplicateQuantileError(label, (labels[label], q))
        labels[label] = q
    return labels


def summarize_timer(
    values: ValueSlice,
    quantiles: Iterable[float] = DEFAULT_QUANTILES,
) -> TimerSummary:
    """Compute every timer field for one flush interval.

    *values* ends up sorted.  NaN samples do not stop the summary; they
    are skipped by min/max, flagged via ``degraded`` and logged.
    """
    # Validate before touching the data so a bad request leaves it untouched.
    labels = quantile_labels(quantiles)

    # Sum first: it is the only order-sensitive query.
    total = values.sum()
    lower, upper, error = values.minmax()
    degraded = False
    if isinstance(error, NaNValueError):
        degraded = True
        log.warning("nan_samples_skipped", nan_count=error.count, count=len(values))

    count = len(values)
    summary = TimerSummary(
        count=count,
        count_unique=values.unique_count(),
        lower=lower,
        upper=upper,
        mean=total / count if count else 0.0,
        median=values.median(),
        sum=total,
        quantiles={label: values.quantile(q) for label, q in labels.items()},
        degraded=degraded,
    )
    log.debug("timer_summarized", count=count, degraded=degraded)
    return summary


def summarize_set(values: ValueSlice) -> SetSummary:
    """Cardinality of a set metric.  *values* ends up sorted."""
    return SetSummary(count=len(values), count_unique=values.unique_count())


def _key(name: str, fieldname: str) -> str:
    return f"{name}{FIELD_SEPARATOR}{fieldname}" if name else fieldname


def timer_fields(name: str, summary: TimerSummary) -> dict[str, float]:
    """Flatten a timer summary into ``<name>.<field>`` pairs."""
    fields: dict[str, float] = {
        _key(name, "count"): summary.count,
        _key(name, "count_unique"): summary.count_unique,
        _key(name, "lower"): summary.lower,
        _key(name, "upper"): summary.upper,
        _key(name, "mean"): summary.mean,
        _key(name, "median"): summary.median,
        _key(name, "sum"): summary.sum,
    }
    for label, value in summary.quantiles.items():
        fields[_key(name, f"upper_{label}")] = value
    return fields


def set_fields(name: str, summary: SetSummary) -> dict[str, float]:
    return {
        _key(name, "count"): summary.count,
        _key(name, "count_unique"): summary.count_unique,
    }
