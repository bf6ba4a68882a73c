"""Report rendering: console text and JSON."""

from __future__ import annotations

import json
import math

from src.common.console import header, row, section
from src.stats.summary import SetSummary, TimerSummary, set_fields, timer_fields


def _json_safe(value: float) -> float | None:
    # JSON has no NaN/Infinity literals
    if isinstance(value, float) and not math.isfinite(value):
        return None
    return value


def render_timer_report(name: str, summary: TimerSummary, rejected: int = 0) -> str:
    """Console report for one timer."""
    lines = [header(f"TIMER — {name}")]
    lines.append(row("Samples", summary.count))
    lines.append(row("Distinct values", summary.count_unique))
    if rejected:
        lines.append(row("Rejected lines", rejected))

    lines.append(section("Order statistics"))
    lines.append(row("Lower", summary.lower))
    lines.append(row("Median", summary.median))
    for label, value in summary.quantiles.items():
        lines.append(row(f"Upper {label.replace('_', '.')}%", value))
    lines.append(row("Upper", summary.upper))

    lines.append(section("Totals"))
    lines.append(row("Mean", summary.mean))
    lines.append(row("Sum", summary.sum))

    if summary.degraded:
        lines.append("\n  ⚠  NaN samples were skipped; lower/upper cover valid samples only.")
    lines.append("")
    return "\n".join(lines)


def render_set_report(name: str, summary: SetSummary, rejected: int = 0) -> str:
    """Console report for one set metric."""
    lines = [header(f"SET — {name}")]
    lines.append(row("Samples", summary.count))
    lines.append(row("Distinct values", summary.count_unique))
    if rejected:
        lines.append(row("Rejected lines", rejected))
    lines.append("")
    return "\n".join(lines)


def render_json(
    name: str,
    summary: TimerSummary | SetSummary,
    rejected: int = 0,
) -> str:
    """Flat ``<name>.<field>`` JSON document, plus load diagnostics."""
    if isinstance(summary, TimerSummary):
        fields = timer_fields(name, summary)
        degraded = summary.degraded
    else:
        fields = set_fields(name, summary)
        degraded = False
    doc = {
        "metric": name,
        "fields": {k: _json_safe(v) for k, v in fields.items()},
        "rejected": rejected,
        "degraded": degraded,
    }
    return json.dumps(doc, indent=2)
