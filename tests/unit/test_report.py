"""Tests for console and JSON report rendering."""

import json
import math

from src.reporter.report import render_json, render_set_report, render_timer_report
from src.stats.summary import SetSummary, summarize_timer
from src.stats.values import ValueSlice


def _summary(values=(123, 234, 345, 456, 567, 678, 789, 890, 910, 1011)):
    return summarize_timer(ValueSlice(values), quantiles=(0.9,))


class TestTimerReport:
    def test_sections_and_values(self) -> None:
        text = render_timer_report("api", _summary())
        assert "TIMER — api" in text
        assert "Order statistics" in text
        assert "Upper 90%" in text
        assert "6,003.0000" in text
        assert "Rejected" not in text
        assert "NaN" not in text

    def test_rejected_and_degraded(self) -> None:
        text = render_timer_report("api", _summary((1, math.nan, 3)), rejected=4)
        assert "Rejected lines" in text
        assert "NaN samples were skipped" in text


class TestSetReport:
    def test_counts(self) -> None:
        text = render_set_report("users", SetSummary(count=14, count_unique=9))
        assert "SET — users" in text
        assert "Distinct values" in text


class TestJson:
    def test_timer_document(self) -> None:
        doc = json.loads(render_json("api", _summary(), rejected=1))
        assert doc["metric"] == "api"
        assert doc["rejected"] == 1
        assert doc["degraded"] is False
        assert doc["fields"]["api.sum"] == 6003.0
        assert doc["fields"]["api.upper_90"] == 920.1

    def test_set_document(self) -> None:
        doc = json.loads(render_json("users", SetSummary(count=3, count_unique=2)))
        assert doc["fields"] == {"users.count": 3, "users.count_unique": 2}

    def test_non_finite_values_become_null(self) -> None:
        doc = json.loads(render_json("t", _summary((1, math.inf))))
        assert doc["fields"]["t.upper"] is None
        assert doc["fields"]["t.lower"] == 1.0
