"""
Tests for display formatting and metric ratings.
"""

import math
import pytest
from dataclasses import replace

from strcalc.calculations.display import (
    CAP_RATE,
    CASH_ON_CASH,
    MONTHLY_CASH_FLOW,
    assess_investment,
    build_display,
    classify,
    classify_metric,
    format_currency,
    format_percent,
)
from strcalc.calculations.metrics import compute_metrics, default_inputs


@pytest.fixture
def default_metrics():
    return compute_metrics(default_inputs())


class TestFormatting:
    """Test currency and percent formatting."""

    def test_currency(self):
        assert format_currency(1234.5) == "$1,235"
        assert format_currency(1234.4) == "$1,234"
        assert format_currency(250000) == "$250,000"
        assert format_currency(-1234.5) == "-$1,235"

    def test_currency_small_values(self):
        assert format_currency(0) == "$0"
        assert format_currency(0.4) == "$0"
        assert format_currency(-0.4) == "$0"

    def test_currency_not_a_number(self):
        assert format_currency(None) == "$0"
        assert format_currency(float("nan")) == "$0"
        assert format_currency("abc") == "$0"

    def test_currency_infinite(self):
        assert format_currency(math.inf) == "$∞"
        assert format_currency(-math.inf) == "-$∞"

    def test_percent(self):
        assert format_percent(7.26) == "7.3%"
        assert format_percent(0) == "0.0%"
        assert format_percent(-2.04) == "-2.0%"

    def test_percent_not_a_number(self):
        assert format_percent(None) == "0.0%"
        assert format_percent(float("nan")) == "0.0%"
        assert format_percent(math.inf) == "∞%"


class TestClassification:
    """Test good/ok/poor thresholds."""

    def test_monthly_cash_flow(self):
        assert classify(200, MONTHLY_CASH_FLOW) == "good"
        assert classify(199.99, MONTHLY_CASH_FLOW) == "ok"
        assert classify(0, MONTHLY_CASH_FLOW) == "ok"
        assert classify(-0.01, MONTHLY_CASH_FLOW) == "poor"

    def test_cash_on_cash(self):
        assert classify(8, CASH_ON_CASH) == "good"
        assert classify(5, CASH_ON_CASH) == "ok"
        assert classify(4.9, CASH_ON_CASH) == "poor"

    def test_cap_rate(self):
        assert classify(6, CAP_RATE) == "good"
        assert classify(4, CAP_RATE) == "ok"
        assert classify(3.9, CAP_RATE) == "poor"

    def test_annual_cash_flow(self):
        assert classify_metric("cash_flow", 2400) == "good"
        assert classify_metric("after_tax_annual_cash_flow", 100) == "ok"

    def test_nan_is_poor(self):
        assert classify(float("nan"), CAP_RATE) == "poor"

    def test_unrated_metric(self):
        assert classify_metric("gross_revenue", 50000) is None


class TestAssessment:
    """Test the overall investment verdict."""

    def test_excellent(self, default_metrics):
        m = replace(default_metrics, cash_on_cash_return=8.0, monthly_cash_flow=200.0)
        assert assess_investment(m).rating == "excellent"

    def test_moderate(self, default_metrics):
        m = replace(default_metrics, cash_on_cash_return=9.0, monthly_cash_flow=50.0)
        assert assess_investment(m).rating == "moderate"

    def test_poor(self, default_metrics):
        m = replace(default_metrics, cash_on_cash_return=9.0, monthly_cash_flow=-1.0)
        assert assess_investment(m).rating == "poor"


class TestBuildDisplay:
    """Test the formatted page blocks."""

    def test_blocks(self, default_metrics):
        display = build_display(default_metrics)
        assert [c["label"] for c in display["key_metrics"]] == [
            "Monthly Cash Flow",
            "Cash-on-Cash Return",
            "Cap Rate",
            "Annual Cash Flow",
        ]
        assert len(display["after_tax"]) == 3
        assert display["assessment"]["rating"] in ("excellent", "moderate", "poor")

    def test_cards_are_rated(self, default_metrics):
        display = build_display(default_metrics)
        cap_rate = display["key_metrics"][2]
        assert cap_rate["formatted"] == "1.8%"
        assert cap_rate["rating"] == "poor"

    def test_breakdown_lines(self, default_metrics):
        display = build_display(default_metrics)
        revenue = {line["label"]: line["formatted"] for line in display["revenue"]}
        assert revenue["Occupied Nights/Year"] == "186"
        assert revenue["Gross Annual Revenue"] == "$37,200"
        assert revenue["Revenue per Occupied Night"] == "$200"

        financing = {line["label"]: line["formatted"] for line in display["financing"]}
        assert financing["Down Payment Required"] == "$62,500"
        assert financing["Loan Amount"] == "$187,500"

    def test_zero_occupancy_renders(self):
        m = compute_metrics({"avg_nightly_rate": 200, "occupancy_rate": 0})
        display = build_display(m)
        revenue = {line["label"]: line["formatted"] for line in display["revenue"]}
        assert revenue["Revenue per Occupied Night"] == "$0"
