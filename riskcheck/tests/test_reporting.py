"""Tests for text reports, display tables and charts."""

import pytest

from riskcheck.core.aggregator import RiskAggregator
from riskcheck.core.data_models import RiskEvent
from riskcheck.reporting.reporting import (
    ChartGenerator, create_summary_report, events_dataframe, summary_rows
)


@pytest.fixture
def aggregator():
    return RiskAggregator([
        RiskEvent(description="Flood", possible_loss=100, probability=0.5),
        RiskEvent(description="Fire", possible_loss=300, probability=0.5),
    ])


class TestReports:
    """Test summary output."""

    def test_summary_rows(self, aggregator):
        rows = dict(summary_rows(aggregator))
        assert rows["Total Probability"] == "1.00"
        assert rows["Average Loss"] == "$200.00"
        assert rows["Standard Deviation"] == "$100.00"
        assert rows["RMS Loss"] == "$223.61"
        assert rows["Integral Risk"] == "$423.61"
        assert rows["Risk Level"] == "Medium Risk"

    def test_summary_report_text(self, aggregator):
        report = create_summary_report(aggregator, currency_symbol="€")
        assert "Risk Events: 2" in report
        assert "Integral Risk: €423.61" in report
        assert "Flood: €100 at 50.0%" in report

    def test_empty_register_report(self):
        report = create_summary_report(RiskAggregator([]))
        assert "Risk Events: 0" in report
        assert "Risk Level: Low Risk" in report

    def test_events_dataframe(self, aggregator):
        df = events_dataframe(aggregator.events)
        assert list(df["Description"]) == ["Flood", "Fire"]
        assert list(df["Probability"]) == ["50.0%", "50.0%"]
        assert list(df["Expected Loss"]) == ["$50.00", "$150.00"]


class TestCharts:
    """Test chart construction."""

    def test_expected_loss_chart(self, aggregator):
        fig = ChartGenerator().expected_loss_chart(aggregator.events)
        assert list(fig.data[0].y) == [50.0, 150.0]
        assert fig.data[0].marker.color == '#1f77b4'

    def test_probability_chart(self, aggregator):
        fig = ChartGenerator().probability_chart(aggregator.events)
        assert list(fig.data[0].labels) == ["Flood", "Fire"]
