"""Results reporting and visualization.

Builds text summaries, tables and charts from the current register.
"""

import pandas as pd
import plotly.graph_objects as go
from typing import Dict, List

from ..core.aggregator import RiskAggregator
from ..core.data_models import RiskEvent, RiskLevel

RISK_LEVEL_COLORS: Dict[RiskLevel, str] = {
    RiskLevel.LOW: "green",
    RiskLevel.MEDIUM: "orange",
    RiskLevel.HIGH: "red",
}


def format_money(value: float, currency_symbol: str = "$") -> str:
    return f"{currency_symbol}{value:,.2f}"


def events_dataframe(events: List[RiskEvent], currency_symbol: str = "$") -> pd.DataFrame:
    """Events as a display table with formatted loss and percentage columns."""
    return pd.DataFrame(
        [
            {
                "Description": event.description,
                "Possible Loss": f"{currency_symbol}{int(event.possible_loss):,}",
                "Probability": f"{event.probability:.1%}",
                "Expected Loss": format_money(
                    event.possible_loss * event.validated_probability, currency_symbol
                ),
            }
            for event in events
        ],
        columns=["Description", "Possible Loss", "Probability", "Expected Loss"],
    )


def summary_rows(aggregator: RiskAggregator, currency_symbol: str = "$") -> List[tuple]:
    """(label, formatted value) pairs shown in the analysis panel."""
    return [
        ("Total Probability", f"{aggregator.total_probability:.2f}"),
        ("Average Loss", format_money(aggregator.average_loss, currency_symbol)),
        ("Standard Deviation", format_money(aggregator.standard_deviation, currency_symbol)),
        ("RMS Loss", format_money(aggregator.rms_loss, currency_symbol)),
        ("Integral Risk", format_money(aggregator.integral_risk, currency_symbol)),
        ("Coefficient of Variation", f"{aggregator.coefficient_of_variation:.3f}"),
        ("Risk Level", aggregator.risk_level.value),
    ]


def create_summary_report(aggregator: RiskAggregator, currency_symbol: str = "$") -> str:
    """Create a simple text summary report.

    Args:
        aggregator: Register to summarize
        currency_symbol: Symbol used for amounts

    Returns:
        Formatted text report
    """
    report_lines = [
        "Risk Analysis Summary",
        "=" * 50,
        "",
        f"Risk Events: {len(aggregator)}",
        "",
    ]

    for label, value in summary_rows(aggregator, currency_symbol):
        report_lines.append(f"  {label}: {value}")

    if len(aggregator):
        report_lines.extend(["", "Risk Events:"])
        for event in aggregator.events:
            report_lines.append(
                f"  {event.description}: {currency_symbol}{int(event.possible_loss):,} "
                f"at {event.probability:.1%}"
            )

    return "\n".join(report_lines)


class ChartGenerator:
    """Generates plotly charts for the analysis panel."""

    def __init__(self, currency_symbol: str = "$"):
        self.currency_symbol = currency_symbol
        self.bar_color = '#1f77b4'

    def expected_loss_chart(self, events: List[RiskEvent]) -> go.Figure:
        """Bar chart of each event's contribution to the expected loss."""
        fig = go.Figure(
            go.Bar(
                x=[event.description for event in events],
                y=[event.possible_loss * event.validated_probability for event in events],
                marker_color=self.bar_color,
            )
        )
        fig.update_layout(
            title="Expected Loss by Risk Event",
            xaxis_title="Risk Event",
            yaxis_title=f"Expected Loss ({self.currency_symbol})",
            showlegend=False,
        )
        return fig

    def probability_chart(self, events: List[RiskEvent]) -> go.Figure:
        """Pie chart of normalized event probabilities."""
        fig = go.Figure(
            go.Pie(
                labels=[event.description for event in events],
                values=[event.validated_probability for event in events],
                hole=0.4,
            )
        )
        fig.update_layout(title="Probability Share")
        return fig
