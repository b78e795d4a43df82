"""Reporting and visualization modules."""

from .reporting import (
    ChartGenerator, create_summary_report, events_dataframe, summary_rows, RISK_LEVEL_COLORS
)

__all__ = [
    'ChartGenerator', 'create_summary_report', 'events_dataframe', 'summary_rows',
    'RISK_LEVEL_COLORS',
]
