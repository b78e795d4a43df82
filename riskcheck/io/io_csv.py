"""CSV file I/O for risk events.

Handles CSV import/export with flexible column mapping. Probabilities in
CSV files are fractions between 0 and 1, as in JSON files.
"""

import pandas as pd
from pathlib import Path
from typing import List, Union

from ..core.aggregator import RiskAggregator
from ..core.data_models import RiskEvent
from ..core.exceptions import IOError, FileFormatError
from ..core.logging_config import get_logger
from .records import (
    EVENT_FIELDS, REQUIRED_COLUMNS, map_columns,
    events_to_records, events_from_records, analysis_to_record,
)

logger = get_logger(__name__)


def frame_to_events(df: pd.DataFrame, file_path: str, file_format: str) -> List[RiskEvent]:
    """Convert a data frame of events into RiskEvent objects.

    Column names are matched case-insensitively against known aliases.
    Rows without a description are skipped.
    """
    df = df.copy()
    df.columns = [str(column).strip().lower() for column in df.columns]

    column_mapping = map_columns(df.columns.tolist())
    missing = [field for field in REQUIRED_COLUMNS if field not in column_mapping]
    if missing:
        raise FileFormatError(f"Missing required columns: {missing}",
                              file_path=file_path, expected_format=file_format)

    records = []
    for _, row in df.iterrows():
        if pd.isna(row[column_mapping['description']]):
            continue
        record = {}
        for field, column in column_mapping.items():
            value = row[column]
            if pd.isna(value):
                continue
            if field in ('id', 'description'):
                value = str(value).strip()
            elif hasattr(value, 'item'):
                # numpy scalar to plain Python number
                value = value.item()
            record[field] = value
        records.append(record)

    return events_from_records(records, file_path, file_format)


def events_to_frame(events: List[RiskEvent]) -> pd.DataFrame:
    return pd.DataFrame(events_to_records(events), columns=EVENT_FIELDS)


class CSVImporter:
    """Imports risk events from CSV files."""

    def import_events(self, file_path: Union[str, Path]) -> List[RiskEvent]:
        """Import risk events from CSV file.

        Args:
            file_path: Path to CSV file

        Returns:
            List of risk events in file order
        """
        try:
            df = pd.read_csv(file_path)
        except FileNotFoundError as e:
            raise IOError(f"Events file not found: {file_path}", file_path=str(file_path),
                          operation="read", cause=e)
        except (pd.errors.ParserError, pd.errors.EmptyDataError, UnicodeDecodeError) as e:
            raise FileFormatError(f"Error reading CSV {file_path}: {e}",
                                  file_path=str(file_path), expected_format="csv", cause=e)

        events = frame_to_events(df, str(file_path), "csv")
        logger.info(f"Imported {len(events)} risk events from {file_path}")
        return events


class CSVExporter:
    """Exports risk events and analysis to CSV files."""

    def export_events(self, events: List[RiskEvent], file_path: Union[str, Path]) -> None:
        """Write events as a CSV file readable by ``CSVImporter``."""
        path = Path(file_path)
        self._write(events_to_frame(events), path)
        logger.info(f"Exported {len(events)} risk events to {path}")

    def export_report(self, aggregator: RiskAggregator, file_path: Union[str, Path]) -> Path:
        """Write events to ``file_path`` and the analysis beside it.

        Returns:
            Path of the analysis file (``<stem>_analysis.csv``)
        """
        path = Path(file_path)
        analysis_path = path.with_name(f"{path.stem}_analysis.csv")

        analysis = analysis_to_record(aggregator)
        analysis_df = pd.DataFrame(
            [{'metric': key, 'value': value} for key, value in analysis.items()]
        )

        self._write(events_to_frame(aggregator.events), path)
        self._write(analysis_df, analysis_path)
        logger.info(f"Exported analysis report to {path} and {analysis_path}")
        return analysis_path

    def _write(self, df: pd.DataFrame, path: Path) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            df.to_csv(path, index=False)
        except OSError as e:
            raise IOError(f"Error writing {path}: {e}", file_path=str(path),
                          operation="write", cause=e)
