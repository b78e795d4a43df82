"""Excel file I/O for risk events.

Workbooks hold an ``Events`` sheet with the same columns as the CSV
format; analysis reports add an ``Analysis`` sheet.
"""

import zipfile
import pandas as pd
from pathlib import Path
from typing import List, Union

from ..core.aggregator import RiskAggregator
from ..core.data_models import RiskEvent
from ..core.exceptions import IOError, FileFormatError
from ..core.logging_config import get_logger
from .io_csv import frame_to_events, events_to_frame
from .records import analysis_to_record

logger = get_logger(__name__)

EVENTS_SHEET = "Events"
ANALYSIS_SHEET = "Analysis"


class ExcelImporter:
    """Imports risk events from Excel workbooks."""

    def import_events(self, file_path: Union[str, Path],
                      sheet_name: str = EVENTS_SHEET) -> List[RiskEvent]:
        """Import risk events from an Excel sheet.

        Args:
            file_path: Path to .xlsx file
            sheet_name: Sheet holding the events

        Returns:
            List of risk events in sheet order
        """
        try:
            df = pd.read_excel(file_path, sheet_name=sheet_name, engine="openpyxl")
        except FileNotFoundError as e:
            raise IOError(f"Events file not found: {file_path}", file_path=str(file_path),
                          operation="read", cause=e)
        except (ValueError, zipfile.BadZipFile) as e:
            # Missing sheet or a file that is not an xlsx workbook
            raise FileFormatError(f"Error reading {file_path}: {e}",
                                  file_path=str(file_path), expected_format="xlsx", cause=e)

        events = frame_to_events(df, str(file_path), "xlsx")
        logger.info(f"Imported {len(events)} risk events from {file_path}")
        return events


class ExcelExporter:
    """Exports risk events and analysis to Excel workbooks."""

    def export_events(self, events: List[RiskEvent], file_path: Union[str, Path]) -> None:
        """Write events to the ``Events`` sheet of a new workbook."""
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                events_to_frame(events).to_excel(writer, sheet_name=EVENTS_SHEET, index=False)
                self._format_sheets(writer)
        except OSError as e:
            raise IOError(f"Error writing {path}: {e}", file_path=str(path),
                          operation="write", cause=e)
        logger.info(f"Exported {len(events)} risk events to {path}")

    def export_report(self, aggregator: RiskAggregator, file_path: Union[str, Path]) -> None:
        """Write events and analysis sheets to a new workbook."""
        path = Path(file_path)
        analysis = analysis_to_record(aggregator)
        analysis_df = pd.DataFrame(
            [{'Metric': key, 'Value': value} for key, value in analysis.items()]
        )

        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with pd.ExcelWriter(path, engine="openpyxl") as writer:
                events_to_frame(aggregator.events).to_excel(
                    writer, sheet_name=EVENTS_SHEET, index=False
                )
                analysis_df.to_excel(writer, sheet_name=ANALYSIS_SHEET, index=False)
                self._format_sheets(writer)
        except OSError as e:
            raise IOError(f"Error writing {path}: {e}", file_path=str(path),
                          operation="write", cause=e)
        logger.info(f"Exported analysis report to {path}")

    def _format_sheets(self, writer):
        """Widen columns to fit their content."""
        for worksheet in writer.sheets.values():
            for column in worksheet.columns:
                max_length = max(len(str(cell.value or "")) for cell in column)
                worksheet.column_dimensions[column[0].column_letter].width = min(max_length + 2, 50)
