"""JSON file I/O for risk events and analysis reports.

Event files hold ``{"events": [...]}``; a bare list of events is also
accepted on import.
"""

import json
import numpy as np
from pathlib import Path
from typing import Dict, List, Any, Union
from datetime import datetime, date
from uuid import UUID

from .. import __version__
from ..core.aggregator import RiskAggregator
from ..core.data_models import RiskEvent
from ..core.exceptions import IOError, FileFormatError
from ..core.logging_config import get_logger
from .records import events_to_records, events_from_records, analysis_to_record

logger = get_logger(__name__)


class JSONEncoder(json.JSONEncoder):
    """Custom JSON encoder for numpy scalars, UUIDs and dates."""

    def default(self, obj):
        if isinstance(obj, np.ndarray):
            return obj.tolist()
        elif isinstance(obj, np.integer):
            return int(obj)
        elif isinstance(obj, np.floating):
            return float(obj)
        elif isinstance(obj, UUID):
            return str(obj)
        elif isinstance(obj, (datetime, date)):
            return obj.isoformat()
        elif hasattr(obj, "model_dump") and callable(obj.model_dump):
            # Pydantic model
            return obj.model_dump(mode="json")
        return super().default(obj)


class JSONImporter:
    """Imports risk events from JSON files."""

    def import_events(self, file_path: Union[str, Path]) -> List[RiskEvent]:
        """Import risk events from JSON file.

        Args:
            file_path: Path to JSON event file

        Returns:
            List of risk events in file order
        """
        try:
            with open(file_path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except FileNotFoundError as e:
            raise IOError(f"Events file not found: {file_path}", file_path=str(file_path),
                          operation="read", cause=e)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise FileFormatError(f"Invalid JSON in {file_path}: {e}",
                                  file_path=str(file_path), expected_format="json", cause=e)

        if isinstance(data, dict):
            if "events" not in data:
                raise FileFormatError(f"Missing 'events' key in {file_path}",
                                      file_path=str(file_path), expected_format="json")
            records = data["events"]
        else:
            records = data

        if not isinstance(records, list):
            raise FileFormatError("Events must be a list",
                                  file_path=str(file_path), expected_format="json")

        events = events_from_records(records, str(file_path), "json")
        logger.info(f"Imported {len(events)} risk events from {file_path}")
        return events


class JSONExporter:
    """Exports risk events and analysis reports to JSON files."""

    def export_events(self, events: List[RiskEvent], file_path: Union[str, Path]) -> None:
        """Write events in the layout accepted by ``JSONImporter``."""
        self._write({"events": events_to_records(events)}, file_path)
        logger.info(f"Exported {len(events)} risk events to {file_path}")

    def export_report(self, aggregator: RiskAggregator, file_path: Union[str, Path]) -> None:
        """Write events together with their analysis.

        The report can be read back by ``JSONImporter.import_events``.
        """
        report = {
            "metadata": {
                "export_timestamp": datetime.now().isoformat(),
                "tool_version": __version__,
            },
            "analysis": analysis_to_record(aggregator),
            "events": events_to_records(aggregator.events),
        }
        self._write(report, file_path)
        logger.info(f"Exported analysis report to {file_path}")

    def _write(self, data: Dict[str, Any], file_path: Union[str, Path]) -> None:
        path = Path(file_path)
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with open(path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2, cls=JSONEncoder)
        except OSError as e:
            raise IOError(f"Error writing {path}: {e}", file_path=str(path),
                          operation="write", cause=e)
