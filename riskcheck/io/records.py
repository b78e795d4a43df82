"""Conversion between risk events and plain records.

Shared by the JSON, CSV and Excel modules so every format reads and
writes the same fields.
"""

from typing import Dict, List, Any

from pydantic import ValidationError

from ..core.aggregator import RiskAggregator
from ..core.data_models import RiskEvent
from ..core.exceptions import FileFormatError

EVENT_FIELDS = ['id', 'description', 'possible_loss', 'probability']

COLUMN_ALIASES = {
    'id': ['id', 'event_id'],
    'description': ['description', 'name', 'title', 'event'],
    'possible_loss': ['possible_loss', 'loss', 'amount'],
    'probability': ['probability', 'p', 'likelihood'],
}

REQUIRED_COLUMNS = ['description', 'possible_loss', 'probability']


def map_columns(columns: List[str]) -> Dict[str, str]:
    """Map event fields to the matching column names present.

    Args:
        columns: Lower-cased column names

    Returns:
        Dictionary of field name to column name
    """
    mapping = {}
    for field, aliases in COLUMN_ALIASES.items():
        for alias in aliases:
            if alias in columns:
                mapping[field] = alias
                break
    return mapping


def events_to_records(events: List[RiskEvent]) -> List[Dict[str, Any]]:
    return [event.model_dump(mode='json') for event in events]


def events_from_records(records: List[Dict[str, Any]],
                        file_path: str,
                        file_format: str) -> List[RiskEvent]:
    """Build events from records, generating ids where none are given.

    Raises:
        FileFormatError: If a record is missing fields or has bad values
    """
    events = []
    for i, record in enumerate(records):
        if not isinstance(record, dict):
            raise FileFormatError(
                f"Event {i}: expected an object, got {type(record).__name__}",
                file_path=str(file_path),
                expected_format=file_format,
            )
        data = {key: value for key, value in record.items() if key in EVENT_FIELDS}
        if data.get('id') in (None, ''):
            data.pop('id', None)
        try:
            events.append(RiskEvent(**data))
        except ValidationError as e:
            raise FileFormatError(
                f"Event {i}: {e}",
                file_path=str(file_path),
                expected_format=file_format,
                cause=e,
            )
    return events


def analysis_to_record(aggregator: RiskAggregator) -> Dict[str, Any]:
    """Flatten the analysis snapshot plus the remaining statistics for export."""
    record = aggregator.get_detailed_analysis().model_dump(mode='json')
    record.update({
        'total_probability': aggregator.total_probability,
        'variance': aggregator.variance,
        'rms_loss': aggregator.rms_loss,
    })
    return record
