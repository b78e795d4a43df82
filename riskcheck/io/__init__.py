"""Input/Output modules for different file formats."""

from .io_excel import ExcelImporter, ExcelExporter
from .io_csv import CSVImporter, CSVExporter
from .io_json import JSONImporter, JSONExporter

__all__ = [
    'ExcelImporter', 'ExcelExporter',
    'CSVImporter', 'CSVExporter',
    'JSONImporter', 'JSONExporter',
]
