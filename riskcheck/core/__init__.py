"""Core risk register engine."""

from .data_models import RiskEvent, RiskLevel, RiskAnalysis, default_events
from .aggregator import RiskAggregator, classify_risk_level
from .store import RiskEventStore
from .validation import parse_loss, parse_probability_percent, validate_event_form, build_event
from .config import RiskCheckConfig, load_config

from .exceptions import (
    RiskCheckError, InvalidArgumentError, ParseError,
    ConfigurationError, IOError, FileFormatError
)
from .logging_config import setup_logging, get_logger

__all__ = [
    # Models
    'RiskEvent', 'RiskLevel', 'RiskAnalysis', 'default_events',

    # Aggregation and state
    'RiskAggregator', 'classify_risk_level', 'RiskEventStore',

    # Input handling and configuration
    'parse_loss', 'parse_probability_percent', 'validate_event_form', 'build_event',
    'RiskCheckConfig', 'load_config',

    # Exception handling and logging
    'RiskCheckError', 'InvalidArgumentError', 'ParseError',
    'ConfigurationError', 'IOError', 'FileFormatError',
    'setup_logging', 'get_logger',
]
