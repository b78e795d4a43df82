"""riskcheck: risk register with loss statistics.

Keeps a list of risk events (description, possible loss, probability) and
derives expected loss, dispersion, an integral risk score and a coarse
risk level from it.
"""

__version__ = "1.0.0"
__author__ = "riskcheck developers"

# Core functionality
from .core.aggregator import RiskAggregator, classify_risk_level
from .core.data_models import RiskEvent, RiskLevel, RiskAnalysis
from .core.store import RiskEventStore
from .core.config import RiskCheckConfig, load_config

# Exception handling
from .core.exceptions import (
    RiskCheckError,
    InvalidArgumentError,
    ParseError,
    ConfigurationError,
    IOError,
)

# Logging configuration
from .core.logging_config import setup_logging, get_logger

__all__ = [
    # Core functionality
    "RiskAggregator",
    "classify_risk_level",
    "RiskEvent",
    "RiskLevel",
    "RiskAnalysis",
    "RiskEventStore",
    "RiskCheckConfig",
    "load_config",
    # Exception handling
    "RiskCheckError",
    "InvalidArgumentError",
    "ParseError",
    "ConfigurationError",
    "IOError",
    # Logging
    "setup_logging",
    "get_logger",
]
