"""Logging configuration for riskcheck.

Provides logging setup with structured output and appropriate log levels
for command line and web front-ends.
"""

import logging
import logging.config
import sys
from pathlib import Path
from typing import Optional
import json
from datetime import datetime


class ConsoleHandler(logging.StreamHandler):
    """Stream handler that writes to whatever ``sys.stderr`` is at emit time."""

    def __init__(self, level=logging.NOTSET):
        logging.Handler.__init__(self, level)

    @property
    def stream(self):
        return sys.stderr


class RiskCheckFormatter(logging.Formatter):
    """Custom formatter for riskcheck with structured output."""

    def format(self, record):
        """Format log record with structured information."""
        message = {
            'timestamp': datetime.fromtimestamp(record.created).isoformat(),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
        }

        if hasattr(record, 'component'):
            message['component'] = record.component

        if hasattr(record, 'operation'):
            message['operation'] = record.operation

        if hasattr(record, 'event_count'):
            message['event_count'] = record.event_count

        if record.exc_info:
            message['exception'] = self.formatException(record.exc_info)

        return json.dumps(message)


def setup_logging(
    log_level: str = "INFO",
    log_file: Optional[Path] = None,
    enable_structured: bool = False
) -> logging.Logger:
    """Setup logging for riskcheck.

    Args:
        log_level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        log_file: Optional file path for log output
        enable_structured: Enable structured JSON logging

    Returns:
        Configured logger instance
    """
    log_level = log_level.upper()

    config = {
        'version': 1,
        'disable_existing_loggers': False,
        'formatters': {
            'detailed': {
                'format': '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
            },
            'simple': {
                'format': '%(levelname)s: %(message)s'
            },
            'structured': {
                '()': RiskCheckFormatter,
            }
        },
        'handlers': {
            'console': {
                '()': ConsoleHandler,
                'formatter': 'structured' if enable_structured else 'simple',
                'level': log_level
            }
        },
        'loggers': {
            'riskcheck': {
                'level': log_level,
                'handlers': ['console'],
                'propagate': False
            }
        }
    }

    if log_file:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        config['handlers']['file'] = {
            'class': 'logging.handlers.RotatingFileHandler',
            'filename': str(log_file),
            'maxBytes': 5 * 1024 * 1024,  # 5MB
            'backupCount': 3,
            'formatter': 'structured' if enable_structured else 'detailed',
            'level': log_level
        }
        config['loggers']['riskcheck']['handlers'].append('file')

    logging.config.dictConfig(config)

    logger = logging.getLogger('riskcheck')
    logger.debug(
        "riskcheck logging initialized",
        extra={
            'component': 'logging',
            'operation': 'initialization',
        }
    )

    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance for a specific component.

    Args:
        name: Logger name (usually __name__)

    Returns:
        Logger instance
    """
    if name == 'riskcheck' or name.startswith('riskcheck.'):
        return logging.getLogger(name)
    return logging.getLogger(f"riskcheck.{name}")
