"""Custom exceptions for riskcheck.

Provides an exception hierarchy with error context, recovery suggestions
and error classification.
"""

from typing import Optional, Dict, Any, List
from enum import Enum


class ErrorSeverity(Enum):
    """Error severity levels for categorizing exceptions."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
    CRITICAL = "critical"


class ErrorCategory(Enum):
    """Error categories for classification."""
    VALIDATION = "validation"
    IO = "io"
    CONFIGURATION = "configuration"
    SYSTEM = "system"


class RiskCheckError(Exception):
    """Base exception for all riskcheck errors.

    Provides structured error information with context, severity,
    and recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        category: ErrorCategory = ErrorCategory.SYSTEM,
        severity: ErrorSeverity = ErrorSeverity.MEDIUM,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        recovery_suggestions: Optional[List[str]] = None,
        cause: Optional[Exception] = None
    ):
        """Initialize structured error.

        Args:
            message: Human-readable error description
            category: Error category for classification
            severity: Error severity level
            error_code: Unique error identifier
            context: Additional error context
            recovery_suggestions: List of recovery suggestions
            cause: Original exception that caused this error
        """
        super().__init__(message)
        self.message = message
        self.category = category
        self.severity = severity
        self.error_code = error_code or self._generate_error_code()
        self.context = context or {}
        self.recovery_suggestions = recovery_suggestions or []
        self.cause = cause

    def _generate_error_code(self) -> str:
        """Generate error code from class name."""
        return f"RC_{self.__class__.__name__.upper()}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for structured logging."""
        return {
            'error_code': self.error_code,
            'message': self.message,
            'category': self.category.value,
            'severity': self.severity.value,
            'context': self.context,
            'recovery_suggestions': self.recovery_suggestions,
            'exception_type': self.__class__.__name__,
            'cause': str(self.cause) if self.cause else None
        }


# Argument and input errors
class InvalidArgumentError(RiskCheckError):
    """Raised when an operation receives an argument outside its contract.

    Used for out-of-range event indices and unknown event ids. The
    collection is never mutated when this is raised.
    """

    def __init__(
        self,
        message: str,
        argument_name: Optional[str] = None,
        argument_value: Any = None,
        valid_range: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context.update({
            'argument_name': argument_name,
            'argument_value': argument_value,
            'valid_range': valid_range
        })

        recovery_suggestions = kwargs.pop('recovery_suggestions', [
            "Check the index against the current number of events",
            "Refresh the event list before editing"
        ])

        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.MEDIUM,
            context=context,
            recovery_suggestions=recovery_suggestions,
            **kwargs
        )


class ParseError(RiskCheckError):
    """Raised when user-entered text cannot be turned into event fields."""

    def __init__(
        self,
        message: str,
        field_name: Optional[str] = None,
        raw_value: Any = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context.update({
            'field_name': field_name,
            'raw_value': raw_value
        })

        recovery_suggestions = kwargs.pop('recovery_suggestions', [
            "Enter the loss as a plain number, e.g. 50000",
            "Enter the probability as a percentage between 0 and 100"
        ])

        super().__init__(
            message,
            category=ErrorCategory.VALIDATION,
            severity=ErrorSeverity.LOW,
            context=context,
            recovery_suggestions=recovery_suggestions,
            **kwargs
        )


# I/O Errors
class IOError(RiskCheckError):
    """Raised when input/output operations fail."""

    def __init__(
        self,
        message: str,
        file_path: Optional[str] = None,
        operation: str = "unknown",
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context.update({
            'file_path': file_path,
            'operation': operation
        })

        recovery_suggestions = kwargs.pop('recovery_suggestions', [
            "Check file path exists and is accessible",
            "Verify file permissions",
            "Ensure file is not locked by another process"
        ])

        super().__init__(
            message,
            category=ErrorCategory.IO,
            context=context,
            recovery_suggestions=recovery_suggestions,
            **kwargs
        )


class FileFormatError(IOError):
    """Raised when file format is unsupported or its content is malformed."""

    def __init__(
        self,
        message: str,
        file_path: str,
        expected_format: str,
        detected_format: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context.update({
            'expected_format': expected_format,
            'detected_format': detected_format
        })

        recovery_suggestions = [
            f"Ensure file is in {expected_format} format",
            "Use the 'template' command to see the expected layout",
            "Verify file extension matches content"
        ]

        super().__init__(
            message,
            file_path=file_path,
            operation="format_detection",
            context=context,
            recovery_suggestions=recovery_suggestions,
            **kwargs
        )


# Configuration Errors
class ConfigurationError(RiskCheckError):
    """Raised when configuration is invalid."""

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Any = None,
        **kwargs
    ):
        context = kwargs.pop('context', {})
        context.update({
            'config_key': config_key,
            'config_value': config_value
        })

        recovery_suggestions = kwargs.pop('recovery_suggestions', [
            "Check configuration syntax and format",
            "Verify threshold values are between 0 and 1",
            "Remove unknown configuration keys"
        ])

        super().__init__(
            message,
            category=ErrorCategory.CONFIGURATION,
            context=context,
            recovery_suggestions=recovery_suggestions,
            **kwargs
        )


# Utility functions
def handle_exception(
    exception: Exception,
    logger,
    context: Optional[Dict[str, Any]] = None,
    reraise: bool = True
) -> Optional[RiskCheckError]:
    """Handle exception with proper logging and conversion.

    Args:
        exception: Original exception
        logger: Logger instance
        context: Additional context information
        reraise: Whether to reraise the exception

    Returns:
        Converted RiskCheckError if not reraising

    Raises:
        RiskCheckError: If reraise is True
    """
    if isinstance(exception, RiskCheckError):
        risk_error = exception
    else:
        risk_error = RiskCheckError(
            str(exception),
            context=context,
            cause=exception
        )

    logger.error(
        f"{risk_error.error_code}: {risk_error.message}",
        extra={'error': risk_error.to_dict()},
        exc_info=True
    )

    if reraise:
        raise risk_error
    else:
        return risk_error
