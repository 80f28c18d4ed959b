"""Exception types for s3report.

Every fatal condition of a run is raised as a ReportError subclass and handled
once in main(), which logs a single line and exits non-zero. Data that is
simply not available yet (a metric with zero datapoints) is not an error and
never reaches this module.
"""

from typing import Any, Dict, Optional


class ReportError(Exception):
    """
    Base exception for fatal report errors.

    Attributes:
        message: Human-readable error message
        details: Optional structured context (bucket, address, error code...)
    """

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return self.message


class ConfigurationError(ReportError):
    """Missing environment variables or invalid command-line values."""


class UpstreamError(ReportError):
    """CloudWatch listing or statistics call failed."""

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message, details)
        self.error_code = error_code


class SendError(ReportError):
    """Connecting or writing to the Graphite collector failed."""
