"""Error hierarchy for caseflow."""

from caseflow.errors.base import (
    CaseflowError,
    ConfigurationError,
    ErrorCode,
    ErrorContext,
    InvalidBatchError,
    ReporterError,
    ReportWriteError,
)

__all__ = [
    "CaseflowError",
    "ConfigurationError",
    "ErrorCode",
    "ErrorContext",
    "InvalidBatchError",
    "ReporterError",
    "ReportWriteError",
]
