"""Exception hierarchy for caseflow.

Test outcomes (failed or skipped cases) are data and never raise. Errors in
this module describe problems of the reporting layer itself:

- reporting I/O failures (report directory or file cannot be written),
  which are fatal for the run
- invalid configuration
- malformed batches handed over by a producer

All caseflow errors inherit from CaseflowError and include:
- error_code: A unique ErrorCode enum for categorization
- context: ErrorContext with suite/case/path details
- suggestions: List of actionable steps to resolve the issue

Example:
    try:
        reporter.report(batch)
    except ReportWriteError as e:
        print(f"Error: {e}")
        print(f"Suggestions: {e.suggestions}")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ErrorCode(Enum):
    """Standardized error codes for caseflow.

    Error codes are organized by category:
    - E2xx: Validation errors (configuration, batches)
    - E6xx: Reporter errors
    - E9xx: Unknown/internal errors
    """

    # Validation errors (E2xx)
    INVALID_CONFIG = "E202"
    INVALID_BATCH = "E206"

    # Reporter errors (E6xx)
    REPORTER_ERROR = "E602"
    REPORT_WRITE_FAILED = "E603"

    # Unknown/internal errors (E9xx)
    UNKNOWN = "E999"

    @property
    def category(self) -> str:
        """Get the error category name."""
        code_num = int(self.value[1:])
        if 200 <= code_num < 300:
            return "validation"
        elif 600 <= code_num < 700:
            return "reporter"
        return "unknown"


@dataclass
class ErrorContext:
    """Where a reporting error happened.

    Attributes:
        suite_name: Fully-qualified name of the suite being reported.
        case_name: Name of the case being reported, if any.
        path: File or directory involved, if any.
        extra: Additional context-specific information.
        timestamp: When the error occurred.
    """

    suite_name: str | None = None
    case_name: str | None = None
    path: str | None = None
    extra: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict[str, Any]:
        """Convert context to dictionary for serialization."""
        result = {
            "suite_name": self.suite_name,
            "case_name": self.case_name,
            "path": self.path,
            "extra": self.extra or None,
            "timestamp": self.timestamp.isoformat(),
        }
        return {k: v for k, v in result.items() if v is not None}

    def format_location(self) -> str:
        """Format the error location as a readable string."""
        parts = []
        if self.suite_name:
            parts.append(f"suite={self.suite_name}")
        if self.case_name:
            parts.append(f"case={self.case_name}")
        if self.path:
            parts.append(f"path={self.path}")
        return " > ".join(parts) if parts else "unknown location"


class CaseflowError(Exception):
    """Base exception for all caseflow errors.

    Attributes:
        error_code: Unique ErrorCode for this error type
        message: Human-readable error description
        context: ErrorContext with reporting details
        suggestions: List of actionable steps to resolve the issue
        recoverable: Whether the run may continue after this error
        cause: The underlying exception (if any)
    """

    error_code: ErrorCode = ErrorCode.UNKNOWN
    default_message: str = "An unexpected error occurred"
    default_suggestions: list[str] = []
    recoverable: bool = True

    def __init__(
        self,
        message: str | None = None,
        error_code: ErrorCode | None = None,
        context: ErrorContext | None = None,
        cause: Exception | None = None,
        recoverable: bool | None = None,
        suggestions: list[str] | None = None,
        **extra_context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.error_code = error_code or self.error_code
        self.context = context or ErrorContext()
        self.cause = cause
        if recoverable is not None:
            self.recoverable = recoverable
        self._suggestions = suggestions

        if extra_context:
            self.context.extra.update(extra_context)

        super().__init__(self.message)

    @property
    def suggestions(self) -> list[str]:
        """Get actionable suggestions for resolving this error."""
        if self._suggestions is not None:
            return self._suggestions
        return self.default_suggestions.copy()

    def __str__(self) -> str:
        parts = [f"[{self.error_code.value}] {self.message}"]

        location = self.context.format_location()
        if location != "unknown location":
            parts.append(f"at {location}")

        return " | ".join(parts)

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for serialization."""
        return {
            "error_code": self.error_code.value,
            "error_type": self.__class__.__name__,
            "message": self.message,
            "recoverable": self.recoverable,
            "suggestions": self.suggestions,
            "context": self.context.to_dict(),
            "cause": str(self.cause) if self.cause else None,
        }


class ConfigurationError(CaseflowError):
    """Reporting configuration is invalid.

    Raised for unknown reporter names, malformed configuration files and
    values that fail validation.
    """

    error_code = ErrorCode.INVALID_CONFIG
    default_message = "Invalid reporting configuration"
    recoverable = False
    default_suggestions = [
        "Check the reporters list: allowed values are 'console' and 'junit'",
        "Check the YAML syntax of the configuration file",
        "Check CASEFLOW_* environment variables for typos",
    ]


class InvalidBatchError(CaseflowError):
    """A producer handed over a batch that breaks the batch contract.

    Batches must be non-empty and contain results of exactly one suite.
    """

    error_code = ErrorCode.INVALID_BATCH
    default_message = "Invalid result batch"
    recoverable = False


class ReporterError(CaseflowError):
    """Reporter execution error."""

    error_code = ErrorCode.REPORTER_ERROR
    default_message = "Reporter execution failed"


class ReportWriteError(ReporterError):
    """A report could not be persisted.

    CI tooling relies on a complete set of report files, so a suite report
    that cannot be written aborts the run instead of being dropped.
    """

    error_code = ErrorCode.REPORT_WRITE_FAILED
    default_message = "Failed to write report"
    recoverable = False
    default_suggestions = [
        "Check that the report directory is writable",
        "Check that enough disk space is available",
        "Check that no directory exists with the report file's name",
    ]
