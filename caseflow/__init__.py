"""caseflow - concurrent reporting of API test results.

caseflow takes the results of executed test suites and renders them
through pluggable reporters: an indented console tree with a run summary,
JUnit XML files for CI systems, or both at once.

Example:
    >>> from caseflow import Case, ConsoleReporter, JUnitXMLReporter, MultiReporter
    >>> from caseflow import Suite, TestResult
    >>>
    >>> reporter = MultiReporter([ConsoleReporter(), JUnitXMLReporter("reports")])
    >>> reporter.init()
    >>> suite = Suite(name="users", path="api/v1")
    >>> reporter.report([TestResult(suite=suite, case=Case(name="list users"))])
    >>> reporter.flush()
"""

import logging

from caseflow.config import ReportingSettings, load_settings
from caseflow.errors import CaseflowError, ConfigurationError, ReportWriteError
from caseflow.models import (
    Batch,
    Case,
    Failure,
    RequestInfo,
    ResponseInfo,
    Suite,
    TestResult,
    Trace,
)
from caseflow.reporters import (
    ConsoleReporter,
    JUnitXMLReporter,
    MultiReporter,
    Reporter,
    create_reporter,
)
from caseflow.status import OutputMode, Status, render_status
from caseflow.timeframe import TimeFrame

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "Batch",
    "Case",
    "CaseflowError",
    "ConfigurationError",
    "ConsoleReporter",
    "Failure",
    "JUnitXMLReporter",
    "MultiReporter",
    "OutputMode",
    "ReportWriteError",
    "Reporter",
    "ReportingSettings",
    "RequestInfo",
    "ResponseInfo",
    "Status",
    "Suite",
    "TestResult",
    "TimeFrame",
    "Trace",
    "create_reporter",
    "load_settings",
    "render_status",
]
