"""Reporters module for caseflow.

Provides the output formats for test results:
- ConsoleReporter: Indented tree and run summary on a text sink
- JUnitXMLReporter: One JUnit XML file per suite for CI/CD integration
- MultiReporter: Broadcasts to several reporters
"""

from caseflow.reporters.base import Reporter
from caseflow.reporters.console import ConsoleReporter
from caseflow.reporters.factory import create_reporter
from caseflow.reporters.junit import JUnitXMLReporter
from caseflow.reporters.multi import MultiReporter

__all__ = [
    "ConsoleReporter",
    "JUnitXMLReporter",
    "MultiReporter",
    "Reporter",
    "create_reporter",
]
