"""Builds the configured reporter."""

from __future__ import annotations

import logging
from typing import TextIO

from caseflow.config import ReportingSettings
from caseflow.errors import ConfigurationError
from caseflow.reporters.base import Reporter
from caseflow.reporters.console import ConsoleReporter
from caseflow.reporters.junit import JUnitXMLReporter
from caseflow.reporters.multi import MultiReporter

logger = logging.getLogger(__name__)


def create_reporter(
    settings: ReportingSettings | None = None, output: TextIO | None = None
) -> Reporter:
    """Build the reporters named in ``settings``, in order.

    A single configured reporter is returned as is; several are wrapped in a
    MultiReporter that broadcasts to them in the configured order.

    Args:
        settings: Reporting settings, defaults when omitted.
        output: Sink of the console reporter, stdout when omitted.

    Raises:
        ConfigurationError: If no reporter is configured or a name is unknown.
    """
    settings = settings or ReportingSettings()

    reporters: list[Reporter] = []
    for name in settings.reporters:
        if name == "console":
            reporters.append(
                ConsoleReporter(
                    output=output,
                    indent_size=settings.indent_size,
                    no_color=settings.no_color,
                )
            )
        elif name == "junit":
            reporters.append(JUnitXMLReporter(settings.report_dir, hostname=settings.hostname))
        else:
            raise ConfigurationError(f"Unknown reporter '{name}'", reporter=name)

    if not reporters:
        raise ConfigurationError("At least one reporter must be configured")

    logger.debug("Configured reporters: %s", ", ".join(settings.reporters))
    if len(reporters) == 1:
        return reporters[0]
    return MultiReporter(reporters)
