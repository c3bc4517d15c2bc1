"""Broadcast reporter."""

from __future__ import annotations

import logging
from collections.abc import Iterable

from caseflow.models import Batch
from caseflow.reporters.base import Reporter

logger = logging.getLogger(__name__)


class MultiReporter(Reporter):
    """Broadcasts every call to an ordered list of reporters.

    Members are called in the order they were given and report on their own
    state. Errors are not caught: when a member raises, the exception
    propagates right away and the members after it are not called for that
    call.

    Example:
        >>> reporter = MultiReporter([ConsoleReporter(), JUnitXMLReporter("reports")])
        >>> reporter.init()
        >>> reporter.report(batch)
        >>> reporter.flush()
    """

    def __init__(self, reporters: Iterable[Reporter]) -> None:
        self._reporters = tuple(reporters)

    @classmethod
    def of(cls, *reporters: Reporter) -> MultiReporter:
        return cls(reporters)

    @property
    def reporters(self) -> tuple[Reporter, ...]:
        return self._reporters

    def init(self) -> None:
        for reporter in self._reporters:
            reporter.init()

    def report(self, batch: Batch) -> None:
        for reporter in self._reporters:
            logger.debug("Broadcasting %d results to %s", len(batch), type(reporter).__name__)
            reporter.report(batch)

    def flush(self) -> None:
        for reporter in self._reporters:
            reporter.flush()
