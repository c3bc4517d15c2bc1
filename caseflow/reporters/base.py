"""Abstract base reporter class for caseflow.

Reporters are sinks that render or persist the results of a test run.
The test harness drives every reporter through the same three calls:

1. ``init()`` once, before anything is reported
2. ``report(batch)`` once per finished suite, possibly concurrently from
   several threads when suites run in parallel
3. ``flush()`` once, after the last batch

Design Pattern:
    The reporters follow the Strategy pattern, allowing different output
    formats to be selected at runtime. The harness holds a single Reporter
    reference and does not care whether it is the console, the JUnit XML
    files or a MultiReporter broadcasting to both.

Example:
    >>> class CountingReporter(Reporter):
    ...     def __init__(self):
    ...         self.cases = 0
    ...
    ...     def init(self):
    ...         pass
    ...
    ...     def report(self, batch):
    ...         self.cases += len(batch)
    ...
    ...     def flush(self):
    ...         print(f"{self.cases} cases")
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from types import TracebackType

from caseflow.models import Batch


class Reporter(ABC):
    """Abstract base class for all caseflow reporters.

    Reporters may be stateless per call (JUnit XML files) or accumulate
    state across calls (console totals). They only read the results they
    are given and never mutate them.

    Reporters can also be used as context managers: entering calls
    ``init()`` and leaving the block without an exception calls ``flush()``.

    See Also:
        - ConsoleReporter: Indented tree on a text sink with a run summary
        - JUnitXMLReporter: One JUnit XML file per suite
        - MultiReporter: Broadcasts to an ordered list of reporters
    """

    @abstractmethod
    def init(self) -> None:
        """Prepare run-level state. Called exactly once, before any report."""
        ...

    @abstractmethod
    def report(self, batch: Batch) -> None:
        """Render or persist the results of one finished suite.

        Args:
            batch: Ordered results sharing exactly one suite. The first
                result's suite is authoritative.
        """
        ...

    @abstractmethod
    def flush(self) -> None:
        """Emit run-level output and release resources. Called exactly once."""
        ...

    def __enter__(self) -> Reporter:
        self.init()
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        if exc_type is None:
            self.flush()
