"""Console reporter for terminal output.

Renders every suite batch as an indented tree and prints a summary table at
the end of the run:

    api.v1.users
        └ PASSED list users [102ms]
            GET http://localhost:8080/users [98ms]
                √ status code is 200
        └ SKIPPED delete user (flag disabled)

Output goes through a ``rich`` console, which takes care of color support on
the underlying sink.
"""

from __future__ import annotations

import logging
import threading
from typing import TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from caseflow.models import Batch, Suite, TestResult, Trace, batch_suite
from caseflow.reporters.base import Reporter
from caseflow.status import (
    CARET_ICON,
    OutputMode,
    Status,
    render_dimmed,
    render_status,
)
from caseflow.timeframe import MICROSECOND, MILLISECOND, TimeFrame, format_duration

logger = logging.getLogger(__name__)

DEFAULT_INDENT_SIZE = 4


class ConsoleReporter(Reporter):
    """Writes results to a shared text sink, stdout by default.

    A single lock guards the sink. It is held for the whole render of a
    batch and for the whole summary, so suites reported concurrently never
    interleave their lines. Whichever report acquires the lock first prints
    first.

    Attributes:
        console: The rich console wrapping the sink.
        indent_size: Number of spaces per indentation level.
        total: Cases reported so far, skipped and failed included.
        failed: Failed cases reported so far.
        skipped: Skipped cases reported so far.
        exec_frame: Run frame, opened by ``init`` and closed by ``flush``.
    """

    def __init__(
        self,
        output: TextIO | None = None,
        indent_size: int = DEFAULT_INDENT_SIZE,
        no_color: bool = False,
        console: Console | None = None,
    ) -> None:
        if console is None:
            console = Console(
                file=output,
                no_color=no_color,
                highlight=False,
                markup=False,
                emoji=False,
                soft_wrap=True,
            )
        self.console = console
        self.indent_size = indent_size

        self.total = 0
        self.failed = 0
        self.skipped = 0
        self.exec_frame: TimeFrame | None = None

        self._indent = 0
        self._lock = threading.Lock()

    @property
    def passed(self) -> int:
        return self.total - self.failed - self.skipped

    @property
    def overall_status(self) -> Status:
        return Status.FAILED if self.failed else Status.PASSED

    def init(self) -> None:
        self.exec_frame = TimeFrame.begin()

    def report(self, batch: Batch) -> None:
        with self._lock:
            suite = batch_suite(batch)
            if suite is None:
                logger.debug("Ignoring empty batch")
                return

            logger.debug("Rendering %d results of suite %s", len(batch), suite.full_name)
            self._indent = 0
            try:
                lines = self._render_batch(suite, batch)
            finally:
                self._indent = 0

            self.console.print(Text("\n").join(lines))
            self.console.print()

    def flush(self) -> None:
        with self._lock:
            if self.exec_frame is None:
                logger.warning("flush() called before init(); summary covers flush time only")
                self.exec_frame = TimeFrame.begin()
            self.exec_frame.close()

            overall = self.overall_status
            start = self.exec_frame.start
            end = self.exec_frame.end

            table = Table(box=None, show_header=False, show_edge=False, pad_edge=False)
            table.add_column(justify="right")
            table.add_column(justify="right")
            table.add_row("Overall result:", render_status(overall, OutputMode.LABEL))
            table.add_row("Test count:", str(self.total))
            table.add_row("Passed:", str(self.passed))
            table.add_row("Failed:", str(self.failed))
            table.add_row("Skipped:", str(self.skipped))
            table.add_row("Start time:", str(start))
            table.add_row("End time:", str(end))
            table.add_row("Duration:", format_duration(self.exec_frame.duration, MICROSECOND))

            self.console.print()
            self.console.print("Test Run Summary")
            self.console.print("-" * 31)
            self.console.print(table)
            self.console.print()

    def _render_batch(self, suite: Suite, batch: Batch) -> list[Text]:
        lines = [Text(suite.full_name)]

        for result in batch:
            self.total += 1

            self._indent_in()
            lines.append(self._render_case(result))

            if not result.skipped:
                for trace in result.traces:
                    if trace.request is None:
                        continue
                    self._indent_in()
                    lines.extend(self._render_trace(trace))
                    self._indent_out()

            self._indent_out()

        return lines

    def _render_case(self, result: TestResult) -> Text:
        line = self._start_line().append(f"{CARET_ICON} ")

        if result.skipped:
            self.skipped += 1
            line.append_text(render_status(Status.SKIPPED, OutputMode.LABEL))
            line.append(f" {result.case.name}")
            if result.skip_reason:
                line.append(f" ({result.skip_reason})")
            return line

        if result.failed:
            self.failed += 1
            line.append_text(render_status(Status.FAILED, OutputMode.LABEL))
        else:
            line.append_text(render_status(Status.PASSED, OutputMode.LABEL))

        duration = format_duration(result.exec_frame.duration, MILLISECOND)
        line.append(f" {result.case.name} [{duration}]")
        return line

    def _render_trace(self, trace: Trace) -> list[Text]:
        duration = format_duration(trace.exec_frame.duration, MILLISECOND)
        lines = [
            self._start_line().append(f"{trace.request.method} {trace.request.url} [{duration}]")
        ]

        for description, passed in trace.expectations.items():
            self._indent_in()
            status = Status.PASSED if passed else Status.FAILED
            line = self._start_line()
            line.append_text(render_status(status, OutputMode.ICON))
            line.append(" ")
            line.append_text(render_dimmed(description))
            lines.append(line)
            self._indent_out()

        return lines

    def _start_line(self) -> Text:
        return Text(" " * self._indent)

    def _indent_in(self) -> None:
        self._indent += self.indent_size

    def _indent_out(self) -> None:
        self._indent -= self.indent_size
