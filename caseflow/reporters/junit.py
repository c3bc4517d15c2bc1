"""JUnit XML reporter for CI/CD integration.

Writes one JUnit XML document per suite, as soon as the suite is reported,
to ``<out_path>/<suite full name>.xml``. The documents follow the
conventional JUnit XML layout understood by Jenkins, GitHub Actions,
GitLab CI and others:

    <testsuite id="0" name="users" package="api.v1" timestamp="..."
               time="0.150" hostname="localhost" tests="3" failures="1"
               errors="0" skipped="1">
      <properties />
      <testcase name="list users" classname="api.v1.users" time="0.100" />
      <testcase name="create user" classname="api.v1.users" time="0.050">
        <failure type="FailedExpectation" message="...">details</failure>
      </testcase>
      <testcase name="delete user" classname="api.v1.users" time="0.000">
        <skipped message="flag disabled" />
      </testcase>
      <system-out />
      <system-err />
    </testsuite>

Example:
    >>> from caseflow.reporters import JUnitXMLReporter
    >>> reporter = JUnitXMLReporter(out_path="reports/junit")
    >>> reporter.report(results)  # writes reports/junit/api.v1.users.xml
"""

from __future__ import annotations

import itertools
import logging
import re
import threading
import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path

from caseflow.errors import ErrorContext, ReportWriteError
from caseflow.models import Batch, TestResult, batch_suite
from caseflow.reporters.base import Reporter
from caseflow.timeframe import TimeFrame, utcnow

logger = logging.getLogger(__name__)

FAILURE_TYPE = "FailedExpectation"
DEFAULT_HOSTNAME = "localhost"

_ANSI_ESCAPES = re.compile(r"\x1b\[[0-?]*[ -/]*[@-~]")
# Anything outside the XML 1.0 Char production.
_XML_ILLEGAL = re.compile("[^\t\n\r\x20-\ud7ff\ue000-\ufffd\U00010000-\U0010ffff]")
_FILE_NAME_UNSAFE = re.compile(r"[\\/\x00-\x1f]+")


def xml_safe(text: str) -> str:
    """Drop terminal color codes and characters XML 1.0 cannot carry."""
    return _XML_ILLEGAL.sub("", _ANSI_ESCAPES.sub("", text))


def report_file_stem(full_name: str) -> str:
    """File name stem for a suite, confined to a single path component."""
    stem = _FILE_NAME_UNSAFE.sub(".", full_name).strip(".")
    return stem or "suite"


@dataclass
class FailureRecord:
    message: str
    details: str
    type: str = FAILURE_TYPE


@dataclass
class CaseRecord:
    """One ``testcase`` element."""

    name: str
    classname: str
    time: float
    failure: FailureRecord | None = None
    skipped_message: str | None = None
    skipped: bool = False


@dataclass
class SuiteDocument:
    """One ``testsuite`` document.

    ``time`` is the duration of ``frame``, the union of all case frames,
    not the sum of the case durations.
    """

    id: int
    name: str
    package: str
    full_name: str
    timestamp: str
    hostname: str = DEFAULT_HOSTNAME
    tests: int = 0
    failures: int = 0
    errors: int = 0
    skipped: int = 0
    time: float = 0.0
    frame: TimeFrame = field(default_factory=TimeFrame)
    cases: list[CaseRecord] = field(default_factory=list)

    def add(self, result: TestResult) -> CaseRecord:
        """Append the record of ``result`` and update counts and suite time."""
        record = CaseRecord(
            name=result.case.name,
            classname=self.full_name,
            time=result.exec_frame.duration.total_seconds(),
        )

        if result.failure is not None:
            record.failure = FailureRecord(
                message=result.failure.message,
                details=format_failure_details(result),
            )
            self.failures += 1

        if result.skipped:
            record.skipped = True
            record.skipped_message = result.skip_reason or ""
            self.skipped += 1

        self.tests += 1
        self.cases.append(record)

        self.frame.extend(result.exec_frame)
        self.time = self.frame.duration.total_seconds()
        return record


def format_timestamp(moment: datetime | None) -> str:
    """UTC ISO-8601 timestamp with millisecond precision, e.g. 2024-05-01T12:00:00.250Z.

    Naive datetimes are taken as UTC. ``None`` means now.
    """
    if moment is None:
        moment = utcnow()
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    moment = moment.astimezone(timezone.utc)
    return moment.strftime("%Y-%m-%dT%H:%M:%S.") + f"{moment.microsecond // 1000:03d}Z"


def format_failure_details(result: TestResult) -> str:
    """Body of the ``failure`` element: the message plus any known context."""
    if result.failure is None:
        return ""

    parts = [result.failure.message]
    if result.failure.details:
        parts.append(result.failure.details)

    response = result.last_response
    if response is not None:
        line = f"Response: {response.status_code}"
        if response.body:
            line = f"{line}\n{response.body}"
        parts.append(line)

    return "\n\n".join(parts)


def build_suite_document(
    batch: Batch, suite_id: int = 0, hostname: str = DEFAULT_HOSTNAME
) -> SuiteDocument | None:
    """Aggregate a batch into a suite document.

    The document is initialised from the first result: suite identity,
    timestamp (start of its frame, or now when unknown) and the initial
    suite frame. Returns None for an empty batch.
    """
    suite = batch_suite(batch)
    if suite is None:
        return None

    first = batch[0]
    document = SuiteDocument(
        id=suite_id,
        name=suite.name,
        package=suite.package_name,
        full_name=suite.full_name,
        timestamp=format_timestamp(first.exec_frame.start),
        hostname=hostname,
        frame=first.exec_frame.copy(),
    )

    for result in batch:
        document.add(result)

    return document


def build_xml(document: SuiteDocument) -> ET.Element:
    """Build the ``testsuite`` element of a suite document."""
    test_suite = ET.Element("testsuite")
    test_suite.set("id", str(document.id))
    test_suite.set("name", xml_safe(document.name))
    test_suite.set("package", xml_safe(document.package))
    test_suite.set("timestamp", document.timestamp)
    test_suite.set("time", f"{document.time:.3f}")
    test_suite.set("hostname", xml_safe(document.hostname))
    test_suite.set("tests", str(document.tests))
    test_suite.set("failures", str(document.failures))
    test_suite.set("errors", str(document.errors))
    test_suite.set("skipped", str(document.skipped))

    ET.SubElement(test_suite, "properties")

    for record in document.cases:
        test_case = ET.SubElement(test_suite, "testcase")
        test_case.set("name", xml_safe(record.name))
        test_case.set("classname", xml_safe(record.classname))
        test_case.set("time", f"{record.time:.3f}")

        if record.failure is not None:
            failure = ET.SubElement(test_case, "failure")
            failure.set("type", record.failure.type)
            failure.set("message", xml_safe(record.failure.message))
            failure.text = xml_safe(record.failure.details)

        if record.skipped:
            skipped = ET.SubElement(test_case, "skipped")
            skipped.set("message", xml_safe(record.skipped_message or ""))

    ET.SubElement(test_suite, "system-out")
    ET.SubElement(test_suite, "system-err")

    return test_suite


def render_xml(document: SuiteDocument) -> str:
    """Serialise a suite document, XML declaration included."""
    root = build_xml(document)
    ET.indent(root)
    return ET.tostring(root, encoding="utf-8", xml_declaration=True).decode("utf-8") + "\n"


class JUnitXMLReporter(Reporter):
    """Produces a separate JUnit XML file for each suite.

    Nothing is buffered across calls: every ``report`` builds its suite
    document and writes it right away, so ``init`` and ``flush`` have
    nothing to do. The only state shared between concurrent calls is the
    suite id counter and the registry of written file names, both behind
    a short lock; building and writing happen outside of it.

    When the same suite is reported twice, the second file gets a numeric
    suffix (``api.v1.users-1.xml``) instead of replacing the first. Issued
    file names are tracked, so a suite literally named ``users-1`` gets a
    name of its own too. Path separators in suite names become dots.

    Attributes:
        out_path: Directory receiving the XML files, created when missing.
        hostname: Value of the ``hostname`` attribute.
    """

    def __init__(self, out_path: str | Path, hostname: str = DEFAULT_HOSTNAME) -> None:
        self.out_path = Path(out_path)
        self.hostname = hostname

        self._ids = itertools.count()
        self._file_names: set[str] = set()
        self._lock = threading.Lock()

    def init(self) -> None:
        pass

    def report(self, batch: Batch) -> None:
        document = build_suite_document(batch, hostname=self.hostname)
        if document is None:
            logger.debug("Ignoring empty batch")
            return

        with self._lock:
            document.id = next(self._ids)
            file_name = self._reserve_file_name(document.full_name)

        self._write(document, self.out_path / file_name)

    def flush(self) -> None:
        logger.debug("JUnit reports written to %s", self.out_path)

    def _reserve_file_name(self, full_name: str) -> str:
        stem = report_file_stem(full_name)
        file_name = f"{stem}.xml"
        for suffix in itertools.count(1):
            if file_name not in self._file_names:
                break
            file_name = f"{stem}-{suffix}.xml"
        self._file_names.add(file_name)
        return file_name

    def _write(self, document: SuiteDocument, file_path: Path) -> None:
        context = ErrorContext(suite_name=document.full_name, path=str(file_path))

        try:
            self.out_path.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Cannot create report directory %s: %s", self.out_path, e)
            raise ReportWriteError(
                f"Cannot create report directory {self.out_path}",
                context=context,
                cause=e,
            ) from e

        content = render_xml(document)
        try:
            with open(file_path, "w", encoding="utf-8") as f:
                f.write(content)
        except OSError as e:
            logger.error("Cannot write report %s: %s", file_path, e)
            raise ReportWriteError(
                f"Cannot write report {file_path}",
                context=context,
                cause=e,
            ) from e

        logger.debug(
            "Wrote %s (%d tests, %d failures, %d skipped)",
            file_path,
            document.tests,
            document.failures,
            document.skipped,
        )
