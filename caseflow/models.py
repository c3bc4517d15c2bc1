"""Result models consumed by the reporters.

The test harness produces one TestResult per executed case and hands the
results of a finished suite to the reporters as a batch:

- Suite: named collection of cases sharing a namespace/path
- Case: a single test unit within a suite
- Trace: one sub-operation of a case (usually an HTTP call) with its own
  timing and per-expectation outcomes
- TestResult: the outcome of one case

Example:
    >>> suite = Suite(name="users", path="api/v1")
    >>> suite.full_name
    'api.v1.users'
    >>> result = TestResult(suite=suite, case=Case(name="list users"))
    >>> result.status
    <Status.PASSED: ('PASSED', '√', 'green')>
"""

from __future__ import annotations

import logging
import re
from collections.abc import Sequence

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from caseflow.errors import ErrorContext, InvalidBatchError
from caseflow.status import Status
from caseflow.timeframe import TimeFrame

logger = logging.getLogger(__name__)

_SEPARATORS = re.compile(r"[\\/]+")


class Suite(BaseModel):
    """Logical grouping of test cases.

    Attributes:
        name: Short suite name.
        path: Originating directory or namespace, relative to the suites root.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    path: str = ""

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Suite name cannot be empty")
        return v

    @property
    def package_name(self) -> str:
        """Dotted package name derived from the suite path.

        Path separators become dots, a leading ``./`` and surrounding dots
        are dropped.
        """
        path = self.path.strip()
        if path.startswith("./") or path.startswith(".\\"):
            path = path[2:]
        if path in ("", "."):
            return ""
        return _SEPARATORS.sub(".", path).strip(".")

    @property
    def full_name(self) -> str:
        package = self.package_name
        return f"{package}.{self.name}" if package else self.name


class Case(BaseModel):
    """Single test unit, scoped to a suite."""

    model_config = ConfigDict(frozen=True)

    name: str


class RequestInfo(BaseModel):
    """Descriptor of a request issued while running a case."""

    method: str
    url: str


class ResponseInfo(BaseModel):
    status_code: int
    body: str | None = None


class Trace(BaseModel):
    """One sub-operation of a case.

    Attributes:
        exec_frame: When the operation ran.
        request: The request issued, if any. Traces without a request are not
            rendered.
        response: The response received, if any.
        expectations: Expectation description mapped to whether it passed,
            in evaluation order.
    """

    exec_frame: TimeFrame = Field(default_factory=TimeFrame)
    request: RequestInfo | None = None
    response: ResponseInfo | None = None
    expectations: dict[str, bool] = Field(default_factory=dict)


class Failure(BaseModel):
    """Why a case failed.

    ``details`` is free-form supplementary context (a response body, a diff)
    and is optional.
    """

    message: str
    details: str | None = None

    def __str__(self) -> str:
        return self.message


class TestResult(BaseModel):
    """Outcome of a single case.

    A result is failed iff it carries a ``failure``. Skipped results carry
    no failure; the combination is rejected so that run totals always
    reconcile as ``total = passed + failed + skipped``.
    """

    __test__ = False  # not a pytest test class

    suite: Suite
    case: Case
    exec_frame: TimeFrame = Field(default_factory=TimeFrame)
    failure: Failure | None = None
    skipped: bool = False
    skip_reason: str | None = None
    traces: list[Trace] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_outcome(self) -> TestResult:
        if self.skipped and self.failure is not None:
            raise ValueError(f"Case '{self.case.name}' cannot be both skipped and failed")
        return self

    @property
    def failed(self) -> bool:
        return self.failure is not None

    @property
    def status(self) -> Status:
        if self.skipped:
            return Status.SKIPPED
        if self.failed:
            return Status.FAILED
        return Status.PASSED

    @property
    def last_response(self) -> ResponseInfo | None:
        for trace in reversed(self.traces):
            if trace.response is not None:
                return trace.response
        return None


Batch = Sequence[TestResult]


def batch_suite(batch: Batch) -> Suite | None:
    """Return the suite a batch belongs to.

    The first result's suite is authoritative. Producers must never mix
    suites in one batch; when they do, the violation is logged and the
    remaining results are still reported under the first suite.
    """
    if not batch:
        return None

    suite = batch[0].suite
    strangers = {r.suite.full_name for r in batch if r.suite != suite}
    if strangers:
        logger.warning(
            "Batch for suite %s also contains results of %s; reporting them under %s",
            suite.full_name,
            ", ".join(sorted(strangers)),
            suite.full_name,
        )
    return suite


def validate_batch(batch: Batch) -> Suite:
    """Check the batch contract and return the batch's suite.

    Reporters tolerate contract violations; producers that want them caught
    early call this before handing a batch over.

    Raises:
        InvalidBatchError: If the batch is empty or mixes suites.
    """
    if not batch:
        raise InvalidBatchError("Result batch is empty")

    suite = batch[0].suite
    for result in batch:
        if result.suite != suite:
            raise InvalidBatchError(
                "Result batch mixes suites",
                context=ErrorContext(suite_name=suite.full_name, case_name=result.case.name),
                found_suite=result.suite.full_name,
            )
    return suite
