"""Pytest fixtures for caseflow tests."""

from __future__ import annotations

import io
from collections.abc import Callable
from typing import Any

import pytest

from caseflow.models import Case, Failure, RequestInfo, Suite, TestResult, Trace
from caseflow.reporters.console import ConsoleReporter
from tests.helpers import frame, plain_console


@pytest.fixture
def suite() -> Suite:
    return Suite(name="users", path="api/v1")


@pytest.fixture
def make_result(suite: Suite) -> Callable[..., TestResult]:
    """Factory for results of ``suite``.

    Keyword arguments:
        name: Case name.
        start_ms, duration_ms: Execution frame relative to BASE_TIME.
        failure: Failure message, or a Failure.
        skipped: Skip reason, or True for a skip without reason.
        traces: List of Trace objects.
        suite: Override the owning suite.
    """

    def _make(
        name: str = "case",
        start_ms: float = 0,
        duration_ms: float = 10,
        failure: str | Failure | None = None,
        skipped: str | bool | None = None,
        traces: list[Trace] | None = None,
        suite: Suite = suite,
    ) -> TestResult:
        kwargs: dict[str, Any] = {}
        if isinstance(failure, str):
            kwargs["failure"] = Failure(message=failure)
        elif failure is not None:
            kwargs["failure"] = failure
        if skipped:
            kwargs["skipped"] = True
            if isinstance(skipped, str):
                kwargs["skip_reason"] = skipped
        return TestResult(
            suite=suite,
            case=Case(name=name),
            exec_frame=frame(start_ms, duration_ms),
            traces=traces or [],
            **kwargs,
        )

    return _make


@pytest.fixture
def http_trace() -> Trace:
    return Trace(
        exec_frame=frame(0, 20),
        request=RequestInfo(method="GET", url="http://localhost:8080/users"),
        expectations={"status code is 200": True, "body contains users": False},
    )


@pytest.fixture
def sample_batch(make_result: Callable[..., TestResult]) -> list[TestResult]:
    """One passed (100ms), one failed (50ms) and one skipped case."""
    return [
        make_result("list users", start_ms=0, duration_ms=100),
        make_result(
            "create user", start_ms=100, duration_ms=50, failure="expected 200 got 404"
        ),
        make_result("delete user", start_ms=150, duration_ms=0, skipped="flag disabled"),
    ]


@pytest.fixture
def output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console_reporter(output: io.StringIO) -> ConsoleReporter:
    return ConsoleReporter(console=plain_console(output))
