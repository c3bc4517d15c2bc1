"""Tests for result models and status rendering."""

from __future__ import annotations

import logging
from collections.abc import Callable

import pytest
from pydantic import ValidationError

from caseflow.errors import InvalidBatchError
from caseflow.models import (
    Case,
    Failure,
    ResponseInfo,
    Suite,
    TestResult,
    Trace,
    batch_suite,
    validate_batch,
)
from caseflow.status import OutputMode, Status, render_status


class TestSuite:
    """Tests for suite naming."""

    def test_full_name_with_package(self) -> None:
        suite = Suite(name="users", path="api/v1")
        assert suite.package_name == "api.v1"
        assert suite.full_name == "api.v1.users"

    def test_full_name_without_package(self) -> None:
        suite = Suite(name="users")
        assert suite.package_name == ""
        assert suite.full_name == "users"

    @pytest.mark.parametrize(
        "path, package",
        [
            ("./api/v1", "api.v1"),
            ("api\\v1", "api.v1"),
            ("/api/v1/", "api.v1"),
            (".", ""),
        ],
    )
    def test_package_name_normalization(self, path: str, package: str) -> None:
        assert Suite(name="s", path=path).package_name == package

    def test_suite_is_immutable(self) -> None:
        suite = Suite(name="users")
        with pytest.raises(ValidationError):
            suite.name = "other"

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            Suite(name="  ")


class TestTestResult:
    """Tests for TestResult."""

    def test_status(self, make_result: Callable[..., TestResult]) -> None:
        assert make_result().status is Status.PASSED
        assert make_result(failure="boom").status is Status.FAILED
        assert make_result(skipped="later").status is Status.SKIPPED

    def test_failed_follows_failure(self, make_result: Callable[..., TestResult]) -> None:
        assert not make_result().failed
        assert make_result(failure="boom").failed

    def test_skipped_and_failed_rejected(self, suite: Suite) -> None:
        with pytest.raises(ValidationError, match="both skipped and failed"):
            TestResult(
                suite=suite,
                case=Case(name="c"),
                skipped=True,
                failure=Failure(message="boom"),
            )

    def test_last_response(self, suite: Suite) -> None:
        result = TestResult(
            suite=suite,
            case=Case(name="c"),
            traces=[
                Trace(response=ResponseInfo(status_code=200)),
                Trace(response=ResponseInfo(status_code=404, body="not found")),
                Trace(),
            ],
        )
        assert result.last_response.status_code == 404


class TestBatches:
    """Tests for batch helpers."""

    def test_batch_suite_of_empty_batch(self) -> None:
        assert batch_suite([]) is None

    def test_first_suite_is_authoritative(
        self, make_result: Callable[..., TestResult], caplog: pytest.LogCaptureFixture
    ) -> None:
        other = Suite(name="orders")
        batch = [make_result("a"), make_result("b", suite=other)]

        with caplog.at_level(logging.WARNING, logger="caseflow.models"):
            suite = batch_suite(batch)

        assert suite.full_name == "api.v1.users"
        assert "orders" in caplog.text

    def test_validate_batch(self, make_result: Callable[..., TestResult]) -> None:
        assert validate_batch([make_result("a"), make_result("b")]).name == "users"

    def test_validate_empty_batch(self) -> None:
        with pytest.raises(InvalidBatchError, match="empty"):
            validate_batch([])

    def test_validate_mixed_batch(self, make_result: Callable[..., TestResult]) -> None:
        batch = [make_result("a"), make_result("b", suite=Suite(name="orders"))]
        with pytest.raises(InvalidBatchError) as exc_info:
            validate_batch(batch)
        assert exc_info.value.context.extra["found_suite"] == "orders"


class TestStatusRendering:
    """Tests for status styling."""

    def test_labels(self) -> None:
        assert render_status(Status.PASSED, OutputMode.LABEL).plain == "PASSED"
        assert render_status(Status.FAILED, OutputMode.LABEL).plain == "FAILED"
        assert render_status(Status.SKIPPED, OutputMode.LABEL).plain == "SKIPPED"

    def test_icons(self) -> None:
        assert render_status(Status.PASSED, OutputMode.ICON).plain == "√"
        assert render_status(Status.FAILED, OutputMode.ICON).plain == "×"
        assert render_status(Status.SKIPPED, OutputMode.ICON).plain == ""

    def test_style_depends_on_status_only(self) -> None:
        for status in Status:
            label = render_status(status, OutputMode.LABEL)
            icon = render_status(status, OutputMode.ICON)
            assert label.style == icon.style == status.style
            assert status.style.bold

    def test_colors(self) -> None:
        assert Status.PASSED.style.color.name == "green"
        assert Status.FAILED.style.color.name == "red"
        assert Status.SKIPPED.style.color.name == "yellow"
