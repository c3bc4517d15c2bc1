"""Tests for reporting settings and the reporter factory."""

from __future__ import annotations

import io
from pathlib import Path

import pytest

from caseflow.config import ReportingSettings, load_settings
from caseflow.errors import ConfigurationError, ErrorCode
from caseflow.reporters import (
    ConsoleReporter,
    JUnitXMLReporter,
    MultiReporter,
    create_reporter,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for key in (
        "CASEFLOW_REPORTERS",
        "CASEFLOW_REPORT_DIR",
        "CASEFLOW_INDENT_SIZE",
        "CASEFLOW_NO_COLOR",
        "CASEFLOW_HOSTNAME",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.chdir(tmp_path)


class TestReportingSettings:
    """Tests for ReportingSettings."""

    def test_defaults(self) -> None:
        settings = ReportingSettings()

        assert settings.reporters == ["console"]
        assert settings.report_dir == "reports"
        assert settings.indent_size == 4
        assert settings.no_color is False
        assert settings.hostname == "localhost"

    def test_comma_separated_reporters(self) -> None:
        settings = ReportingSettings(reporters="console, junit")
        assert settings.reporters == ["console", "junit"]

    def test_invalid_reporter(self) -> None:
        with pytest.raises(ValueError, match="Invalid reporters"):
            ReportingSettings(reporters=["console", "html"])

    def test_negative_indent(self) -> None:
        with pytest.raises(ValueError, match="indent_size"):
            ReportingSettings(indent_size=-1)

    def test_reads_environment(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASEFLOW_REPORTERS", "junit,console")
        monkeypatch.setenv("CASEFLOW_REPORT_DIR", "out/junit")

        settings = ReportingSettings()

        assert settings.reporters == ["junit", "console"]
        assert settings.report_dir == "out/junit"


class TestLoadSettings:
    """Tests for load_settings."""

    def test_without_file(self) -> None:
        assert load_settings().reporters == ["console"]

    def test_missing_file_uses_defaults(self, tmp_path: Path) -> None:
        assert load_settings(tmp_path / "absent.yaml").report_dir == "reports"

    def test_yaml_file(self, tmp_path: Path) -> None:
        config = tmp_path / "caseflow.yaml"
        config.write_text(
            "reporters:\n  - console\n  - junit\nreport_dir: build/junit\nindent_size: 2\n"
        )

        settings = load_settings(config)

        assert settings.reporters == ["console", "junit"]
        assert settings.report_dir == "build/junit"
        assert settings.indent_size == 2

    def test_env_overrides_file(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        config = tmp_path / "caseflow.yaml"
        config.write_text("hostname: from-file\nno_color: false\n")
        monkeypatch.setenv("CASEFLOW_HOSTNAME", "from-env")
        monkeypatch.setenv("CASEFLOW_NO_COLOR", "yes")

        settings = load_settings(config)

        assert settings.hostname == "from-env"
        assert settings.no_color is True

    def test_invalid_yaml(self, tmp_path: Path) -> None:
        config = tmp_path / "caseflow.yaml"
        config.write_text("reporters: [console\n")

        with pytest.raises(ConfigurationError) as exc_info:
            load_settings(config)
        assert exc_info.value.error_code is ErrorCode.INVALID_CONFIG

    def test_yaml_must_be_mapping(self, tmp_path: Path) -> None:
        config = tmp_path / "caseflow.yaml"
        config.write_text("- console\n")

        with pytest.raises(ConfigurationError, match="mapping"):
            load_settings(config)

    def test_invalid_value(self, tmp_path: Path) -> None:
        config = tmp_path / "caseflow.yaml"
        config.write_text("reporters: [pdf]\n")

        with pytest.raises(ConfigurationError, match="Invalid reporting configuration"):
            load_settings(config)

    def test_invalid_env_value(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("CASEFLOW_INDENT_SIZE", "wide")

        with pytest.raises(ConfigurationError, match="environment"):
            load_settings()


class TestCreateReporter:
    """Tests for create_reporter."""

    def test_default_is_console(self) -> None:
        assert isinstance(create_reporter(output=io.StringIO()), ConsoleReporter)

    def test_single_junit(self, tmp_path: Path) -> None:
        settings = ReportingSettings(
            reporters=["junit"], report_dir=str(tmp_path), hostname="ci-runner"
        )

        reporter = create_reporter(settings)

        assert isinstance(reporter, JUnitXMLReporter)
        assert reporter.out_path == tmp_path
        assert reporter.hostname == "ci-runner"

    def test_several_reporters_are_broadcast_in_order(self, tmp_path: Path) -> None:
        settings = ReportingSettings(
            reporters=["junit", "console"], report_dir=str(tmp_path), indent_size=2
        )

        reporter = create_reporter(settings, output=io.StringIO())

        assert isinstance(reporter, MultiReporter)
        junit, console = reporter.reporters
        assert isinstance(junit, JUnitXMLReporter)
        assert isinstance(console, ConsoleReporter)
        assert console.indent_size == 2

    def test_no_reporters(self) -> None:
        with pytest.raises(ConfigurationError, match="At least one reporter"):
            create_reporter(ReportingSettings(reporters=[]))
