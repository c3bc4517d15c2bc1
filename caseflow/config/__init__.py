"""Configuration management for caseflow."""

from caseflow.config.settings import REPORTER_NAMES, ReportingSettings, load_settings

__all__ = [
    "REPORTER_NAMES",
    "ReportingSettings",
    "load_settings",
]
