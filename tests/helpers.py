"""Shared builders for caseflow tests."""

from __future__ import annotations

import io
from datetime import datetime, timedelta, timezone

from rich.console import Console

from caseflow.timeframe import TimeFrame

BASE_TIME = datetime(2024, 5, 1, 12, 0, 0, tzinfo=timezone.utc)


def frame(start_ms: float = 0, duration_ms: float = 0) -> TimeFrame:
    """Frame starting ``start_ms`` after BASE_TIME and lasting ``duration_ms``."""
    start = BASE_TIME + timedelta(milliseconds=start_ms)
    return TimeFrame(start=start, end=start + timedelta(milliseconds=duration_ms))


def plain_console(buffer: io.StringIO) -> Console:
    """Console writing uncolored text to ``buffer``."""
    return Console(
        file=buffer,
        color_system=None,
        highlight=False,
        markup=False,
        emoji=False,
        soft_wrap=True,
        width=200,
    )
