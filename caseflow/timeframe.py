"""Execution time frames.

A TimeFrame captures the start and end instants of something that ran: a
whole test run, a single case, or one traced HTTP call inside a case.

Example:
    >>> frame = TimeFrame.begin()
    >>> ...  # do work
    >>> frame.close()
    >>> format_duration(frame.duration)
    '12ms'
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

MILLISECOND = timedelta(milliseconds=1)
MICROSECOND = timedelta(microseconds=1)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass
class TimeFrame:
    """Start/end instant pair with a derived duration.

    The end instant stays mutable until the frame is closed. Frames can be
    widened with ``extend`` to cover the span of another frame.

    Attributes:
        start: When the measured activity began.
        end: When it finished, or None while still running.
    """

    start: datetime | None = None
    end: datetime | None = None

    @classmethod
    def begin(cls) -> TimeFrame:
        """Open a frame starting now."""
        return cls(start=utcnow())

    def close(self) -> TimeFrame:
        """Set the end instant to now and return the frame."""
        self.end = utcnow()
        return self

    @property
    def closed(self) -> bool:
        return self.end is not None

    @property
    def duration(self) -> timedelta:
        """Time between start and end, zero when either is unknown."""
        if self.start is None or self.end is None:
            return timedelta(0)
        if self.end < self.start:
            return timedelta(0)
        return self.end - self.start

    def extend(self, other: TimeFrame) -> TimeFrame:
        """Widen this frame so that it also covers ``other``.

        The start moves to the earlier of both starts and the end to the
        later of both ends. Missing instants on either side are ignored.
        """
        if other.start is not None and (self.start is None or other.start < self.start):
            self.start = other.start
        if other.end is not None and (self.end is None or other.end > self.end):
            self.end = other.end
        return self

    def copy(self) -> TimeFrame:
        return TimeFrame(start=self.start, end=self.end)


def round_duration(duration: timedelta, unit: timedelta = MILLISECOND) -> timedelta:
    """Round a duration to the nearest multiple of ``unit`` (half away from zero)."""
    if unit <= timedelta(0):
        return duration
    units, remainder = divmod(duration, unit)
    if remainder * 2 >= unit:
        units += 1
    return units * unit


def format_duration(duration: timedelta, unit: timedelta = MILLISECOND) -> str:
    """Render a duration compactly after rounding it to ``unit``.

    Sub-second values use the largest fitting unit (``850µs``, ``100ms``),
    longer ones are split into hours, minutes and fractional seconds
    (``1.5s``, ``2m3.5s``, ``1h0m2s``).

    Example:
        >>> format_duration(timedelta(milliseconds=1500))
        '1.5s'
        >>> format_duration(timedelta(microseconds=100400))
        '100ms'
    """
    rounded = round_duration(duration, unit)
    micros = (rounded.days * 86_400 + rounded.seconds) * 1_000_000 + rounded.microseconds
    sign = ""
    if micros < 0:
        sign, micros = "-", -micros

    if micros == 0:
        return "0s"
    if micros < 1_000:
        return f"{sign}{micros}µs"
    if micros < 1_000_000:
        return f"{sign}{_trim(micros / 1_000)}ms"

    hours, rest = divmod(micros, 3_600_000_000)
    minutes, rest = divmod(rest, 60_000_000)
    seconds = _trim(rest / 1_000_000)

    if hours:
        return f"{sign}{hours}h{minutes}m{seconds}s"
    if minutes:
        return f"{sign}{minutes}m{seconds}s"
    return f"{sign}{seconds}s"


def _trim(value: float) -> str:
    text = f"{value:.6f}".rstrip("0").rstrip(".")
    return text or "0"
