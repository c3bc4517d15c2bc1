"""Outcome kinds and their console styling."""

from __future__ import annotations

from enum import Enum

from rich.style import Style
from rich.text import Text

CARET_ICON = "\u2514"  # └


class OutputMode(Enum):
    """How a status is rendered: as its label text or as its icon."""

    LABEL = "label"
    ICON = "icon"


class Status(Enum):
    """Outcome of a single test case.

    Each member carries a label, an icon and a display color.
    """

    PASSED = ("PASSED", "√", "green")
    FAILED = ("FAILED", "×", "red")
    SKIPPED = ("SKIPPED", "", "yellow")

    def __init__(self, label: str, icon: str, color: str) -> None:
        self.label = label
        self.icon = icon
        self.color = color

    @property
    def style(self) -> Style:
        return Style(color=self.color, bold=True)


DIMMED = Style(color="bright_black")


def render_status(status: Status, mode: OutputMode = OutputMode.LABEL) -> Text:
    """Return the styled text for a status.

    Pure function: the caller writes the returned text, style included, in a
    single step.

    Example:
        >>> render_status(Status.FAILED, OutputMode.ICON).plain
        '×'
    """
    value = status.icon if mode is OutputMode.ICON else status.label
    return Text(value, style=status.style)


def render_dimmed(content: object) -> Text:
    return Text(str(content), style=DIMMED)
