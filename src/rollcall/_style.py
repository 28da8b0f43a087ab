"""Terminal styles and the message formatter."""

from __future__ import annotations

from rich.color import ColorSystem
from rich.style import Style

from rollcall.config import ReporterConfig

FAIL = Style.parse("bold on red")
PASS = Style.parse("bold on green")
TEST_NAME = Style.parse("bold")
FAILED_COUNT = Style.parse("bold red")
PASSED_COUNT = Style.parse("bold green")
WAITING = Style.parse("bold bright_black")
PENDING = Style.parse("yellow")
SUCCESS = Style.parse("green")
FAILURE = Style.parse("red")


def colorize(text: str, style: Style) -> str:
    """Wrap *text* in the ANSI codes for *style* (16-color palette)."""
    return style.render(text, color_system=ColorSystem.STANDARD)


def format_msg(text: str, style: Style, config: ReporterConfig) -> str:
    """Style *text* unless the run asked for plain, log-friendly output."""
    if config.no_highlight:
        return text
    return colorize(text, style)
