"""The transient "Running N test suites..." line."""

from __future__ import annotations

from rollcall import _style
from rollcall._protocols import OutputSink
from rollcall._types import AggregatedResults
from rollcall.config import ReporterConfig

CLEAR_LINE = "\r\x1b[K"


def pluralize(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def print_waiting_on(
    stream: OutputSink, aggregated: AggregatedResults, config: ReporterConfig
) -> None:
    remaining = aggregated.remaining_suites
    if remaining <= 0:
        return
    message = f"Running {pluralize(remaining, 'test suite')}..."
    stream.write(_style.format_msg(message, _style.WAITING, config))


def clear_waiting_on(stream: OutputSink, config: ReporterConfig) -> None:
    # Control characters would end up verbatim in redirected logs.
    stream.write("\n" if config.no_highlight else CLEAR_LINE)
