"""Rendering of per-suite output: result headers, timing labels and
failure bodies.
"""

from __future__ import annotations

import os
import re
from collections.abc import Iterable
from pathlib import PurePath

from rollcall import _style
from rollcall._progress import pluralize
from rollcall._types import AggregatedResults, SuiteResult, TestOutcome
from rollcall.config import ReporterConfig

SLOW_SUITE_SECONDS = 2.5

_ANCESTRY_SEPARATOR = " › "
_DESC_BULLET = "● "
_MSG_BULLET = "  - "
_MSG_INDENT = " " * len(_MSG_BULLET)

# File "/abs/path.py", line 12, in test_x
_TRACEBACK_FILE = re.compile(r'^(\s*File ")([^"]+)(".*)$')
# /abs/path.py:12: AssertionError
_PATH_LOCATION = re.compile(r"^(\s*)(/[^:\s]+)(:\d+.*)$")


def format_seconds(value: float) -> str:
    """Seconds with at most millisecond precision: 2.5, 0.123, 3."""
    text = f"{value:.3f}".rstrip("0").rstrip(".")
    return text if text not in ("", "-0") else "0"


def display_path(path: str, config: ReporterConfig) -> str:
    if not config.root_dir:
        return path
    return os.path.relpath(path, config.root_dir)


def run_time_label(suite: SuiteResult, config: ReporterConfig) -> str | None:
    """``(Rs)`` for suites with timing, highlighted when the suite was slow."""
    if suite.perf_stats is None:
        return None
    shown = format_seconds(suite.perf_stats.elapsed)
    label = f"({shown}s)"
    # Judge the value the reader sees.
    if float(shown) > SLOW_SUITE_SECONDS:
        label = _style.format_msg(label, _style.FAIL, config)
    return label


def result_header(
    passed: bool,
    test_name: str,
    config: ReporterConfig,
    columns: Iterable[str | None] = (),
) -> str:
    if passed:
        tag = _style.format_msg(" PASS ", _style.PASS, config)
    else:
        tag = _style.format_msg(" FAIL ", _style.FAIL, config)
    parts = [tag, _style.format_msg(test_name, _style.TEST_NAME, config)]
    parts.extend(column for column in columns if column)
    return " ".join(parts)


def _relative_to(path: str, root_path: str) -> str:
    try:
        return str(PurePath(path).relative_to(root_path))
    except ValueError:
        return path


def _relativize_line(line: str, root_path: str | None) -> str:
    if not root_path:
        return line
    match = _TRACEBACK_FILE.match(line) or _PATH_LOCATION.match(line)
    if match is None:
        return line
    head, path, tail = match.groups()
    return f"{head}{_relative_to(path, root_path)}{tail}"


def _format_message(message: str, root_path: str | None) -> str:
    lines = [_relativize_line(line, root_path) for line in message.splitlines()]
    return _MSG_BULLET + ("\n" + _MSG_INDENT).join(lines)


def _format_outcome(outcome: TestOutcome, root_path: str | None, use_color: bool) -> str:
    def paint(text: str) -> str:
        return _style.colorize(text, _style.TEST_NAME) if use_color else text

    ancestry = "".join(paint(title) + _ANCESTRY_SEPARATOR for title in outcome.ancestor_titles)
    lines = [paint(_DESC_BULLET) + ancestry + outcome.title]
    lines.extend(_format_message(message, root_path) for message in outcome.failure_messages)
    return "\n".join(lines)


def format_failure_message(
    suite: SuiteResult, *, root_path: str | None = None, use_color: bool = True
) -> str:
    """Build the detailed failure text for one suite.

    Each failed test becomes a bulleted block headed by its ancestry;
    traceback paths under *root_path* are shown relative to it. Suites that
    failed without any recorded test detail render as an empty string.
    """
    if suite.test_exec_error is not None:
        title = _DESC_BULLET + "Runtime Error"
        if use_color:
            title = _style.colorize(title, _style.TEST_NAME)
        body = "\n".join(
            _relativize_line(line, root_path) for line in suite.test_exec_error.splitlines()
        )
        return f"{title}\n{body}"

    failed = [outcome for outcome in suite.test_results if outcome.status == "failed"]
    return "\n".join(_format_outcome(outcome, root_path, use_color) for outcome in failed)


def run_summary(aggregated: AggregatedResults, run_time: float, config: ReporterConfig) -> str:
    """``"1 test failed, 3 tests passed (4 total in 2 test suites, run time 1.2s)"``."""
    parts = []
    if aggregated.num_failed_tests:
        failed = pluralize(aggregated.num_failed_tests, "test") + " failed"
        parts.append(_style.format_msg(failed, _style.FAILED_COUNT, config) + ", ")
    passed = pluralize(aggregated.num_passed_tests, "test") + " passed"
    parts.append(_style.format_msg(passed, _style.PASSED_COUNT, config))
    suites = pluralize(aggregated.num_total_test_suites, "test suite")
    parts.append(
        f" ({aggregated.num_total_tests} total in {suites}, "
        f"run time {format_seconds(run_time)}s)"
    )
    return "".join(parts)
