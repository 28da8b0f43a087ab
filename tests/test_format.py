"""Tests for suite headers, timing labels, failure bodies and the summary line."""

from __future__ import annotations

import pytest

from rollcall._format import (
    display_path,
    format_failure_message,
    format_seconds,
    result_header,
    run_summary,
    run_time_label,
)
from rollcall._types import AggregatedResults
from rollcall.config import ReporterConfig

from conftest import ROOT, make_outcome, make_suite


# ---------------------------------------------------------------------------
# Timing
# ---------------------------------------------------------------------------
class TestFormatSeconds:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, "2.5"), (0.123, "0.123"), (3.0, "3"), (0.0, "0"), (1.23456, "1.235"), (0.0001, "0")],
    )
    def test_trims_trailing_zeros(self, value: float, expected: str) -> None:
        assert format_seconds(value) == expected


class TestRunTimeLabel:
    def test_absent_without_perf_stats(self, plain_config: ReporterConfig) -> None:
        assert run_time_label(make_suite(), plain_config) is None

    def test_plain_label(self, color_config: ReporterConfig) -> None:
        assert run_time_label(make_suite(elapsed=1.25), color_config) == "(1.25s)"

    @pytest.mark.parametrize("failing", [0, 1])
    def test_slow_suite_highlighted(self, color_config: ReporterConfig, failing: int) -> None:
        label = run_time_label(make_suite(elapsed=2.6, failing=failing), color_config)
        assert label == "\x1b[1;41m(2.6s)\x1b[0m"

    @pytest.mark.parametrize("failing", [0, 1])
    def test_threshold_is_strict(self, color_config: ReporterConfig, failing: int) -> None:
        label = run_time_label(make_suite(elapsed=2.5, failing=failing), color_config)
        assert label == "(2.5s)"

    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [(2.5004, "(2.5s)"), (2.5006, "\x1b[1;41m(2.501s)\x1b[0m")],
    )
    def test_threshold_uses_displayed_value(
        self, color_config: ReporterConfig, elapsed: float, expected: str
    ) -> None:
        assert run_time_label(make_suite(elapsed=elapsed), color_config) == expected

    def test_slow_label_plain_without_highlight(self, plain_config: ReporterConfig) -> None:
        assert run_time_label(make_suite(elapsed=9.0), plain_config) == "(9s)"


# ---------------------------------------------------------------------------
# Header
# ---------------------------------------------------------------------------
class TestDisplayPath:
    def test_relative_to_root_dir(self, plain_config: ReporterConfig) -> None:
        assert display_path("/repo/tests/a.py", plain_config) == "tests/a.py"

    def test_absolute_without_root_dir(self) -> None:
        assert display_path("/repo/tests/a.py", ReporterConfig()) == "/repo/tests/a.py"


class TestResultHeader:
    def test_pass_plain(self, plain_config: ReporterConfig) -> None:
        assert result_header(True, "a.py", plain_config) == " PASS  a.py"

    def test_fail_with_timing(self, plain_config: ReporterConfig) -> None:
        assert result_header(False, "a.py", plain_config, ["(0.5s)"]) == " FAIL  a.py (0.5s)"

    def test_missing_columns_skipped(self, plain_config: ReporterConfig) -> None:
        assert result_header(True, "a.py", plain_config, [None]) == " PASS  a.py"

    def test_colored(self, color_config: ReporterConfig) -> None:
        header = result_header(True, "a.py", color_config)
        assert header == "\x1b[1;42m PASS \x1b[0m \x1b[1ma.py\x1b[0m"


# ---------------------------------------------------------------------------
# Failure body
# ---------------------------------------------------------------------------
class TestFormatFailureMessage:
    def test_bulleted_block_per_failed_test(self) -> None:
        suite = make_suite(
            outcomes=[
                make_outcome("adds"),
                make_outcome("subtracts", status="failed", ancestors=["Math"], messages=["boom"]),
                make_outcome("divides", status="failed", messages=["first", "second"]),
            ],
            passing=1,
            failing=2,
        )
        body = format_failure_message(suite, use_color=False)
        assert body == (
            "● Math › subtracts\n"
            "  - boom\n"
            "● divides\n"
            "  - first\n"
            "  - second"
        )

    def test_multiline_messages_are_indented(self) -> None:
        suite = make_suite(
            outcomes=[make_outcome("x", status="failed", messages=["line one\nline two"])],
            failing=1,
            passing=0,
        )
        assert format_failure_message(suite, use_color=False) == "● x\n  - line one\n    line two"

    def test_traceback_paths_relative_to_root(self) -> None:
        message = (
            "AssertionError: nope\n"
            f'  File "{ROOT}/tests/test_math.py", line 3, in test_adds\n'
            f'  File "/usr/lib/python3/unittest.py", line 9, in run\n'
            f"{ROOT}/tests/test_math.py:3: AssertionError"
        )
        suite = make_suite(
            outcomes=[make_outcome("adds", status="failed", messages=[message])],
            failing=1,
            passing=0,
        )
        body = format_failure_message(suite, root_path=ROOT, use_color=False)
        assert body.splitlines() == [
            "● adds",
            "  - AssertionError: nope",
            '      File "tests/test_math.py", line 3, in test_adds',
            '      File "/usr/lib/python3/unittest.py", line 9, in run',
            "    tests/test_math.py:3: AssertionError",
        ]

    def test_paths_untouched_without_root(self) -> None:
        message = f"{ROOT}/tests/test_math.py:3: AssertionError"
        suite = make_suite(
            outcomes=[make_outcome("adds", status="failed", messages=[message])],
            failing=1,
            passing=0,
        )
        assert message in format_failure_message(suite, use_color=False)

    def test_colored_titles(self) -> None:
        suite = make_suite(
            outcomes=[make_outcome("adds", status="failed", ancestors=["Math"], messages=["x"])],
            failing=1,
            passing=0,
        )
        body = format_failure_message(suite, use_color=True)
        assert body.startswith("\x1b[1m● \x1b[0m\x1b[1mMath\x1b[0m › adds")

    def test_runtime_error(self) -> None:
        suite = make_suite(passing=0, exec_error="ImportError: no module named 'nope'")
        body = format_failure_message(suite, use_color=False)
        assert body == "● Runtime Error\nImportError: no module named 'nope'"

    def test_failing_count_without_detail_renders_empty(self) -> None:
        suite = make_suite(outcomes=[], failing=1, passing=0)
        assert format_failure_message(suite, use_color=False) == ""


# ---------------------------------------------------------------------------
# Summary
# ---------------------------------------------------------------------------
class TestRunSummary:
    def test_all_passed(self, plain_config: ReporterConfig) -> None:
        agg = AggregatedResults(num_total_test_suites=3)
        for name in ("a.py", "b.py", "c.py"):
            agg.record(make_suite(name))
        assert run_summary(agg, 1.5, plain_config) == (
            "3 tests passed (3 total in 3 test suites, run time 1.5s)"
        )

    def test_singular_wording(self, plain_config: ReporterConfig) -> None:
        agg = AggregatedResults(num_total_test_suites=1)
        agg.record(make_suite(passing=1, failing=1))
        assert run_summary(agg, 0.25, plain_config) == (
            "1 test failed, 1 test passed (2 total in 1 test suite, run time 0.25s)"
        )

    def test_zero_passed_is_plural(self, plain_config: ReporterConfig) -> None:
        agg = AggregatedResults(num_total_test_suites=2)
        agg.record(make_suite(passing=0, failing=2))
        assert run_summary(agg, 2, plain_config) == (
            "2 tests failed, 0 tests passed (2 total in 2 test suites, run time 2s)"
        )

    def test_colored_counts(self, color_config: ReporterConfig) -> None:
        agg = AggregatedResults(num_total_test_suites=1)
        agg.record(make_suite(passing=1, failing=1))
        assert run_summary(agg, 1, color_config) == (
            "\x1b[1;31m1 test failed\x1b[0m, \x1b[1;32m1 test passed\x1b[0m"
            " (2 total in 1 test suite, run time 1s)"
        )
