"""Core data types for rollcall.

Suite results arrive from the execution engine as frozen Pydantic models;
the run-wide accumulator is the one mutable model in the package.
"""

from __future__ import annotations

import time
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class RollcallModel(BaseModel):
    model_config = ConfigDict(frozen=True, extra="forbid")


class PerfStats(RollcallModel):
    """Wall-clock timestamps (epoch seconds) bracketing a suite run."""

    start: float
    end: float

    @property
    def elapsed(self) -> float:
        return self.end - self.start


class TestOutcome(RollcallModel):
    """A single test inside a suite."""

    __test__ = False

    title: str
    ancestor_titles: list[str] = Field(default_factory=list)
    status: Literal["passed", "failed", "pending"] = "passed"
    failure_messages: list[str] = Field(default_factory=list)

    @property
    def passed(self) -> bool:
        return self.status == "passed"


class SuiteResult(RollcallModel):
    """Everything the engine knows about one completed suite (test file)."""

    test_file_path: str
    num_failing_tests: int = 0
    num_passing_tests: int = 0
    num_pending_tests: int = 0
    perf_stats: PerfStats | None = None
    test_results: list[TestOutcome] = Field(default_factory=list)
    test_exec_error: str | None = None
    """Set when the suite could not run at all (import or collection error)."""

    @property
    def passed(self) -> bool:
        return self.num_failing_tests == 0 and self.test_exec_error is None


class AggregatedResults(BaseModel):
    """Running totals for a whole run.

    The engine owns the counters and bumps them through :meth:`record`.
    ``post_suite_headers`` belongs to the reporter: only verbose runs append
    to it, and it is drained once at run completion.
    """

    model_config = ConfigDict(extra="forbid")

    num_passed_tests: int = 0
    num_failed_tests: int = 0
    num_pending_tests: int = 0
    num_total_tests: int = 0
    num_passed_test_suites: int = 0
    num_failed_test_suites: int = 0
    num_total_test_suites: int = 0
    start_time: float = Field(default_factory=time.time)
    post_suite_headers: list[tuple[str, str]] = Field(default_factory=list)

    @property
    def num_completed_test_suites(self) -> int:
        return self.num_passed_test_suites + self.num_failed_test_suites

    @property
    def remaining_suites(self) -> int:
        return max(self.num_total_test_suites - self.num_completed_test_suites, 0)

    @property
    def success(self) -> bool:
        return self.num_failed_tests == 0 and self.num_failed_test_suites == 0

    def record(self, suite: SuiteResult) -> None:
        """Fold a finished suite into the counters.

        Pending tests are counted on their own and never enter
        ``num_total_tests``, so passed + failed == total once the run ends.
        """
        self.num_passed_tests += suite.num_passing_tests
        self.num_failed_tests += suite.num_failing_tests
        self.num_pending_tests += suite.num_pending_tests
        self.num_total_tests += suite.num_passing_tests + suite.num_failing_tests
        if suite.passed:
            self.num_passed_test_suites += 1
        else:
            self.num_failed_test_suites += 1


class RecordedRun(RollcallModel):
    """A finished run saved to disk, replayable through any reporter."""

    suites: list[SuiteResult] = Field(default_factory=list)
