"""Shared fixtures for rollcall tests."""

from __future__ import annotations

import io
from types import SimpleNamespace
from typing import Any

import pytest

from rollcall._types import AggregatedResults, PerfStats, SuiteResult, TestOutcome
from rollcall.config import ReporterConfig

ROOT = "/repo"
START_TIME = 1000.0
NOW = 1001.5


# ---------------------------------------------------------------------------
# Fake collaborators
# ---------------------------------------------------------------------------
class RecordingStream(io.StringIO):
    """StringIO that also remembers every write and flush, in order."""

    def __init__(self) -> None:
        super().__init__()
        self.events: list[tuple[str, str]] = []

    def write(self, text: str) -> int:
        self.events.append(("write", text))
        return super().write(text)

    def flush(self) -> None:
        self.events.append(("flush", ""))
        super().flush()


class ExitCalled(Exception):
    def __init__(self, code: int) -> None:
        super().__init__(code)
        self.code = code


class FakeExit:
    """Stands in for sys.exit: records the status and unwinds like it."""

    def __init__(self) -> None:
        self.codes: list[int] = []

    def __call__(self, code: int) -> Any:
        self.codes.append(code)
        raise ExitCalled(code)


class FakeCoverage:
    def __init__(self) -> None:
        self.suites: list[str] = []
        self.completed = 0

    def on_suite(self, config: ReporterConfig, suite: SuiteResult) -> None:
        self.suites.append(suite.test_file_path)

    def on_run_complete(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        self.completed += 1


# ---------------------------------------------------------------------------
# Factories
# ---------------------------------------------------------------------------
def make_outcome(
    title: str = "works",
    *,
    status: str = "passed",
    ancestors: list[str] | None = None,
    messages: list[str] | None = None,
) -> TestOutcome:
    if status == "failed" and messages is None:
        messages = [f"AssertionError: {title} broke"]
    return TestOutcome(
        title=title,
        ancestor_titles=ancestors or [],
        status=status,
        failure_messages=messages or [],
    )


def make_suite(
    name: str = "a_test.py",
    *,
    passing: int = 1,
    failing: int = 0,
    elapsed: float | None = None,
    outcomes: list[TestOutcome] | None = None,
    exec_error: str | None = None,
) -> SuiteResult:
    if outcomes is None:
        outcomes = [make_outcome(f"passes {i}") for i in range(passing)]
        outcomes += [make_outcome(f"fails {i}", status="failed") for i in range(failing)]
    perf_stats = None
    if elapsed is not None:
        perf_stats = PerfStats(start=START_TIME, end=START_TIME + elapsed)
    return SuiteResult(
        test_file_path=f"{ROOT}/{name}",
        num_passing_tests=passing,
        num_failing_tests=failing,
        perf_stats=perf_stats,
        test_results=outcomes,
        test_exec_error=exec_error,
    )


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------
@pytest.fixture
def stream() -> RecordingStream:
    return RecordingStream()


@pytest.fixture
def fake_exit() -> FakeExit:
    return FakeExit()


@pytest.fixture
def plain_config() -> ReporterConfig:
    """Log-friendly config: no ANSI codes, paths relative to /repo."""
    return ReporterConfig(root_dir=ROOT, no_highlight=True)


@pytest.fixture
def color_config() -> ReporterConfig:
    return ReporterConfig(root_dir=ROOT)


@pytest.fixture
def frozen_clock(monkeypatch: pytest.MonkeyPatch) -> float:
    """Pin the reporter's clock so summaries show a fixed run time (1.5s)."""
    import rollcall.reporter

    monkeypatch.setattr(rollcall.reporter, "time", SimpleNamespace(time=lambda: NOW))
    return NOW


@pytest.fixture
def aggregated() -> AggregatedResults:
    return AggregatedResults(start_time=START_TIME)
