"""pytest plugin that reports a pytest session through rollcall.

Enable with ``pytest -p rollcall.pytest_plugin --rollcall``.

Provides:
- `--rollcall` to replace pytest's terminal output with one line per test
  file, failure details and a run summary
- `--rollcall-bail` to stop after the first failing test file
- `-v` maps to rollcall's verbose mode, `--color` to highlighting
"""

from __future__ import annotations

import logging
import sys
import time
from pathlib import Path
from typing import Any, NoReturn

import pytest

from rollcall._protocols import OutputSink
from rollcall._types import AggregatedResults, PerfStats, SuiteResult, TestOutcome
from rollcall.config import ReporterConfig
from rollcall.reporter import DefaultReporter

logger = logging.getLogger("rollcall.pytest")


# ---------------------------------------------------------------------------
# CLI options
# ---------------------------------------------------------------------------
def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("rollcall", "rollcall suite reporter")
    group.addoption(
        "--rollcall",
        action="store_true",
        default=False,
        help="Report one line per test file with rollcall instead of pytest's terminal output.",
    )
    group.addoption(
        "--rollcall-bail",
        action="store_true",
        default=False,
        help="With --rollcall: stop after the first failing test file (exit status 0).",
    )


@pytest.hookimpl(trylast=True)
def pytest_configure(config: pytest.Config) -> None:
    if not config.getoption("rollcall", default=False):
        return
    if hasattr(config, "workerinput"):
        return  # xdist workers report through the controller

    standard = config.pluginmanager.get_plugin("terminalreporter")
    if standard is not None:
        config.pluginmanager.unregister(standard)
        config.pluginmanager.register(_SilencedTerminalReporter(standard), "terminalreporter")

    stream = sys.stdout
    session = RollcallSession(reporter_config(config, stream), stream)
    config.pluginmanager.register(session, "rollcall-session")


def reporter_config(config: pytest.Config, stream: Any) -> ReporterConfig:
    color = config.getoption("color", default="auto")
    if color == "auto":
        no_highlight = not (hasattr(stream, "isatty") and stream.isatty())
    else:
        no_highlight = color == "no"
    return ReporterConfig(
        verbose=config.getoption("verbose", default=0) > 0,
        bail=config.getoption("rollcall_bail", default=False),
        root_dir=str(config.rootpath),
        no_highlight=no_highlight,
    )


class _SilencedTerminalReporter:
    """Keeps pytest's terminal writer reachable (assertion highlighting,
    pdb, live logging) without registering any of its report hooks.
    """

    def __init__(self, standard: Any) -> None:
        self._standard = standard

    def __getattr__(self, name: str) -> Any:
        return getattr(self._standard, name)


# ---------------------------------------------------------------------------
# Session bridge
# ---------------------------------------------------------------------------
def collapse_reports(nodeid: str, reports: list[pytest.TestReport]) -> TestOutcome:
    """Collapse the setup/call/teardown reports of one item into an outcome."""
    titles = nodeid.split("::")[1:] or [nodeid]
    failures = [report.longreprtext for report in reports if report.failed]
    if failures:
        status = "failed"
    elif any(report.skipped for report in reports):
        status = "pending"
    else:
        status = "passed"
    return TestOutcome(
        title=titles[-1],
        ancestor_titles=titles[:-1],
        status=status,
        failure_messages=failures,
    )


class RollcallSession:
    """Groups pytest items by file and hands each finished file to the reporter."""

    def __init__(self, config: ReporterConfig, stream: OutputSink) -> None:
        self.config = config
        self.reporter = DefaultReporter(stream, exit=self._bail)
        self.aggregated = AggregatedResults()
        self._running = False
        self._suite_of: dict[str, str] = {}
        self._remaining: dict[str, int] = {}
        self._started: dict[str, float] = {}
        self._reports: dict[str, list[pytest.TestReport]] = {}
        self._outcomes: dict[str, list[TestOutcome]] = {}
        self._broken: list[SuiteResult] = []

    def pytest_sessionstart(self, session: pytest.Session) -> None:
        self.aggregated = AggregatedResults()

    def pytest_collectreport(self, report: pytest.CollectReport) -> None:
        if not report.failed:
            return
        path = Path(self.config.root_dir or ".") / report.nodeid.split("::")[0]
        self._broken.append(
            SuiteResult(test_file_path=str(path), test_exec_error=report.longreprtext)
        )

    def pytest_collection_finish(self, session: pytest.Session) -> None:
        if session.config.option.collectonly:
            return
        for item in session.items:
            path = str(item.path)
            self._suite_of[item.nodeid] = path
            self._remaining[path] = self._remaining.get(path, 0) + 1

        self.aggregated.num_total_test_suites = len(self._remaining) + len(self._broken)
        self._running = True
        self.reporter.on_run_start(self.config, self.aggregated)
        for suite in self._broken:
            self._finish(suite)

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        path = self._suite_of.get(report.nodeid)
        if path is None or not self._running:
            return
        self._started.setdefault(path, time.time())
        self._reports.setdefault(report.nodeid, []).append(report)
        if report.when != "teardown":
            return

        outcome = collapse_reports(report.nodeid, self._reports.pop(report.nodeid))
        self._outcomes.setdefault(path, []).append(outcome)
        self._remaining[path] -= 1
        if self._remaining[path] == 0:
            self._finish(self._build_suite(path))

    def pytest_sessionfinish(self, session: pytest.Session) -> None:
        if not self._running:
            return
        self._running = False
        unfinished = [path for path, left in self._remaining.items() if left]
        if unfinished:
            logger.debug("Session ended with %d unfinished files", len(unfinished))
        self.reporter.on_run_complete(self.config, self.aggregated)

    def _build_suite(self, path: str) -> SuiteResult:
        outcomes = self._outcomes.pop(path, [])
        return SuiteResult(
            test_file_path=path,
            num_failing_tests=sum(1 for o in outcomes if o.status == "failed"),
            num_passing_tests=sum(1 for o in outcomes if o.status == "passed"),
            num_pending_tests=sum(1 for o in outcomes if o.status == "pending"),
            perf_stats=PerfStats(start=self._started.pop(path), end=time.time()),
            test_results=outcomes,
        )

    def _finish(self, suite: SuiteResult) -> None:
        self.aggregated.record(suite)
        self.reporter.on_test_result(self.config, suite, self.aggregated)

    def _bail(self, returncode: int) -> NoReturn:
        self._running = False
        pytest.exit("rollcall: stopped after the first failing test file", returncode=returncode)
