"""The default run reporter.

Consumes suite results as the engine finishes them, keeps a transient
progress line up to date, prints a PASS/FAIL header per suite and a one-line
summary at the end.
"""

from __future__ import annotations

import enum
import logging
import sys
import time
from collections.abc import Callable
from typing import Any

from rollcall._format import (
    display_path,
    format_failure_message,
    result_header,
    run_summary,
    run_time_label,
)
from rollcall._presentation import FailurePresentation, failure_presentation
from rollcall._progress import clear_waiting_on, print_waiting_on
from rollcall._protocols import CoverageReporter, OutputSink
from rollcall._types import AggregatedResults, SuiteResult
from rollcall._verbose import VerboseLogger
from rollcall.config import ReporterConfig

logger = logging.getLogger("rollcall.reporter")


class RunState(enum.Enum):
    NOT_STARTED = "not_started"
    RUNNING = "running"
    BAILED = "bailed"
    COMPLETED = "completed"


class DefaultReporter:
    """Terminal reporter driven by the three run lifecycle calls.

    Usage:
        reporter = DefaultReporter()
        reporter.on_run_start(config, aggregated)
        for suite in suites:
            aggregated.record(suite)
            reporter.on_test_result(config, suite, aggregated)
        reporter.on_run_complete(config, aggregated)

    With ``config.bail`` the first failing suite ends the run: the summary
    is printed, the stream flushed and ``exit(0)`` called.
    """

    def __init__(
        self,
        stream: OutputSink | None = None,
        *,
        exit: Callable[[int], Any] | None = None,
        coverage_reporter: CoverageReporter | None = None,
    ) -> None:
        self._stream = stream if stream is not None else sys.stdout
        self._exit = exit or sys.exit
        self._coverage = coverage_reporter
        self._presentation: FailurePresentation = failure_presentation(ReporterConfig())
        self._verbose_logger: VerboseLogger | None = None
        self.state = RunState.NOT_STARTED

    def log(self, text: str) -> None:
        self._stream.write(text + "\n")

    def on_run_start(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        if self.state is not RunState.NOT_STARTED:
            logger.warning("on_run_start called while %s", self.state.value)
        self.state = RunState.RUNNING
        self._presentation = failure_presentation(config)
        self._verbose_logger = VerboseLogger(self._stream, config) if config.verbose else None
        logger.debug(
            "Run started: %d suites, %s failure output",
            aggregated.num_total_test_suites,
            self._presentation.mode,
        )
        print_waiting_on(self._stream, aggregated, config)

    def on_test_result(
        self, config: ReporterConfig, suite: SuiteResult, aggregated: AggregatedResults
    ) -> None:
        if self.state is not RunState.RUNNING:
            logger.warning("on_test_result called while %s", self.state.value)
        clear_waiting_on(self._stream, config)

        all_passed = suite.passed
        header = result_header(
            all_passed,
            display_path(suite.test_file_path, config),
            config,
            [run_time_label(suite, config)],
        )
        self.log(header)
        if config.verbose:
            self._verbose(config).verbose_log(suite.test_results)
        if config.collect_coverage and self._coverage is not None:
            self._coverage.on_suite(config, suite)

        if not all_passed:
            body = format_failure_message(
                suite, root_path=config.root_dir, use_color=not config.no_highlight
            )
            self._presentation.present(self._stream, header, body, aggregated)
            if config.bail:
                self._bail(config, aggregated)
                return

        print_waiting_on(self._stream, aggregated, config)

    def on_run_complete(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        if self.state not in (RunState.RUNNING, RunState.BAILED):
            logger.warning("on_run_complete called while %s", self.state.value)
        # An engine that stops early leaves the progress line up.
        if self.state is RunState.RUNNING and aggregated.remaining_suites > 0:
            clear_waiting_on(self._stream, config)
        self.state = RunState.COMPLETED

        self._presentation.drain(self._stream, aggregated)
        if aggregated.num_total_tests == 0:
            logger.debug("No tests ran, skipping summary")
            return

        if config.collect_coverage and self._coverage is not None:
            self._coverage.on_run_complete(config, aggregated)

        run_time = time.time() - aggregated.start_time
        self.log(run_summary(aggregated, run_time, config))
        self._stream.flush()

    def _verbose(self, config: ReporterConfig) -> VerboseLogger:
        if self._verbose_logger is None:
            self._verbose_logger = VerboseLogger(self._stream, config)
        return self._verbose_logger

    def _bail(self, config: ReporterConfig, aggregated: AggregatedResults) -> None:
        logger.info(
            "Bailing after first failing suite, %d suites not reported",
            aggregated.remaining_suites,
        )
        self.state = RunState.BAILED
        self.on_run_complete(config, aggregated)
        self._stream.flush()
        self._exit(0)
