"""Protocol definitions for rollcall's collaborators and extension points.

Everything here is structural (typing.Protocol): a text stream such as
``sys.stdout`` or ``io.StringIO`` already is an OutputSink, and a custom
reporter only needs the three lifecycle methods.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from rollcall._types import AggregatedResults, SuiteResult
from rollcall.config import ReporterConfig


@runtime_checkable
class OutputSink(Protocol):
    """Append-only text stream the reporter writes to."""

    def write(self, text: str, /) -> Any: ...

    def flush(self) -> Any: ...


@runtime_checkable
class Reporter(Protocol):
    """Receives run lifecycle events from an execution engine, in order:
    one run start, one call per finished suite, one run complete.
    """

    def on_run_start(self, config: ReporterConfig, aggregated: AggregatedResults) -> None: ...

    def on_test_result(
        self, config: ReporterConfig, suite: SuiteResult, aggregated: AggregatedResults
    ) -> None: ...

    def on_run_complete(self, config: ReporterConfig, aggregated: AggregatedResults) -> None: ...


@runtime_checkable
class CoverageReporter(Protocol):
    """Extension point for coverage output.

    rollcall ships no implementation; the default reporter calls one only
    when ``collect_coverage`` is set and an instance was supplied.
    """

    def on_suite(self, config: ReporterConfig, suite: SuiteResult) -> None: ...

    def on_run_complete(self, config: ReporterConfig, aggregated: AggregatedResults) -> None: ...
