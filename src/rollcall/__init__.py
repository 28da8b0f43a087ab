"""rollcall: progressive terminal reporting for test-suite runs."""

from rollcall._format import format_failure_message
from rollcall._protocols import CoverageReporter, OutputSink, Reporter
from rollcall._style import format_msg
from rollcall._types import (
    AggregatedResults,
    PerfStats,
    RecordedRun,
    SuiteResult,
    TestOutcome,
)
from rollcall.config import ReporterConfig, load_config
from rollcall.reporter import DefaultReporter, RunState

__all__ = [
    # Data types
    "PerfStats",
    "TestOutcome",
    "SuiteResult",
    "AggregatedResults",
    "RecordedRun",
    # Config
    "ReporterConfig",
    "load_config",
    # Reporting
    "DefaultReporter",
    "RunState",
    "format_msg",
    "format_failure_message",
    # Protocols
    "Reporter",
    "OutputSink",
    "CoverageReporter",
]
