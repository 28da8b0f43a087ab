"""Where failure bodies go: straight to the stream, or held until the run ends.

Verbose runs interleave per-test trees from every suite, so their failure
detail is buffered and printed after the last suite instead.
"""

from __future__ import annotations

from rollcall._protocols import OutputSink
from rollcall._types import AggregatedResults
from rollcall.config import ReporterConfig


class ImmediateFailures:
    mode = "immediate"

    def present(
        self, stream: OutputSink, header: str, body: str, aggregated: AggregatedResults
    ) -> None:
        # Single write, flushed before any bail exit.
        stream.write(body + "\n")
        stream.flush()

    def drain(self, stream: OutputSink, aggregated: AggregatedResults) -> None:
        return None


class DeferredFailures:
    mode = "deferred"

    def present(
        self, stream: OutputSink, header: str, body: str, aggregated: AggregatedResults
    ) -> None:
        aggregated.post_suite_headers.append((header, body))

    def drain(self, stream: OutputSink, aggregated: AggregatedResults) -> None:
        if not aggregated.post_suite_headers:
            return
        blocks = [text for pair in aggregated.post_suite_headers for text in pair]
        stream.write("\n".join(blocks) + "\n")


FailurePresentation = ImmediateFailures | DeferredFailures


def failure_presentation(config: ReporterConfig) -> FailurePresentation:
    return DeferredFailures() if config.verbose else ImmediateFailures()
