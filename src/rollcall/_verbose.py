"""Per-test tree output for verbose runs."""

from __future__ import annotations

from dataclasses import dataclass, field

from rollcall import _style
from rollcall._protocols import OutputSink
from rollcall._types import TestOutcome
from rollcall.config import ReporterConfig

_INDENT = "  "

_MARKERS = {
    "passed": ("✓", _style.SUCCESS),
    "failed": ("✕", _style.FAILURE),
    "pending": ("○", _style.PENDING),
}


@dataclass
class _Node:
    tests: list[TestOutcome] = field(default_factory=list)
    children: dict[str, _Node] = field(default_factory=dict)


class VerboseLogger:
    """Prints every test of a suite, nested under its ancestor titles.

    Usage:
        logger = VerboseLogger(sys.stdout, config)
        logger.verbose_log(suite.test_results)
    """

    def __init__(self, stream: OutputSink, config: ReporterConfig) -> None:
        self._stream = stream
        self._config = config

    def log(self, text: str) -> None:
        self._stream.write(text + "\n")

    def verbose_log(self, test_results: list[TestOutcome]) -> None:
        self._traverse(self._build_tree(test_results), "")

    @staticmethod
    def _build_tree(test_results: list[TestOutcome]) -> _Node:
        root = _Node()
        for outcome in test_results:
            node = root
            for title in outcome.ancestor_titles:
                node = node.children.setdefault(title, _Node())
            node.tests.append(outcome)
        return root

    def _traverse(self, node: _Node, indentation: str) -> None:
        for outcome in node.tests:
            marker, style = _MARKERS[outcome.status]
            self.log(
                _style.format_msg(f"{indentation}{marker} {outcome.title}", style, self._config)
            )
        for title, child in node.children.items():
            self.log(indentation + title)
            self._traverse(child, indentation + _INDENT)
