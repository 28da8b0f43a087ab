from __future__ import annotations

import argparse
import sys
from pathlib import Path

from rollcall._logging import setup_logging
from rollcall._protocols import Reporter
from rollcall._types import AggregatedResults, RecordedRun
from rollcall.config import ReporterConfig, load_config, load_payload
from rollcall.registry import load_component
from rollcall.reporter import DefaultReporter


def _parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="rollcall", description="Replay recorded test suite results as terminal output"
    )
    parser.add_argument("run_file", help="Path to JSON/YAML file with a 'suites' list")
    parser.add_argument("--config", help="Path to JSON/YAML reporter config")
    parser.add_argument(
        "--verbose",
        action="store_true",
        default=None,
        help="Print every test and hold failure details until the run ends.",
    )
    parser.add_argument(
        "--bail",
        action="store_true",
        default=None,
        help="Stop (exit status 0) after the first failing suite.",
    )
    parser.add_argument("--root-dir", default=None, help="Show suite paths relative to DIR.")
    parser.add_argument(
        "--no-highlight",
        action="store_true",
        default=None,
        help="Plain output without ANSI escape sequences.",
    )
    parser.add_argument(
        "--coverage-reporter",
        default=None,
        metavar="MODULE.CLASS",
        help="Coverage reporter to call when collect_coverage is enabled.",
    )
    parser.add_argument("--log-level", default="WARNING", help="Logging level (default: WARNING).")
    return parser.parse_args(argv)


def _build_config(args: argparse.Namespace) -> ReporterConfig:
    config = load_config(args.config) if args.config else ReporterConfig()
    overrides = {
        "verbose": args.verbose,
        "bail": args.bail,
        "no_highlight": args.no_highlight,
        "root_dir": str(Path(args.root_dir).resolve()) if args.root_dir else None,
    }
    return config.replace(**{k: v for k, v in overrides.items() if v is not None})


def load_run(path: str | Path) -> RecordedRun:
    payload = load_payload(path)
    if isinstance(payload, list):
        payload = {"suites": payload}
    return RecordedRun.model_validate(payload)


def replay(config: ReporterConfig, run: RecordedRun, reporter: Reporter) -> AggregatedResults:
    """Feed a recorded run through *reporter* the way a live engine would."""
    aggregated = AggregatedResults(num_total_test_suites=len(run.suites))
    reporter.on_run_start(config, aggregated)
    for suite in run.suites:
        aggregated.record(suite)
        reporter.on_test_result(config, suite, aggregated)
    reporter.on_run_complete(config, aggregated)
    return aggregated


def main(argv: list[str] | None = None) -> int:
    args = _parse_args(argv)
    setup_logging(args.log_level)
    try:
        config = _build_config(args)
        run = load_run(args.run_file)
        coverage = load_component(args.coverage_reporter) if args.coverage_reporter else None
    except (OSError, ValueError, ImportError) as exc:
        print(f"rollcall: error: {exc}", file=sys.stderr)
        return 2

    reporter = DefaultReporter(coverage_reporter=coverage)
    aggregated = replay(config, run, reporter)
    return 0 if aggregated.success else 1


__all__ = ["load_run", "main", "replay"]
