"""Run the query API conformance scenarios against the configured engine."""
from __future__ import annotations

import argparse
import logging
import sys
from typing import Mapping, Sequence, TextIO

from application.conformance import RunReport, Scenario, ScenarioResult, build_default_registry, run_suite
from infrastructure.config import ConfigurationError, HarnessConfig, build_session_factory, load_config
from ui.logging_utils import setup_logging

logger = logging.getLogger(__name__)


class ConsoleReporter:
    """Prints one line per scenario in the order they run."""

    def __init__(self, stream: TextIO, *, verbose: bool = False) -> None:
        self._stream = stream
        self._verbose = verbose

    def started(self, scenario: Scenario) -> None:
        self._stream.write(f"Running test: {scenario.name}...")
        self._stream.flush()

    def finished(self, result: ScenarioResult) -> None:
        if result.passed:
            self._stream.write(" ok.\n")
        else:
            if result.failure is not None:
                self._stream.write(f" {result.failure.describe()}")
            self._stream.write(" FAILED\n")
        if self._verbose:
            for note in result.notes:
                self._stream.write(f"    {note}\n")
        self._stream.flush()

    def aborted(self) -> None:
        self._stream.write("Test failed - aborting further tests.\n")

    def summary(self, report: RunReport) -> None:
        self._stream.write(f"apitest finished: {report.passed} tests passed, {report.failed} failed.\n")
        self._stream.flush()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="apitest", description=__doc__)
    parser.add_argument("-v", "--verbose", action="store_true", help="Print diagnostics for failing scenarios.")
    parser.add_argument(
        "-o",
        "--abort-on-error",
        action="store_true",
        dest="abort_on_failure",
        help="Stop after the first failing scenario.",
    )
    parser.add_argument(
        "-f",
        "--fussy",
        action="store_true",
        help="Exit with a non-zero status when any scenario fails.",
    )
    return parser


def exit_status(report: RunReport, config: HarnessConfig) -> int:
    if config.fussy and report.failed:
        return 1
    return 0


def main(
    argv: Sequence[str] | None = None,
    *,
    environ: Mapping[str, str] | None = None,
    stdout: TextIO | None = None,
) -> int:
    args = build_parser().parse_args(argv)
    out = stdout or sys.stdout
    setup_logging(verbose=args.verbose)

    try:
        config = load_config(
            verbose=args.verbose,
            abort_on_failure=args.abort_on_failure,
            fussy=args.fussy,
            environ=environ,
        )
    except ConfigurationError as exc:
        out.write(f"Error: {exc}\n")
        return 1

    registry = build_default_registry()
    reporter = ConsoleReporter(out, verbose=config.verbose)
    logger.info("Running %d scenarios against %s (data: %s)", len(registry), config.engine, config.data_dir)
    report = run_suite(
        registry,
        data_dir=config.data_dir,
        session_factory=build_session_factory(config),
        abort_on_failure=config.abort_on_failure,
        listener=reporter,
    )
    if report.aborted:
        reporter.aborted()
    reporter.summary(report)
    return exit_status(report, config)


if __name__ == "__main__":
    sys.exit(main())
