#
# src/suitebar/reporter.py
#
"""
Run controller: turns host lifecycle notifications into progress-bar calls
and prints the end-of-run summary.
"""

import time
from collections.abc import Callable, Mapping
from typing import Any, TextIO

import structlog
from rich.console import Console
from rich.text import Text

from suitebar.progress import ProgressBar, ProgressTheme, SuiteStatus, format_duration
from suitebar.results import AggregatedResults, coerce_results
from suitebar.telemetry import StructLogger

log: StructLogger = structlog.get_logger("reporter")

OBSOLETE_SNAPSHOT_HINT = " found, run with -u flag to remove them"


def _epoch_ms() -> int:
    return int(time.time() * 1000)


class SuiteProgressReporter:
    """
    Shows a live progress bar while suites run and a summary when they finish.

    The host calls, in order: `on_run_start` once, `on_test_start` /
    `on_test_result` per suite, and `on_run_complete` once. Calls arriving out
    of order never raise. The bar goes to `stream` (stderr by default); the
    banner and summary go to `console` (stdout by default).
    """

    def __init__(
        self,
        global_config: Any = None,
        options: Mapping[str, Any] | None = None,
        *,
        theme: ProgressTheme | None = None,
        console: Console | None = None,
        stream: TextIO | None = None,
        clock: Callable[[], int] = _epoch_ms,
    ):
        self.theme = theme or ProgressTheme()
        self.console = console or Console(highlight=False, no_color=not self.theme.color)
        self.stream = stream
        self._clock = clock
        self._num_total_test_suites = 0
        self._bar: ProgressBar | None = None
        self._error: BaseException | None = None

    @property
    def num_total_test_suites(self) -> int:
        return self._num_total_test_suites

    @property
    def bar(self) -> ProgressBar | None:
        return self._bar

    def _print(self, text: str | Text = "", style=None) -> None:
        if isinstance(text, str):
            text = Text(text, style=style or "")
        self.console.print(text, soft_wrap=True)

    def on_run_start(
        self,
        aggregated_results: AggregatedResults | Mapping[str, Any] | None,
        options: Mapping[str, Any] | None = None,
    ) -> None:
        results = coerce_results(aggregated_results)
        self._num_total_test_suites = results.num_total_test_suites

        self._print()
        self._print(f"Found {self._num_total_test_suites} test suites", style=self.theme.info_style)
        log.debug("Run started", suites=self._num_total_test_suites)

    def on_test_start(self, test: Any = None) -> None:
        if self._bar is None:
            self._bar = ProgressBar(stream=self.stream, theme=self.theme)
            self._bar.initialize(self._num_total_test_suites)
        log.debug("Suite started", suite=str(test) if test is not None else None)

    def on_test_result(
        self,
        test: Any = None,
        test_result: Any = None,
        aggregated_result: Any = None,
    ) -> None:
        if self._bar is None:
            log.debug("Suite result before any suite started, ignoring")
            return
        self._bar.advance()

    def on_run_complete(
        self,
        contexts: Any,
        results: AggregatedResults | Mapping[str, Any] | None,
    ) -> None:
        if self._bar is not None:
            self._bar.complete()

        summary = coerce_results(results)
        theme = self.theme

        for suite in summary.test_results:
            if suite.failure_message:
                # Raw write: rich would expand tabs and drop control characters.
                self.console.file.write(f"{suite.failure_message}\n")

        elapsed_ms = max(self._clock() - summary.start_time, 0)
        self._print(
            f"Ran {summary.num_total_tests} tests in {format_duration(elapsed_ms)}",
            style=theme.info_style,
        )

        if summary.snapshot is not None and summary.snapshot.failure:
            self._print(
                Text.assemble(
                    "\n",
                    ("Obsolete snapshot(s)", theme.failed_style),
                    OBSOLETE_SNAPSHOT_HINT,
                    "\n",
                )
            )

        for status, count, label in (
            (SuiteStatus.PASSED, summary.num_passed_tests, "passing"),
            (SuiteStatus.FAILED, summary.num_failed_tests, "failing"),
            (SuiteStatus.PENDING, summary.num_pending_tests, "pending"),
        ):
            if count:
                self._print(self._status_line(status, f" {count} {label}"))

        log.info(
            "Run complete",
            passed=summary.num_passed_tests,
            failed=summary.num_failed_tests,
            pending=summary.num_pending_tests,
            elapsed_ms=elapsed_ms,
        )

    def _status_line(self, status: SuiteStatus, text: str) -> Text:
        style = self.theme.style_for(status)
        return Text.assemble((self.theme.glyph_for(status), style), (text, style))

    def get_last_error(self) -> BaseException | None:
        """Nothing in the reporter captures errors, so this is always None."""
        return self._error


# 🔼⚙️
