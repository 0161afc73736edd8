#
# src/suitebar/pytest_plugin.py
#
"""
pytest integration: shows the suitebar progress bar while pytest runs.

Registered through the ``pytest11`` entry point but inert unless ``--suitebar``
is passed. One unit of progress is one test file. Combine with
``-p no:terminal`` to replace pytest's own progress output entirely.
"""

import time
from typing import Any

import pytest
import structlog

from suitebar.progress import ProgressTheme
from suitebar.reporter import SuiteProgressReporter
from suitebar.results import AggregatedResults, SuiteResult
from suitebar.telemetry import StructLogger, configure_default_logging

log: StructLogger = structlog.get_logger("pytest_plugin")

PLUGIN_NAME = "suitebar-reporter"


def suite_id(nodeid: str) -> str:
    """The file part of a pytest node id."""
    return nodeid.split("::", 1)[0]


class SuitebarPlugin:
    """Maps pytest's hook sequence onto SuiteProgressReporter notifications."""

    def __init__(self, reporter: SuiteProgressReporter):
        self.reporter = reporter
        self.results = AggregatedResults()
        self._last_item_of_suite: dict[str, str] = {}
        self._suite_results: dict[str, SuiteResult] = {}
        self._failure_parts: dict[str, list[str]] = {}
        self._failed_nodeids: set[str] = set()
        self._current_suite: str | None = None

    def _suite(self, suite: str) -> SuiteResult:
        if suite not in self._suite_results:
            self._suite_results[suite] = SuiteResult(path=suite)
        return self._suite_results[suite]

    @pytest.hookimpl(trylast=True)
    def pytest_collection_finish(self, session: pytest.Session) -> None:
        for item in session.items:
            self._last_item_of_suite[suite_id(item.nodeid)] = item.nodeid
        self.results = AggregatedResults(
            num_total_test_suites=len(self._last_item_of_suite),
            start_time=int(time.time() * 1000),
        )
        self.reporter.on_run_start(self.results)

    def pytest_runtest_logstart(self, nodeid: str, location: Any) -> None:
        suite = suite_id(nodeid)
        if suite != self._current_suite:
            self._current_suite = suite
            self.reporter.on_test_start(suite)

    def pytest_runtest_logreport(self, report: pytest.TestReport) -> None:
        suite = self._suite(suite_id(report.nodeid))
        if report.failed:
            if report.nodeid not in self._failed_nodeids:
                self._failed_nodeids.add(report.nodeid)
                suite.num_failing_tests += 1
                # A passing call already counted followed by a failing teardown.
                if report.when == "teardown" and suite.num_passing_tests > 0:
                    suite.num_passing_tests -= 1
            text = report.longreprtext
            if text:
                self._failure_parts.setdefault(suite.path, []).append(f"{report.nodeid}\n{text}")
        elif report.skipped:
            if report.when in ("setup", "call"):
                suite.num_pending_tests += 1
        elif report.when == "call" and report.passed:
            # Non-strict xpass reports as passed; xfail reports as skipped.
            suite.num_passing_tests += 1

    def pytest_runtest_logfinish(self, nodeid: str, location: Any) -> None:
        suite = suite_id(nodeid)
        if self._last_item_of_suite.get(suite) != nodeid:
            return
        result = self._suite(suite)
        parts = self._failure_parts.get(suite)
        if parts:
            result.failure_message = "\n\n".join(parts)
        self.results.add_suite(result)
        self.reporter.on_test_result(suite, result, self.results)

    def pytest_sessionfinish(self, session: pytest.Session, exitstatus: int) -> None:
        if session.config.pluginmanager.has_plugin("terminalreporter"):
            # pytest leaves its "[100%]" progress marker unterminated.
            self.reporter.console.line()
        self.reporter.on_run_complete(None, self.results)


def pytest_addoption(parser: pytest.Parser) -> None:
    group = parser.getgroup("suitebar", "suite progress bar")
    group.addoption(
        "--suitebar",
        action="store_true",
        default=False,
        help="Show a per-file progress bar and a pass/fail summary.",
    )
    group.addoption(
        "--suitebar-bar-width",
        type=int,
        default=40,
        help="Width of the progress bar in characters (default: 40).",
    )
    group.addoption(
        "--suitebar-no-color",
        action="store_true",
        default=False,
        help="Render the progress bar and summary without colours.",
    )


def pytest_configure(config: pytest.Config) -> None:
    if not config.getoption("suitebar", default=False):
        return
    configure_default_logging()
    theme = ProgressTheme(
        bar_width=max(config.getoption("suitebar_bar_width"), 1),
        color=not config.getoption("suitebar_no_color"),
    )
    reporter = SuiteProgressReporter(config, theme=theme)
    config.pluginmanager.register(SuitebarPlugin(reporter), PLUGIN_NAME)
    log.debug("suitebar pytest plugin registered", bar_width=theme.bar_width)


# 🔼⚙️
