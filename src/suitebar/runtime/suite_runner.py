# src/suitebar/runtime/suite_runner.py

"""
Runs suite files one after another through a TestRunner and feeds the
lifecycle notifications to a SuiteProgressReporter.
"""

import time
from collections.abc import Sequence
from pathlib import Path

import structlog

from suitebar.exceptions import TestExecutionError
from suitebar.reporter import SuiteProgressReporter
from suitebar.results import AggregatedResults, SuiteResult
from suitebar.telemetry import StructLogger
from suitebar.testing import TestRunResult, parse_pytest_summary
from suitebar.testing.protocols import TestRunner

log: StructLogger = structlog.get_logger("runtime.suite_runner")


def discover_suites(paths: Sequence[Path], pattern: str) -> list[Path]:
    """
    Expands directories into the suite files matching `pattern`.

    Explicit file arguments are kept as given. The result is de-duplicated and
    keeps first-seen order; files found inside a directory are sorted.
    """
    found: list[Path] = []
    seen: set[Path] = set()
    for path in paths:
        candidates = sorted(p for p in path.rglob(pattern) if p.is_file()) if path.is_dir() else [path]
        for candidate in candidates:
            key = candidate.resolve()
            if key not in seen:
                seen.add(key)
                found.append(candidate)
    log.debug("Discovered suites", count=len(found), pattern=pattern)
    return found


def suite_result_from_run(suite: Path, run: TestRunResult) -> SuiteResult:
    counts = parse_pytest_summary(run.stdout)
    failing = counts.failing
    failure_message = None
    if not run.success:
        failure_message = "\n".join(part for part in (run.stdout.rstrip(), run.stderr.rstrip()) if part)
        # Collection errors and crashes have no per-test counts.
        if failing == 0:
            failing = 1
    return SuiteResult(
        path=str(suite),
        failure_message=failure_message or None,
        num_passing_tests=counts.passing,
        num_failing_tests=failing,
        num_pending_tests=counts.pending,
    )


class SuiteRunOrchestrator:
    """Drives a full run: one notification sequence per invocation of `run()`."""

    def __init__(
        self,
        suites: Sequence[Path],
        runner: TestRunner,
        command: Sequence[str],
        reporter: SuiteProgressReporter,
        working_dir: Path | None = None,
    ):
        self.suites = list(suites)
        self.runner = runner
        self.command = list(command)
        self.reporter = reporter
        self.working_dir = working_dir or Path.cwd()

    async def run(self) -> AggregatedResults:
        results = AggregatedResults(
            num_total_test_suites=len(self.suites),
            start_time=int(time.time() * 1000),
        )
        log.info("Suite run starting", suites=len(self.suites), emoji_key="run")
        self.reporter.on_run_start(results)

        for suite in self.suites:
            self.reporter.on_test_start(suite)
            suite_result = await self._run_suite(suite)
            results.add_suite(suite_result)
            self.reporter.on_test_result(suite, suite_result, results)

        self.reporter.on_run_complete(None, results)
        log.info(
            "Suite run finished",
            passed=results.num_passed_tests,
            failed=results.num_failed_tests,
            pending=results.num_pending_tests,
        )
        return results

    async def _run_suite(self, suite: Path) -> SuiteResult:
        try:
            run = await self.runner.run_tests([*self.command, str(suite)], self.working_dir)
        except TestExecutionError as e:
            log.error("Suite could not be executed", suite=str(suite), error=str(e), emoji_key="fail")
            return SuiteResult(path=str(suite), failure_message=f"{suite}: {e}", num_failing_tests=1)
        return suite_result_from_run(suite, run)


# 🔼⚙️
