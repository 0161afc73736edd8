#
# src/suitebar/results.py
#
"""
Typed run results handed to the reporter by its host.

Hosts may hand over loose mappings (camelCase or snake_case keys, missing or
garbage values); `AggregatedResults.from_mapping` normalizes them once at the
boundary so the reporter only ever sees clean integers.
"""

import math
from collections.abc import Mapping
from typing import Any

from attrs import define, field, mutable


def normalize_count(raw: Any) -> int:
    """
    Coerces a host-supplied count to a non-negative int.

    Anything that is not a finite, positive real number (negative values,
    NaN, infinities, booleans, strings, None) becomes 0. Floats are truncated.
    """
    if isinstance(raw, bool) or not isinstance(raw, int | float):
        return 0
    if not math.isfinite(raw) or raw <= 0:
        return 0
    return int(raw)


def _lookup(data: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if key in data:
            return data[key]
    return None


@define(frozen=True, slots=True)
class SnapshotSummary:
    """Snapshot bookkeeping; `failure` flags obsolete snapshots."""

    failure: bool = field(default=False)


@mutable(slots=True)
class SuiteResult:
    """Outcome of a single suite (test file)."""

    path: str = field(default="")
    failure_message: str | None = field(default=None)
    num_passing_tests: int = field(default=0, converter=normalize_count)
    num_failing_tests: int = field(default=0, converter=normalize_count)
    num_pending_tests: int = field(default=0, converter=normalize_count)

    @property
    def failed(self) -> bool:
        return self.num_failing_tests > 0 or bool(self.failure_message)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "SuiteResult":
        if not isinstance(data, Mapping):
            return cls()
        message = _lookup(data, "failure_message", "failureMessage")
        return cls(
            path=str(_lookup(data, "path", "testFilePath") or ""),
            failure_message=message if isinstance(message, str) else None,
            num_passing_tests=_lookup(data, "num_passing_tests", "numPassingTests"),
            num_failing_tests=_lookup(data, "num_failing_tests", "numFailingTests"),
            num_pending_tests=_lookup(data, "num_pending_tests", "numPendingTests"),
        )


def _convert_suite_results(value: Any) -> list[SuiteResult]:
    if not value:
        return []
    return [
        item if isinstance(item, SuiteResult) else SuiteResult.from_mapping(item)
        for item in value
    ]


@mutable(slots=True)
class AggregatedResults:
    """
    Run-wide counters, accumulated by the host while suites finish.

    `start_time` is the wall-clock start of the run in epoch milliseconds.
    """

    num_total_test_suites: int = field(default=0, converter=normalize_count)
    num_total_tests: int = field(default=0, converter=normalize_count)
    num_passed_tests: int = field(default=0, converter=normalize_count)
    num_failed_tests: int = field(default=0, converter=normalize_count)
    num_pending_tests: int = field(default=0, converter=normalize_count)
    start_time: int = field(default=0, converter=normalize_count)
    test_results: list[SuiteResult] = field(factory=list, converter=_convert_suite_results)
    snapshot: SnapshotSummary | None = field(default=None)

    def add_suite(self, result: SuiteResult) -> None:
        """Folds one finished suite into the run totals."""
        self.test_results.append(result)
        self.num_passed_tests += result.num_passing_tests
        self.num_failed_tests += result.num_failing_tests
        self.num_pending_tests += result.num_pending_tests
        self.num_total_tests += (
            result.num_passing_tests + result.num_failing_tests + result.num_pending_tests
        )

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | None) -> "AggregatedResults":
        """Builds results from a loose mapping; `None` yields an empty result."""
        if not isinstance(data, Mapping):
            return cls()
        snapshot_raw = data.get("snapshot")
        snapshot = None
        if isinstance(snapshot_raw, SnapshotSummary):
            snapshot = snapshot_raw
        elif isinstance(snapshot_raw, Mapping):
            snapshot = SnapshotSummary(failure=bool(snapshot_raw.get("failure")))
        return cls(
            num_total_test_suites=_lookup(data, "num_total_test_suites", "numTotalTestSuites"),
            num_total_tests=_lookup(data, "num_total_tests", "numTotalTests"),
            num_passed_tests=_lookup(data, "num_passed_tests", "numPassedTests"),
            num_failed_tests=_lookup(data, "num_failed_tests", "numFailedTests"),
            num_pending_tests=_lookup(data, "num_pending_tests", "numPendingTests"),
            start_time=_lookup(data, "start_time", "startTime"),
            test_results=_lookup(data, "test_results", "testResults"),
            snapshot=snapshot,
        )


def coerce_results(value: "AggregatedResults | Mapping[str, Any] | None") -> AggregatedResults:
    if isinstance(value, AggregatedResults):
        return value
    return AggregatedResults.from_mapping(value)


# 🔼⚙️
