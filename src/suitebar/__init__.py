#
# src/suitebar/__init__.py
#
"""
suitebar: live progress bar and summary for test suite runs.
"""

from suitebar.progress import ProgressBar, ProgressTheme, format_duration
from suitebar.reporter import SuiteProgressReporter
from suitebar.results import AggregatedResults, SnapshotSummary, SuiteResult, normalize_count

__all__ = [
    "AggregatedResults",
    "ProgressBar",
    "ProgressTheme",
    "SnapshotSummary",
    "SuiteProgressReporter",
    "SuiteResult",
    "format_duration",
    "normalize_count",
]

# 🔼⚙️
