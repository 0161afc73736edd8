#
# src/suitebar/testing/__init__.py
#
"""
Test execution sub-package for suitebar.
"""
from .factory import get_test_runner, runner_names
from .protocols import TestRunner, TestRunResult
from .subprocess_runner import SubprocessTestRunner
from .summary import SummaryCounts, parse_pytest_summary

__all__ = [
    "SubprocessTestRunner",
    "SummaryCounts",
    "TestRunResult",
    "TestRunner",
    "get_test_runner",
    "parse_pytest_summary",
    "runner_names",
]

# 🔼⚙️
