#
# src/suitebar/runtime/__init__.py
#
"""
Runtime components that drive a suite run.
"""

from .suite_runner import SuiteRunOrchestrator, discover_suites, suite_result_from_run

__all__ = ["SuiteRunOrchestrator", "discover_suites", "suite_result_from_run"]

# 🔼⚙️
