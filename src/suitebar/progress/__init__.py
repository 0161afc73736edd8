#
# src/suitebar/progress/__init__.py
#
"""
Progress rendering core: the in-place bar and the duration formatter.
"""

from .bar import BarPhase, ProgressBar, ProgressState
from .duration import format_duration
from .theme import DEFAULT_GLYPHS, ProgressTheme, SuiteStatus

__all__ = [
    "DEFAULT_GLYPHS",
    "BarPhase",
    "ProgressBar",
    "ProgressState",
    "ProgressTheme",
    "SuiteStatus",
    "format_duration",
]

# 🔼⚙️
