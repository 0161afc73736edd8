#
# config/__init__.py
#
"""
Configuration handling sub-package for suitebar.

Exports the loading function and core configuration models.
"""

from .loader import load_config
from .models import GlobalConfig, ProgressConfig, RunnerConfig, SuitebarConfig

__all__ = [
    "GlobalConfig",
    "ProgressConfig",
    "RunnerConfig",
    "SuitebarConfig",
    "load_config",
]

# 🔼⚙️
