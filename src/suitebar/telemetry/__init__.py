#
# src/suitebar/telemetry/__init__.py
#
"""
Logging setup for suitebar.
"""

from .logger import StructLogger, configure_default_logging, setup_logging

__all__ = ["StructLogger", "configure_default_logging", "setup_logging"]

# 🔼⚙️
