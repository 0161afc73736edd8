# src/suitebar/telemetry/logger/__init__.py

from .base import BASE_LOGGER_NAME, StructLogger, configure_default_logging, setup_logging

__all__ = ["BASE_LOGGER_NAME", "StructLogger", "configure_default_logging", "setup_logging"]

# 🔼⚙️
