#
# src/suitebar/exceptions.py
#
"""
Exception hierarchy for suitebar.

The progress core itself never raises; these are used by the configuration
layer and the hosts that drive the reporter.
"""


class SuitebarError(Exception):
    """Base class for all suitebar errors."""

    pass


class ConfigurationError(SuitebarError):
    """Raised when the configuration file or a configured value is invalid."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        full_message = message
        if path:
            full_message += f" (File: '{path}')"
        super().__init__(full_message)


class TestExecutionError(SuitebarError):
    """Raised when a suite could not be executed by a test runner."""

    __test__ = False  # not a pytest test class

    def __init__(self, message: str, command: list[str] | None = None):
        self.command = command
        super().__init__(message)


# 🔼⚙️
