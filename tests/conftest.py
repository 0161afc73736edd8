import io

import pytest
from rich.console import Console

from suitebar.progress import ProgressTheme
from suitebar.reporter import SuiteProgressReporter
from suitebar.telemetry import configure_default_logging

pytest_plugins = ["pytester"]


@pytest.fixture
def plain_theme() -> ProgressTheme:
    """A colourless theme with a short bar so rendered lines are easy to assert."""
    return ProgressTheme(bar_width=10, color=False)


@pytest.fixture
def bar_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console_output() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def console(console_output: io.StringIO) -> Console:
    return Console(file=console_output, color_system=None, width=200, highlight=False)


@pytest.fixture
def reporter(
    plain_theme: ProgressTheme, console: Console, bar_stream: io.StringIO
) -> SuiteProgressReporter:
    """Reporter with captured streams and a clock frozen at 11.050s past epoch."""
    return SuiteProgressReporter(
        theme=plain_theme,
        console=console,
        stream=bar_stream,
        clock=lambda: 11_050,
    )


@pytest.fixture(autouse=True, scope="session")
def _quiet_structlog() -> None:
    """Keep debug events from the library out of captured stdout."""
    configure_default_logging()
