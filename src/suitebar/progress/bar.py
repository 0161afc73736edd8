#
# src/suitebar/progress/bar.py
#
"""
Single-line, in-place progress bar drawn with ANSI control sequences.
"""

import math
import sys
from enum import Enum, auto
from typing import TextIO

import structlog
from attrs import field, mutable

from suitebar.progress.theme import ProgressTheme
from suitebar.telemetry import StructLogger

log: StructLogger = structlog.get_logger("progress.bar")

ERASE_LINE = "\x1b[2K"
CARRIAGE_RETURN = "\r"


class BarPhase(Enum):
    """Lifecycle of a progress bar."""

    UNINITIALIZED = auto()  # No total known yet; advances are ignored.
    RUNNING = auto()
    COMPLETED = auto()  # Trailing newline written.


@mutable(slots=True)
class ProgressState:
    """Counters behind a progress bar. `current` is never clamped to `total`."""

    total: int = field()
    current: int = field(default=0)
    frame_index: int = field(default=0)

    @property
    def ratio(self) -> float:
        if self.total <= 0:
            return 0.0
        return min(self.current / self.total, 1.0)

    @property
    def percent(self) -> int:
        # Integer arithmetic; floor(0.29 * 100) would give 28.
        if self.total <= 0:
            return 0
        return min(self.current, self.total) * 100 // self.total

    def step(self, frame_count: int) -> None:
        self.current += 1
        self.frame_index = (self.frame_index + 1) % frame_count


class ProgressBar:
    """
    Animated spinner + bar + `(current/total)` + percentage.

    Every render erases the current terminal line and returns the cursor to
    column zero before writing, so the indicator updates in place. Nothing in
    here raises for any counter value; out-of-order calls are logged and
    ignored.
    """

    def __init__(self, stream: TextIO | None = None, theme: ProgressTheme | None = None):
        self.stream = stream
        self.theme = theme or ProgressTheme()
        self.phase = BarPhase.UNINITIALIZED
        self.state: ProgressState | None = None

    @property
    def _out(self) -> TextIO:
        # Resolved lazily so pytest's capsys / redirected stderr are honoured.
        return self.stream if self.stream is not None else sys.stderr

    def initialize(self, total: int) -> None:
        """Fixes the total; only the first call has any effect."""
        if self.phase is not BarPhase.UNINITIALIZED:
            log.debug("Progress bar already initialized, ignoring", total=total, phase=self.phase.name)
            return
        if isinstance(total, bool) or not isinstance(total, int | float) or not math.isfinite(total):
            total = 0
        self.state = ProgressState(total=max(int(total), 0))
        self.phase = BarPhase.RUNNING
        log.debug("Progress bar initialized", total=self.state.total, width=self.theme.bar_width)

    def advance(self) -> None:
        if self.state is None:
            log.debug("Advance before initialize ignored")
            return
        self.state.step(len(self.theme.frames))
        self.render()

    def build_line(self) -> str:
        """Returns the full redraw sequence for the current state without writing it."""
        state = self.state
        if state is None:
            return ""

        theme = self.theme
        width = theme.bar_width
        ratio = state.ratio
        # Halves round up.
        filled = math.floor(width * ratio + 0.5)
        empty = width - filled

        spinner = theme.paint(theme.spinner_style, theme.frames[state.frame_index % len(theme.frames)])

        bar = ""
        if filled > 0:
            if filled > 1:
                bar += theme.paint(theme.filled_style, theme.bar_char * (filled - 1))
            bar += theme.paint(theme.head_style, theme.bar_char)
        if empty > 0:
            bar += theme.paint(theme.empty_style, theme.bar_char * empty)

        return (
            f"{ERASE_LINE}{CARRIAGE_RETURN}{spinner} {bar} "
            f"({state.current}/{state.total}) {state.percent}%"
        )

    def render(self) -> str:
        line = self.build_line()
        if not line:
            return line
        out = self._out
        out.write(line)
        out.flush()
        return line

    def complete(self) -> None:
        """Moves the cursor past the indicator onto a fresh line."""
        if self.phase is not BarPhase.RUNNING:
            log.debug("Complete ignored", phase=self.phase.name)
            return
        out = self._out
        out.write("\n")
        out.flush()
        self.phase = BarPhase.COMPLETED


# 🔼⚙️
