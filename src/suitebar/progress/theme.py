#
# src/suitebar/progress/theme.py
#
"""
Rendering configuration for the progress bar and the run summary.
"""

from collections.abc import Mapping
from enum import Enum
from typing import Any

from attrs import define, field
from rich.color import ColorSystem
from rich.style import Style

BAR_CHAR = "━"
SPINNER_FRAMES = "⠋⠙⠹⠸⠼⠴⠦⠧⠇⠏"


class SuiteStatus(Enum):
    """Outcome categories shown in the summary."""

    PASSED = "passed"
    FAILED = "failed"
    PENDING = "pending"


DEFAULT_GLYPHS: dict[SuiteStatus, str] = {
    SuiteStatus.PASSED: "✔",
    SuiteStatus.FAILED: "✘",
    SuiteStatus.PENDING: "-",
}


def _validate_positive_int(inst: Any, attr: Any, value: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value!r}")


def _validate_non_empty(inst: Any, attr: Any, value: str) -> None:
    if not value:
        raise ValueError(f"Field '{attr.name}' must not be empty")


def _convert_glyphs(value: Mapping[Any, str] | None) -> dict[SuiteStatus, str]:
    """Merges user glyph overrides (keyed by status or status name) over the defaults."""
    glyphs = dict(DEFAULT_GLYPHS)
    for key, glyph in (value or {}).items():
        status = key if isinstance(key, SuiteStatus) else SuiteStatus(str(key).lower())
        glyphs[status] = glyph
    return glyphs


@define(frozen=True, slots=True)
class ProgressTheme:
    """
    Everything the renderer and the summary need to know about appearance.

    Colours use xterm 256-colour indexes. With `color` disabled every style
    renders as plain text, which keeps output byte-stable for log consumers
    and tests.
    """

    bar_width: int = field(default=40, validator=_validate_positive_int)
    frames: str = field(default=SPINNER_FRAMES, validator=_validate_non_empty)
    bar_char: str = field(default=BAR_CHAR, validator=_validate_non_empty)
    color: bool = field(default=True)
    glyphs: dict[SuiteStatus, str] = field(factory=dict, converter=_convert_glyphs)

    spinner_style: Style = field(default=Style(color="color(42)"))
    filled_style: Style = field(default=Style(color="color(178)"))
    head_style: Style = field(default=Style(color="color(220)"))
    empty_style: Style = field(default=Style(color="color(62)"))

    passed_style: Style = field(default=Style(color="green"))
    failed_style: Style = field(default=Style(color="red"))
    pending_style: Style = field(default=Style(color="cyan"))
    info_style: Style = field(default=Style(color="white"))

    @property
    def color_system(self) -> ColorSystem | None:
        return ColorSystem.EIGHT_BIT if self.color else None

    def paint(self, style: Style, text: str) -> str:
        """Wraps `text` in the ANSI codes for `style`, or returns it untouched."""
        return style.render(text, color_system=self.color_system)

    def glyph_for(self, status: SuiteStatus) -> str:
        return self.glyphs.get(status, self.glyphs[SuiteStatus.FAILED])

    def style_for(self, status: SuiteStatus) -> Style:
        return {
            SuiteStatus.PASSED: self.passed_style,
            SuiteStatus.FAILED: self.failed_style,
            SuiteStatus.PENDING: self.pending_style,
        }[status]


# 🔼⚙️
