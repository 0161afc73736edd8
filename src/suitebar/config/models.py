#
# config/models.py
#
"""
Attrs-based data models for suitebar configuration structure.
"""

import logging
from typing import Any

from attrs import define, field

from suitebar.progress.theme import (
    BAR_CHAR,
    DEFAULT_GLYPHS,
    SPINNER_FRAMES,
    ProgressTheme,
    SuiteStatus,
)


# --- Validators ---
def _validate_log_level(inst: Any, attr: Any, value: str) -> None:
    """Validator for standard logging level names."""
    valid = logging.getLevelNamesMapping().keys()
    if value.upper() not in valid:
        raise ValueError(f"Invalid log_level '{value}'. Must be one of {list(valid)}.")


def _validate_positive_int(inst: Any, attr: Any, value: int) -> None:
    """Validator ensures integer is positive."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise ValueError(f"Field '{attr.name}' must be positive integer, got {value}")


def _validate_non_empty(inst: Any, attr: Any, value: Any) -> None:
    if not value:
        raise ValueError(f"Field '{attr.name}' must not be empty")


def _validate_glyph_keys(inst: Any, attr: Any, value: dict[str, str]) -> None:
    valid = {status.value for status in SuiteStatus}
    unknown = sorted(set(value) - valid)
    if unknown:
        raise ValueError(f"Unknown glyph status {unknown}. Must be one of {sorted(valid)}.")


def _default_glyphs() -> dict[str, str]:
    return {status.value: glyph for status, glyph in DEFAULT_GLYPHS.items()}


def _default_command() -> list[str]:
    return ["python", "-m", "pytest", "-q"]


@define(frozen=True, slots=True)
class ProgressConfig:
    """Appearance of the progress bar and summary."""

    bar_width: int = field(default=40, validator=_validate_positive_int)
    frames: str = field(default=SPINNER_FRAMES, validator=_validate_non_empty)
    bar_char: str = field(default=BAR_CHAR, validator=_validate_non_empty)
    color: bool = field(default=True)
    glyphs: dict[str, str] = field(factory=_default_glyphs, validator=_validate_glyph_keys)

    def to_theme(self) -> ProgressTheme:
        return ProgressTheme(
            bar_width=self.bar_width,
            frames=self.frames,
            bar_char=self.bar_char,
            color=self.color,
            glyphs={SuiteStatus(name): glyph for name, glyph in self.glyphs.items()},
        )


@define(frozen=True, slots=True)
class RunnerConfig:
    """How suites are discovered and executed by `suitebar run`."""

    runner: str = field(default="pytest")
    command: list[str] = field(factory=_default_command, validator=_validate_non_empty)
    pattern: str = field(default="test_*.py", validator=_validate_non_empty)


@define(frozen=True, slots=True)
class GlobalConfig:
    """Global default settings for suitebar."""

    log_level: str = field(default="WARNING", validator=_validate_log_level)

    @property
    def numeric_log_level(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level.upper()]


@define(frozen=True, slots=True)
class SuitebarConfig:
    """Root configuration object for the suitebar application."""

    global_config: GlobalConfig = field(factory=GlobalConfig, metadata={"toml_name": "global"})
    progress: ProgressConfig = field(factory=ProgressConfig)
    runner: RunnerConfig = field(factory=RunnerConfig)


# 🔼⚙️
