#
# config/loader.py
#
"""
Loads suitebar configuration from a TOML file and the environment.

Precedence: CLI options > environment variables > config file > defaults.
CLI options are applied by the commands themselves via `attrs.evolve`.
"""

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import attrs
import structlog

from suitebar.exceptions import ConfigurationError
from suitebar.telemetry import StructLogger

from .models import GlobalConfig, ProgressConfig, RunnerConfig, SuitebarConfig

log: StructLogger = structlog.get_logger("config.loader")

ENV_BAR_WIDTH = "SUITEBAR_BAR_WIDTH"
ENV_NO_COLOR = "SUITEBAR_NO_COLOR"
ENV_NO_COLOR_STANDARD = "NO_COLOR"

_TRUTHY = {"1", "true", "yes", "on"}


def _table(data: Mapping[str, Any], name: str, path: Path) -> dict[str, Any]:
    value = data.get(name, {})
    if not isinstance(value, Mapping):
        raise ConfigurationError(f"Section [{name}] must be a table", path=str(path))
    return dict(value)


def _known_fields(cls: type, values: dict[str, Any], section: str, path: Path) -> dict[str, Any]:
    names = {a.name for a in attrs.fields(cls)}
    unknown = sorted(set(values) - names)
    if unknown:
        log.warning("Ignoring unknown configuration keys", section=section, keys=unknown)
    return {k: v for k, v in values.items() if k in names}


def _env_overrides(progress: ProgressConfig, environ: Mapping[str, str]) -> ProgressConfig:
    changes: dict[str, Any] = {}

    raw_width = environ.get(ENV_BAR_WIDTH)
    if raw_width:
        try:
            changes["bar_width"] = int(raw_width)
        except ValueError as e:
            raise ConfigurationError(f"{ENV_BAR_WIDTH} must be an integer, got '{raw_width}'") from e

    # NO_COLOR disables colour whenever it is set to a non-empty value.
    if environ.get(ENV_NO_COLOR, "").strip().lower() in _TRUTHY or environ.get(ENV_NO_COLOR_STANDARD):
        changes["color"] = False

    if not changes:
        return progress
    log.debug("Applying environment overrides", overrides=changes)
    try:
        return attrs.evolve(progress, **changes)
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid environment override: {e}") from e


def load_config(
    config_path: Path | None,
    environ: Mapping[str, str] | None = None,
) -> SuitebarConfig:
    """
    Loads and validates configuration.

    A missing file is not an error: defaults (plus environment overrides)
    are returned.

    Raises:
        ConfigurationError: If the file cannot be parsed or holds invalid values.
    """
    environ = os.environ if environ is None else environ
    data: dict[str, Any] = {}

    if config_path is not None and config_path.is_file():
        log.debug("Reading configuration file", path=str(config_path), emoji_key="load")
        try:
            with config_path.open("rb") as f:
                data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise ConfigurationError(f"Invalid TOML: {e}", path=str(config_path)) from e
        except OSError as e:
            raise ConfigurationError(f"Cannot read configuration: {e}", path=str(config_path)) from e
    else:
        log.debug("No configuration file found, using defaults", path=str(config_path))
        config_path = config_path or Path("suitebar.toml")

    try:
        global_config = GlobalConfig(
            **_known_fields(GlobalConfig, _table(data, "global", config_path), "global", config_path)
        )
        progress = ProgressConfig(
            **_known_fields(ProgressConfig, _table(data, "progress", config_path), "progress", config_path)
        )
        runner = RunnerConfig(
            **_known_fields(RunnerConfig, _table(data, "runner", config_path), "runner", config_path)
        )
    except (TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid configuration value: {e}", path=str(config_path)) from e

    progress = _env_overrides(progress, environ)

    config = SuitebarConfig(global_config=global_config, progress=progress, runner=runner)
    log.debug("Configuration loaded", bar_width=progress.bar_width, color=progress.color)
    return config


# 🔼⚙️
