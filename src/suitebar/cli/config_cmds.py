# src/suitebar/cli/config_cmds.py

from pathlib import Path

import click
import structlog
from rich.pretty import pretty_repr

from suitebar.cli.utils import logging_options, setup_logging_from_context
from suitebar.config import load_config
from suitebar.exceptions import ConfigurationError
from suitebar.telemetry import StructLogger

log: StructLogger = structlog.get_logger("cli.config")

config_path_option = click.option(
    "-c",
    "--config-path",
    type=click.Path(file_okay=True, dir_okay=False, path_type=Path),
    default=Path("suitebar.toml"),
    show_default=True,
    envvar="SUITEBAR_CONF",
    help="Path to the suitebar configuration file (env var SUITEBAR_CONF). Optional.",
    show_envvar=True,
)


@click.group(name="config")
def config_cli():
    """Commands for inspecting and validating configuration."""
    pass


@config_cli.command(name="show")
@config_path_option
@logging_options
@click.pass_context
def show_config(ctx: click.Context, config_path: Path, **kwargs):
    """Load, validate, and display the configuration."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )
    log.info("Executing 'config show' command", config_path=str(config_path))

    try:
        config = load_config(config_path)
    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: Configuration problem in '{config_path}':\n{e}", err=True)
        ctx.exit(1)

    # Echo a rich-formatted string for testability.
    click.echo(pretty_repr(config, expand_all=True))

# 🔼⚙️
