# src/suitebar/cli/run_cmds.py

import asyncio
import logging
import shlex
import sys
from pathlib import Path

import attrs
import click
import structlog

from suitebar.cli.config_cmds import config_path_option
from suitebar.cli.utils import logging_options, setup_logging_from_context
from suitebar.config import SuitebarConfig, load_config
from suitebar.exceptions import ConfigurationError
from suitebar.reporter import SuiteProgressReporter
from suitebar.results import AggregatedResults
from suitebar.runtime import SuiteRunOrchestrator, discover_suites
from suitebar.telemetry import StructLogger
from suitebar.testing import get_test_runner, runner_names

log: StructLogger = structlog.get_logger("cli.run")


def _run_orchestrator(orchestrator: SuiteRunOrchestrator) -> int:
    """
    Runs the orchestrator with asyncio.run() and maps the outcome to an exit code.
    """
    try:
        results: AggregatedResults = asyncio.run(orchestrator.run())
        return 1 if results.num_failed_tests else 0
    except KeyboardInterrupt:
        log.warning("Run interrupted by KeyboardInterrupt (CTRL-C).")
        return 130  # Standard exit code for SIGINT
    finally:
        logging.shutdown()


def _apply_cli_overrides(
    config: SuitebarConfig,
    pattern: str | None,
    bar_width: int | None,
    no_color: bool,
    runner: str | None,
    command: str | None,
) -> SuitebarConfig:
    progress_changes: dict = {}
    if bar_width is not None:
        progress_changes["bar_width"] = bar_width
    if no_color:
        progress_changes["color"] = False

    runner_changes: dict = {}
    if pattern:
        runner_changes["pattern"] = pattern
    if runner:
        runner_changes["runner"] = runner
    if command:
        runner_changes["command"] = shlex.split(command)

    return attrs.evolve(
        config,
        progress=attrs.evolve(config.progress, **progress_changes),
        runner=attrs.evolve(config.runner, **runner_changes),
    )


@click.command(name="run")
@click.argument(
    "paths",
    nargs=-1,
    type=click.Path(exists=True, path_type=Path),
)
@config_path_option
@click.option("--pattern", default=None, help="Glob used to find suite files in directories.")
@click.option("--bar-width", type=click.IntRange(min=1), default=None, help="Progress bar width.")
@click.option("--no-color", is_flag=True, default=False, envvar="SUITEBAR_NO_COLOR", help="Disable colours.")
@click.option(
    "--runner",
    type=click.Choice(runner_names(), case_sensitive=False),
    default=None,
    help="Test runner used for each suite file.",
)
@click.option("--command", default=None, help="Command used to run one suite; the path is appended.")
@logging_options
@click.pass_context
def run_cli(
    ctx: click.Context,
    paths: tuple[Path, ...],
    config_path: Path,
    pattern: str | None,
    bar_width: int | None,
    no_color: bool,
    runner: str | None,
    command: str | None,
    **kwargs,
):
    """Run test suite files one by one with a live progress bar."""
    setup_logging_from_context(
        ctx,
        local_log_level=kwargs.get("log_level"),
        local_log_file=kwargs.get("log_file"),
        local_json_logs=kwargs.get("json_logs"),
    )

    try:
        config = load_config(config_path)
        config = _apply_cli_overrides(config, pattern, bar_width, no_color, runner, command)
        test_runner = get_test_runner(config.runner.runner)
    except ConfigurationError as e:
        log.error("Failed to load or validate configuration", error=str(e))
        click.echo(f"Error: {e}", err=True)
        ctx.exit(2)
    except (TypeError, ValueError) as e:
        click.echo(f"Error: Invalid option: {e}", err=True)
        ctx.exit(2)

    if config.global_config.log_level.upper() != "WARNING":
        # The config file only sets the level when no CLI/env level was given.
        setup_logging_from_context(
            ctx,
            local_log_level=kwargs.get("log_level"),
            local_log_file=kwargs.get("log_file"),
            local_json_logs=kwargs.get("json_logs"),
            default_log_level=config.global_config.log_level,
        )

    suites = discover_suites(list(paths) or [Path.cwd()], config.runner.pattern)
    if not suites:
        log.warning("No suite files found", pattern=config.runner.pattern)

    reporter = SuiteProgressReporter(theme=config.progress.to_theme())
    orchestrator = SuiteRunOrchestrator(
        suites=suites,
        runner=test_runner,
        command=config.runner.command,
        reporter=reporter,
    )

    exit_code = _run_orchestrator(orchestrator)
    log.info("'run' command finished.", exit_code=exit_code)
    if exit_code != 0:
        sys.exit(exit_code)

# 🔼⚙️
