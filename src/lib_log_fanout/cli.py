"""Click command line interface for the fan-out logger.

Purpose
-------
Let operators exercise the pipeline from a shell: emit a single message,
pipe the output of another program through the prefix classifier, or run a
demo that shows thresholds and repeat collapsing.

Contents
--------
* :func:`cli` – root group carrying the sink configuration options.
* ``info``, ``emit``, ``pipe``, ``logdemo`` sub-commands.
* :func:`main` – entry point wrapping :func:`lib_cli_exit_tools.run_cli`.

System Role
-----------
Presentation layer only; all behaviour lives in :mod:`lib_log_fanout.runtime`.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Sequence

import click
import lib_cli_exit_tools

from . import __init__conf__
from . import config as config_module
from . import runtime
from .adapters import ForeignStreamAdapter, PrefixLevelClassifier
from .domain import LogLevel, SourceLocation

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}
LEVEL_CHOICE = click.Choice([level.name.lower() for level in LogLevel], case_sensitive=False)

_DEMO_LEVELS = (
    LogLevel.DEBUG,
    LogLevel.INFO,
    LogLevel.NOTICE,
    LogLevel.WARNING,
    LogLevel.ERROR,
    LogLevel.CRITICAL,
    LogLevel.ALERT,
)


@dataclass(frozen=True)
class CliOptions:
    """Sink configuration collected by the root group."""

    console_level: str
    file_path: Path | None
    file_level: str
    syslog_tag: str | None
    syslog_level: str
    rate_limit: int

    def init_runtime(self, ctx: click.Context) -> None:
        runtime.init(
            console_level=self.console_level,
            file_path=self.file_path,
            file_level=self.file_level,
            syslog_tag=self.syslog_tag,
            syslog_level=self.syslog_level,
            max_messages_per_second=self.rate_limit,
            terminate=lambda: ctx.exit(runtime.FATAL_EXIT_CODE),
        )


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(version=__init__conf__.version, prog_name=__init__conf__.shell_command, message="%(version)s")
@click.option(
    "--traceback/--no-traceback",
    is_flag=True,
    default=False,
    help="Show full Python traceback on errors.",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=False,
    help=f"Load environment variables from a nearby .env (also via {config_module.DOTENV_ENV_VAR}).",
)
@click.option("--console-level", type=LEVEL_CHOICE, default="debug", show_default=True)
@click.option("--file", "file_path", type=click.Path(dir_okay=False, path_type=Path), default=None, help="Append log lines to this file.")
@click.option("--file-level", type=LEVEL_CHOICE, default="debug", show_default=True)
@click.option("--syslog-tag", default=None, help="Enable syslog with this ident.")
@click.option("--syslog-level", type=LEVEL_CHOICE, default="debug", show_default=True)
@click.option("--rate-limit", type=int, default=0, show_default=True, help="Maximum messages per second (0 disables).")
@click.pass_context
def cli(
    ctx: click.Context,
    traceback: bool,
    use_dotenv: bool,
    console_level: str,
    file_path: Path | None,
    file_level: str,
    syslog_tag: str | None,
    syslog_level: str,
    rate_limit: int,
) -> None:
    """Fan log messages out to console, syslog, and an append-only file."""

    explicit: bool | None = None
    if ctx.get_parameter_source("use_dotenv") is not click.core.ParameterSource.DEFAULT:
        explicit = use_dotenv
    if config_module.should_use_dotenv(explicit=explicit, env_value=os.getenv(config_module.DOTENV_ENV_VAR)):
        config_module.enable_dotenv()

    lib_cli_exit_tools.config.traceback = traceback
    lib_cli_exit_tools.config.traceback_force_color = traceback

    ctx.obj = CliOptions(
        console_level=console_level,
        file_path=file_path,
        file_level=file_level,
        syslog_tag=syslog_tag,
        syslog_level=syslog_level,
        rate_limit=rate_limit,
    )
    if ctx.invoked_subcommand is None:
        click.echo(runtime.summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print the distribution metadata banner."""

    click.echo(runtime.summary_info(), nl=False)


@cli.command("emit", context_settings=CLICK_CONTEXT_SETTINGS)
@click.argument("level", type=LEVEL_CHOICE)
@click.argument("message", nargs=-1, required=True)
@click.pass_context
def cli_emit(ctx: click.Context, level: str, message: tuple[str, ...]) -> None:
    """Dispatch MESSAGE at LEVEL through all configured sinks."""

    options: CliOptions = ctx.obj
    options.init_runtime(ctx)
    try:
        result = runtime.log(level, *message, source=SourceLocation(__init__conf__.shell_command, 0))
    finally:
        runtime.shutdown()
    _report(result)


@cli.command("pipe", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_pipe(ctx: click.Context) -> None:
    """Read lines from stdin and re-level them by their prefix."""

    options: CliOptions = ctx.obj
    options.init_runtime(ctx)
    stdin = click.get_text_stream("stdin")
    line_number = 0

    def _dispatch(level: LogLevel, text: str) -> dict[str, Any]:
        return runtime.log(level, text, source=SourceLocation("<stdin>", line_number))

    adapter = ForeignStreamAdapter(_dispatch, classifier=PrefixLevelClassifier())
    try:
        for line in stdin:
            line_number += 1
            adapter.write(line)
    finally:
        runtime.shutdown()


@cli.command("logdemo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.pass_context
def cli_logdemo(ctx: click.Context) -> None:
    """Emit every non-fatal level twice to show thresholds and collapsing."""

    options: CliOptions = ctx.obj
    options.init_runtime(ctx)
    results: list[dict[str, Any]] = []
    try:
        for index, level in enumerate(_DEMO_LEVELS, start=1):
            for _ in range(2):
                source = SourceLocation("logdemo", index)
                results.append(runtime.log(level, f"{level.display_name} message", source=source))
    finally:
        runtime.shutdown()
    emitted = sum(1 for result in results if result.get("ok"))
    click.echo(f"\nemitted {emitted} of {len(results)} messages", err=True)


def _report(result: dict[str, Any]) -> None:
    errors = result.get("errors")
    if errors:
        for name, error in errors.items():
            click.echo(f"{name}: {error.original}", err=True)
        raise click.ClickException("one or more sinks failed")


def main(argv: Sequence[str] | None = None, *, restore_traceback: bool = True) -> int:
    """Run the CLI and return its exit code.

    Traceback preferences set via ``--traceback`` are restored afterwards so
    embedding callers keep their own configuration.
    """

    previous_traceback = getattr(lib_cli_exit_tools.config, "traceback", False)
    previous_force_color = getattr(lib_cli_exit_tools.config, "traceback_force_color", False)
    try:
        return lib_cli_exit_tools.run_cli(
            cli,
            argv=list(argv) if argv is not None else None,
            prog_name=__init__conf__.shell_command,
        )
    finally:
        if restore_traceback:
            lib_cli_exit_tools.config.traceback = previous_traceback
            lib_cli_exit_tools.config.traceback_force_color = previous_force_color


__all__ = ["cli", "main"]
