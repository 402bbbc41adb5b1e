"""Click command-line interface for lib_log_durable.

Purpose
-------
Offer a small operator surface: print package metadata, run the scripted
order workflow in either commit mode, and optionally load ``.env`` files
before anything reads ``LOG_DURABLE_*`` variables.

Contents
--------
* :func:`cli` - root Click group with ``--version`` and ``--use-dotenv``.
* :func:`cli_info` - metadata banner.
* :func:`cli_demo` - run :func:`lib_log_durable.demo.logdemo`.
* :func:`main` - entry point used by ``python -m`` and the console script.
"""

from __future__ import annotations

import io
import os
from typing import Any, Sequence

import click

from . import __init__conf__
from . import config as log_config
from .demo import logdemo

CLICK_CONTEXT_SETTINGS = {"help_option_names": ["-h", "--help"]}


def summary_info() -> str:
    """Return the metadata banner as a single string ending with a newline.

    Examples
    --------
    >>> summary_info().splitlines()[0]
    'Info for lib_log_durable:'
    """

    buffer = io.StringIO()
    __init__conf__.print_info(writer=buffer.write)
    return buffer.getvalue()


def _logdemo(**kwargs: Any) -> dict[str, Any]:
    return logdemo(**kwargs)


@click.group(invoke_without_command=True, context_settings=CLICK_CONTEXT_SETTINGS)
@click.version_option(
    version=__init__conf__.version,
    prog_name=__init__conf__.shell_command,
    message=f"{__init__conf__.shell_command} version {__init__conf__.version}",
)
@click.option(
    "--use-dotenv/--no-use-dotenv",
    default=None,
    help=f"Load the nearest .env file before reading configuration (also via {log_config.DOTENV_ENV_VAR}).",
)
@click.pass_context
def cli(ctx: click.Context, use_dotenv: bool | None) -> None:
    """Root command; prints the metadata banner when no subcommand is given."""

    env_toggle = os.getenv(log_config.DOTENV_ENV_VAR)
    if log_config.should_use_dotenv(explicit=use_dotenv, env_value=env_toggle):
        log_config.enable_dotenv()
    if ctx.invoked_subcommand is None:
        click.echo(summary_info(), nl=False)


@cli.command("info", context_settings=CLICK_CONTEXT_SETTINGS)
def cli_info() -> None:
    """Print resolved metadata so users can inspect the installation."""

    click.echo(summary_info(), nl=False)


@cli.command("demo", context_settings=CLICK_CONTEXT_SETTINGS)
@click.option(
    "--mode",
    type=click.Choice(["immediate", "deferred"], case_sensitive=False),
    default="deferred",
    show_default=True,
    help="Commit every record at once or hold them until the workflow finishes.",
)
@click.option("--user", default="demo-user", show_default=True, help="Principal stamped on flushed events.")
def cli_demo(mode: str, user: str) -> None:
    """Run a scripted order workflow and print what reached the sink."""

    result = _logdemo(immediate=mode.lower() == "immediate", user=user)
    click.echo(f"mode={result['mode']} batches={result['batches']} events={result['events']} user={result['user']}")


def main(argv: Sequence[str] | None = None) -> int:
    """Run the Click group and translate Click errors into exit codes.

    Examples
    --------
    >>> main(["--version"])
    lib_log_durable version 0.1.0
    0
    """

    args = list(argv) if argv is not None else None
    try:
        cli.main(args=args, prog_name=__init__conf__.shell_command, standalone_mode=False)
    except click.ClickException as error:
        error.show()
        return error.exit_code
    except click.Abort:
        click.echo("Aborted!", err=True)
        return 1
    return 0


__all__ = ["cli", "main", "summary_info"]
