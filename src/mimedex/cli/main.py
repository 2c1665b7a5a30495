# topmark:header:start
#
#   project      : Mimedex
#   file         : main.py
#   file_relpath : src/mimedex/cli/main.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Click entry point of the ``mimedex`` command.

Group-level options are resolved once and placed into ``ctx.obj``:

* ``console``: the [`ClickConsole`][mimedex.cli.console.ClickConsole] for
  program output;
* ``verbosity_level``: program-output verbosity from ``-v``/``-q``;
* ``settings``: the effective [`Settings`][mimedex.config.settings.Settings].

Internal logging is configured separately from the ``MIMEDEX_LOG_LEVEL``
environment variable.
"""

from __future__ import annotations

from pathlib import Path

import click

from mimedex.cli.commands.build_index import build_index_command
from mimedex.cli.commands.info import info_command
from mimedex.cli.commands.lookup import lookup_command
from mimedex.cli.commands.type_for import type_for_command
from mimedex.cli.commands.version import version_command
from mimedex.cli.console import ClickConsole
from mimedex.cli.errors import translate_errors
from mimedex.cli.options import common_verbose_options, resolve_verbosity
from mimedex.config.logging import get_logger, resolve_env_log_level, setup_logging
from mimedex.config.settings import load_settings

logger = get_logger(__name__)


def init_common_state(
    ctx: click.Context,
    *,
    verbose: int,
    quiet: int,
    config_file: Path | None,
    no_color: bool,
) -> None:
    """Initialize shared state (console, verbosity, settings) on the Click context.

    Args:
        ctx (click.Context): Current Click context; will have ``obj`` and ``color`` set.
        verbose (int): Count of ``-v`` flags.
        quiet (int): Count of ``-q`` flags.
        config_file (Path | None): Explicit configuration file from ``--config``.
        no_color (bool): Whether ``--no-color`` was passed; forces color off.
    """
    ctx.obj = ctx.obj or {}

    ctx.obj["verbosity_level"] = resolve_verbosity(verbose, quiet)

    level_env = resolve_env_log_level()
    ctx.obj["log_level"] = level_env
    setup_logging(level=level_env)

    ctx.color = not no_color
    ctx.obj["console"] = ClickConsole(enable_color=not no_color)

    with translate_errors():
        ctx.obj["settings"] = load_settings(config_file)


@click.group(
    cls=click.Group,
    context_settings={"help_option_names": ["-h", "--help"]},
    invoke_without_command=True,
    help="Look up MIME content types by name, pattern or file extension.",
)
@common_verbose_options
@click.option(
    "--config",
    "config_file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="Read settings from this TOML file instead of discovering one.",
)
@click.option(
    "--no-color",
    "no_color",
    is_flag=True,
    default=False,
    help="Disable colored output.",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: int,
    quiet: int,
    config_file: Path | None,
    no_color: bool,
) -> None:
    """Entry point for the Mimedex CLI."""
    init_common_state(
        ctx,
        verbose=verbose,
        quiet=quiet,
        config_file=config_file,
        no_color=no_color,
    )

    if ctx.invoked_subcommand is None:
        console = ctx.obj["console"]
        console.print("Hint: use 'mimedex type-for FILENAME' to identify a file.")
        console.print()
        console.print(ctx.get_help())


cli.add_command(version_command)

cli.add_command(lookup_command)

cli.add_command(type_for_command)

cli.add_command(build_index_command)

cli.add_command(info_command)

if __name__ == "__main__":
    cli()
