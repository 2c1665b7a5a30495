# topmark:header:start
#
#   project      : Mimedex
#   file         : version.py
#   file_relpath : src/mimedex/cli/commands/version.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex `version` command.

Prints the current Mimedex version as installed in the active Python environment.
"""

from __future__ import annotations

import json

import click

from mimedex.cli.cmd_common import get_console, get_effective_verbosity
from mimedex.cli.formats import OutputFormat, is_machine_format
from mimedex.cli.options import format_option
from mimedex.constants import MIMEDEX_VERSION


@click.command(
    name="version",
    help="Show the current version of Mimedex.",
)
@format_option
def version_command(*, output_format: OutputFormat | None = None) -> None:
    """Show the current version of Mimedex.

    Args:
        output_format (OutputFormat | None): Optional output format.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    vlevel = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    if is_machine_format(fmt):
        console.print(json.dumps({"version": MIMEDEX_VERSION}))
    elif vlevel > 0:
        console.print(console.styled("Mimedex version:", bold=True, underline=True))
        console.print(f"    {console.styled(MIMEDEX_VERSION, bold=True)}")
    else:
        console.print(console.styled(MIMEDEX_VERSION, bold=True))
