# topmark:header:start
#
#   project      : Mimedex
#   file         : info.py
#   file_relpath : src/mimedex/cli/commands/info.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex `info` command.

Summarizes the registry loaded from the definitions or, with ``--index``, a
persistent index.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import click

from mimedex.cli.cmd_common import get_console, get_settings, open_lookup_source
from mimedex.cli.errors import translate_errors
from mimedex.cli.formats import OutputFormat, is_machine_format
from mimedex.cli.options import format_option, index_option
from mimedex.index.persistent import PersistentIndex

if TYPE_CHECKING:
    from pathlib import Path


@click.command(
    name="info",
    help="Show type and key counts.",
)
@index_option
@format_option
def info_command(
    *,
    index_dir: Path | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Show type and key counts.

    Args:
        index_dir (Path | None): Persistent index to summarize instead of the definitions.
        output_format (OutputFormat | None): Output format (default text when None).
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    settings = get_settings(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    summary: dict[str, Any] = {"platform": settings.platform}
    with translate_errors(), open_lookup_source(ctx, index_dir) as source:
        if isinstance(source, PersistentIndex):
            metadata = source.metadata
            summary["source"] = str(source.path)
            summary["state"] = source.state.value
            if metadata is not None:
                summary["format"] = metadata.format
                summary["types"] = metadata.records
                summary["simplified_types"] = metadata.simplified_keys
                summary["extensions"] = metadata.extension_keys
            summary["cache_capacity"] = settings.cache_capacity
        else:
            summary["source"] = "definitions"
            summary["types"] = source.count()
            summary["simplified_types"] = len(source.simplified_types())
            summary["extensions"] = len(source.extensions())

    if is_machine_format(fmt):
        console.print(json.dumps(summary, indent=2 if fmt == OutputFormat.JSON else None))
        return

    width = max(len(key) for key in summary)
    for key, value in summary.items():
        label = key.replace("_", " ")
        console.print(f"{console.styled(label.ljust(width), bold=True)}  {value}")
