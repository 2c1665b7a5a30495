# topmark:header:start
#
#   project      : Mimedex
#   file         : lookup.py
#   file_relpath : src/mimedex/cli/commands/lookup.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex `lookup` command.

Prints the types matching a content type (or, with ``--regex``, every type
whose simplified form matches a pattern), best match first.
"""

from __future__ import annotations

import re
from typing import TYPE_CHECKING

import click

from mimedex.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    get_settings,
    open_lookup_source,
)
from mimedex.cli.errors import MimedexUsageError, translate_errors
from mimedex.cli.exit_codes import ExitCode
from mimedex.cli.formats import OutputFormat, describe, emit_json, records_payload
from mimedex.cli.options import format_option, index_option, platform_option
from mimedex.registry.registry import Registry

if TYPE_CHECKING:
    from pathlib import Path

    from mimedex.mimetype.base import MimeType


@click.command(
    name="lookup",
    help="Show the types matching a content type.",
    epilog="""
TYPE is simplified before the lookup, so 'application/x-Ruby' finds
'application/ruby' definitions. Results are ranked: registered, generic,
complete and current types come first.
""",
)
@click.argument("type_id", metavar="TYPE")
@click.option(
    "--regex",
    "use_regex",
    is_flag=True,
    default=False,
    help="Treat TYPE as a regular expression searched in every simplified type.",
)
@click.option(
    "--complete",
    "complete_only",
    is_flag=True,
    default=False,
    help="Only report types with at least one known extension.",
)
@platform_option
@index_option
@format_option
def lookup_command(
    *,
    type_id: str,
    use_regex: bool = False,
    complete_only: bool = False,
    platform_only: bool = False,
    index_dir: Path | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Show the types matching ``type_id``.

    Args:
        type_id (str): Content type or, with ``use_regex``, a pattern.
        use_regex (bool): Search ``type_id`` as a pattern in every simplified type.
        complete_only (bool): Only report types with extensions.
        platform_only (bool): Only report types specific to the configured platform.
        index_dir (Path | None): Persistent index to read instead of the definitions.
        output_format (OutputFormat | None): Output format (default text when None).
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    settings = get_settings(ctx)
    vlevel = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    query: str | re.Pattern[str] = type_id
    if use_regex:
        try:
            query = re.compile(type_id)
        except re.error as exc:
            raise MimedexUsageError(f"Invalid regular expression {type_id!r}: {exc}") from exc

    with translate_errors(), open_lookup_source(ctx, index_dir) as source:
        found: list[MimeType]
        if isinstance(source, Registry):
            found = source.lookup(query, complete=complete_only, platform=platform_only)
        else:
            if use_regex:
                raise MimedexUsageError("'--regex' is not supported with a persistent index.")
            found = source.lookup(type_id)
            if complete_only:
                found = [t for t in found if t.is_complete()]
            if platform_only:
                found = [t for t in found if t.is_platform(settings.platform)]

    if fmt in (OutputFormat.JSON, OutputFormat.NDJSON):
        emit_json(console, fmt, records_payload(found))
    elif found:
        for mime_type in found:
            for line in describe(console, mime_type, verbosity=vlevel):
                console.print(line)
    elif vlevel >= 0:
        console.warn(f"No type matches {type_id!r}.")

    if not found:
        ctx.exit(ExitCode.FAILURE)
