# topmark:header:start
#
#   project      : Mimedex
#   file         : type_for.py
#   file_relpath : src/mimedex/cli/commands/type_for.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex `type-for` command.

Prints the types registered for the extension of each given file name.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

import click

from mimedex.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    get_settings,
    open_lookup_source,
)
from mimedex.cli.errors import translate_errors
from mimedex.cli.exit_codes import ExitCode
from mimedex.cli.formats import OutputFormat, describe, emit_json, records_payload
from mimedex.cli.options import format_option, index_option, platform_option
from mimedex.registry.registry import Registry

if TYPE_CHECKING:
    from pathlib import Path

    from mimedex.mimetype.base import MimeType


@click.command(
    name="type-for",
    help="Show the types registered for the extensions of file names.",
    epilog="""
Only the text after the last '.' of each FILENAME is used; matching is
case-insensitive. The files do not need to exist.
""",
)
@click.argument("filenames", metavar="FILENAME...", nargs=-1, required=True)
@platform_option
@index_option
@format_option
def type_for_command(
    *,
    filenames: tuple[str, ...],
    platform_only: bool = False,
    index_dir: Path | None = None,
    output_format: OutputFormat | None = None,
) -> None:
    """Show the types registered for the extension of each file name.

    Args:
        filenames (tuple[str, ...]): File names or paths.
        platform_only (bool): Only report types specific to the configured platform.
        index_dir (Path | None): Persistent index to read instead of the definitions.
        output_format (OutputFormat | None): Output format (default text when None).
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    settings = get_settings(ctx)
    vlevel = get_effective_verbosity(ctx)
    fmt: OutputFormat = output_format or OutputFormat.DEFAULT

    results: list[tuple[str, list[MimeType]]] = []
    with translate_errors(), open_lookup_source(ctx, index_dir) as source:
        for filename in filenames:
            found: list[MimeType]
            if isinstance(source, Registry):
                found = source.type_for(filename, platform=platform_only)
            else:
                found = source.type_for(filename)
                if platform_only:
                    found = [t for t in found if t.is_platform(settings.platform)]
            results.append((filename, found))

    if fmt in (OutputFormat.JSON, OutputFormat.NDJSON):
        payload: list[dict[str, Any]] = [
            {"filename": filename, "types": records_payload(found)}
            for filename, found in results
        ]
        emit_json(console, fmt, payload)
    else:
        for filename, found in results:
            if vlevel >= 0 or len(results) > 1:
                console.print(console.styled(f"{filename}:", underline=True))
            if not found:
                console.print("    (unknown)")
            for mime_type in found:
                for line in describe(console, mime_type, verbosity=vlevel):
                    console.print(f"    {line}")

    if any(not found for _, found in results):
        ctx.exit(ExitCode.FAILURE)
