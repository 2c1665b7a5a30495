# topmark:header:start
#
#   project      : Mimedex
#   file         : formats.py
#   file_relpath : src/mimedex/cli/formats.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Output formats and record rendering for the Mimedex CLI."""

from __future__ import annotations

import json
from enum import Enum
from typing import TYPE_CHECKING, Any

from mimedex.mimetype.serializers import to_dict

if TYPE_CHECKING:
    from mimedex.cli.console_api import ConsoleLike
    from mimedex.mimetype.base import MimeType


class OutputFormat(str, Enum):
    """Output format for CLI rendering.

    Members:
      DEFAULT: Human-friendly text output; may include ANSI color if enabled.
      JSON: A single JSON document (machine-readable).
      NDJSON: One JSON object per line (newline-delimited JSON; machine-readable).

    Notes:
      - Machine formats (``JSON`` and ``NDJSON``) never include ANSI color.
    """

    DEFAULT = "default"
    JSON = "json"
    NDJSON = "ndjson"


def is_machine_format(fmt: OutputFormat) -> bool:
    """Return True for the JSON-based formats."""
    return fmt in (OutputFormat.JSON, OutputFormat.NDJSON)


def _flags(mime_type: MimeType) -> list[str]:
    flags: list[str] = []
    if not mime_type.registered:
        flags.append("unregistered")
    if mime_type.is_obsolete():
        flags.append("obsolete")
    if mime_type.is_system():
        flags.append(f"system={mime_type.system}")
    if mime_type.is_signature():
        flags.append("signature")
    return flags


def describe(console: ConsoleLike, mime_type: MimeType, *, verbosity: int = 0) -> list[str]:
    """Return the human-readable lines describing one type.

    The first line always holds the content type, encoding and extensions;
    ``verbosity > 0`` adds documentation, replacement and URL lines.
    """
    head = console.styled(mime_type.content_type, bold=True)
    exts = ",".join(mime_type.extensions) or "-"
    line = f"{head}  {mime_type.encoding}  {exts}"
    flags = _flags(mime_type)
    if flags:
        line += "  " + console.styled(f"[{', '.join(flags)}]", fg="yellow")
    lines = [line]

    if verbosity > 0:
        if mime_type.use_instead:
            lines.append(f"    use instead: {', '.join(mime_type.use_instead)}")
        if mime_type.docs:
            lines.append(f"    docs: {mime_type.docs}")
        for url in mime_type.urls:
            text = f"{url[0]}: {url[1]}" if isinstance(url, tuple) else url
            lines.append(f"    url: {text}")
    return lines


def emit_json(console: ConsoleLike, fmt: OutputFormat, payload: list[dict[str, Any]]) -> None:
    """Print ``payload`` as one JSON array or as one JSON object per line."""
    if fmt == OutputFormat.JSON:
        console.print(json.dumps(payload, indent=2))
        return
    for item in payload:
        console.print(json.dumps(item))


def records_payload(mime_types: list[MimeType]) -> list[dict[str, Any]]:
    """Return the hash forms of ``mime_types``."""
    return [dict(to_dict(t)) for t in mime_types]
