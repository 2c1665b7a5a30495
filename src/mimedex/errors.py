# topmark:header:start
#
#   project      : Mimedex
#   file         : errors.py
#   file_relpath : src/mimedex/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exception hierarchy for Mimedex.

Library code raises these exceptions synchronously from the call that caused
them and never recovers from them internally. The CLI maps them onto exit codes
(see [`mimedex.cli.errors`][mimedex.cli.errors]).

Validation errors also derive from `ValueError` and storage errors from
`OSError`, so callers that only know the builtin families still catch them.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class MimedexError(Exception):
    """Base class for all Mimedex errors."""


class InvalidContentType(MimedexError, ValueError):
    """A content type is not in the form ``media/sub``."""

    def __init__(self, content_type: object) -> None:
        self.content_type = content_type
        super().__init__(f"Invalid Content-Type provided ({content_type!r})")


class InvalidArgument(MimedexError, ValueError):
    """An attribute value is not acceptable (e.g. an unknown encoding token)."""


class DefinitionParseError(MimedexError, ValueError):
    """A line of a type definition source does not match the definition grammar.

    Attributes:
        source (str): Name of the definition source (usually a file path).
        lineno (int): 1-based line number of the offending line.
        line (str): The offending line, without its line terminator.
    """

    def __init__(self, source: str, lineno: int, line: str) -> None:
        self.source = source
        self.lineno = lineno
        self.line = line
        super().__init__(f"{source}:{lineno}: Parsing error in MIME type definitions: {line!r}")


class StorageError(MimedexError, OSError):
    """A backing store cannot be created, opened, read or written."""


class IndexNotBuiltError(StorageError):
    """A persistent index was read before a build completed."""

    def __init__(self, path: Path) -> None:
        self.path = path
        super().__init__(f"No completed index build at {path}")


class CorruptionError(MimedexError):
    """A stored bucket or index metadata cannot be deserialized."""


class ConfigError(MimedexError):
    """A configuration file is malformed or holds values of the wrong type."""
