# topmark:header:start
#
#   project      : Mimedex
#   file         : errors.py
#   file_relpath : src/mimedex/cli/errors.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exceptions for the Mimedex CLI.

Library code raises [`MimedexError`][mimedex.errors.MimedexError] subclasses;
commands run inside [`translate_errors`][mimedex.cli.errors.translate_errors],
which converts them into the CLI errors below so Click prints a single message
and exits with the matching [`ExitCode`][mimedex.cli.exit_codes.ExitCode].

Styling:
    Errors are printed through the project console when one is present in the
    Click context, and with Click's default styling otherwise.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import IO, TYPE_CHECKING, Any

import click

from mimedex.cli.exit_codes import ExitCode
from mimedex.errors import (
    ConfigError,
    CorruptionError,
    DefinitionParseError,
    IndexNotBuiltError,
    StorageError,
)

if TYPE_CHECKING:
    from collections.abc import Iterator


class MimedexCliError(click.ClickException):
    """Base class for all Mimedex CLI errors."""

    exit_code = ExitCode.FAILURE

    def format_message(self) -> str:
        """Return the plain error message text (colorized in `show`)."""
        return str(getattr(self, "message", ""))

    def show(self, file: IO[Any] | None = None) -> None:
        """Display the error using the project console if available."""
        ctx = click.get_current_context(silent=True)
        obj: object = getattr(ctx, "obj", None)
        console = obj.get("console") if isinstance(obj, dict) else None
        if console is None:
            super().show(file)
            return
        console.error(console.styled(f"Error: {self.format_message()}", fg="bright_red"))


class MimedexUsageError(MimedexCliError):
    """Error for command-line invocation errors (invalid flags/args)."""

    exit_code = ExitCode.USAGE_ERROR


class MimedexDataError(MimedexCliError):
    """Error for definition files or stored buckets that cannot be parsed."""

    exit_code = ExitCode.DATA_ERROR


class MimedexFileNotFoundError(MimedexCliError):
    """Error when an input path does not exist."""

    exit_code = ExitCode.FILE_NOT_FOUND


class MimedexIOError(MimedexCliError):
    """Error for persistent index I/O failures."""

    exit_code = ExitCode.IO_ERROR


class MimedexConfigError(MimedexCliError):
    """Error for configuration errors (missing/invalid/malformed config)."""

    exit_code = ExitCode.CONFIG_ERROR


@contextmanager
def translate_errors() -> Iterator[None]:
    """Convert library errors raised in the block into CLI errors.

    Raises:
        MimedexConfigError: For [`ConfigError`][mimedex.errors.ConfigError].
        MimedexDataError: For definition parse errors and corrupted buckets.
        MimedexIOError: For storage errors, including unbuilt indexes.
        MimedexFileNotFoundError: For missing input files.
    """
    try:
        yield
    except ConfigError as exc:
        raise MimedexConfigError(str(exc)) from exc
    except (DefinitionParseError, CorruptionError) as exc:
        raise MimedexDataError(str(exc)) from exc
    except IndexNotBuiltError as exc:
        raise MimedexIOError(f"{exc} (run 'mimedex build-index' first)") from exc
    except StorageError as exc:
        raise MimedexIOError(str(exc)) from exc
    except FileNotFoundError as exc:
        raise MimedexFileNotFoundError(f"File not found: {exc.filename or exc}") from exc
