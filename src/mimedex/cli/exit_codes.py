# topmark:header:start
#
#   project      : Mimedex
#   file         : exit_codes.py
#   file_relpath : src/mimedex/cli/exit_codes.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Exit codes for the Mimedex CLI.

Mimedex follows the BSD `sysexits` convention so other tooling can interpret
failures consistently. A lookup that matches nothing exits with ``FAILURE``.
"""

from enum import IntEnum


class ExitCode(IntEnum):
    """Standardized exit codes for the Mimedex CLI.

    Attributes:
        SUCCESS: Successful execution; every query matched.
        FAILURE: At least one query matched no type.
        USAGE_ERROR: Command-line invocation error (invalid flags/args). Mirrors
            BSD ``EX_USAGE (64)``.
        DATA_ERROR: A definition file or a stored bucket cannot be parsed.
            Mirrors BSD ``EX_DATAERR (65)``.
        FILE_NOT_FOUND: Input path does not exist. Mirrors BSD ``EX_NOINPUT (66)``.
        IO_ERROR: A persistent index cannot be opened, read or written (including
            reads before a build). Mirrors BSD ``EX_IOERR (74)``.
        CONFIG_ERROR: Configuration error (missing/invalid/malformed config).
            Mirrors BSD ``EX_CONFIG (78)``.
    """

    SUCCESS = 0
    FAILURE = 1

    USAGE_ERROR = 64  # EX_USAGE
    DATA_ERROR = 65  # EX_DATAERR
    FILE_NOT_FOUND = 66  # EX_NOINPUT
    IO_ERROR = 74  # EX_IOERR
    CONFIG_ERROR = 78  # EX_CONFIG
