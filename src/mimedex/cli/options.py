# topmark:header:start
#
#   project      : Mimedex
#   file         : options.py
#   file_relpath : src/mimedex/cli/options.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Common CLI options and their resolution logic.

Commands and the group stay thin by sharing the decorators defined here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, ParamSpec, TypeVar

import click

from mimedex.cli.cli_types import EnumChoiceParam
from mimedex.cli.errors import MimedexUsageError
from mimedex.cli.formats import OutputFormat

P = ParamSpec("P")
R = TypeVar("R")


def resolve_verbosity(verbose_count: int, quiet_count: int) -> int:
    """Resolve the program-output verbosity from ``-v`` and ``-q`` counts.

    Args:
        verbose_count (int): Number of ``-v`` flags.
        quiet_count (int): Number of ``-q`` flags.

    Returns:
        int: ``verbose_count`` when positive, ``-1`` when quiet, else ``0``.

    Raises:
        MimedexUsageError: If both verbose and quiet flags are used.
    """
    if verbose_count > 0 and quiet_count > 0:
        raise MimedexUsageError("The '--verbose' and '--quiet' options are mutually exclusive.")
    if verbose_count > 0:
        return verbose_count
    if quiet_count > 0:
        return -1
    return 0


def common_verbose_options(f: Callable[P, R]) -> Callable[P, R]:
    """Add ``-v/--verbose`` and ``-q/--quiet`` counting options."""
    f = click.option(
        "-v",
        "--verbose",
        count=True,
        help="Increase output detail. Specify twice for even more.",
    )(f)
    f = click.option(
        "-q",
        "--quiet",
        count=True,
        help="Only print results, no headings or hints.",
    )(f)
    return f


def format_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--format`` option (parsed into `OutputFormat`)."""
    return click.option(
        "--format",
        "output_format",
        type=EnumChoiceParam(OutputFormat),
        default=None,
        help=f"Output format ({', '.join(v.value for v in OutputFormat)}).",
    )(f)


def index_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--index DIR`` option selecting a persistent index."""
    return click.option(
        "--index",
        "index_dir",
        type=click.Path(file_okay=False, path_type=Path),
        default=None,
        help="Serve lookups from the persistent index in DIR instead of the definitions.",
    )(f)


def platform_option(f: Callable[P, R]) -> Callable[P, R]:
    """Add the ``--platform`` filter flag."""
    return click.option(
        "--platform",
        "platform_only",
        is_flag=True,
        default=False,
        help="Only report types specific to the configured platform.",
    )(f)
