# topmark:header:start
#
#   project      : Mimedex
#   file         : cmd_common.py
#   file_relpath : src/mimedex/cli/cmd_common.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Helpers shared by the Mimedex subcommands.

The group callback stores the console, the verbosity and the resolved
[`Settings`][mimedex.config.settings.Settings] in ``ctx.obj``; commands read
them back through the accessors below.
"""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, cast

from mimedex.cli.errors import MimedexFileNotFoundError
from mimedex.config.logging import get_logger
from mimedex.config.settings import Settings
from mimedex.index.persistent import PersistentIndex
from mimedex.registry.loader import load_registry_from_settings

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    import click

    from mimedex.cli.console_api import ConsoleLike
    from mimedex.config.logging import MimedexLogger
    from mimedex.registry.registry import Registry

logger: MimedexLogger = get_logger(__name__)


def get_console(ctx: click.Context) -> ConsoleLike:
    """Return the console stored by the group callback."""
    ctx.ensure_object(dict)
    return cast("ConsoleLike", ctx.obj["console"])


def get_settings(ctx: click.Context) -> Settings:
    """Return the resolved settings (defaults when the group did not set any)."""
    ctx.ensure_object(dict)
    settings = ctx.obj.get("settings")
    if settings is None:
        settings = Settings()
        ctx.obj["settings"] = settings
    return cast("Settings", settings)


def get_effective_verbosity(ctx: click.Context) -> int:
    """Return the program-output verbosity (``-1`` quiet, ``0`` terse, ``>0`` verbose)."""
    ctx.ensure_object(dict)
    return int(ctx.obj.get("verbosity_level", 0))


def resolve_index_dir(ctx: click.Context, index_dir: Path | None) -> Path | None:
    """Return the index directory from ``--index``, else from the settings."""
    return index_dir if index_dir is not None else get_settings(ctx).index_path


@contextmanager
def open_lookup_source(
    ctx: click.Context, index_dir: Path | None
) -> Iterator[Registry | PersistentIndex]:
    """Yield the object serving lookups for a command.

    A persistent index is used when one is configured (``--index`` or the
    settings); otherwise a registry is loaded from the definitions.

    Raises:
        MimedexFileNotFoundError: If the index directory does not exist.
    """
    settings = get_settings(ctx)
    path = resolve_index_dir(ctx, index_dir)
    if path is None:
        yield load_registry_from_settings(settings)
        return

    if not path.is_dir():
        raise MimedexFileNotFoundError(f"Index directory not found: {path}")
    logger.debug("Serving lookups from index %s", path)
    with PersistentIndex(path, cache_capacity=settings.cache_capacity) as index:
        yield index
