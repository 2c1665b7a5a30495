# topmark:header:start
#
#   project      : Mimedex
#   file         : build_index.py
#   file_relpath : src/mimedex/cli/commands/build_index.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex `build-index` command.

Loads the definitions into a registry and writes them to a persistent index,
replacing whatever the index directory held before.
"""

from __future__ import annotations

from pathlib import Path

import click

from mimedex.cli.cmd_common import (
    get_console,
    get_effective_verbosity,
    get_settings,
    resolve_index_dir,
)
from mimedex.cli.errors import MimedexUsageError, translate_errors
from mimedex.index.persistent import PersistentIndex
from mimedex.registry.loader import load_default_registry


@click.command(
    name="build-index",
    help="Build a persistent index from the type definitions.",
    epilog="""
DIR defaults to the configured index path ('index' in mimedex.toml or the
MIMEDEX_INDEX environment variable). An existing index in DIR is replaced.
""",
)
@click.argument(
    "index_dir",
    metavar="DIR",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)
@click.option(
    "--definitions",
    "definition_files",
    multiple=True,
    type=click.Path(dir_okay=False, path_type=Path),
    help="Extra definition file to load after the bundled ones. Can be repeated.",
)
@click.option(
    "--no-bundled",
    "no_bundled",
    is_flag=True,
    default=False,
    help="Do not load the bundled definitions.",
)
def build_index_command(
    *,
    index_dir: Path | None = None,
    definition_files: tuple[Path, ...] = (),
    no_bundled: bool = False,
) -> None:
    """Build a persistent index.

    Args:
        index_dir (Path | None): Target directory (configured index path when None).
        definition_files (tuple[Path, ...]): Extra definition files.
        no_bundled (bool): Skip the bundled definitions.
    """
    ctx = click.get_current_context()
    console = get_console(ctx)
    settings = get_settings(ctx)
    vlevel = get_effective_verbosity(ctx)

    target = resolve_index_dir(ctx, index_dir)
    if target is None:
        raise MimedexUsageError("No index directory given and none configured.")

    with translate_errors():
        registry = load_default_registry(
            platform=settings.platform,
            extra=(*settings.definitions, *definition_files),
            include_bundled=settings.include_bundled and not no_bundled,
        )
        with PersistentIndex.create(
            target, registry, cache_capacity=settings.cache_capacity
        ) as index:
            metadata = index.metadata

    if vlevel < 0 or metadata is None:
        return
    console.print(
        f"Indexed {console.styled(str(metadata.records), bold=True)} type(s) into {target} "
        f"({metadata.simplified_keys} simplified type(s), "
        f"{metadata.extension_keys} extension(s))."
    )
