# topmark:header:start
#
#   project      : Mimedex
#   file         : loader.py
#   file_relpath : src/mimedex/registry/loader.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Load MIME type definitions from the line-oriented text format.

Each non-blank line defines one type:

    [*][!][platform:]media/sub[ @ext,ext][ :encoding][ 'url,url][ =docs][ #comment]

* ``*`` marks an unregistered type and ``!`` an obsolete one;
* ``platform:`` restricts the type to platforms matching that pattern;
* ``@`` introduces a comma-separated extension list;
* ``:`` introduces the transfer encoding;
* ``'`` introduces a comma-separated list of encoded URL tokens;
* ``=`` introduces free-form documentation (``use-instead:`` hints included);
* ``#`` starts a comment, which may also fill a whole line.

Bundled definitions ship as ``*.types`` resources of
[`mimedex.definitions`][mimedex.definitions] and are read in sorted file name
order, so registration order is deterministic across installs.
"""

from __future__ import annotations

import re
from importlib.resources import files
from pathlib import Path
from typing import TYPE_CHECKING, Final

from mimedex.config.logging import get_logger
from mimedex.constants import DEFINITIONS_PACKAGE, DEFINITIONS_SUFFIX
from mimedex.errors import DefinitionParseError, InvalidArgument, InvalidContentType
from mimedex.mimetype.base import MimeType
from mimedex.registry.registry import Registry

if TYPE_CHECKING:
    import sys
    from collections.abc import Iterable, Iterator

    if sys.version_info < (3, 14):
        from importlib.abc import Traversable
    else:
        from importlib.resources.abc import Traversable

    from mimedex.config.logging import MimedexLogger
    from mimedex.config.settings import Settings

logger: MimedexLogger = get_logger(__name__)

DEFINITION_RE: Final[re.Pattern[str]] = re.compile(
    r"""
    \A\s*
    (?P<unregistered>[*])?
    (?P<obsolete>!)?
    (?:(?P<platform>\w[-\w.]*):)?
    (?P<content_type>[-\w.+]+/[-\w.+]*)
    (?:\s+@(?P<extensions>\S+))?
    (?:\s+:(?P<encoding>base64|7bit|8bit|quoted-printable))?
    (?:\s+'(?P<url>.+?))?
    (?:\s+=(?P<docs>.+?))?
    (?:\s*[#].*)?
    \s*\Z
    """,
    re.VERBOSE,
)

_BLANK_OR_COMMENT_RE: Final[re.Pattern[str]] = re.compile(r"\A\s*(?:[#].*)?\Z")


def _split_list(value: str | None) -> list[str]:
    if not value:
        return []
    return [item.strip() for item in value.split(",") if item.strip()]


def parse_line(line: str, *, source: str = "<string>", lineno: int = 1) -> MimeType | None:
    """Parse a single definition line.

    Args:
        line (str): The line, with or without its terminator.
        source (str): Name of the definition source, for error messages.
        lineno (int): 1-based line number, for error messages.

    Returns:
        MimeType | None: The defined type, or None for blank and comment-only lines.

    Raises:
        DefinitionParseError: If the line does not match the definition grammar or
            defines an invalid type.
    """
    text = line.rstrip("\r\n")
    if _BLANK_OR_COMMENT_RE.match(text):
        return None

    match = DEFINITION_RE.match(text)
    if match is None:
        raise DefinitionParseError(source, lineno, text)

    try:
        return MimeType(
            match["content_type"],
            extensions=_split_list(match["extensions"]),
            encoding=match["encoding"],
            system=match["platform"],
            obsolete=match["obsolete"] is not None,
            docs=match["docs"],
            url=_split_list(match["url"]),
            registered=match["unregistered"] is None,
        )
    except (InvalidContentType, InvalidArgument) as exc:
        raise DefinitionParseError(source, lineno, text) from exc


def parse_definitions(lines: Iterable[str], *, source: str = "<string>") -> Iterator[MimeType]:
    """Yield the types defined by ``lines``, in order.

    Args:
        lines (Iterable[str]): Definition lines.
        source (str): Name of the definition source, for error messages.

    Yields:
        MimeType: One type per definition line.

    Raises:
        DefinitionParseError: On the first malformed line.
    """
    for lineno, line in enumerate(lines, start=1):
        mime_type = parse_line(line, source=source, lineno=lineno)
        if mime_type is not None:
            yield mime_type


def load_file(
    path: Path | Traversable,
    *,
    registry: Registry | None = None,
    warn_duplicates: bool = True,
) -> Registry:
    """Load a definition file into a registry.

    Args:
        path (Path | Traversable): The definition file (a filesystem path or a
            package resource).
        registry (Registry | None): Registry to populate; a new one when None.
        warn_duplicates (bool): Forwarded to
            [`Registry.add`][mimedex.registry.Registry.add].

    Returns:
        Registry: The populated registry.

    Raises:
        DefinitionParseError: If a line is malformed.
        FileNotFoundError: If ``path`` does not exist.
    """
    target = Registry() if registry is None else registry
    text = path.read_text(encoding="utf-8")
    before = target.count()
    target.add(
        parse_definitions(text.splitlines(), source=str(path)),
        warn_duplicates=warn_duplicates,
    )
    logger.debug("Loaded %d type(s) from %s", target.count() - before, path)
    return target


def bundled_definition_files() -> list[Traversable]:
    """Return the bundled ``*.types`` resources, sorted by file name."""
    root = files(DEFINITIONS_PACKAGE)
    found = [
        entry
        for entry in root.iterdir()
        if entry.is_file() and entry.name.endswith(DEFINITIONS_SUFFIX)
    ]
    return sorted(found, key=lambda entry: entry.name)


def load_default_registry(
    *,
    platform: str = "",
    extra: Iterable[Path] = (),
    include_bundled: bool = True,
    warn_duplicates: bool = False,
) -> Registry:
    """Build a registry from the bundled definitions.

    There is no process-wide registry: every call returns a new, independent
    `Registry`.

    Args:
        platform (str): Current platform identifier for the registry (e.g.
            ``sys.platform``).
        extra (Iterable[Path]): Additional definition files, loaded after the
            bundled ones in the given order.
        include_bundled (bool): Whether to load the bundled definitions.
        warn_duplicates (bool): Whether duplicate definitions are logged. Extra
            definition files commonly repeat bundled types, so this is off by
            default.

    Returns:
        Registry: The populated registry.
    """
    registry = Registry(platform=platform)
    sources: list[Path | Traversable] = []
    if include_bundled:
        sources.extend(bundled_definition_files())
    sources.extend(extra)

    for source in sources:
        load_file(source, registry=registry, warn_duplicates=warn_duplicates)

    logger.info(
        "Registry ready: %d type(s), %d simplified type(s), %d extension(s)",
        registry.count(),
        len(registry.simplified_types()),
        len(registry.extensions()),
    )
    return registry


def load_registry_from_settings(settings: Settings) -> Registry:
    """Build the registry described by resolved settings.

    Args:
        settings (Settings): Resolved configuration.

    Returns:
        Registry: Bundled definitions (unless disabled) plus the configured extra
            definition files, for the configured platform.
    """
    return load_default_registry(
        platform=settings.platform,
        extra=settings.definitions,
        include_bundled=settings.include_bundled,
    )
