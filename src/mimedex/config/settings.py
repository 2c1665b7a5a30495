# topmark:header:start
#
#   project      : Mimedex
#   file         : settings.py
#   file_relpath : src/mimedex/config/settings.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Resolve Mimedex settings from TOML files and the environment.

Settings come from, in increasing precedence:

1. built-in defaults (see [`Settings`][mimedex.config.settings.Settings]);
2. one TOML file: an explicit path, or the nearest ``mimedex.toml`` /
   ``pyproject.toml`` (``[tool.mimedex]`` table) found walking upward from the
   working directory;
3. the ``MIMEDEX_PLATFORM`` and ``MIMEDEX_INDEX`` environment variables.

Example ``mimedex.toml``:

```toml
platform = "linux"
index = ".mimedex-index"
cache_capacity = 250
definitions = ["local.types"]
include_bundled = true
```

Relative paths are resolved against the directory of the file that sets them.
"""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final, cast

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mimedex.config.logging import get_logger
from mimedex.constants import (
    CONFIG_FILE_NAME,
    DEFAULT_CACHE_CAPACITY,
    ENV_INDEX_PATH,
    ENV_PLATFORM,
    PYPROJECT_FILE_NAME,
    PYPROJECT_TOOL_SECTION,
)
from mimedex.errors import ConfigError

if TYPE_CHECKING:
    from collections.abc import Mapping

    from mimedex.config.logging import MimedexLogger

logger: MimedexLogger = get_logger(__name__)

KNOWN_KEYS: Final[frozenset[str]] = frozenset(
    {"platform", "index", "cache_capacity", "definitions", "include_bundled"}
)


def current_platform() -> str:
    """Return the interpreter's platform identifier (``sys.platform``)."""
    return sys.platform


@dataclass(frozen=True)
class Settings:
    """Effective Mimedex settings.

    Attributes:
        platform (str): Platform identifier used by platform filters.
        index_path (Path | None): Default persistent index directory, if any.
        cache_capacity (int): Entries per persistent index cache.
        definitions (tuple[Path, ...]): Extra definition files, loaded after the
            bundled ones.
        include_bundled (bool): Whether the bundled definitions are loaded.
        source (Path | None): The configuration file the values came from.
    """

    platform: str = field(default_factory=current_platform)
    index_path: Path | None = None
    cache_capacity: int = DEFAULT_CACHE_CAPACITY
    definitions: tuple[Path, ...] = ()
    include_bundled: bool = True
    source: Path | None = None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        text = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigError(f"Cannot read configuration file {path}: {exc}") from exc
    try:
        data: Any = tomlkit.parse(text).unwrap()
    except TomlkitParseError as exc:
        raise ConfigError(f"Invalid TOML in {path}: {exc}") from exc
    return cast("dict[str, Any]", data)


def _pyproject_table(data: Mapping[str, Any]) -> dict[str, Any] | None:
    tool = data.get("tool")
    if not isinstance(tool, dict):
        return None
    table = cast("dict[str, Any]", tool).get(PYPROJECT_TOOL_SECTION)
    return cast("dict[str, Any]", table) if isinstance(table, dict) else None


def read_config_table(path: Path) -> dict[str, Any]:
    """Return the Mimedex settings table of a TOML file.

    For ``pyproject.toml`` this is the ``[tool.mimedex]`` table (empty when
    absent); for any other file it is the whole document.

    Raises:
        ConfigError: If the file cannot be read or is not valid TOML.
    """
    data = _read_toml(path)
    if path.name == PYPROJECT_FILE_NAME:
        return _pyproject_table(data) or {}
    return data


def discover_config_file(start: Path) -> Path | None:
    """Return the nearest configuration file at or above ``start``.

    In each directory ``mimedex.toml`` wins over ``pyproject.toml``; the latter
    only counts when it has a ``[tool.mimedex]`` table.

    Args:
        start (Path): Directory (or file within it) where discovery starts.

    Returns:
        Path | None: The configuration file, or None if there is none.
    """
    cur = start.resolve()
    if cur.is_file():
        cur = cur.parent
    while True:
        candidate = cur / CONFIG_FILE_NAME
        if candidate.is_file():
            logger.debug("Discovered config file: %s", candidate)
            return candidate
        pyproject = cur / PYPROJECT_FILE_NAME
        if pyproject.is_file():
            try:
                has_table = _pyproject_table(_read_toml(pyproject)) is not None
            except ConfigError as exc:
                logger.debug("Ignoring unreadable %s: %s", pyproject, exc)
                has_table = False
            if has_table:
                logger.debug("Discovered config file: %s", pyproject)
                return pyproject
        if cur.parent == cur:
            return None
        cur = cur.parent


def _expect(table: Mapping[str, Any], key: str, kind: type, source: Path) -> Any:
    value = table[key]
    if not isinstance(value, kind) or (kind is int and isinstance(value, bool)):
        raise ConfigError(
            f"{source}: '{key}' must be of type {kind.__name__}, got {type(value).__name__}"
        )
    return value


def _settings_from_table(table: Mapping[str, Any], source: Path) -> dict[str, Any]:
    base = source.parent
    values: dict[str, Any] = {"source": source}

    for key in sorted(set(table) - KNOWN_KEYS):
        logger.warning("%s: ignoring unknown setting '%s'", source, key)

    if "platform" in table:
        values["platform"] = _expect(table, "platform", str, source)
    if "index" in table:
        values["index_path"] = base / _expect(table, "index", str, source)
    if "cache_capacity" in table:
        capacity = _expect(table, "cache_capacity", int, source)
        if capacity <= 0:
            raise ConfigError(f"{source}: 'cache_capacity' must be positive, got {capacity}")
        values["cache_capacity"] = capacity
    if "definitions" in table:
        entries = _expect(table, "definitions", list, source)
        if not all(isinstance(e, str) for e in entries):
            raise ConfigError(f"{source}: 'definitions' must be a list of strings")
        values["definitions"] = tuple(base / e for e in entries)
    if "include_bundled" in table:
        values["include_bundled"] = _expect(table, "include_bundled", bool, source)
    return values


def load_settings(
    path: Path | None = None,
    *,
    cwd: Path | None = None,
    env: Mapping[str, str] | None = None,
) -> Settings:
    """Resolve the effective settings.

    Args:
        path (Path | None): Explicit configuration file; skips discovery.
        cwd (Path | None): Directory where discovery starts (default: the
            current working directory).
        env (Mapping[str, str] | None): Environment to consult (default:
            ``os.environ``).

    Returns:
        Settings: The resolved settings.

    Raises:
        ConfigError: If the configuration file is missing, unreadable, not valid
            TOML, or holds values of the wrong type.
    """
    environ = os.environ if env is None else env
    values: dict[str, Any] = {}

    config_file: Path | None
    if path is not None:
        if not path.is_file():
            raise ConfigError(f"Configuration file not found: {path}")
        config_file = path
    else:
        config_file = discover_config_file(cwd or Path.cwd())

    if config_file is not None:
        values.update(_settings_from_table(read_config_table(config_file), config_file))
        logger.debug("Loaded settings from %s", config_file)

    env_platform = environ.get(ENV_PLATFORM)
    if env_platform:
        values["platform"] = env_platform
    env_index = environ.get(ENV_INDEX_PATH)
    if env_index:
        values["index_path"] = Path(env_index)

    settings = Settings(**values)
    logger.debug("Effective settings: %s", settings)
    return settings
