# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/registry/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory MIME type registry and definition loading."""

from __future__ import annotations

from mimedex.registry.loader import (
    bundled_definition_files,
    load_default_registry,
    load_file,
    load_registry_from_settings,
    parse_definitions,
    parse_line,
)
from mimedex.registry.registry import Registry, extension_of, sort_by_priority

__all__ = [
    "Registry",
    "extension_of",
    "sort_by_priority",
    "parse_line",
    "parse_definitions",
    "load_file",
    "bundled_definition_files",
    "load_default_registry",
    "load_registry_from_settings",
]
