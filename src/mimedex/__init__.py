# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Mimedex package.

Mimedex resolves MIME content-type metadata. Given a content type, a file name
or a pattern it returns the matching type definitions, ranked from most to least
reliable. Definitions live in an in-memory [`Registry`][mimedex.registry.Registry]
and can be persisted to a cache-fronted on-disk
[`PersistentIndex`][mimedex.index.PersistentIndex].

```python
from mimedex import load_default_registry

registry = load_default_registry(platform="linux")
registry["text/plain"][0].extensions  # ['txt', 'asc', ...]
registry.type_for("report.xml")
```
"""

from __future__ import annotations

from mimedex.errors import (
    ConfigError,
    CorruptionError,
    DefinitionParseError,
    IndexNotBuiltError,
    InvalidArgument,
    InvalidContentType,
    MimedexError,
    StorageError,
)
from mimedex.index import PersistentIndex
from mimedex.mimetype import MimeType, simplified
from mimedex.registry import Registry, load_default_registry

__all__ = [
    "MimeType",
    "simplified",
    "Registry",
    "load_default_registry",
    "PersistentIndex",
    # Errors
    "MimedexError",
    "InvalidContentType",
    "InvalidArgument",
    "DefinitionParseError",
    "StorageError",
    "IndexNotBuiltError",
    "CorruptionError",
    "ConfigError",
]
