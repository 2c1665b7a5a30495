# topmark:header:start
#
#   project      : Mimedex
#   file         : registry.py
#   file_relpath : src/mimedex/registry/registry.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""In-memory registry of MIME types.

The registry keeps two multimaps in lock-step:

* simplified type -> types sharing it (e.g. ``text/plain`` has a generic and a
  VMS-specific definition), and
* extension -> types using it.

Both maps are only ever written by [`Registry.add`][mimedex.registry.Registry.add].
Lookups rank ambiguous matches with
[`MimeType.priority_compare`][mimedex.mimetype.MimeType.priority_compare] so the
first result is always the most reliable one.

Notes:
    * Iteration order is deterministic: simplified keys in insertion order, then
      types within a key in insertion order.
    * Adding a type equal to one already present logs a warning and keeps both
      (overlapping definition sources are tolerated). Adding the very same
      object twice is a no-op apart from the warning.
"""

from __future__ import annotations

import re
from functools import cmp_to_key
from typing import TYPE_CHECKING, Any, cast

from mimedex.config.logging import get_logger
from mimedex.mimetype.base import MimeType, simplified

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, KeysView

    from mimedex.config.logging import MimedexLogger

logger: MimedexLogger = get_logger(__name__)

priority_key = cmp_to_key(MimeType.priority_compare)


def extension_of(filename: str) -> str:
    """Return the lowercased text after the last ``.`` of a file name.

    Args:
        filename (str): A file name or path, e.g. ``"Report.ASC"``.

    Returns:
        str: The extension without the dot (``"asc"``), or ``""`` if there is none.
    """
    name = filename.strip().lower()
    _, dot, ext = name.rpartition(".")
    return ext if dot else ""


def sort_by_priority(mime_types: Iterable[MimeType]) -> list[MimeType]:
    """Return ``mime_types`` sorted best-first (stable)."""
    return sorted(mime_types, key=priority_key)


class Registry:
    """Multimap of MIME types keyed by simplified type and by extension.

    Args:
        platform (str): Identifier of the current platform, used by the
            ``platform=True`` filters (e.g. ``sys.platform``). An empty string
            means no platform-specific type ever matches.
    """

    def __init__(self, *, platform: str = "") -> None:
        self.platform: str = platform
        self._by_simplified: dict[str, list[MimeType]] = {}
        self._by_extension: dict[str, list[MimeType]] = {}

    # --- mutation -----------------------------------------------------------

    def add(
        self,
        *items: MimeType | Registry | Iterable[MimeType],
        warn_duplicates: bool = True,
    ) -> None:
        """Add types to the registry.

        Args:
            *items (MimeType | Registry | Iterable[MimeType]): Types to add. A
                `Registry` (or any iterable of types) is merged by re-adding every
                type it holds.
            warn_duplicates (bool): Log a warning when an equal type is already
                registered under the same simplified key.
        """
        for item in items:
            if isinstance(item, MimeType):
                self._add_one(item, warn_duplicates=warn_duplicates)
            else:
                for mime_type in list(item):
                    self._add_one(mime_type, warn_duplicates=warn_duplicates)

    def _add_one(self, mime_type: MimeType, *, warn_duplicates: bool) -> None:
        variants = self._by_simplified.setdefault(mime_type.simplified, [])
        if mime_type in variants:
            if warn_duplicates:
                logger.warning(
                    "Type %s already registered as a variant of %s.",
                    mime_type,
                    mime_type.simplified,
                )
            if any(v is mime_type for v in variants):
                return

        variants.append(mime_type)
        for ext in mime_type.extensions:
            self._by_extension.setdefault(ext, []).append(mime_type)
        logger.trace("Registered %s (%d extension(s))", mime_type, len(mime_type.extensions))

    # --- lookups ------------------------------------------------------------

    def lookup(
        self,
        type_id: str | re.Pattern[str] | MimeType,
        *,
        complete: bool = False,
        platform: bool = False,
    ) -> list[MimeType]:
        """Return the types matching ``type_id``, best first.

        Args:
            type_id (str | re.Pattern[str] | MimeType): A content type (simplified
                before lookup), a compiled pattern searched against every simplified
                key, or a `MimeType` (returned as the only match).
            complete (bool): Only return types with at least one extension.
            platform (bool): Only return types specific to ``self.platform``.

        Returns:
            list[MimeType]: Matching types sorted with
                [`priority_compare`][mimedex.mimetype.MimeType.priority_compare];
                empty when nothing matches.
        """
        matches: list[MimeType]
        if isinstance(type_id, re.Pattern):
            pattern = cast("re.Pattern[str]", type_id)
            matches = [
                t
                for key, variants in self._by_simplified.items()
                if pattern.search(key)
                for t in variants
            ]
        elif isinstance(type_id, MimeType):
            matches = [type_id]
        else:
            key = simplified(type_id)
            matches = list(self._by_simplified.get(key, ())) if key is not None else []

        if complete:
            matches = [t for t in matches if t.is_complete()]
        if platform:
            matches = [t for t in matches if t.is_platform(self.platform)]

        return sort_by_priority(matches)

    def __getitem__(self, type_id: str | re.Pattern[str] | MimeType) -> list[MimeType]:
        return self.lookup(type_id)

    def type_for(self, filename: str, *, platform: bool = False) -> list[MimeType]:
        """Return the types registered for the extension of ``filename``.

        Extension matching is case-insensitive:

        >> registry.type_for("citydesk.xml")
        [<MimeType 'application/xml'>, <MimeType 'text/xml'>]

        Args:
            filename (str): File name or path.
            platform (bool): Only return types specific to ``self.platform``.

        Returns:
            list[MimeType]: Types in registration order; empty when nothing matches.
        """
        found = list(self._by_extension.get(extension_of(filename), ()))
        if platform:
            found = [t for t in found if t.is_platform(self.platform)]
        return found

    of = type_for

    # --- views --------------------------------------------------------------

    def simplified_types(self) -> KeysView[str]:
        """Return the simplified type keys, in insertion order."""
        return self._by_simplified.keys()

    def extensions(self) -> KeysView[str]:
        """Return the extension keys, in insertion order."""
        return self._by_extension.keys()

    def count(self) -> int:
        """Return the number of registered types."""
        return sum(len(v) for v in self._by_simplified.values())

    def __len__(self) -> int:
        return self.count()

    def __iter__(self) -> Iterator[MimeType]:
        for variants in self._by_simplified.values():
            yield from variants

    def each(self) -> Iterator[MimeType]:
        """Iterate over every type; restartable, deterministic order."""
        return iter(self)

    def __contains__(self, item: Any) -> bool:
        if isinstance(item, MimeType):
            return item in self._by_simplified.get(item.simplified, ())
        if isinstance(item, str):
            key = simplified(item)
            return key is not None and key in self._by_simplified
        return False

    def __repr__(self) -> str:
        return f"<Registry types={self.count()} platform={self.platform!r}>"
