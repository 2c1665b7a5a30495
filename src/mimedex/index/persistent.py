# topmark:header:start
#
#   project      : Mimedex
#   file         : persistent.py
#   file_relpath : src/mimedex/index/persistent.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Durable, cache-fronted index of MIME types.

A `PersistentIndex` lives in a directory holding:

* ``simplified.db``: simplified type -> bucket of types sharing it;
* ``ext.db``: extension -> bucket of types using it;
* ``index.toml``: build metadata, written last, whose presence marks a
  completed build.

Each bucket is the JSON array produced by
[`dump_bucket`][mimedex.mimetype.serializers.dump_bucket]. Reads go through one
[`LRUCache`][mimedex.index.cache.LRUCache] per store; keys without a bucket are
cached too, so repeated misses never reach the store either.

State machine:

    EMPTY --build()--> BUILT --build()--> (EMPTY while rebuilding) --> BUILT

Reading from an EMPTY index raises
[`IndexNotBuiltError`][mimedex.errors.IndexNotBuiltError].
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import TYPE_CHECKING, Any, Final

import tomlkit
from tomlkit.exceptions import ParseError as TomlkitParseError

from mimedex.config.logging import get_logger
from mimedex.constants import (
    DEFAULT_CACHE_CAPACITY,
    INDEX_EXTENSION_NAME,
    INDEX_FORMAT_VERSION,
    INDEX_META_NAME,
    INDEX_SIMPLIFIED_NAME,
)
from mimedex.errors import CorruptionError, IndexNotBuiltError, StorageError
from mimedex.index.cache import LRUCache
from mimedex.index.store import DbmBucketStore
from mimedex.mimetype.base import simplified
from mimedex.mimetype.serializers import dump_bucket, load_bucket
from mimedex.registry.registry import extension_of, sort_by_priority

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator
    from types import TracebackType

    from mimedex.config.logging import MimedexLogger
    from mimedex.index.cache import CacheInfo
    from mimedex.index.store import BucketStore, StoreFactory
    from mimedex.mimetype.base import MimeType

logger: MimedexLogger = get_logger(__name__)


class IndexState(str, Enum):
    """Lifecycle state of a `PersistentIndex`."""

    EMPTY = "empty"
    BUILT = "built"


class _NotFound:
    """Cached marker for keys that have no bucket."""

    def __repr__(self) -> str:
        return "<not found>"


NOT_FOUND: Final[_NotFound] = _NotFound()

CachedBucket = tuple["MimeType", ...] | _NotFound


@dataclass(frozen=True)
class IndexMetadata:
    """Summary written by a completed build.

    Attributes:
        format (int): On-disk format version.
        records (int): Number of types in the build snapshot.
        simplified_keys (int): Number of buckets in the simplified store.
        extension_keys (int): Number of buckets in the extension store.
    """

    format: int
    records: int
    simplified_keys: int
    extension_keys: int

    def to_toml(self) -> str:
        """Render the metadata as a TOML document."""
        doc: tomlkit.TOMLDocument = tomlkit.document()
        doc.add(tomlkit.comment("Mimedex persistent index metadata; written after a build."))
        doc.add("format", self.format)
        doc.add("records", self.records)
        doc.add("simplified_keys", self.simplified_keys)
        doc.add("extension_keys", self.extension_keys)
        return tomlkit.dumps(doc)

    @classmethod
    def from_toml(cls, text: str, *, source: Path) -> IndexMetadata:
        """Parse metadata written by `to_toml`.

        Raises:
            CorruptionError: If the text is not valid TOML, misses a field, or has
                an unsupported format version.
        """
        try:
            data: Any = tomlkit.parse(text).unwrap()
        except TomlkitParseError as exc:
            raise CorruptionError(f"Invalid index metadata in {source}: {exc}") from exc

        values: dict[str, int] = {}
        for name in ("format", "records", "simplified_keys", "extension_keys"):
            value = data.get(name)
            if not isinstance(value, int) or isinstance(value, bool):
                raise CorruptionError(f"Index metadata {source} lacks integer field {name!r}")
            values[name] = value

        if values["format"] != INDEX_FORMAT_VERSION:
            raise CorruptionError(
                f"Unsupported index format {values['format']} in {source} "
                f"(expected {INDEX_FORMAT_VERSION})"
            )
        return cls(**values)


class PersistentIndex:
    """Two durable maps (by simplified type, by extension) fronted by LRU caches.

    Opening a directory that holds a completed build yields a BUILT index;
    anything else yields an EMPTY one that must be built before reading.

    Args:
        path (Path | str): Index directory; created if needed.
        cache_capacity (int): Entries per cache (one cache per store).
        store_factory (StoreFactory): Opens the backing stores; defaults to
            [`DbmBucketStore`][mimedex.index.store.DbmBucketStore].

    Raises:
        StorageError: If the directory or a store cannot be created or opened.
        CorruptionError: If existing build metadata cannot be read.
    """

    def __init__(
        self,
        path: Path | str,
        *,
        cache_capacity: int = DEFAULT_CACHE_CAPACITY,
        store_factory: StoreFactory = DbmBucketStore,
    ) -> None:
        self.path: Path = Path(path)
        self._store_factory: StoreFactory = store_factory
        self._simplified_cache: LRUCache[str, CachedBucket] = LRUCache(cache_capacity)
        self._extension_cache: LRUCache[str, CachedBucket] = LRUCache(cache_capacity)

        try:
            self.path.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot create index directory {self.path}: {exc}") from exc

        self._simplified_store: BucketStore = store_factory(self.path / INDEX_SIMPLIFIED_NAME)
        try:
            self._extension_store: BucketStore = store_factory(self.path / INDEX_EXTENSION_NAME)
        except BaseException:
            self._simplified_store.close()
            raise
        self._closed: bool = False
        self._metadata: IndexMetadata | None = None
        try:
            self._metadata = self._read_metadata()
        except BaseException:
            self.close()
            raise
        logger.debug("Opened index %s (%s)", self.path, self.state.value)

    @classmethod
    def create(
        cls,
        path: Path | str,
        snapshot: Iterable[MimeType],
        **kwargs: Any,
    ) -> PersistentIndex:
        """Open the index at ``path`` and build it from ``snapshot``.

        Args:
            path (Path | str): Index directory.
            snapshot (Iterable[MimeType]): Usually a
                [`Registry`][mimedex.registry.Registry].
            **kwargs (Any): Forwarded to the constructor.

        Returns:
            PersistentIndex: The BUILT index.
        """
        index = cls(path, **kwargs)
        try:
            index.build(snapshot)
        except BaseException:
            index.close()
            raise
        return index

    # --- state --------------------------------------------------------------

    @property
    def meta_path(self) -> Path:
        """Path of the build metadata file."""
        return self.path / INDEX_META_NAME

    @property
    def state(self) -> IndexState:
        """Current lifecycle state."""
        return IndexState.BUILT if self._metadata is not None else IndexState.EMPTY

    @property
    def metadata(self) -> IndexMetadata | None:
        """Metadata of the completed build, or None while EMPTY."""
        return self._metadata

    def _read_metadata(self) -> IndexMetadata | None:
        try:
            text = self.meta_path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except OSError as exc:
            raise StorageError(f"Cannot read {self.meta_path}: {exc}") from exc
        return IndexMetadata.from_toml(text, source=self.meta_path)

    def _require_built(self) -> None:
        if self._closed:
            raise StorageError(f"Index {self.path} is closed")
        if self._metadata is None:
            raise IndexNotBuiltError(self.path)

    # --- build --------------------------------------------------------------

    def build(self, snapshot: Iterable[MimeType]) -> None:
        """Replace the whole index with the contents of ``snapshot``.

        Prior stores, metadata and cache entries are discarded first, so a
        failed build leaves the index EMPTY rather than half old, half new.

        Args:
            snapshot (Iterable[MimeType]): The types to index, in registration
                order. It must not change during the build.

        Raises:
            StorageError: If a store or the metadata file cannot be written.
        """
        if self._closed:
            raise StorageError(f"Index {self.path} is closed")

        try:
            self.meta_path.unlink(missing_ok=True)
        except OSError as exc:
            raise StorageError(f"Cannot remove {self.meta_path}: {exc}") from exc
        self._metadata = None
        self._simplified_cache.clear()
        self._extension_cache.clear()

        self._simplified_store.close()
        self._extension_store.close()
        self._simplified_store = self._store_factory(self.path / INDEX_SIMPLIFIED_NAME, "n")
        self._extension_store = self._store_factory(self.path / INDEX_EXTENSION_NAME, "n")
        logger.debug("Cleared index %s", self.path)

        by_simplified: dict[str, list[MimeType]] = {}
        by_extension: dict[str, list[MimeType]] = {}
        records = 0
        for mime_type in snapshot:
            records += 1
            by_simplified.setdefault(mime_type.simplified, []).append(mime_type)
            for ext in mime_type.extensions:
                by_extension.setdefault(ext, []).append(mime_type)

        for key, bucket in by_simplified.items():
            self._simplified_store.put(key, dump_bucket(bucket))
        for key, bucket in by_extension.items():
            self._extension_store.put(key, dump_bucket(bucket))

        metadata = IndexMetadata(
            format=INDEX_FORMAT_VERSION,
            records=records,
            simplified_keys=len(by_simplified),
            extension_keys=len(by_extension),
        )
        try:
            self.meta_path.write_text(metadata.to_toml(), encoding="utf-8")
        except OSError as exc:
            raise StorageError(f"Cannot write {self.meta_path}: {exc}") from exc
        self._metadata = metadata
        logger.info(
            "Built index %s: %d type(s), %d simplified key(s), %d extension key(s)",
            self.path,
            metadata.records,
            metadata.simplified_keys,
            metadata.extension_keys,
        )

    # --- lookups ------------------------------------------------------------

    @staticmethod
    def _read_bucket(store: BucketStore, key: str) -> CachedBucket:
        data = store.get(key)
        if data is None:
            logger.trace("No bucket for %r", key)
            return NOT_FOUND
        logger.trace("Loaded bucket %r (%d bytes)", key, len(data))
        return tuple(load_bucket(data))

    def _lookup(
        self, cache: LRUCache[str, CachedBucket], store: BucketStore, key: str
    ) -> list[MimeType]:
        self._require_built()
        cached = cache.get_or_set(key, lambda k: self._read_bucket(store, k))
        if isinstance(cached, _NotFound):
            return []
        return list(cached)

    def lookup_by_simplified(self, key: str) -> list[MimeType]:
        """Return the types stored under a simplified type, in registration order.

        Args:
            key (str): The exact simplified type, e.g. ``"text/plain"``.

        Returns:
            list[MimeType]: A new list; empty when the key is unknown.

        Raises:
            IndexNotBuiltError: If the index is EMPTY.
            CorruptionError: If the stored bucket cannot be deserialized.
        """
        return self._lookup(self._simplified_cache, self._simplified_store, key)

    def lookup_by_extension(self, key: str) -> list[MimeType]:
        """Return the types stored under an extension, in registration order.

        Args:
            key (str): The exact (lowercase) extension, e.g. ``"xml"``.

        Returns:
            list[MimeType]: A new list; empty when the key is unknown.

        Raises:
            IndexNotBuiltError: If the index is EMPTY.
            CorruptionError: If the stored bucket cannot be deserialized.
        """
        return self._lookup(self._extension_cache, self._extension_store, key)

    def lookup(self, type_id: str) -> list[MimeType]:
        """Return the types matching a content type, best first.

        ``type_id`` is simplified before the lookup, as
        [`Registry.lookup`][mimedex.registry.Registry.lookup] does.
        """
        key = simplified(type_id)
        if key is None:
            self._require_built()
            return []
        return sort_by_priority(self.lookup_by_simplified(key))

    def __getitem__(self, type_id: str) -> list[MimeType]:
        return self.lookup(type_id)

    def type_for(self, filename: str) -> list[MimeType]:
        """Return the types registered for the extension of ``filename``."""
        ext = extension_of(filename)
        if not ext:
            self._require_built()
            return []
        return self.lookup_by_extension(ext)

    of = type_for

    # --- bulk access --------------------------------------------------------

    def __iter__(self) -> Iterator[MimeType]:
        """Yield every stored type, bucket by bucket in sorted key order."""
        self._require_built()
        store = self._simplified_store
        for key in store.keys():
            data = store.get(key)
            if data is None:
                raise CorruptionError(f"Bucket {key!r} vanished from {self.path}")
            yield from load_bucket(data)

    def each(self) -> Iterator[MimeType]:
        """Iterate over every stored type, bypassing the caches."""
        return iter(self)

    def count(self) -> int:
        """Return the number of stored types."""
        return sum(1 for _ in self)

    def __len__(self) -> int:
        return self.count()

    def cache_info(self) -> dict[str, CacheInfo]:
        """Return the statistics of both caches, keyed ``simplified`` and ``extension``."""
        return {
            "simplified": self._simplified_cache.info(),
            "extension": self._extension_cache.info(),
        }

    # --- resources ----------------------------------------------------------

    def close(self) -> None:
        """Close both stores and drop the caches. Idempotent."""
        if self._closed:
            return
        self._closed = True
        self._simplified_store.close()
        self._extension_store.close()
        self._simplified_cache.clear()
        self._extension_cache.clear()
        logger.debug("Closed index %s", self.path)

    def __enter__(self) -> PersistentIndex:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"<PersistentIndex {self.path} ({self.state.value})>"
