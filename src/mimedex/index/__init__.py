# topmark:header:start
#
#   project      : Mimedex
#   file         : __init__.py
#   file_relpath : src/mimedex/index/__init__.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Persistent, cache-fronted MIME type index."""

from __future__ import annotations

from mimedex.index.cache import CacheInfo, LRUCache
from mimedex.index.persistent import NOT_FOUND, IndexMetadata, IndexState, PersistentIndex
from mimedex.index.store import BucketStore, DbmBucketStore, StoreFactory

__all__ = [
    "PersistentIndex",
    "IndexState",
    "IndexMetadata",
    "NOT_FOUND",
    "LRUCache",
    "CacheInfo",
    "BucketStore",
    "StoreFactory",
    "DbmBucketStore",
]
