# topmark:header:start
#
#   project      : Mimedex
#   file         : test_persistent_index.py
#   file_relpath : tests/index/test_persistent_index.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Tests for `PersistentIndex`: parity with the registry, caching and lifecycle.

Most tests run against `MemoryStore` so cache behavior is observable; a few
use the default `dbm` backend to check that builds survive a reopen.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mimedex.constants import INDEX_META_NAME, INDEX_SIMPLIFIED_NAME
from mimedex.errors import CorruptionError, IndexNotBuiltError, StorageError
from mimedex.index import IndexMetadata, IndexState, PersistentIndex
from mimedex.registry import Registry
from tests.conftest import make_type, parametrize
from tests.index.memory_store import MemoryStore, store_reads

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from mimedex.mimetype import MimeType


def _same(left: list[MimeType], right: list[MimeType]) -> bool:
    return len(left) == len(right) and all(a.same_as(b) for a, b in zip(left, right))


def test_lookup_parity_with_registry(
    memory_index: PersistentIndex, mixed_registry: Registry
) -> None:
    for key in mixed_registry.simplified_types():
        assert _same(memory_index.lookup(key), mixed_registry.lookup(key)), key
    assert _same(
        memory_index.lookup("application/x-javascript"),
        mixed_registry.lookup("application/x-javascript"),
    )


def test_marker_only_media_type_parity(tmp_path: Path) -> None:
    registry = Registry(platform="linux")
    registry.add(make_type("x-/plain", extensions="xp"))
    with PersistentIndex.create(
        tmp_path / "index", registry, store_factory=MemoryStore
    ) as index:
        assert _same(index.lookup("x-/plain"), registry.lookup("x-/plain"))
        assert index.lookup_by_simplified("x-/plain")[0].content_type == "x-/plain"
        assert registry.lookup("x-/plain")[0].content_type == "x-/plain"


@parametrize("filename", ["a.js", "B.XML", "notes.txt", "style.xsl", "noext", "x.unknown"])
def test_type_for_parity_with_registry(
    memory_index: PersistentIndex, mixed_registry: Registry, filename: str
) -> None:
    assert _same(memory_index.type_for(filename), mixed_registry.type_for(filename))


def test_lookup_ranks_best_first(memory_index: PersistentIndex) -> None:
    found = memory_index["text/plain"]
    assert [t.system for t in found] == [None, "vms"]
    assert memory_index.lookup("garbage") == []


def test_repeated_lookups_are_served_from_cache(memory_index: PersistentIndex) -> None:
    memory_index.lookup("text/plain")
    reads = store_reads(memory_index)
    assert reads == 1

    for _ in range(3):
        memory_index.lookup("TEXT/PLAIN")
    assert store_reads(memory_index) == reads
    info = memory_index.cache_info()["simplified"]
    assert (info.hits, info.misses, info.size) == (3, 1, 1)


def test_missing_keys_are_cached(memory_index: PersistentIndex) -> None:
    assert memory_index.lookup_by_extension("doc") == []
    assert memory_index.type_for("memo.doc") == []
    assert store_reads(memory_index) == 1
    info = memory_index.cache_info()["extension"]
    assert (info.hits, info.misses) == (1, 1)


def test_results_are_fresh_lists(memory_index: PersistentIndex) -> None:
    memory_index.lookup_by_simplified("text/plain").clear()
    assert len(memory_index.lookup_by_simplified("text/plain")) == 2


def test_iteration_follows_sorted_keys(memory_index: PersistentIndex) -> None:
    assert [t.content_type for t in memory_index] == [
        "application/javascript",
        "application/x-javascript",
        "application/xml",
        "text/plain",
        "text/plain",
        "text/xml",
    ]
    assert memory_index.count() == len(memory_index) == 6
    assert [t.content_type for t in memory_index.each()][0] == "application/javascript"


def test_metadata_describes_the_build(memory_index: PersistentIndex) -> None:
    assert memory_index.state is IndexState.BUILT
    assert memory_index.metadata == IndexMetadata(
        format=1, records=6, simplified_keys=4, extension_keys=5
    )
    assert memory_index.meta_path.is_file()


def test_rebuild_replaces_contents_and_caches(memory_index: PersistentIndex) -> None:
    assert len(memory_index.lookup("text/plain")) == 2

    memory_index.build(Registry())
    assert memory_index.state is IndexState.BUILT
    assert memory_index.count() == 0
    assert memory_index.lookup("text/plain") == []
    assert memory_index.type_for("a.js") == []

    memory_index.build([make_type("image/png", extensions="png")])
    assert [t.content_type for t in memory_index.type_for("logo.png")] == ["image/png"]
    assert memory_index.lookup("text/plain") == []


def test_empty_index_refuses_reads(tmp_path: Path) -> None:
    with PersistentIndex(tmp_path / "index", store_factory=MemoryStore) as index:
        assert index.state is IndexState.EMPTY
        assert index.metadata is None
        with pytest.raises(IndexNotBuiltError):
            index.lookup("text/plain")
        with pytest.raises(IndexNotBuiltError):
            index.lookup("garbage")
        with pytest.raises(IndexNotBuiltError):
            index.type_for("noext")
        with pytest.raises(IndexNotBuiltError):
            list(index)


def test_failed_build_leaves_index_empty(memory_index: PersistentIndex) -> None:
    def snapshot() -> Iterator[MimeType]:
        yield make_type("text/plain", extensions="txt")
        raise RuntimeError("snapshot changed")

    with pytest.raises(RuntimeError):
        memory_index.build(snapshot())
    assert memory_index.state is IndexState.EMPTY
    assert not memory_index.meta_path.exists()
    with pytest.raises(IndexNotBuiltError):
        memory_index.lookup("text/plain")


def test_corrupt_bucket_raises(memory_index: PersistentIndex) -> None:
    MemoryStore.databases[memory_index.path / INDEX_SIMPLIFIED_NAME]["text/plain"] = b"not json"
    with pytest.raises(CorruptionError):
        memory_index.lookup("text/plain")
    with pytest.raises(CorruptionError):
        memory_index.count()
    assert memory_index.lookup("text/xml")[0].content_type == "text/xml"


@parametrize(
    "text",
    [
        "format = [",
        "format = 1\nrecords = 3\n",
        "format = 99\nrecords = 0\nsimplified_keys = 0\nextension_keys = 0\n",
        "format = 1\nrecords = true\nsimplified_keys = 0\nextension_keys = 0\n",
    ],
)
def test_corrupt_metadata_fails_open(tmp_path: Path, text: str) -> None:
    path = tmp_path / "index"
    path.mkdir()
    (path / INDEX_META_NAME).write_text(text, encoding="utf-8")
    with pytest.raises(CorruptionError):
        PersistentIndex(path, store_factory=MemoryStore)


def test_metadata_toml_round_trip(tmp_path: Path) -> None:
    meta = IndexMetadata(format=1, records=3, simplified_keys=2, extension_keys=4)
    assert IndexMetadata.from_toml(meta.to_toml(), source=tmp_path) == meta


def test_closed_index_raises(memory_index: PersistentIndex) -> None:
    memory_index.close()
    memory_index.close()
    with pytest.raises(StorageError):
        memory_index.lookup("text/plain")
    with pytest.raises(StorageError):
        memory_index.build(Registry())


def test_dbm_index_survives_reopen(tmp_path: Path, mixed_registry: Registry) -> None:
    path = tmp_path / "index"
    with PersistentIndex.create(path, mixed_registry, cache_capacity=2) as built:
        assert built.state is IndexState.BUILT
        expected = built.metadata

    with PersistentIndex(path) as reopened:
        assert reopened.state is IndexState.BUILT
        assert reopened.metadata == expected
        assert _same(reopened.lookup("text/plain"), mixed_registry.lookup("text/plain"))
        assert [t.content_type for t in reopened.type_for("page.XML")] == [
            "application/xml",
            "text/xml",
        ]
        assert reopened.count() == mixed_registry.count()
        assert "(built)" in repr(reopened)


def test_dbm_rebuild_discards_old_buckets(tmp_path: Path, sample_registry: Registry) -> None:
    path = tmp_path / "index"
    PersistentIndex.create(path, sample_registry).close()

    with PersistentIndex(path) as index:
        index.build([make_type("image/png", extensions="png")])

    with PersistentIndex(path) as index:
        assert index.lookup("text/plain") == []
        assert index.count() == 1
