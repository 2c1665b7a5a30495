# topmark:header:start
#
#   project      : Mimedex
#   file         : conftest.py
#   file_relpath : tests/index/conftest.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Fixtures for persistent index tests."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from mimedex.index import PersistentIndex
from tests.index.memory_store import MemoryStore

if TYPE_CHECKING:
    from collections.abc import Iterator
    from pathlib import Path

    from mimedex.registry import Registry


@pytest.fixture(autouse=True)
def reset_memory_stores() -> Iterator[None]:
    MemoryStore.databases.clear()
    yield
    MemoryStore.databases.clear()


@pytest.fixture
def memory_index(tmp_path: Path, mixed_registry: Registry) -> Iterator[PersistentIndex]:
    """A BUILT index over ``mixed_registry`` backed by `MemoryStore`."""
    index = PersistentIndex.create(
        tmp_path / "index", mixed_registry, cache_capacity=8, store_factory=MemoryStore
    )
    yield index
    index.close()
