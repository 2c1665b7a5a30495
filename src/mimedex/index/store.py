# topmark:header:start
#
#   project      : Mimedex
#   file         : store.py
#   file_relpath : src/mimedex/index/store.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# topmark:header:end

"""Durable key -> bytes stores backing the persistent index.

`BucketStore` is the small protocol the index needs; `DbmBucketStore`
implements it on top of the standard library `dbm` package, using whichever
backend (``gnu``, ``ndbm``, ``sqlite3`` or ``dumb``) the interpreter provides.
Backend failures surface as [`StorageError`][mimedex.errors.StorageError].
"""

from __future__ import annotations

import dbm
from pathlib import Path
from typing import TYPE_CHECKING, Final, Literal, Protocol

from mimedex.config.logging import get_logger
from mimedex.errors import StorageError

if TYPE_CHECKING:
    from mimedex.config.logging import MimedexLogger

logger: MimedexLogger = get_logger(__name__)

OpenFlag = Literal["c", "n"]

OPEN_FLAGS: Final[tuple[str, ...]] = ("c", "n")

_DBM_ERRORS: Final[tuple[type[BaseException], ...]] = (*dbm.error, OSError)


class BucketStore(Protocol):
    """Minimal durable map of string keys to byte buckets."""

    def get(self, key: str) -> bytes | None:
        """Return the bucket stored under ``key``, or None."""
        ...

    def put(self, key: str, value: bytes) -> None:
        """Store ``value`` under ``key``, replacing any previous bucket."""
        ...

    def keys(self) -> list[str]:
        """Return every key, sorted."""
        ...

    def close(self) -> None:
        """Release the underlying resources; further use is an error."""
        ...


class StoreFactory(Protocol):
    """Callable opening a `BucketStore` at a path.

    ``flag`` is ``"c"`` (open, creating if needed) or ``"n"`` (always start
    from an empty store, discarding any previous content).
    """

    def __call__(self, path: Path, flag: OpenFlag = "c") -> BucketStore: ...


class DbmBucketStore:
    """`BucketStore` backed by a `dbm` database file.

    Args:
        path (Path): Database path; the backend may add suffixes to it.
        flag (OpenFlag): ``"c"`` or ``"n"``, as for `dbm.open`.

    Raises:
        StorageError: If the database cannot be opened or created.
    """

    def __init__(self, path: Path, flag: OpenFlag = "c") -> None:
        if flag not in OPEN_FLAGS:
            raise StorageError(f"Unsupported store open flag {flag!r}")
        self.path: Path = Path(path)
        try:
            self._db = dbm.open(str(self.path), flag)
        except _DBM_ERRORS as exc:
            raise StorageError(f"Cannot open store {self.path}: {exc}") from exc
        self._closed = False
        logger.debug("Opened store %s (flag=%s)", self.path, flag)

    def _check_open(self) -> None:
        if self._closed:
            raise StorageError(f"Store {self.path} is closed")

    def get(self, key: str) -> bytes | None:
        self._check_open()
        try:
            return self._db[key]
        except KeyError:
            return None
        except _DBM_ERRORS as exc:
            raise StorageError(f"Cannot read {key!r} from {self.path}: {exc}") from exc

    def put(self, key: str, value: bytes) -> None:
        self._check_open()
        try:
            self._db[key] = value
        except _DBM_ERRORS as exc:
            raise StorageError(f"Cannot write {key!r} to {self.path}: {exc}") from exc

    def keys(self) -> list[str]:
        self._check_open()
        try:
            raw = self._db.keys()
        except _DBM_ERRORS as exc:
            raise StorageError(f"Cannot list keys of {self.path}: {exc}") from exc
        return sorted(k.decode("utf-8") if isinstance(k, bytes) else k for k in raw)

    def close(self) -> None:
        if self._closed:
            return
        self._closed = True
        self._db.close()
        logger.debug("Closed store %s", self.path)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"<DbmBucketStore {self.path} ({state})>"

