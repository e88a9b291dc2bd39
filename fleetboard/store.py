"""Embedded key-value store with named buckets, backed by a single SQLite file.

The store exposes scoped read-write (``update``) and read-only (``view``)
transactions. Within a transaction, buckets are get-or-created and hold
``str`` keys mapped to ``bytes`` values. Iteration is ordered by key bytes.
"""
from __future__ import annotations

import logging
import os
import sqlite3
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)


SCHEMA_VERSION = 1

SCHEMA_SQL = """
PRAGMA synchronous=NORMAL;
PRAGMA foreign_keys=ON;

CREATE TABLE IF NOT EXISTS buckets (
    name TEXT PRIMARY KEY
);

CREATE TABLE IF NOT EXISTS entries (
    bucket TEXT NOT NULL,
    key TEXT NOT NULL,
    value BLOB NOT NULL,
    PRIMARY KEY(bucket, key),
    FOREIGN KEY(bucket) REFERENCES buckets(name) ON DELETE CASCADE
);
"""


class StoreError(Exception):
    """Base class for store failures."""


class StoreOpenError(StoreError):
    """The storage file could not be opened or locked."""


class BucketNotFoundError(StoreError):
    def __init__(self, name: str):
        super().__init__(f"bucket not found: {name}")
        self.name = name


class ReadOnlyTransactionError(StoreError):
    """A write was attempted inside a read-only transaction."""


class Bucket:
    """A named keyed collection inside a transaction."""

    def __init__(self, tx: Transaction, name: str):
        self._tx = tx
        self.name = name

    def put(self, key: str, value: bytes) -> None:
        self._tx._require_writable()
        self._tx._conn.execute(
            "INSERT INTO entries(bucket, key, value) VALUES (?, ?, ?) "
            "ON CONFLICT(bucket, key) DO UPDATE SET value=excluded.value",
            (self.name, key, bytes(value)),
        )

    def get(self, key: str) -> bytes | None:
        row = self._tx._conn.execute(
            "SELECT value FROM entries WHERE bucket=? AND key=?",
            (self.name, key),
        ).fetchone()
        return bytes(row[0]) if row is not None else None

    def items(self) -> Iterator[tuple[str, bytes]]:
        """Iterate all pairs in key order (binary collation, like raw bytes)."""
        rows = self._tx._conn.execute(
            "SELECT key, value FROM entries WHERE bucket=? ORDER BY key",
            (self.name,),
        )
        for key, value in rows:
            yield key, bytes(value)

    def count(self) -> int:
        return self._tx._conn.execute(
            "SELECT COUNT(*) FROM entries WHERE bucket=?", (self.name,)
        ).fetchone()[0]


class Transaction:
    def __init__(self, conn: sqlite3.Connection, *, writable: bool):
        self._conn = conn
        self.writable = writable

    def _require_writable(self) -> None:
        if not self.writable:
            raise ReadOnlyTransactionError("write attempted in a read-only transaction")

    def bucket(self, name: str) -> Bucket | None:
        row = self._conn.execute("SELECT 1 FROM buckets WHERE name=?", (name,)).fetchone()
        return Bucket(self, name) if row is not None else None

    def create_bucket_if_not_exists(self, name: str) -> Bucket:
        self._require_writable()
        if not name:
            raise ValueError("bucket name must not be empty")
        self._conn.execute("INSERT OR IGNORE INTO buckets(name) VALUES (?)", (name,))
        return Bucket(self, name)

    def bucket_names(self) -> list[str]:
        return [r[0] for r in self._conn.execute("SELECT name FROM buckets ORDER BY name")]


class Store:
    """Handle on an open storage file.

    The file is locked exclusively while the handle is open; a second
    ``Store.open`` on the same path fails with ``StoreOpenError``.
    """

    def __init__(self, conn: sqlite3.Connection, path: Path):
        self._conn = conn
        self.path = path

    @classmethod
    def open(cls, path: Path | str, *, mode: int = 0o600, timeout: float = 1.0) -> Store:
        path = Path(path)
        try:
            if not path.exists():
                # Create with restricted permissions before SQLite touches it.
                fd = os.open(path, os.O_CREAT | os.O_RDWR, mode)
                os.close(fd)
                os.chmod(path, mode)
            conn = sqlite3.connect(str(path), timeout=timeout, isolation_level=None)
        except (OSError, sqlite3.Error) as exc:
            raise StoreOpenError(f"cannot open {path}: {exc}") from exc

        try:
            conn.execute("PRAGMA locking_mode=EXCLUSIVE")
            conn.executescript(SCHEMA_SQL)
            # First write takes the exclusive lock; in EXCLUSIVE mode it is held until close.
            conn.execute(f"PRAGMA user_version={SCHEMA_VERSION}")
        except sqlite3.Error as exc:
            conn.close()
            raise StoreOpenError(f"cannot open {path}: {exc}") from exc

        logger.info("store opened: %s", path)
        return cls(conn, path)

    def close(self) -> None:
        if self._conn is None:
            return
        self._conn.close()
        self._conn = None
        logger.info("store closed: %s", self.path)

    @property
    def closed(self) -> bool:
        return self._conn is None

    def __enter__(self) -> Store:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    @contextmanager
    def update(self) -> Iterator[Transaction]:
        """Read-write transaction; commits on success, rolls back on error."""
        with self._transaction(writable=True) as tx:
            yield tx

    @contextmanager
    def view(self) -> Iterator[Transaction]:
        """Read-only transaction."""
        with self._transaction(writable=False) as tx:
            yield tx

    @contextmanager
    def _transaction(self, *, writable: bool) -> Iterator[Transaction]:
        if self._conn is None:
            raise StoreError("store is closed")
        conn = self._conn
        try:
            conn.execute("BEGIN IMMEDIATE" if writable else "BEGIN")
        except sqlite3.Error as exc:
            raise StoreError(f"cannot begin transaction: {exc}") from exc

        tx = Transaction(conn, writable=writable)
        try:
            yield tx
        except sqlite3.Error as exc:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise StoreError(str(exc)) from exc
        except BaseException:
            if conn.in_transaction:
                conn.execute("ROLLBACK")
            raise
        else:
            try:
                conn.execute("COMMIT" if writable else "ROLLBACK")
            except sqlite3.Error as exc:
                raise StoreError(f"cannot commit transaction: {exc}") from exc
        finally:
            tx.writable = False
