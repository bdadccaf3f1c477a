import logging
import sqlite3
from contextlib import contextmanager
from typing import List, Optional, Protocol, Tuple

from exceptions import StorageError

logger = logging.getLogger(__name__)


class BlobStore(Protocol):
    """Synchronous key-value store holding JSON text blobs."""

    def get(self, key: str) -> Optional[str]:
        ...

    def set(self, key: str, value: str) -> None:
        ...


class MemoryBlobStore:
    """Dictionary backed blob store."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class Database:
    """Provides SQLite connection management and schema initialization."""

    _TABLE_DEFINITIONS = {
        "blobs": (
            """CREATE TABLE blobs (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
                );""",
            ["key", "value", "updated_at"],
        ),
    }

    def __init__(self, db_path: str = "fitness.db") -> None:
        self._db_path = db_path
        self._ensure_schema()

    @contextmanager
    def _connection(self):
        try:
            connection = sqlite3.connect(self._db_path)
        except sqlite3.Error as e:
            raise StorageError(f"cannot open database {self._db_path}: {e}")
        try:
            yield connection
            connection.commit()
        except sqlite3.Error as e:
            connection.rollback()
            raise StorageError(f"database error: {e}")
        finally:
            connection.close()

    def _ensure_schema(self) -> None:
        with self._connection() as conn:
            for table, (sql, columns) in self._TABLE_DEFINITIONS.items():
                self._ensure_table(conn, table, sql, columns)

    def _ensure_table(
        self, conn: sqlite3.Connection, table: str, sql: str, columns: List[str]
    ) -> None:
        cursor = conn.cursor()
        cursor.execute(
            "SELECT name FROM sqlite_master WHERE type='table' AND name=?;",
            (table,),
        )
        if cursor.fetchone() is None:
            logger.debug("creating table %s in %s", table, self._db_path)
            cursor.execute(sql)
            return
        cursor.execute(f"PRAGMA table_info({table});")
        existing = [row[1] for row in cursor.fetchall()]
        if existing != columns:
            raise StorageError(
                f"table {table} in {self._db_path} has unexpected columns {existing}"
            )

    @property
    def path(self) -> str:
        return self._db_path

    def vacuum(self) -> None:
        with self._connection() as conn:
            conn.execute("VACUUM;")


class BaseRepository(Database):
    """Base repository providing helper methods."""

    def execute(self, query: str, params: Tuple = ()) -> int:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.lastrowid

    def fetch_all(self, query: str, params: Tuple = ()) -> List[Tuple]:
        with self._connection() as conn:
            cursor = conn.cursor()
            cursor.execute(query, params)
            return cursor.fetchall()


class SqliteBlobStore(BaseRepository):
    """Blob store persisting each key as one row of the ``blobs`` table."""

    def get(self, key: str) -> Optional[str]:
        rows = self.fetch_all("SELECT value FROM blobs WHERE key = ?;", (key,))
        return rows[0][0] if rows else None

    def set(self, key: str, value: str) -> None:
        self.execute(
            "INSERT INTO blobs (key, value, updated_at) VALUES (?, ?, CURRENT_TIMESTAMP) "
            "ON CONFLICT(key) DO UPDATE SET value=excluded.value, updated_at=excluded.updated_at;",
            (key, value),
        )

