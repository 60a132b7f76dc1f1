"""SQLite storage adapter."""

from __future__ import annotations

import logging
import sqlite3
import threading
from pathlib import Path
from typing import Optional

from adapters.base import KVStore, Result
from common.utils import ensure_dir, parse_bool

logger = logging.getLogger(__name__)

SCHEMA_SQL = """
CREATE TABLE IF NOT EXISTS kv (
    key TEXT PRIMARY KEY,
    value BLOB NOT NULL
) WITHOUT ROWID;
"""

SYNC_MODES = ("off", "normal", "full")


class SQLiteAdapter(KVStore):
    """Key-value table in a SQLite database file.

    Options:
        path: database file (default ``kvbench.db``)
        timeout: seconds to wait on a locked database (default 30)
        wal: enable write-ahead logging (default true)
        sync: ``off``, ``normal`` or ``full`` synchronous mode
    """

    name = "sqlite"

    def __init__(self):
        self.db_path: Optional[Path] = None
        self.timeout = 30.0
        self.wal = True
        self.sync = "normal"

        self._local = threading.local()
        self._connections: dict[int, sqlite3.Connection] = {}
        self._lock = threading.Lock()

    def init(self, options: dict[str, str]) -> Result:
        if self._connections:
            self.close()
        try:
            self.db_path = Path(options.get("path", "kvbench.db"))
            self.timeout = float(options.get("timeout", 30))
            self.wal = parse_bool(options.get("wal"), default=True)
            self.sync = options.get("sync", "normal").lower()
        except ValueError as e:
            return Result.error(f"Invalid sqlite option: {e}")

        if self.sync not in SYNC_MODES:
            return Result.error(f"Invalid sqlite sync mode: {self.sync}")

        try:
            if self.db_path.parent != Path("."):
                ensure_dir(self.db_path.parent)
            conn = self._connection()
            conn.executescript(SCHEMA_SQL)
        except (sqlite3.Error, OSError) as e:
            logger.error(f"Failed to open SQLite database {self.db_path}: {e}")
            return Result.error(str(e))

        logger.info(f"Opened SQLite database at {self.db_path} (wal={self.wal}, sync={self.sync})")
        return Result.success()

    def _connection(self) -> sqlite3.Connection:
        """Get the calling thread's connection, opening it on first use."""
        conn = getattr(self._local, "conn", None)
        if conn is None:
            if self.db_path is None:
                raise RuntimeError("SQLite adapter not initialized")
            conn = sqlite3.connect(
                self.db_path,
                timeout=self.timeout,
                isolation_level=None,
                check_same_thread=False,
            )
            if self.wal:
                conn.execute("PRAGMA journal_mode=WAL")
            conn.execute(f"PRAGMA synchronous={self.sync.upper()}")
            self._local.conn = conn
            with self._lock:
                self._prune_connections()
                self._connections[threading.get_ident()] = conn
        return conn

    def _prune_connections(self) -> None:
        """Close connections left behind by threads that have exited.

        Each workload phase runs on new threads. Must be called with the
        lock held.
        """
        alive = {t.ident for t in threading.enumerate()}
        stale = [ident for ident in self._connections if ident not in alive]
        # A new thread may reuse the ident of a dead one
        current = threading.get_ident()
        if current in self._connections:
            stale.append(current)
        for ident in stale:
            self._connections.pop(ident).close()
        if stale:
            logger.debug(f"Closed {len(stale)} connection(s) of finished threads")

    def put(self, key: str, value: str) -> Result:
        try:
            self._connection().execute(
                "INSERT OR REPLACE INTO kv (key, value) VALUES (?, ?)",
                (key, value.encode()),
            )
        except sqlite3.Error as e:
            return Result.error(str(e))
        return Result.success()

    def get(self, key: str) -> Result:
        try:
            row = self._connection().execute(
                "SELECT value FROM kv WHERE key = ?", (key,)
            ).fetchone()
        except sqlite3.Error as e:
            return Result.error(str(e))
        if row is None:
            return Result.not_found(key)
        return Result.success()

    def remove(self, key: str) -> Result:
        try:
            cursor = self._connection().execute("DELETE FROM kv WHERE key = ?", (key,))
        except sqlite3.Error as e:
            return Result.error(str(e))
        if cursor.rowcount == 0:
            return Result.not_found(key)
        return Result.success()

    def scan(self, start: str, end: str) -> Result:
        try:
            rows = self._connection().execute(
                "SELECT key, value FROM kv WHERE key >= ? AND key < ? ORDER BY key",
                (start, end),
            ).fetchall()
        except sqlite3.Error as e:
            return Result.error(str(e))
        logger.debug(f"scan {start}..{end} returned {len(rows)} rows")
        return Result.success()

    def close(self) -> None:
        with self._lock:
            connections, self._connections = list(self._connections.values()), {}
        for conn in connections:
            conn.close()
        self._local = threading.local()
        logger.info(f"Closed {len(connections)} SQLite connection(s)")
