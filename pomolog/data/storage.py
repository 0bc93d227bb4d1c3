"""SQLite key-value store holding the persisted timer state and session log."""

from __future__ import annotations

import json
import logging
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator


SCHEMA_VERSION = 1

log = logging.getLogger(__name__)


class Storage:
    """Best-effort durable store: reads fall back to defaults, failed writes are logged and dropped."""

    def __init__(self, db_path: str | Path) -> None:
        self.db_path = Path(db_path)
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _connect(self) -> sqlite3.Connection:
        conn = sqlite3.connect(self.db_path)
        conn.row_factory = sqlite3.Row
        try:
            conn.execute("PRAGMA journal_mode = WAL;")
        except sqlite3.DatabaseError:
            pass
        return conn

    @contextmanager
    def _transaction(self) -> Iterator[sqlite3.Connection]:
        conn = self._connect()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise
        finally:
            conn.close()

    def init_db(self) -> None:
        with self._transaction() as conn:
            conn.execute("CREATE TABLE IF NOT EXISTS schema_version (version INTEGER NOT NULL)")
            row = conn.execute("SELECT version FROM schema_version LIMIT 1").fetchone()
            if not row:
                conn.execute("INSERT INTO schema_version(version) VALUES (?)", (SCHEMA_VERSION,))
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv(
                    key TEXT PRIMARY KEY,
                    value TEXT
                )
                """
            )

    def get(self, key: str, default: Any = None) -> Any:
        try:
            conn = self._connect()
            try:
                row = conn.execute("SELECT value FROM kv WHERE key = ?", (key,)).fetchone()
            finally:
                conn.close()
        except sqlite3.Error:
            log.warning(f"Could not read '{key}' from '{self.db_path}', using default", exc_info=True)
            return default
        if not row or row["value"] is None:
            return default
        try:
            return json.loads(row["value"])
        except (TypeError, json.JSONDecodeError):
            log.warning(f"Stored value for '{key}' is not valid JSON, using default")
            return default

    def set(self, key: str, value: Any) -> bool:
        try:
            payload = json.dumps(value)
            with self._transaction() as conn:
                conn.execute(
                    "INSERT INTO kv(key, value) VALUES(?, ?) ON CONFLICT(key) DO UPDATE SET value=excluded.value",
                    (key, payload),
                )
        except (sqlite3.Error, OSError, TypeError, ValueError):
            log.warning(f"Failed to persist '{key}' to '{self.db_path}'", exc_info=True)
            return False
        return True

    def clear(self, key: str) -> bool:
        try:
            with self._transaction() as conn:
                conn.execute("DELETE FROM kv WHERE key = ?", (key,))
        except (sqlite3.Error, OSError):
            log.warning(f"Failed to clear '{key}' in '{self.db_path}'", exc_info=True)
            return False
        return True
