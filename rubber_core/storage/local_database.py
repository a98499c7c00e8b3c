# =============================================================================
# rubber_core/storage/local_database.py
# Local SQLite key-value store for app state that never goes to the server
# =============================================================================
"""
LocalDatabase - SQLite-backed settings store.

Features:
- Automatic schema creation
- JSON-encoded values under string keys
- Transaction support
- Thread-local connections

Survives process restarts; lives as long as the database file does.
"""

from __future__ import annotations
import json
import sqlite3
import threading
from contextlib import contextmanager
from datetime import datetime
from pathlib import Path
from typing import Any, List, Optional
import logging

from rubber_core.errors import PersistenceError

logger = logging.getLogger(__name__)


class LocalDatabase:
    """
    Local SQLite database for client-side state.
    """

    # Default database location
    DEFAULT_DB_PATH = Path(__file__).parent.parent.parent / "local_data" / "rubber_stock.db"

    SCHEMA = {
        "app_settings": """
            CREATE TABLE IF NOT EXISTS app_settings (
                key TEXT PRIMARY KEY,
                value TEXT,
                updated_at TEXT DEFAULT CURRENT_TIMESTAMP
            )
        """,
    }

    def __init__(self, db_path: Optional[Path] = None):
        """
        Initialize local database.

        Args:
            db_path: Path to SQLite database file
        """
        self.db_path = Path(db_path) if db_path else self.DEFAULT_DB_PATH
        self._ensure_directory()
        self._local = threading.local()
        self._initialized = False


    def _ensure_directory(self) -> None:
        self.db_path.parent.mkdir(parents=True, exist_ok=True)

    def _get_connection(self) -> sqlite3.Connection:
        """Get thread-local database connection."""
        if getattr(self._local, "connection", None) is None:
            self._local.connection = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,
            )
            self._local.connection.row_factory = sqlite3.Row
        return self._local.connection

    @contextmanager
    def transaction(self):
        """Context manager for database transactions."""
        conn = self._get_connection()
        try:
            yield conn
            conn.commit()
        except Exception:
            conn.rollback()
            raise

    def initialize(self) -> None:
        """Initialize database schema."""
        if self._initialized:
            return

        try:
            with self.transaction() as conn:
                for table_name, schema in self.SCHEMA.items():
                    conn.execute(schema)
                    logger.debug(f"Created/verified table: {table_name}")
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not initialize local database: {e}") from e

        self._initialized = True
        logger.info(f"Local database initialized at: {self.db_path}")

    # =========================================================================
    # RAW ACCESS
    # =========================================================================

    def query(self, sql: str, params: Optional[List] = None) -> List[sqlite3.Row]:
        """Execute a raw SQL query."""
        conn = self._get_connection()
        cursor = conn.execute(sql, params or [])
        return cursor.fetchall()

    def execute(self, sql: str, params: Optional[List] = None) -> int:
        """Execute a raw SQL statement."""
        with self.transaction() as conn:
            cursor = conn.execute(sql, params or [])
            return cursor.rowcount

    # =========================================================================
    # SETTINGS
    # =========================================================================

    def get_setting(self, key: str, default: Any = None) -> Any:
        """
        Get a JSON-decoded setting.

        Raises:
            PersistenceError: if the store cannot be read or the value is not JSON
        """
        self.initialize()
        try:
            result = self.query("SELECT value FROM app_settings WHERE key = ?", [key])
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read setting: {e}", key=key) from e

        if not result:
            return default
        try:
            return json.loads(result[0]["value"])
        except (TypeError, json.JSONDecodeError) as e:
            raise PersistenceError(f"Stored value is not valid JSON: {e}", key=key) from e

    def set_setting(self, key: str, value: Any) -> None:
        """
        Store a setting as JSON.

        Raises:
            PersistenceError: if the value cannot be encoded or written
        """
        self.initialize()
        try:
            value_str = json.dumps(value)
        except (TypeError, ValueError) as e:
            raise PersistenceError(f"Value is not JSON serialisable: {e}", key=key) from e

        try:
            self.execute(
                """
                INSERT OR REPLACE INTO app_settings (key, value, updated_at)
                VALUES (?, ?, ?)
                """,
                [key, value_str, datetime.now().isoformat()]
            )
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not write setting: {e}", key=key) from e

    def delete_setting(self, key: str) -> bool:
        """Remove a setting. Returns True if it existed."""
        self.initialize()
        try:
            return self.execute("DELETE FROM app_settings WHERE key = ?", [key]) > 0
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not delete setting: {e}", key=key) from e


    def close(self) -> None:
        """Close database connection."""
        if getattr(self._local, "connection", None) is not None:
            self._local.connection.close()
            self._local.connection = None


# Singleton accessor
_local_database: Optional[LocalDatabase] = None
_local_database_lock = threading.Lock()


def get_local_database(db_path: Optional[Path] = None) -> LocalDatabase:
    """Get the global LocalDatabase instance."""
    global _local_database
    if _local_database is None:
        with _local_database_lock:
            if _local_database is None:
                _local_database = LocalDatabase(db_path)
                _local_database.initialize()
    return _local_database
