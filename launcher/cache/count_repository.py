"""
Durable storage for usage counts.

SqliteCountRepository keeps a single persistent connection in WAL mode,
one row per action identity. All sqlite failures surface as
PersistenceError so the FrecencyStore can degrade to memory-only.
"""

import logging
import sqlite3
import threading
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict

from ..errors import PersistenceError

logger = logging.getLogger(__name__)


class CountRepository(ABC):
    """Mapping document from action identity to count"""

    @abstractmethod
    def load_all(self) -> Dict[str, int]:
        """Return every stored count."""

    @abstractmethod
    def save(self, identity: str, count: int) -> None:
        """Persist the count for one identity."""

    def close(self) -> None:
        pass


class InMemoryCountRepository(CountRepository):
    """Non-durable repository (tests, degraded sessions)"""

    def __init__(self, initial: Dict[str, int] = None):
        self._counts: Dict[str, int] = dict(initial or {})

    def load_all(self) -> Dict[str, int]:
        return dict(self._counts)

    def save(self, identity: str, count: int) -> None:
        self._counts[identity] = count


class SqliteCountRepository(CountRepository):
    """
    SQLite-backed usage counts.

    - Single persistent connection (no per-call connect/close)
    - WAL journal mode
    - Every save is committed before returning
    """

    def __init__(self, db_path: Path):
        self.db_path = Path(db_path)
        self._lock = threading.Lock()
        try:
            self.db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(
                str(self.db_path),
                check_same_thread=False,  # serialized by self._lock
                timeout=10
            )
            self._init_db()
        except (OSError, sqlite3.Error) as e:
            raise PersistenceError(f"Could not open usage count store at {self.db_path}: {e}") from e

        logger.info(f"🗄️ Usage count store initialized at {self.db_path}")

    def _init_db(self):
        cursor = self._conn.cursor()
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.execute("PRAGMA synchronous=NORMAL")
        cursor.execute("""
            CREATE TABLE IF NOT EXISTS usage_counts (
                identity TEXT PRIMARY KEY,
                count INTEGER NOT NULL
            )
        """)
        self._conn.commit()

    def load_all(self) -> Dict[str, int]:
        try:
            with self._lock:
                cursor = self._conn.cursor()
                cursor.execute("SELECT identity, count FROM usage_counts")
                rows = cursor.fetchall()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not read usage counts: {e}") from e
        return {identity: int(count) for identity, count in rows}

    def save(self, identity: str, count: int) -> None:
        try:
            with self._lock:
                self._conn.execute(
                    "INSERT OR REPLACE INTO usage_counts (identity, count) VALUES (?, ?)",
                    (identity, count)
                )
                self._conn.commit()
        except sqlite3.Error as e:
            raise PersistenceError(f"Could not write usage count for '{identity}': {e}") from e

    def close(self) -> None:
        with self._lock:
            self._conn.close()
