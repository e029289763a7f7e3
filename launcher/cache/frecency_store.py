"""
Frecency Store - cumulative usage counts per action identity.

Counts are loaded once at construction and written through to the
repository on every increment, so a crash loses at most the increment in
flight. There is no eviction.

If the repository fails (on load or on a later write) the store keeps
counting in memory for the rest of the session.
"""

import logging
import threading
from typing import Dict, Optional

from ..errors import PersistenceError
from .count_repository import CountRepository

logger = logging.getLogger(__name__)


def action_identity(category: str, execution_argument: str) -> str:
    """Stable key for an executable action; same inputs give the same key across restarts."""
    return f"{category}:{execution_argument}"


class FrecencyStore:

    def __init__(self, repository: Optional[CountRepository]):
        self._repository = repository
        self._lock = threading.Lock()
        self._counts: Dict[str, int] = {}

        if repository is None:
            logger.warning("⚠️ No usage count repository, counting in memory only")
            return

        try:
            self._counts = repository.load_all()
            logger.info(f"✅ Loaded {len(self._counts)} usage counts")
        except PersistenceError as e:
            logger.error(f"❌ {e} - counting in memory only for this session")
            self._repository = None

    @property
    def is_persistent(self) -> bool:
        return self._repository is not None

    def get_count(self, identity: Optional[str]) -> int:
        if identity is None:
            return 0
        return self._counts.get(identity, 0)

    def increment(self, identity: str) -> int:
        """Atomically add one to identity's count and persist it. Returns the new count."""
        with self._lock:
            count = self._counts.get(identity, 0) + 1
            self._counts[identity] = count

            if self._repository is not None:
                try:
                    self._repository.save(identity, count)
                except PersistenceError as e:
                    logger.error(f"❌ {e} - counting in memory only for this session")
                    self._repository = None

        logger.debug(f"📈 {identity} -> {count}")
        return count

    def snapshot(self) -> Dict[str, int]:
        with self._lock:
            return dict(self._counts)
