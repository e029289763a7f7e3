from .count_repository import CountRepository, InMemoryCountRepository, SqliteCountRepository
from .frecency_store import FrecencyStore, action_identity

__all__ = [
    "CountRepository",
    "InMemoryCountRepository",
    "SqliteCountRepository",
    "FrecencyStore",
    "action_identity",
]
