"""In-memory store mixin providing shared state and locking.

Responsibilities:
    - Own the entries mapping of a memory-backed DAO
    - Own the re-entrant lock guarding every read and mutation of that mapping

Classes:
    - MemoryStoreMixin: Base mixin to inject entry storage and a lock.

Example:
    Typical usage with a DAO implementation:

        >>> class UserMemoryDAO(MemoryStoreMixin, UserBaseDAO):
        ...     pass
        ...
        >>> dao = UserMemoryDAO()
        >>> len(dao)
        0
"""

import threading
from typing import Any


class MemoryStoreMixin:
    """Mixin entry storage and locking for memory-backed DAOs.

    Attributes:
        entries (dict[str, Any]):
            Stored records keyed by their identifier, in insertion order.

        lock (threading.RLock):
            Lock serializing access to `entries`. Re-entrant so synchronized
            methods may call each other.
    """

    def __init__(self, lock: 'threading.RLock | None' = None):
        """Initialize an empty in-memory store

        Args:
            lock (Optional[threading.RLock]):
                Pre-initialized lock to share between stores. If None, a new one is created.
        """
        self.entries: dict[str, Any] = {}
        self.lock = lock if lock is not None else threading.RLock()

    def __len__(self) -> int:
        with self.lock:
            return len(self.entries)

    def __repr__(self) -> str:
        return f'<{self.__class__.__name__}>'
