import functools
from typing import TypeVar, Any
from collections.abc import Callable


__all__ = []

F = TypeVar('F', bound=Callable[..., Any])


def synchronized[F](method: F) -> F:
    """Run a DAO method while holding the store's lock

    Args:
        method (Callable[..., Any]):
            DAO method reading or mutating the in-memory entries. The owning
            instance must expose a `lock` attribute (see MemoryStoreMixin).

    Returns:
        Callable[..., Any]:
            Wrapped method executed as a single critical section.

    Example:
        >>> @synchronized
        ... def count(self):
        ...     return len(self.entries)
    """

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        with self.lock:
            return method(self, *args, **kwargs)

    return wrapper
