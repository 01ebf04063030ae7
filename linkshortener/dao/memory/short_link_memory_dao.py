"""Data Access Object (DAO) implementation for managing short links in memory

This module provides a dict-based implementation of ShortLinkBaseDAO. All state
lives in the process and is lost on exit.

Responsibilities:
    - Insert short links with insert-if-absent semantics;
    - Resolve short links, enforcing TTL and access limits atomically with the hit counter;
    - Remove or update short links on behalf of their owner only;
    - Remove expired short links on behalf of the reclamation worker.

Classes:
    ShortLinkMemoryDAO:
        DAO for storing and retrieving ShortLinkModel in process memory.

Example:
    >>> from linkshortener.dao.memory import ShortLinkMemoryDAO

    >>> dao = ShortLinkMemoryDAO()
    >>> dao.insert(short_link)
    <ShortLinkMemoryDAO>

    >>> dao.hit("abc123").hits
    1
    >>> dao.get("abc123").target
    'https://example.com/page'
"""

import dataclasses
from datetime import datetime, UTC

from beartype import beartype

from linkshortener.models import ShortLinkModel
from linkshortener.dao.base import ShortLinkBaseDAO
from linkshortener.dao.memory.mixins import MemoryStoreMixin
from linkshortener.dao.memory.helpers import synchronized
from linkshortener.utils.validators import validate_max_hits
from linkshortener.dao.exceptions import (
    ShortLinkAlreadyExistsError,
    ShortLinkNotFoundError,
    ShortLinkExpiredError,
    LinkLimitReachedError,
)


class ShortLinkMemoryDAO(MemoryStoreMixin, ShortLinkBaseDAO):
    """In-memory Data Access Object (DAO) for managing short link mappings

    Every public method runs under the store lock, which makes each operation
    linearizable with respect to the shortcode it touches. Stored models are
    frozen; mutations swap in an updated copy, so returned models are safe
    snapshots.

    Attributes (see MemoryStoreMixin):
        entries (dict[str, ShortLinkModel]):
            Stored links keyed by shortcode.
        lock (threading.RLock):
            Lock guarding `entries`.

    Methods:
        insert(short_link: ShortLinkModel, **kwargs) -> ShortLinkMemoryDAO
        get(shortcode: str, **kwargs) -> ShortLinkModel
        hit(shortcode: str, **kwargs) -> ShortLinkModel
        delete(shortcode: str, requester_id: str, **kwargs) -> None
        update_limit(shortcode: str, requester_id: str, max_hits: int | None, **kwargs) -> ShortLinkModel
        remove_if_expired(shortcode: str, **kwargs) -> bool
        shortcodes() -> list[str]
        snapshot() -> list[ShortLinkModel]
    """

    @synchronized
    @beartype
    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'ShortLinkMemoryDAO':
        """Insert a short link unless its shortcode is already taken

        The existence check and the write happen under the same lock, so two
        concurrent inserts with the same shortcode can't both succeed.

        Raises:
            ShortLinkAlreadyExistsError:
                If a short link with the same shortcode already exists.
        """
        if short_link.shortcode in self.entries:
            raise ShortLinkAlreadyExistsError(f"Short link with code '{short_link.shortcode}' already exists.")

        self.entries[short_link.shortcode] = short_link
        return self

    @synchronized
    @beartype
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        try:
            return self.entries[shortcode]
        except KeyError:
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.") from None

    @synchronized
    @beartype
    def hit(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Validate a short link and count one access

        Checks run in this order: existence, expiry (now >= expires_at), access
        limit (hits >= max_hits). The increment is applied only if all pass.

        Args:
            shortcode (str):
                The shortcode of the link being resolved.

            **kwargs:
                Optional keyword arguments (for future use).

        Returns:
            ShortLinkModel:
                The link with its incremented hit counter.

        Raises:
            ShortLinkNotFoundError:
                If no short link with the given shortcode exists.
            ShortLinkExpiredError:
                If the link's TTL has elapsed.
            LinkLimitReachedError:
                If the link's access limit is exhausted.

        Example:
            >>> dao.hit('abc123')
            ShortLinkModel(shortcode='abc123', ..., hits=1, max_hits=2)
        """
        short_link = self.get(shortcode)

        if short_link.is_expired(datetime.now(UTC)):
            raise ShortLinkExpiredError(f"Short link with code '{shortcode}' has expired.")
        if short_link.is_limit_reached():
            raise LinkLimitReachedError(f"Short link with code '{shortcode}' reached its access limit of {short_link.max_hits}.")

        short_link = dataclasses.replace(short_link, hits=short_link.hits + 1)
        self.entries[shortcode] = short_link
        return short_link

    @synchronized
    @beartype
    def delete(self, shortcode: str, requester_id: str, **kwargs) -> None:
        """Remove a short link owned by the requester

        Raises:
            ShortLinkNotFoundError:
                If the short link doesn't exist or belongs to another user.
        """
        self._owned(shortcode, requester_id)
        del self.entries[shortcode]

    @synchronized
    @beartype
    def update_limit(self, shortcode: str, requester_id: str, max_hits: int | None = None, **kwargs) -> ShortLinkModel:
        """Replace the access limit of a short link owned by the requester

        Ownership is checked first; the new limit is only validated for the owner.

        NOTE: the hit counter is left untouched, so lowering the limit below the
              current hit count makes the link inactive straight away.

        Raises:
            ShortLinkNotFoundError:
                If the short link doesn't exist or belongs to another user.
            InvalidInputError:
                If `max_hits` is given and isn't a positive integer.
        """
        short_link = self._owned(shortcode, requester_id)
        validate_max_hits(max_hits)

        short_link = dataclasses.replace(short_link, max_hits=max_hits)
        self.entries[shortcode] = short_link
        return short_link

    @synchronized
    @beartype
    def remove_if_expired(self, shortcode: str, **kwargs) -> bool:
        short_link = self.entries.get(shortcode)
        if short_link is None or not short_link.is_expired(datetime.now(UTC)):
            return False

        del self.entries[shortcode]
        return True

    @synchronized
    def shortcodes(self) -> list[str]:
        return list(self.entries)

    @synchronized
    def snapshot(self) -> list[ShortLinkModel]:
        return list(self.entries.values())

    def _owned(self, shortcode: str, requester_id: str) -> ShortLinkModel:
        # Absent and foreign links raise the same error
        short_link = self.entries.get(shortcode)
        if short_link is None or short_link.owner_id != requester_id:
            raise ShortLinkNotFoundError(f"Short link with code '{shortcode}' not found.")
        return short_link
