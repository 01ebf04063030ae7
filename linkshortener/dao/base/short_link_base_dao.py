"""Abstract base class for ShortLink data access objects (DAOs).

This class establishes a consistent contract for all ShortLink DAO implementations,
regardless of the underlying storage mechanism.

Responsibilities:
    - Provide an interface for inserting, resolving and removing ShortLinkModel objects.
    - Enforce ownership checks atomically with the mutation they guard.
    - Standardize error handling across data store implementations.

Example:
    Typical usage with a datastore-specific implementation:

        >>> from linkshortener.dao.memory import ShortLinkMemoryDAO
        >>> dao = ShortLinkMemoryDAO()
        >>> dao.insert(short_link)
        <ShortLinkMemoryDAO>
        >>> dao.hit("a1b2c3").hits
        1
        >>> dao.delete("a1b2c3", requester_id=short_link.owner_id)
"""

from abc import ABC, abstractmethod

from linkshortener.models import ShortLinkModel


class ShortLinkBaseDAO(ABC):
    """Interface for ShortLink data access objects (DAOs).

    Methods:
        insert(short_link: ShortLinkModel, **kwargs) -> ShortLinkBaseDAO:
            Insert a new ShortLinkModel if its shortcode is free.
            Raises ShortLinkAlreadyExistsError if the shortcode already exists.

        get(shortcode: str, **kwargs) -> ShortLinkModel:
            Retrieve a ShortLinkModel by shortcode without side effects.
            Raises ShortLinkNotFoundError if the entry does not exist.

        hit(shortcode: str, **kwargs) -> ShortLinkModel:
            Validate and count one access of a short link.
            Raises ShortLinkNotFoundError, ShortLinkExpiredError or LinkLimitReachedError.

        delete(shortcode: str, requester_id: str, **kwargs) -> None:
            Remove a short link owned by the requester.
            Raises ShortLinkNotFoundError if absent or not owned by the requester.

        update_limit(shortcode: str, requester_id: str, max_hits: int | None, **kwargs) -> ShortLinkModel:
            Replace the access limit of a short link owned by the requester.
            Raises ShortLinkNotFoundError if absent or not owned by the requester,
            then InvalidInputError if the owner passed a non-positive limit.

        remove_if_expired(shortcode: str, **kwargs) -> bool:
            Remove a short link if its TTL has elapsed.

        shortcodes() -> list[str]:
            Return the currently stored shortcodes.

        snapshot() -> list[ShortLinkModel]:
            Return a consistent copy of all stored links in insertion order.

    Subclassing:
        Datastore-specific implementations must extend this class and implement
        all abstract methods. Every method must be atomic with respect to a single
        shortcode.
    """

    @abstractmethod
    def insert(self, short_link: ShortLinkModel, **kwargs) -> 'ShortLinkBaseDAO':
        """Insert a new ShortLinkModel into the data store.

        Args:
            short_link (ShortLinkModel):
                The ShortLinkModel instance to be inserted.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkBaseDAO: self (for method chaining)

        Raises:
            ShortLinkAlreadyExistsError:
                If a ShortLinkModel with the same shortcode already exists.
        """
        pass

    @abstractmethod
    def get(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Retrieve a ShortLinkModel from the data store by its shortcode.

        Raises:
            ShortLinkNotFoundError:
                If no ShortLinkModel with the given shortcode exists.
        """
        pass

    @abstractmethod
    def hit(self, shortcode: str, **kwargs) -> ShortLinkModel:
        """Count one successful access of a short link.

        The existence, expiry and limit checks and the increment form a single
        atomic step. Nothing is mutated when a check fails.

        Args:
            shortcode (str):
                The shortcode of the link being resolved.

            **kwargs:
                Additional keyword arguments, used by data store.

        Returns:
            ShortLinkModel:
                The link after the increment.

        Raises:
            ShortLinkNotFoundError:
                If no short link with the given shortcode exists.

            ShortLinkExpiredError:
                If the link's TTL has elapsed.

            LinkLimitReachedError:
                If the link's access limit is exhausted.
        """
        pass

    @abstractmethod
    def delete(self, shortcode: str, requester_id: str, **kwargs) -> None:
        pass

    @abstractmethod
    def update_limit(self, shortcode: str, requester_id: str, max_hits: int | None = None, **kwargs) -> ShortLinkModel:
        pass

    @abstractmethod
    def remove_if_expired(self, shortcode: str, **kwargs) -> bool:
        """Remove a short link if its TTL has elapsed.

        Returns:
            bool: True if the link was removed, False if it is absent or still alive.
        """
        pass

    @abstractmethod
    def shortcodes(self) -> list[str]:
        pass

    @abstractmethod
    def snapshot(self) -> list[ShortLinkModel]:
        pass
