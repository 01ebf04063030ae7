"""Caller-facing facade of the shortener core

LinkShortenerService wires the identity registry, the link store and the
reclamation worker together and exposes the operations used by the CLI (or
any other front-end).

This service follows this procedure to shorten URLs:
    - Step 1: Validate the original URL and the optional access limit
    - Step 2: Check that the owner is a registered user
    - Step 3: Draw a random shortcode and claim it via insert-if-absent
    - Step 4: Retry with a new shortcode on collision, up to `shortcode_max_attempts` times
    - Step 5: Return the claimed shortcode

Errors:
    InvalidInputError:
        malformed/oversized URL, non-positive limit, unknown owner
    ShortLinkNotFoundError:
        unknown shortcode, or shortcode owned by someone else
    ShortLinkExpiredError:
        link TTL elapsed
    LinkLimitReachedError:
        link access limit exhausted
    ShortcodeSpaceExhaustedError:
        no free shortcode found within `shortcode_max_attempts` draws

Example:
    >>> with LinkShortenerService() as service:
    ...     alice = service.create_user('alice')
    ...     code = service.create_link('https://example.com', alice.user_id, max_hits=2)
    ...     service.resolve_link(code)
    'https://example.com'
"""

import logging
from datetime import datetime, UTC

from beartype import beartype

from linkshortener.models import ShortLinkModel, UserModel
from linkshortener.dao.base import ShortLinkBaseDAO, UserBaseDAO
from linkshortener.dao.memory import ShortLinkMemoryDAO, UserMemoryDAO
from linkshortener.dao.exceptions import (
    ShortLinkAlreadyExistsError,
    ShortLinkNotFoundError,
    ShortLinkExpiredError,
    LinkLimitReachedError,
    ShortcodeSpaceExhaustedError,
)
from linkshortener.exceptions import InvalidInputError, InvalidInputReason
from linkshortener.services import reporting
from linkshortener.services.reporting import LinkStats
from linkshortener.utils import ShortenerSettings, generate_shortcode, get_short_url
from linkshortener.utils.validators import validate_target_url, validate_max_hits
from linkshortener.workers import ReclamationWorker
from linkshortener.constants import (
    LINK_CREATED,
    LINK_RESOLVED,
    LINK_NOT_FOUND,
    LINK_EXPIRED,
    LINK_LIMIT_REACHED,
    LINK_DELETED,
    LINK_LIMIT_UPDATED,
    SHORTCODE_COLLISION,
)


logger = logging.getLogger(__name__)


class LinkShortenerService:
    """In-memory URL shortener

    Attributes:
        settings (ShortenerSettings):
            Shortcode length, TTL, URL length limit and sweep period.
        users (UserBaseDAO):
            Identity registry.
        links (ShortLinkBaseDAO):
            Link store.
        reclaimer (ReclamationWorker):
            Background sweep removing expired links from `links`.
    """

    def __init__(
        self,
        settings: ShortenerSettings | None = None,
        users: UserBaseDAO | None = None,
        links: ShortLinkBaseDAO | None = None,
        autostart: bool = True,
    ):
        """Initialize the service

        Args:
            settings (Optional[ShortenerSettings]):
                Runtime settings. Defaults to ShortenerSettings().
            users (Optional[UserBaseDAO]):
                Identity registry. If None, an empty UserMemoryDAO is created.
            links (Optional[ShortLinkBaseDAO]):
                Link store. If None, an empty ShortLinkMemoryDAO is created.
            autostart (bool):
                Start the reclamation worker right away. Defaults to True.
        """
        self.settings = settings if settings is not None else ShortenerSettings()
        self.users = users if users is not None else UserMemoryDAO()
        self.links = links if links is not None else ShortLinkMemoryDAO()
        self.reclaimer = ReclamationWorker(self.links, interval=self.settings.reclamation_interval)

        if autostart:
            self.start()

    def __enter__(self) -> 'LinkShortenerService':
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.shutdown()

    def start(self) -> None:
        self.reclaimer.start()

    def shutdown(self) -> None:
        """Stop the reclamation worker; an in-flight sweep is allowed to finish."""
        self.reclaimer.stop()

    # -------------------------------
    # Users
    # -------------------------------

    @beartype
    def create_user(self, name: str) -> UserModel:
        user = self.users.create(name)
        logger.info('User created.', extra={'user_id': user.user_id})
        return user

    @beartype
    def get_user(self, user_id: str) -> UserModel:
        return self.users.get(user_id)

    # -------------------------------
    # Link lifecycle
    # -------------------------------

    @beartype
    def create_link(self, target: str | None, owner_id: str, max_hits: int | None = None) -> str:
        """Shorten a URL on behalf of a registered user

        Args:
            target (str):
                Original URL, must start with http:// or https://.
            owner_id (str):
                Identifier of the creating user.
            max_hits (Optional[int]):
                Access limit, None for unlimited.

        Returns:
            str: the newly claimed shortcode.

        Raises:
            InvalidInputError:
                If the URL, the limit or the owner is invalid.
            ShortcodeSpaceExhaustedError:
                If every drawn shortcode collided with a stored link.
        """
        # 1- Validate the request
        validate_target_url(target, self.settings.max_url_length)
        validate_max_hits(max_hits)

        # 2- Check the owner is a registered user
        if not self.users.exists(owner_id):
            raise InvalidInputError(f"User with ID '{owner_id}' does not exist.", InvalidInputReason.UNKNOWN_OWNER)

        # 3- Claim a free shortcode
        for attempt in range(1, self.settings.shortcode_max_attempts + 1):
            now = datetime.now(UTC)
            short_link = ShortLinkModel(
                shortcode=generate_shortcode(self.settings.shortcode_length),
                target=target,
                owner_id=owner_id,
                created_at=now,
                expires_at=now + self.settings.link_ttl,
                max_hits=max_hits,
            )
            try:
                self.links.insert(short_link)
            except ShortLinkAlreadyExistsError:
                logger.debug(
                    'Shortcode collision, drawing a new one.',
                    extra={'shortcode': short_link.shortcode, 'attempt': attempt, 'event': SHORTCODE_COLLISION},
                )
            else:
                logger.info(
                    'Short link created.',
                    extra={'shortcode': short_link.shortcode, 'owner_id': owner_id, 'max_hits': max_hits, 'event': LINK_CREATED},
                )
                return short_link.shortcode

        raise ShortcodeSpaceExhaustedError(
            f'No free shortcode of length {self.settings.shortcode_length} '
            f'after {self.settings.shortcode_max_attempts} attempts.'
        )

    @beartype
    def resolve_link(self, shortcode: str) -> str:
        """Return the original URL and count the access

        Raises:
            ShortLinkNotFoundError, ShortLinkExpiredError, LinkLimitReachedError
        """
        try:
            short_link = self.links.hit(shortcode)
        except ShortLinkNotFoundError:
            logger.info('Short link not found.', extra={'shortcode': shortcode, 'event': LINK_NOT_FOUND})
            raise
        except ShortLinkExpiredError:
            logger.info('Short link expired.', extra={'shortcode': shortcode, 'event': LINK_EXPIRED})
            raise
        except LinkLimitReachedError:
            logger.info('Short link access limit reached.', extra={'shortcode': shortcode, 'event': LINK_LIMIT_REACHED})
            raise

        logger.debug('Short link resolved.', extra={'shortcode': shortcode, 'hits': short_link.hits, 'event': LINK_RESOLVED})
        return short_link.target

    @beartype
    def delete_link(self, shortcode: str, requester_id: str) -> None:
        self.links.delete(shortcode, requester_id)
        logger.info('Short link deleted.', extra={'shortcode': shortcode, 'event': LINK_DELETED})

    @beartype
    def update_limit(self, shortcode: str, requester_id: str, max_hits: int | None = None) -> ShortLinkModel:
        """Replace (or clear, with None) the access limit of an owned link

        Ownership is checked before the new limit, so a non-owner always gets
        ShortLinkNotFoundError whatever `max_hits` they pass.

        Raises:
            ShortLinkNotFoundError: unknown shortcode, or owned by someone else
            InvalidInputError: the owner passed a non-positive limit
        """
        short_link = self.links.update_limit(shortcode, requester_id, max_hits)
        logger.info('Short link access limit updated.', extra={'shortcode': shortcode, 'max_hits': max_hits, 'event': LINK_LIMIT_UPDATED})
        return short_link

    def short_url(self, shortcode: str) -> str:
        return get_short_url(shortcode, self.settings.base_url)

    # -------------------------------
    # Reporting
    # -------------------------------

    @beartype
    def list_owned(self, owner_id: str) -> list[ShortLinkModel]:
        return reporting.owned_by(self.links.snapshot(), owner_id)

    @beartype
    def search(self, query: str, owner_id: str) -> list[ShortLinkModel]:
        return reporting.search(self.links.snapshot(), query, owner_id)

    @beartype
    def top_by_hits(self, n: int) -> list[ShortLinkModel]:
        return reporting.top_by_hits(self.links.snapshot(), n)

    @beartype
    def most_recent(self, n: int) -> list[ShortLinkModel]:
        return reporting.most_recent(self.links.snapshot(), n)

    def list_all(self) -> list[ShortLinkModel]:
        return reporting.newest_first(self.links.snapshot())

    def stats(self) -> LinkStats:
        return reporting.compute_stats(self.links.snapshot(), total_users=self.users.count())
