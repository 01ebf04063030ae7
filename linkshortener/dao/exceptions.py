"""Exceptions related to Data Access Objects (DAO) operations.

Classes:
    DAOError:
        Generic base class for DAO-related exceptions.

    ShortLinkNotFoundError:
        Raised when a short link is not found, or is not owned by the requester.

    ShortLinkExpiredError:
        Raised when resolving a short link whose TTL has elapsed.

    LinkLimitReachedError:
        Raised when resolving a short link whose access limit is exhausted.

    ShortLinkAlreadyExistsError:
        Raised when attempting to insert a ShortLinkModel whose shortcode is taken.

    ShortcodeSpaceExhaustedError:
        Raised when no free shortcode could be claimed within `shortcode_max_attempts` draws.

    UserDoesNotExistError:
        Raised when a user is not found in the data store.

Example:
    >>> from linkshortener.dao.exceptions import ShortLinkNotFoundError
    >>> raise ShortLinkNotFoundError("Short link with code 'abc123' not found.")
    Traceback (most recent call last):
        ...
    linkshortener.dao.exceptions.ShortLinkNotFoundError: Short link with code 'abc123' not found.
"""

from linkshortener.exceptions import LinkShortenerError


class DAOError(LinkShortenerError):
    """Generic base class for DAO-related exceptions."""

    error_code = 'dao:dao_error'


class ShortLinkNotFoundError(DAOError):
    """Exception raised when a short link is missing from the data store.

    NOTE: also raised when the link exists but belongs to another user, so
          that non-owners can't probe for existing shortcodes.
    """

    error_code = 'link:not_found'


class ShortLinkExpiredError(DAOError):
    """Exception raised when a short link's TTL has elapsed."""

    error_code = 'link:expired'


class LinkLimitReachedError(DAOError):
    """Exception raised when a short link's access limit is exhausted."""

    error_code = 'link:limit_reached'


class ShortLinkAlreadyExistsError(DAOError):
    """Exception raised when attempting to insert a ShortLinkModel that already exists in the data store."""

    error_code = 'link:already_exists'


class ShortcodeSpaceExhaustedError(DAOError):
    """Exception raised when every candidate shortcode collided with a stored link."""

    error_code = 'link:shortcode_space_exhausted'


class UserDoesNotExistError(DAOError):
    """Exception raised when a user is not found in the data store."""

    error_code = 'user:not_found'
