"""Helper utilities shared by the service and its callers.

Functions:
    get_short_url(shortcode, base_url) -> str
        Get string representation of short URL for a given shortcode
    missing_environment(*names: str) -> list[str]
        Names of unset or empty environment variables
    require_environment(*names: str) -> Callable
        Decorator: Ensure required environment variables are present

Example:
    >>> from linkshortener.utils.helpers import get_short_url
    >>> get_short_url('abc123', 'http://short.url/')
    'http://short.url/abc123'
"""

import os
import functools
from collections.abc import Callable

from linkshortener.exceptions import MissingEnvironmentVariableError


def get_short_url(shortcode: str, base_url: str) -> str:
    """Get string representation of shortened URL

    Args:
        shortcode (str): shortcode
        base_url (str): display prefix, with or without a trailing slash

    Returns:
        str: short url string representation
    """
    return f'{base_url.rstrip("/")}/{shortcode}'


def missing_environment(*names: str) -> list[str]:
    """Return the names among `names` that are unset or empty, in order."""
    return [name for name in names if not os.environ.get(name)]


def require_environment(*names: str) -> Callable:
    """Decorator failing the call early if environment variables are missing.

    Args:
        *names (str):
            Environment variables the decorated function reads.

    Raises:
        MissingEnvironmentVariableError:
            Listing every unset or empty variable, not just the first one.

    Example:
        >>> @require_environment('APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID')
        ... def pull_settings():
        ...     ...
        >>> pull_settings()
        MissingEnvironmentVariableError: Missing required environment variables: 'APPCONFIG_APP_ID', 'APPCONFIG_ENV_ID'
    """

    def decorator(func: Callable) -> Callable:
        @functools.wraps(func)
        def checked(*args, **kwargs):
            if missing := missing_environment(*names):
                quoted = ', '.join(f"'{name}'" for name in missing)
                raise MissingEnvironmentVariableError(f'Missing required environment variables: {quoted}')
            return func(*args, **kwargs)

        return checked

    return decorator
