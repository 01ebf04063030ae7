"""Input validation for link creation and limit updates."""

import re

from linkshortener.exceptions import InvalidInputError, InvalidInputReason


URL_SCHEME_PATTERN = re.compile(r'^https?://')


def validate_target_url(url: str | None, max_length: int) -> str:
    """Validate an original URL before it is shortened

    Args:
        url (str | None): the URL supplied by the caller
        max_length (int): maximum accepted URL length

    Returns:
        str: the URL, unchanged

    Raises:
        InvalidInputError: with reason EMPTY_URL, BAD_SCHEME or URL_TOO_LONG
    """
    if url is None or not url.strip():
        raise InvalidInputError('URL must not be empty.', InvalidInputReason.EMPTY_URL)
    if not URL_SCHEME_PATTERN.match(url):
        raise InvalidInputError('URL must start with http:// or https://.', InvalidInputReason.BAD_SCHEME)
    if len(url) > max_length:
        raise InvalidInputError(f'URL is too long (maximum {max_length} characters).', InvalidInputReason.URL_TOO_LONG)
    return url


def validate_max_hits(max_hits: int | None) -> int | None:
    if isinstance(max_hits, bool):
        raise InvalidInputError(f'Access limit must be an integer, not a boolean (given value: {max_hits}).', InvalidInputReason.BAD_LIMIT)
    if max_hits is not None and max_hits < 1:
        raise InvalidInputError(f'Access limit must be a positive integer (given value: {max_hits}).', InvalidInputReason.BAD_LIMIT)
    return max_hits
