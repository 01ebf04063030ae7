"""Shortcode generation utility

This module provides a helper function for drawing random, fixed-length,
Base62 shortcodes. Uniqueness is not guaranteed here: callers claim a
candidate through the link store's insert-if-absent and draw again on
collision.

Functions:
    generate_shortcode(length=6):
        Generate a random shortcode suitable for use as a URL slug.

Example:
    >>> from linkshortener.utils import generate_shortcode
    >>> generate_shortcode(6)
    'Xr4QsJ'
"""

import secrets
import string


ALPHABET = string.ascii_lowercase + string.ascii_uppercase + string.digits
BASE = len(ALPHABET)  # 26 lowercase + 26 uppercase + 10 digits


def generate_shortcode(length: int = 6) -> str:
    """Generate a random Base62 shortcode.

    Every character is drawn independently and uniformly from ALPHABET using
    the `secrets` CSPRNG, so codes are not predictable from previous ones.

    Args:
        length (int, optional):
            Number of characters in the shortcode.
            Defaults to 6.

    Returns:
        str: A random alphanumeric shortcode of exactly `length` characters.

    Raises:
        TypeError: If length is not an integer.
        ValueError: If length is smaller than 1.

    NOTE:
        - The keyspace holds BASE**length codes (62**6 ~ 5.7e10). Keep `length`
          large enough that collisions with live links stay negligible; the
          caller caps its retries and fails fast otherwise.
    """
    if not isinstance(length, int) or isinstance(length, bool):
        raise TypeError(f'Length must be of type integer (given type: {type(length)}).')
    if length < 1:
        raise ValueError(f'Length must be a positive integer (given value: {length}).')

    return ''.join(secrets.choice(ALPHABET) for _ in range(length))
