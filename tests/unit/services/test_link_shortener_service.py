"""Unit tests for the LinkShortenerService facade

Test coverage includes:

1. Link creation
   - Round trip: a created link resolves to its original URL.
   - Invalid URLs, limits and owners raise InvalidInputError with a reason.
   - Shortcode collisions are retried; exhaustion fails fast.
   - Concurrent creations never share a shortcode.

2. Resolution
   - Limit enforcement, expiry and unknown shortcodes.

3. Ownership isolation
   - Non-owners can neither delete nor re-limit a link.

4. Lifecycle
   - The reclamation worker starts with the service and stops on shutdown.

5. Concrete scenarios
"""

from concurrent.futures import ThreadPoolExecutor
from datetime import timedelta
from unittest.mock import MagicMock

import pytest
from freezegun import freeze_time

from linkshortener.services import LinkShortenerService, link_shortener_service
from linkshortener.exceptions import InvalidInputError, InvalidInputReason
from linkshortener.dao.exceptions import (
    ShortLinkNotFoundError,
    ShortLinkExpiredError,
    LinkLimitReachedError,
    ShortcodeSpaceExhaustedError,
)


# -------------------------------
# 1. Link creation
# -------------------------------


def test_create_and_resolve_round_trip(service, alice):
    shortcode = service.create_link('https://example.com/page', alice.user_id)

    assert len(shortcode) == service.settings.shortcode_length
    assert service.resolve_link(shortcode) == 'https://example.com/page'


@freeze_time('2026-03-01 10:00:00')
def test_create_link_sets_lifecycle_fields(service, alice):
    shortcode = service.create_link('https://example.com', alice.user_id, max_hits=3)
    short_link = service.links.get(shortcode)

    assert short_link.owner_id == alice.user_id
    assert short_link.hits == 0
    assert short_link.max_hits == 3
    assert short_link.expires_at - short_link.created_at == timedelta(hours=24)


@pytest.mark.parametrize(
    'url, reason',
    [
        ('', InvalidInputReason.EMPTY_URL),
        (None, InvalidInputReason.EMPTY_URL),
        ('ftp://x.com', InvalidInputReason.BAD_SCHEME),
        ('https://example.com/' + 'x' * 100, InvalidInputReason.URL_TOO_LONG),
    ],
)
def test_create_link_with_invalid_url(service, alice, url, reason):
    with pytest.raises(InvalidInputError) as exc_info:
        service.create_link(url, alice.user_id)

    assert exc_info.value.reason is reason
    assert len(service.links) == 0


@pytest.mark.parametrize('max_hits', [0, -1, True])
def test_create_link_with_invalid_limit(service, alice, max_hits):
    with pytest.raises(InvalidInputError) as exc_info:
        service.create_link('https://example.com', alice.user_id, max_hits=max_hits)
    assert exc_info.value.reason is InvalidInputReason.BAD_LIMIT
    assert len(service.links) == 0


def test_create_link_for_unknown_owner(service):
    with pytest.raises(InvalidInputError, match="User with ID 'ghost' does not exist") as exc_info:
        service.create_link('https://example.com', 'ghost')
    assert exc_info.value.reason is InvalidInputReason.UNKNOWN_OWNER


def test_create_link_retries_on_collision(service, alice, monkeypatch):
    """Ensure a colliding shortcode is discarded and a new one is drawn."""
    draws = iter(['aaaaaa', 'aaaaaa', 'bbbbbb'])
    monkeypatch.setattr(link_shortener_service, 'generate_shortcode', lambda length: next(draws))

    assert service.create_link('https://one.com', alice.user_id) == 'aaaaaa'
    assert service.create_link('https://two.com', alice.user_id) == 'bbbbbb'
    assert service.resolve_link('aaaaaa') == 'https://one.com'


def test_create_link_fails_fast_when_shortcodes_are_exhausted(service, alice, monkeypatch):
    """Ensure creation gives up after shortcode_max_attempts collisions."""
    generate = MagicMock(return_value='aaaaaa')
    monkeypatch.setattr(link_shortener_service, 'generate_shortcode', generate)
    service.create_link('https://one.com', alice.user_id)

    with pytest.raises(ShortcodeSpaceExhaustedError, match='after 3 attempts'):
        service.create_link('https://two.com', alice.user_id)

    assert generate.call_count == 1 + service.settings.shortcode_max_attempts
    assert len(service.links) == 1


def test_concurrent_creations_get_unique_shortcodes(service, alice, bob):
    def create(i):
        owner = alice if i % 2 else bob
        return service.create_link(f'https://example.com/{i}', owner.user_id)

    with ThreadPoolExecutor(max_workers=8) as pool:
        codes = list(pool.map(create, range(300)))

    assert len(set(codes)) == 300
    assert len(service.links) == 300


# -------------------------------
# 2. Resolution
# -------------------------------


@pytest.mark.parametrize('limit', [1, 3, 10])
def test_resolve_link_enforces_limit(service, alice, limit):
    shortcode = service.create_link('https://example.com', alice.user_id, max_hits=limit)

    for _ in range(limit):
        assert service.resolve_link(shortcode) == 'https://example.com'

    with pytest.raises(LinkLimitReachedError):
        service.resolve_link(shortcode)
    assert service.links.get(shortcode).hits == limit


def test_resolve_unknown_link(service):
    with pytest.raises(ShortLinkNotFoundError):
        service.resolve_link('nope00')


def test_resolve_expired_link(service, alice):
    with freeze_time('2026-01-01 00:00:00') as frozen:
        shortcode = service.create_link('https://example.com', alice.user_id)
        frozen.tick(delta=timedelta(hours=24))

        with pytest.raises(ShortLinkExpiredError):
            service.resolve_link(shortcode)

    assert service.links.get(shortcode).hits == 0


def test_failed_resolution_is_logged(service, caplog):
    with caplog.at_level('INFO', logger='linkshortener.services.link_shortener_service'):
        with pytest.raises(ShortLinkNotFoundError):
            service.resolve_link('nope00')

    assert caplog.records[-1].event == 'LINK_NOT_FOUND'
    assert caplog.records[-1].shortcode == 'nope00'


# -------------------------------
# 3. Ownership isolation
# -------------------------------


def test_delete_link_by_owner(service, alice):
    shortcode = service.create_link('https://example.com', alice.user_id)

    service.delete_link(shortcode, alice.user_id)

    with pytest.raises(ShortLinkNotFoundError):
        service.resolve_link(shortcode)


def test_non_owner_cannot_delete_or_update(service, alice, bob):
    shortcode = service.create_link('https://example.com', alice.user_id, max_hits=1)

    with pytest.raises(ShortLinkNotFoundError):
        service.delete_link(shortcode, bob.user_id)
    with pytest.raises(ShortLinkNotFoundError):
        service.update_limit(shortcode, bob.user_id, 50)

    short_link = service.links.get(shortcode)
    assert short_link.max_hits == 1
    assert short_link.owner_id == alice.user_id


@pytest.mark.parametrize('max_hits', [0, -1, 50, None])
def test_non_owner_update_limit_is_not_found_for_any_limit(service, alice, bob, max_hits):
    """Ensure a non-owner can't tell a bad limit apart from a foreign link."""
    shortcode = service.create_link('https://example.com', alice.user_id, max_hits=1)

    with pytest.raises(ShortLinkNotFoundError):
        service.update_limit(shortcode, bob.user_id, max_hits)

    assert service.links.get(shortcode).max_hits == 1


def test_update_limit_reopens_exhausted_link(service, alice):
    shortcode = service.create_link('https://example.com', alice.user_id, max_hits=1)
    service.resolve_link(shortcode)

    updated = service.update_limit(shortcode, alice.user_id, 2)

    assert updated.hits == 1
    assert service.resolve_link(shortcode) == 'https://example.com'
    with pytest.raises(LinkLimitReachedError):
        service.resolve_link(shortcode)


def test_update_limit_rejects_non_positive_limit(service, alice):
    shortcode = service.create_link('https://example.com', alice.user_id, max_hits=3)

    with pytest.raises(InvalidInputError) as exc_info:
        service.update_limit(shortcode, alice.user_id, 0)

    assert exc_info.value.reason is InvalidInputReason.BAD_LIMIT
    assert service.links.get(shortcode).max_hits == 3


# -------------------------------
# 4. Lifecycle
# -------------------------------


def test_service_starts_and_stops_reclaimer(settings):
    with LinkShortenerService(settings) as service:
        assert service.reclaimer.running is True

    assert service.reclaimer.running is False


def test_short_url_uses_base_url(service):
    assert service.short_url('abc123') == 'http://short.url/abc123'


# -------------------------------
# 5. Concrete scenarios
# -------------------------------


def test_scenario_limit_of_two(service):
    user = service.create_user('A')
    code = service.create_link('https://example.com', user.user_id, max_hits=2)

    assert service.resolve_link(code) == 'https://example.com'
    assert service.links.get(code).hits == 1
    assert service.resolve_link(code) == 'https://example.com'
    assert service.links.get(code).hits == 2
    with pytest.raises(LinkLimitReachedError):
        service.resolve_link(code)


def test_scenario_bad_scheme(service, alice):
    with pytest.raises(InvalidInputError) as exc_info:
        service.create_link('ftp://x.com', alice.user_id)
    assert exc_info.value.reason is InvalidInputReason.BAD_SCHEME


def test_scenario_two_users_same_url(service, alice, bob):
    code_a = service.create_link('https://common.com', alice.user_id)
    code_b = service.create_link('https://common.com', bob.user_id)

    assert code_a != code_b
    with pytest.raises(ShortLinkNotFoundError):
        service.delete_link(code_a, bob.user_id)
    assert service.resolve_link(code_a) == 'https://common.com'
