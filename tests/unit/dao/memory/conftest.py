from datetime import datetime, timedelta, UTC

import pytest

from linkshortener.models import ShortLinkModel
from linkshortener.dao.memory import ShortLinkMemoryDAO, UserMemoryDAO


@pytest.fixture
def dao() -> ShortLinkMemoryDAO:
    return ShortLinkMemoryDAO()


@pytest.fixture
def user_dao() -> UserMemoryDAO:
    return UserMemoryDAO()


@pytest.fixture
def make_link():
    """Build ShortLinkModel instances created 'now' with a 24h TTL."""

    def _make_link(shortcode: str = 'abc123', owner_id: str = 'owner-1', **kwargs) -> ShortLinkModel:
        now = datetime.now(UTC)
        fields = {
            'target': 'https://example.com/test',
            'created_at': now,
            'expires_at': now + timedelta(hours=24),
        }
        fields.update(kwargs)
        return ShortLinkModel(shortcode=shortcode, owner_id=owner_id, **fields)

    return _make_link
