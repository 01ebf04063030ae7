import pytest

from linkshortener.services import LinkShortenerService
from linkshortener.utils import ShortenerSettings


@pytest.fixture
def settings() -> ShortenerSettings:
    return ShortenerSettings(max_url_length=100, shortcode_max_attempts=3)


@pytest.fixture
def service(settings):
    """Service without a running reclamation thread."""
    _service = LinkShortenerService(settings, autostart=False)
    yield _service
    _service.shutdown()


@pytest.fixture
def alice(service):
    return service.create_user('alice')


@pytest.fixture
def bob(service):
    return service.create_user('bob')
