from linkshortener.services import LinkShortenerService, LinkStats
from linkshortener.utils import ShortenerSettings, load_config


__all__ = [
    'LinkShortenerService',
    'LinkStats',
    'ShortenerSettings',
    'load_config',
]
