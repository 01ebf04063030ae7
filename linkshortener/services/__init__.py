from linkshortener.services.reporting import LinkStats
from linkshortener.services.link_shortener_service import LinkShortenerService


__all__ = [
    'LinkStats',
    'LinkShortenerService',
]
