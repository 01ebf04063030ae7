from linkshortener.utils.config import ShortenerSettings, app_env, load_config
from linkshortener.utils.helpers import get_short_url, require_environment
from linkshortener.utils.shortener import generate_shortcode
from linkshortener.utils.logging import initialize_logging


__all__ = [
    'generate_shortcode',
    'ShortenerSettings',
    'app_env',
    'load_config',
    'get_short_url',
    'require_environment',
    'initialize_logging',
]
