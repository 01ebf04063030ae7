from enum import StrEnum


class Defaults:
    """Default configuration values."""

    BASE_URL = 'http://short.url/'  # Display prefix for short links
    SHORTCODE_LENGTH = 6
    LINK_TTL_HOURS = 24
    MAX_URL_LENGTH = 2048
    RECLAMATION_INTERVAL_MINUTES = 30
    SHORTCODE_MAX_ATTEMPTS = 10  # Consecutive collisions before giving up


class ENV:
    """Environment variable names."""

    class App(StrEnum):
        APP_ENV = 'APP_ENV'
        LOG_LEVEL = 'LOG_LEVEL'
        LOG_FORMAT = 'LOG_FORMAT'

    class AppConfig(StrEnum):
        APP_ID = 'APPCONFIG_APP_ID'
        ENV_ID = 'APPCONFIG_ENV_ID'
        PROFILE_ID = 'APPCONFIG_PROFILE_ID'

    class Shortener(StrEnum):
        BASE_URL = 'SHORTENER_BASE_URL'
        SHORTCODE_LENGTH = 'SHORTENER_SHORTCODE_LENGTH'
        LINK_TTL_HOURS = 'SHORTENER_LINK_TTL_HOURS'
        MAX_URL_LENGTH = 'SHORTENER_MAX_URL_LENGTH'
        RECLAMATION_INTERVAL_MINUTES = 'SHORTENER_RECLAMATION_INTERVAL_MINUTES'
        SHORTCODE_MAX_ATTEMPTS = 'SHORTENER_SHORTCODE_MAX_ATTEMPTS'


# Section of the AppConfig document holding shortener settings
APPCONFIG_SECTION = 'shortener'

# Log event names
LINK_CREATED = 'LINK_CREATED'
LINK_RESOLVED = 'LINK_RESOLVED'
LINK_NOT_FOUND = 'LINK_NOT_FOUND'
LINK_EXPIRED = 'LINK_EXPIRED'
LINK_LIMIT_REACHED = 'LINK_LIMIT_REACHED'
LINK_DELETED = 'LINK_DELETED'
LINK_LIMIT_UPDATED = 'LINK_LIMIT_UPDATED'
SHORTCODE_COLLISION = 'SHORTCODE_COLLISION'
RECLAMATION_SWEEP = 'RECLAMATION_SWEEP'
RECLAMATION_ENTRY_FAILED = 'RECLAMATION_ENTRY_FAILED'
