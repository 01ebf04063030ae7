from enum import StrEnum


class LinkShortenerError(Exception):
    """Base exception for all application-specific errors."""

    error_code = 'app:linkshortener_error'


class InvalidInputReason(StrEnum):
    EMPTY_URL = 'empty_url'
    BAD_SCHEME = 'bad_scheme'
    URL_TOO_LONG = 'url_too_long'
    BAD_LIMIT = 'bad_limit'
    UNKNOWN_OWNER = 'unknown_owner'


class InvalidInputError(LinkShortenerError):
    """Raised when a caller passes a malformed URL, limit or owner."""

    error_code = 'input:invalid_input_error'

    def __init__(self, message: str, reason: InvalidInputReason):
        super().__init__(message)
        self.reason = reason


class ConfigurationError(LinkShortenerError):
    """Base exception for all configuration errors."""

    error_code = 'config:configuration_error'


class MissingEnvironmentVariableError(ConfigurationError):
    """Raised when a required environment variable is missing."""

    error_code = 'config:missing_environment_variable_error'


class BadConfigurationError(ConfigurationError):
    """Raised when the application is configured with invalid parameters."""

    error_code = 'config:bad_configuration_error'


class AppConfigError(LinkShortenerError):
    """Raised when AppConfig responds with erroneous data."""

    error_code = 'infra:appconfig_error'
