"""Utility functions for application configuration management.

Settings are assembled from three layers, each overriding the previous one:

    1. built-in defaults (see `linkshortener.constants.Defaults`);
    2. the `shortener` section of an **AWS AppConfig** document, pulled only
       when the `APPCONFIG_APP_ID`, `APPCONFIG_ENV_ID` and
       `APPCONFIG_PROFILE_ID` environment variables are all set;
    3. `SHORTENER_*` environment variables.

The AppConfig JSON follows this structure:

    {
        "build": 7,
        "configs": {
            "shortener": {
                "base_url": "https://sho.rt/",
                "shortcode_length": 7,
                "link_ttl_hours": 48,
                "max_url_length": 2048,
                "reclamation_interval_minutes": 15,
                "shortcode_max_attempts": 10
            }
        }
    }

Functions:
    app_env() -> str
        Return the current application environment (`APP_ENV`) value,
        defaulting to `'local'`.

    appconfig_enabled() -> bool
        True if every AppConfig environment variable is set.

    load_appconfig(client=None) -> dict
        Pull the `shortener` section of the latest AppConfig document.

    load_config(overrides=None) -> ShortenerSettings
        Build validated settings from defaults, AppConfig and environment.

Example:
    >>> from linkshortener.utils.config import load_config
    >>> settings = load_config()
    >>> settings.shortcode_length
    6
"""

import os
import json
import logging
import dataclasses
from dataclasses import dataclass
from datetime import timedelta

import boto3
from botocore.exceptions import BotoCoreError, ClientError

from linkshortener.types import AppConfig, AppConfigDataClient, SettingsOverrides
from linkshortener.constants import ENV, Defaults, APPCONFIG_SECTION
from linkshortener.exceptions import AppConfigError, BadConfigurationError
from linkshortener.utils.helpers import missing_environment, require_environment


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShortenerSettings:
    """Validated runtime settings of the shortener core.

    Attributes:
        base_url (str):
            Display prefix prepended to shortcodes.
        shortcode_length (int):
            Number of characters in generated shortcodes.
        link_ttl_hours (int):
            Lifetime of a link, fixed at creation.
        max_url_length (int):
            Maximum accepted length of an original URL.
        reclamation_interval_minutes (int):
            Period of the background reclamation sweep.
        shortcode_max_attempts (int):
            Consecutive shortcode collisions tolerated before creation fails.
    """

    base_url: str = Defaults.BASE_URL
    shortcode_length: int = Defaults.SHORTCODE_LENGTH
    link_ttl_hours: int = Defaults.LINK_TTL_HOURS
    max_url_length: int = Defaults.MAX_URL_LENGTH
    reclamation_interval_minutes: int = Defaults.RECLAMATION_INTERVAL_MINUTES
    shortcode_max_attempts: int = Defaults.SHORTCODE_MAX_ATTEMPTS

    @property
    def link_ttl(self) -> timedelta:
        return timedelta(hours=self.link_ttl_hours)

    @property
    def reclamation_interval(self) -> timedelta:
        return timedelta(minutes=self.reclamation_interval_minutes)


# Setting name -> environment variable overriding it
ENV_OVERRIDES = {
    'base_url': ENV.Shortener.BASE_URL,
    'shortcode_length': ENV.Shortener.SHORTCODE_LENGTH,
    'link_ttl_hours': ENV.Shortener.LINK_TTL_HOURS,
    'max_url_length': ENV.Shortener.MAX_URL_LENGTH,
    'reclamation_interval_minutes': ENV.Shortener.RECLAMATION_INTERVAL_MINUTES,
    'shortcode_max_attempts': ENV.Shortener.SHORTCODE_MAX_ATTEMPTS,
}


def app_env() -> str:
    """Return the current application environment by reading 'APP_ENV'

    Returns:
        str:
            Value of `APP_ENV` environment variable, `'local'` by default.

    Example:
        >>> os.environ['APP_ENV'] = 'dev'
        >>> app_env()
        'dev'
    """
    return os.environ.get(ENV.App.APP_ENV, 'local').lower()


def appconfig_enabled() -> bool:
    return not missing_environment(*ENV.AppConfig)


@require_environment(ENV.AppConfig.APP_ID, ENV.AppConfig.ENV_ID, ENV.AppConfig.PROFILE_ID)
def load_appconfig(client: AppConfigDataClient | None = None) -> AppConfig:
    """Load the shortener section of the latest AWS AppConfig document

    Environment variables required:
        APPCONFIG_APP_ID       – AppConfig Application ID
        APPCONFIG_ENV_ID       – AppConfig Environment ID
        APPCONFIG_PROFILE_ID   – AppConfig Configuration Profile ID

    Args:
        client (AppConfigDataClient | None):
            Pre-initialized `appconfigdata` client. If None, a new one is created.

    Returns:
        dict: The `shortener` section as a Python dictionary.

    Raises:
        MissingEnvironmentVariableError:
            If any AppConfig environment variable is missing.
        AppConfigError:
            If AppConfig can't be reached or returns a malformed document.
    """
    logger.debug('Trying to load AppConfig from AWS AppConfig.', extra={'section': APPCONFIG_SECTION})

    appconfig = client if client is not None else boto3.client('appconfigdata')

    try:
        # Start an AppConfig data session
        session_token = appconfig.start_configuration_session(
            ApplicationIdentifier=os.environ[ENV.AppConfig.APP_ID],
            EnvironmentIdentifier=os.environ[ENV.AppConfig.ENV_ID],
            ConfigurationProfileIdentifier=os.environ[ENV.AppConfig.PROFILE_ID],
        )['InitialConfigurationToken']

        # Fetch the configuration
        response = appconfig.get_latest_configuration(ConfigurationToken=session_token)
        content = response['Configuration'].read()
    except (BotoCoreError, ClientError) as e:
        raise AppConfigError(f"Can't fetch AppConfig document: {e}") from e

    try:
        document = json.loads(content.decode('utf-8'))
        data = document['configs'][APPCONFIG_SECTION]
    except (ValueError, KeyError, TypeError) as e:
        raise AppConfigError(f"Malformed AppConfig document (missing 'configs.{APPCONFIG_SECTION}').") from e

    if not isinstance(data, dict):
        raise AppConfigError(f"AppConfig section '{APPCONFIG_SECTION}' must be a JSON object.")

    logger.debug('Loaded AppConfig from AWS AppConfig.', extra={'section': APPCONFIG_SECTION, 'build': document.get('build')})
    return data


def _environment_overrides() -> SettingsOverrides:
    return {name: os.environ[var] for name, var in ENV_OVERRIDES.items() if os.environ.get(var)}


def _coerce(values: SettingsOverrides) -> ShortenerSettings:
    fields = {f.name: f for f in dataclasses.fields(ShortenerSettings)}

    unknown = sorted(set(values) - set(fields))
    if unknown:
        raise BadConfigurationError(f'Unknown configuration keys: {", ".join(unknown)}')

    coerced = {}
    for name, value in values.items():
        if name == 'base_url':
            if not isinstance(value, str) or not value:
                raise BadConfigurationError(f"'base_url' must be a non-empty string (given value: {value!r}).")
            coerced[name] = value
            continue

        try:
            number = int(value)
        except (TypeError, ValueError):
            raise BadConfigurationError(f"'{name}' must be an integer (given value: {value!r}).") from None
        if isinstance(value, bool) or number < 1:
            raise BadConfigurationError(f"'{name}' must be a positive integer (given value: {value!r}).")
        coerced[name] = number

    return ShortenerSettings(**coerced)


def load_config(overrides: SettingsOverrides | None = None) -> ShortenerSettings:
    """Build the shortener settings

    Layers, later wins: defaults, AppConfig (when enabled), `SHORTENER_*`
    environment variables, explicit `overrides`.

    Args:
        overrides (dict | None):
            Values taking precedence over every other layer (e.g. from a caller).

    Returns:
        ShortenerSettings: validated settings.

    Raises:
        BadConfigurationError:
            If a key is unknown or a value is not valid.
        AppConfigError:
            If AppConfig is enabled but can't be loaded.

    Example:
        >>> os.environ['SHORTENER_SHORTCODE_LENGTH'] = '8'
        >>> load_config().shortcode_length
        8
    """
    values: SettingsOverrides = {}

    if appconfig_enabled():
        values.update(load_appconfig())

    values.update(_environment_overrides())
    values.update(overrides or {})

    settings = _coerce(values)
    logger.debug('Loaded shortener settings.', extra={'settings': dataclasses.asdict(settings)})
    return settings
