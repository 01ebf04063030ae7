"""Unit tests for configuration utilities in config.py."""

import json
from datetime import timedelta
from io import BytesIO
from unittest.mock import MagicMock

import pytest
from botocore.exceptions import ClientError
from pytest import MonkeyPatch

from linkshortener.types import AppConfig
from linkshortener.utils import config
from linkshortener.utils.config import ShortenerSettings
from linkshortener.constants import ENV, Defaults
from linkshortener.exceptions import AppConfigError, BadConfigurationError, MissingEnvironmentVariableError


def appconfig_client(document: AppConfig | bytes) -> MagicMock:
    content = document if isinstance(document, bytes) else json.dumps(document).encode('utf-8')
    client = MagicMock()
    client.start_configuration_session.return_value = {'InitialConfigurationToken': 'token-1'}
    client.get_latest_configuration.return_value = {'Configuration': BytesIO(content)}
    return client


class TestLoadConfig:
    @pytest.fixture(autouse=True)
    def clean_env(self, monkeypatch: MonkeyPatch) -> None:
        for name in [*ENV.AppConfig, *ENV.Shortener, ENV.App.APP_ENV]:
            monkeypatch.delenv(name, raising=False)

    @pytest.fixture
    def appconfig_env(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.AppConfig.APP_ID, 'app123')
        monkeypatch.setenv(ENV.AppConfig.ENV_ID, 'env123')
        monkeypatch.setenv(ENV.AppConfig.PROFILE_ID, 'prof123')

    def test_defaults(self) -> None:
        settings = config.load_config()

        assert settings == ShortenerSettings()
        assert settings.base_url == Defaults.BASE_URL
        assert settings.shortcode_length == 6
        assert settings.link_ttl == timedelta(hours=24)
        assert settings.max_url_length == 2048
        assert settings.reclamation_interval == timedelta(minutes=30)

    def test_environment_overrides(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.Shortener.BASE_URL, 'https://sho.rt/')
        monkeypatch.setenv(ENV.Shortener.SHORTCODE_LENGTH, '8')
        monkeypatch.setenv(ENV.Shortener.LINK_TTL_HOURS, '1')

        settings = config.load_config()

        assert settings.base_url == 'https://sho.rt/'
        assert settings.shortcode_length == 8
        assert settings.link_ttl == timedelta(hours=1)
        assert settings.max_url_length == Defaults.MAX_URL_LENGTH

    def test_explicit_overrides_win(self, monkeypatch: MonkeyPatch) -> None:
        monkeypatch.setenv(ENV.Shortener.SHORTCODE_LENGTH, '8')
        assert config.load_config({'shortcode_length': 10}).shortcode_length == 10

    @pytest.mark.parametrize(
        'overrides, message',
        [
            ({'shortcode_length': 'seven'}, "'shortcode_length' must be an integer"),
            ({'link_ttl_hours': 0}, "'link_ttl_hours' must be a positive integer"),
            ({'max_url_length': -5}, "'max_url_length' must be a positive integer"),
            ({'reclamation_interval_minutes': True}, "'reclamation_interval_minutes' must be a positive integer"),
            ({'base_url': ''}, "'base_url' must be a non-empty string"),
            ({'colour': 'blue'}, 'Unknown configuration keys: colour'),
        ],
    )
    def test_invalid_values(self, overrides: dict, message: str) -> None:
        with pytest.raises(BadConfigurationError, match=message):
            config.load_config(overrides)

    def test_appconfig_disabled_without_environment(self, monkeypatch: MonkeyPatch) -> None:
        """Ensure AppConfig is never contacted unless all its env vars are set."""
        monkeypatch.setenv(ENV.AppConfig.APP_ID, 'app123')
        load_appconfig = MagicMock()
        monkeypatch.setattr(config, 'load_appconfig', load_appconfig)

        config.load_config()

        load_appconfig.assert_not_called()

    def test_appconfig_layer(self, monkeypatch: MonkeyPatch, appconfig_env: None) -> None:
        """Ensure AppConfig values override defaults and env vars override AppConfig."""
        document = {'build': 7, 'configs': {'shortener': {'shortcode_length': 9, 'link_ttl_hours': 48}}}
        client = appconfig_client(document)
        monkeypatch.setattr(config.boto3, 'client', MagicMock(return_value=client))
        monkeypatch.setenv(ENV.Shortener.LINK_TTL_HOURS, '2')

        settings = config.load_config()

        assert settings.shortcode_length == 9
        assert settings.link_ttl_hours == 2
        client.start_configuration_session.assert_called_once_with(
            ApplicationIdentifier='app123',
            EnvironmentIdentifier='env123',
            ConfigurationProfileIdentifier='prof123',
        )
        client.get_latest_configuration.assert_called_once_with(ConfigurationToken='token-1')

    def test_load_appconfig_with_explicit_client(self, appconfig_env: None) -> None:
        client = appconfig_client({'build': 1, 'configs': {'shortener': {'base_url': 'https://x.io/'}}})
        assert config.load_appconfig(client) == {'base_url': 'https://x.io/'}

    def test_load_appconfig_requires_environment(self) -> None:
        with pytest.raises(MissingEnvironmentVariableError, match='APPCONFIG_APP_ID'):
            config.load_appconfig(MagicMock())

    @pytest.mark.parametrize(
        'document',
        [
            b'not json',
            {'build': 1},
            {'build': 1, 'configs': {'other': {}}},
            {'build': 1, 'configs': {'shortener': ['not', 'a', 'dict']}},
        ],
    )
    def test_load_appconfig_malformed_document(self, appconfig_env: None, document) -> None:
        with pytest.raises(AppConfigError):
            config.load_appconfig(appconfig_client(document))

    def test_load_appconfig_client_error(self, appconfig_env: None) -> None:
        client = MagicMock()
        client.start_configuration_session.side_effect = ClientError(
            {'Error': {'Code': 'ResourceNotFoundException', 'Message': 'nope'}},
            'StartConfigurationSession',
        )

        with pytest.raises(AppConfigError, match="Can't fetch AppConfig document"):
            config.load_appconfig(client)


def test_app_env(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setenv(ENV.App.APP_ENV, 'DEV')
    assert config.app_env() == 'dev'

    monkeypatch.delenv(ENV.App.APP_ENV)
    assert config.app_env() == 'local'
