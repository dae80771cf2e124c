from types import SimpleNamespace
from unittest.mock import AsyncMock

import pytest

from orgauth.app.auth_config import ConfigurationError, build_auth_config


def app_config(**overrides):
    values = dict(
        APP_URL="https://app.example.com/",
        FRONTEND_URL="https://web.example.com",
        AUTH_SECRET="secret",
        GOOGLE_CLIENT_ID="gid",
        GOOGLE_CLIENT_SECRET="gsecret",
        GITHUB_CLIENT_ID=None,
        GITHUB_CLIENT_SECRET=None,
    )
    values.update(overrides)
    return SimpleNamespace(**values)


def test_build_auth_config():
    config = build_auth_config(app_config(), AsyncMock())

    assert config.base_url == "https://app.example.com"
    assert config.trusted_origins == ("https://app.example.com", "https://web.example.com")
    assert set(config.social_providers) == {"google"}
    assert config.secure_cookies is True
    assert config.organization.membership_limit == 100
    assert config.session.expires_in.days == 7
    assert config.url("/invitation/1") == "https://app.example.com/invitation/1"


def test_missing_base_url_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_auth_config(app_config(APP_URL=""), AsyncMock())


def test_missing_secret_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        build_auth_config(app_config(AUTH_SECRET=None), AsyncMock())


def test_config_is_immutable():
    config = build_auth_config(app_config(), AsyncMock())

    with pytest.raises(AttributeError):
        config.base_url = "https://other.example.com"
    with pytest.raises(TypeError):
        config.social_providers["github"] = None
