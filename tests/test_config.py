"""Configuration boundary tests."""

from __future__ import annotations

import pytest

from azureaifoundry.config import PluginConfig
from azureaifoundry.constants import DEFAULT_API_VERSION
from azureaifoundry.errors import ConfigurationError

pytestmark = pytest.mark.unit


def test_config_auto_resolves_settings_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://env.openai.azure.com")
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "env-key")
    monkeypatch.setenv("AZURE_OPENAI_API_VERSION", "2024-10-21")

    cfg = PluginConfig()

    assert cfg.endpoint == "https://env.openai.azure.com"
    assert cfg.api_key == "env-key"
    assert cfg.api_version == "2024-10-21"
    assert cfg.auth_mode == "api_key"


def test_explicit_arguments_take_precedence(
    monkeypatch: pytest.MonkeyPatch, endpoint: str
) -> None:
    monkeypatch.setenv("AZURE_OPENAI_ENDPOINT", "https://env.openai.azure.com")
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "env-key")

    cfg = PluginConfig(endpoint=endpoint, api_key="explicit-key")

    assert cfg.endpoint == endpoint
    assert cfg.api_key == "explicit-key"


def test_api_version_defaults_when_unset(endpoint: str) -> None:
    cfg = PluginConfig(endpoint=endpoint, api_key="k")
    assert cfg.api_version == DEFAULT_API_VERSION == "2025-03-01-preview"


def test_missing_endpoint_raises_clear_error() -> None:
    with pytest.raises(ConfigurationError, match="endpoint is required") as exc:
        PluginConfig(api_key="k")
    assert exc.value.hint is not None
    assert "AZURE_OPENAI_ENDPOINT" in exc.value.hint


def test_blank_endpoint_is_rejected() -> None:
    with pytest.raises(ConfigurationError):
        PluginConfig(endpoint="   ", api_key="k")


def test_non_string_api_key_is_rejected(endpoint: str) -> None:
    with pytest.raises(ConfigurationError, match="api_key must be a string"):
        PluginConfig(endpoint=endpoint, api_key=123)  # type: ignore[arg-type]


def test_credential_suppresses_env_api_key(
    monkeypatch: pytest.MonkeyPatch, endpoint: str
) -> None:
    """An explicit credential wins over a key that only comes from the environment."""
    monkeypatch.setenv("AZURE_OPENAI_API_KEY", "env-key")
    credential = object()

    cfg = PluginConfig(endpoint=endpoint, credential=credential)

    assert cfg.api_key is None
    assert cfg.auth_mode == "credential"


def test_no_key_and_no_credential_falls_back_to_default_credential(endpoint: str) -> None:
    cfg = PluginConfig(endpoint=endpoint)
    assert cfg.auth_mode == "default_credential"


def test_repr_redacts_api_key(endpoint: str) -> None:
    cfg = PluginConfig(endpoint=endpoint, api_key="super-secret")

    text = repr(cfg)

    assert "super-secret" not in text
    assert "[REDACTED]" in text
    assert str(cfg) == text


def test_config_is_frozen(endpoint: str) -> None:
    cfg = PluginConfig(endpoint=endpoint, api_key="k")
    with pytest.raises(AttributeError):
        cfg.api_key = "other"  # type: ignore[misc]
