"""Configuration: frozen PluginConfig with environment fallbacks."""

from __future__ import annotations

from dataclasses import dataclass
import os
from typing import Any

from dotenv import load_dotenv

from azureaifoundry.constants import DEFAULT_API_VERSION
from azureaifoundry.errors import ConfigurationError

load_dotenv()

ENDPOINT_ENV_VAR = "AZURE_OPENAI_ENDPOINT"
API_KEY_ENV_VAR = "AZURE_OPENAI_API_KEY"
API_VERSION_ENV_VAR = "AZURE_OPENAI_API_VERSION"


@dataclass(frozen=True)
class PluginConfig:
    """Immutable connection settings for the Azure AI Foundry plugin.

    Explicit arguments win over environment variables. Authentication uses
    ``api_key`` when present, then ``credential`` (any ``azure-identity``
    token credential), then ``DefaultAzureCredential``.

    Example:
        config = PluginConfig(endpoint="https://my-resource.openai.azure.com")
        # api_key is resolved from AZURE_OPENAI_API_KEY when set
    """

    #: Auto-resolved from ``AZURE_OPENAI_ENDPOINT`` when *None*.
    endpoint: str | None = None
    #: Auto-resolved from ``AZURE_OPENAI_API_KEY`` when *None*.
    api_key: str | None = None
    #: Auto-resolved from ``AZURE_OPENAI_API_VERSION``, then the package default.
    api_version: str | None = None
    credential: Any = None

    def __post_init__(self) -> None:
        """Resolve environment fallbacks and validate required settings."""
        if self.endpoint is None:
            object.__setattr__(self, "endpoint", os.environ.get(ENDPOINT_ENV_VAR))
        if self.api_key is None and self.credential is None:
            object.__setattr__(self, "api_key", os.environ.get(API_KEY_ENV_VAR) or None)
        if not self.api_version:
            object.__setattr__(
                self,
                "api_version",
                os.environ.get(API_VERSION_ENV_VAR) or DEFAULT_API_VERSION,
            )

        if not isinstance(self.endpoint, str) or not self.endpoint.strip():
            raise ConfigurationError(
                "endpoint is required",
                hint=f"Set {ENDPOINT_ENV_VAR} or pass endpoint='https://<resource>.openai.azure.com'.",
            )
        if self.api_key is not None and not isinstance(self.api_key, str):
            raise ConfigurationError(
                f"api_key must be a string, got {type(self.api_key).__name__}",
                hint=f"Pass api_key='...' or set {API_KEY_ENV_VAR}.",
            )

    @property
    def auth_mode(self) -> str:
        """Which authentication path the client will use."""
        if self.api_key:
            return "api_key"
        if self.credential is not None:
            return "credential"
        return "default_credential"

    def __str__(self) -> str:
        """Return a redacted, developer-friendly representation."""
        return (
            f"PluginConfig(endpoint={self.endpoint!r}, api_version={self.api_version!r}, "
            f"api_key={'[REDACTED]' if self.api_key else None}, auth_mode={self.auth_mode!r})"
        )

    __repr__ = __str__
