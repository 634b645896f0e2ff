"""In-memory action registry standing in for the host framework's."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from azureaifoundry.errors import ConfigurationError

if TYPE_CHECKING:
    from azureaifoundry.models import (
        EmbedRequest,
        EmbedResponse,
        GenerateRequest,
        GenerateResponse,
        ModelInfo,
    )
    from azureaifoundry.plugin import AzureAIFoundry
    from azureaifoundry.translate.streaming import ChunkSink


def action_key(provider: str, name: str) -> str:
    return f"{provider}/{name}"


@dataclass(frozen=True)
class ModelAction:
    """A registered model: awaiting it runs one generation."""

    plugin: AzureAIFoundry = field(repr=False)
    name: str
    info: ModelInfo

    @property
    def key(self) -> str:
        return action_key(self.plugin.name, self.name)

    async def __call__(
        self, request: GenerateRequest, on_chunk: ChunkSink | None = None
    ) -> GenerateResponse:
        return await self.plugin.generate(self.name, request, on_chunk)


@dataclass(frozen=True)
class EmbedderAction:
    """A registered embedder: awaiting it embeds a batch of documents."""

    plugin: AzureAIFoundry = field(repr=False)
    name: str

    @property
    def key(self) -> str:
        return action_key(self.plugin.name, self.name)

    async def __call__(self, request: EmbedRequest) -> EmbedResponse:
        return await self.plugin.embed(self.name, request)


@dataclass
class ActionRegistry:
    """Registry of model and embedder actions keyed by ``<provider>/<name>``."""

    _models: dict[str, ModelAction] = field(default_factory=dict)
    _embedders: dict[str, EmbedderAction] = field(default_factory=dict)

    def register_model(self, action: ModelAction) -> ModelAction:
        """Register a model action; a duplicate key is a configuration error."""
        if action.key in self._models:
            raise ConfigurationError(
                f"model '{action.key}' is already defined",
                hint="Define each deployment once per registry.",
            )
        self._models[action.key] = action
        return action

    def register_embedder(self, action: EmbedderAction) -> EmbedderAction:
        """Register an embedder action; a duplicate key is a configuration error."""
        if action.key in self._embedders:
            raise ConfigurationError(
                f"embedder '{action.key}' is already defined",
                hint="Define each embedding deployment once per registry.",
            )
        self._embedders[action.key] = action
        return action

    def lookup_model(self, provider: str, name: str) -> ModelAction | None:
        return self._models.get(action_key(provider, name))

    def lookup_embedder(self, provider: str, name: str) -> EmbedderAction | None:
        return self._embedders.get(action_key(provider, name))
