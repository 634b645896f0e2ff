"""Azure AI Foundry plugin: client lifecycle, registration and dispatch."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import TYPE_CHECKING, Any

from azureaifoundry._errors import wrap_vendor_error
from azureaifoundry.capabilities import infer_model_capabilities
from azureaifoundry.config import PluginConfig
from azureaifoundry.constants import (
    COGNITIVE_SERVICES_SCOPE,
    COMMON_CHAT_MODELS,
    COMMON_EMBEDDING_MODELS,
    PROVIDER,
)
from azureaifoundry.embeddings import embed as embed_documents
from azureaifoundry.errors import APIError, ConfigurationError
from azureaifoundry.modalities import route_model
from azureaifoundry.modalities.images import generate_image
from azureaifoundry.modalities.speech import synthesize_speech
from azureaifoundry.modalities.transcription import transcribe_audio
from azureaifoundry.models import ModelDefinition, ModelInfo
from azureaifoundry.registry import EmbedderAction, ModelAction
from azureaifoundry.translate.request import build_chat_request
from azureaifoundry.translate.response import convert_response
from azureaifoundry.translate.streaming import StreamAggregator

if TYPE_CHECKING:
    from azureaifoundry.models import (
        EmbedRequest,
        EmbedResponse,
        GenerateRequest,
        GenerateResponse,
    )
    from azureaifoundry.registry import ActionRegistry
    from azureaifoundry.translate.streaming import ChunkSink

logger = logging.getLogger(__name__)


def _token_provider(credential: Any) -> Any:
    """Wrap an azure-identity credential as a bearer-token provider."""
    if inspect.iscoroutinefunction(getattr(credential, "get_token", None)):
        from azure.identity.aio import get_bearer_token_provider
    else:
        from azure.identity import get_bearer_token_provider
    return get_bearer_token_provider(credential, COGNITIVE_SERVICES_SCOPE)


def _default_credential() -> Any:
    try:
        from azure.identity.aio import DefaultAzureCredential
    except ImportError as e:
        raise ConfigurationError(
            "azure-identity package not installed",
            hint=(
                "Pass api_key=..., or install the 'identity' extra: "
                "pip install 'azureaifoundry[identity]'"
            ),
        ) from e
    return DefaultAzureCredential()


class AzureAIFoundry:
    """Provider plugin for Azure AI Foundry (Azure OpenAI) deployments.

    The vendor client is built in the constructor; a missing endpoint or a
    credential that cannot be set up fails here rather than on first use.
    Pass ``client=`` to inject a pre-built ``AsyncAzureOpenAI``; an injected
    client is not closed by :meth:`aclose`.

    Example:
        plugin = AzureAIFoundry(endpoint="https://my-resource.openai.azure.com")
        registry = ActionRegistry()
        gpt4o = plugin.define_model(registry, ModelDefinition("gpt-4o", supports_media=True))
        response = await gpt4o(GenerateRequest(messages=(...,)))
    """

    def __init__(
        self,
        endpoint: str | None = None,
        api_key: str | None = None,
        api_version: str | None = None,
        credential: Any = None,
        *,
        client: Any = None,
    ) -> None:
        """Resolve configuration and build the vendor client."""
        self._owned_credential: Any = None
        if client is not None:
            self.config: PluginConfig | None = None
            self._client = client
            self._owns_client = False
            return

        self.config = PluginConfig(
            endpoint=endpoint,
            api_key=api_key,
            api_version=api_version,
            credential=credential,
        )
        self._client = self._build_client(self.config)
        self._owns_client = True
        logger.debug("Initialized %s", self.config)

    def _build_client(self, config: PluginConfig) -> Any:
        try:
            from openai import AsyncAzureOpenAI
        except ImportError as e:
            raise ConfigurationError(
                "openai package not installed",
                hint="pip install openai",
            ) from e

        if config.auth_mode == "api_key":
            return AsyncAzureOpenAI(
                azure_endpoint=config.endpoint,
                api_key=config.api_key,
                api_version=config.api_version,
            )

        credential = config.credential
        if credential is None:
            credential = self._owned_credential = _default_credential()
        try:
            token_provider = _token_provider(credential)
        except ImportError as e:
            raise ConfigurationError(
                "azure-identity package not installed",
                hint="pip install 'azureaifoundry[identity]'",
            ) from e
        except Exception as e:
            raise ConfigurationError(
                f"failed to create token provider: {e}",
                hint="Check the credential passed as credential=..., or pass api_key=...",
            ) from e
        return AsyncAzureOpenAI(
            azure_endpoint=config.endpoint,
            api_version=config.api_version,
            azure_ad_token_provider=token_provider,
        )

    @property
    def name(self) -> str:
        return PROVIDER

    @property
    def client(self) -> Any:
        """The underlying ``AsyncAzureOpenAI`` client."""
        return self._client

    def define_model(
        self,
        registry: ActionRegistry,
        definition: ModelDefinition,
        info: ModelInfo | None = None,
    ) -> ModelAction:
        """Register a deployment as a model action.

        Capabilities are inferred from the deployment name unless *info* is
        given.
        """
        if info is None:
            inferred = infer_model_capabilities(definition.name, definition.supports_media)
            info = ModelInfo(
                label=f"{PROVIDER}-{definition.name}",
                supports=inferred.supports,
                versions=inferred.versions,
            )
        return registry.register_model(ModelAction(self, definition.name, info))

    def define_embedder(self, registry: ActionRegistry, name: str) -> EmbedderAction:
        """Register an embedding deployment as an embedder action."""
        return registry.register_embedder(EmbedderAction(self, name))

    async def generate(
        self,
        model_name: str,
        request: GenerateRequest,
        on_chunk: ChunkSink | None = None,
    ) -> GenerateResponse:
        """Run one generation, routed by deployment name.

        Chat streams when *on_chunk* is given. Other modalities ignore the
        sink and answer in one piece.
        """
        match route_model(model_name):
            case "image":
                return await generate_image(self._client, model_name, request)
            case "speech":
                return await synthesize_speech(self._client, model_name, request)
            case "transcription":
                return await transcribe_audio(self._client, model_name, request)
            case "chat":
                if on_chunk is None:
                    return await self._complete(model_name, request)
                return await self._stream(model_name, request, on_chunk)

    async def _complete(self, model_name: str, request: GenerateRequest) -> GenerateResponse:
        create_kwargs = build_chat_request(model_name, request)
        try:
            completion = await self._client.chat.completions.create(**create_kwargs)
        except asyncio.CancelledError:
            raise
        except APIError:
            raise
        except Exception as e:
            raise wrap_vendor_error(
                e,
                phase="generate",
                message=f"chat completion failed for model '{model_name}'",
            ) from e
        return convert_response(completion)

    async def _stream(
        self,
        model_name: str,
        request: GenerateRequest,
        on_chunk: ChunkSink,
    ) -> GenerateResponse:
        message = f"chat completion failed for model '{model_name}'"
        create_kwargs = build_chat_request(model_name, request, stream=True)
        try:
            stream = await self._client.chat.completions.create(**create_kwargs)
        except asyncio.CancelledError:
            raise
        except APIError:
            raise
        except Exception as e:
            raise wrap_vendor_error(e, phase="generate", message=message) from e
        return await StreamAggregator(error_message=message).aggregate(stream, on_chunk)

    async def embed(self, model_name: str, request: EmbedRequest) -> EmbedResponse:
        """Embed documents with an embedding deployment."""
        return await embed_documents(self._client, model_name, request)

    async def aclose(self) -> None:
        """Close the vendor client (when owned) and any credential created here."""
        if self._owns_client:
            try:
                await self._client.close()
            except Exception as e:
                logger.warning("Failed to close Azure OpenAI client: %s", e)
        credential, self._owned_credential = self._owned_credential, None
        if credential is not None:
            try:
                await credential.close()
            except Exception as e:
                logger.warning("Failed to close Azure credential: %s", e)

    async def __aenter__(self) -> AzureAIFoundry:
        return self

    async def __aexit__(self, *_exc: object) -> None:
        await self.aclose()


def define_common_models(
    plugin: AzureAIFoundry, registry: ActionRegistry
) -> dict[str, ModelAction]:
    """Register the common GPT chat deployments by their usual names."""
    return {
        name: plugin.define_model(
            registry, ModelDefinition(name=name, type="chat", supports_media=media)
        )
        for name, media in COMMON_CHAT_MODELS
    }


def define_common_embedders(
    plugin: AzureAIFoundry, registry: ActionRegistry
) -> dict[str, EmbedderAction]:
    """Register the common embedding deployments by their usual names."""
    return {name: plugin.define_embedder(registry, name) for name in COMMON_EMBEDDING_MODELS}


def model(registry: ActionRegistry, name: str) -> ModelAction | None:
    return registry.lookup_model(PROVIDER, name)


def is_defined_model(registry: ActionRegistry, name: str) -> bool:
    return model(registry, name) is not None


def embedder(registry: ActionRegistry, name: str) -> EmbedderAction | None:
    return registry.lookup_embedder(PROVIDER, name)


def is_defined_embedder(registry: ActionRegistry, name: str) -> bool:
    return embedder(registry, name) is not None
