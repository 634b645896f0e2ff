"""azureaifoundry: Azure AI Foundry provider plugin.

Public API:
    - AzureAIFoundry: Plugin object (client lifecycle, model/embedder registration)
    - ActionRegistry: Registry the plugin defines actions into
    - Message, parts and request/response types from ``azureaifoundry.models``
    - Typed per-operation configs from ``azureaifoundry.options``
"""

from __future__ import annotations

import logging

from azureaifoundry.config import PluginConfig
from azureaifoundry.errors import (
    APIError,
    ConfigurationError,
    FoundryError,
    MissingInputError,
    RateLimitError,
    StreamCallbackError,
    TranslationError,
)
from azureaifoundry.models import (
    Document,
    Embedding,
    EmbedRequest,
    EmbedResponse,
    GenerateRequest,
    GenerateResponse,
    MediaPart,
    Message,
    ModelDefinition,
    ModelInfo,
    ModelSupports,
    ResponseChunk,
    TextPart,
    ToolDefinition,
    ToolRequest,
    ToolRequestPart,
    ToolResponse,
    ToolResponsePart,
    Usage,
)
from azureaifoundry.options import (
    ChatConfig,
    ImageConfig,
    SpeechConfig,
    TranscriptionConfig,
)
from azureaifoundry.plugin import (
    AzureAIFoundry,
    define_common_embedders,
    define_common_models,
    embedder,
    is_defined_embedder,
    is_defined_model,
    model,
)
from azureaifoundry.registry import ActionRegistry, EmbedderAction, ModelAction

try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("azureaifoundry")
except PackageNotFoundError:
    __version__ = "0.0.0+unknown"

# Library-level NullHandler: stay silent unless the consumer configures logging.
logging.getLogger("azureaifoundry").addHandler(logging.NullHandler())

__all__ = [
    "APIError",
    "ActionRegistry",
    "AzureAIFoundry",
    "ChatConfig",
    "ConfigurationError",
    "Document",
    "EmbedRequest",
    "EmbedResponse",
    "EmbedderAction",
    "Embedding",
    "FoundryError",
    "GenerateRequest",
    "GenerateResponse",
    "ImageConfig",
    "MediaPart",
    "Message",
    "MissingInputError",
    "ModelAction",
    "ModelDefinition",
    "ModelInfo",
    "ModelSupports",
    "PluginConfig",
    "RateLimitError",
    "ResponseChunk",
    "SpeechConfig",
    "StreamCallbackError",
    "TextPart",
    "ToolDefinition",
    "ToolRequest",
    "ToolRequestPart",
    "ToolResponse",
    "ToolResponsePart",
    "TranscriptionConfig",
    "TranslationError",
    "Usage",
    "define_common_embedders",
    "define_common_models",
    "embedder",
    "is_defined_embedder",
    "is_defined_model",
    "model",
]
