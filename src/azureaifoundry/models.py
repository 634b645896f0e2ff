"""Domain models shared with the host framework.

Messages carry an ordered tuple of parts. A part is one of four tagged
variants; consumers ``match`` on the variant instead of probing for fields.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Literal, TypeAlias

from pydantic import BaseModel

Role = Literal["system", "user", "model", "tool"]
FinishReason = Literal["stop", "length", "blocked", "other", "unknown"]
InputSchema: TypeAlias = "dict[str, Any] | type[BaseModel]"


@dataclass(frozen=True)
class ToolRequest:
    """A request from the model to invoke a tool.

    ``ref`` is the call identifier. It is set from the vendor's call id on
    converted responses and should be echoed on the matching ToolResponse.
    """

    name: str
    input: Any = None
    ref: str | None = None


@dataclass(frozen=True)
class ToolResponse:
    """The result of a tool invocation, addressed back to its request."""

    name: str
    output: Any = None
    ref: str | None = None


@dataclass(frozen=True)
class TextPart:
    text: str


@dataclass(frozen=True)
class MediaPart:
    """Media referenced by URL or carried inline as a ``data:`` URI."""

    url: str
    content_type: str | None = None

    @property
    def is_inline(self) -> bool:
        """Whether the payload is base64 data rather than a remote URL."""
        return "base64," in self.url


@dataclass(frozen=True)
class ToolRequestPart:
    tool_request: ToolRequest


@dataclass(frozen=True)
class ToolResponsePart:
    tool_response: ToolResponse


Part: TypeAlias = "TextPart | MediaPart | ToolRequestPart | ToolResponsePart"


def _join_text(parts: tuple[Part, ...]) -> str:
    return "".join(p.text for p in parts if isinstance(p, TextPart))


@dataclass(frozen=True)
class Message:
    """A conversation turn."""

    role: Role
    content: tuple[Part, ...] = ()

    @property
    def text(self) -> str:
        """Concatenation of all text parts, in order."""
        return _join_text(self.content)

    @property
    def tool_requests(self) -> list[ToolRequest]:
        return [p.tool_request for p in self.content if isinstance(p, ToolRequestPart)]


@dataclass(frozen=True)
class ToolDefinition:
    """A tool the model may call.

    ``input_schema`` may be a JSON Schema dict or a Pydantic model class.
    """

    name: str
    description: str | None = None
    input_schema: InputSchema | None = None

    def parameters_json(self) -> dict[str, Any] | None:
        """Return the JSON Schema sent to the vendor, or None."""
        schema = self.input_schema
        if schema is None:
            return None
        if isinstance(schema, type) and issubclass(schema, BaseModel):
            return schema.model_json_schema()
        return schema


@dataclass(frozen=True)
class GenerateRequest:
    """A generation request as handed over by the host framework.

    ``config`` is usually an untyped mapping; a typed config object from
    :mod:`azureaifoundry.options` is also accepted.
    """

    messages: tuple[Message, ...] = ()
    tools: tuple[ToolDefinition, ...] = ()
    config: Any = None


@dataclass(frozen=True)
class Usage:
    """Token accounting for one generation."""

    input_tokens: int = 0
    output_tokens: int = 0
    total_tokens: int = 0


@dataclass
class GenerateResponse:
    """A standardized generation result."""

    message: Message
    finish_reason: FinishReason = "stop"
    usage: Usage = field(default_factory=Usage)

    @property
    def text(self) -> str:
        return self.message.text

    @property
    def tool_requests(self) -> list[ToolRequest]:
        return self.message.tool_requests


@dataclass
class ResponseChunk:
    """One incremental piece of a streamed response."""

    content: tuple[Part, ...] = ()
    index: int = 0

    @property
    def text(self) -> str:
        return _join_text(self.content)


@dataclass(frozen=True)
class ModelSupports:
    """Capability flags advertised for a registered model."""

    multiturn: bool = True
    tools: bool = False
    system_role: bool = True
    media: bool = False


@dataclass(frozen=True)
class ModelInfo:
    label: str
    supports: ModelSupports = field(default_factory=ModelSupports)
    versions: tuple[str, ...] = ()


@dataclass(frozen=True)
class ModelDefinition:
    """A deployment to register as a model."""

    #: Deployment name in Azure AI Foundry.
    name: str
    #: Informational: "chat" or "text".
    type: str = "chat"
    max_tokens: int | None = None
    supports_media: bool = False


@dataclass(frozen=True)
class Document:
    """Embedder input: an ordered set of parts."""

    content: tuple[Part, ...] = ()

    @property
    def text(self) -> str:
        return _join_text(self.content)

    @classmethod
    def from_text(cls, text: str) -> Document:
        return cls(content=(TextPart(text),))


@dataclass(frozen=True)
class EmbedRequest:
    documents: tuple[Document, ...] = ()


@dataclass(frozen=True)
class Embedding:
    embedding: list[float]


@dataclass
class EmbedResponse:
    embeddings: list[Embedding] = field(default_factory=list)
