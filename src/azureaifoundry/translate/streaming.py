"""Streaming chat aggregation.

Text deltas are forwarded to the caller's sink as they arrive; tool-call
fragments are accumulated per vendor slot and decoded once the stream ends.
"""

from __future__ import annotations

from dataclasses import dataclass, field
import inspect
import json
import logging
from typing import TYPE_CHECKING, Any, Literal

from azureaifoundry._errors import wrap_vendor_error
from azureaifoundry.errors import StreamCallbackError, TranslationError
from azureaifoundry.models import (
    GenerateResponse,
    Message,
    Part,
    ResponseChunk,
    TextPart,
    ToolRequest,
    ToolRequestPart,
)
from azureaifoundry.translate.response import convert_finish_reason, convert_usage

if TYPE_CHECKING:
    from collections.abc import AsyncIterable, Awaitable, Callable

    ChunkSink = Callable[[ResponseChunk], Awaitable[None] | None]

logger = logging.getLogger(__name__)

StreamState = Literal["open", "closed"]


@dataclass
class ToolCallAccumulator:
    """Fragments of one streamed tool call, keyed by vendor slot index."""

    index: int
    id: str | None = None
    name: str = ""
    arguments: list[str] = field(default_factory=list)

    def add(self, delta: Any) -> None:
        if self.id is None:
            self.id = getattr(delta, "id", None) or None
        function = getattr(delta, "function", None)
        if function is None:
            return
        name = getattr(function, "name", None)
        if name:
            self.name = name
        fragment = getattr(function, "arguments", None)
        if fragment:
            self.arguments.append(fragment)

    def to_part(self) -> ToolRequestPart:
        """Decode the argument buffer; raise TranslationError when it is garbled."""
        raw = "".join(self.arguments)
        arguments: Any = None
        if raw:
            try:
                arguments = json.loads(raw)
            except ValueError as e:
                raise TranslationError(
                    f"streamed arguments for tool '{self.name}' are not valid JSON",
                    hint="The model produced incomplete tool arguments; retry the call.",
                ) from e
            if arguments is not None and not isinstance(arguments, dict):
                raise TranslationError(
                    f"streamed arguments for tool '{self.name}' are not a JSON object",
                )
        return ToolRequestPart(ToolRequest(name=self.name, input=arguments, ref=self.id))


async def _close_quietly(stream: Any) -> None:
    close = getattr(stream, "close", None)
    if close is None:
        return
    try:
        result = close()
        if inspect.isawaitable(result):
            await result
    except Exception as e:
        logger.warning("Failed to close chat completion stream: %s", e)


class StreamAggregator:
    """Consume one chat completion stream into a GenerateResponse."""

    def __init__(self, *, error_message: str | None = None) -> None:
        self.state: StreamState = "open"
        self._error_message = error_message
        self._text: list[str] = []
        self._accumulators: dict[int, ToolCallAccumulator] = {}
        self._finish_reason: str | None = None
        self._usage: Any = None

    async def aggregate(
        self,
        stream: AsyncIterable[Any],
        on_chunk: ChunkSink | None = None,
    ) -> GenerateResponse:
        """Drain *stream*, forwarding text deltas to *on_chunk*.

        The stream is closed on every exit path.
        """
        if self.state == "closed":
            raise RuntimeError("StreamAggregator instances are single-use")
        try:
            async for chunk in stream:
                for delta_text, index in self._consume(chunk):
                    if on_chunk is not None:
                        await self._emit(on_chunk, delta_text, index)
        except StreamCallbackError:
            raise
        except Exception as e:
            raise wrap_vendor_error(
                e, phase="stream", message=self._error_message
            ) from e
        finally:
            self.state = "closed"
            await _close_quietly(stream)

        return self._finalize()

    def _consume(self, chunk: Any) -> list[tuple[str, int]]:
        usage = getattr(chunk, "usage", None)
        if usage is not None:
            self._usage = usage

        deltas: list[tuple[str, int]] = []
        for choice in getattr(chunk, "choices", None) or ():
            delta = getattr(choice, "delta", None)
            if delta is not None:
                text = getattr(delta, "content", None)
                if text:
                    self._text.append(text)
                    deltas.append((text, getattr(choice, "index", 0) or 0))
                for tc in getattr(delta, "tool_calls", None) or ():
                    slot = getattr(tc, "index", 0) or 0
                    acc = self._accumulators.get(slot)
                    if acc is None:
                        acc = self._accumulators[slot] = ToolCallAccumulator(index=slot)
                    acc.add(tc)
            reason = getattr(choice, "finish_reason", None)
            if reason:
                self._finish_reason = reason
        return deltas

    async def _emit(self, on_chunk: ChunkSink, text: str, index: int) -> None:
        try:
            result = on_chunk(ResponseChunk(content=(TextPart(text),), index=index))
            if inspect.isawaitable(result):
                await result
        except Exception as e:
            raise StreamCallbackError(
                f"chunk callback failed: {e}",
                hint="The streaming callback raised; aggregation was aborted.",
            ) from e

    def _finalize(self) -> GenerateResponse:
        content: list[Part] = []
        text = "".join(self._text)
        if text:
            content.append(TextPart(text))
        for slot in sorted(self._accumulators):
            acc = self._accumulators[slot]
            if not acc.name:
                logger.debug("Dropping nameless streamed tool call at index %d", slot)
                continue
            content.append(acc.to_part())

        finish_reason = (
            convert_finish_reason(self._finish_reason)
            if self._finish_reason
            else "stop"
        )
        return GenerateResponse(
            message=Message(role="model", content=tuple(content)),
            finish_reason=finish_reason,
            usage=convert_usage(self._usage),
        )
