"""Test helpers (small, reusable doubles).

Keep this file tiny and purpose-built: vendor responses are plain
``SimpleNamespace`` objects shaped like the ``openai`` SDK models, and one
fake client stands in for ``AsyncAzureOpenAI`` across all operations.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import Any

from azureaifoundry.models import Message, TextPart

# =============================================================================
# Vendor Client Double
# =============================================================================


class FakeClient:
    """Records every vendor call and answers from a per-operation script.

    Each script entry is a return value, an exception instance (raised), or a
    callable receiving the call kwargs.
    """

    def __init__(self, **results: Any) -> None:
        self.calls: list[tuple[str, dict[str, Any]]] = []
        self.closed = False
        self._results = results
        self.chat = SimpleNamespace(completions=SimpleNamespace(create=self._op("chat")))
        self.images = SimpleNamespace(generate=self._op("images"))
        self.audio = SimpleNamespace(
            speech=SimpleNamespace(create=self._op("speech")),
            transcriptions=SimpleNamespace(create=self._op("transcriptions")),
        )
        self.embeddings = SimpleNamespace(create=self._op("embeddings"))

    def _op(self, name: str) -> Any:
        async def call(**kwargs: Any) -> Any:
            self.calls.append((name, kwargs))
            result = self._results.get(name)
            if callable(result):
                result = result(**kwargs)
            if isinstance(result, BaseException):
                raise result
            return result

        return call

    def calls_to(self, name: str) -> list[dict[str, Any]]:
        return [kwargs for op, kwargs in self.calls if op == name]

    async def close(self) -> None:
        self.closed = True


class FakeStream:
    """Async chunk source that tracks close() and can fail after its chunks."""

    def __init__(self, chunks: list[Any], *, error: BaseException | None = None) -> None:
        self.chunks = list(chunks)
        self.error = error
        self.closed = False
        self.consumed = 0

    def __aiter__(self) -> Any:
        return self._iterate()

    async def _iterate(self) -> Any:
        for chunk in self.chunks:
            self.consumed += 1
            yield chunk
        if self.error is not None:
            raise self.error

    async def close(self) -> None:
        self.closed = True


# =============================================================================
# Vendor Shape Builders
# =============================================================================


def usage(prompt: int = 0, completion: int = 0, total: int | None = None) -> Any:
    return SimpleNamespace(
        prompt_tokens=prompt,
        completion_tokens=completion,
        total_tokens=prompt + completion if total is None else total,
    )


def tool_call(call_id: str | None, name: str, arguments: str) -> Any:
    return SimpleNamespace(
        id=call_id,
        type="function",
        function=SimpleNamespace(name=name, arguments=arguments),
    )


def completion(
    text: str | None = None,
    *,
    tool_calls: list[Any] | None = None,
    finish_reason: str | None = "stop",
    usage: Any = None,
) -> Any:
    message = SimpleNamespace(content=text, tool_calls=tool_calls)
    choice = SimpleNamespace(index=0, message=message, finish_reason=finish_reason)
    return SimpleNamespace(choices=[choice], usage=usage)


def tool_delta(
    index: int,
    *,
    call_id: str | None = None,
    name: str | None = None,
    arguments: str | None = None,
) -> Any:
    return SimpleNamespace(
        index=index,
        id=call_id,
        type="function" if call_id else None,
        function=SimpleNamespace(name=name, arguments=arguments),
    )


def chunk(
    text: str | None = None,
    *,
    tool_calls: list[Any] | None = None,
    finish_reason: str | None = None,
) -> Any:
    delta = SimpleNamespace(content=text, tool_calls=tool_calls)
    choice = SimpleNamespace(index=0, delta=delta, finish_reason=finish_reason)
    return SimpleNamespace(choices=[choice], usage=None)


def usage_chunk(prompt: int, completion: int) -> Any:
    """Final choice-less chunk sent when ``include_usage`` is set."""
    return SimpleNamespace(choices=[], usage=usage(prompt, completion))


# =============================================================================
# Host Shape Builders
# =============================================================================


def text_message(role: Any, *texts: str) -> Message:
    return Message(role=role, content=tuple(TextPart(t) for t in texts))


def user(text: str) -> Message:
    return text_message("user", text)
