"""Host messages to Chat Completions message params."""

from __future__ import annotations

from collections import Counter, defaultdict, deque
import json
import logging
from typing import TYPE_CHECKING, Any

from azureaifoundry.models import MediaPart, TextPart, ToolRequestPart, ToolResponsePart

if TYPE_CHECKING:
    from collections.abc import Iterable

    from azureaifoundry.models import Message, Part

logger = logging.getLogger(__name__)


class CallIdAllocator:
    """Assign call ids for tool requests/responses that carry no ``ref``.

    The n-th unreferenced call to a given tool name within one message gets
    ``call_<name>`` for n=1 and ``call_<name>_<n>`` afterwards, so responses
    numbered the same way line up with their requests across turns. Tool
    responses prefer the ids the preceding assistant message actually issued.
    """

    def __init__(self) -> None:
        self._seen: Counter[str] = Counter()

    def next_id(self, name: str, ref: str | None) -> str:
        if ref:
            return ref
        self._seen[name] += 1
        n = self._seen[name]
        return f"call_{name}" if n == 1 else f"call_{name}_{n}"


def _encode(value: Any) -> str | None:
    try:
        return json.dumps(value)
    except (TypeError, ValueError) as e:
        logger.debug("Dropping entry with non-JSON-serializable payload: %s", e)
        return None


def is_multimodal(message: Message) -> bool:
    """True when user content must be sent as a list of fragments."""
    return len(message.content) > 1 or any(
        isinstance(p, MediaPart) for p in message.content
    )


def _user_fragment(part: Part) -> dict[str, Any] | None:
    match part:
        case TextPart(text=text):
            return {"type": "text", "text": text}
        case MediaPart(url=url):
            return {"type": "image_url", "image_url": {"url": url}}
        case ToolRequestPart() | ToolResponsePart():
            return None


def _system_message(message: Message) -> dict[str, Any] | None:
    first = message.content[0]
    text = first.text if isinstance(first, TextPart) else ""
    if not text:
        return None
    return {"role": "system", "content": text}


def _user_message(message: Message) -> dict[str, Any] | None:
    if is_multimodal(message):
        fragments = [
            f for f in (_user_fragment(p) for p in message.content) if f is not None
        ]
        if not fragments:
            return None
        return {"role": "user", "content": fragments}

    first = message.content[0]
    if not isinstance(first, TextPart) or not first.text:
        return None
    return {"role": "user", "content": first.text}


def _assistant_message(message: Message) -> dict[str, Any] | None:
    ids = CallIdAllocator()
    text_chunks: list[str] = []
    tool_calls: list[dict[str, Any]] = []

    for part in message.content:
        match part:
            case TextPart(text=text):
                text_chunks.append(text)
            case ToolRequestPart(tool_request=req):
                call_id = ids.next_id(req.name, req.ref)
                arguments = _encode(req.input)
                if arguments is None:
                    continue
                tool_calls.append(
                    {
                        "id": call_id,
                        "type": "function",
                        "function": {"name": req.name, "arguments": arguments},
                    }
                )
            case MediaPart() | ToolResponsePart():
                continue

    text = "".join(text_chunks)
    if not text and not tool_calls:
        return None

    out: dict[str, Any] = {"role": "assistant", "content": text or None}
    if tool_calls:
        out["tool_calls"] = tool_calls
    return out


def _open_calls(assistant: dict[str, Any] | None) -> dict[str, deque[str]]:
    """Ids of the calls an assistant message issued, per tool name in order."""
    pending: dict[str, deque[str]] = defaultdict(deque)
    for call in (assistant or {}).get("tool_calls", ()):
        pending[call["function"]["name"]].append(call["id"])
    return pending


def _tool_messages(
    message: Message, pending: dict[str, deque[str]]
) -> list[dict[str, Any]]:
    # Unreferenced responses answer the oldest open call of the same name.
    ids = CallIdAllocator()
    out: list[dict[str, Any]] = []
    for part in message.content:
        if not isinstance(part, ToolResponsePart):
            continue
        resp = part.tool_response
        open_ids = pending.get(resp.name)
        if resp.ref:
            call_id = resp.ref
            if open_ids and call_id in open_ids:
                open_ids.remove(call_id)
        elif open_ids:
            call_id = open_ids.popleft()
        else:
            call_id = ids.next_id(resp.name, None)
        content = _encode(resp.output)
        if content is None:
            continue
        out.append({"role": "tool", "tool_call_id": call_id, "content": content})
    return out


def to_openai_messages(messages: Iterable[Message]) -> list[dict[str, Any]]:
    """Translate host messages into ``chat.completions.create`` messages.

    Messages with no content, or that produce none after filtering, are
    omitted.
    """
    out: list[dict[str, Any]] = []
    pending: dict[str, deque[str]] = {}
    for message in messages:
        if not message.content:
            continue

        match message.role:
            case "system":
                translated = _system_message(message)
            case "user":
                translated = _user_message(message)
            case "model":
                translated = _assistant_message(message)
                pending = _open_calls(translated)
            case "tool":
                out.extend(_tool_messages(message, pending))
                continue
            case _:
                logger.debug("Skipping message with unknown role %r", message.role)
                continue

        if translated is not None:
            out.append(translated)
    return out
