"""Chat completion results to host responses."""

from __future__ import annotations

import json
import logging
from typing import Any

from azureaifoundry.models import (
    FinishReason,
    GenerateResponse,
    Message,
    Part,
    TextPart,
    ToolRequest,
    ToolRequestPart,
    Usage,
)

logger = logging.getLogger(__name__)


def convert_finish_reason(reason: str | None) -> FinishReason:
    """Normalize a vendor finish reason."""
    match reason:
        case "stop" | "tool_calls" | "function_call":
            return "stop"
        case "length":
            return "length"
        case "content_filter":
            return "blocked"
        case _:
            return "other"


def convert_usage(usage: Any) -> Usage:
    """Map vendor usage; counters stay zero unless prompt tokens were reported."""
    if usage is None:
        return Usage()
    prompt_tokens = getattr(usage, "prompt_tokens", 0) or 0
    if prompt_tokens <= 0:
        return Usage()
    return Usage(
        input_tokens=int(prompt_tokens),
        output_tokens=int(getattr(usage, "completion_tokens", 0) or 0),
        total_tokens=int(getattr(usage, "total_tokens", 0) or 0),
    )


_UNDECODABLE = object()


def _decode_arguments(raw: str | None) -> Any:
    """Decode call arguments to a dict, or None for a JSON ``null``."""
    try:
        value = json.loads(raw or "")
    except ValueError:
        return _UNDECODABLE
    if value is None or isinstance(value, dict):
        return value
    return _UNDECODABLE


def _tool_call_parts(tool_calls: Any) -> list[Part]:
    parts: list[Part] = []
    for call in tool_calls or ():
        if getattr(call, "type", "function") != "function":
            continue
        call_id = getattr(call, "id", None)
        if not call_id:
            continue
        function = getattr(call, "function", None)
        name = getattr(function, "name", None) or ""
        arguments = _decode_arguments(getattr(function, "arguments", None))
        if arguments is _UNDECODABLE:
            logger.debug(
                "Skipping tool call %s (%s): arguments are not a JSON object",
                call_id,
                name,
            )
            continue
        parts.append(
            ToolRequestPart(ToolRequest(name=name, input=arguments, ref=call_id))
        )
    return parts


def convert_response(completion: Any) -> GenerateResponse:
    """Convert a ``ChatCompletion`` into a GenerateResponse."""
    choices = getattr(completion, "choices", None) or []
    if not choices:
        return GenerateResponse(
            message=Message(role="model"),
            finish_reason="unknown",
        )

    choice = choices[0]
    vendor_message = getattr(choice, "message", None)
    content: list[Part] = []
    text = getattr(vendor_message, "content", None)
    if text:
        content.append(TextPart(text))
    content.extend(_tool_call_parts(getattr(vendor_message, "tool_calls", None)))

    return GenerateResponse(
        message=Message(role="model", content=tuple(content)),
        finish_reason=convert_finish_reason(getattr(choice, "finish_reason", None)),
        usage=convert_usage(getattr(completion, "usage", None)),
    )
