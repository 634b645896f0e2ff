"""Assemble ``chat.completions.create`` keyword arguments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from azureaifoundry.options import ChatConfig
from azureaifoundry.translate.messages import to_openai_messages

if TYPE_CHECKING:
    from collections.abc import Iterable

    from azureaifoundry.models import GenerateRequest, ToolDefinition


def to_openai_tools(tools: Iterable[ToolDefinition]) -> list[dict[str, Any]]:
    """Translate tool definitions one-to-one; schemas pass through unvalidated."""
    out: list[dict[str, Any]] = []
    for tool in tools:
        function: dict[str, Any] = {"name": tool.name}
        if tool.description:
            function["description"] = tool.description
        parameters = tool.parameters_json()
        if parameters is not None:
            function["parameters"] = parameters
        out.append({"type": "function", "function": function})
    return out


def build_chat_request(
    model: str,
    request: GenerateRequest,
    *,
    stream: bool = False,
) -> dict[str, Any]:
    """Return the keyword arguments for one chat completion call."""
    config = ChatConfig.from_bag(request.config)

    create_kwargs: dict[str, Any] = {
        "model": model,
        "messages": to_openai_messages(request.messages),
    }
    if config.max_tokens is not None:
        create_kwargs["max_tokens"] = config.max_tokens
    if config.temperature is not None:
        create_kwargs["temperature"] = config.temperature
    if config.top_p is not None:
        create_kwargs["top_p"] = config.top_p

    if request.tools:
        create_kwargs["tools"] = to_openai_tools(request.tools)
        tool_choice = config.effective_tool_choice
        if tool_choice is not None:
            create_kwargs["tool_choice"] = tool_choice

    if stream:
        create_kwargs["stream"] = True
        # Usage arrives on a final choice-less chunk.
        create_kwargs["stream_options"] = {"include_usage": True}
    return create_kwargs
