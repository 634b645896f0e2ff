"""Chat translation between host shapes and Chat Completions shapes."""

from azureaifoundry.translate.messages import to_openai_messages
from azureaifoundry.translate.request import build_chat_request, to_openai_tools
from azureaifoundry.translate.response import (
    convert_finish_reason,
    convert_response,
    convert_usage,
)
from azureaifoundry.translate.streaming import StreamAggregator, ToolCallAccumulator

__all__ = [
    "StreamAggregator",
    "ToolCallAccumulator",
    "build_chat_request",
    "convert_finish_reason",
    "convert_response",
    "convert_usage",
    "to_openai_messages",
    "to_openai_tools",
]
