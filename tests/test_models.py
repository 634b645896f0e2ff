from __future__ import annotations

from pydantic import BaseModel
import pytest

from azureaifoundry.models import (
    Document,
    GenerateResponse,
    MediaPart,
    Message,
    ResponseChunk,
    TextPart,
    ToolDefinition,
    ToolRequest,
    ToolRequestPart,
)

pytestmark = pytest.mark.unit


class _Args(BaseModel):
    city: str


def test_message_text_joins_text_parts_only() -> None:
    msg = Message(
        role="model",
        content=(TextPart("a"), ToolRequestPart(ToolRequest("f")), MediaPart("u"), TextPart("b")),
    )
    assert msg.text == "ab"
    assert [r.name for r in msg.tool_requests] == ["f"]


@pytest.mark.parametrize(
    ("url", "inline"),
    [
        ("data:image/png;base64,AAAA", True),
        ("https://example.com/base64/cat.png", False),
        ("https://example.com/?q=base64,", True),
    ],
)
def test_media_inline_detection_uses_marker_only(url: str, inline: bool) -> None:
    assert MediaPart(url).is_inline is inline


def test_tool_definition_schema_forms() -> None:
    assert ToolDefinition("f").parameters_json() is None
    assert ToolDefinition("f", input_schema={"type": "object"}).parameters_json() == {
        "type": "object"
    }
    assert ToolDefinition("f", input_schema=_Args).parameters_json() == _Args.model_json_schema()


def test_response_and_chunk_text() -> None:
    resp = GenerateResponse(message=Message(role="model", content=(TextPart("hi"),)))
    assert resp.text == "hi"
    assert resp.finish_reason == "stop"
    assert resp.usage.total_tokens == 0
    assert ResponseChunk(content=(TextPart("x"),)).text == "x"


def test_document_from_text() -> None:
    assert Document.from_text("doc").text == "doc"
