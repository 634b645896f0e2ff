"""Text-to-speech through ``audio.speech.create``."""

from __future__ import annotations

import asyncio
import base64
from typing import TYPE_CHECKING, Any

from azureaifoundry._errors import wrap_vendor_error
from azureaifoundry.errors import APIError
from azureaifoundry.modalities import flatten_text
from azureaifoundry.models import GenerateResponse, Message, TextPart
from azureaifoundry.options import SpeechConfig

if TYPE_CHECKING:
    from azureaifoundry.models import GenerateRequest


def _audio_bytes(result: Any) -> bytes:
    if isinstance(result, (bytes, bytearray)):
        return bytes(result)
    return bytes(result.content)


async def synthesize_speech(
    client: Any, model_name: str, request: GenerateRequest
) -> GenerateResponse:
    """Synthesize speech; the audio is returned base64-encoded in one text part."""
    config = SpeechConfig.from_bag(request.config)

    try:
        result = await client.audio.speech.create(
            model=model_name,
            input=flatten_text(request.messages),
            voice=config.voice,
            response_format=config.response_format,
            speed=config.speed,
        )
        audio = _audio_bytes(result)
    except asyncio.CancelledError:
        raise
    except APIError:
        raise
    except Exception as e:
        raise wrap_vendor_error(
            e, phase="speech", message="speech generation failed"
        ) from e

    encoded = base64.b64encode(audio).decode("ascii")
    return GenerateResponse(
        message=Message(role="model", content=(TextPart(encoded),)),
        finish_reason="stop",
    )
