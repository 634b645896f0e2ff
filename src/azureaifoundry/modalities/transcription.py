"""Speech-to-text through ``audio.transcriptions.create``."""

from __future__ import annotations

import asyncio
import base64
import binascii
from typing import TYPE_CHECKING, Any

from azureaifoundry._errors import wrap_vendor_error
from azureaifoundry.errors import APIError, MissingInputError, TranslationError
from azureaifoundry.models import GenerateResponse, MediaPart, Message, TextPart
from azureaifoundry.options import TranscriptionConfig

if TYPE_CHECKING:
    from collections.abc import Iterable

    from azureaifoundry.models import GenerateRequest

_BASE64_MARKER = "base64,"
DEFAULT_AUDIO_FILENAME = "audio.mp3"

# MIME substring -> upload filename; the extension drives server-side format detection.
_AUDIO_FILENAMES: tuple[tuple[str, str], ...] = (
    ("audio/mp3", "audio.mp3"),
    ("audio/mpeg", "audio.mp3"),
    ("audio/wav", "audio.wav"),
    ("audio/opus", "audio.opus"),
)


def audio_filename(media: MediaPart) -> str:
    """Infer an upload filename from the part's MIME type or data-URI header."""
    header = media.url.split(_BASE64_MARKER, 1)[0]
    haystack = f"{media.content_type or ''} {header}".lower()
    for marker, filename in _AUDIO_FILENAMES:
        if marker in haystack:
            return filename
    return DEFAULT_AUDIO_FILENAME


def find_audio_part(messages: Iterable[Message]) -> MediaPart | None:
    """Return the first media part carrying inline base64 data."""
    for message in messages:
        for part in message.content:
            if isinstance(part, MediaPart) and part.is_inline:
                return part
    return None


def decode_audio(media: MediaPart) -> bytes:
    """Decode the payload following the ``base64,`` marker."""
    payload = media.url.split(_BASE64_MARKER, 1)[1]
    try:
        return base64.b64decode(payload, validate=True)
    except (binascii.Error, ValueError) as e:
        raise TranslationError(
            "failed to decode audio",
            hint="Pass audio as 'data:audio/<format>;base64,<payload>'.",
        ) from e


def _transcript_text(result: Any) -> str:
    # text/srt/vtt formats come back as plain strings.
    if isinstance(result, str):
        return result
    return getattr(result, "text", "") or ""


async def transcribe_audio(
    client: Any, model_name: str, request: GenerateRequest
) -> GenerateResponse:
    """Transcribe the first inline audio part in the request."""
    media = find_audio_part(request.messages)
    audio = decode_audio(media) if media is not None else b""
    if media is None or not audio:
        raise MissingInputError(
            "no audio data found in request",
            hint="Add a media part such as 'data:audio/wav;base64,<payload>'.",
        )

    config = TranscriptionConfig.from_bag(request.config)
    create_kwargs: dict[str, Any] = {
        "model": model_name,
        "file": (audio_filename(media), audio),
        "response_format": config.response_format,
    }
    if config.language:
        create_kwargs["language"] = config.language
    if config.prompt:
        create_kwargs["prompt"] = config.prompt
    if config.temperature is not None:
        create_kwargs["temperature"] = config.temperature

    try:
        result = await client.audio.transcriptions.create(**create_kwargs)
    except asyncio.CancelledError:
        raise
    except APIError:
        raise
    except Exception as e:
        raise wrap_vendor_error(
            e, phase="transcription", message="audio transcription failed"
        ) from e

    return GenerateResponse(
        message=Message(role="model", content=(TextPart(_transcript_text(result)),)),
        finish_reason="stop",
    )
