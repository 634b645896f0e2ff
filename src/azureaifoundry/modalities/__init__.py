"""Non-chat modalities and model-name routing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Literal

from azureaifoundry.models import TextPart

if TYPE_CHECKING:
    from collections.abc import Iterable

    from azureaifoundry.models import Message

Modality = Literal["image", "speech", "transcription", "chat"]

# Evaluated in order; first match wins.
_ROUTES: tuple[tuple[Modality, tuple[str, ...]], ...] = (
    ("image", ("dall-e", "gpt-image")),
    ("speech", ("tts",)),
    ("transcription", ("whisper", "transcribe")),
)


def route_model(model_name: str) -> Modality:
    """Pick the modality for a deployment name by case-insensitive substring."""
    lowered = model_name.lower()
    for modality, markers in _ROUTES:
        if any(marker in lowered for marker in markers):
            return modality
    return "chat"


def flatten_text(messages: Iterable[Message]) -> str:
    """Concatenate every text part of every message, in order."""
    return "".join(
        part.text
        for message in messages
        for part in message.content
        if isinstance(part, TextPart)
    )


__all__ = ["Modality", "flatten_text", "route_model"]
