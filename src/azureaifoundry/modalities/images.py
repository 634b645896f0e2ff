"""Image generation through ``images.generate``."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from azureaifoundry._errors import wrap_vendor_error
from azureaifoundry.errors import APIError
from azureaifoundry.modalities import flatten_text
from azureaifoundry.models import GenerateResponse, Message, Part, TextPart
from azureaifoundry.options import ImageConfig

if TYPE_CHECKING:
    from azureaifoundry.models import GenerateRequest

logger = logging.getLogger(__name__)


async def generate_image(
    client: Any, model_name: str, request: GenerateRequest
) -> GenerateResponse:
    """Generate images; each result becomes one text part (URL or base64)."""
    config = ImageConfig.from_bag(request.config)
    prompt = flatten_text(request.messages)

    try:
        result = await client.images.generate(
            model=model_name,
            prompt=prompt,
            n=config.n,
            size=config.size,
            quality=config.quality,
            style=config.style,
            response_format=config.response_format,
        )
    except asyncio.CancelledError:
        raise
    except APIError:
        raise
    except Exception as e:
        raise wrap_vendor_error(
            e, phase="image", message="image generation failed"
        ) from e

    content: list[Part] = []
    for image in getattr(result, "data", None) or ():
        url = getattr(image, "url", None)
        b64 = getattr(image, "b64_json", None)
        if url:
            content.append(TextPart(url))
        elif b64:
            content.append(TextPart(b64))
    logger.debug("Generated %d image(s) with %s", len(content), model_name)

    return GenerateResponse(
        message=Message(role="model", content=tuple(content)),
        finish_reason="stop",
    )
