"""Embeddings through ``embeddings.create``."""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from azureaifoundry._errors import wrap_vendor_error
from azureaifoundry.errors import APIError
from azureaifoundry.models import Embedding, EmbedResponse

if TYPE_CHECKING:
    from azureaifoundry.models import EmbedRequest

logger = logging.getLogger(__name__)


async def embed(client: Any, model_name: str, request: EmbedRequest) -> EmbedResponse:
    """Embed each document's text, one vendor call per document.

    Documents without text are skipped, so the output may be shorter than
    the input.
    """
    embeddings: list[Embedding] = []
    for i, document in enumerate(request.documents):
        text = document.text
        if not text:
            logger.debug("Skipping empty document %d for %s", i, model_name)
            continue

        try:
            result = await client.embeddings.create(model=model_name, input=text)
        except asyncio.CancelledError:
            raise
        except APIError:
            raise
        except Exception as e:
            raise wrap_vendor_error(
                e,
                phase="embed",
                message=f"embedding generation failed for model '{model_name}'",
            ) from e

        data = getattr(result, "data", None) or []
        if data:
            embeddings.append(Embedding([float(x) for x in data[0].embedding]))
    return EmbedResponse(embeddings=embeddings)
