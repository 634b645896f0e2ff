"""Capability inference for registered chat deployments."""

from __future__ import annotations

from azureaifoundry.models import ModelInfo, ModelSupports


def infer_model_capabilities(model_name: str, supports_media: bool) -> ModelInfo:
    """Return the advertised capabilities for a deployment name.

    Tool calling is assumed for any GPT-family name; media support is taken
    from the caller because deployment names don't reliably encode it.
    """
    return ModelInfo(
        label=model_name,
        supports=ModelSupports(
            multiturn=True,
            tools="gpt" in model_name.lower(),
            system_role=True,
            media=supports_media,
        ),
    )
