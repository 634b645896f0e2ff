"""Exceptions raised by azureaifoundry.

Local failures (bad configuration, missing input, untranslatable vendor
output, a failing stream callback) never reach the endpoint. ``APIError``
and ``RateLimitError`` always wrap a vendor call and carry the metadata a
caller needs to decide on a retry.
"""

from __future__ import annotations

from typing import Literal

#: Vendor call that failed, as recorded on ``APIError.phase``.
Phase = Literal["generate", "stream", "embed", "image", "speech", "transcription"]


class FoundryError(Exception):
    """Base class; ``hint`` suggests a fix when one is known."""

    def __init__(self, message: str, *, hint: str | None = None) -> None:
        super().__init__(message)
        self.hint = hint


class ConfigurationError(FoundryError):
    """Plugin or per-request configuration is unusable."""


class MissingInputError(FoundryError):
    """The request lacks content the operation cannot run without."""


class TranslationError(FoundryError):
    """Vendor output could not be mapped onto host types."""


class StreamCallbackError(FoundryError):
    """The chunk sink raised; the stream was closed early."""


class APIError(FoundryError):
    """A call to the Azure endpoint failed.

    ``retryable``, ``status_code`` and ``retry_after_s`` describe whether and
    when the call may be repeated. Nothing in this package retries on its own.
    """

    def __init__(
        self,
        message: str,
        *,
        hint: str | None = None,
        retryable: bool | None = None,
        status_code: int | None = None,
        retry_after_s: float | None = None,
        provider: str | None = None,
        phase: Phase | str | None = None,
    ) -> None:
        super().__init__(message, hint=hint)
        self.retryable = retryable
        self.status_code = status_code
        self.retry_after_s = retry_after_s
        self.provider = provider
        self.phase = phase


class RateLimitError(APIError):
    """HTTP 429 from the endpoint; retryable unless stated otherwise."""

    def __init__(self, message: str, **kwargs: object) -> None:
        kwargs.setdefault("retryable", True)
        kwargs.setdefault("status_code", 429)
        super().__init__(message, **kwargs)  # type: ignore[arg-type]
