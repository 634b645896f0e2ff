"""Vendor error mapping.

Every vendor call site funnels SDK exceptions through ``wrap_vendor_error`` so
callers see one ``APIError`` shape with status and retry metadata, whatever
the underlying ``openai``/``httpx`` exception was.
"""

from __future__ import annotations

import asyncio
from collections import deque
from typing import TYPE_CHECKING, Any

import httpx

from azureaifoundry._http import AUTH_STATUS_CODES, RETRYABLE_STATUS_CODES
from azureaifoundry.constants import PROVIDER
from azureaifoundry.errors import APIError, RateLimitError

if TYPE_CHECKING:
    from collections.abc import Iterator

# Azure emits millisecond hints alongside the standard header.
_MS_RETRY_HEADERS = ("retry-after-ms", "x-ms-retry-after-ms")


def iter_exception_chain(exc: BaseException) -> Iterator[BaseException]:
    """Yield *exc*, then its causes and contexts nearest first, each once.

    The openai SDK raises from inside httpx, so the status code or transport
    error is often one or two links down.
    """
    queue: deque[BaseException] = deque([exc])
    visited: list[BaseException] = []
    while queue:
        current = queue.popleft()
        if any(current is v for v in visited):
            continue
        visited.append(current)
        yield current
        for link in (current.__cause__, current.__context__):
            if link is not None:
                queue.append(link)


def extract_status_code(exc: BaseException) -> int | None:
    """Walk the exception chain to find an HTTP status code."""
    for e in iter_exception_chain(exc):
        for attr in ("status_code", "status"):
            value = getattr(e, attr, None)
            if isinstance(value, int) and 100 <= value <= 599:
                return value
        response = getattr(e, "response", None)
        value = getattr(response, "status_code", None)
        if isinstance(value, int) and 100 <= value <= 599:
            return value
    return None


def _header_seconds(headers: Any) -> float | None:
    for name in _MS_RETRY_HEADERS:
        raw = _get_header(headers, name)
        seconds = _parse_non_negative(raw)
        if seconds is not None:
            return seconds / 1000.0
    return _parse_non_negative(_get_header(headers, "Retry-After"))


def _get_header(headers: Any, name: str) -> Any:
    try:
        return headers.get(name)
    except Exception:
        return None


def _parse_non_negative(raw: Any) -> float | None:
    if not isinstance(raw, str) or not raw.strip():
        return None
    try:
        value = float(raw)
    except ValueError:
        return None
    return value if value >= 0 else None


def extract_retry_after_s(exc: BaseException) -> float | None:
    """Walk the exception chain to find a retry-after delay in seconds."""
    for e in iter_exception_chain(exc):
        value = getattr(e, "retry_after", None)
        if isinstance(value, (int, float)) and value >= 0:
            return float(value)

        response = getattr(e, "response", None)
        headers: Any = getattr(response, "headers", None)
        if headers is not None:
            seconds = _header_seconds(headers)
            if seconds is not None:
                return seconds
    return None


def _auth_hint(status_code: int | None) -> str | None:
    if status_code in AUTH_STATUS_CODES:
        return (
            "Check credentials/permissions (set AZURE_OPENAI_API_KEY, pass "
            "api_key=..., or grant your Entra ID identity access to the resource)."
        )
    if status_code == 404:
        return "Check that a deployment with this model name exists on the endpoint."
    return None


def wrap_vendor_error(
    exc: BaseException,
    *,
    phase: str,
    message: str | None = None,
    hint: str | None = None,
) -> APIError:
    """Map vendor SDK exceptions into APIError with stable retry metadata."""
    if isinstance(exc, asyncio.CancelledError):
        raise exc

    # Already wrapped: fill in missing context only.
    if isinstance(exc, APIError):
        if exc.provider is None:
            exc.provider = PROVIDER
        if exc.phase is None:
            exc.phase = phase
        if hint is not None and exc.hint is None:
            exc.hint = hint
        return exc

    status_code = extract_status_code(exc)
    retry_after_s = extract_retry_after_s(exc)

    retryable = retry_after_s is not None
    if isinstance(status_code, int) and status_code in RETRYABLE_STATUS_CODES:
        retryable = True
    else:
        for e in iter_exception_chain(exc):
            if isinstance(e, (httpx.TimeoutException, httpx.RequestError)):
                retryable = True
                break

    msg = message or f"{PROVIDER} {phase} failed"
    err_cls: type[APIError] = RateLimitError if status_code == 429 else APIError

    status_note = f" (status={status_code})" if isinstance(status_code, int) else ""
    cause = str(exc)
    return err_cls(
        f"{msg}{status_note}: {cause}" if cause else f"{msg}{status_note}",
        hint=hint if hint is not None else _auth_hint(status_code),
        retryable=retryable,
        status_code=status_code,
        retry_after_s=retry_after_s,
        provider=PROVIDER,
        phase=phase,
    )
