"""HTTP status constants shared by vendor error mapping."""

from __future__ import annotations

RETRYABLE_STATUS_CODES: frozenset[int] = frozenset({408, 409, 429, 500, 502, 503, 504})
AUTH_STATUS_CODES: frozenset[int] = frozenset({401, 403})
