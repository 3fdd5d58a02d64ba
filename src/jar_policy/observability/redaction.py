from __future__ import annotations

import re
from collections.abc import Mapping
from typing import Any

REDACTED = "***REDACTED***"

SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "secret",
        "token",
        "private_key",
        "api_key",
        "password",
        "mnemonic",
    }
)

# Keys that name a jar's gating token or token address are public chain data.
PUBLIC_TOKEN_KEYS: frozenset[str] = frozenset(
    {
        "token_address",
        "token_symbol",
        "gating_token_address",
        "gating_token_amount",
    }
)

_URL_CREDENTIALS = re.compile(r"(?P<scheme>[a-z][a-z0-9+.-]*://)[^/@\s]+@", re.IGNORECASE)
_URL_KEY_SEGMENT = re.compile(r"/(?:v[0-9]+/)?[0-9a-f]{32,}(?=/|$)", re.IGNORECASE)


def _is_sensitive_key(key: str) -> bool:
    normalized = key.lower()
    if normalized in PUBLIC_TOKEN_KEYS:
        return False
    return any(sensitive in normalized for sensitive in SENSITIVE_KEYS)


def redact_url(url: str) -> str:
    """Mask userinfo and path-embedded API keys in an RPC endpoint URL."""
    masked = _URL_CREDENTIALS.sub(lambda match: f"{match.group('scheme')}{REDACTED}@", url)
    return _URL_KEY_SEGMENT.sub(f"/{REDACTED}", masked)


def redact_sensitive(data: Any) -> Any:
    if isinstance(data, Mapping):
        redacted: dict[Any, Any] = {}
        for key, value in data.items():
            if _is_sensitive_key(str(key)):
                redacted[key] = REDACTED
            elif str(key).lower().endswith("_url") and isinstance(value, str):
                redacted[key] = redact_url(value)
            else:
                redacted[key] = redact_sensitive(value)
        return redacted
    if isinstance(data, list):
        return [redact_sensitive(item) for item in data]
    return data
