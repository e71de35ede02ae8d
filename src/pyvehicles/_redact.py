"""Helpers for safe debug logging.

Login and registration bodies carry passwords, login replies carry the
auth token and authorized requests carry it again in the
``authorization: token <key>`` header. These helpers mask all three
before request and response data reaches DEBUG logs, while keeping the
catalog payloads (brand, segment and vehicle fields) readable.
"""

from __future__ import annotations

import re
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from pydantic import BaseModel

REDACTED = "<redacted>"

_SECRET_KEYS: frozenset[str] = frozenset({"password", "token", "cookie"})

# "token 9944b09..." (DRF TokenAuthentication) or "Bearer ...".
_AUTH_VALUE = re.compile(r"\b(token|bearer)\s+\S+", re.IGNORECASE)


def _mask_auth_value(value: str) -> str:
    """Keep the scheme of an authorization value, hide the credential."""
    masked = _AUTH_VALUE.sub(lambda m: f"{m.group(1)} {REDACTED}", value)
    return masked if masked != value else REDACTED


def redact_headers(headers: Mapping[str, str]) -> dict[str, str]:
    """Return *headers* with the authorization credential and cookies masked.

    >>> redact_headers({"authorization": "token abc123", "accept": "application/json"})
    {'authorization': 'token <redacted>', 'accept': 'application/json'}
    """
    redacted: dict[str, str] = {}
    for key, value in headers.items():
        lowered = key.lower()
        if lowered == "authorization":
            redacted[key] = _mask_auth_value(value)
        elif lowered in _SECRET_KEYS or lowered == "set-cookie":
            redacted[key] = REDACTED
        else:
            redacted[key] = value
    return redacted


def redact_for_log(value: Any, *, max_string: int = 512) -> Any:
    """Return a log-safe copy of a request or response body.

    Models are dumped with their wire names first. Secret keys are
    masked, ``token <key>`` fragments inside any string are masked and
    long strings are truncated.
    """
    if isinstance(value, BaseModel):
        value = value.model_dump(mode="json", by_alias=True)

    if isinstance(value, Mapping):
        redacted: dict[str, Any] = {}
        for key, item in value.items():
            name = str(key)
            lowered = name.lower()
            if lowered == "authorization" and isinstance(item, str):
                redacted[name] = _mask_auth_value(item)
            elif lowered in _SECRET_KEYS:
                redacted[name] = REDACTED
            else:
                redacted[name] = redact_for_log(item, max_string=max_string)
        return redacted

    if isinstance(value, (list, tuple)):
        return [redact_for_log(item, max_string=max_string) for item in value]

    if isinstance(value, str):
        value = _AUTH_VALUE.sub(lambda m: f"{m.group(1)} {REDACTED}", value)
        if len(value) > max_string:
            return f"{value[:max_string]}…<truncated>"
        return value

    if isinstance(value, Decimal):
        return str(value)

    if value is None or isinstance(value, (bool, int, float)):
        return value

    return repr(value)
