"""Account endpoints.

Endpoints:
  - POST /api/auth/     login, returns ``{"token": ...}``
  - POST /api/create/   register a new account
  - GET  /api/profile/  profile of the token's owner (authorized)
"""

from __future__ import annotations

import logging
from typing import Any

from pydantic import ValidationError

from pyvehicles._constants import AUTH_PATH, PROFILE_PATH, REGISTER_PATH
from pyvehicles._redact import redact_for_log
from pyvehicles._transport import Transport
from pyvehicles.exceptions import HttpError
from pyvehicles.models.auth import AuthToken, Credentials, Profile

_logger = logging.getLogger(__name__)


def _parse(model: type[Any], payload: Any, *, method: str, path: str) -> Any:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        _logger.debug("Unexpected %s payload: %s", path, redact_for_log(payload))
        raise HttpError(
            f"Unexpected response from {path}: {exc.error_count()} validation error(s)",
            method=method,
            path=path,
        ) from exc


async def login(transport: Transport, credentials: Credentials) -> AuthToken:
    """Exchange username/password for an auth token.

    Raises
    ------
    HttpError
        On a non-2xx reply, a network failure, or a reply without a token.
    """
    payload = await transport.request("POST", AUTH_PATH, credentials.model_dump())
    token: AuthToken = _parse(AuthToken, payload, method="POST", path=AUTH_PATH)
    return token


async def register(transport: Transport, credentials: Credentials) -> None:
    """Create a new account. Does not log in."""
    await transport.request("POST", REGISTER_PATH, credentials.model_dump())


async def fetch_profile(transport: Transport) -> Profile:
    payload = await transport.request("GET", PROFILE_PATH, authorized=True)
    profile: Profile = _parse(Profile, payload, method="GET", path=PROFILE_PATH)
    return profile
