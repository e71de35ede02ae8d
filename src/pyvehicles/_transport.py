"""HTTP transport with JSON encoding and token authorization."""

from __future__ import annotations

import asyncio
import json
import logging
from typing import Any, Protocol

import aiohttp

from pyvehicles._constants import USER_AGENT
from pyvehicles._redact import redact_for_log, redact_headers
from pyvehicles.config import CatalogConfig
from pyvehicles.credentials import CredentialStore
from pyvehicles.exceptions import HttpError

_logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Structural transport interface used by endpoint modules and stores.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpTransport`) concrete.
    """

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        authorized: bool = False,
    ) -> Any: ...


class HttpTransport:
    """aiohttp-backed transport for the catalog REST service.

    Stateless apart from reading the current credential on each
    authorized request.
    """

    def __init__(
        self,
        config: CatalogConfig,
        credentials: CredentialStore,
        http_session: aiohttp.ClientSession,
    ) -> None:
        self._config = config
        self._credentials = credentials
        self._http = http_session
        self._timeout = aiohttp.ClientTimeout(total=config.request_timeout)

    def _build_headers(self, *, has_body: bool, authorized: bool) -> dict[str, str]:
        headers: dict[str, str] = {
            "accept": "application/json",
            "user-agent": USER_AGENT,
        }
        if has_body:
            headers["content-type"] = "application/json"
        if authorized:
            token = self._credentials.get()
            if token:
                headers["authorization"] = f"token {token}"
            else:
                _logger.debug("Authorized request without a stored credential")
        return headers

    async def request(
        self,
        method: str,
        path: str,
        body: Any = None,
        *,
        authorized: bool = False,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        Returns ``None`` for an empty 2xx body. Raises :class:`HttpError`
        for non-2xx statuses, network failures and undecodable bodies.
        """
        method = method.upper()
        url = f"{self._config.base_url}{path}"
        headers = self._build_headers(has_body=body is not None, authorized=authorized)
        data = json.dumps(body) if body is not None else None

        _logger.debug("%s %s", method, url)
        if self._config.api_trace_enabled:
            _logger.debug(
                "Request %s %s headers=%s body=%s",
                method,
                path,
                redact_headers(headers),
                redact_for_log(body),
            )

        try:
            async with self._http.request(method, url, data=data, headers=headers, timeout=self._timeout) as resp:
                status = resp.status
                raw = await resp.read()
        except aiohttp.ClientError as exc:
            raise HttpError(
                f"Request to {path} failed: {exc}",
                method=method,
                path=path,
            ) from exc
        except asyncio.TimeoutError as exc:
            raise HttpError(
                f"Request to {path} timed out",
                method=method,
                path=path,
            ) from exc

        if not 200 <= status < 300:
            _logger.debug("%s %s -> HTTP %d: %r", method, path, status, raw[:200])
            raise HttpError.for_status(status, method=method, path=path)

        if not raw.strip():
            return None

        # Body must be UTF-8 encoded JSON.
        try:
            result = json.loads(raw.decode("utf-8"))
        except ValueError as exc:
            raise HttpError(
                f"Invalid JSON from {path}: {raw[:200]!r}",
                status_code=status,
                method=method,
                path=path,
            ) from exc

        if self._config.api_trace_enabled:
            _logger.debug("Response %s %s status=%d body=%s", method, path, status, redact_for_log(result))
        return result
