"""High-level async client for the vehicle catalog API."""

from __future__ import annotations

import logging
from typing import Any

import aiohttp

from pyvehicles._transport import HttpTransport, Transport
from pyvehicles.config import CatalogConfig
from pyvehicles.credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore
from pyvehicles.exceptions import VehiclesError
from pyvehicles.state.auth import AuthStore
from pyvehicles.state.catalog import CatalogStore

_logger = logging.getLogger(__name__)


def _default_credentials(config: CatalogConfig) -> CredentialStore:
    if config.credential_path:
        return FileCredentialStore(config.credential_path)
    return MemoryCredentialStore()


class CatalogClient:
    """Async client owning the transport and both stores.

    Usage::

        async with CatalogClient(config) as client:
            await client.auth.login("user", "secret")
            await client.catalog.fetch_all(CatalogKind.BRAND)
    """

    def __init__(
        self,
        config: CatalogConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        credentials: CredentialStore | None = None,
        transport: Transport | None = None,
    ) -> None:
        self._config = config or CatalogConfig()
        self._external_session = session is not None
        self._http_session = session
        self._credentials = credentials or _default_credentials(self._config)
        self._transport_override = transport
        self._transport: Transport | None = None
        self._auth: AuthStore | None = None
        self._catalog: CatalogStore | None = None

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> CatalogClient:
        if self._transport_override is not None:
            self._transport = self._transport_override
        else:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._transport = HttpTransport(self._config, self._credentials, self._http_session)
        self._auth = AuthStore(self._transport, self._credentials)
        self._catalog = CatalogStore(self._transport)
        _logger.debug("Catalog client opened for %s", self._config.base_url)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        self._transport = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> CatalogConfig:
        return self._config

    @property
    def credentials(self) -> CredentialStore:
        return self._credentials

    @property
    def auth(self) -> AuthStore:
        if self._auth is None:
            raise VehiclesError("Client not initialized. Use 'async with CatalogClient(...) as client:'")
        return self._auth

    @property
    def catalog(self) -> CatalogStore:
        if self._catalog is None:
            raise VehiclesError("Client not initialized. Use 'async with CatalogClient(...) as client:'")
        return self._catalog
