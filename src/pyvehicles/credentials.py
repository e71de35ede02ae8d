"""Credential persistence.

The auth token issued by ``/api/auth/`` is kept in a :class:`CredentialStore`
and read by the transport for every authorized request. Only a successful
login writes it; logout clears it.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Protocol

from pyvehicles._constants import TOKEN_KEY
from pyvehicles.exceptions import CredentialStoreError

_logger = logging.getLogger(__name__)


class CredentialStore(Protocol):
    """Structural interface for token persistence backends."""

    def get(self) -> str | None: ...

    def set(self, token: str) -> None: ...

    def clear(self) -> None: ...


class MemoryCredentialStore:
    """Process-local token storage."""

    def __init__(self, token: str | None = None) -> None:
        self._token = token or None

    def get(self) -> str | None:
        return self._token

    def set(self, token: str) -> None:
        self._token = token

    def clear(self) -> None:
        self._token = None


class FileCredentialStore:
    """Durable token storage in a small JSON key/value file.

    The token lives under the fixed key ``"token"``; other keys already in
    the file are preserved on write. A missing file means "no token".
    """

    def __init__(self, path: str | Path) -> None:
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def _load(self) -> dict[str, object]:
        if not self._path.exists():
            return {}
        try:
            data = json.loads(self._path.read_text(encoding="utf-8") or "{}")
        except (OSError, json.JSONDecodeError) as exc:
            raise CredentialStoreError(f"Cannot read credential file {self._path}: {exc}") from exc
        if not isinstance(data, dict):
            raise CredentialStoreError(f"Credential file {self._path} does not contain a JSON object")
        return data

    def _save(self, data: dict[str, object]) -> None:
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            self._path.write_text(json.dumps(data), encoding="utf-8")
        except OSError as exc:
            raise CredentialStoreError(f"Cannot write credential file {self._path}: {exc}") from exc

    def get(self) -> str | None:
        value = self._load().get(TOKEN_KEY)
        return value if isinstance(value, str) and value else None

    def set(self, token: str) -> None:
        data = self._load()
        data[TOKEN_KEY] = token
        self._save(data)
        _logger.debug("Stored credential in %s", self._path)

    def clear(self) -> None:
        data = self._load()
        if data.pop(TOKEN_KEY, None) is not None:
            self._save(data)
            _logger.debug("Cleared credential in %s", self._path)


__all__ = [
    "CredentialStore",
    "FileCredentialStore",
    "MemoryCredentialStore",
]
