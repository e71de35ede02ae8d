"""Client configuration for pyvehicles."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyvehicles._constants import DEFAULT_BASE_URL
from pyvehicles.exceptions import VehiclesConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class CatalogConfig:
    """Client configuration.

    Parameters
    ----------
    base_url : str
        Origin of the catalog REST service. Endpoint paths such as
        ``/api/brands/`` are appended to it.
    credential_path : str or None
        File used to persist the auth token between runs. ``None`` keeps
        the token in memory only.
    request_timeout : float or None
        Total per-request timeout in seconds. ``None`` (the default)
        waits indefinitely.
    api_trace_enabled : bool
        Log redacted request and response bodies at DEBUG level.
    """

    base_url: str = DEFAULT_BASE_URL
    credential_path: str | None = None
    request_timeout: float | None = None
    api_trace_enabled: bool = False

    def __post_init__(self) -> None:
        if not self.base_url.startswith(("http://", "https://")):
            raise VehiclesConfigError(f"base_url must start with http:// or https://, got {self.base_url!r}")
        # Paths always carry their own leading slash.
        object.__setattr__(self, "base_url", self.base_url.rstrip("/"))
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise VehiclesConfigError(f"request_timeout must be positive, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> CatalogConfig:
        """Create configuration from ``VEHICLES_*`` environment variables.

        Explicit keyword arguments override environment values.
        """
        env = os.environ
        config_kwargs: dict[str, Any] = {}

        base_url = env.get("VEHICLES_BASE_URL")
        if base_url is not None:
            config_kwargs["base_url"] = base_url

        credential_path = env.get("VEHICLES_CREDENTIAL_PATH")
        if credential_path:
            config_kwargs["credential_path"] = credential_path

        timeout_env = env.get("VEHICLES_REQUEST_TIMEOUT")
        if timeout_env is not None and "request_timeout" not in overrides:
            try:
                config_kwargs["request_timeout"] = float(timeout_env)
            except ValueError as exc:
                raise VehiclesConfigError(f"VEHICLES_REQUEST_TIMEOUT is not a number: {timeout_env!r}") from exc

        if "api_trace_enabled" not in overrides:
            config_kwargs["api_trace_enabled"] = _env_bool(
                env.get("VEHICLES_API_TRACE_ENABLED"),
                False,
            )

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
