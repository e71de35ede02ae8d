"""Custom exception hierarchy for pyvehicles."""

from __future__ import annotations


class VehiclesError(Exception):
    """Base exception for all pyvehicles errors."""


class VehiclesConfigError(VehiclesError):
    """Invalid or missing configuration."""


class CredentialStoreError(VehiclesError):
    """Persisted credentials could not be read or written."""


class HttpError(VehiclesError):
    """HTTP-level failure (network, non-2xx, invalid JSON).

    ``status_code`` is ``None`` when no response was received at all.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        method: str = "",
        path: str = "",
    ) -> None:
        self.status_code = status_code
        self.method = method
        self.path = path
        self.message = message
        super().__init__(message)

    @classmethod
    def for_status(cls, status_code: int, *, method: str = "", path: str = "") -> HttpError:
        """Build the error reported for a non-2xx response."""
        return cls(
            f"Request failed with status code {status_code}",
            status_code=status_code,
            method=method,
            path=path,
        )

    @classmethod
    def wrap(cls, exc: VehiclesError) -> HttpError:
        """Return *exc* as an :class:`HttpError`, chaining non-HTTP library errors.

        Stores report every failure through ``HttpError`` so callers have one
        error shape; a credential file that cannot be read ends up here with
        ``status_code=None``.
        """
        if isinstance(exc, HttpError):
            return exc
        error = cls(f"{type(exc).__name__}: {exc}")
        error.__cause__ = exc
        return error
