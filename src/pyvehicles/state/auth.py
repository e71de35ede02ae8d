"""Authentication store: current profile and last auth failure."""

from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import BaseModel, ConfigDict, Field

from pyvehicles._api import auth as _auth_api
from pyvehicles._transport import Transport
from pyvehicles.credentials import CredentialStore
from pyvehicles.exceptions import HttpError, VehiclesError
from pyvehicles.models.auth import AuthError, Credentials, Profile
from pyvehicles.results import Fulfilled, Rejected, Result

_logger = logging.getLogger(__name__)

Listener = Callable[["AuthState"], None]


class AuthState(BaseModel):
    """Immutable auth snapshot."""

    model_config = ConfigDict(frozen=True)

    profile: Profile = Field(default_factory=Profile)
    error: AuthError = Field(default_factory=AuthError)


class AuthStore:
    """Login, registration and profile lookup.

    ``error`` is replaced on every failed login or registration and is
    never cleared by a later success; presenters decide what to show.
    """

    def __init__(self, transport: Transport, credentials: CredentialStore) -> None:
        self._transport = transport
        self._credentials = credentials
        self._state = AuthState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> AuthState:
        return self._state

    @property
    def profile(self) -> Profile:
        return self._state.profile

    @property
    def error(self) -> AuthError:
        return self._state.error

    @property
    def is_authenticated(self) -> bool:
        """Whether a credential is stored (it may still be rejected by the server)."""
        return self._credentials.get() is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, state: AuthState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.debug("Auth listener failed", exc_info=True)

    def _record_error(self, exc: HttpError) -> None:
        self._commit(self._state.model_copy(update={"error": AuthError.from_exception(exc)}))

    async def login(self, username: str, password: str) -> Result[str]:
        """Obtain a token and store it for authorized requests.

        Does not fetch the profile.
        """
        try:
            token = await _auth_api.login(self._transport, Credentials(username=username, password=password))
            self._credentials.set(token.token)
        except VehiclesError as exc:
            error = HttpError.wrap(exc)
            _logger.warning("Login failed for %r: %s", username, error)
            self._record_error(error)
            return Rejected(error)
        _logger.info("Logged in as %r", username)
        return Fulfilled(token.token)

    async def register(self, username: str, password: str) -> Result[None]:
        """Create an account. Callers log in separately on success."""
        try:
            await _auth_api.register(self._transport, Credentials(username=username, password=password))
        except VehiclesError as exc:
            error = HttpError.wrap(exc)
            _logger.warning("Registration failed for %r: %s", username, error)
            self._record_error(error)
            return Rejected(error)
        _logger.info("Registered %r", username)
        return Fulfilled(None)

    async def fetch_profile(self) -> Result[Profile]:
        """Load the profile of the stored credential's owner.

        Failures leave both ``profile`` and ``error`` untouched.
        """
        try:
            profile = await _auth_api.fetch_profile(self._transport)
        except VehiclesError as exc:
            error = HttpError.wrap(exc)
            _logger.debug("Profile fetch failed: %s", error)
            return Rejected(error)
        self._commit(self._state.model_copy(update={"profile": profile}))
        return Fulfilled(profile)

    def logout(self) -> None:
        """Forget the stored credential and the loaded profile."""
        self._credentials.clear()
        self._commit(self._state.model_copy(update={"profile": Profile()}))
        _logger.info("Logged out")
