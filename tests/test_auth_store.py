from __future__ import annotations

from pathlib import Path

import pytest
from conftest import FakeCatalogBackend, FakeTransport

from pyvehicles.credentials import FileCredentialStore, MemoryCredentialStore
from pyvehicles.exceptions import CredentialStoreError, HttpError
from pyvehicles.models.auth import Profile
from pyvehicles.results import Fulfilled, Rejected
from pyvehicles.state.auth import AuthState, AuthStore


@pytest.mark.asyncio
async def test_login_stores_token_and_enables_profile(auth: AuthStore, credentials: MemoryCredentialStore) -> None:
    result = await auth.login("u", "p")

    assert isinstance(result, Fulfilled)
    assert result.value == "abc123"
    assert credentials.get() == "abc123"
    assert auth.is_authenticated
    # Login alone does not load the profile.
    assert auth.profile == Profile()

    profile = await auth.fetch_profile()
    assert isinstance(profile, Fulfilled)
    assert auth.profile.username == "u"
    assert auth.error.is_empty


@pytest.mark.asyncio
async def test_login_failure_records_error(
    auth: AuthStore, credentials: MemoryCredentialStore, backend: FakeCatalogBackend
) -> None:
    result = await auth.login("u", "wrong")

    assert isinstance(result, Rejected)
    assert result.error.status_code == 400
    assert credentials.get() is None
    assert auth.error.name == "HttpError"
    assert auth.error.message == "Request failed with status code 400"
    assert auth.error.code == "400"
    assert auth.error.stack

    profile = await auth.fetch_profile()
    assert isinstance(profile, Rejected)
    assert profile.error.status_code == 401
    assert backend.authorizations[-1] is None


@pytest.mark.asyncio
async def test_register_then_login(auth: AuthStore, backend: FakeCatalogBackend) -> None:
    registered = await auth.register("new", "secret")
    assert registered == Fulfilled(None)
    assert backend.users["new"] == "secret"

    assert (await auth.login("new", "secret")).ok
    assert (await auth.fetch_profile()).ok
    assert auth.profile.username == "new"


@pytest.mark.asyncio
async def test_register_existing_user_records_error(auth: AuthStore) -> None:
    result = await auth.register("u", "p")

    assert isinstance(result, Rejected)
    assert auth.error.code == "400"


@pytest.mark.asyncio
async def test_error_survives_later_success(auth: AuthStore) -> None:
    await auth.login("u", "wrong")
    first = auth.error

    assert (await auth.login("u", "p")).ok

    assert auth.error == first


@pytest.mark.asyncio
async def test_profile_failure_leaves_state_untouched(auth: AuthStore, backend: FakeCatalogBackend) -> None:
    await auth.login("u", "p")
    await auth.fetch_profile()
    before = auth.state

    backend.failures[("GET", "/api/profile/")] = 500
    result = await auth.fetch_profile()

    assert isinstance(result, Rejected)
    assert auth.state is before


@pytest.mark.asyncio
async def test_network_failure_has_empty_code(credentials: MemoryCredentialStore) -> None:
    class _Offline:
        async def request(self, method: str, path: str, body: object = None, *, authorized: bool = False) -> None:
            raise HttpError("Request to /api/auth/ failed: connection refused", method=method, path=path)

    store = AuthStore(_Offline(), credentials)
    result = await store.login("u", "p")

    assert isinstance(result, Rejected)
    assert store.error.code == ""
    assert "connection refused" in store.error.message


@pytest.mark.asyncio
async def test_malformed_token_reply_is_rejected(credentials: MemoryCredentialStore) -> None:
    class _NoToken:
        async def request(self, method: str, path: str, body: object = None, *, authorized: bool = False) -> dict:
            return {"detail": "ok"}

    store = AuthStore(_NoToken(), credentials)
    result = await store.login("u", "p")

    assert isinstance(result, Rejected)
    assert credentials.get() is None
    assert not store.error.is_empty


@pytest.mark.asyncio
async def test_logout_clears_credential_and_profile(auth: AuthStore, credentials: MemoryCredentialStore) -> None:
    await auth.login("u", "p")
    await auth.fetch_profile()

    auth.logout()

    assert credentials.get() is None
    assert not auth.is_authenticated
    assert auth.profile == Profile()


@pytest.mark.asyncio
async def test_subscribers_see_each_snapshot(auth: AuthStore) -> None:
    seen: list[AuthState] = []
    unsubscribe = auth.subscribe(seen.append)

    await auth.login("u", "wrong")
    await auth.login("u", "p")
    await auth.fetch_profile()
    unsubscribe()
    auth.logout()

    assert len(seen) == 2
    assert seen[-1].profile.username == "u"


@pytest.fixture
def corrupt_credentials(tmp_path: Path) -> FileCredentialStore:
    path = tmp_path / "credentials.json"
    path.write_text("{not json", encoding="utf-8")
    return FileCredentialStore(path)


@pytest.mark.asyncio
async def test_login_with_unwritable_credentials_is_rejected(
    backend: FakeCatalogBackend, corrupt_credentials: FileCredentialStore
) -> None:
    store = AuthStore(FakeTransport(backend, corrupt_credentials), corrupt_credentials)

    result = await store.login("u", "p")

    assert isinstance(result, Rejected)
    assert isinstance(result.error.__cause__, CredentialStoreError)
    assert ("POST", "/api/auth/") in backend.calls
    assert store.error.name == "HttpError"
    assert store.error.code == ""
    assert "CredentialStoreError" in store.error.message


@pytest.mark.asyncio
async def test_profile_with_unreadable_credentials_is_rejected(
    backend: FakeCatalogBackend, corrupt_credentials: FileCredentialStore
) -> None:
    store = AuthStore(FakeTransport(backend, corrupt_credentials), corrupt_credentials)

    result = await store.fetch_profile()

    assert isinstance(result, Rejected)
    assert store.profile == Profile()
    assert store.error.is_empty
