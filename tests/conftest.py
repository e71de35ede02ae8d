from __future__ import annotations

import asyncio
import copy
import re
from dataclasses import dataclass, field
from typing import Any

import pytest
from aiohttp import web

from pyvehicles.credentials import CredentialStore, MemoryCredentialStore
from pyvehicles.exceptions import HttpError
from pyvehicles.state.auth import AuthStore
from pyvehicles.state.catalog import CatalogStore

_DETAIL = re.compile(r"^/api/(brands|segments|vehicles)/(\d+)/$")
_LIST = re.compile(r"^/api/(brands|segments|vehicles)/$")


def _default_brands() -> list[dict[str, Any]]:
    return [{"id": 1, "brand_name": "Audi"}, {"id": 2, "brand_name": "Tesla"}]


def _default_segments() -> list[dict[str, Any]]:
    return [{"id": 1, "segment_name": "SUV"}, {"id": 2, "segment_name": "EV"}]


def _default_vehicles() -> list[dict[str, Any]]:
    return [
        {
            "id": 1,
            "vehicle_name": "SQ7",
            "release_year": 2019,
            "price": "300.12",
            "segment": 1,
            "brand": 1,
            "segment_name": "SUV",
            "brand_name": "Audi",
        },
        {
            "id": 2,
            "vehicle_name": "MODEL S",
            "release_year": 2020,
            "price": "400.12",
            "segment": 2,
            "brand": 2,
            "segment_name": "EV",
            "brand_name": "Tesla",
        },
    ]


@dataclass
class FakeCatalogBackend:
    """In-memory stand-in for the catalog REST service.

    ``failures`` forces a status for a ``(method, path)`` pair. ``gates``
    holds requests to a ``(method, path)`` pair until the event is set.
    """

    brands: list[dict[str, Any]] = field(default_factory=_default_brands)
    segments: list[dict[str, Any]] = field(default_factory=_default_segments)
    vehicles: list[dict[str, Any]] = field(default_factory=_default_vehicles)
    users: dict[str, str] = field(default_factory=lambda: {"u": "p"})
    token: str = "abc123"
    failures: dict[tuple[str, str], int] = field(default_factory=dict)
    gates: dict[tuple[str, str], asyncio.Event] = field(default_factory=dict)
    calls: list[tuple[str, str]] = field(default_factory=list)
    authorizations: list[str | None] = field(default_factory=list)
    _logged_in: str = "u"

    def _collection(self, name: str) -> list[dict[str, Any]]:
        rows: list[dict[str, Any]] = getattr(self, name)
        return rows

    def _next_id(self, rows: list[dict[str, Any]]) -> int:
        return max((row["id"] for row in rows), default=0) + 1

    def _name_of(self, rows: list[dict[str, Any]], key: str, entity_id: int) -> str:
        for row in rows:
            if row["id"] == entity_id:
                return str(row[key])
        return ""

    def _vehicle_row(self, entity_id: int, body: dict[str, Any]) -> dict[str, Any]:
        return {
            "id": entity_id,
            "vehicle_name": body["vehicle_name"],
            "release_year": body["release_year"],
            "price": body["price"],
            "segment": body["segment"],
            "brand": body["brand"],
            "segment_name": self._name_of(self.segments, "segment_name", body["segment"]),
            "brand_name": self._name_of(self.brands, "brand_name", body["brand"]),
        }

    def _row(self, name: str, entity_id: int, body: dict[str, Any]) -> dict[str, Any]:
        if name == "vehicles":
            return self._vehicle_row(entity_id, body)
        key = "brand_name" if name == "brands" else "segment_name"
        return {"id": entity_id, key: body[key]}

    def handle(self, method: str, path: str, body: Any, authorization: str | None) -> tuple[int, Any]:
        self.calls.append((method, path))
        self.authorizations.append(authorization)

        forced = self.failures.get((method, path))
        if forced is not None:
            return forced, None

        if path == "/api/auth/" and method == "POST":
            if self.users.get(body.get("username")) == body.get("password"):
                self._logged_in = body["username"]
                return 200, {"token": self.token}
            return 400, {"non_field_errors": ["Unable to log in with provided credentials."]}

        if path == "/api/create/" and method == "POST":
            if body.get("username") in self.users:
                return 400, {"username": ["A user with that username already exists."]}
            self.users[body["username"]] = body["password"]
            return 201, {"username": body["username"]}

        if path == "/api/profile/" and method == "GET":
            if authorization != f"token {self.token}":
                return 401, {"detail": "Authentication credentials were not provided."}
            return 200, {"id": 1, "username": self._logged_in}

        match = _LIST.match(path)
        if match:
            name = match.group(1)
            rows = self._collection(name)
            if method == "GET":
                return 200, copy.deepcopy(rows)
            if method == "POST":
                row = self._row(name, self._next_id(rows), body)
                rows.append(row)
                return 201, copy.deepcopy(row)
            return 405, None

        match = _DETAIL.match(path)
        if match:
            name, entity_id = match.group(1), int(match.group(2))
            rows = self._collection(name)
            index = next((i for i, row in enumerate(rows) if row["id"] == entity_id), None)
            if index is None:
                return 404, {"detail": "Not found."}
            if method == "PUT":
                rows[index] = self._row(name, entity_id, body)
                return 200, copy.deepcopy(rows[index])
            if method == "DELETE":
                del rows[index]
                if name in ("brands", "segments"):
                    key = "brand" if name == "brands" else "segment"
                    self.vehicles = [v for v in self.vehicles if v[key] != entity_id]
                return 200, None
            return 405, None

        return 404, None

    async def wait_gate(self, method: str, path: str) -> None:
        gate = self.gates.get((method.upper(), path))
        if gate is not None:
            await gate.wait()


class FakeTransport:
    """Transport double that routes requests to a FakeCatalogBackend."""

    def __init__(self, backend: FakeCatalogBackend, credentials: CredentialStore) -> None:
        self._backend = backend
        self._credentials = credentials

    async def request(self, method: str, path: str, body: Any = None, *, authorized: bool = False) -> Any:
        await asyncio.sleep(0)
        await self._backend.wait_gate(method, path)
        token = self._credentials.get() if authorized else None
        authorization = f"token {token}" if token else None
        status, payload = self._backend.handle(method.upper(), path, copy.deepcopy(body), authorization)
        if not 200 <= status < 300:
            raise HttpError.for_status(status, method=method, path=path)
        return copy.deepcopy(payload)


def make_backend_app(backend: FakeCatalogBackend) -> web.Application:
    """Serve *backend* over HTTP for transport and client tests."""

    async def _handler(request: web.Request) -> web.StreamResponse:
        await backend.wait_gate(request.method, request.path)
        body = await request.json() if request.can_read_body else None
        status, payload = backend.handle(request.method, request.path, body, request.headers.get("Authorization"))
        if payload is None:
            return web.Response(status=status)
        return web.json_response(payload, status=status)

    app = web.Application()
    app.router.add_route("*", "/{tail:.*}", _handler)
    return app


@pytest.fixture
def backend() -> FakeCatalogBackend:
    return FakeCatalogBackend()


@pytest.fixture
def credentials() -> MemoryCredentialStore:
    return MemoryCredentialStore()


@pytest.fixture
def transport(backend: FakeCatalogBackend, credentials: MemoryCredentialStore) -> FakeTransport:
    return FakeTransport(backend, credentials)


@pytest.fixture
def catalog(transport: FakeTransport) -> CatalogStore:
    return CatalogStore(transport)


@pytest.fixture
def auth(transport: FakeTransport, credentials: MemoryCredentialStore) -> AuthStore:
    return AuthStore(transport, credentials)
