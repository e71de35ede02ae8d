"""Catalog collection endpoints.

Endpoints, for each of ``brands``, ``segments`` and ``vehicles``:
  - GET    /api/<collection>/        list
  - POST   /api/<collection>/        create
  - PUT    /api/<collection>/<id>/   update
  - DELETE /api/<collection>/<id>/   delete
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

from pydantic import TypeAdapter, ValidationError

from pyvehicles._constants import BRANDS_PATH, SEGMENTS_PATH, VEHICLES_PATH, detail_path
from pyvehicles._redact import redact_for_log
from pyvehicles._transport import Transport
from pyvehicles.exceptions import HttpError
from pyvehicles.models.catalog import Brand, Segment, Vehicle
from pyvehicles.state.commands import CatalogKind, EntityFields

_logger = logging.getLogger(__name__)

Entity = Brand | Segment | Vehicle


@dataclass(frozen=True)
class _Endpoint:
    path: str
    model: type[Brand] | type[Segment] | type[Vehicle]
    list_adapter: TypeAdapter[Any]


ENDPOINTS: dict[CatalogKind, _Endpoint] = {
    CatalogKind.BRAND: _Endpoint(BRANDS_PATH, Brand, TypeAdapter(list[Brand])),
    CatalogKind.SEGMENT: _Endpoint(SEGMENTS_PATH, Segment, TypeAdapter(list[Segment])),
    CatalogKind.VEHICLE: _Endpoint(VEHICLES_PATH, Vehicle, TypeAdapter(list[Vehicle])),
}


def _invalid(path: str, method: str, payload: Any, exc: ValidationError) -> HttpError:
    _logger.debug("Unexpected %s %s payload: %s", method, path, redact_for_log(payload))
    return HttpError(
        f"Unexpected response from {path}: {exc.error_count()} validation error(s)",
        method=method,
        path=path,
    )


async def fetch_all(transport: Transport, kind: CatalogKind) -> list[Entity]:
    """Fetch the whole collection, in server order."""
    endpoint = ENDPOINTS[kind]
    payload = await transport.request("GET", endpoint.path, authorized=True)
    try:
        items: list[Entity] = endpoint.list_adapter.validate_python(payload)
    except ValidationError as exc:
        raise _invalid(endpoint.path, "GET", payload, exc) from exc
    return items


async def create(transport: Transport, kind: CatalogKind, fields: EntityFields) -> Entity:
    """Create an entity and return it with its server-assigned id."""
    endpoint = ENDPOINTS[kind]
    payload = await transport.request("POST", endpoint.path, fields.to_payload(), authorized=True)
    try:
        return endpoint.model.model_validate(payload)
    except ValidationError as exc:
        raise _invalid(endpoint.path, "POST", payload, exc) from exc


async def update(transport: Transport, kind: CatalogKind, entity_id: int, fields: EntityFields) -> Entity:
    """Replace the fields of *entity_id* and return the server's copy."""
    path = detail_path(ENDPOINTS[kind].path, entity_id)
    payload = await transport.request("PUT", path, fields.to_payload(), authorized=True)
    try:
        return ENDPOINTS[kind].model.model_validate(payload)
    except ValidationError as exc:
        raise _invalid(path, "PUT", payload, exc) from exc


async def delete(transport: Transport, kind: CatalogKind, entity_id: int) -> None:
    path = detail_path(ENDPOINTS[kind].path, entity_id)
    await transport.request("DELETE", path, authorized=True)
