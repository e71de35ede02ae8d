"""Catalog commands.

Every catalog mutation is expressed as one of four commands, each bound
to a :class:`CatalogKind`. Only :class:`~pyvehicles.state.catalog.CatalogStore`
executes them.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import TypeAlias

from pyvehicles.models.requests import BrandFields, SegmentFields, VehicleFields


class CatalogKind(StrEnum):
    BRAND = "brand"
    SEGMENT = "segment"
    VEHICLE = "vehicle"


class ActionKind(StrEnum):
    FETCH = "fetch"
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class ActionStatus(StrEnum):
    IDLE = "idle"
    PENDING = "pending"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


EntityFields: TypeAlias = BrandFields | SegmentFields | VehicleFields

_FIELDS_FOR_KIND: dict[CatalogKind, type[EntityFields]] = {
    CatalogKind.BRAND: BrandFields,
    CatalogKind.SEGMENT: SegmentFields,
    CatalogKind.VEHICLE: VehicleFields,
}


def _check_fields(kind: CatalogKind, fields: EntityFields) -> None:
    expected = _FIELDS_FOR_KIND[kind]
    if not isinstance(fields, expected):
        raise TypeError(f"{kind} commands take {expected.__name__}, got {type(fields).__name__}")


@dataclass(frozen=True, slots=True)
class FetchAll:
    kind: CatalogKind

    @property
    def action(self) -> ActionKind:
        return ActionKind.FETCH


@dataclass(frozen=True, slots=True)
class Create:
    kind: CatalogKind
    fields: EntityFields

    def __post_init__(self) -> None:
        _check_fields(self.kind, self.fields)

    @property
    def action(self) -> ActionKind:
        return ActionKind.CREATE


@dataclass(frozen=True, slots=True)
class Update:
    kind: CatalogKind
    entity_id: int
    fields: EntityFields

    def __post_init__(self) -> None:
        _check_fields(self.kind, self.fields)

    @property
    def action(self) -> ActionKind:
        return ActionKind.UPDATE


@dataclass(frozen=True, slots=True)
class Delete:
    kind: CatalogKind
    entity_id: int

    @property
    def action(self) -> ActionKind:
        return ActionKind.DELETE


CatalogCommand: TypeAlias = FetchAll | Create | Update | Delete


def fields_for(kind: CatalogKind, **values: object) -> EntityFields:
    """Validate *values* into the field model for *kind*."""
    return _FIELDS_FOR_KIND[kind].model_validate(values)
