"""Catalog store: brands, segments and vehicles.

This is the only component allowed to change the three collections. Every
change replaces the whole :class:`CatalogState` snapshot in one
assignment, so subscribers never observe a half-applied update. In
particular a brand or segment delete and the removal of the vehicles that
reference it are one snapshot.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterable
from typing import Any, Generic, TypeVar, assert_never

from pydantic import BaseModel, ConfigDict, Field

from pyvehicles._api import catalog as _catalog_api
from pyvehicles._transport import Transport
from pyvehicles.exceptions import HttpError, VehiclesError
from pyvehicles.models.catalog import Brand, Segment, Vehicle
from pyvehicles.results import Fulfilled, Rejected, Result
from pyvehicles.state.commands import (
    ActionKind,
    ActionStatus,
    CatalogCommand,
    CatalogKind,
    Create,
    Delete,
    EntityFields,
    FetchAll,
    Update,
    fields_for,
)

_logger = logging.getLogger(__name__)

E = TypeVar("E", bound=Brand | Segment | Vehicle)

Listener = Callable[["CatalogState"], None]


class CatalogError(BaseModel):
    """Failure of the last operation on one collection."""

    model_config = ConfigDict(frozen=True)

    action: ActionKind
    message: str
    status_code: int | None = None


class CollectionState(BaseModel, Generic[E]):
    """One ordered collection plus the outcome of its last operation."""

    model_config = ConfigDict(frozen=True)

    items: tuple[E, ...] = ()
    status: ActionStatus = ActionStatus.IDLE
    action: ActionKind | None = None
    error: CatalogError | None = None

    def get(self, entity_id: int) -> E | None:
        for item in self.items:
            if item.id == entity_id:
                return item
        return None

    @property
    def ids(self) -> list[int]:
        return [item.id for item in self.items]


class CatalogState(BaseModel):
    """Immutable snapshot of the whole catalog."""

    model_config = ConfigDict(frozen=True)

    brands: CollectionState[Brand] = Field(default_factory=CollectionState[Brand])
    segments: CollectionState[Segment] = Field(default_factory=CollectionState[Segment])
    vehicles: CollectionState[Vehicle] = Field(default_factory=CollectionState[Vehicle])
    #: Parents deleted through this store. Vehicles referencing them are
    #: never admitted again, whatever order replies arrive in.
    removed_brand_ids: frozenset[int] = frozenset()
    removed_segment_ids: frozenset[int] = frozenset()

    def collection(self, kind: CatalogKind) -> CollectionState[Any]:
        match kind:
            case CatalogKind.BRAND:
                return self.brands
            case CatalogKind.SEGMENT:
                return self.segments
            case CatalogKind.VEHICLE:
                return self.vehicles
            case _:
                assert_never(kind)

    def with_collection(self, kind: CatalogKind, collection: CollectionState[Any]) -> CatalogState:
        return self.model_copy(update={_SLOTS[kind]: collection})


_SLOTS: dict[CatalogKind, str] = {
    CatalogKind.BRAND: "brands",
    CatalogKind.SEGMENT: "segments",
    CatalogKind.VEHICLE: "vehicles",
}

# Vehicle attribute holding the foreign key to each parent collection, and
# the snapshot field remembering deleted parents.
_CASCADE_KEYS: dict[CatalogKind, tuple[str, str]] = {
    CatalogKind.BRAND: ("brand_id", "removed_brand_ids"),
    CatalogKind.SEGMENT: ("segment_id", "removed_segment_ids"),
}


# ------------------------------------------------------------------
# Pure collection transitions
# ------------------------------------------------------------------


def _succeeded(collection: CollectionState[Any], action: ActionKind, items: Iterable[Any]) -> CollectionState[Any]:
    return collection.model_copy(
        update={
            "items": tuple(items),
            "status": ActionStatus.SUCCEEDED,
            "action": action,
            "error": None,
        }
    )


def replace_all(collection: CollectionState[Any], items: Iterable[Any]) -> CollectionState[Any]:
    """Full replace with the server's ordered result."""
    return _succeeded(collection, ActionKind.FETCH, items)


def append(collection: CollectionState[Any], item: Any) -> CollectionState[Any]:
    return _succeeded(collection, ActionKind.CREATE, (*collection.items, item))


def replace_in_place(collection: CollectionState[Any], item: Any) -> CollectionState[Any]:
    """Swap the element with ``item.id`` keeping its position.

    An id that is no longer present (deleted meanwhile) leaves the items
    unchanged.
    """
    return _succeeded(
        collection,
        ActionKind.UPDATE,
        (item if existing.id == item.id else existing for existing in collection.items),
    )


def remove(collection: CollectionState[Any], entity_id: int) -> CollectionState[Any]:
    return _succeeded(
        collection,
        ActionKind.DELETE,
        (item for item in collection.items if item.id != entity_id),
    )


def cascade_vehicles(
    vehicles: CollectionState[Vehicle],
    kind: CatalogKind,
    entity_id: int,
) -> CollectionState[Vehicle]:
    """Drop vehicles referencing a deleted brand or segment.

    Only ``items`` change; the vehicle collection's own status, action and
    error describe the last vehicle operation and stay as they are.
    """
    if kind not in _CASCADE_KEYS:
        return vehicles
    key, _ = _CASCADE_KEYS[kind]
    kept = tuple(v for v in vehicles.items if getattr(v, key) != entity_id)
    if len(kept) == len(vehicles.items):
        return vehicles
    return vehicles.model_copy(update={"items": kept})


def is_orphaned(state: CatalogState, vehicle: Vehicle) -> bool:
    """Whether *vehicle* references a brand or segment deleted through the store."""
    return any(getattr(vehicle, key) in getattr(state, removed) for key, removed in _CASCADE_KEYS.values())


def admit(state: CatalogState, kind: CatalogKind, items: Iterable[Any]) -> list[Any]:
    """Filter server items before committing them to *kind*.

    A vehicle reply may resolve after its brand or segment was deleted;
    such vehicles are dropped.
    """
    if kind is not CatalogKind.VEHICLE:
        return list(items)
    admitted: list[Any] = []
    for item in items:
        if is_orphaned(state, item):
            _logger.debug("Dropping vehicle %s referencing a deleted brand or segment", item.id)
        else:
            admitted.append(item)
    return admitted


def apply_delete(state: CatalogState, kind: CatalogKind, entity_id: int) -> CatalogState:
    """Remove *entity_id* from *kind* and cascade in a single new snapshot."""
    updated = state.with_collection(kind, remove(state.collection(kind), entity_id))
    if kind not in _CASCADE_KEYS:
        return updated
    _, removed = _CASCADE_KEYS[kind]
    return updated.model_copy(
        update={
            "vehicles": cascade_vehicles(updated.vehicles, kind, entity_id),
            removed: getattr(updated, removed) | {entity_id},
        }
    )


# ------------------------------------------------------------------
# Store
# ------------------------------------------------------------------


class CatalogStore:
    """Async store for the three catalog collections.

    Usage::

        store = CatalogStore(transport)
        await store.fetch_all(CatalogKind.BRAND)
        await store.create(CatalogKind.BRAND, name="Audi")
        await store.delete(CatalogKind.BRAND, 3)
    """

    def __init__(self, transport: Transport) -> None:
        self._transport = transport
        self._state = CatalogState()
        self._listeners: list[Listener] = []

    @property
    def state(self) -> CatalogState:
        return self._state

    def collection(self, kind: CatalogKind) -> CollectionState[Any]:
        return self._state.collection(kind)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* with every new snapshot. Returns an unsubscribe function."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    def _commit(self, state: CatalogState) -> None:
        self._state = state
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception:
                _logger.debug("Catalog listener failed", exc_info=True)

    def _update_collection(self, kind: CatalogKind, **changes: Any) -> None:
        current = self._state.collection(kind)
        self._commit(self._state.with_collection(kind, current.model_copy(update=changes)))

    # ------------------------------------------------------------------
    # Command execution
    # ------------------------------------------------------------------

    async def dispatch(self, command: CatalogCommand) -> Result[Any]:
        """Execute *command* against the server and apply its outcome.

        Library failures (transport, credentials) are recorded on the
        command's collection and returned as :class:`Rejected`. Anything
        else still settles the collection as failed before propagating.
        """
        kind = command.kind
        action = command.action
        self._update_collection(kind, status=ActionStatus.PENDING, action=action)

        try:
            result = await self._execute(command)
        except VehiclesError as exc:
            error = HttpError.wrap(exc)
            _logger.warning("%s %s failed: %s", action, kind, error)
            self._fail(kind, action, error.message, error.status_code)
            return Rejected(error)
        except BaseException as exc:
            # Never leave the collection pending.
            self._fail(kind, action, f"{type(exc).__name__}: {exc}", None)
            raise
        return Fulfilled(result)

    def _fail(self, kind: CatalogKind, action: ActionKind, message: str, status_code: int | None) -> None:
        self._update_collection(
            kind,
            status=ActionStatus.FAILED,
            action=action,
            error=CatalogError(action=action, message=message, status_code=status_code),
        )

    async def _execute(self, command: CatalogCommand) -> Any:
        # Snapshots are re-read after each await: other commands may have
        # committed while the request was in flight.
        match command:
            case FetchAll(kind=kind):
                items = await _catalog_api.fetch_all(self._transport, kind)
                kept = admit(self._state, kind, items)
                self._commit(self._state.with_collection(kind, replace_all(self._state.collection(kind), kept)))
                _logger.debug("Fetched %d %s item(s)", len(kept), kind)
                return items
            case Create(kind=kind, fields=fields):
                created = await _catalog_api.create(self._transport, kind, fields)
                collection = self._state.collection(kind)
                if admit(self._state, kind, [created]):
                    collection = append(collection, created)
                else:
                    collection = _succeeded(collection, ActionKind.CREATE, collection.items)
                self._commit(self._state.with_collection(kind, collection))
                return created
            case Update(kind=kind, entity_id=entity_id, fields=fields):
                updated = await _catalog_api.update(self._transport, kind, entity_id, fields)
                collection = self._state.collection(kind)
                if admit(self._state, kind, [updated]):
                    collection = replace_in_place(collection, updated)
                else:
                    collection = _succeeded(
                        collection, ActionKind.UPDATE, (v for v in collection.items if v.id != updated.id)
                    )
                self._commit(self._state.with_collection(kind, collection))
                return updated
            case Delete(kind=kind, entity_id=entity_id):
                await _catalog_api.delete(self._transport, kind, entity_id)
                self._commit(apply_delete(self._state, kind, entity_id))
                return None
            case _:
                assert_never(command)

    # ------------------------------------------------------------------
    # Convenience entry points
    # ------------------------------------------------------------------

    async def fetch_all(self, kind: CatalogKind) -> Result[Any]:
        return await self.dispatch(FetchAll(kind))

    async def create(self, kind: CatalogKind, fields: EntityFields | None = None, **values: Any) -> Result[Any]:
        """Create an entity from a field model or from keyword values.

        ``store.create(CatalogKind.BRAND, name="Audi")``
        """
        return await self.dispatch(Create(kind, fields if fields is not None else fields_for(kind, **values)))

    async def update(
        self,
        kind: CatalogKind,
        entity_id: int,
        fields: EntityFields | None = None,
        **values: Any,
    ) -> Result[Any]:
        return await self.dispatch(
            Update(kind, entity_id, fields if fields is not None else fields_for(kind, **values))
        )

    async def delete(self, kind: CatalogKind, entity_id: int) -> Result[None]:
        return await self.dispatch(Delete(kind, entity_id))
