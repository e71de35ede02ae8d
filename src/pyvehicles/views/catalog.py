"""Brand, segment and vehicle panel presenters.

Each presenter keeps the transient form input and the id being edited
(``0`` while creating), turns user actions into store calls and reads
its rows and status line back from the store.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from decimal import Decimal
from typing import Any, ClassVar

from pyvehicles.messages import collection_message
from pyvehicles.models.catalog import Brand, Segment, Vehicle
from pyvehicles.models.requests import BrandFields, SegmentFields, VehicleFields
from pyvehicles.results import Result
from pyvehicles.state.catalog import CatalogStore, CollectionState
from pyvehicles.state.commands import CatalogKind, EntityFields

DEFAULT_RELEASE_YEAR = 2020
DEFAULT_PRICE = Decimal("0.00")


class _CollectionPresenter(ABC):
    kind: ClassVar[CatalogKind]

    def __init__(self, store: CatalogStore) -> None:
        self._store = store
        self.edit_id = 0

    @property
    def collection(self) -> CollectionState[Any]:
        return self._store.collection(self.kind)

    @property
    def rows(self) -> tuple[Any, ...]:
        return self.collection.items

    @property
    def status(self) -> str:
        return collection_message(self.kind, self.collection)

    @property
    @abstractmethod
    def can_submit(self) -> bool:
        """Whether the form holds enough input to submit."""

    @abstractmethod
    def _fields(self) -> EntityFields:
        """Build the validated request fields from the form."""

    @abstractmethod
    def _fill(self, item: Any) -> None:
        """Prefill the form from *item*."""

    def reset(self) -> None:
        self.edit_id = 0

    def edit(self, entity_id: int) -> None:
        """Switch the form to editing *entity_id*, prefilled with its values."""
        item = self.collection.get(entity_id)
        if item is None:
            raise KeyError(f"no {self.kind} with id {entity_id}")
        self.edit_id = entity_id
        self._fill(item)

    async def load(self) -> Result[Any]:
        return await self._store.fetch_all(self.kind)

    async def submit(self) -> Result[Any] | None:
        """Create, or update the entity being edited. ``None`` if the form is incomplete."""
        if not self.can_submit:
            return None
        fields = self._fields()
        if self.edit_id:
            result = await self._store.update(self.kind, self.edit_id, fields)
        else:
            result = await self._store.create(self.kind, fields)
        if result.ok:
            self.reset()
        return result

    async def remove(self, entity_id: int) -> Result[None]:
        return await self._store.delete(self.kind, entity_id)


class _NamedPresenter(_CollectionPresenter):
    def __init__(self, store: CatalogStore) -> None:
        super().__init__(store)
        self.name = ""

    @property
    def can_submit(self) -> bool:
        return bool(self.name.strip())

    def _fill(self, item: Brand | Segment) -> None:
        self.name = item.name

    def reset(self) -> None:
        super().reset()
        self.name = ""


class BrandPresenter(_NamedPresenter):
    kind = CatalogKind.BRAND

    def _fields(self) -> BrandFields:
        return BrandFields(name=self.name)


class SegmentPresenter(_NamedPresenter):
    kind = CatalogKind.SEGMENT

    def _fields(self) -> SegmentFields:
        return SegmentFields(name=self.name)


class VehiclePresenter(_CollectionPresenter):
    kind = CatalogKind.VEHICLE

    def __init__(self, store: CatalogStore) -> None:
        super().__init__(store)
        self.name = ""
        self.release_year = DEFAULT_RELEASE_YEAR
        self.price = DEFAULT_PRICE
        self.segment_id = 0
        self.brand_id = 0

    @property
    def segment_options(self) -> list[tuple[int, str]]:
        return [(s.id, s.name) for s in self._store.state.segments.items]

    @property
    def brand_options(self) -> list[tuple[int, str]]:
        return [(b.id, b.name) for b in self._store.state.brands.items]

    @property
    def can_submit(self) -> bool:
        return bool(self.name.strip()) and self.segment_id > 0 and self.brand_id > 0

    def _fields(self) -> VehicleFields:
        return VehicleFields(
            name=self.name,
            release_year=self.release_year,
            price=self.price,
            segment_id=self.segment_id,
            brand_id=self.brand_id,
        )

    def _fill(self, item: Vehicle) -> None:
        self.name = item.name
        self.release_year = item.release_year
        self.price = item.price
        self.segment_id = item.segment_id
        self.brand_id = item.brand_id

    def reset(self) -> None:
        super().reset()
        self.name = ""
        self.release_year = DEFAULT_RELEASE_YEAR
        self.price = DEFAULT_PRICE
        self.segment_id = 0
        self.brand_id = 0
