"""Brand, segment and vehicle models.

Field names follow Python conventions; the service's names are accepted
as validation aliases and used when serializing (``to_payload``).
"""

from __future__ import annotations

from decimal import Decimal

from pydantic import AliasChoices, Field

from pyvehicles.models._base import CatalogBaseModel


class Brand(CatalogBaseModel):
    """A vehicle brand (e.g. ``"Toyota"``)."""

    id: int
    name: str = Field(
        validation_alias=AliasChoices("brand_name", "name"),
        serialization_alias="brand_name",
    )


class Segment(CatalogBaseModel):
    """A market segment (e.g. ``"SUV"``)."""

    id: int
    name: str = Field(
        validation_alias=AliasChoices("segment_name", "name"),
        serialization_alias="segment_name",
    )


class Vehicle(CatalogBaseModel):
    """A vehicle referencing one brand and one segment.

    ``brand_name`` and ``segment_name`` are copies taken when the vehicle
    was fetched, created or updated. Renaming the brand or segment later
    does not change them.
    """

    id: int
    name: str = Field(
        validation_alias=AliasChoices("vehicle_name", "name"),
        serialization_alias="vehicle_name",
    )
    release_year: int
    price: Decimal
    segment_id: int = Field(
        validation_alias=AliasChoices("segment", "segment_id"),
        serialization_alias="segment",
    )
    brand_id: int = Field(
        validation_alias=AliasChoices("brand", "brand_id"),
        serialization_alias="brand",
    )
    segment_name: str = ""
    brand_name: str = ""
