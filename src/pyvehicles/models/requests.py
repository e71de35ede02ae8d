"""Pydantic request models for create/update calls.

These models provide a consistent "validate → normalize → execute" flow:
invalid field sets fail before any request is sent.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class _FieldsBase(BaseModel):
    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
        str_strip_whitespace=True,
    )

    def to_payload(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class _NamedFields(_FieldsBase):
    name: str

    @field_validator("name")
    @classmethod
    def _name_non_empty(cls, value: str) -> str:
        if not value:
            raise ValueError("name must be non-empty")
        return value


class BrandFields(_NamedFields):
    name: str = Field(serialization_alias="brand_name")


class SegmentFields(_NamedFields):
    name: str = Field(serialization_alias="segment_name")


class VehicleFields(_NamedFields):
    name: str = Field(serialization_alias="vehicle_name")
    release_year: int = Field(ge=0)
    price: Decimal = Field(ge=0, decimal_places=2)
    segment_id: int = Field(serialization_alias="segment")
    brand_id: int = Field(serialization_alias="brand")
