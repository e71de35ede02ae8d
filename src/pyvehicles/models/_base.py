"""Base model for catalog API payloads.

Every entity the service returns inherits from :class:`CatalogBaseModel`,
which is frozen (store snapshots share instances safely), ignores unknown
keys and accepts both the wire names (``brand_name``, ``segment``...) and
the Python field names.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class CatalogBaseModel(BaseModel):
    """Base for catalog API response models."""

    model_config = ConfigDict(
        frozen=True,
        extra="ignore",
        populate_by_name=True,
    )

    def to_payload(self) -> dict[str, Any]:
        """Serialize using the wire field names."""
        return self.model_dump(mode="json", by_alias=True)
