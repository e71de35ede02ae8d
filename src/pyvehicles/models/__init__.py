"""Data models for catalog API payloads."""

from pyvehicles.models._base import CatalogBaseModel
from pyvehicles.models.auth import AuthError, AuthToken, Credentials, Profile
from pyvehicles.models.catalog import Brand, Segment, Vehicle
from pyvehicles.models.requests import BrandFields, SegmentFields, VehicleFields

__all__ = [
    "AuthError",
    "AuthToken",
    "Brand",
    "BrandFields",
    "CatalogBaseModel",
    "Credentials",
    "Profile",
    "Segment",
    "SegmentFields",
    "Vehicle",
    "VehicleFields",
]
