"""Presenters for the admin screens."""

from pyvehicles.views.auth import AuthPresenter
from pyvehicles.views.catalog import BrandPresenter, SegmentPresenter, VehiclePresenter
from pyvehicles.views.main import MainPresenter

__all__ = [
    "AuthPresenter",
    "BrandPresenter",
    "MainPresenter",
    "SegmentPresenter",
    "VehiclePresenter",
]
