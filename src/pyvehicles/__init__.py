"""pyvehicles - Async Python client for a vehicle catalog admin API."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyvehicles")
except PackageNotFoundError:
    __version__ = "0+local"
from pyvehicles.client import CatalogClient
from pyvehicles.config import CatalogConfig
from pyvehicles.credentials import CredentialStore, FileCredentialStore, MemoryCredentialStore
from pyvehicles.exceptions import (
    CredentialStoreError,
    HttpError,
    VehiclesConfigError,
    VehiclesError,
)
from pyvehicles.models import (
    AuthError,
    Brand,
    BrandFields,
    Profile,
    Segment,
    SegmentFields,
    Vehicle,
    VehicleFields,
)
from pyvehicles.results import Fulfilled, Rejected, Result
from pyvehicles.state.auth import AuthState, AuthStore
from pyvehicles.state.catalog import CatalogError, CatalogState, CatalogStore, CollectionState
from pyvehicles.state.commands import ActionKind, ActionStatus, CatalogKind, Create, Delete, FetchAll, Update

__all__ = [
    "__version__",
    "ActionKind",
    "ActionStatus",
    "AuthError",
    "AuthState",
    "AuthStore",
    "Brand",
    "BrandFields",
    "CatalogClient",
    "CatalogConfig",
    "CatalogError",
    "CatalogKind",
    "CatalogState",
    "CatalogStore",
    "CollectionState",
    "Create",
    "CredentialStore",
    "CredentialStoreError",
    "Delete",
    "FetchAll",
    "FileCredentialStore",
    "Fulfilled",
    "HttpError",
    "MemoryCredentialStore",
    "Profile",
    "Rejected",
    "Result",
    "Segment",
    "SegmentFields",
    "Update",
    "Vehicle",
    "VehicleFields",
    "VehiclesConfigError",
    "VehiclesError",
]
