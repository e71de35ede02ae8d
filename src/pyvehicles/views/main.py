"""Main page presenter: logged-in user plus the three catalog panels."""

from __future__ import annotations

import asyncio

from pyvehicles.state.auth import AuthStore
from pyvehicles.state.catalog import CatalogStore
from pyvehicles.views.auth import Navigate, noop_navigate
from pyvehicles.views.catalog import BrandPresenter, SegmentPresenter, VehiclePresenter

#: Route opened after logout.
LOGIN_ROUTE = "/"


class MainPresenter:
    def __init__(self, auth: AuthStore, catalog: CatalogStore, *, navigate: Navigate = noop_navigate) -> None:
        self._auth = auth
        self._navigate = navigate
        self.brands = BrandPresenter(catalog)
        self.segments = SegmentPresenter(catalog)
        self.vehicles = VehiclePresenter(catalog)

    @property
    def username(self) -> str:
        return self._auth.profile.username

    async def load(self) -> None:
        """Fetch the profile and all three collections concurrently.

        Each request writes a disjoint slot; failures show up in the
        respective status lines.
        """
        await asyncio.gather(
            self._auth.fetch_profile(),
            self.brands.load(),
            self.segments.load(),
            self.vehicles.load(),
        )

    def logout(self) -> None:
        self._auth.logout()
        self._navigate(LOGIN_ROUTE)
