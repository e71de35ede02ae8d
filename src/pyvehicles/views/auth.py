"""Login/registration form presenter."""

from __future__ import annotations

from collections.abc import Callable

from pyvehicles.messages import LOGIN_FAILED, LOGIN_SUCCEEDED, REGISTER_FAILED
from pyvehicles.state.auth import AuthStore

#: Route opened after a successful login.
CATALOG_ROUTE = "/vehicle"

Navigate = Callable[[str], None]


def noop_navigate(_route: str) -> None:
    return None


class AuthPresenter:
    """Holds the form fields and the login/register toggle.

    The toggle is local state only; it never touches the store.
    """

    def __init__(self, auth: AuthStore, *, navigate: Navigate = noop_navigate) -> None:
        self._auth = auth
        self._navigate = navigate
        self.username = ""
        self.password = ""
        self.is_login = True
        self.status = ""

    @property
    def button_label(self) -> str:
        return "Login" if self.is_login else "Register"

    def toggle(self) -> None:
        self.is_login = not self.is_login

    async def submit(self) -> bool:
        """Log in, or register and then log in. Returns True once logged in."""
        if self.is_login:
            return await self._login()
        registered = await self._auth.register(self.username, self.password)
        if not registered.ok:
            self.status = REGISTER_FAILED
            return False
        # A login failure after a successful registration overwrites the
        # status with the login message.
        return await self._login()

    async def _login(self) -> bool:
        result = await self._auth.login(self.username, self.password)
        if result.ok:
            self.status = LOGIN_SUCCEEDED
            self._navigate(CATALOG_ROUTE)
            return True
        self.status = LOGIN_FAILED
        return False
