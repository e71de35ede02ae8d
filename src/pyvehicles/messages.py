"""User-facing status strings.

Presenters never show raw server messages. Each collection maps the
outcome of its last action to one of these fixed strings.
"""

from __future__ import annotations

from typing import Any

from pyvehicles.state.catalog import CollectionState
from pyvehicles.state.commands import ActionKind, ActionStatus, CatalogKind

LOGIN_SUCCEEDED = "Successfully logged in!"
LOGIN_FAILED = "Login error!"
REGISTER_FAILED = "Registration error!"

_FAILED: dict[ActionKind, str] = {
    ActionKind.FETCH: "Get error!",
    ActionKind.CREATE: "Create error!",
    ActionKind.UPDATE: "Update error!",
    ActionKind.DELETE: "Delete error!",
}

_SUCCEEDED: dict[ActionKind, str] = {
    ActionKind.FETCH: "",
    ActionKind.CREATE: "Created in {kind}!",
    ActionKind.UPDATE: "Updated in {kind}!",
    ActionKind.DELETE: "Deleted in {kind}!",
}


def catalog_message(kind: CatalogKind, status: ActionStatus, action: ActionKind | None) -> str:
    """Return the status line for *kind* after *action* ended in *status*.

    >>> catalog_message(CatalogKind.BRAND, ActionStatus.SUCCEEDED, ActionKind.DELETE)
    'Deleted in brand!'
    """
    if action is None:
        return ""
    if status is ActionStatus.FAILED:
        return _FAILED[action]
    if status is ActionStatus.SUCCEEDED:
        return _SUCCEEDED[action].format(kind=kind.value)
    return ""


def collection_message(kind: CatalogKind, collection: CollectionState[Any]) -> str:
    return catalog_message(kind, collection.status, collection.action)
