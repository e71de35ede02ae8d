from __future__ import annotations

import pytest

from pyvehicles.messages import catalog_message, collection_message
from pyvehicles.state.catalog import CollectionState
from pyvehicles.state.commands import ActionKind, ActionStatus, CatalogKind


@pytest.mark.parametrize(
    ("kind", "action", "expected"),
    [
        (CatalogKind.BRAND, ActionKind.DELETE, "Deleted in brand!"),
        (CatalogKind.SEGMENT, ActionKind.UPDATE, "Updated in segment!"),
        (CatalogKind.VEHICLE, ActionKind.CREATE, "Created in vehicle!"),
        (CatalogKind.VEHICLE, ActionKind.FETCH, ""),
    ],
)
def test_success_messages(kind: CatalogKind, action: ActionKind, expected: str) -> None:
    assert catalog_message(kind, ActionStatus.SUCCEEDED, action) == expected


@pytest.mark.parametrize(
    ("action", "expected"),
    [
        (ActionKind.FETCH, "Get error!"),
        (ActionKind.CREATE, "Create error!"),
        (ActionKind.UPDATE, "Update error!"),
        (ActionKind.DELETE, "Delete error!"),
    ],
)
def test_failure_messages(action: ActionKind, expected: str) -> None:
    assert catalog_message(CatalogKind.BRAND, ActionStatus.FAILED, action) == expected


def test_pending_and_idle_are_silent() -> None:
    assert catalog_message(CatalogKind.BRAND, ActionStatus.PENDING, ActionKind.DELETE) == ""
    assert collection_message(CatalogKind.BRAND, CollectionState()) == ""
