"""Operation results returned by the stores.

Store operations never raise on transport failure. They return either
:class:`Fulfilled` carrying the value or :class:`Rejected` carrying the
:class:`~pyvehicles.exceptions.HttpError`, and callers branch with
``match`` or :attr:`ok`::

    match await store.fetch_all(CatalogKind.BRAND):
        case Fulfilled(value=brands):
            ...
        case Rejected(error=err):
            ...
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeAlias, TypeVar

from pyvehicles.exceptions import HttpError

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Fulfilled(Generic[T]):
    value: T

    @property
    def ok(self) -> bool:
        return True


@dataclass(frozen=True, slots=True)
class Rejected:
    error: HttpError

    @property
    def ok(self) -> bool:
        return False


Result: TypeAlias = Fulfilled[T] | Rejected
