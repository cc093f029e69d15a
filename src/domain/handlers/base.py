"""Generic handler base interfaces.

Handler[TRequest, TResult] is the root abstraction for every command and
query handler.  Concrete handlers live in
src/infrastructure/persistence/handlers/ and are constructed by the broker.

Design notes:
  - handle() is async: every handler touches the store.
  - A handler holds no per-request state; it acquires a fresh store handle
    on every call and releases it before returning.
  - Ordinary data conditions are reported through the returned result,
    never raised.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any, Generic, TypeVar

from src.domain.models.requests import ListQueryBase
from src.domain.models.results import ListProviderResult

TRequest = TypeVar("TRequest")
TResult = TypeVar("TResult")


class Handler(ABC, Generic[TRequest, TResult]):
    """Executes one request type and returns its result type."""

    @abstractmethod
    async def handle(self, request: TRequest) -> TResult:
        """Execute request against the store and wrap the outcome in a result."""


class ListQueryHandler(Handler[ListQueryBase, ListProviderResult[Any]]):
    """A handler that can serve list queries for one record type.

    Custom list query handlers implement this interface and are registered
    with the broker per record type.
    """

    @abstractmethod
    async def handle(self, request: ListQueryBase) -> ListProviderResult[Any]:
        """Return a page of records plus the total filtered count."""
