"""SQLAlchemy data broker and its composition root.

SqlDataBroker.execute() dispatches on the concrete request class with
functools.singledispatchmethod.  Built-in request types get a handler
constructed per call over the broker's store; any other ListQueryBase
subclass is a custom list query and is routed through the
ListQueryHandlerRegistry by record type.
"""

from __future__ import annotations

import logging
from functools import singledispatchmethod
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from src.domain.handlers.base import ListQueryHandler
from src.domain.handlers.broker import DataBroker
from src.domain.handlers.registry import ListQueryHandlerRegistry
from src.domain.models.requests import (
    AddRecordCommand,
    DeleteRecordCommand,
    FKListQuery,
    ListQuery,
    ListQueryBase,
    RecordQuery,
    UpdateRecordCommand,
)
from src.domain.models.results import (
    CommandResult,
    FKListProviderResult,
    ListProviderResult,
    RecordProviderResult,
)
from src.infrastructure.database import AsyncSessionLocal
from src.infrastructure.persistence.handlers import (
    AddRecordCommandHandler,
    DeleteRecordCommandHandler,
    FKListQueryHandler,
    RecordQueryHandler,
    SqlListQueryHandler,
    UpdateRecordCommandHandler,
    WeatherForecastListQueryHandler,
)
from src.infrastructure.persistence.models.weather import DvoWeatherForecast
from src.infrastructure.persistence.store import SqlStore

logger = logging.getLogger(__name__)


def _log_dispatch(request: Any, handler: Any = None) -> None:
    logger.debug(
        "%s on %s -> %s [transaction %s]",
        type(request).__name__,
        request.record_type.__name__,
        type(handler).__name__ if handler is not None else "built-in handler",
        request.transaction_id,
    )


class SqlDataBroker(DataBroker):
    def __init__(
        self,
        store: SqlStore,
        list_query_handlers: ListQueryHandlerRegistry | None = None,
    ) -> None:
        self._store = store
        self._list_query_handlers = (
            list_query_handlers if list_query_handlers is not None else ListQueryHandlerRegistry()
        )

    @property
    def store(self) -> SqlStore:
        return self._store

    @property
    def list_query_handlers(self) -> ListQueryHandlerRegistry:
        return self._list_query_handlers

    def register_list_query_handler(self, record_type: type, handler: ListQueryHandler) -> None:
        self._list_query_handlers.register(record_type, handler)

    @singledispatchmethod
    async def execute(self, request: Any) -> Any:
        raise NotImplementedError(
            f"{type(self).__name__} cannot execute {type(request).__name__}"
        )

    # --- commands ---

    @execute.register(AddRecordCommand)
    async def _(self, request: AddRecordCommand) -> CommandResult:
        _log_dispatch(request)
        return await AddRecordCommandHandler(self._store).handle(request)

    @execute.register(UpdateRecordCommand)
    async def _(self, request: UpdateRecordCommand) -> CommandResult:
        _log_dispatch(request)
        return await UpdateRecordCommandHandler(self._store).handle(request)

    @execute.register(DeleteRecordCommand)
    async def _(self, request: DeleteRecordCommand) -> CommandResult:
        _log_dispatch(request)
        return await DeleteRecordCommandHandler(self._store).handle(request)

    # --- queries ---

    @execute.register(RecordQuery)
    async def _(self, request: RecordQuery) -> RecordProviderResult[Any]:
        _log_dispatch(request)
        return await RecordQueryHandler(self._store).handle(request)

    @execute.register(ListQuery)
    async def _(self, request: ListQuery) -> ListProviderResult[Any]:
        _log_dispatch(request)
        return await SqlListQueryHandler(self._store).handle(request)

    @execute.register(ListQueryBase)
    async def _(self, request: ListQueryBase) -> ListProviderResult[Any]:
        handler = self._list_query_handlers.resolve(request.record_type)
        _log_dispatch(request, handler)
        return await handler.handle(request)

    @execute.register(FKListQuery)
    async def _(self, request: FKListQuery) -> FKListProviderResult:
        _log_dispatch(request)
        return await FKListQueryHandler(self._store).handle(request)


def get_data_broker(
    session_factory: async_sessionmaker[AsyncSession] | None = None,
) -> SqlDataBroker:
    """Construct the broker with every custom list query handler registered.

    Intended to be called once at the application boundary:

        broker = get_data_broker()
        result = await broker.execute(ListQuery.create(DvoWeatherForecast, page_size=25))
        if result.success:
            ...
    """
    store = SqlStore(session_factory if session_factory is not None else AsyncSessionLocal)
    broker = SqlDataBroker(store)
    broker.register_list_query_handler(DvoWeatherForecast, WeatherForecastListQueryHandler(store))
    return broker
