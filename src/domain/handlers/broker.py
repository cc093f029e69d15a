"""Data broker interface: the single entry point for commands and queries."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from .base import ListQueryHandler


class DataBroker(ABC):
    """Routes a request to its handler and returns the handler's result.

    execute() accepts every supported request shape:

        AddRecordCommand / UpdateRecordCommand / DeleteRecordCommand -> CommandResult
        RecordQuery        -> RecordProviderResult
        ListQuery          -> ListProviderResult
        custom list query  -> ListProviderResult (via the registered handler)
        FKListQuery        -> FKListProviderResult

    Any other request raises NotImplementedError.
    """

    @abstractmethod
    async def execute(self, request: Any) -> Any:
        """Dispatch request to its handler and return the result."""

    @abstractmethod
    def register_list_query_handler(self, record_type: type, handler: ListQueryHandler) -> None:
        """Register the custom list query handler for record_type (one per type)."""
