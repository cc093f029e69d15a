"""Per-record-type registry of custom list query handlers."""

from __future__ import annotations

import logging

from src.domain.errors import DuplicateHandlerError, HandlerNotRegisteredError

from .base import ListQueryHandler

logger = logging.getLogger(__name__)


class ListQueryHandlerRegistry:
    """Maps a record type to the single custom list query handler serving it.

    Populated once at composition time and read by the broker on dispatch.
    There is one slot per record type: registering a second handler for the
    same type raises DuplicateHandlerError.  A handler that has to serve
    several custom query types for one record type branches on the concrete
    query class itself.
    """

    def __init__(self) -> None:
        self._handlers: dict[type, ListQueryHandler] = {}

    def register(self, record_type: type, handler: ListQueryHandler) -> None:
        if record_type in self._handlers:
            raise DuplicateHandlerError(record_type)
        self._handlers[record_type] = handler
        logger.debug(
            "Registered %s for %s", type(handler).__name__, record_type.__name__
        )

    def resolve(self, record_type: type) -> ListQueryHandler:
        """Return the handler for record_type or raise HandlerNotRegisteredError."""
        try:
            return self._handlers[record_type]
        except KeyError:
            raise HandlerNotRegisteredError(record_type) from None

    def __contains__(self, record_type: object) -> bool:
        return record_type in self._handlers

    def __len__(self) -> int:
        return len(self._handlers)
