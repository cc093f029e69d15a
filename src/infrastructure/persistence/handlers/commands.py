"""Add, update and delete command handlers.

Each handler opens a fresh store handle, stages exactly one mutation for
the command's record, commits with the command's cancellation token and
releases the handle.  One affected row is success; any other count is
reported as a failed CommandResult.
"""

from __future__ import annotations

import logging
from abc import abstractmethod
from typing import Any

from src.domain.handlers.base import Handler
from src.domain.models.requests import RecordCommand
from src.domain.models.results import CommandResult
from src.infrastructure.persistence.store import STORE_FAULTS, SqlStore, StoreHandle, identity_of

logger = logging.getLogger(__name__)


class RecordCommandHandler(Handler[RecordCommand, CommandResult]):
    success_message = ""
    failure_message = ""

    def __init__(self, store: SqlStore) -> None:
        self._store = store

    @abstractmethod
    def stage(self, handle: StoreHandle, record: Any) -> None:
        """Stage this handler's single mutation on handle."""

    async def handle(self, request: RecordCommand) -> CommandResult:
        token = request.cancellation_token
        token.raise_if_cancelled()
        try:
            async with self._store.open_handle() as handle:
                self.stage(handle, request.record)
                affected = await handle.commit(token)
        except STORE_FAULTS as exc:
            logger.warning(
                "%s on %s failed [transaction %s]: %s",
                type(request).__name__,
                request.record_type.__name__,
                request.transaction_id,
                exc,
            )
            return CommandResult.failure(
                f"{self.failure_message}: {exc} (transaction {request.transaction_id})"
            )

        if affected != 1:
            logger.warning(
                "%s on %s affected %d rows [transaction %s]",
                type(request).__name__,
                request.record_type.__name__,
                affected,
                request.transaction_id,
            )
            return CommandResult.failure(self.failure_message)
        return CommandResult.successful(self.success_message, new_id=identity_of(request.record))


class AddRecordCommandHandler(RecordCommandHandler):
    success_message = "Record Saved"
    failure_message = "Error saving Record"

    def stage(self, handle: StoreHandle, record: Any) -> None:
        handle.add(record)


class UpdateRecordCommandHandler(RecordCommandHandler):
    success_message = "Record Updated"
    failure_message = "Error updating Record"

    def stage(self, handle: StoreHandle, record: Any) -> None:
        handle.update(record)


class DeleteRecordCommandHandler(RecordCommandHandler):
    success_message = "Record Deleted"
    failure_message = "Error deleting Record"

    def stage(self, handle: StoreHandle, record: Any) -> None:
        handle.delete(record)
