"""Reference (foreign key) list query handler."""

from __future__ import annotations

import logging

from src.domain.handlers.base import Handler
from src.domain.models.records import FkItem
from src.domain.models.requests import FKListQuery
from src.domain.models.results import FKListProviderResult
from src.infrastructure.persistence.store import STORE_FAULTS, SqlStore

logger = logging.getLogger(__name__)


class FKListQueryHandler(Handler[FKListQuery, FKListProviderResult]):
    """Load a whole {id, name} reference list.

    No filter, sort or paging: reference lists are small enough to load
    wholesale.  An empty reference table is a successful empty result.
    """

    def __init__(self, store: SqlStore) -> None:
        self._store = store

    async def handle(self, request: FKListQuery) -> FKListProviderResult:
        if request is None:
            return FKListProviderResult.failure("No Query defined")

        token = request.cancellation_token
        token.raise_if_cancelled()
        try:
            async with self._store.open_handle(read_only=True) as handle:
                rows = await handle.query(request.record_type).to_list(token)
        except STORE_FAULTS as exc:
            logger.warning(
                "Reference list query on %s failed [transaction %s]: %s",
                request.record_type.__name__,
                request.transaction_id,
                exc,
            )
            return FKListProviderResult.failure(
                f"Error retrieving reference list: {exc} (transaction {request.transaction_id})"
            )

        return FKListProviderResult.successful([FkItem.from_record(row) for row in rows])
