"""Single-record query handler."""

from __future__ import annotations

import logging
from typing import Any

from src.domain.handlers.base import Handler
from src.domain.models.records import has_uid
from src.domain.models.requests import RecordQuery
from src.domain.models.results import RecordProviderResult
from src.infrastructure.persistence.store import STORE_FAULTS, SqlStore

logger = logging.getLogger(__name__)


class RecordQueryHandler(Handler[RecordQuery, RecordProviderResult[Any]]):
    """Fetch one record by uid through a read-only store handle.

    HasUid record types are looked up with an equality predicate on uid,
    which also works for views that have no usable primary key.  Other
    record types fall back to the store's primary-key lookup.
    """

    def __init__(self, store: SqlStore) -> None:
        self._store = store

    async def handle(self, request: RecordQuery) -> RecordProviderResult[Any]:
        if request is None:
            return RecordProviderResult.failure("No Query Defined")

        token = request.cancellation_token
        token.raise_if_cancelled()
        record_type = request.record_type
        try:
            async with self._store.open_handle(read_only=True) as handle:
                records = handle.query(record_type)
                if has_uid(record_type):
                    record = await records.filter(record_type.uid == request.uid).first(token)
                else:
                    record = await records.get(request.uid, token)
        except STORE_FAULTS as exc:
            logger.warning(
                "Record query on %s failed [transaction %s]: %s",
                record_type.__name__,
                request.transaction_id,
                exc,
            )
            return RecordProviderResult.failure(
                f"Error retrieving record: {exc} (transaction {request.transaction_id})"
            )

        if record is None:
            return RecordProviderResult.failure("No record retrieved")
        return RecordProviderResult.successful(record)
