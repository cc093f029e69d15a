"""Generic paged list query handler.

The algorithm, per request:

  1. open a read-only store handle;
  2. start from every record of the query's record type;
  3. apply the filter predicate, if any.  The result is the matching set;
  4. count the matching set.  The count ignores sorting and paging, so it is
     always the full number of matches.  A zero count returns an empty,
     successful result without running the fetch;
  5. apply the sort key, ascending or descending, if any;
  6. when page_size > 0, skip start_index rows and take page_size rows.
     page_size == 0 returns the whole matching set;
  7. materialize the page;
  8. return the page with the count.

A start_index past the end of the matching set yields no items and a
non-zero count.  That is a successful result.
"""

from __future__ import annotations

import logging
from typing import Any

from src.domain.handlers.base import ListQueryHandler
from src.domain.models.requests import ListQueryBase
from src.domain.models.results import ListProviderResult
from src.infrastructure.persistence.store import STORE_FAULTS, SqlStore

logger = logging.getLogger(__name__)


class SqlListQueryHandler(ListQueryHandler):
    def __init__(self, store: SqlStore) -> None:
        self._store = store

    def build_filter(self, query: ListQueryBase) -> Any:
        """Predicate defining the matching set, or None to match every record.

        Custom list query handlers override this to add their own fixed
        conditions to the caller's filter.
        """
        return query.filter_expression

    async def handle(self, request: ListQueryBase) -> ListProviderResult[Any]:
        if request is None:
            return ListProviderResult.failure("No Query Defined")

        token = request.cancellation_token
        token.raise_if_cancelled()
        try:
            async with self._store.open_handle(read_only=True) as handle:
                matching = handle.query(request.record_type)
                predicate = self.build_filter(request)
                if predicate is not None:
                    matching = matching.filter(predicate)

                total = await matching.count(token)
                if total == 0:
                    return ListProviderResult.successful([], 0)

                page = matching
                if request.sort_expression is not None:
                    page = page.order(request.sort_expression, descending=request.sort_descending)
                if request.page_size > 0:
                    page = page.skip(request.start_index).take(request.page_size)
                items = await page.to_list(token)
        except STORE_FAULTS as exc:
            logger.warning(
                "List query on %s failed [transaction %s]: %s",
                request.record_type.__name__,
                request.transaction_id,
                exc,
            )
            return ListProviderResult.failure(
                f"Error retrieving records: {exc} (transaction {request.transaction_id})"
            )

        return ListProviderResult.successful(items, total)
