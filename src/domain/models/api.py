"""Wire envelopes for requests that cross a process boundary.

These are the JSON-safe counterparts of the native requests.  They keep the
caller's transaction_id so a request can be correlated from the client that
issued it through to the server that executed it.  Records travel as plain
field dictionaries and filters as a FilterSpec; the persistence codec turns
an envelope back into a native request.
"""

from __future__ import annotations

from typing import Any
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field

from .filters import FilterSpec


class ApiRequest(BaseModel):
    model_config = ConfigDict(frozen=True)

    transaction_id: UUID = Field(default_factory=uuid4)


class ApiListQueryRequest(ApiRequest):
    start_index: int = Field(default=0, ge=0)
    page_size: int = Field(default=0, ge=0)
    sort_field: str | None = None
    sort_descending: bool = False
    filter: FilterSpec | None = None


class ApiRecordQueryRequest(ApiRequest):
    uid: UUID


class ApiCommandRequest(ApiRequest):
    record: dict[str, Any]


class ApiFkListQueryRequest(ApiRequest):
    """Reference lists take no parameters beyond the transaction id."""
