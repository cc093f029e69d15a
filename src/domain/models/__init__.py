"""Domain model package.

Request, result, filter and wire-envelope value types are pure Python /
Pydantic with no ORM or infrastructure dependencies.  Import from this
package to avoid coupling callers to individual module paths.
"""

from .api import (
    ApiCommandRequest,
    ApiFkListQueryRequest,
    ApiListQueryRequest,
    ApiRecordQueryRequest,
    ApiRequest,
)
from .cancellation import CancellationToken
from .filters import AndFilter, FieldFilter, FilterOperator, FilterSpec, NotFilter, OrFilter
from .records import FkItem, FkListItem, HasUid, Record, has_uid, is_fk_list_item, is_record
from .requests import (
    AddRecordCommand,
    DeleteRecordCommand,
    FKListQuery,
    ListQuery,
    ListQueryBase,
    RecordCommand,
    RecordQuery,
    Request,
    UpdateRecordCommand,
)
from .results import (
    CommandResult,
    FKListProviderResult,
    ListProviderResult,
    RecordProviderResult,
)

__all__ = [
    # records
    "FkItem",
    "FkListItem",
    "HasUid",
    "Record",
    "has_uid",
    "is_fk_list_item",
    "is_record",
    # cancellation
    "CancellationToken",
    # requests
    "Request",
    "RecordCommand",
    "AddRecordCommand",
    "UpdateRecordCommand",
    "DeleteRecordCommand",
    "RecordQuery",
    "ListQueryBase",
    "ListQuery",
    "FKListQuery",
    # results
    "CommandResult",
    "RecordProviderResult",
    "ListProviderResult",
    "FKListProviderResult",
    # filters
    "FilterOperator",
    "FieldFilter",
    "AndFilter",
    "OrFilter",
    "NotFilter",
    "FilterSpec",
    # wire envelopes
    "ApiRequest",
    "ApiListQueryRequest",
    "ApiRecordQueryRequest",
    "ApiCommandRequest",
    "ApiFkListQueryRequest",
]
