"""Command and query request types.

Every request is an immutable value built through a named constructor and
discarded after one broker call.  Each carries a transaction_id (generated
unless supplied, e.g. when a request is rebuilt from a wire envelope) and a
cancellation token that the handlers forward to every store call.

Filter and sort expressions are held in their native (already decoded)
form.  The domain treats them as opaque; the persistence layer applies them.
"""

from __future__ import annotations

from typing import Any, TypeVar
from uuid import UUID, uuid4

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .cancellation import CancellationToken
from .records import is_fk_list_item, is_record

TCommand = TypeVar("TCommand", bound="RecordCommand")


def _require_record_type(value: Any) -> type:
    if not is_record(value):
        name = getattr(value, "__name__", type(value).__name__)
        raise ValueError(f"{name} is not a Record type")
    return value


def request_fields(
    transaction_id: UUID | None, cancellation_token: CancellationToken | None
) -> dict[str, Any]:
    fields: dict[str, Any] = {}
    if transaction_id is not None:
        fields["transaction_id"] = transaction_id
    if cancellation_token is not None:
        fields["cancellation_token"] = cancellation_token
    return fields


class Request(BaseModel):
    """Fields shared by every command and query."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    transaction_id: UUID = Field(default_factory=uuid4)
    cancellation_token: CancellationToken = Field(
        default_factory=CancellationToken, exclude=True, repr=False
    )


# --- commands ---


class RecordCommand(Request):
    """A request that mutates exactly one record and returns status only."""

    record: Any

    @field_validator("record")
    @classmethod
    def _record_is_instance(cls, value: Any) -> Any:
        if value is None or isinstance(value, type):
            raise ValueError("record must be a record instance")
        _require_record_type(type(value))
        return value

    @property
    def record_type(self) -> type:
        return type(self.record)

    @classmethod
    def create(
        cls: type[TCommand],
        record: Any,
        *,
        transaction_id: UUID | None = None,
        cancellation_token: CancellationToken | None = None,
    ) -> TCommand:
        return cls(record=record, **request_fields(transaction_id, cancellation_token))


class AddRecordCommand(RecordCommand):
    """Insert the record."""


class UpdateRecordCommand(RecordCommand):
    """Replace the stored row that shares the record's identity."""


class DeleteRecordCommand(RecordCommand):
    """Remove the stored row that shares the record's identity."""


# --- queries ---


class RecordQuery(Request):
    """Fetch a single record by its uid."""

    record_type: type
    uid: Any

    @field_validator("record_type")
    @classmethod
    def _record_type_is_record(cls, value: type) -> type:
        return _require_record_type(value)

    @classmethod
    def create(
        cls,
        record_type: type,
        uid: Any,
        *,
        transaction_id: UUID | None = None,
        cancellation_token: CancellationToken | None = None,
    ) -> RecordQuery:
        return cls(
            record_type=record_type,
            uid=uid,
            **request_fields(transaction_id, cancellation_token),
        )


class ListQueryBase(Request):
    """Paging, sort and filter parameters shared by every list query.

    The generic ListQuery and every custom list query derive from this base
    independently (never from each other), so the broker can tell them apart
    by concrete type for the same record type.

    page_size == 0 means "no paging": the full filtered set is returned.
    """

    record_type: type
    start_index: int = Field(default=0, ge=0)
    page_size: int = Field(default=0, ge=0)
    sort_expression: Any = None
    sort_descending: bool = False
    filter_expression: Any = None

    @field_validator("record_type")
    @classmethod
    def _record_type_is_record(cls, value: type) -> type:
        return _require_record_type(value)

    def __init__(self, **data: Any) -> None:
        if type(self) is ListQueryBase:
            raise TypeError("ListQueryBase is abstract; use ListQuery or a custom list query")
        super().__init__(**data)


class ListQuery(ListQueryBase):
    """The generic paged, sorted, filtered list query."""

    @classmethod
    def create(
        cls,
        record_type: type,
        *,
        start_index: int = 0,
        page_size: int = 0,
        sort_expression: Any = None,
        sort_descending: bool = False,
        filter_expression: Any = None,
        transaction_id: UUID | None = None,
        cancellation_token: CancellationToken | None = None,
    ) -> ListQuery:
        return cls(
            record_type=record_type,
            start_index=start_index,
            page_size=page_size,
            sort_expression=sort_expression,
            sort_descending=sort_descending,
            filter_expression=filter_expression,
            **request_fields(transaction_id, cancellation_token),
        )


class FKListQuery(Request):
    """Fetch the whole {id, name} reference list for an FkListItem record type."""

    record_type: type

    @field_validator("record_type")
    @classmethod
    def _record_type_is_fk_list_item(cls, value: type) -> type:
        _require_record_type(value)
        if not is_fk_list_item(value):
            raise ValueError(f"{value.__name__} is not an FkListItem record type")
        return value

    @classmethod
    def create(
        cls,
        record_type: type,
        *,
        transaction_id: UUID | None = None,
        cancellation_token: CancellationToken | None = None,
    ) -> FKListQuery:
        return cls(record_type=record_type, **request_fields(transaction_id, cancellation_token))
