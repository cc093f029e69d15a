"""Wire envelope codec.

Decodes the JSON-safe Api* envelopes into native requests, turning a
FilterSpec into a SQLAlchemy predicate and a sort field name into a column
attribute of the target record type.  Field names are resolved against the
record's mapped columns and literal values are coerced to each column's
Python type, so a UUID or date that arrived as a string compares correctly.

Unknown field names raise ValueError here, before any request reaches the
broker; the handlers only ever see decoded predicates.

The transaction_id in an envelope is carried into the native request
unchanged.
"""

from __future__ import annotations

import operator
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter
from sqlalchemy import and_, not_, or_
from sqlalchemy import inspect as sa_inspect

from src.domain.models.api import (
    ApiCommandRequest,
    ApiFkListQueryRequest,
    ApiListQueryRequest,
    ApiRecordQueryRequest,
)
from src.domain.models.cancellation import CancellationToken
from src.domain.models.filters import (
    AndFilter,
    FieldFilter,
    FilterOperator,
    NotFilter,
    OrFilter,
)
from src.domain.models.requests import FKListQuery, ListQuery, RecordCommand, RecordQuery

TCommand = TypeVar("TCommand", bound=RecordCommand)

_COMPARISONS = {
    FilterOperator.EQ: operator.eq,
    FilterOperator.NE: operator.ne,
    FilterOperator.LT: operator.lt,
    FilterOperator.LE: operator.le,
    FilterOperator.GT: operator.gt,
    FilterOperator.GE: operator.ge,
}


def _column_property(record_type: type, field: str) -> Any:
    try:
        return sa_inspect(record_type).column_attrs[field]
    except KeyError:
        raise ValueError(f"{record_type.__name__} has no field {field!r}") from None


@lru_cache(maxsize=None)
def _adapter(python_type: Any) -> TypeAdapter:
    return TypeAdapter(python_type)


def _column_adapter(prop: Any) -> TypeAdapter:
    try:
        python_type = prop.columns[0].type.python_type
    except NotImplementedError:
        python_type = Any
    return _adapter(python_type)


def _coerce(prop: Any, value: Any) -> Any:
    if value is None:
        return None
    return _column_adapter(prop).validate_python(value)


# --- filters and sorting ---


def to_predicate(record_type: type, spec: Any) -> Any:
    """Decode a FilterSpec into a SQLAlchemy boolean expression over record_type."""
    if isinstance(spec, AndFilter):
        return and_(*(to_predicate(record_type, clause) for clause in spec.clauses))
    if isinstance(spec, OrFilter):
        return or_(*(to_predicate(record_type, clause) for clause in spec.clauses))
    if isinstance(spec, NotFilter):
        return not_(to_predicate(record_type, spec.clause))
    if not isinstance(spec, FieldFilter):
        raise ValueError(f"Unsupported filter node {type(spec).__name__}")

    prop = _column_property(record_type, spec.field)
    attribute = getattr(record_type, prop.key)

    if spec.operator is FilterOperator.IN:
        if not isinstance(spec.value, (list, tuple)):
            raise ValueError("The 'in' operator needs a list value")
        return attribute.in_([_coerce(prop, item) for item in spec.value])
    if spec.operator is FilterOperator.CONTAINS:
        return attribute.contains(str(spec.value))
    if spec.operator is FilterOperator.STARTSWITH:
        return attribute.startswith(str(spec.value))

    value = _coerce(prop, spec.value)
    if value is None and spec.operator is FilterOperator.EQ:
        return attribute.is_(None)
    if value is None and spec.operator is FilterOperator.NE:
        return attribute.is_not(None)
    return _COMPARISONS[spec.operator](attribute, value)


def to_sort_key(record_type: type, field: str) -> Any:
    return getattr(record_type, _column_property(record_type, field).key)


# --- records ---


def encode_record(record: Any) -> dict[str, Any]:
    """Dump a record's mapped columns to a JSON-safe dictionary."""
    return {
        prop.key: _column_adapter(prop).dump_python(getattr(record, prop.key), mode="json")
        for prop in sa_inspect(type(record)).column_attrs
    }


def decode_record(record_type: type, payload: dict[str, Any]) -> Any:
    """Rebuild a record from a dictionary produced by encode_record()."""
    props = sa_inspect(record_type).column_attrs
    unknown = set(payload) - {prop.key for prop in props}
    if unknown:
        raise ValueError(f"{record_type.__name__} has no field(s) {sorted(unknown)}")
    return record_type(
        **{prop.key: _coerce(prop, payload[prop.key]) for prop in props if prop.key in payload}
    )


# --- envelopes ---


def decode_list_query(
    record_type: type,
    request: ApiListQueryRequest,
    cancellation_token: CancellationToken | None = None,
) -> ListQuery:
    return ListQuery.create(
        record_type,
        start_index=request.start_index,
        page_size=request.page_size,
        sort_expression=(
            to_sort_key(record_type, request.sort_field) if request.sort_field else None
        ),
        sort_descending=request.sort_descending,
        filter_expression=(
            to_predicate(record_type, request.filter) if request.filter is not None else None
        ),
        transaction_id=request.transaction_id,
        cancellation_token=cancellation_token,
    )


def decode_record_query(
    record_type: type,
    request: ApiRecordQueryRequest,
    cancellation_token: CancellationToken | None = None,
) -> RecordQuery:
    return RecordQuery.create(
        record_type,
        request.uid,
        transaction_id=request.transaction_id,
        cancellation_token=cancellation_token,
    )


def decode_fk_list_query(
    record_type: type,
    request: ApiFkListQueryRequest,
    cancellation_token: CancellationToken | None = None,
) -> FKListQuery:
    return FKListQuery.create(
        record_type,
        transaction_id=request.transaction_id,
        cancellation_token=cancellation_token,
    )


def decode_command(
    command_type: type[TCommand],
    record_type: type,
    request: ApiCommandRequest,
    cancellation_token: CancellationToken | None = None,
) -> TCommand:
    return command_type.create(
        decode_record(record_type, request.record),
        transaction_id=request.transaction_id,
        cancellation_token=cancellation_token,
    )


def encode_command(command: RecordCommand) -> ApiCommandRequest:
    return ApiCommandRequest(
        transaction_id=command.transaction_id, record=encode_record(command.record)
    )
