"""Tests for src/infrastructure/persistence/codec.py — wire envelope decoding."""

from datetime import date
from uuid import uuid4

import pytest

from src.domain.models.api import (
    ApiCommandRequest,
    ApiFkListQueryRequest,
    ApiListQueryRequest,
    ApiRecordQueryRequest,
)
from src.domain.models.cancellation import CancellationToken
from src.domain.models.filters import AndFilter, FieldFilter, FilterOperator, NotFilter, OrFilter
from src.domain.models.requests import AddRecordCommand, ListQuery, UpdateRecordCommand
from src.infrastructure.persistence.codec import (
    decode_command,
    decode_fk_list_query,
    decode_list_query,
    decode_record,
    decode_record_query,
    encode_command,
    encode_record,
    to_predicate,
    to_sort_key,
)
from src.infrastructure.persistence.models import (
    DboWeatherForecast,
    DboWeatherLocation,
    DvoWeatherForecast,
    FkWeatherSummary,
)


# --- records ---

def test_encode_record_is_json_safe():
    forecast = DboWeatherForecast(forecast_date=date(2026, 3, 1), temperature_c=18)
    payload = encode_record(forecast)
    assert payload["uid"] == str(forecast.uid)
    assert payload["forecast_date"] == "2026-03-01"
    assert payload["temperature_c"] == 18


def test_decode_record_restores_equal_record():
    forecast = DboWeatherForecast(forecast_date=date(2026, 3, 1), temperature_c=18)
    assert decode_record(DboWeatherForecast, encode_record(forecast)) == forecast


def test_decode_record_rejects_unknown_fields():
    with pytest.raises(ValueError):
        decode_record(DboWeatherLocation, {"location": "Perth", "altitude": 12})


def test_decode_record_fills_missing_fields_with_defaults():
    location = decode_record(DboWeatherLocation, {"location": "Perth"})
    assert location.location == "Perth"
    assert location.uid is not None


# --- filters and sort keys ---

def test_to_predicate_unknown_field_raises():
    with pytest.raises(ValueError):
        to_predicate(DboWeatherLocation, FieldFilter(field="altitude", value=1))


def test_to_predicate_in_requires_list():
    with pytest.raises(ValueError):
        to_predicate(DboWeatherLocation, FieldFilter(field="location", operator=FilterOperator.IN, value="Perth"))


def test_to_predicate_eq_none_is_null_test():
    predicate = to_predicate(DvoWeatherForecast, FieldFilter(field="summary", value=None))
    assert predicate.compare(DvoWeatherForecast.summary.is_(None))


def test_to_predicate_coerces_uuid_strings():
    uid = uuid4()
    predicate = to_predicate(DboWeatherForecast, FieldFilter(field="weather_location_id", value=str(uid)))
    assert predicate.right.value == uid


def test_to_sort_key_returns_column_attribute():
    assert to_sort_key(DvoWeatherForecast, "forecast_date") is DvoWeatherForecast.forecast_date


def test_to_sort_key_unknown_field_raises():
    with pytest.raises(ValueError):
        to_sort_key(DvoWeatherForecast, "humidity")


# --- envelopes ---

def test_decode_list_query_keeps_transaction_id_and_paging():
    request = ApiListQueryRequest(start_index=10, page_size=5, sort_field="temperature_c", sort_descending=True)
    query = decode_list_query(DboWeatherForecast, request)
    assert isinstance(query, ListQuery)
    assert query.transaction_id == request.transaction_id
    assert (query.start_index, query.page_size, query.sort_descending) == (10, 5, True)
    assert query.sort_expression is DboWeatherForecast.temperature_c
    assert query.filter_expression is None


def test_decode_list_query_uses_given_token():
    token = CancellationToken()
    query = decode_list_query(DboWeatherForecast, ApiListQueryRequest(), token)
    assert query.cancellation_token is token


def test_decode_record_query_keeps_transaction_id():
    request = ApiRecordQueryRequest(uid=uuid4())
    query = decode_record_query(DboWeatherForecast, request)
    assert query.uid == request.uid
    assert query.transaction_id == request.transaction_id


def test_decode_fk_list_query_keeps_transaction_id():
    request = ApiFkListQueryRequest()
    assert decode_fk_list_query(FkWeatherSummary, request).transaction_id == request.transaction_id


def test_command_round_trip_keeps_transaction_id_and_record():
    location = DboWeatherLocation(location="Perth")
    command = AddRecordCommand.create(location)

    wire = ApiCommandRequest.model_validate_json(encode_command(command).model_dump_json())
    restored = decode_command(UpdateRecordCommand, DboWeatherLocation, wire)

    assert isinstance(restored, UpdateRecordCommand)
    assert restored.transaction_id == command.transaction_id
    assert restored.record == location


# --- decoded filters against the store ---

async def test_decoded_filter_selects_matching_records(broker, seeded):
    spec = AndFilter(
        clauses=[
            FieldFilter(field="location", operator=FilterOperator.IN, value=["Cairns", "Darwin"]),
            FieldFilter(field="temperature_c", operator=FilterOperator.LT, value=10),
            NotFilter(clause=FieldFilter(field="summary", value="Chilly")),
        ]
    )
    request = ApiListQueryRequest(page_size=100, sort_field="temperature_c", filter=spec)

    result = await broker.execute(decode_list_query(DvoWeatherForecast, request))

    assert result.total_item_count == 14
    assert {item.location for item in result.items} == {"Cairns", "Darwin"}
    assert all(item.summary != "Chilly" for item in result.items)


async def test_decoded_text_and_date_filters(broker, seeded):
    spec = OrFilter(
        clauses=[
            FieldFilter(field="location", operator=FilterOperator.STARTSWITH, value="Bri"),
            FieldFilter(field="location", operator=FilterOperator.CONTAINS, value="oba"),
        ]
    )
    dated = AndFilter(
        clauses=[spec, FieldFilter(field="forecast_date", operator=FilterOperator.GE, value="2026-04-01")]
    )
    result = await broker.execute(
        decode_list_query(DvoWeatherForecast, ApiListQueryRequest(filter=dated))
    )
    assert result.total_item_count == 20
    assert {item.location for item in result.items} == {"Brisbane", "Hobart"}
