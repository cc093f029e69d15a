"""Tests for src/infrastructure/persistence/models — the weather records."""

from datetime import date
from uuid import UUID

import pytest

from src.domain.models.records import has_uid, is_fk_list_item, is_record
from src.infrastructure.persistence.models import (
    VIEW_DEFINITIONS,
    DboWeatherForecast,
    DboWeatherLocation,
    DboWeatherSummary,
    DvoWeatherForecast,
    FkWeatherLocation,
    FkWeatherSummary,
)
from src.infrastructure.persistence.models.weather import NIL_UUID


@pytest.mark.parametrize(
    "record_type",
    [DboWeatherForecast, DboWeatherLocation, DboWeatherSummary, DvoWeatherForecast, FkWeatherLocation, FkWeatherSummary],
)
def test_records_are_default_constructible(record_type):
    assert isinstance(record_type(), record_type)


def test_default_records_get_distinct_uids():
    first, second = DboWeatherLocation(), DboWeatherLocation()
    assert isinstance(first.uid, UUID)
    assert first.uid != second.uid


def test_forecast_defaults():
    forecast = DboWeatherForecast()
    assert forecast.weather_location_id == NIL_UUID
    assert forecast.forecast_date == date.today()
    assert forecast.temperature_c == 0


def test_records_compare_by_value():
    location = DboWeatherLocation(location="Perth")
    assert DboWeatherLocation(uid=location.uid, location="Perth") == location
    assert DboWeatherLocation(uid=location.uid, location="Broome") != location


@pytest.mark.parametrize(
    "record_type",
    [DboWeatherForecast, DboWeatherLocation, DboWeatherSummary, DvoWeatherForecast, FkWeatherLocation, FkWeatherSummary],
)
def test_mapped_records_satisfy_record_contract(record_type):
    assert is_record(record_type)


def test_uid_capability():
    assert has_uid(DboWeatherForecast)
    assert has_uid(DvoWeatherForecast)
    assert not has_uid(DboWeatherSummary)


def test_fk_list_capability():
    assert is_fk_list_item(FkWeatherLocation)
    assert is_fk_list_item(FkWeatherSummary)
    assert not is_fk_list_item(DboWeatherLocation)


def test_every_view_has_a_definition():
    views = {DvoWeatherForecast, FkWeatherLocation, FkWeatherSummary}
    assert {view.__tablename__ for view in views} == set(VIEW_DEFINITIONS)
