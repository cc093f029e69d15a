"""Tests for src/domain/handlers/registry.py."""

import pytest

from src.domain.errors import BrokerError, DuplicateHandlerError, HandlerNotRegisteredError
from src.domain.handlers.base import ListQueryHandler
from src.domain.handlers.registry import ListQueryHandlerRegistry
from src.domain.models.results import ListProviderResult


class _StubHandler(ListQueryHandler):
    async def handle(self, request):
        return ListProviderResult.successful([], 0)


class _Forecast:
    pass


class _Location:
    pass


def test_new_registry_is_empty():
    registry = ListQueryHandlerRegistry()
    assert len(registry) == 0
    assert _Forecast not in registry


def test_register_then_resolve_returns_handler():
    registry = ListQueryHandlerRegistry()
    handler = _StubHandler()
    registry.register(_Forecast, handler)
    assert registry.resolve(_Forecast) is handler
    assert _Forecast in registry


def test_handlers_are_keyed_by_record_type():
    registry = ListQueryHandlerRegistry()
    forecasts, locations = _StubHandler(), _StubHandler()
    registry.register(_Forecast, forecasts)
    registry.register(_Location, locations)
    assert registry.resolve(_Location) is locations
    assert len(registry) == 2


def test_resolve_unregistered_type_raises():
    with pytest.raises(HandlerNotRegisteredError) as excinfo:
        ListQueryHandlerRegistry().resolve(_Forecast)
    assert excinfo.value.record_type is _Forecast
    assert "_Forecast" in str(excinfo.value)


def test_duplicate_registration_raises():
    registry = ListQueryHandlerRegistry()
    registry.register(_Forecast, _StubHandler())
    with pytest.raises(DuplicateHandlerError):
        registry.register(_Forecast, _StubHandler())


def test_duplicate_registration_keeps_first_handler():
    registry = ListQueryHandlerRegistry()
    first = _StubHandler()
    registry.register(_Forecast, first)
    with pytest.raises(DuplicateHandlerError):
        registry.register(_Forecast, _StubHandler())
    assert registry.resolve(_Forecast) is first


def test_registry_errors_are_broker_errors():
    assert issubclass(HandlerNotRegisteredError, BrokerError)
    assert issubclass(DuplicateHandlerError, BrokerError)
