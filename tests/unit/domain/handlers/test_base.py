"""Tests for src/domain/handlers — abstract interfaces and package exports."""

import pytest

from src.domain.handlers import DataBroker, Handler, ListQueryHandler, ListQueryHandlerRegistry
from src.domain.handlers import __all__ as handlers_all


def test_handler_is_abstract():
    with pytest.raises(TypeError):
        Handler()


def test_list_query_handler_is_abstract():
    with pytest.raises(TypeError):
        ListQueryHandler()


def test_data_broker_is_abstract():
    with pytest.raises(TypeError):
        DataBroker()


def test_list_query_handler_is_a_handler():
    assert issubclass(ListQueryHandler, Handler)


async def test_concrete_handler_handles_request():
    class Echo(Handler):
        async def handle(self, request):
            return request

    assert await Echo().handle("ping") == "ping"


def test_handlers_package_exports_4_names():
    assert len(handlers_all) == 4
    assert ListQueryHandlerRegistry.__name__ in handlers_all
