"""Concrete SQLAlchemy command and query handlers.

Every handler holds a SqlStore and acquires a fresh store handle per call.
The broker constructs the built-in handlers; custom list query handlers are
constructed at composition time and registered with the broker.
"""

from .commands import (
    AddRecordCommandHandler,
    DeleteRecordCommandHandler,
    RecordCommandHandler,
    UpdateRecordCommandHandler,
)
from .fk_lists import FKListQueryHandler
from .lists import SqlListQueryHandler
from .records import RecordQueryHandler
from .weather import WeatherForecastListQuery, WeatherForecastListQueryHandler

__all__ = [
    "RecordCommandHandler",
    "AddRecordCommandHandler",
    "UpdateRecordCommandHandler",
    "DeleteRecordCommandHandler",
    "RecordQueryHandler",
    "SqlListQueryHandler",
    "FKListQueryHandler",
    "WeatherForecastListQuery",
    "WeatherForecastListQueryHandler",
]
