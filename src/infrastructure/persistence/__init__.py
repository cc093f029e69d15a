"""Persistence package.

Importing this package registers every record mapper with Base.metadata
(required before create_schema() or SQLAlchemy mapper configuration runs)
and exports the store adapter, the handlers, the broker and its factory.
"""

from src.infrastructure.persistence.models import *  # noqa: F401, F403
from src.infrastructure.persistence.models import __all__ as _orm_all
from src.infrastructure.persistence.broker import SqlDataBroker, get_data_broker
from src.infrastructure.persistence.handlers import *  # noqa: F401, F403
from src.infrastructure.persistence.handlers import __all__ as _handlers_all
from src.infrastructure.persistence.store import Queryable, SqlStore, StoreHandle

__all__ = _orm_all + _handlers_all + [
    "Queryable",
    "StoreHandle",
    "SqlStore",
    "SqlDataBroker",
    "get_data_broker",
]
