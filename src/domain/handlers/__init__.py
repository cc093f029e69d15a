"""Domain handler interfaces.

All abstractions are defined here with abc.ABC and @abstractmethod.
Concrete handlers and the SQLAlchemy broker live in
src/infrastructure/persistence/ and are wired at the application boundary.
"""

from .base import Handler, ListQueryHandler
from .broker import DataBroker
from .registry import ListQueryHandlerRegistry

__all__ = [
    "Handler",
    "ListQueryHandler",
    "DataBroker",
    "ListQueryHandlerRegistry",
]
