"""Exceptions raised across the broker boundary.

Ordinary data conditions (not found, empty set, mutation count mismatch,
store faults) are reported through Result values and never raise.  The
exceptions here cover the cases a caller must not be able to ignore:
wiring defects and cooperative cancellation.
"""

from __future__ import annotations


class BrokerError(Exception):
    """Base class for all broker exceptions."""


class HandlerNotRegisteredError(BrokerError):
    """A custom list query was issued for a record type with no registered handler."""

    def __init__(self, record_type: type) -> None:
        super().__init__(
            f"No list query handler registered for record type {record_type.__name__}"
        )
        self.record_type = record_type


class DuplicateHandlerError(BrokerError):
    """A second custom list query handler was registered for the same record type."""

    def __init__(self, record_type: type) -> None:
        super().__init__(
            f"A list query handler is already registered for record type "
            f"{record_type.__name__}"
        )
        self.record_type = record_type


class OperationCancelledError(BrokerError):
    """The request's cancellation token was signalled before the store call finished."""
