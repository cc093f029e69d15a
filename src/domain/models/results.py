"""Result types returned by the broker.

Every result carries success and message and is built through one of two
named constructors, successful() and failure().  The validators keep the two
shapes apart: a failure never carries a payload, a successful record result
always does.  A successful list result with no items is the normal "no
matches" outcome and is distinct from failure.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .records import FkItem

T = TypeVar("T")

QUERY_SUCCEEDED = "The query completed successfully"


class CommandResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = False
    message: str = ""
    new_id: Any = None

    @model_validator(mode="after")
    def _failure_has_no_id(self) -> CommandResult:
        if not self.success and self.new_id is not None:
            raise ValueError("A failed command result cannot carry new_id")
        return self

    @classmethod
    def successful(cls, message: str, new_id: Any = None) -> CommandResult:
        return cls(success=True, message=message, new_id=new_id)

    @classmethod
    def failure(cls, message: str) -> CommandResult:
        return cls(success=False, message=message)


class RecordProviderResult(BaseModel, Generic[T]):
    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool = False
    message: str = ""
    record: T | None = None

    @model_validator(mode="after")
    def _payload_matches_outcome(self) -> RecordProviderResult[T]:
        if self.success and self.record is None:
            raise ValueError("A successful record result must carry a record")
        if not self.success and self.record is not None:
            raise ValueError("A failed record result cannot carry a record")
        return self

    @classmethod
    def successful(cls, record: T, message: str | None = None) -> RecordProviderResult[T]:
        return cls(success=True, message=message or QUERY_SUCCEEDED, record=record)

    @classmethod
    def failure(cls, message: str) -> RecordProviderResult[T]:
        return cls(success=False, message=message)


class ListProviderResult(BaseModel, Generic[T]):
    """A page of records plus the size of the whole filtered set.

    total_item_count ignores paging: it is the number of records matching
    the filter, so len(items) <= total_item_count always holds.
    """

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    success: bool = False
    message: str = ""
    items: list[T] = Field(default_factory=list)
    total_item_count: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _failure_is_empty(self) -> ListProviderResult[T]:
        if not self.success and (self.items or self.total_item_count):
            raise ValueError("A failed list result cannot carry items or a count")
        return self

    @classmethod
    def successful(
        cls, items: list[T], total_item_count: int, message: str | None = None
    ) -> ListProviderResult[T]:
        return cls(
            success=True,
            message=message or QUERY_SUCCEEDED,
            items=list(items),
            total_item_count=total_item_count,
        )

    @classmethod
    def failure(cls, message: str) -> ListProviderResult[T]:
        return cls(success=False, message=message)


class FKListProviderResult(BaseModel):
    model_config = ConfigDict(frozen=True)

    success: bool = False
    message: str = ""
    items: list[FkItem] = Field(default_factory=list)

    @model_validator(mode="after")
    def _failure_is_empty(self) -> FKListProviderResult:
        if not self.success and self.items:
            raise ValueError("A failed reference list result cannot carry items")
        return self

    @classmethod
    def successful(cls, items: list[FkItem], message: str | None = None) -> FKListProviderResult:
        return cls(success=True, message=message or QUERY_SUCCEEDED, items=list(items))

    @classmethod
    def failure(cls, message: str) -> FKListProviderResult:
        return cls(success=False, message=message)
