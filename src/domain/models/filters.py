"""Transport-safe filter descriptions.

Native filter predicates cannot cross a process boundary, so list queries
sent over the wire carry a small tagged-union AST instead: field conditions
composed with and/or/not.  The persistence codec decodes the AST into a
native predicate against a specific record type before a query is built.
"""

from __future__ import annotations

from enum import Enum
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field


class FilterOperator(str, Enum):
    EQ = "eq"
    NE = "ne"
    LT = "lt"
    LE = "le"
    GT = "gt"
    GE = "ge"
    IN = "in"
    CONTAINS = "contains"
    STARTSWITH = "startswith"


class FieldFilter(BaseModel):
    """Compare one record field against a literal value.

    For IN the value is a list of literals.  CONTAINS and STARTSWITH apply
    to text fields.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["field"] = "field"
    field: str
    operator: FilterOperator = FilterOperator.EQ
    value: Any = None


class AndFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["and"] = "and"
    clauses: list[FilterSpec] = Field(min_length=1)


class OrFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["or"] = "or"
    clauses: list[FilterSpec] = Field(min_length=1)


class NotFilter(BaseModel):
    model_config = ConfigDict(frozen=True)

    kind: Literal["not"] = "not"
    clause: FilterSpec


FilterSpec = Annotated[
    Union[FieldFilter, AndFilter, OrFilter, NotFilter],
    Field(discriminator="kind"),
]

AndFilter.model_rebuild()
OrFilter.model_rebuild()
NotFilter.model_rebuild()
