"""Record capability markers and the reference-list projection.

Records themselves are persistence types (mapped dataclasses in the
infrastructure layer).  The domain only needs to know which capabilities a
record type opts into; the markers below are inherited explicitly, so the
handlers branch on issubclass() rather than probing attributes.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict


class Record:
    """Marker: a persistable record type.

    Record types are default-constructible and expose an identity.  The
    declarative base mixes this in, so every mapped record satisfies it and
    requests can reject anything else when they are built.
    """


class HasUid:
    """Marker: the record exposes a structural ``uid`` identity attribute.

    Record lookups on these types filter on ``uid`` directly, which works
    for tables and read-only views alike.
    """


class FkListItem:
    """Marker: the record exposes ``id`` and ``name`` for selection lists."""


def is_record(record_type: type) -> bool:
    return isinstance(record_type, type) and issubclass(record_type, Record)


def has_uid(record_type: type) -> bool:
    return isinstance(record_type, type) and issubclass(record_type, HasUid)


def is_fk_list_item(record_type: type) -> bool:
    return isinstance(record_type, type) and issubclass(record_type, FkListItem)


class FkItem(BaseModel):
    """An {id, name} reference pair returned by FK list queries."""

    model_config = ConfigDict(frozen=True)

    id: Any
    name: str

    @classmethod
    def from_record(cls, record: Any) -> FkItem:
        return cls(id=record.id, name=record.name)
