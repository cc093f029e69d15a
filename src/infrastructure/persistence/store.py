"""Queryable store adapter over SQLAlchemy's AsyncSession.

SqlStore is the store-handle factory the handlers hold on to.  Each call to
open_handle() yields a fresh StoreHandle wrapping its own AsyncSession (one
unit of work); the session is closed, and anything uncommitted rolled back,
when the handle's context exits.  Handles are never cached or shared.

Reads go through Queryable, an immutable wrapper over a Select statement.
Read-only handles expunge every fetched row so nothing is left in the
session for change tracking, and refuse to stage mutations.

Mutations are staged as Core INSERT/UPDATE/DELETE statements against the
record's table and executed on commit(), which returns the total number of
rows the statements affected.  Working at the Core level keeps the affected
row count coming from the database rather than from session bookkeeping.

Every awaitable store call runs through the request's CancellationToken.
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any, Generic, TypeVar

from sqlalchemy import Select, and_, asc, delete, desc, func, insert, select, update
from sqlalchemy import inspect as sa_inspect
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.sql import Executable

from src.domain.models.cancellation import CancellationToken

TRecord = TypeVar("TRecord")

# Faults a handler reports as a Failure result instead of raising.
STORE_FAULTS: tuple[type[Exception], ...] = (SQLAlchemyError, OSError)


def _split_columns(record: Any) -> tuple[Any, dict[str, Any], dict[str, Any]]:
    """Return (table, primary-key values, other column values) keyed by column name."""
    mapper = sa_inspect(type(record))
    keys: dict[str, Any] = {}
    values: dict[str, Any] = {}
    for prop in mapper.column_attrs:
        column = prop.columns[0]
        target = keys if column.primary_key else values
        target[column.name] = getattr(record, prop.key)
    return mapper.local_table, keys, values


def identity_of(record: Any) -> Any:
    """Primary key value of record; a tuple for composite keys."""
    _, keys, _ = _split_columns(record)
    identity = tuple(keys.values())
    return identity[0] if len(identity) == 1 else identity


class Queryable(Generic[TRecord]):
    """A composable, not-yet-executed read over one record type."""

    def __init__(
        self,
        handle: StoreHandle,
        record_type: type[TRecord],
        statement: Select | None = None,
    ) -> None:
        self._handle = handle
        self._record_type = record_type
        self._statement = statement if statement is not None else select(record_type)

    @property
    def statement(self) -> Select:
        return self._statement

    def _derive(self, statement: Select) -> Queryable[TRecord]:
        return Queryable(self._handle, self._record_type, statement)

    def filter(self, predicate: Any) -> Queryable[TRecord]:
        return self._derive(self._statement.where(predicate))

    def order(self, key: Any, descending: bool = False) -> Queryable[TRecord]:
        return self._derive(self._statement.order_by(desc(key) if descending else asc(key)))

    def skip(self, count: int) -> Queryable[TRecord]:
        return self._derive(self._statement.offset(count))

    def take(self, count: int) -> Queryable[TRecord]:
        return self._derive(self._statement.limit(count))

    async def count(self, token: CancellationToken) -> int:
        stmt = select(func.count()).select_from(self._statement.order_by(None).subquery())
        return int(await self._handle.scalar(stmt, token) or 0)

    async def to_list(self, token: CancellationToken) -> list[TRecord]:
        return await self._handle.fetch_all(self._statement, token)

    async def first(self, token: CancellationToken) -> TRecord | None:
        rows = await self._handle.fetch_all(self._statement.limit(1), token)
        return rows[0] if rows else None

    async def get(self, key: Any, token: CancellationToken) -> TRecord | None:
        """Point lookup by primary key."""
        return await self._handle.get(self._record_type, key, token)


class StoreHandle:
    """One unit of work: a single AsyncSession plus the mutations staged on it."""

    def __init__(self, session: AsyncSession, read_only: bool = False) -> None:
        self._session = session
        self._read_only = read_only
        self._pending: list[Executable] = []

    @property
    def read_only(self) -> bool:
        return self._read_only

    def query(self, record_type: type[TRecord]) -> Queryable[TRecord]:
        return Queryable(self, record_type)

    # --- reads ---

    async def scalar(self, stmt: Executable, token: CancellationToken) -> Any:
        return await token.run(self._session.scalar(stmt))

    async def fetch_all(self, stmt: Select, token: CancellationToken) -> list[Any]:
        result = await token.run(self._session.scalars(stmt))
        rows = list(result.all())
        self._release()
        return rows

    async def get(self, record_type: type, key: Any, token: CancellationToken) -> Any:
        row = await token.run(self._session.get(record_type, key))
        self._release()
        return row

    def _release(self) -> None:
        if self._read_only:
            self._session.expunge_all()

    # --- mutations ---

    def add(self, record: Any) -> None:
        table, keys, values = _split_columns(record)
        self._stage(insert(table).values({**keys, **values}))

    def update(self, record: Any) -> None:
        table, keys, values = _split_columns(record)
        self._stage(update(table).where(self._key_clause(table, keys)).values(values or keys))

    def delete(self, record: Any) -> None:
        table, keys, _ = _split_columns(record)
        self._stage(delete(table).where(self._key_clause(table, keys)))

    @staticmethod
    def _key_clause(table: Any, keys: dict[str, Any]) -> Any:
        return and_(*(table.c[name] == value for name, value in keys.items()))

    def _stage(self, stmt: Executable) -> None:
        if self._read_only:
            raise RuntimeError("A read-only store handle cannot stage mutations")
        self._pending.append(stmt)

    async def commit(self, token: CancellationToken) -> int:
        """Execute the staged statements, commit, and return the affected row count."""
        affected = 0
        for stmt in self._pending:
            result = await token.run(self._session.execute(stmt))
            affected += result.rowcount
        await token.run(self._session.commit())
        self._pending.clear()
        return affected


class SqlStore:
    """Store-handle factory bound to an async session factory."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @asynccontextmanager
    async def open_handle(self, read_only: bool = False) -> AsyncIterator[StoreHandle]:
        async with self._session_factory() as session:
            yield StoreHandle(session, read_only=read_only)
