"""Cooperative cancellation handle carried by every request."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable
from typing import TypeVar

from src.domain.errors import OperationCancelledError

T = TypeVar("T")


class CancellationToken:
    """A one-shot cancellation signal shared between a caller and a store call.

    The caller keeps a reference and calls cancel(); the data layer wraps each
    awaitable store operation in run(), which abandons the operation as soon as
    the token fires and raises OperationCancelledError.  Once cancelled, a
    token stays cancelled.
    """

    def __init__(self) -> None:
        self._event = asyncio.Event()

    @property
    def cancelled(self) -> bool:
        return self._event.is_set()

    def cancel(self) -> None:
        self._event.set()

    def cancel_after(self, delay: float) -> asyncio.TimerHandle:
        """Schedule cancel() on the running loop after delay seconds."""
        return asyncio.get_running_loop().call_later(delay, self.cancel)

    def raise_if_cancelled(self) -> None:
        if self.cancelled:
            raise OperationCancelledError("The operation was cancelled")

    async def run(self, awaitable: Awaitable[T]) -> T:
        """Await awaitable, abandoning it if the token fires first."""
        if self.cancelled:
            # Close an un-awaited coroutine so it does not warn on collection.
            close = getattr(awaitable, "close", None)
            if close is not None:
                close()
            self.raise_if_cancelled()

        work = asyncio.ensure_future(awaitable)
        waiter = asyncio.ensure_future(self._event.wait())
        try:
            done, _ = await asyncio.wait({work, waiter}, return_when=asyncio.FIRST_COMPLETED)
        except asyncio.CancelledError:
            work.cancel()
            raise
        finally:
            waiter.cancel()

        if work in done:
            return work.result()

        work.cancel()
        try:
            await work
        except asyncio.CancelledError:
            pass
        raise OperationCancelledError("The operation was cancelled")

    def __repr__(self) -> str:
        return f"CancellationToken(cancelled={self.cancelled})"
