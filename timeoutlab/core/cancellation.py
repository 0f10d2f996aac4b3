"""
Cancellation scope: a deadline attached to the code running inside it.

The timeout lives on the scope, not on the HTTP client, so it can bound any
awaitable. The underlying timer is released when the scope exits, on the
success path and the failure path alike; `released` records that it did.
"""

import asyncio

import structlog

from timeoutlab.core.errors import DeadlineExceededError, ScopeCancelledError

logger = structlog.get_logger()


class CancellationScope:
    def __init__(self, timeout: float | None):
        self.timeout = timeout
        self.released = False
        self.cancel_called = False
        # Set only when cancel() is what fires the timer, never after the deadline did
        self._cancelled_early = False
        self._timeout_cm: asyncio.Timeout | None = None

    @property
    def deadline(self) -> float | None:
        """Loop time at which the scope expires, or None for no deadline."""
        if self._timeout_cm is None:
            return None
        return self._timeout_cm.when()

    def expired(self) -> bool:
        return self._timeout_cm is not None and self._timeout_cm.expired()

    def cancel(self):
        """Cancel the work inside the scope now, ahead of its deadline.

        Cancelling a scope that has not been entered yet makes the work inside
        it stop at its first await once it is entered. Cancelling after the
        scope expired or exited changes nothing.
        """
        self.cancel_called = True
        if self.released:
            return
        if self._timeout_cm is None:
            self._cancelled_early = True
            return
        if self._timeout_cm.expired():
            return
        self._cancelled_early = True
        self._timeout_cm.reschedule(asyncio.get_running_loop().time())

    async def __aenter__(self) -> "CancellationScope":
        if self._timeout_cm is not None:
            raise RuntimeError("CancellationScope cannot be entered twice")
        loop = asyncio.get_running_loop()
        if self._cancelled_early:
            when = loop.time()
        elif self.timeout is None:
            when = None
        else:
            when = loop.time() + self.timeout
        self._timeout_cm = asyncio.timeout_at(when)
        await self._timeout_cm.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc, tb):
        try:
            return await self._timeout_cm.__aexit__(exc_type, exc, tb)
        except TimeoutError as e:
            if not self._timeout_cm.expired():
                raise
            if self._cancelled_early:
                raise ScopeCancelledError("cancellation scope was cancelled") from e
            raise DeadlineExceededError(
                f"context deadline exceeded after {self.timeout}s", timeout=self.timeout
            ) from e
        finally:
            self.released = True
            logger.debug("cancellation_scope.released", timeout=self.timeout)
