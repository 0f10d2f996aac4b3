"""
httpx client with a whole-request deadline.

httpx timeouts are per phase: each read gets a fresh timer, so a server that
trickles its body can keep a request alive indefinitely. DeadlineClient adds
one bound over the entire send, from connect through the last body byte.
"""

import asyncio

import httpx

from timeoutlab.core.errors import DeadlineExceededError


class DeadlineClient(httpx.AsyncClient):
    def __init__(self, *, deadline: float | None = None, **kwargs):
        super().__init__(**kwargs)
        self.deadline = deadline

    async def send(self, request: httpx.Request, **kwargs) -> httpx.Response:
        if self.deadline is None:
            return await super().send(request, **kwargs)

        timeout_cm = asyncio.timeout(self.deadline)
        try:
            async with timeout_cm:
                return await super().send(request, **kwargs)
        except TimeoutError as e:
            if not timeout_cm.expired():
                raise
            raise DeadlineExceededError(
                f"client deadline of {self.deadline}s exceeded before the response completed",
                timeout=self.deadline,
            ) from e
