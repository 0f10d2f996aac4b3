"""Pytest fixtures: a live local delay server and injectable client factories.

Timing-sensitive tests use sub-second delays against the local server so the
suite stays offline and fast.
"""

import socket
from collections.abc import Callable, Iterator

import httpx
import pytest

from timeoutlab.config import target_url
from timeoutlab.core.client import DeadlineClient
from timeoutlab.server import serve_in_thread

# Delays and bounds shared by timing tests (seconds / milliseconds)
FAST_MS = 100
SLOW_MS = 800
SHORT_TIMEOUT = 0.3
LONG_TIMEOUT = 2.0


@pytest.fixture(scope="session")
def delay_server() -> Iterator[str]:
    with serve_in_thread("127.0.0.1", 0) as url:
        yield url


@pytest.fixture
def make_url(delay_server: str) -> Callable[[int, int], str]:
    def _make(status: int, sleep_ms: int) -> str:
        return target_url(delay_server, status, sleep_ms)

    return _make


@pytest.fixture
def refused_url() -> str:
    """URL of a local port with nothing listening on it."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        port = sock.getsockname()[1]
    return f"http://127.0.0.1:{port}/200?sleep=0"


class RecordingFactory:
    """Client factory test double.

    Records the timeout and deadline each strategy asks for and answers every request
    through an httpx.MockTransport, so no socket is opened.
    """

    def __init__(self, handler: Callable[[httpx.Request], httpx.Response] | None = None):
        self.timeouts: list[httpx.Timeout | None] = []
        self.deadlines: list[float | None] = []
        self.requests: list[httpx.Request] = []
        self._handler = handler or (lambda request: httpx.Response(200, text="200 OK"))

    def _handle(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._handler(request)

    def __call__(
        self, *, timeout: httpx.Timeout | None, deadline: float | None = None
    ) -> httpx.AsyncClient:
        self.timeouts.append(timeout)
        self.deadlines.append(deadline)
        return DeadlineClient(
            timeout=timeout, deadline=deadline, transport=httpx.MockTransport(self._handle)
        )


@pytest.fixture
def recording_factory() -> RecordingFactory:
    return RecordingFactory()
