"""
Shared plumbing for the timeout strategies.

Each strategy owns its own httpx.AsyncClient for the duration of one call;
nothing here is shared between concurrently running strategies.
"""

import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol

import httpx
import structlog

from timeoutlab.core.client import DeadlineClient
from timeoutlab.core.errors import ConfigurationError, RequestBuildError, TimeoutLabError
from timeoutlab.core.result import StrategyResult

logger = structlog.get_logger()


@dataclass(frozen=True)
class StrategyConfig:
    """Target and time bounds for one strategy run. Timeouts are in seconds."""

    url: str
    client_timeout: float | None = None
    context_timeout: float | None = None
    dial_timeout: float | None = None

    def __post_init__(self):
        for name in ("client_timeout", "context_timeout", "dial_timeout"):
            value = getattr(self, name)
            if value is not None and value < 0:
                raise ConfigurationError(f"{name} must be >= 0, got {value}")


class ClientFactory(Protocol):
    def __call__(
        self, *, timeout: httpx.Timeout | None, deadline: float | None = None
    ) -> httpx.AsyncClient: ...


def default_client_factory(
    *, timeout: httpx.Timeout | None, deadline: float | None = None
) -> httpx.AsyncClient:
    """Per-phase bounds go to httpx; deadline bounds the whole send."""
    return DeadlineClient(timeout=timeout, deadline=deadline)


Strategy = Callable[..., Awaitable[StrategyResult | None]]


def build_request(client: httpx.AsyncClient, url: str, method: str = "GET") -> httpx.Request:
    """Construct the outbound request without sending it."""
    try:
        return client.build_request(method, url)
    except httpx.InvalidURL as e:
        raise RequestBuildError(str(e), url=url) from e


def elapsed_since(start: float) -> timedelta:
    return timedelta(seconds=time.perf_counter() - start)


async def send_timed(name: str, client: httpx.AsyncClient, request: httpx.Request) -> StrategyResult:
    """Send one request and time it. Request and timeout errors land in the result."""
    response = None
    error = None
    start = time.perf_counter()
    try:
        response = await client.send(request)
    except (httpx.HTTPError, TimeoutLabError) as e:
        error = e
    return StrategyResult.from_outcome(name, elapsed_since(start), response=response, error=error)


async def run_with_client(
    name: str,
    config: StrategyConfig,
    timeout: httpx.Timeout | None,
    client_factory: ClientFactory = default_client_factory,
    deadline: float | None = None,
) -> StrategyResult | None:
    """Build a client with the given bounds, then build and send one GET.

    Returns None when the request cannot be constructed; nothing is sent then.
    """
    log = logger.bind(strategy=name)
    log.info("strategy.begin", url=config.url)
    async with client_factory(timeout=timeout, deadline=deadline) as client:
        try:
            request = build_request(client, config.url)
        except RequestBuildError as e:
            log.warning("strategy.request_invalid", error=str(e))
            return None
        return await send_timed(name, client, request)
