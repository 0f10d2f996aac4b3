"""
Cancellation context: the deadline is attached to the executing scope, not
to the client. The client is built without any timeout; the scope cancels
the in-flight request when its deadline passes and is released on every
exit path.
"""

import time
from collections.abc import Callable

import httpx
import structlog

from timeoutlab.core.cancellation import CancellationScope
from timeoutlab.core.errors import ConfigurationError, RequestBuildError, TimeoutLabError
from timeoutlab.core.result import StrategyResult
from timeoutlab.strategies.base import (
    ClientFactory,
    StrategyConfig,
    build_request,
    default_client_factory,
    elapsed_since,
)

logger = structlog.get_logger()

NAME = "context"


async def run_with_context(
    config: StrategyConfig,
    *,
    client_factory: ClientFactory = default_client_factory,
    on_scope: Callable[[CancellationScope], None] | None = None,
) -> StrategyResult | None:
    """GET under a CancellationScope of config.context_timeout seconds.

    Args:
        config: Target URL and context_timeout.
        client_factory: Builds the client; it is always built with timeout=None.
        on_scope: Receives the scope before it is entered, so callers can
            cancel it early or inspect it after the call.
    """
    if config.context_timeout is None:
        raise ConfigurationError("context strategy needs context_timeout")

    log = logger.bind(strategy=NAME)
    log.info("strategy.begin", url=config.url)

    async with client_factory(timeout=None) as client:
        try:
            request = build_request(client, config.url)
        except RequestBuildError as e:
            log.warning("strategy.request_invalid", error=str(e))
            return None

        scope = CancellationScope(config.context_timeout)
        if on_scope is not None:
            on_scope(scope)

        response = None
        error = None
        start = time.perf_counter()
        try:
            async with scope:
                response = await client.send(request)
        except (httpx.HTTPError, TimeoutLabError) as e:
            error = e
        elapsed = elapsed_since(start)

    return StrategyResult.from_outcome(NAME, elapsed, response=response, error=error)
