"""
Dial timeout: only connection establishment is bounded.

Once the TCP (and TLS) handshake completes the request waits for the
response with no limit, so a slow server still gets all the time it needs.
"""

import httpx

from timeoutlab.core.errors import ConfigurationError
from timeoutlab.core.result import StrategyResult
from timeoutlab.strategies.base import (
    ClientFactory,
    StrategyConfig,
    default_client_factory,
    run_with_client,
)

NAME = "dial"


def dial_timeout(config: StrategyConfig) -> httpx.Timeout:
    if config.dial_timeout is None:
        raise ConfigurationError("dial strategy needs dial_timeout")
    return httpx.Timeout(None, connect=config.dial_timeout)


async def run_dial_timeout(
    config: StrategyConfig,
    *,
    client_factory: ClientFactory = default_client_factory,
) -> StrategyResult | None:
    return await run_with_client(NAME, config, dial_timeout(config), client_factory)
