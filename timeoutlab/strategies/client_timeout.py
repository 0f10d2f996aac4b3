"""
Client-level timeout: the bound is configured on the client itself and
covers the whole request/response cycle of every request that client sends,
from connect through the last body byte.

The same mechanism is run twice, once against a target that answers inside
the bound and once against a target that answers after it.
"""

from timeoutlab.core.errors import ConfigurationError
from timeoutlab.core.result import StrategyResult
from timeoutlab.strategies.base import (
    ClientFactory,
    StrategyConfig,
    default_client_factory,
    run_with_client,
)

SUCCESS_NAME = "client_success"
FAIL_NAME = "client_fail"


def client_deadline(config: StrategyConfig) -> float:
    if config.client_timeout is None:
        raise ConfigurationError("client timeout strategies need client_timeout")
    return config.client_timeout


async def run_client_timeout_success(
    config: StrategyConfig,
    *,
    client_factory: ClientFactory = default_client_factory,
) -> StrategyResult | None:
    # No per-phase timers: the one client deadline is the only bound.
    return await run_with_client(
        SUCCESS_NAME, config, None, client_factory, deadline=client_deadline(config)
    )


async def run_client_timeout_fail(
    config: StrategyConfig,
    *,
    client_factory: ClientFactory = default_client_factory,
) -> StrategyResult | None:
    return await run_with_client(
        FAIL_NAME, config, None, client_factory, deadline=client_deadline(config)
    )
