"""No timeout at all: wait as long as the server takes."""

from timeoutlab.core.result import StrategyResult
from timeoutlab.strategies.base import (
    ClientFactory,
    StrategyConfig,
    default_client_factory,
    run_with_client,
)

NAME = "no_timeout"


async def run_no_timeout(
    config: StrategyConfig,
    *,
    client_factory: ClientFactory = default_client_factory,
) -> StrategyResult | None:
    # httpx defaults to a 5s timeout on every phase; None turns all of them off.
    return await run_with_client(NAME, config, None, client_factory)
