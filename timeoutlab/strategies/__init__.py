from timeoutlab.strategies.base import (
    ClientFactory,
    Strategy,
    StrategyConfig,
    default_client_factory,
)
from timeoutlab.strategies.client_timeout import (
    run_client_timeout_fail,
    run_client_timeout_success,
)
from timeoutlab.strategies.context import run_with_context
from timeoutlab.strategies.dial import run_dial_timeout
from timeoutlab.strategies.unbounded import run_no_timeout

# Launch order of the demo run.
STRATEGIES: dict[str, Strategy] = {
    "no_timeout": run_no_timeout,
    "client_success": run_client_timeout_success,
    "client_fail": run_client_timeout_fail,
    "context": run_with_context,
    "dial": run_dial_timeout,
}

__all__ = [
    "STRATEGIES",
    "ClientFactory",
    "Strategy",
    "StrategyConfig",
    "default_client_factory",
    "run_client_timeout_fail",
    "run_client_timeout_success",
    "run_dial_timeout",
    "run_no_timeout",
    "run_with_context",
]
