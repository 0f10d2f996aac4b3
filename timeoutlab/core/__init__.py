from timeoutlab.core.cancellation import CancellationScope
from timeoutlab.core.client import DeadlineClient
from timeoutlab.core.errors import (
    ConfigurationError,
    DeadlineExceededError,
    RequestBuildError,
    ScopeCancelledError,
    TimeoutLabError,
)
from timeoutlab.core.result import ErrorCode, StrategyResult, classify_error

__all__ = [
    "CancellationScope",
    "ConfigurationError",
    "DeadlineClient",
    "DeadlineExceededError",
    "ErrorCode",
    "RequestBuildError",
    "ScopeCancelledError",
    "StrategyResult",
    "TimeoutLabError",
    "classify_error",
]
