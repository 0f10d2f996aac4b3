"""
Strategy outcome record and error classification.

Every strategy funnels its failure through classify_error() so the
error_code field is populated the same way on every path.
"""

import enum
from dataclasses import dataclass
from datetime import timedelta

import httpx

from timeoutlab.core.errors import DeadlineExceededError, ScopeCancelledError


class ErrorCode(str, enum.Enum):
    DEADLINE_EXCEEDED = "deadline_exceeded"
    CONNECT_TIMEOUT = "connect_timeout"
    CONNECT_ERROR = "connect_error"
    TRANSPORT_ERROR = "transport_error"
    DECODING_ERROR = "decoding_error"
    REQUEST_ERROR = "request_error"
    CANCELLED = "cancelled"
    UNKNOWN = "unknown"


def classify_error(exc: BaseException) -> ErrorCode:
    """Map a caught exception to its ErrorCode."""
    # ConnectTimeout subclasses TimeoutException, check it first
    if isinstance(exc, httpx.ConnectTimeout):
        return ErrorCode.CONNECT_TIMEOUT
    if isinstance(exc, (httpx.TimeoutException, DeadlineExceededError)):
        return ErrorCode.DEADLINE_EXCEEDED
    if isinstance(exc, ScopeCancelledError):
        return ErrorCode.CANCELLED
    if isinstance(exc, httpx.ConnectError):
        return ErrorCode.CONNECT_ERROR
    if isinstance(exc, httpx.TransportError):
        return ErrorCode.TRANSPORT_ERROR
    if isinstance(exc, httpx.DecodingError):
        return ErrorCode.DECODING_ERROR
    if isinstance(exc, httpx.RequestError):
        return ErrorCode.REQUEST_ERROR
    return ErrorCode.UNKNOWN


@dataclass(frozen=True)
class StrategyResult:
    strategy: str
    elapsed: timedelta
    response: httpx.Response | None = None
    error: Exception | None = None
    error_code: ErrorCode | None = None

    @property
    def succeeded(self) -> bool:
        return self.error is None

    @property
    def elapsed_seconds(self) -> float:
        return self.elapsed.total_seconds()

    @property
    def status_code(self) -> int | None:
        return self.response.status_code if self.response is not None else None

    @classmethod
    def from_outcome(
        cls,
        strategy: str,
        elapsed: timedelta,
        response: httpx.Response | None = None,
        error: Exception | None = None,
    ) -> "StrategyResult":
        """Build a result, classifying the error when there is one."""
        return cls(
            strategy=strategy,
            elapsed=elapsed,
            response=response,
            error=error,
            error_code=classify_error(error) if error is not None else None,
        )
