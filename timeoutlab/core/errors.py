class TimeoutLabError(Exception):
    """Base exception for timeoutlab."""


class ConfigurationError(TimeoutLabError):
    """A strategy or setting has an invalid value."""


class RequestBuildError(TimeoutLabError):
    """The outbound request could not be constructed (malformed URL or method)."""

    def __init__(self, message: str, *, url: str):
        super().__init__(message)
        self.url = url


class DeadlineExceededError(TimeoutLabError):
    """A cancellation scope reached its deadline before the work finished."""

    def __init__(self, message: str, *, timeout: float | None):
        super().__init__(message)
        self.timeout = timeout


class ScopeCancelledError(TimeoutLabError):
    """A cancellation scope was cancelled explicitly before its deadline."""
