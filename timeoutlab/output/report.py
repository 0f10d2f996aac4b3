"""
Outcome reporter: one log line per finished strategy.

A strategy that returned None never sent its request (the request could
not be built) and is reported as aborted. A strategy that raised instead of
returning is reported as crashed; it may or may not have sent its request.
"""

import structlog

from timeoutlab.core.result import StrategyResult

logger = structlog.get_logger()


def report(name: str, result: StrategyResult | None) -> None:
    if result is None:
        logger.error("strategy.aborted", strategy=name)
        return

    if result.succeeded:
        logger.info(
            "strategy.succeeded",
            strategy=name,
            status=result.status_code,
            elapsed_s=round(result.elapsed_seconds, 3),
        )
    else:
        logger.warning(
            "strategy.failed",
            strategy=name,
            error_code=result.error_code.value,
            error=str(result.error) or type(result.error).__name__,
            elapsed_s=round(result.elapsed_seconds, 3),
        )


def report_crash(name: str, exc: Exception) -> None:
    logger.error(
        "strategy.crashed",
        strategy=name,
        error_type=type(exc).__name__,
        error=str(exc),
        exc_info=exc,
    )
