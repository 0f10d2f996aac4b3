"""
Orchestrator: run every strategy concurrently, wait for all of them, and
report each outcome as it completes.
"""

import asyncio
import time

import structlog

from timeoutlab.config import default_configs, settings
from timeoutlab.core.result import StrategyResult
from timeoutlab.output.report import report, report_crash
from timeoutlab.strategies import STRATEGIES, ClientFactory, StrategyConfig, default_client_factory

logger = structlog.get_logger()


def configure_logging():
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            (
                structlog.dev.ConsoleRenderer()
                if settings.APP_ENV == "development"
                else structlog.processors.JSONRenderer()
            ),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )


async def _run_one(
    name: str,
    config: StrategyConfig,
    client_factory: ClientFactory,
) -> StrategyResult | None:
    """Run a single strategy; nothing it raises escapes to the other strategies."""
    strategy = STRATEGIES[name]
    try:
        result = await strategy(config, client_factory=client_factory)
    except Exception as e:
        report_crash(name, e)
        return None
    report(name, result)
    return result


async def run(
    configs: dict[str, StrategyConfig] | None = None,
    *,
    client_factory: ClientFactory = default_client_factory,
) -> dict[str, StrategyResult | None]:
    """Launch one task per configured strategy and join on all of them.

    Args:
        configs: Strategy name -> config. Defaults to the five demo configs
            built from settings.
        client_factory: Passed to every strategy; swap it to inject a transport.

    Returns:
        Strategy name -> result (None when the strategy aborted or crashed),
        in launch order.
    """
    configs = configs if configs is not None else default_configs()
    unknown = set(configs) - set(STRATEGIES)
    if unknown:
        raise KeyError(f"Unknown strategies: {sorted(unknown)}")

    start = time.perf_counter()
    results = await asyncio.gather(
        *(_run_one(name, cfg, client_factory) for name, cfg in configs.items())
    )
    logger.info(
        "run.finished",
        strategies=len(results),
        elapsed_s=round(time.perf_counter() - start, 3),
    )
    return dict(zip(configs, results))
