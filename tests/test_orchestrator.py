import time

import httpx
import pytest
from structlog.testing import capture_logs

from timeoutlab.core.result import ErrorCode
from timeoutlab.main import run
from timeoutlab.strategies import StrategyConfig
from tests.conftest import FAST_MS, LONG_TIMEOUT, SHORT_TIMEOUT, SLOW_MS, RecordingFactory

SLOW_S = SLOW_MS / 1000


@pytest.fixture
def local_configs(make_url) -> dict[str, StrategyConfig]:
    """The five demo strategies, scaled down to sub-second delays."""
    fail_url = make_url(504, SLOW_MS)
    return {
        "no_timeout": StrategyConfig(url=make_url(200, SLOW_MS)),
        "client_success": StrategyConfig(url=make_url(200, FAST_MS), client_timeout=LONG_TIMEOUT),
        "client_fail": StrategyConfig(url=fail_url, client_timeout=SHORT_TIMEOUT),
        "context": StrategyConfig(url=fail_url, context_timeout=SHORT_TIMEOUT),
        "dial": StrategyConfig(url=fail_url, dial_timeout=SHORT_TIMEOUT),
    }


@pytest.mark.asyncio
async def test_run_classifies_every_strategy(local_configs):
    results = await run(local_configs)

    assert list(results) == list(local_configs)
    assert results["no_timeout"].succeeded
    assert results["client_success"].succeeded
    assert results["dial"].succeeded
    assert results["dial"].status_code == 504
    assert results["client_fail"].error_code is ErrorCode.DEADLINE_EXCEEDED
    assert results["context"].error_code is ErrorCode.DEADLINE_EXCEEDED


@pytest.mark.asyncio
async def test_run_is_concurrent(local_configs):
    start = time.perf_counter()
    results = await run(local_configs)
    total = time.perf_counter() - start

    individual = [r.elapsed_seconds for r in results.values()]
    assert total < sum(individual)
    assert total < max(individual) + 0.5


@pytest.mark.asyncio
async def test_run_logs_begin_and_outcome_per_strategy(local_configs):
    with capture_logs() as logs:
        await run(local_configs)

    events = [entry["event"] for entry in logs]
    assert events.count("strategy.begin") == 5
    assert events.count("strategy.succeeded") == 3
    assert events.count("strategy.failed") == 2
    assert events[-1] == "run.finished"

    failed = [entry for entry in logs if entry["event"] == "strategy.failed"]
    assert {entry["strategy"] for entry in failed} == {"client_fail", "context"}
    assert all(entry["error_code"] == "deadline_exceeded" for entry in failed)


@pytest.mark.asyncio
async def test_one_broken_strategy_does_not_stop_the_others():
    configs = {
        # Missing client_timeout: the strategy raises ConfigurationError
        "client_fail": StrategyConfig(url="http://delay.test/504"),
        "no_timeout": StrategyConfig(url="http://delay.test/200"),
        "dial": StrategyConfig(url="http://delay\x00.test/200", dial_timeout=1.0),
    }

    with capture_logs() as logs:
        results = await run(configs, client_factory=RecordingFactory())

    assert results["client_fail"] is None
    assert results["dial"] is None
    assert results["no_timeout"].succeeded

    events = [entry["event"] for entry in logs]
    assert "strategy.crashed" in events
    assert events.count("strategy.crashed") == 1
    assert events.count("strategy.aborted") == 1


@pytest.mark.asyncio
async def test_run_defaults_to_demo_configs(recording_factory):
    results = await run(client_factory=recording_factory)

    assert list(results) == ["no_timeout", "client_success", "client_fail", "context", "dial"]
    assert all(r.succeeded for r in results.values())
    assert len(recording_factory.requests) == 5


@pytest.mark.asyncio
async def test_run_rejects_unknown_strategy():
    with pytest.raises(KeyError):
        await run({"retry_forever": StrategyConfig(url="http://delay.test/200")})


@pytest.mark.asyncio
async def test_response_errors_are_reported_as_failures():
    def corrupt_gzip(request):
        return httpx.Response(200, headers={"content-encoding": "gzip"}, content=b"not gzip")

    configs = {
        "no_timeout": StrategyConfig(url="http://delay.test/200"),
        "context": StrategyConfig(url="http://delay.test/200", context_timeout=1.0),
    }

    with capture_logs() as logs:
        results = await run(configs, client_factory=RecordingFactory(corrupt_gzip))

    assert all(r.error_code is ErrorCode.DECODING_ERROR for r in results.values())
    events = [entry["event"] for entry in logs]
    assert events.count("strategy.failed") == 2
    assert "strategy.crashed" not in events
    assert "strategy.aborted" not in events
