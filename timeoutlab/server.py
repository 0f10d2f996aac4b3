"""
Local delay server.

`app` serves the delay endpoint; serve_in_thread() runs it under uvicorn on a
background thread so the demo (and the tests) can target it without a
network dependency.
"""

import threading
import time
from collections.abc import Iterator
from contextlib import contextmanager

import structlog
import uvicorn
from fastapi import FastAPI

from timeoutlab.api.delay import router as delay_router
from timeoutlab.middleware.error_handler import global_exception_handler
from timeoutlab.middleware.logging import LoggingMiddleware

logger = structlog.get_logger()


app = FastAPI(title="timeoutlab delay server")

app.add_middleware(LoggingMiddleware)
app.add_exception_handler(Exception, global_exception_handler)


@app.get("/health")
async def health():
    return {"status": "ok"}


app.include_router(delay_router)


class _ThreadedServer(uvicorn.Server):
    """uvicorn server that can run off the main thread."""

    def install_signal_handlers(self):
        # Signal handlers can only be installed from the main thread
        pass


@contextmanager
def serve_in_thread(host: str = "127.0.0.1", port: int = 0, startup_timeout: float = 10.0) -> Iterator[str]:
    """Run the delay server in a daemon thread and yield its base URL.

    Port 0 picks a free ephemeral port.
    """
    config = uvicorn.Config(
        app,
        host=host,
        port=port,
        lifespan="off",
        log_level="warning",
        timeout_graceful_shutdown=1,
    )
    server = _ThreadedServer(config=config)
    thread = threading.Thread(target=server.run, name="timeoutlab-delay-server", daemon=True)
    thread.start()

    deadline = time.monotonic() + startup_timeout
    while not server.started:
        if not thread.is_alive() or time.monotonic() > deadline:
            server.should_exit = True
            raise RuntimeError(f"delay server failed to start on {host}:{port}")
        time.sleep(0.01)

    bound_port = server.servers[0].sockets[0].getsockname()[1]
    url = f"http://{host}:{bound_port}"
    logger.info("server.started", url=url)
    try:
        yield url
    finally:
        server.should_exit = True
        thread.join(timeout=5)
        logger.info("server.stopped", url=url)
