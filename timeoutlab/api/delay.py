"""
Delay endpoint: respond with a chosen status code after a chosen delay.

    GET /{status}?sleep={ms}
    GET /drip?numbytes={n}&duration={ms}

Mirrors the public status/sleep test service so the demo can run offline.
Delays are capped at SERVER_MAX_SLEEP_MS; the delay actually applied is
echoed in the X-Applied-Sleep-Ms header. /drip sends its headers at once and
then trickles the body, which per-read timeouts cannot catch.
"""

import asyncio
from http import HTTPStatus

import structlog
from fastapi import APIRouter, Query
from fastapi.responses import PlainTextResponse, Response, StreamingResponse

from timeoutlab.config import settings

router = APIRouter(tags=["delay"])
logger = structlog.get_logger()

APPLIED_SLEEP_HEADER = "X-Applied-Sleep-Ms"

# Statuses that must not carry a body
_BODYLESS = {204, 205, 304}


def _reason(status: int) -> str:
    try:
        return HTTPStatus(status).phrase
    except ValueError:
        return "Unknown"


def _capped(requested_ms: int) -> int:
    applied = min(requested_ms, settings.SERVER_MAX_SLEEP_MS)
    if applied < requested_ms:
        logger.info("delay.capped", requested_ms=requested_ms, capped_ms=applied)
    return applied


@router.get("/drip")
async def drip(
    numbytes: int = Query(10, ge=1, le=10240),
    duration: int = Query(1000, ge=0),
):
    """Send headers now, then `numbytes` bytes spread evenly over `duration` ms."""
    duration_ms = _capped(duration)
    interval = duration_ms / 1000 / numbytes

    async def body():
        for i in range(numbytes):
            if i:
                await asyncio.sleep(interval)
            yield b"*"

    return StreamingResponse(
        body(),
        media_type="application/octet-stream",
        headers={APPLIED_SLEEP_HEADER: str(duration_ms)},
    )


@router.get("/{status:int}")
async def delayed_status(status: int, sleep: int = Query(0, ge=0)):
    """Sleep for `sleep` ms (capped), then respond with `status`."""
    if not 200 <= status <= 599:
        return PlainTextResponse(
            f"status must be between 200 and 599, got {status}", status_code=400
        )

    delay_ms = _capped(sleep)
    await asyncio.sleep(delay_ms / 1000)

    headers = {APPLIED_SLEEP_HEADER: str(delay_ms)}
    if status in _BODYLESS:
        return Response(status_code=status, headers=headers)
    return PlainTextResponse(f"{status} {_reason(status)}", status_code=status, headers=headers)
