from __future__ import annotations

from typing import Any, Optional

from fastapi import APIRouter, Depends, Header, Query, Request
from fastapi.responses import PlainTextResponse
from starlette.concurrency import run_in_threadpool

from pagehook.engine import WebhookEngine, get_engine
from server.config import get_settings

router = APIRouter(prefix="", tags=["webhook"])

_webhook_path = get_settings().resolved_webhook_path


@router.get(_webhook_path, response_class=PlainTextResponse)
async def verify_webhook(
    verify_token: Optional[str] = Query(default=None, alias="hub.verify_token"),
    challenge: Optional[str] = Query(default=None, alias="hub.challenge"),
    engine: WebhookEngine = Depends(get_engine),
) -> str:
    """Subscription handshake: echo `hub.challenge` when the token matches."""
    return engine.check_verify_token(verify_token, challenge)


@router.post(_webhook_path)
async def receive_webhook(
    request: Request,
    x_hub_signature: Optional[str] = Header(default=None),
    engine: WebhookEngine = Depends(get_engine),
) -> dict[str, Any]:
    """Receive a batch of events from the platform.

    - Reads the raw body once; the same bytes are verified and decoded
    - Runs handlers in a worker thread since they may block on I/O
    - Always answers 200 with `{"status": "ok"}` or `{"status": "not ok"}`
    """
    body = await request.body()
    ack = await run_in_threadpool(engine.process, body, x_hub_signature)
    return ack.body()
