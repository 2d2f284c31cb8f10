"""
Account Service — SSE change stream

Architecture:
  - Every write to the Redis store publishes the changed key name on
    CHANGE_CHANNEL
  - This endpoint subscribes and streams the key names to the browser
    EventSource; the payload never contains data, clients re-fetch
"""
import json
from typing import AsyncGenerator

from fastapi import APIRouter, HTTPException, Request
from fastapi.responses import StreamingResponse

from nexus_accounts.core.config import get_settings
from nexus_accounts.core.redis_client import get_async_redis

router = APIRouter(prefix="/changes", tags=["changes"])


async def _sse_generator(request: Request) -> AsyncGenerator[str, None]:
    """Subscribe to the change channel and yield SSE events."""
    settings = get_settings()
    redis = get_async_redis()
    pubsub = redis.pubsub()
    await pubsub.subscribe(settings.CHANGE_CHANNEL)

    try:
        yield ": connected to storage changes\n\n"
        yield f"retry: {settings.SSE_RETRY_MILLISECONDS}\n\n"

        while True:
            if await request.is_disconnected():
                break

            message = await pubsub.get_message(
                ignore_subscribe_messages=True,
                timeout=settings.SSE_KEEPALIVE_INTERVAL_SECONDS,
            )
            if message and message["type"] == "message":
                yield f"event: storage_change\ndata: {json.dumps({'key': message['data']})}\n\n"
            else:
                yield ": keepalive\n\n"

    finally:
        await pubsub.unsubscribe(settings.CHANGE_CHANNEL)
        await pubsub.aclose()


@router.get("/stream")
async def stream_changes(request: Request):
    """
    SSE endpoint. Emits one `storage_change` event per modified key
    (accounts, current-session, notifications).
    """
    if get_settings().STORAGE_BACKEND != "redis":
        raise HTTPException(status_code=503, detail="Change stream requires the redis storage backend.")

    return StreamingResponse(
        _sse_generator(request),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "X-Accel-Buffering": "no",  # Disable Nginx buffering
            "Connection": "keep-alive",
        },
    )
