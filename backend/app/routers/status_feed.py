"""WebSocket status feed — pushes every committed booking status change to clients."""
import asyncio
import logging
from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect

from app.services.notifications import BroadcastRelay, StatusEvent, get_relay

logger = logging.getLogger(__name__)
router = APIRouter()


@router.websocket("/ws")
async def status_feed(websocket: WebSocket, relay: BroadcastRelay = Depends(get_relay)):
    """Stream `status_update` messages until the client disconnects.

    Events are published from request worker threads, so they are handed to
    this connection's loop with call_soon_threadsafe.
    """
    loop = asyncio.get_running_loop()
    queue: asyncio.Queue[StatusEvent] = asyncio.Queue()

    def deliver(event: StatusEvent) -> None:
        loop.call_soon_threadsafe(queue.put_nowait, event)

    async def forward():
        while True:
            event = await queue.get()
            await websocket.send_json({"type": "status_update", **event.model_dump(mode="json")})

    async def drain():
        # Inbound messages are ignored; receiving is how a disconnect is noticed.
        while True:
            await websocket.receive_text()

    relay.subscribe(deliver)
    try:
        await websocket.accept()
        logger.info("Status feed client connected (%d total)", relay.subscriber_count)
        tasks = [asyncio.create_task(forward()), asyncio.create_task(drain())]
        done, pending = await asyncio.wait(tasks, return_when=asyncio.FIRST_COMPLETED)
        for task in pending:
            task.cancel()
        await asyncio.gather(*pending, return_exceptions=True)
        for task in done:
            exc = task.exception()
            if exc is not None and not isinstance(exc, WebSocketDisconnect):
                raise exc
    finally:
        relay.unsubscribe(deliver)
        logger.info("Status feed client disconnected")
