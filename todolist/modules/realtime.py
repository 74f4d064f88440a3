"""Real-time channel pushing todo events to connected websocket clients."""

import asyncio
import logging
from typing import Dict
from typing import Optional

logger = logging.getLogger(__name__)

TODO_EVENTS = ("created", "updated", "patched", "removed")
MAX_PENDING_EVENTS = 100

# Queued to tell a client handler its connection was dropped
DISCONNECT = None


class RealtimeChannel:
    """Keeps one outbound queue per websocket client and broadcasts to all of them."""

    def __init__(self, app=None):
        self._clients: Dict[str, asyncio.Queue] = {}
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Subscribe to todo events and register with the app."""
        event_handler = app.extensions["event_handler"]
        for event in TODO_EVENTS:
            event_handler.on(f"todos.{event}", self._make_handler(event))

        app.extensions["realtime_channel"] = self
        app.logger.info("Realtime channel initialised")

    def _make_handler(self, event: str):
        async def handler(data: Optional[dict] = None):
            await self.broadcast_event(
                {"type": "event", "path": "todos", "event": event, "data": data}
            )

        return handler

    def get_connected_clients_count(self) -> int:
        """Get the number of connected websocket clients."""
        return len(self._clients)

    def add_client(self, client_id: str, client_queue: asyncio.Queue):
        """Add a new websocket client."""
        self._clients[client_id] = client_queue
        logger.info(f"Websocket client {client_id} connected")

    def remove_client(self, client_id: str):
        """Remove a websocket client."""
        self._clients.pop(client_id, None)
        logger.info(f"Websocket client {client_id} cleaned up")

    async def broadcast_event(self, message: dict):
        """Queue a message for every connected client."""
        if not self.get_connected_clients_count():
            logger.debug(f"No websocket clients connected for event: {message}")
            return

        logger.debug(
            f"Broadcasting event to {self.get_connected_clients_count()} clients"
        )

        dead_clients = []
        for client_id, queue in list(self._clients.items()):
            if queue.qsize() >= MAX_PENDING_EVENTS:
                logger.warning(
                    f"Client {client_id} queue too large, dropping connection"
                )
                dead_clients.append(client_id)
                queue.put_nowait(DISCONNECT)
                continue
            queue.put_nowait(message)

        for client_id in dead_clients:
            self._clients.pop(client_id, None)
            logger.info(f"Removed dead websocket client: {client_id}")
