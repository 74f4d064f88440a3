"""EventHandler is the hub for in-process event notifications."""

import asyncio
import logging
from collections import defaultdict
from typing import Awaitable
from typing import Callable
from typing import Optional

logger = logging.getLogger(__name__)

EventCallback = Callable[[dict], Awaitable[None]]


class EventHandler:
    """Fans out named events to async subscribers as background tasks."""

    def __init__(self, app=None):
        """Initialise the EventHandler.

        Args:
            app (Quart, optional): The Quart application instance.
        """
        self.subscribers = defaultdict(list)
        self._tasks: set = set()
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Initialise the EventHandler with the Quart app.

        Args:
            app (Quart): The Quart application instance.
        """
        app.extensions["event_handler"] = self
        app.after_serving(self.drain)

    def on(self, event: str, callback: EventCallback):
        """Subscribe to an event.

        Args:
            event: Event name to subscribe to
            callback: Coroutine function called with the event data
        """
        self.subscribers[event].append(callback)

    def off(self, event: str, callback: EventCallback):
        """Unsubscribe a callback; unknown callbacks are ignored."""
        if callback in self.subscribers.get(event, []):
            self.subscribers[event].remove(callback)

    async def emit(self, event: str, data: Optional[dict] = None):
        """Emit an event to every subscriber.

        Callbacks run as tasks so a slow or failing subscriber never delays
        or breaks the caller.

        Args:
            event: Event name to emit
            data: Optional event data
        """
        data = data or {}

        for callback in list(self.subscribers.get(event, [])):
            task = asyncio.create_task(callback(data))
            self._tasks.add(task)
            task.add_done_callback(self._handle_task_done)

    async def drain(self):
        """Wait for in-flight subscriber tasks to finish."""
        if self._tasks:
            await asyncio.gather(*list(self._tasks), return_exceptions=True)

    def _handle_task_done(self, task: asyncio.Task):
        """Log exceptions from background subscriber tasks."""
        self._tasks.discard(task)
        if task.cancelled():
            return
        exc = task.exception()
        if exc is not None:
            logger.error(
                f"Exception in background event handler task: {exc}",
                exc_info=(type(exc), exc, exc.__traceback__),
            )
