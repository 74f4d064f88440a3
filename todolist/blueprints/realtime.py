"""Websocket blueprint for real-time todo events and service calls."""

import asyncio
import json

from quart import Blueprint
from quart import current_app
from quart import websocket

from todolist.exceptions import NotFoundError
from todolist.exceptions import TodoServiceError
from todolist.exceptions import ValidationError
from todolist.modules.realtime import DISCONNECT
from todolist.modules.todo_dispatch import call_todo_service

realtime_bp = Blueprint("realtime", __name__)


async def _send_events(client_queue: asyncio.Queue):
    """Forward broadcast events from the client's queue to the socket."""
    while True:
        message = await client_queue.get()
        if message is DISCONNECT:
            await websocket.close(1008, "Too many pending events")
            return
        await websocket.send_json(message)


async def _handle_call(raw: str) -> dict:
    """Run one service call sent by the client and build the reply."""
    ref = None
    try:
        try:
            message = json.loads(raw)
        except ValueError:
            raise ValidationError("Message must be valid JSON")
        if not isinstance(message, dict):
            raise ValidationError("Message must be a JSON object")

        ref = message.get("ref")
        path = message.get("path", "todos")
        if path != "todos":
            raise NotFoundError(f"Service '{path}' not found")

        result = await call_todo_service(
            message.get("method"),
            message.get("id"),
            message.get("data"),
            message.get("query"),
        )
        return {"type": "result", "ref": ref, "data": result}
    except TodoServiceError as e:
        return {"type": "error", "ref": ref, "error": e.to_dict()}


async def _receive_calls():
    while True:
        raw = await websocket.receive()
        await websocket.send_json(await _handle_call(raw))


@realtime_bp.websocket("/ws")
async def todo_socket():
    """Websocket endpoint: pushes todo events and accepts service calls."""
    channel = current_app.extensions["realtime_channel"]

    client_id = f"client_{id(asyncio.current_task())}"
    client_queue: asyncio.Queue = asyncio.Queue()
    channel.add_client(client_id, client_queue)

    producer = consumer = None
    try:
        await websocket.accept()
        await websocket.send_json(
            {"type": "connected", "message": "Connected to todo events"}
        )

        producer = asyncio.create_task(_send_events(client_queue))
        consumer = asyncio.create_task(_receive_calls())
        done, _ = await asyncio.wait(
            {producer, consumer}, return_when=asyncio.FIRST_COMPLETED
        )
        for task in done:
            task.result()
    except asyncio.CancelledError:
        current_app.logger.info(f"Websocket client {client_id} disconnected")
        raise
    finally:
        for task in (producer, consumer):
            if task is not None:
                task.cancel()
        channel.remove_client(client_id)
        current_app.logger.debug(
            f"{channel.get_connected_clients_count()} websocket clients remain"
        )
