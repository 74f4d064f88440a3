"""Runs todo service calls for the transports and publishes mutation events."""

from typing import Any
from typing import Optional

from quart import current_app

from todolist.exceptions import MethodNotAllowed
from todolist.exceptions import ValidationError
from todolist.models.todo import Todo

SERVICE_METHODS = ("find", "get", "create", "update", "patch", "remove")

# Service method -> event emitted after it succeeds
MUTATION_EVENTS = {
    "create": "created",
    "update": "updated",
    "patch": "patched",
    "remove": "removed",
}

_ACTIVITY_MESSAGES = {
    "created": "A new todo has been created",
    "updated": "A todo has been updated",
    "patched": "A todo has been patched",
    "removed": "A todo has been removed",
}


async def publish_todo_event(event: str, todo: Todo):
    """Log a successful mutation and notify event subscribers."""
    payload = todo.to_dict()
    current_app.logger.info(f"{_ACTIVITY_MESSAGES[event]}: {payload}")
    event_handler = current_app.extensions["event_handler"]
    await event_handler.emit(f"todos.{event}", payload)


async def call_todo_service(
    method: str,
    todo_id: Optional[Any] = None,
    data: Optional[Any] = None,
    query: Optional[Any] = None,
):
    """Call a todo service method and return its wire representation.

    Mutations are published only once the store change has taken effect.
    """
    if method not in SERVICE_METHODS:
        raise MethodNotAllowed(f"Method '{method}' not allowed on todos")

    service = current_app.extensions["todo_service"]

    if method == "find":
        return [todo.to_dict() for todo in await service.find(query)]
    if method == "create":
        result = await service.create(data)
    else:
        if isinstance(todo_id, bool) or not isinstance(todo_id, int):
            raise ValidationError(f"Invalid todo id: {todo_id!r}")
        if method == "get":
            result = await service.get(todo_id)
        elif method == "update":
            result = await service.update(todo_id, data)
        elif method == "patch":
            result = await service.patch(todo_id, data)
        else:
            result = await service.remove(todo_id)

    event = MUTATION_EVENTS.get(method)
    if event:
        await publish_todo_event(event, result)
    return result.to_dict()
