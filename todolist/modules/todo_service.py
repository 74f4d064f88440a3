"""In-memory todo store with filtering, sorting and pagination."""

import logging
from dataclasses import replace
from functools import cmp_to_key
from typing import Any
from typing import Dict
from typing import List
from typing import Mapping
from typing import Optional
from typing import Tuple

from todolist.exceptions import NotFoundError
from todolist.exceptions import ValidationError
from todolist.models.query import TodoQuery
from todolist.models.query import parse_query
from todolist.models.todo import Todo
from todolist.models.todo import utc_timestamp

logger = logging.getLogger(__name__)

MAX_TEXT_LENGTH = 500


def validate_todo_data(data: Optional[Mapping[str, Any]]) -> Tuple[str, Optional[bool]]:
    """Validate a full todo payload as used by create and update.

    Returns:
        The trimmed text and the completed flag, or None when no boolean
        completed flag was supplied.
    """
    if not isinstance(data, Mapping):
        data = {}
    text = data.get("text")
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Todo text is required and must be a non-empty string")
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError("Todo text must be less than 500 characters")
    completed = data.get("completed")
    return text.strip(), completed if isinstance(completed, bool) else None


def _validate_patch_text(text: Any) -> str:
    if not isinstance(text, str) or not text.strip():
        raise ValidationError("Todo text must be a non-empty string")
    if len(text) > MAX_TEXT_LENGTH:
        raise ValidationError("Todo text must be less than 500 characters")
    return text.strip()


def _matches(todo: Todo, name: str, expected: Any) -> bool:
    """Equality test for one filter; unknown fields never match."""
    actual = todo.field(name)
    if actual is None:
        return False
    if isinstance(expected, str) and not isinstance(actual, str):
        # Query string values arrive as text
        return str(actual).lower() == expected.lower()
    return actual == expected


def _sort_comparator(sort: Dict[str, int]):
    """Build a comparator evaluating sort keys in order; first differing key wins."""
    keys = [(name, order) for name, order in sort.items() if order in (1, -1)]

    def compare(a: Todo, b: Todo) -> int:
        for name, order in keys:
            a_val = a.field(name)
            b_val = b.field(name)
            if a_val is None or b_val is None:
                continue
            if a_val < b_val:
                return -order
            if a_val > b_val:
                return order
        return 0

    return compare


class TodoService:
    """Owns the todo records and the id counter.

    Records are kept in an insertion-ordered dict keyed by id, so lookups and
    removals are constant time while iteration follows creation order.
    """

    def __init__(self, app=None):
        self._todos: Dict[int, Todo] = {}
        self._next_id = 1
        if app is not None:
            self.init_app(app)

    def init_app(self, app):
        """Register the service with the Quart app."""
        app.extensions["todo_service"] = self

    def __len__(self) -> int:
        return len(self._todos)

    def reset(self):
        """Drop every record and restart ids at 1."""
        self._todos.clear()
        self._next_id = 1

    async def find(self, query=None) -> List[Todo]:
        """Return todos matching the query, as a new list."""
        params: TodoQuery = parse_query(query)
        result = list(self._todos.values())

        if params.completed is not None:
            result = [todo for todo in result if todo.completed == params.completed]
        for name, expected in params.filters.items():
            result = [todo for todo in result if _matches(todo, name, expected)]

        if params.sort:
            # list.sort is stable, so full ties keep their input order
            result.sort(key=cmp_to_key(_sort_comparator(params.sort)))

        result = result[params.skip :]
        if params.limit is not None:
            result = result[: params.limit]

        return result

    async def get(self, todo_id: int) -> Todo:
        """Get a todo by id."""
        todo = self._todos.get(todo_id)
        if todo is None:
            raise NotFoundError(f"Todo with id {todo_id} not found")
        return todo

    async def create(self, data: Optional[Mapping[str, Any]]) -> Todo:
        """Validate and store a new todo."""
        text, completed = validate_todo_data(data)
        now = utc_timestamp()
        todo = Todo(
            id=self._next_id,
            text=text,
            completed=bool(completed),
            created_at=now,
            updated_at=now,
        )
        self._next_id += 1
        self._todos[todo.id] = todo
        logger.debug(f"Stored todo {todo.id}")
        return todo

    async def update(self, todo_id: int, data: Optional[Mapping[str, Any]]) -> Todo:
        """Replace a todo's text and completed flag."""
        existing = await self.get(todo_id)
        text, completed = validate_todo_data(data)
        updated = replace(
            existing,
            text=text,
            completed=existing.completed if completed is None else completed,
            updated_at=utc_timestamp(),
        )
        self._todos[todo_id] = updated
        return updated

    async def patch(self, todo_id: int, data: Optional[Mapping[str, Any]]) -> Todo:
        """Change only the supplied fields of a todo."""
        existing = await self.get(todo_id)
        if not isinstance(data, Mapping):
            data = {}
        changes: Dict[str, Any] = {}
        if "text" in data:
            changes["text"] = _validate_patch_text(data["text"])
        if isinstance(data.get("completed"), bool):
            changes["completed"] = data["completed"]

        updated = replace(existing, updated_at=utc_timestamp(), **changes)
        self._todos[todo_id] = updated
        return updated

    async def remove(self, todo_id: int) -> Todo:
        """Delete a todo and return it as it was before removal."""
        todo = await self.get(todo_id)
        del self._todos[todo_id]
        return todo
