"""Todo record model."""

from dataclasses import dataclass
from datetime import datetime
from datetime import timezone
from typing import Any
from typing import Dict

# Wire field name -> attribute name
WIRE_FIELDS = {
    "id": "id",
    "text": "text",
    "completed": "completed",
    "createdAt": "created_at",
    "updatedAt": "updated_at",
}


def utc_timestamp() -> str:
    """Return the current UTC time as an ISO-8601 string with millisecond precision."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


@dataclass(frozen=True, slots=True)
class Todo:
    """A single todo item as held by the store.

    Records are immutable; mutations replace the stored record with a new one.
    """

    id: int
    text: str
    completed: bool
    created_at: str
    updated_at: str

    def field(self, name: str) -> Any:
        """Get a field by its wire name, or None for unknown fields."""
        attr = WIRE_FIELDS.get(name)
        if attr is None:
            return None
        return getattr(self, attr)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase representation sent to clients."""
        return {wire: getattr(self, attr) for wire, attr in WIRE_FIELDS.items()}

    def __repr__(self):
        return f"<Todo(id={self.id}, text={self.text!r}, completed={self.completed})>"
