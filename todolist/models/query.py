"""Query model for listing todos."""

import re
from typing import Any
from typing import Dict
from typing import Mapping
from typing import Optional
from typing import Union

from pydantic import BaseModel
from pydantic import ConfigDict
from pydantic import Field
from pydantic import ValidationError as PydanticValidationError

from todolist.exceptions import ValidationError

_SORT_KEY = re.compile(r"^\$sort\[(?P<field>[^\]]+)\]$")


class TodoQuery(BaseModel):
    """Filter, sort and pagination parameters accepted by ``find``.

    Field aliases are the query parameter names used on the wire, so a
    ``{"completed": True, "$sort": {"id": -1}, "$skip": 1, "$limit": 5}``
    mapping validates directly. Any other non-``$`` key is kept as an
    equality filter on the record field of that name.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    completed: Optional[bool] = Field(
        default=None, description="Only return todos with this completed flag"
    )
    sort: Optional[Dict[str, int]] = Field(
        default=None,
        alias="$sort",
        description="Field name to direction (1 ascending, -1 descending)",
    )
    skip: int = Field(
        default=0, ge=0, alias="$skip", description="Number of leading results to drop"
    )
    limit: Optional[int] = Field(
        default=None,
        ge=0,
        alias="$limit",
        description="Maximum number of results after skipping",
    )

    @property
    def filters(self) -> Dict[str, Any]:
        """Equality filters on fields other than ``completed``."""
        extra = self.model_extra or {}
        return {key: value for key, value in extra.items() if not key.startswith("$")}

    @classmethod
    def from_args(cls, args: Mapping[str, Any]) -> "TodoQuery":
        """Build a query from flat request arguments.

        Sort keys use bracket notation, e.g. ``$sort[createdAt]=-1``. Keys are
        evaluated in the order they appear in the query string.
        """
        raw: Dict[str, Any] = {}
        sort: Dict[str, Any] = {}
        for key, value in args.items():
            match = _SORT_KEY.match(key)
            if match:
                sort[match.group("field")] = value
            else:
                raw[key] = value
        if sort:
            raw["$sort"] = sort
        return parse_query(raw)


def parse_query(query: Union["TodoQuery", Mapping[str, Any], None]) -> TodoQuery:
    """Coerce a mapping into a TodoQuery, raising ValidationError when malformed."""
    if query is None:
        return TodoQuery()
    if isinstance(query, TodoQuery):
        return query
    try:
        return TodoQuery.model_validate(dict(query))
    except PydanticValidationError as e:
        error = e.errors()[0]
        location = ".".join(str(part) for part in error["loc"]) or "query"
        raise ValidationError(
            f"Invalid query parameter '{location}': {error['msg']}"
        ) from e
    except (TypeError, ValueError) as e:
        raise ValidationError(f"Invalid query: {e}") from e
