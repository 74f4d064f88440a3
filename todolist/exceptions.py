"""Errors raised by the todo service and surfaced to HTTP and websocket callers."""


class TodoServiceError(Exception):
    """Base class for errors that map onto a client-facing error body."""

    code = 500
    name = "GeneralError"
    class_name = "general-error"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def to_dict(self) -> dict:
        """Serialise the error the way it is sent over the wire."""
        return {
            "name": self.name,
            "message": self.message,
            "code": self.code,
            "className": self.class_name,
        }


class ValidationError(TodoServiceError):
    """Raised when todo input or a find query is malformed."""

    code = 400
    name = "BadRequest"
    class_name = "bad-request"


class NotFoundError(TodoServiceError):
    """Raised when an id does not reference a stored todo."""

    code = 404
    name = "NotFound"
    class_name = "not-found"


class MethodNotAllowed(TodoServiceError):
    code = 405
    name = "MethodNotAllowed"
    class_name = "method-not-allowed"
