from quart import current_app
from quart import jsonify
from werkzeug.exceptions import HTTPException

from todolist.exceptions import TodoServiceError


def _error_response(name: str, message: str, code: int, class_name: str):
    body = {"name": name, "message": message, "code": code, "className": class_name}
    return jsonify(body), code


def register_error_handlers(app):
    """Register error handlers with the application."""

    @app.errorhandler(TodoServiceError)
    async def handle_service_error(e):
        current_app.logger.debug(f"{e.name}: {e.message}")
        return jsonify(e.to_dict()), e.code

    @app.errorhandler(Exception)
    async def handle_exception(e):
        current_app.logger.error(f"Unhandled exception: {str(e)}", exc_info=True)
        return _error_response(
            "GeneralError", "An unexpected error occurred", 500, "general-error"
        )

    @app.errorhandler(404)
    async def handle_not_found(e):
        return _error_response("NotFound", "Not found", 404, "not-found")

    @app.errorhandler(HTTPException)
    async def handle_http_exception(e):
        return _error_response(
            e.name.replace(" ", ""),
            e.description,
            e.code,
            e.name.lower().replace(" ", "-"),
        )

    @app.errorhandler(405)
    async def handle_method_not_allowed(e):
        return _error_response(
            "MethodNotAllowed", "Method not allowed", 405, "method-not-allowed"
        )
