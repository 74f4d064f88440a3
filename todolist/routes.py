"""Routes.py."""

import os

from quart import Blueprint
from quart import abort
from quart import current_app
from quart import jsonify
from quart import request
from quart import send_from_directory
from werkzeug.security import safe_join

from todolist.blueprints.realtime import realtime_bp
from todolist.exceptions import NotFoundError
from todolist.models.query import TodoQuery
from todolist.modules.todo_dispatch import call_todo_service

main_bp = Blueprint("main", __name__)
todos_bp = Blueprint("todos", __name__, url_prefix="/todos")


def _parse_id(raw_id: str) -> int:
    """Convert a path id to int; ids that can never exist are simply not found."""
    try:
        return int(raw_id)
    except ValueError:
        raise NotFoundError(f"Todo with id {raw_id} not found")


async def _json_body() -> dict:
    """Get the request body as a dict; anything else counts as empty."""
    data = await request.get_json(silent=True)
    return data if isinstance(data, dict) else {}


@main_bp.route("/health")
async def healthcheck():
    """Healthcheck endpoint."""
    return "ok", 200


@main_bp.route("/", defaults={"path": ""})
@main_bp.route("/<path:path>")
async def static_files(path: str):
    """Serve files from the static directory, falling back to index.html."""
    if path == "todos" or path.startswith("todos/"):
        abort(404)

    static_dir = os.path.abspath(current_app.config["STATIC_DIR"])
    if path:
        file_path = safe_join(static_dir, path)
        if file_path is None:
            abort(403)
        if os.path.isfile(file_path):
            return await send_from_directory(static_dir, path)

    if not os.path.isfile(os.path.join(static_dir, "index.html")):
        abort(404)
    return await send_from_directory(static_dir, "index.html")


@todos_bp.route("", methods=["GET"])
async def find_todos():
    """List todos, honouring completed/$sort/$skip/$limit query parameters."""
    query = TodoQuery.from_args(request.args)
    return jsonify(await call_todo_service("find", query=query))


@todos_bp.route("/<todo_id>", methods=["GET"])
async def get_todo(todo_id: str):
    return jsonify(await call_todo_service("get", _parse_id(todo_id)))


@todos_bp.route("", methods=["POST"])
async def create_todo():
    """Create a todo from the JSON body."""
    todo = await call_todo_service("create", data=await _json_body())
    return jsonify(todo), 201


@todos_bp.route("/<todo_id>", methods=["PUT"])
async def update_todo(todo_id: str):
    """Replace a todo."""
    todo_id = _parse_id(todo_id)
    return jsonify(await call_todo_service("update", todo_id, await _json_body()))


@todos_bp.route("/<todo_id>", methods=["PATCH"])
async def patch_todo(todo_id: str):
    """Change the supplied fields of a todo."""
    todo_id = _parse_id(todo_id)
    return jsonify(await call_todo_service("patch", todo_id, await _json_body()))


@todos_bp.route("/<todo_id>", methods=["DELETE"])
async def remove_todo(todo_id: str):
    return jsonify(await call_todo_service("remove", _parse_id(todo_id)))


def register_blueprints(app):
    """Register all blueprints with the application."""
    app.register_blueprint(todos_bp)
    app.register_blueprint(realtime_bp)
    app.register_blueprint(main_bp)
