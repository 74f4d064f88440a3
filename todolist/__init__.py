from quart import Quart
from quart import current_app

from todolist.modules.todo_dispatch import call_todo_service

DEMO_TODOS = ("Learn Quart", "Add websocket support")


def create_app(config=None):
    """Create and configure the Quart application."""
    # Static files are served by the main blueprint so it can fall back to index.html
    app = Quart(__name__, static_folder=None)

    # Load default configuration
    app.config.from_object("todolist.config.Config")

    # Apply config overrides
    if config:
        if isinstance(config, dict):
            app.config.update(config)
        else:
            app.config.from_object(config)

    # Initialize Sentry if DSN is configured and not in debug mode
    if app.config.get("SENTRY_DSN") and not app.config.get("DEBUG"):
        import sentry_sdk

        sentry_sdk.init(
            dsn=app.config["SENTRY_DSN"], environment=app.config["ENVIRONMENT"]
        )

    # Initialize extensions (each extension has init_app)
    from todolist.extensions import init_extensions

    init_extensions(app)

    # Register blueprints
    from todolist.routes import register_blueprints

    register_blueprints(app)

    # Register error handlers
    from todolist.error_handlers import register_error_handlers

    register_error_handlers(app)

    @app.after_request
    def add_cors_headers(response):
        """Allow browser clients on other origins to call the API."""
        response.headers["Access-Control-Allow-Origin"] = app.config["CORS_ORIGIN"]
        response.headers["Access-Control-Allow-Methods"] = app.config["CORS_METHODS"]
        response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response

    @app.before_serving
    async def seed_demo_todos():
        """Create a few todos so a fresh server has something to show."""
        if not app.config.get("SEED_DEMO_TODOS"):
            return
        for text in DEMO_TODOS:
            todo = await call_todo_service("create", data={"text": text})
            current_app.logger.info(f"Seeded demo todo: {todo}")

    return app
