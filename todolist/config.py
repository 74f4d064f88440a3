import os

from dotenv import load_dotenv

from todolist.models.settings import Settings

# Load settings from .env file if it exists
settings = Settings.from_env_file(validate=False)

# Load environment variables (will override .env file values)
load_dotenv()


def env_bool(key: str, default: bool = False) -> bool:
    """Parse boolean from environment variable."""
    value = os.environ.get(key, str(default)).lower()
    return value in ("true", "1", "yes", "on")


class Config:
    # Use settings from model, but allow environment variables to override
    DEBUG = env_bool("DEBUG", settings.debug)
    LOG_LEVEL = os.environ.get("LOG_LEVEL", settings.log_level)
    ENVIRONMENT = os.environ.get("ENVIRONMENT", settings.environment)

    # Server
    HOST = os.environ.get("HOST", settings.host)
    PORT = int(os.environ.get("PORT", str(settings.port)))
    CORS_ORIGIN = os.environ.get("CORS_ORIGIN", settings.cors_origin)
    CORS_METHODS = "GET, POST, PUT, PATCH, DELETE"

    # Static files served at the site root
    STATIC_DIR = os.environ.get("STATIC_DIR", settings.static_dir)

    SEED_DEMO_TODOS = env_bool("SEED_DEMO_TODOS", settings.seed_demo_todos)

    SENTRY_DSN = os.environ.get("SENTRY_DSN", settings.sentry_dsn or "")
