import pytest
import pytest_asyncio

from todolist import create_app


@pytest.fixture
def test_config(tmp_path):
    """Config overrides shared by app fixtures."""
    return {
        "TESTING": True,
        "DEBUG": True,
        "LOG_LEVEL": "DEBUG",
        "STATIC_DIR": str(tmp_path / "public"),
        "SEED_DEMO_TODOS": False,
        "SENTRY_DSN": "",
    }


@pytest_asyncio.fixture
async def app(test_config):
    """Create an application for testing."""
    app = create_app(test_config)

    # Setup app context for testing
    async with app.app_context():
        yield app


@pytest_asyncio.fixture
async def client(app):
    """Create a test client for the app."""
    return app.test_client()


@pytest.fixture
def todo_service(app):
    """The app's todo store."""
    return app.extensions["todo_service"]
