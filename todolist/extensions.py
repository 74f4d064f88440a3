from quart_compress import Compress

from todolist.modules.event_handler import EventHandler
from todolist.modules.logging_helper import LoggingHelper
from todolist.modules.realtime import RealtimeChannel
from todolist.modules.todo_service import TodoService

# Create instances without initializing
compress = Compress()
logging_helper = LoggingHelper()


def init_extensions(app):
    """Initialize all extensions with the application."""
    # Initialise in a specific order to handle dependencies
    compress.init_app(app)
    logging_helper.init_app(app)

    # Stateful services are created per app so every app owns its own store
    EventHandler(app)
    TodoService(app)
    RealtimeChannel(app)  # Subscribes via the event handler
