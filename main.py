import signal

from todolist import create_app

app = create_app()


def setup_signal_handlers():
    """Set up signal handlers for graceful shutdown."""

    def signal_handler(signum, frame):
        app.logger.info(f"Received signal {signum}, initiating graceful shutdown...")
        # Let Quart handle the shutdown process
        raise KeyboardInterrupt()

    signal.signal(signal.SIGTERM, signal_handler)
    signal.signal(signal.SIGINT, signal_handler)


def log_startup():
    """Describe what the server is about to serve."""
    app.logger.info(
        f"Todolist server listening on http://{app.config['HOST']}:{app.config['PORT']}"
    )
    app.logger.info("Websocket enabled for real-time updates at /ws")
    app.logger.info(f"Serving static files from {app.config['STATIC_DIR']}")
    app.logger.info(f"Environment: {app.config['ENVIRONMENT']}")


if __name__ == "__main__":
    setup_signal_handlers()
    log_startup()
    try:
        app.run(host=app.config["HOST"], port=app.config["PORT"], debug=app.config["DEBUG"])
    except KeyboardInterrupt:
        app.logger.info("Shutdown signal received, stopping application")
    finally:
        app.logger.info("Application stopped")
