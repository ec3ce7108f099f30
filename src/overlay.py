import sys
import logging
import logging.handlers

from config import config
from monitor_state import build_registry
from server import create_app
from watcher import LogWatcher


def setup_logging():
    """Configure logging to file and console with rotation."""
    logger = logging.getLogger()
    logger.setLevel(logging.INFO)
    formatter = logging.Formatter('%(asctime)s - %(levelname)s - %(message)s')

    # File Handler with Rotation
    # Max size 5MB, keep 3 backups
    file_handler = logging.handlers.RotatingFileHandler(
        config.LOG_FILE, maxBytes=5*1024*1024, backupCount=3
    )
    file_handler.setFormatter(formatter)
    logger.addHandler(file_handler)

    # Console Handler
    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)


def main():
    setup_logging()
    logging.info("Overlay starting up.")

    registry = build_registry(config)
    for name in registry.names():
        logging.info("Client %s reads %s", name, registry.record(name).profile.log_path)

    watcher = LogWatcher(registry, interval=config.WATCH_INTERVAL)
    watcher.start()

    app = create_app(registry, config)
    logging.info("Listening on %s:%d", config.HOST, config.PORT)
    try:
        app.run(host=config.HOST, port=config.PORT, debug=False, threaded=True)
    finally:
        watcher.stop()


if __name__ == "__main__":
    main()
