import logging
import sys


DEFAULT_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level_name: str = "INFO") -> None:
    """
    Configure application-wide logging.

    - Sets the root logger level (LOG_LEVEL config value)
    - Sends logs to stdout
    - Leaves existing handlers alone if something already configured logging
    """
    level = getattr(logging, (level_name or "INFO").upper(), logging.INFO)

    root_logger = logging.getLogger()
    if root_logger.handlers:
        root_logger.setLevel(level)
        return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(DEFAULT_FORMAT))
    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    # Socket.IO / Engine.IO are chatty at INFO
    logging.getLogger("socketio").setLevel(logging.WARNING)
    logging.getLogger("engineio").setLevel(logging.WARNING)
