import logging
import sys
from pathlib import Path


def setup_logging(service_name: str, level: str = "INFO", log_file: str | None = None):
    """
    Configure the root logger once for the whole service.

    Everything goes to stdout; when ``log_file`` is given the same records are
    appended to that file too. Uvicorn's own loggers are pointed at the same
    handlers so access lines share the format.
    """
    formatter = logging.Formatter(
        f"%(asctime)s - [%(levelname)s] - [{service_name}] - %(name)s - %(message)s"
    )

    handlers: list[logging.Handler] = []

    stream_handler = logging.StreamHandler(sys.stdout)
    stream_handler.setFormatter(formatter)
    handlers.append(stream_handler)

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(path, mode="a")
        file_handler.setFormatter(formatter)
        handlers.append(file_handler)

    logger = logging.getLogger()
    logger.setLevel(level.upper())
    logger.handlers = list(handlers)

    for name in ("uvicorn.access", "uvicorn.error"):
        uv_logger = logging.getLogger(name)
        uv_logger.handlers = list(handlers)
        uv_logger.propagate = False

    logging.getLogger("passlib").setLevel(logging.WARNING)

    logging.getLogger(__name__).info("Logging configured for %s", service_name)
