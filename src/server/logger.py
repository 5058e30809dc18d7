"""Structured request logging (timestamp, IP, request, latency)."""

import logging
import logging.handlers
from pathlib import Path
from typing import Union

from .config import DEFAULT_LOG_FILE

_LOG_LEVEL = logging.INFO

_file_handler: Union[logging.handlers.RotatingFileHandler, None] = None


def setup_logging(
    log_file: Path = DEFAULT_LOG_FILE,
    level: int = _LOG_LEVEL,
) -> None:
    """Attach the rotating log file handler to the root logger.

    Calling it again while a handler is attached does nothing until
    `stop_logging()` has been called.

    Args:
        log_file (Path): The file the log records are written to.
        level (int): The root logger level.

    """
    global _file_handler
    if _file_handler is not None:
        return

    log_file.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    file_handler = logging.handlers.RotatingFileHandler(
        log_file,
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    formatter = logging.Formatter(
        "level=%(levelname)s | time=%(asctime)s | process=%(process)d | "
        "module=%(module)s | funcName=%(funcName)s | "
        "lineno=%(lineno)d | message=%(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    file_handler.setFormatter(formatter)
    root_logger.addHandler(file_handler)
    _file_handler = file_handler

    print(f"[LOGGER] Writing logs to {log_file}")


def stop_logging() -> None:
    """Flush and detach the log file handler, if one is attached."""
    global _file_handler
    if _file_handler is None:
        return

    root_logger = logging.getLogger()
    root_logger.removeHandler(_file_handler)
    _file_handler.close()
    _file_handler = None
    print("[LOGGER] Log file handler closed.")


def log(
    time_stamp: str,
    client_ip: str,
    request: str,
    execution_time_ms: float,
) -> None:
    """Log the details of a handled request.

    Args:
        time_stamp (str): The timestamp of the request.
        client_ip (str): The IP address of the client.
        request (str): The request line.
        execution_time_ms (float): The execution time in milliseconds.

    """
    logging.info(
        "Timestamp: %s, Client IP: %s, Request: '%s', Execution Time: %.2f ms",
        time_stamp,
        client_ip,
        request,
        execution_time_ms,
    )
