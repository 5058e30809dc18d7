import logging
import logging.handlers

import pytest

from src.server import logger


@pytest.fixture
def log_file(tmp_path):
    path = tmp_path / "logs" / "server.log"
    yield path
    logger.stop_logging()


def test_setup_logging_creates_the_file_and_writes_records(log_file):
    logger.setup_logging(log_file)
    logger.log("2024-01-01 00:00:00", "127.0.0.1", "ca", 1.234)
    logger.stop_logging()

    content = log_file.read_text(encoding="utf-8")
    assert "level=INFO" in content
    assert "Client IP: 127.0.0.1" in content
    assert "Request: 'ca'" in content
    assert "Execution Time: 1.23 ms" in content


def test_setup_logging_is_idempotent(log_file):
    logger.setup_logging(log_file)
    logger.setup_logging(log_file)

    handlers = [
        h
        for h in logging.getLogger().handlers
        if isinstance(h, logging.handlers.RotatingFileHandler)
        and h.baseFilename == str(log_file)
    ]
    assert len(handlers) == 1


def test_stop_logging_detaches_the_handler(log_file):
    logger.setup_logging(log_file)
    logger.stop_logging()

    assert all(
        getattr(h, "baseFilename", None) != str(log_file)
        for h in logging.getLogger().handlers
    )
    # Stopping twice is harmless
    logger.stop_logging()
