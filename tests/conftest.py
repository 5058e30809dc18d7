import socket

import pytest

from src.completion.completion_index import CompletionIndex


@pytest.fixture
def trained_index():
    """An index trained with a small, known set of words."""
    index = CompletionIndex()
    for word in ["cat", "car", "cat", "cart", "dog"]:
        index.train(word)
    return index


@pytest.fixture
def free_port():
    """Return a TCP port nothing is listening on."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def config_file(tmp_path, free_port):
    """Write a minimal server configuration and return its path."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        f"port = {free_port}\n"
        "log_details = true\n"
        f"log_file = {tmp_path / 'logs' / 'server.log'}\n",
    )
    return config_path
