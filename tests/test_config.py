from pathlib import Path

import pytest

from src.server.config import (
    DEFAULT_LOG_FILE,
    ConfigBoolParsingError,
    ConfigNotFoundError,
    ServerConfig,
    load_config_file,
    parse_bool,
)

VALID_CONFIG = """
# Completion server configuration
port = 8888
log_details = yes
corpus_path = {corpus_path}
log_file = {log_file}
"""

MISSING_KEY_CONFIG = """
port = 8888
"""

INVALID_BOOL_CONFIG = """
port = 8888
log_details = maybe
"""

INVALID_PORT_CONFIG = """
port = abc
log_details = false
"""


@pytest.fixture
def corpus(tmp_path):
    corpus_path = tmp_path / "corpus.txt"
    corpus_path.write_text("the cat sat on the mat\n")
    return corpus_path


@pytest.mark.parametrize(
    "value, expected",
    [
        ("true", True),
        ("True", True),
        ("1", True),
        ("yes", True),
        ("false", False),
        ("FALSE", False),
        ("0", False),
        ("no", False),
    ],
)
def test_parse_bool_valid(value, expected):
    """Test valid boolean values."""
    assert parse_bool("test_key", value) == expected


@pytest.mark.parametrize("value", ["maybe", "2", "yess", "tru"])
def test_parse_bool_invalid(value):
    """Test invalid boolean values."""
    with pytest.raises(ConfigBoolParsingError) as excinfo:
        parse_bool("test_key", value)
    assert "Invalid boolean value for key 'test_key'" in str(excinfo.value)


def test_server_config_defaults_and_repr():
    """Test ServerConfig defaults and its string representation."""
    config = ServerConfig(port=8888, log_details=False)

    assert config.corpus_path is None
    assert config.log_file == DEFAULT_LOG_FILE

    repr_str = repr(config)
    assert "Server configuration settings" in repr_str
    assert "Used port number: 8888" in repr_str
    assert "Log details: NO" in repr_str
    assert "Training corpus: NONE" in repr_str


def test_load_valid_config(tmp_path, corpus):
    """Test loading a valid configuration file."""
    log_file = tmp_path / "out.log"
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        VALID_CONFIG.format(corpus_path=corpus, log_file=log_file),
    )

    config = load_config_file(config_path)

    assert config.port == 8888
    assert config.log_details is True
    assert config.corpus_path == corpus
    assert config.log_file == log_file


def test_load_config_missing_file():
    """Test loading a configuration from a non-existent file."""
    with pytest.raises(FileNotFoundError) as excinfo:
        load_config_file(Path("/non/existent/path"))
    assert "Missing required configuration file" in str(excinfo.value)


def test_load_config_missing_key(tmp_path):
    """Test configuration with a missing required key."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(MISSING_KEY_CONFIG)

    with pytest.raises(ConfigNotFoundError) as excinfo:
        load_config_file(config_path)
    assert "Missing required configuration: 'log_details'" in str(
        excinfo.value,
    )


def test_load_config_invalid_bool(tmp_path):
    """Test configuration with an invalid boolean value."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(INVALID_BOOL_CONFIG)

    with pytest.raises(ConfigBoolParsingError) as excinfo:
        load_config_file(config_path)
    assert "Invalid boolean value for key 'log_details'" in str(excinfo.value)


def test_load_config_invalid_port(tmp_path):
    """Test configuration with an invalid port value."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(INVALID_PORT_CONFIG)

    with pytest.raises(ValueError):
        load_config_file(config_path)


def test_load_config_comments_case_and_malformed_lines(tmp_path):
    """Test that comments, key case and malformed lines are handled."""
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        """
    # This is a comment
    PORT = 9999
    invalid_line_without_equals
    LOG_DETAILS = 0
    """,
    )

    config = load_config_file(config_path)

    assert config.port == 9999
    assert config.log_details is False
    assert config.corpus_path is None


def test_load_config_empty_corpus_path_means_none(tmp_path):
    """Test that an empty corpus_path disables preloading."""
    config_path = tmp_path / "config.txt"
    config_path.write_text("port = 1\nlog_details = no\ncorpus_path =\n")

    assert load_config_file(config_path).corpus_path is None


def test_load_config_missing_corpus_file(tmp_path):
    """Test that FileNotFoundError is raised if the corpus doesn't exist."""
    non_existent = tmp_path / "non_existent.txt"
    config_path = tmp_path / "config.txt"
    config_path.write_text(
        f"port = 8888\nlog_details = true\ncorpus_path = {non_existent}\n",
    )

    with pytest.raises(FileNotFoundError) as excinfo:
        load_config_file(config_path)
    assert f"The training corpus {non_existent} doesn't exist" in str(
        excinfo.value,
    )


def test_load_config_resolves_relative_paths_from_config_dir(
    tmp_path,
    monkeypatch,
):
    """Test that relative paths do not depend on the working directory."""
    config_dir = tmp_path / "conf"
    (config_dir / "data").mkdir(parents=True)
    (config_dir / "data" / "corpus.txt").write_text("the cat\n")
    config_path = config_dir / "config.txt"
    config_path.write_text(
        "port = 8888\n"
        "log_details = true\n"
        "corpus_path = ./data/corpus.txt\n"
        "log_file = logs/server.log\n",
    )

    elsewhere = tmp_path / "elsewhere"
    elsewhere.mkdir()
    monkeypatch.chdir(elsewhere)

    config = load_config_file(config_path)

    assert config.corpus_path == config_dir / "data" / "corpus.txt"
    assert config.corpus_path.exists()
    assert config.log_file == config_dir / "logs" / "server.log"
