"""Configuration parser for the completion server."""

from pathlib import Path
from typing import Optional, cast

DEFAULT_LOG_FILE = Path(__file__).parent.parent.parent / "logs/server.log"


class ConfigBoolParsingError(Exception):
    """Raised when the parsing of bool strings in
    the config file was not successful.
    """


class ConfigNotFoundError(Exception):
    """Raised when any of the required configuration settings is
    not provided.
    """


class ServerConfig:
    """A class to save server configuration settings."""

    def __init__(
        self,
        port: int,
        log_details: bool,
        corpus_path: Optional[Path] = None,
        log_file: Path = DEFAULT_LOG_FILE,
    ) -> None:
        """Initialize the server configuration.

        Args:
            port (int): The port number the server will listen to.
            log_details (bool): Whether every handled request is logged.
            corpus_path (Optional[Path]): A training file loaded into the
            index when the server starts, if any.
            log_file (Path): Where the rotating log file is written.

        """
        self.port = port
        self.log_details = log_details
        self.corpus_path = corpus_path
        self.log_file = log_file

    def __repr__(self) -> str:
        """Return a string representation of the configuration object.

        Returns:
            str: A formatted string representing the configuration settings.

        """
        return f"""
                Server configuration settings:
                Used port number: {self.port}
                Log details: {"YES" if self.log_details else "NO"}
                Training corpus: {self.corpus_path or "NONE"}
                Log file: {self.log_file}
            """


def parse_bool(key: str, val: str) -> bool:
    """Parse given values into boolean ones (True or False).

    Args:
        key (str): The key to parse the boolean for.
        val (str): The value to be parsed to boolean.

    Raises:
        ConfigBoolParsingError: If an error occured
        while parsing the value to boolean.

    Returns:
        bool: True or False depending on the output of the parser.

    """
    if val.strip().lower() in {"true", "1", "yes"}:
        return True
    if val.strip().lower() in {"false", "0", "no"}:
        return False

    raise ConfigBoolParsingError(
        f"Invalid boolean value for key '{key}' in the configuration file. "
        "Expected 'true', 'false', '1', '0', 'yes', or 'no' "
        "(case-insensitive).",
    )


def _resolve(config_file_path: Path, value: str) -> Path:
    path = Path(value).expanduser()
    if path.is_absolute():
        return path
    return config_file_path.parent / path


def load_config_file(config_file_path: Path) -> ServerConfig:
    """Load and parse the configuration file.

    Relative `corpus_path` and `log_file` values are resolved against the
    directory of the config file, not the working directory.

    Args:
        config_file_path (Path): Path to the config file.

    Raises:
        ConfigNotFoundError: If required settings are missing.
        FileNotFoundError: If the config file or the configured
        training corpus does not exist.
        ValueError: If the port is not an integer.

    Returns:
        ServerConfig: Parsed config object.

    """
    if not config_file_path.exists():
        raise FileNotFoundError(
            f"Missing required configuration file: '{config_file_path}'. "
            "Please ensure the file exists and the path is correct.",
        )

    port = log_details = None
    corpus_path: Optional[Path] = None
    log_file = DEFAULT_LOG_FILE

    with config_file_path.open("r", encoding="utf-8") as file:
        for line in file:
            line = line.strip()

            # Skip blank lines and comments
            if not line or line.startswith("#"):
                continue

            key, sep, value = line.partition("=")
            if sep != "=":
                continue

            key = key.strip().lower()
            value = value.strip()

            if key == "port":
                port = int(value)
            elif key == "log_details":
                log_details = parse_bool("log_details", value)
            elif key == "corpus_path":
                corpus_path = (
                    _resolve(config_file_path, value) if value else None
                )
            elif key == "log_file":
                log_file = _resolve(config_file_path, value)

    required = {
        "port": port,
        "log_details": log_details,
    }

    for key, val in required.items():
        if val is None:
            raise ConfigNotFoundError(
                f"Missing required configuration: '{key}'. "
                "Please ensure the config file includes a valid line for "
                f"'{key}'.",
            )

    if corpus_path is not None and not corpus_path.exists():
        raise FileNotFoundError(
            f"The training corpus {corpus_path} doesn't exist.",
        )

    return ServerConfig(
        cast("int", port),
        cast("bool", log_details),
        corpus_path,
        log_file,
    )
