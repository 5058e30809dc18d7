"""Run the completion server as a background Linux service."""

import argparse
import asyncio
import atexit
import signal
import sys
from pathlib import Path
from typing import Any

import daemon
from daemon.pidfile import PIDLockFile

from .logger import stop_logging
from .server import CompletionServer

# Path to the PID file for the daemon process
PID_FILE = "/tmp/completion_daemon.pid"
# Paths to log files for stdout and stderr
STDOUT_LOG = "/tmp/completion_stdout.log"
STDERR_LOG = "/tmp/completion_stderr.log"
# Working directory for the daemon process
WORKDIR = Path("/tmp/")
# File creation mask for the daemon process
UMASK = 0o027
# The configuration settings file of the server
CONFIG_PATH = Path(__file__).parent.parent.parent / "config.txt"


def cleanup() -> None:
    """Cleanup function to be called on exit."""
    try:
        stop_logging()
    except OSError as e:
        print(f"Error during cleanup: {e}", file=sys.stderr)


def handle_sigterm(signum: int, frame: Any) -> None:
    """Handle SIGTERM or SIGINT signals to perform a graceful shutdown of
    the application.

    Args:
        signum (int): The signal number received.
        frame (FrameType): The current stack frame (unused).

    """
    cleanup()
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser of the daemon."""
    parser = argparse.ArgumentParser(description="Run the server daemon.")
    parser.add_argument(
        "--ip",
        type=str,
        default="0.0.0.0",
        help="The address the server binds to.",
    )
    parser.add_argument(
        "--config_path",
        type=str,
        help="Optional path to the config file.",
        required=False,
    )
    return parser


async def main(args: argparse.Namespace) -> None:
    """Run the server."""
    # The daemon changes its working directory, so paths must be absolute
    config_path = (
        Path(args.config_path).resolve()
        if args.config_path is not None
        else CONFIG_PATH
    )

    server_instance = CompletionServer(args.ip, config_path)

    signal.signal(signal.SIGTERM, handle_sigterm)

    await server_instance.start()


if __name__ == "__main__":
    arguments = build_parser().parse_args()
    atexit.register(cleanup)

    with (
        open(STDOUT_LOG, "a") as stdout_log,
        open(STDERR_LOG, "a") as stderr_log,
        daemon.DaemonContext(
            working_directory=str(WORKDIR),
            umask=UMASK,
            pidfile=PIDLockFile(PID_FILE),
            stdout=stdout_log,
            stderr=stderr_log,
            detach_process=True,
        ),
    ):
        asyncio.run(main(arguments))
