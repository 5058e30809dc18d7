"""This module provides the entry point for running the completion
server or the interactive console.
"""

import argparse
import asyncio
import os
import signal
import socket
import subprocess
import sys
from pathlib import Path
from typing import Any

from src.client.repl import run_repl
from src.completion.completion_index import CompletionIndex
from src.server.server import CompletionServer

CONFIG_PATH = Path(__file__).parent / "config.txt"


def get_local_ip() -> Any:
    """Return the local IP address of the machine.

    Returns:
        str: The local IP address as a string.

    """
    with socket.socket(socket.AF_INET, socket.SOCK_DGRAM) as s:
        s.connect(("8.8.8.8", 80))
        return s.getsockname()[0]


def handle_sigterm(signum: int, frame: Any) -> None:
    """Handle SIGTERM or SIGINT signals to perform a
    graceful shutdown of the application.

    Args:
        signum (int): The signal number received.
        frame (FrameType): The current stack frame (unused).

    Exits:
        Exits the process with status code 0.

    """
    print("[SERVER] Shutdown signal received.")
    sys.exit(0)


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        description="Run the word completion server.",
    )
    parser.add_argument(
        "--ip",
        choices=["local", "public"],
        default="public",
        help="Serve on the local interface or on every interface",
    )
    parser.add_argument(
        "--mode",
        default="normal",
        choices=["normal", "daemon", "interactive"],
        help="Run mode: 'normal', 'daemon' or 'interactive' "
        "(default: normal)",
    )
    parser.add_argument(
        "--config_path",
        type=str,
        default=str(CONFIG_PATH),
        help="Optional path to the config file.",
        required=False,
    )
    parser.add_argument(
        "--corpus",
        type=str,
        default=None,
        help="Training file loaded before the interactive console starts.",
        required=False,
    )
    return parser


async def main() -> None:
    """Run the server."""
    args = build_parser().parse_args()

    if args.mode == "interactive":
        index = CompletionIndex()
        if args.corpus is not None:
            with open(args.corpus, encoding="utf-8") as file:
                for line in file:
                    index.train_passage(line)
        run_repl(index)
        return

    ip = get_local_ip() if args.ip == "local" else "0.0.0.0"

    if args.mode == "daemon":
        env = os.environ.copy()
        env["PYTHONPATH"] = str(Path(__file__).parent)
        subprocess.run(
            [
                sys.executable,
                "-m",
                "src.server.daemon",
                "--ip",
                ip,
                "--config_path",
                str(Path(args.config_path).resolve()),
            ],
            check=False,
            env=env,
            cwd=str(Path(__file__).parent),
        )
        return

    server_instance = CompletionServer(ip, Path(args.config_path))

    signal.signal(signal.SIGTERM, handle_sigterm)

    await server_instance.start()


if __name__ == "__main__":
    asyncio.run(main())
