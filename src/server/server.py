import asyncio
import logging
import socket
import sys
import time
import weakref
from datetime import datetime
from pathlib import Path
from typing import Union

from src.completion.completion_index import CompletionIndex

from .config import load_config_file
from .logger import log, setup_logging, stop_logging
from .session import CompletionSession

# Longest accepted request line in bytes, newline included
MAX_REQUEST_SIZE = 64 * 1024
OVERSIZE_RESPONSE = "ERROR: Message exceeds maximum allowed size."


class CompletionServer:
    """Asyncio TCP server answering completion and training requests.

    Every request is handled synchronously between two awaits, so a
    training request is applied to the index as a whole before any other
    request can read it.
    """

    def __init__(
        self,
        ip: str,
        config_file_path: Path,
        index: Union[CompletionIndex, None] = None,
    ):
        self.ip = ip
        self.configuration_settings = load_config_file(config_file_path)
        self.index = index if index is not None else CompletionIndex()
        self.session = CompletionSession(self.index)
        self.is_running = True
        self.server_instance: Union[asyncio.Server, None] = None
        self.log_details: bool = self.configuration_settings.log_details
        self._active_connections: weakref.WeakSet[asyncio.StreamWriter] = (
            weakref.WeakSet()
        )

    def load_corpus(self, corpus_path: Path) -> int:
        """Train the index with every line of a text file.

        Args:
            corpus_path (Path): The training file.

        Returns:
            int: The number of words trained.

        """
        trained = 0
        with open(corpus_path, encoding="utf-8") as file:
            for line in file:
                trained += self.index.train_passage(line)

        print(f"[SERVER] Trained {trained} words from {corpus_path}")
        logging.info(f"Loaded {trained} words from {corpus_path}")
        return trained

    def handle_request(self, request: str) -> tuple[str, bool]:
        """Answer one decoded request.

        Args:
            request (str): The stripped request text.

        Returns:
            tuple[str, bool]: The response text and whether the
            connection should be closed afterwards.

        """
        try:
            reply = self.session.handle(request)
        except Exception as e:
            logging.exception(f"Request '{request}' failed")
            return f"ERROR: Request failed: {e}", False

        if reply is None:
            return "ERROR: Empty request.", False
        return reply.text, reply.close

    async def _read_request(
        self,
        reader: asyncio.StreamReader,
    ) -> Union[bytes, None]:
        """Read one newline-terminated request line.

        Args:
            reader (asyncio.StreamReader): The reader for the client
            connection.

        Returns:
            bytes: The request line. An unterminated line sent right
            before the client closed its side is returned as is, and
            b"" means the client disconnected.
            None: If the line is longer than MAX_REQUEST_SIZE. The whole
            line has been discarded, so the next read starts at the
            next request.

        """
        try:
            return await reader.readuntil(b"\n")
        except asyncio.IncompleteReadError as e:
            return e.partial
        except asyncio.LimitOverrunError as e:
            consumed = e.consumed

        # Drop the oversize line up to and including its newline
        while True:
            await reader.readexactly(consumed)
            try:
                await reader.readuntil(b"\n")
                return None
            except asyncio.IncompleteReadError:
                return None
            except asyncio.LimitOverrunError as e:
                consumed = e.consumed

    async def _handle_client(
        self,
        reader: asyncio.StreamReader,
        writer: asyncio.StreamWriter,
    ) -> None:
        """Handle an individual client connection.

        Args:
            reader (asyncio.StreamReader): The reader for the client
            connection.
            writer (asyncio.StreamWriter): The writer for the client
            connection.

        """
        peername = writer.get_extra_info("peername")
        client_address_str = (
            f"{peername[0]}:{peername[1]}" if peername else "UNKNOWN"
        )
        client_ip = peername[0] if peername else "N/A"
        print(f"[SERVER] Accepted connection from {client_address_str}")

        self._active_connections.add(writer)

        try:
            while self.is_running:
                start_time_total = time.perf_counter()

                data = await self._read_request(reader)
                if data is None:
                    request = f"<over {MAX_REQUEST_SIZE} bytes>"
                    response_message_str, close = OVERSIZE_RESPONSE, False
                elif not data:
                    print(
                        f"[SERVER] Client {client_address_str} disconnected.",
                    )
                    break
                else:
                    # Decode, strip whitespace, and remove null characters
                    request = (
                        data.decode("utf-8").strip().replace("\x00", "")
                    )
                    response_message_str, close = self.handle_request(
                        request,
                    )

                writer.write((response_message_str + "\n").encode("utf-8"))
                await writer.drain()

                end_time_total = time.perf_counter()
                elapsed_ms = (end_time_total - start_time_total) * 1000
                time_stamp = datetime.now().strftime("%Y-%m-%d %H:%M:%S")

                if self.log_details:
                    log(time_stamp, client_ip, request, elapsed_ms)

                print(
                    "[SERVER] Handled "
                    f"{client_address_str}: '{request}' -> "
                    f"'{response_message_str[:50]}...' in "
                    f"{elapsed_ms:.2f} ms",
                )

                if close:
                    break

        except ConnectionResetError:
            print(
                f"[SERVER] Client {client_address_str} forcefully "
                "disconnected.",
            )
        except UnicodeDecodeError:
            print(
                f"[SERVER] Client {client_address_str} sent undecodable "
                "data.",
                file=sys.stderr,
            )
        finally:
            self._active_connections.discard(writer)

            try:
                writer.close()
                await writer.wait_closed()
            except (ConnectionResetError, BrokenPipeError, OSError) as e:
                print(
                    f"[SERVER] Error closing connection to "
                    f"{client_address_str}: {e}",
                )

            print(f"[SERVER] Connection with {client_address_str} closed.")

    async def start(self) -> None:
        """Start the TCP server and serve until cancelled."""
        try:
            setup_logging(self.configuration_settings.log_file)

            if self.configuration_settings.corpus_path is not None:
                self.load_corpus(self.configuration_settings.corpus_path)

            raw_socket = socket.socket(socket.AF_INET, socket.SOCK_STREAM)
            raw_socket.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)

            server_address = (self.ip, self.configuration_settings.port)
            raw_socket.bind(server_address)
            print(f"[SERVER] Bound raw socket to {server_address}")

            self.server_instance = await asyncio.start_server(
                self._handle_client,
                sock=raw_socket,
                limit=MAX_REQUEST_SIZE,
            )

            addrs = ", ".join(
                str(sock.getsockname())
                for sock in self.server_instance.sockets
            )
            print(f"[SERVER] Server is serving on {addrs}.")
            print("[SERVER] Press Ctrl+C to shut down.")

            await self.server_instance.serve_forever()

        except asyncio.CancelledError:
            print("[SERVER] Asyncio server task cancelled.")
        except KeyboardInterrupt:
            print("\n[SERVER] Shutting down due to KeyboardInterrupt...")
        finally:
            await self.stop()

    async def stop(self) -> None:
        """Stop accepting requests, close every connection and release
        the listening socket and the log file.
        """
        print("[SERVER] Initiating graceful shutdown...")

        self.is_running = False

        for writer in list(self._active_connections):
            try:
                writer.close()
                await writer.wait_closed()
            except (ConnectionResetError, BrokenPipeError, OSError) as e:
                print(
                    f"[SERVER] Error closing connection during shutdown: {e}",
                )
        self._active_connections.clear()

        if self.server_instance:
            try:
                self.server_instance.close()
                await self.server_instance.wait_closed()
                print("[SERVER] Asyncio server socket closed.")
            finally:
                self.server_instance = None

        stop_logging()

        print("[SERVER] Server shutdown complete.")
