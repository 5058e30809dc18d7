"""Asynchronous client for the completion server."""

import asyncio
import time
from typing import Optional

# Longest accepted response line in bytes. A completion reply lists every
# trained word under the fragment, so it grows with the vocabulary.
MAX_RESPONSE_SIZE = 32 * 1024 * 1024


class Client:
    """Asynchronous Client for connecting to the completion server."""

    def __init__(
        self,
        ip: str,
        port: int,
        max_response_size: int = MAX_RESPONSE_SIZE,
    ):
        """Initialize a new asynchronous client instance.

        Args:
            ip (str): The IP address of the server to connect to.
            port (int): The port number of the server to connect to.
            max_response_size (int): The longest response line, in bytes,
            the client accepts.

        """
        self.ip = ip
        self.port = port
        self.max_response_size = max_response_size
        self.reader: Optional[asyncio.StreamReader] = None
        self.writer: Optional[asyncio.StreamWriter] = None
        self.last_elapsed_ms: Optional[float] = None

    async def connect(self) -> None:
        """Establish the asynchronous connection to the server.

        This method must be called and awaited before sending any messages.

        Raises:
            ConnectionRefusedError: If the server actively
            refuses the connection.
            OSError: For other connection-related errors.

        """
        try:
            self.reader, self.writer = await asyncio.open_connection(
                self.ip,
                self.port,
                limit=self.max_response_size,
            )
            peername = self.writer.get_extra_info("peername")
            print(f"Connected to server at {peername[0]}:{peername[1]}")

        except ConnectionRefusedError:
            print(
                f"Connection refused by the server at {self.ip}:{self.port}.",
            )
            raise

        except OSError as e:
            print(f"Error connecting to server at {self.ip}:{self.port}: {e}")
            raise

    async def send_message(self, message: str) -> Optional[str]:
        """Send one request line and wait for the response line.

        Args:
            message (str): A fragment to complete, or a command such as
            `-T <passage>`.

        Returns:
            str: The response of the server without the trailing newline.
            None: If the client is not connected, the server closed the
            connection without answering, or the response is longer than
            `max_response_size`. In the last case the connection is closed,
            since the rest of the oversize line is still in flight.

        """
        if self.writer is None or self.reader is None:
            print("Client not connected. Call .connect() first.")
            return None

        try:
            start = time.perf_counter()

            self.writer.write((message + "\n").encode("utf-8"))
            await self.writer.drain()

            try:
                data = await self.reader.readuntil(b"\n")
            except asyncio.IncompleteReadError as e:
                data = e.partial
            except asyncio.LimitOverrunError:
                print(
                    "Response exceeds the limit of "
                    f"{self.max_response_size} bytes. Closing connection.",
                )
                await self.close()
                return None

            if not data:
                print(
                    "Server closed the connection unexpectedly or sent "
                    "no data.",
                )
                return None

            self.last_elapsed_ms = (time.perf_counter() - start) * 1000
            return data.decode("utf-8").rstrip("\n")

        except (ConnectionResetError, BrokenPipeError):
            print("Server closed the connection unexpectedly.")
            raise
        except OSError as e:
            print(f"OS Error during send: {e}")
            raise

    async def close(self) -> None:
        """Close the asynchronous connection to the server."""
        if self.writer is None:
            print("No active connection to close.")
            return

        try:
            if not self.writer.is_closing():
                self.writer.close()
            await self.writer.wait_closed()
            print("Connection closed.")
        except (ConnectionResetError, BrokenPipeError, OSError) as e:
            print(f"Error during close cleanup: {e}")
            raise
        finally:
            self.reader = None
            self.writer = None
