"""Stream helpers for the text-message protocol between server and clients."""

from __future__ import annotations

import asyncio
import sys

BUFFER_SIZE = 4096


def get_user_input(msg: str) -> str:
    """Print a prompt and return one line from standard input without newlines."""
    print(msg)
    return sys.stdin.readline().replace("\n", "")


async def receive(reader: asyncio.StreamReader) -> bytes:
    """Read the next chunk of at most BUFFER_SIZE bytes from the stream.

    Raises ConnectionError if the peer has closed the connection.
    """
    data = await reader.read(BUFFER_SIZE)
    if not data:
        raise ConnectionError("connection closed by peer")
    return data


async def send(writer: asyncio.StreamWriter, data: bytes | str) -> None:
    """Write all of the data to the stream and wait until it is flushed."""
    if isinstance(data, str):
        data = data.encode("utf-8")
    writer.write(data)
    await writer.drain()