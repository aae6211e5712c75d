"""Server side handling of one connected client: naming, actions and queueing."""

from __future__ import annotations

import asyncio
import json
import socket
from contextlib import suppress

from .types import ClientAction, ClientStatus, MatchClientInfo, MatchStatus
from .wire import receive, send

PROVIDE_NAME = "Provide Name"
CHOOSE_ACTION = "Choose Action"
PROVIDE_MATCH_SOCKET = "Provide Match Socket"
STATUS_QUEUE_SIZE = 100


async def client_choose_action(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> ClientAction:
    """Ask the client for its next action; raises ValueError on a bad reply."""
    await send(writer, CHOOSE_ACTION)
    data = await receive(reader)
    try:
        return ClientAction(json.loads(data.decode("utf-8")))
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid client action {data!r}") from exc


def _split_address(address: str) -> tuple[str, int]:
    host, sep, port = address.rpartition(":")
    if not sep or not host:
        raise ValueError(f"invalid match socket address {address!r}")
    return host, int(port)


def _set_nodelay(writer: asyncio.StreamWriter) -> None:
    sock = writer.get_extra_info("socket")
    if sock is not None:
        with suppress(OSError):
            sock.setsockopt(socket.IPPROTO_TCP, socket.TCP_NODELAY, 1)


async def handle_client(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    queue: asyncio.Queue[MatchClientInfo],
) -> None:
    """Serve one client until it quits or its match channel ends.

    A queued client waits on its status queue; ``None`` there means the match
    was dropped without a result.
    """
    _set_nodelay(writer)
    try:
        await send(writer, PROVIDE_NAME)
        name = (await receive(reader)).decode("utf-8")

        while True:
            action = await client_choose_action(reader, writer)
            if action is ClientAction.QUIT:
                print("Client Quit")
                return

            status_queue: asyncio.Queue = asyncio.Queue(maxsize=STATUS_QUEUE_SIZE)
            await send(writer, PROVIDE_MATCH_SOCKET)
            address = (await receive(reader)).decode("utf-8")
            host, port = _split_address(address)

            print("Connecting To Match Socket")
            match_reader, match_writer = await asyncio.open_connection(host, port)
            info = MatchClientInfo(
                reader=match_reader,
                writer=match_writer,
                client_name=name,
                client_status=ClientStatus.QUEUEING,
                client_sender=status_queue,
            )

            print("Sending Client To Queue")
            await queue.put(info)

            status = await status_queue.get()
            if status is MatchStatus.DONE:
                continue
            if status is MatchStatus.ABRUPT:
                print("Match Was Abruptly Ended")
                continue
            if status is MatchStatus.ONGOING:
                print("Wrong Status Acquired. Closing Client Connection")
                return
            if status is None:
                print("Channel Has Been Closed")
                return
            print("Really Bad Signal")
            return
    finally:
        writer.close()
        with suppress(ConnectionError):
            await writer.wait_closed()