"""Arena server: accepts clients, queues them and pairs them into matches."""

from __future__ import annotations

import argparse
import asyncio
from contextlib import suppress

from .server_client import handle_client
from .server_match import handle_match
from .types import MatchClientInfo

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 4000
QUEUE_SIZE = 100


async def _run_match(p1: MatchClientInfo, p2: MatchClientInfo) -> None:
    try:
        await handle_match(p1, p2)
    except (OSError, ValueError) as exc:
        print(f"Match Failed: {exc}")
        for player in (p1, p2):
            await player.client_sender.put(None)
            player.writer.close()


async def match_manager(queue: asyncio.Queue[MatchClientInfo]) -> None:
    """Pair queued clients in arrival order and run a match for each pair."""
    ready: list[MatchClientInfo] = []
    matches: set[asyncio.Task] = set()
    try:
        while True:
            client = await queue.get()
            print("Match Manager: Received Client To Queue")
            ready.append(client)
            while len(ready) >= 2:
                print("Setting Up Match")
                p1, p2 = ready[:2]
                del ready[:2]
                task = asyncio.create_task(_run_match(p1, p2))
                matches.add(task)
                task.add_done_callback(matches.discard)
    finally:
        for task in matches:
            task.cancel()


async def client_manager(host: str = DEFAULT_HOST, port: int = DEFAULT_PORT) -> None:
    """Listen for clients on host:port and serve them until cancelled."""
    queue: asyncio.Queue[MatchClientInfo] = asyncio.Queue(maxsize=QUEUE_SIZE)

    print("Spawning Match Manager")
    manager = asyncio.create_task(match_manager(queue))

    async def on_connect(
        reader: asyncio.StreamReader, writer: asyncio.StreamWriter
    ) -> None:
        print("Handling Incoming Client")
        try:
            await handle_client(reader, writer, queue)
        except (OSError, ValueError) as exc:
            print(f"Client Error: {exc}")

    try:
        server = await asyncio.start_server(on_connect, host, port)
        async with server:
            await server.serve_forever()
    finally:
        manager.cancel()
        with suppress(asyncio.CancelledError):
            await manager


def main(argv: list[str] | None = None) -> int:
    """Run the arena server until interrupted."""
    parser = argparse.ArgumentParser(
        prog="rpsarena-server", description="Rock-paper-scissors match server."
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    args = parser.parse_args(argv)

    print("Spawning Client Manager")
    try:
        asyncio.run(client_manager(args.host, args.port))
    except KeyboardInterrupt:
        pass
    print("Shutting Server Down")
    return 0