"""Arena client: connects to the server, queues for matches and plays them."""

from __future__ import annotations

import argparse
import asyncio
import json
from contextlib import suppress

from .client_match import play_match, wait_for_match
from .client_util import get_free_address, user_choose_action
from .server import DEFAULT_HOST, DEFAULT_PORT
from .server_client import CHOOSE_ACTION, PROVIDE_MATCH_SOCKET, PROVIDE_NAME
from .types import ClientAction, MatchInfo
from .wire import receive, send

DEFAULT_SIMULATED_CLIENTS = 10000


async def _expect(reader: asyncio.StreamReader, expected: str) -> None:
    data = await receive(reader)
    if data != expected.encode("utf-8"):
        raise ValueError(f"expected {expected!r}, got {data!r}")


async def _close(writer: asyncio.StreamWriter) -> None:
    writer.close()
    with suppress(ConnectionError):
        await writer.wait_closed()


async def _join_match(
    writer: asyncio.StreamWriter, player_name: str, simulated: bool
) -> MatchInfo:
    address = get_free_address(writer)
    host, _, port = address.rpartition(":")
    accepted: asyncio.Future = asyncio.get_running_loop().create_future()

    async def on_connect(
        match_reader: asyncio.StreamReader, match_writer: asyncio.StreamWriter
    ) -> None:
        if accepted.done():
            match_writer.close()
        else:
            accepted.set_result((match_reader, match_writer))

    listener = await asyncio.start_server(on_connect, host, int(port))
    try:
        await send(writer, address)
        match_reader, match_writer = await accepted
    finally:
        listener.close()

    try:
        await wait_for_match(match_reader, match_writer)
        return await play_match(match_reader, match_writer, player_name, simulated)
    finally:
        await _close(match_writer)


async def run_client(
    player_name: str,
    simulated: bool = False,
    host: str = DEFAULT_HOST,
    port: int = DEFAULT_PORT,
) -> list[MatchInfo]:
    """Play matches on the server until the player quits; return their final scoreboards.

    A simulated client always asks for another match. Raises ValueError on an
    unexpected message and OSError on connection failures.
    """
    reader, writer = await asyncio.open_connection(host, port)
    results: list[MatchInfo] = []
    try:
        peer_host, peer_port = writer.get_extra_info("peername")[:2]
        print(f"{player_name} - Connected to server on remote address: {peer_host}:{peer_port}")

        await _expect(reader, PROVIDE_NAME)
        await send(writer, player_name)

        while True:
            await _expect(reader, CHOOSE_ACTION)
            if simulated:
                action = ClientAction.FIND_MATCH
            else:
                action = await asyncio.to_thread(user_choose_action)
            await send(writer, json.dumps(action.value))

            if action is ClientAction.QUIT:
                print("Quiting RPS")
                return results

            await _expect(reader, PROVIDE_MATCH_SOCKET)
            results.append(await _join_match(writer, player_name, simulated))
    finally:
        await _close(writer)


async def simulate_clients(
    n: int, host: str = DEFAULT_HOST, port: int = DEFAULT_PORT
) -> list:
    """Run n simulated clients concurrently; return each one's result or exception."""
    tasks = [
        asyncio.create_task(run_client(f"sim_client_{i}", True, host, port))
        for i in range(n)
    ]
    try:
        return await asyncio.gather(*tasks, return_exceptions=True)
    finally:
        for task in tasks:
            task.cancel()


def main(argv: list[str] | None = None) -> int:
    """Run simulated clients, or one interactive player with --play NAME."""
    parser = argparse.ArgumentParser(
        prog="rpsarena-client", description="Rock-paper-scissors arena client."
    )
    parser.add_argument("--host", default=DEFAULT_HOST)
    parser.add_argument("--port", type=int, default=DEFAULT_PORT)
    parser.add_argument("--clients", type=int, default=DEFAULT_SIMULATED_CLIENTS)
    parser.add_argument("--play", metavar="NAME", help="play interactively as NAME")
    args = parser.parse_args(argv)

    try:
        if args.play is not None:
            asyncio.run(run_client(args.play, False, args.host, args.port))
        else:
            asyncio.run(simulate_clients(args.clients, args.host, args.port))
    except KeyboardInterrupt:
        pass
    print("\nShutting Server Down")
    return 0