"""Client side of a match: greeting the opponent and playing rounds."""

from __future__ import annotations

import asyncio
from contextlib import suppress

from . import wire
from .client_util import (
    deserialize_match_info,
    display_results,
    get_user_move,
    random_action,
    serialize_move,
)
from .server_match import PLAY_MOVE, PROCESSED, RECEIVED
from .types import MatchInfo, MatchStatus, MoveType


async def _choose_move(simulated: bool) -> MoveType:
    if simulated:
        return random_action()
    return await asyncio.to_thread(get_user_move)


async def wait_for_match(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> str:
    """Receive the opponent's name, acknowledge it and return it."""
    opponent = (await wire.receive(reader)).decode("utf-8")
    print(f"Match Found, Your Oponnent Is {opponent}")
    await wire.send(writer, RECEIVED)
    return opponent


async def play_match(
    reader: asyncio.StreamReader,
    writer: asyncio.StreamWriter,
    player_name: str,
    simulated: bool = False,
) -> MatchInfo:
    """Play rounds until the server reports the match done; return the final scoreboard.

    Simulated players move at random, others are prompted on standard input.
    Raises ValueError on an unexpected message from the server.
    """
    prompt = PLAY_MOVE.encode("utf-8")
    while True:
        signal = await wire.receive(reader)
        if signal != prompt:
            raise ValueError(f"expected {PLAY_MOVE!r}, got {signal!r}")
        await wire.send(writer, serialize_move(await _choose_move(simulated)))

        info = deserialize_match_info(await wire.receive(reader))
        if info.status is MatchStatus.DONE:
            # The server may already have hung up after the final scoreboard.
            with suppress(ConnectionError):
                await wire.send(writer, PROCESSED)
            break
        await wire.send(writer, PROCESSED)
        display_results(info, player_name)

    display_results(info, player_name)
    print(f"{info.won_round} Won The Match!")
    return info