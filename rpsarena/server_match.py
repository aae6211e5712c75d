"""Server side of a single best-of-three match between two queued clients."""

from __future__ import annotations

import asyncio
import json
from contextlib import suppress

from .types import MatchClientInfo, MatchInfo, MatchStatus, MoveResult, MoveType
from .wire import receive, send

PLAY_MOVE = "Play Your Move"
RECEIVED = "Recieved"
PROCESSED = "Processed"
WINNING_SCORE = 2

_BEATS = {
    (MoveType.ROCK, MoveType.SCISSOR),
    (MoveType.PAPER, MoveType.ROCK),
    (MoveType.SCISSOR, MoveType.PAPER),
}


def who_wins_move(p1_move: MoveType, p2_move: MoveType) -> tuple[MoveResult, MoveResult]:
    """Return the round result for each player, in player order."""
    if p1_move is p2_move:
        return MoveResult.DRAW, MoveResult.DRAW
    if (p1_move, p2_move) in _BEATS:
        return MoveResult.WIN, MoveResult.LOSE
    return MoveResult.LOSE, MoveResult.WIN


async def _expect(reader: asyncio.StreamReader, expected: str) -> None:
    data = await receive(reader)
    if data != expected.encode("utf-8"):
        raise ValueError(f"expected {expected!r}, got {data!r}")


def _parse_move(data: bytes) -> MoveType:
    try:
        return MoveType(json.loads(data.decode("utf-8")))
    except (ValueError, TypeError) as exc:
        raise ValueError(f"invalid move {data!r}") from exc


async def _close(writer: asyncio.StreamWriter) -> None:
    writer.close()
    with suppress(ConnectionError):
        await writer.wait_closed()


async def handle_match(p1: MatchClientInfo, p2: MatchClientInfo) -> MatchInfo:
    """Play a match to WINNING_SCORE round wins and return the final scoreboard.

    Raises ValueError on a protocol violation and ConnectionError if a player
    disconnects.
    """
    print("Sending Opponent Names")
    await send(p1.writer, p2.client_name)
    await send(p2.writer, p1.client_name)

    await _expect(p1.reader, RECEIVED)
    await _expect(p2.reader, RECEIVED)

    info = MatchInfo(p1_name=p1.client_name, p2_name=p2.client_name)
    players = (p1, p2)
    while True:
        print("Requesting Player Moves")
        for player in players:
            await send(player.writer, PLAY_MOVE)

        p1_move = _parse_move(await receive(p1.reader))
        p2_move = _parse_move(await receive(p2.reader))

        p1_result, p2_result = who_wins_move(p1_move, p2_move)
        if p1_result is MoveResult.WIN:
            info.p1_score += 1
            info.won_round = info.p1_name
        if p2_result is MoveResult.WIN:
            info.p2_score += 1
            info.won_round = info.p2_name

        if info.p1_score >= WINNING_SCORE or info.p2_score >= WINNING_SCORE:
            info.status = MatchStatus.DONE
            break

        payload = info.to_json()
        for player in players:
            await send(player.writer, payload)
        for player in players:
            await _expect(player.reader, PROCESSED)

    payload = info.to_json()
    for player in players:
        await send(player.writer, payload)

    for player in players:
        await player.client_sender.put(MatchStatus.DONE)

    for player in players:
        await _close(player.writer)

    print("Match Finished")
    return info