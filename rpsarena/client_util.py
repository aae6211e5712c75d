"""Client-side helpers: moves, match scoreboards, menus and free addresses."""

from __future__ import annotations

import asyncio
import json
import random
import re
import socket

from .types import ClientAction, MatchInfo, MoveType
from .wire import get_user_input

_INTEGER = re.compile(r"[+-]?\d+")
_MENU_ACTIONS = {1: ClientAction.QUIT, 2: ClientAction.FIND_MATCH}
_RANDOM_MOVES = (MoveType.ROCK, MoveType.PAPER, MoveType.SCISSOR)


def get_free_address(writer: asyncio.StreamWriter) -> str:
    """Return "host:port" with the connection's local host and a free port on it."""
    host = writer.get_extra_info("sockname")[0]
    family = socket.AF_INET6 if ":" in host else socket.AF_INET
    with socket.socket(family, socket.SOCK_STREAM) as probe:
        probe.bind((host, 0))
        port = probe.getsockname()[1]
    return f"{host}:{port}"


def convert_to_move(player_move: str) -> MoveType:
    """Parse a move name exactly as typed; raises ValueError otherwise."""
    try:
        return MoveType(player_move)
    except ValueError:
        raise ValueError("Invalid Input") from None


def get_user_move() -> MoveType:
    """Prompt on standard input until a valid move is entered."""
    while True:
        try:
            return convert_to_move(get_user_input("Play Move"))
        except ValueError:
            continue


def deserialize_match_info(data: bytes | str) -> MatchInfo:
    """Decode a scoreboard received from the server."""
    return MatchInfo.from_json(data)


def serialize_move(move: MoveType) -> str:
    """Encode a move for the server as a JSON string."""
    return json.dumps(move.value)


def format_results(info: MatchInfo, player_name: str) -> str:
    """Describe the last round and the score, the player's own score first."""
    if player_name == info.p1_name:
        own, other = info.p1_score, info.p2_score
    elif player_name == info.p2_name:
        own, other = info.p2_score, info.p1_score
    else:
        return "Wrong Info"
    return f"{info.won_round} Won Round!\nScore: {own} - {other}"


def display_results(info: MatchInfo, player_name: str) -> None:
    """Print the round result and score for the given player."""
    print(format_results(info, player_name))


def user_choose_action() -> ClientAction:
    """Show the action menu and prompt until a listed choice is entered."""
    while True:
        print("1. Quit")
        print("2. Find Match")
        raw = get_user_input("Choose Action:")
        if _INTEGER.fullmatch(raw) and int(raw) in _MENU_ACTIONS:
            return _MENU_ACTIONS[int(raw)]
        print("Wrong Input")


def random_action() -> MoveType:
    """Pick a move for a simulated player; only rock and paper are drawn."""
    return _RANDOM_MOVES[random.randrange(0, 2)]