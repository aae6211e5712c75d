"""Shared data types exchanged between the arena server and its clients."""

from __future__ import annotations

import asyncio
import json
from dataclasses import dataclass, field
from enum import Enum
from typing import Any


class ClientStatus(Enum):
    """Where a connected client is in its lifecycle."""

    QUEUEING = "Queueing"
    FINISHED_MATCH = "FinishedMatch"


class MatchStatus(Enum):
    """State of a match as reported to players and client handlers."""

    ONGOING = "Ongoing"
    DONE = "Done"
    ABRUPT = "Abrupt"


class MoveType(Enum):
    """A move a player can make in one round."""

    ROCK = "Rock"
    PAPER = "Paper"
    SCISSOR = "Scissor"


class MoveResult(Enum):
    """Outcome of one round from one player's point of view."""

    WIN = "Win"
    DRAW = "Draw"
    LOSE = "Lose"


class ClientAction(Enum):
    """What a client asks the server to do next."""

    QUIT = "Quit"
    FIND_MATCH = "FindMatch"


def _loads(data: str | bytes) -> Any:
    if isinstance(data, (bytes, bytearray)):
        data = bytes(data).decode("utf-8")
    return json.loads(data)


def _dumps(obj: Any) -> str:
    return json.dumps(obj, separators=(",", ":"), ensure_ascii=False)


def _field(obj: Any, name: str, kind: type) -> Any:
    if not isinstance(obj, dict):
        raise ValueError(f"expected a JSON object, got {type(obj).__name__}")
    if name not in obj:
        raise ValueError(f"missing field {name!r}")
    value = obj[name]
    if kind is int and isinstance(value, bool) or not isinstance(value, kind):
        raise ValueError(f"field {name!r} must be of type {kind.__name__}")
    return value


@dataclass
class MatchInfo:
    """Scoreboard of a match between two named players."""

    p1_name: str
    p2_name: str
    p1_score: int = 0
    p2_score: int = 0
    status: MatchStatus = MatchStatus.ONGOING
    won_round: str = "None"

    def __str__(self) -> str:
        return f"Client Name: {self.p1_name}"

    def _to_dict(self) -> dict[str, Any]:
        return {
            "p1_name": self.p1_name,
            "p2_name": self.p2_name,
            "p1_score": self.p1_score,
            "p2_score": self.p2_score,
            "status": self.status.value,
            "won_round": self.won_round,
        }

    @classmethod
    def _from_dict(cls, obj: Any) -> MatchInfo:
        status = _field(obj, "status", str)
        try:
            parsed_status = MatchStatus(status)
        except ValueError:
            raise ValueError(f"unknown match status {status!r}") from None
        return cls(
            p1_name=_field(obj, "p1_name", str),
            p2_name=_field(obj, "p2_name", str),
            p1_score=_field(obj, "p1_score", int),
            p2_score=_field(obj, "p2_score", int),
            status=parsed_status,
            won_round=_field(obj, "won_round", str),
        )

    def to_json(self) -> str:
        """Encode as compact JSON."""
        return _dumps(self._to_dict())

    @classmethod
    def from_json(cls, data: str | bytes) -> MatchInfo:
        """Decode from JSON text or UTF-8 bytes; raises ValueError on bad input."""
        return cls._from_dict(_loads(data))


@dataclass
class MatchClientInfo:
    """A client queued for a match, with its match connection and status channel."""

    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter
    client_name: str
    client_status: ClientStatus
    client_sender: asyncio.Queue[MatchStatus]


class Intention(Enum):
    """What a tournament client wants from the tournament manager."""

    CREATE = "Create"
    FETCH = "Fetch"


@dataclass
class TournamentClient:
    """A connection handed to the tournament manager."""

    reader: asyncio.StreamReader
    writer: asyncio.StreamWriter
    intention: Intention


@dataclass
class Tournament:
    """A tournament with its bracket of matches, rounds in descending order."""

    name: str
    player_count: int
    tournament_winner: str
    bracket: list[list[MatchInfo]] = field(default_factory=list)

    def to_json(self) -> str:
        """Encode as compact JSON."""
        return _dumps(
            {
                "name": self.name,
                "player_count": self.player_count,
                "tournament_winner": self.tournament_winner,
                "bracket": [[m._to_dict() for m in rnd] for rnd in self.bracket],
            }
        )

    @classmethod
    def from_json(cls, data: str | bytes) -> Tournament:
        """Decode from JSON text or UTF-8 bytes; raises ValueError on bad input."""
        obj = _loads(data)
        bracket = _field(obj, "bracket", list)
        rounds = []
        for rnd in bracket:
            if not isinstance(rnd, list):
                raise ValueError("each bracket round must be a list")
            rounds.append([MatchInfo._from_dict(m) for m in rnd])
        return cls(
            name=_field(obj, "name", str),
            player_count=_field(obj, "player_count", int),
            tournament_winner=_field(obj, "tournament_winner", str),
            bracket=rounds,
        )