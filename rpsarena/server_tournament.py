"""Tournament registry: clients create tournaments or fetch the active ones."""

from __future__ import annotations

import asyncio
from contextlib import suppress

from .types import Intention, Tournament, TournamentClient
from .wire import receive, send

PROVIDE_TOURNAMENT = "Provide Tournament"
TOURNAMENT_CREATED = "Tournament Created"


async def create_tournament(
    reader: asyncio.StreamReader, writer: asyncio.StreamWriter
) -> Tournament:
    """Request a tournament description from the client and decode it."""
    await send(writer, PROVIDE_TOURNAMENT)
    return Tournament.from_json(await receive(reader))


async def tournament_manager(queue: asyncio.Queue[TournamentClient]) -> None:
    """Serve tournament clients from the queue, one at a time, forever.

    A fetch is answered with a JSON array of every tournament created so far.
    """
    active: list[Tournament] = []
    while True:
        client = await queue.get()
        try:
            if client.intention is Intention.CREATE:
                active.append(await create_tournament(client.reader, client.writer))
                await send(client.writer, TOURNAMENT_CREATED)
            else:
                payload = "[" + ",".join(t.to_json() for t in active) + "]"
                await send(client.writer, payload)
        finally:
            client.writer.close()
            with suppress(ConnectionError):
                await client.writer.wait_closed()