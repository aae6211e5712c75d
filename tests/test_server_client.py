import asyncio
from dataclasses import dataclass, field

import pytest

from rpsarena.server_client import client_choose_action, handle_client
from rpsarena.types import ClientAction, ClientStatus, MatchStatus


@dataclass
class _Link:
    """A scripted connection usable as both reader and writer."""

    script: list
    sent: list = field(default_factory=list)
    closed: bool = False

    async def read(self, n=-1):
        return self.script.pop(0).encode() if self.script else b""

    def write(self, data):
        self.sent.append(bytes(data).decode())

    async def drain(self):
        return None

    def close(self):
        self.closed = True

    async def wait_closed(self):
        return None

    def get_extra_info(self, name, default=None):
        return default


MENU_AGAIN = ["Provide Name", "Choose Action", "Provide Match Socket", "Choose Action"]
STOPPED = ["Provide Name", "Choose Action", "Provide Match Socket"]


async def _queue_then_answer(status):
    """Run a client through FindMatch, answer its queue entry with status."""
    accepted = []
    server = await asyncio.start_server(
        lambda _reader, peer: accepted.append(peer), "127.0.0.1", 0
    )
    address = "127.0.0.1:%d" % server.sockets[0].getsockname()[1]
    link = _Link(["alice", '"FindMatch"', address, '"Quit"'])
    queue = asyncio.Queue()
    task = asyncio.create_task(handle_client(link, link, queue))
    try:
        info = await asyncio.wait_for(queue.get(), 5)
        await info.client_sender.put(status)
        await asyncio.wait_for(task, 5)
        info.writer.close()
    finally:
        for peer in accepted:
            peer.close()
        server.close()
        await server.wait_closed()
    return link, info


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "reply, expected",
    [('"FindMatch"', ClientAction.FIND_MATCH), ('"Quit"', ClientAction.QUIT)],
)
async def test_client_choose_action(reply, expected):
    link = _Link([reply])
    assert await client_choose_action(link, link) is expected
    assert link.sent == ["Choose Action"]


@pytest.mark.asyncio
async def test_client_choose_action_rejects_garbage():
    link = _Link(['"Dance"'])
    with pytest.raises(ValueError):
        await client_choose_action(link, link)


@pytest.mark.asyncio
async def test_handle_client_quit():
    link = _Link(["alice", '"Quit"'])
    queue = asyncio.Queue()
    await handle_client(link, link, queue)
    assert link.sent == ["Provide Name", "Choose Action"]
    assert link.closed
    assert queue.empty()


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "status, expected",
    [
        (MatchStatus.DONE, MENU_AGAIN),
        (MatchStatus.ABRUPT, MENU_AGAIN),
        (MatchStatus.ONGOING, STOPPED),
        (None, STOPPED),
    ],
)
async def test_handle_client_after_queueing(status, expected):
    link, info = await _queue_then_answer(status)
    assert info.client_name == "alice"
    assert info.client_status is ClientStatus.QUEUEING
    assert link.sent == expected
    assert link.closed


@pytest.mark.asyncio
async def test_handle_client_rejects_bad_address():
    link = _Link(["alice", '"FindMatch"', "no-port-here"])
    with pytest.raises(ValueError):
        await handle_client(link, link, asyncio.Queue())
    assert link.closed


@pytest.mark.asyncio
async def test_handle_client_disconnect_before_name():
    link = _Link([])
    with pytest.raises(ConnectionError):
        await handle_client(link, link, asyncio.Queue())
    assert link.sent == ["Provide Name"]