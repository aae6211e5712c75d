import asyncio
import io

import pytest

from rpsarena.wire import BUFFER_SIZE, get_user_input, receive, send


class _RecordingWriter:
    def __init__(self):
        self.chunks = []
        self.drained = 0

    def write(self, data):
        self.chunks.append(data)

    async def drain(self):
        self.drained += 1


def _fed(*parts, eof=False):
    reader = asyncio.StreamReader()
    for part in parts:
        reader.feed_data(part)
    if eof:
        reader.feed_eof()
    return reader


@pytest.mark.parametrize(
    "stdin_text, prompt, expected",
    [
        ("Rock\nPaper\n", "Play Move", "Rock"),
        ("", "Choose Action:", ""),
    ],
)
def test_get_user_input(monkeypatch, capsys, stdin_text, prompt, expected):
    monkeypatch.setattr("sys.stdin", io.StringIO(stdin_text))
    assert get_user_input(prompt) == expected
    assert capsys.readouterr().out == f"{prompt}\n"


@pytest.mark.asyncio
async def test_receive_returns_available_bytes():
    assert await receive(_fed(b"Provide Name")) == b"Provide Name"


@pytest.mark.asyncio
async def test_receive_caps_at_buffer_size():
    payload = b"x" * (BUFFER_SIZE + 100)
    reader = _fed(payload)
    first = await receive(reader)
    second = await receive(reader)
    assert len(first) == BUFFER_SIZE
    assert first + second == payload


@pytest.mark.asyncio
async def test_receive_raises_on_closed_stream():
    with pytest.raises(ConnectionError):
        await receive(_fed(eof=True))


@pytest.mark.asyncio
async def test_send_encodes_strings_and_drains():
    writer = _RecordingWriter()
    for message in ("Choose Action", b"Processed"):
        await send(writer, message)
    assert writer.chunks == [b"Choose Action", b"Processed"]
    assert writer.drained == 2


@pytest.mark.asyncio
async def test_send_and_receive_over_socket():
    received = asyncio.get_running_loop().create_future()

    async def echo_ack(reader, writer):
        received.set_result(await receive(reader))
        await send(writer, "Recieved")
        writer.close()

    async with await asyncio.start_server(echo_ack, "127.0.0.1", 0) as server:
        host, port = server.sockets[0].getsockname()[:2]
        reader, writer = await asyncio.open_connection(host, port)
        await send(writer, "Play Your Move")
        reply = await receive(reader)
        writer.close()
        await writer.wait_closed()
    assert await received == b"Play Your Move"
    assert reply == b"Recieved"