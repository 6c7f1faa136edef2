import io

import pytest

from shellexec.domain.streams import ByteStream, OneShotStream, VirtualFileStream
from shellexec.domain.virtual_file import VirtualFile


def test_byte_stream_yields_payload_once_then_ends():
    stream = ByteStream(b"ok")
    assert not stream.ended
    assert list(stream) == [b"ok"]
    assert stream.ended
    assert list(stream) == []


def test_byte_stream_read_in_parts():
    stream = ByteStream(b"hello")
    assert stream.readable()
    assert stream.read(2) == b"he"
    assert stream.read() == b"llo"
    assert stream.read() == b""


def test_pipe_pushes_into_writer():
    sink = ByteStream(b"abc").pipe(io.BytesIO())
    assert sink.getvalue() == b"abc"


@pytest.mark.asyncio
async def test_async_iteration():
    chunks = [chunk async for chunk in ByteStream(b"ok")]
    assert chunks == [b"ok"]


def test_pull_and_push_share_one_pass():
    stream = OneShotStream([1, 2])
    assert next(stream) == 1
    seen: list[int] = []

    class Collect:
        def write(self, item: int) -> None:
            seen.append(item)

    stream.pipe(Collect())
    assert seen == [2]
    assert stream.ended


def test_virtual_file_stream_holds_single_file(tmp_path):
    file = VirtualFile(path=tmp_path / "out.txt", contents=b"ok")
    stream = VirtualFileStream(file)
    assert list(stream) == [file]
    assert stream.ended
