from contextlib import aclosing

import anyio
from pytest import fixture, mark, raises

from range_server.resource import MediaResource, ResourceTruncatedError

from .data import EXAMPLE_BYTES, EXAMPLE_FILE_LENGTH


@fixture
def resource(tmp_path):
    path = tmp_path / "video.mp4"
    path.write_bytes(EXAMPLE_BYTES)
    return MediaResource(path)


async def read_window(resource, start, length, chunk_size):
    return [c async for c in resource.iter_window(start, length, chunk_size)]


@mark.anyio
async def test_size_not_cached(resource):
    assert await resource.get_size() == EXAMPLE_FILE_LENGTH
    with open(resource.path, "ab") as f:
        f.write(b"more")
    assert await resource.get_size() == EXAMPLE_FILE_LENGTH + 4


@mark.anyio
@mark.parametrize(
    "start,length,chunk_size,n_chunks",
    [(0, 500, 64, 8), (0, EXAMPLE_FILE_LENGTH, 1000, 1), (999, 1, 64, 1), (10, 128, 64, 2)],
)
async def test_iter_window(resource, start, length, chunk_size, n_chunks):
    chunks = await read_window(resource, start, length, chunk_size)
    assert len(chunks) == n_chunks
    assert all(len(c) <= chunk_size for c in chunks)
    assert b"".join(chunks) == EXAMPLE_BYTES[start : start + length]


@mark.anyio
async def test_empty_window(resource):
    assert await read_window(resource, start=0, length=0, chunk_size=64) == []


@mark.anyio
async def test_truncated_window(resource):
    with raises(ResourceTruncatedError) as exc_info:
        await read_window(resource, start=900, length=200, chunk_size=64)
    assert exc_info.value.position == EXAMPLE_FILE_LENGTH
    assert exc_info.value.remaining == 100
    assert isinstance(exc_info.value, OSError)


@mark.anyio
async def test_missing_file(tmp_path):
    resource = MediaResource(tmp_path / "missing.mp4")
    with raises(FileNotFoundError):
        await read_window(resource, start=0, length=1, chunk_size=64)


@mark.anyio
async def test_early_close_releases_file(resource, monkeypatch):
    """
    Closing the window part way through (as on a client disconnect) closes the file.
    """
    opened = []
    original_open_file = anyio.open_file

    async def recording_open_file(*args, **kwargs):
        f = await original_open_file(*args, **kwargs)
        opened.append(f)
        return f

    monkeypatch.setattr(anyio, "open_file", recording_open_file)
    async with aclosing(resource.iter_window(0, 500, chunk_size=64)) as chunks:
        async for chunk in chunks:
            break
    (f,) = opened
    assert f.wrapped.closed
