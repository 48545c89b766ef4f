import httpx
from pytest import fixture, mark, raises

from range_server.fetch import DownloadError, download

from .data import EXAMPLE_BYTES

EXAMPLE_MEDIA_URL = "http://example.com/video.mp4"


def make_client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def streamed_response(content, content_length=None):
    """
    A response whose body is streamed rather than read in advance, so that it can
    be consumed with ``iter_raw``.
    """
    headers = {}
    if content_length is not None:
        headers["content-length"] = str(content_length)
    return httpx.Response(200, headers=headers, stream=httpx.ByteStream(content))


@fixture
def requested():
    return []


@fixture
def client(requested):
    def handler(request):
        requested.append(request)
        return streamed_response(EXAMPLE_BYTES, content_length=len(EXAMPLE_BYTES))

    with make_client(handler) as mock_client:
        yield mock_client


def test_download(tmp_path, client, requested):
    path = tmp_path / "video.mp4"
    assert download(EXAMPLE_MEDIA_URL, path, client=client, show_progress_bar=False)
    assert path.read_bytes() == EXAMPLE_BYTES
    (request,) = requested
    assert request.method == "GET"
    assert str(request.url) == EXAMPLE_MEDIA_URL


def test_already_downloaded(tmp_path, client, requested):
    path = tmp_path / "video.mp4"
    path.write_bytes(b"existing")
    assert not download(EXAMPLE_MEDIA_URL, path, client=client, show_progress_bar=False)
    assert path.read_bytes() == b"existing"
    assert requested == []


@mark.parametrize("status_code", [404, 500])
def test_download_error_status(tmp_path, status_code):
    path = tmp_path / "video.mp4"
    with make_client(lambda request: httpx.Response(status_code)) as client:
        with raises(DownloadError, match=f"HTTP {status_code}"):
            download(EXAMPLE_MEDIA_URL, path, client=client, show_progress_bar=False)
    assert not path.exists()


def test_download_short(tmp_path):
    path = tmp_path / "video.mp4"

    def handler(request):
        return streamed_response(EXAMPLE_BYTES, content_length=len(EXAMPLE_BYTES) + 10)

    with make_client(handler) as client:
        with raises(DownloadError, match=f"got {len(EXAMPLE_BYTES)} of"):
            download(EXAMPLE_MEDIA_URL, path, client=client, show_progress_bar=False)
    assert not path.exists()


def test_download_without_length(tmp_path):
    path = tmp_path / "video.mp4"
    with make_client(lambda request: streamed_response(EXAMPLE_BYTES)) as client:
        assert download(EXAMPLE_MEDIA_URL, path, client=client, show_progress_bar=False)
    assert path.read_bytes() == EXAMPLE_BYTES
