from pathlib import Path

from pytest import mark, raises

from range_server.config import (
    ContentDirNotFoundError,
    MissingContentError,
    ServerConfig,
    check_content,
    find_content_dir,
)

from .share import content_dir


def test_defaults(content_dir):
    config = ServerConfig(content_dir=content_dir)
    assert (config.host, config.port) == ("0.0.0.0", 1337)
    assert config.media_type == "video/mp4"
    assert config.legacy_length is False
    assert config.media_url is None
    assert config.media_path == content_dir / "video.mp4"
    assert config.index_path == content_dir / "index.html"


def test_check_content(content_dir):
    check_content(ServerConfig(content_dir=content_dir))


@mark.parametrize("missing", ["video.mp4", "index.html"])
def test_missing_content(content_dir, missing):
    (content_dir / missing).unlink()
    with raises(MissingContentError) as exc_info:
        check_content(ServerConfig(content_dir=content_dir))
    assert exc_info.value.path == content_dir / missing
    assert isinstance(exc_info.value, FileNotFoundError)


@mark.parametrize("depth", [0, 1, 3])
def test_find_content_dir(tmp_path, depth):
    (tmp_path / "content").mkdir()
    start = tmp_path.joinpath(*["pkg"] * depth)
    start.mkdir(parents=True, exist_ok=True)
    assert find_content_dir(start) == (tmp_path / "content").resolve()


def test_content_dir_not_found(tmp_path):
    (tmp_path / "content").mkdir()
    start = tmp_path.joinpath(*["pkg"] * 4)
    start.mkdir(parents=True)
    with raises(ContentDirNotFoundError) as exc_info:
        find_content_dir(start)
    assert len(exc_info.value.searched) == 4


def test_content_file_not_dir(tmp_path):
    (tmp_path / "content").write_text("not a directory")
    with raises(ContentDirNotFoundError):
        find_content_dir(tmp_path)


@mark.parametrize("error_msg", ["chunk_size=0 must be a positive number of bytes"])
def test_bad_chunk_size(content_dir, error_msg):
    with raises(ValueError, match=error_msg):
        ServerConfig(content_dir=content_dir, chunk_size=0)


def test_str_content_dir(content_dir):
    assert ServerConfig(content_dir=str(content_dir)).content_dir == Path(content_dir)
