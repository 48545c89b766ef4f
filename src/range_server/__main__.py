from __future__ import annotations

import uvicorn

from . import _EXAMPLE_MEDIA_URL
from .app import make_app
from .config import ServerConfig, check_content
from .fetch import download
from .log_utils import log, set_up_logging


def main(config: ServerConfig | None = None):
    """
    Serve the content directory, first downloading the example video into it
    if no video is there yet.
    """
    set_up_logging(quiet=False)
    config = ServerConfig(media_url=_EXAMPLE_MEDIA_URL) if config is None else config
    log.debug(f"Will serve content from {config.content_dir}")
    if config.media_url is not None:
        download(config.media_url, config.media_path)
    check_content(config)
    log.info(f"Listening on port {config.port}")
    uvicorn.run(make_app(config), host=config.host, port=config.port)


if __name__ == "__main__":
    main()
