"""Backend process entrypoint."""

from __future__ import annotations

import logging

import uvicorn

from shared import config


def configure_logging() -> None:
    logging.basicConfig(
        level=config.log_level(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def run() -> None:
    """Serve the budget tracker API with uvicorn."""

    configure_logging()
    uvicorn.run(
        "backend.api:app",
        host=config.server_host(),
        port=config.server_port(),
        log_level=config.log_level().lower(),
    )


if __name__ == "__main__":
    run()
