# app/server.py

"""Process entry point: serves `app.main:app` with uvicorn on settings.PORT."""

from __future__ import annotations

import logging

import uvicorn

from app.config import settings

log = logging.getLogger(__name__)


class Server(uvicorn.Server):
    """uvicorn server that announces its address once the socket is bound."""

    async def startup(self, sockets=None) -> None:
        await super().startup(sockets=sockets)
        if self.started:
            log.info("API http://localhost:%s", self.config.port)


def build_config() -> uvicorn.Config:
    return uvicorn.Config(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


def main() -> None:
    Server(build_config()).run()


if __name__ == "__main__":
    main()
