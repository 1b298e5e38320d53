import logging
import socket
from typing import Iterable, List, Optional

import uvicorn

from app.config import Settings, get_settings
from app.main import app

logger = logging.getLogger(__name__)


def log_listening(sockets: Iterable[socket.socket]) -> None:
    """Emit the startup line for the first bound socket."""
    for sock in sockets:
        host, port = sock.getsockname()[:2]
        logger.info("Server is listening at http://%s:%s", host, port)
        return


class Server(uvicorn.Server):
    """uvicorn server that reports the address it actually bound."""

    async def startup(self, sockets: Optional[List[socket.socket]] = None) -> None:
        await super().startup(sockets=sockets)
        if self.should_exit:
            return
        log_listening(sock for server in self.servers for sock in server.sockets)


def build_config(settings: Settings) -> uvicorn.Config:
    return uvicorn.Config(
        app,
        host=settings.host,
        port=settings.port,
        log_level="warning",
        access_log=False,
        log_config=None,
    )


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    Server(build_config(settings)).run()


if __name__ == "__main__":
    run()
