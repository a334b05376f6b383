"""Entry point: `python main.py` or `uvicorn main:app`.

Register handlers on `pagehook.engine.get_engine().registry` before the
server starts taking traffic.
"""

from __future__ import annotations

import uvicorn

from server.app import app
from server.config import get_settings


def run() -> None:
    settings = get_settings()
    uvicorn.run(
        "main:app",
        host=settings.server_host,
        port=settings.server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()


__all__ = ["app", "run"]
