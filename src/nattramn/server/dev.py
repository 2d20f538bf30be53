"""Development server with hot reload.

Starts a single-worker pounce ASGI server around the live Nattramn app.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nattramn.app import Nattramn


def run_dev_server(
    app: Nattramn,
    host: str,
    port: int,
    *,
    reload: bool = True,
    app_path: str | None = None,
    log_level: str = "debug",
) -> None:
    """Start a pounce dev server with the given app.

    Args:
        app: ASGI callable (Nattramn instance).
        host: Bind host address.
        port: Bind port number.
        reload: Enable auto-reload on file changes.
        app_path: Optional ``"module:attribute"`` import string so pounce
            can reimport the app on each reload cycle.
        log_level: Log level for the server.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=1,
        reload=reload,
        log_level=log_level,
    )
    server = Server(config, app, app_path=app_path)
    server.run()
