"""Production server: multi-worker pounce with structured logging."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nattramn.app import Nattramn


def run_production_server(
    app: Nattramn,
    host: str = "0.0.0.0",
    port: int = 5000,
    workers: int = 1,
    *,
    log_level: str = "info",
    log_format: str = "text",
) -> None:
    """Run the app under pounce in production mode.

    Args:
        app: Nattramn instance.
        host: Bind address.
        port: Bind port.
        workers: Worker count (0 = auto-detect from CPU count).
        log_level: debug, info, warning, error, or critical.
        log_format: ``"json"`` or ``"text"``.

    Each worker runs its own event loop over the same frozen config.
    """
    from pounce.config import ServerConfig
    from pounce.server import Server

    config = ServerConfig(
        host=host,
        port=port,
        workers=workers,
        log_level=log_level,
        log_format=log_format,
    )
    Server(config, app).run()
