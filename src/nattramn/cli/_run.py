"""``nattramn run`` — start the dev or production server."""

import argparse
import logging
import sys

from nattramn.cli._resolve import resolve_app

logger = logging.getLogger("nattramn.server")


def run_server(args: argparse.Namespace) -> None:
    """Resolve ``args.app`` and start pounce.

    Development mode (single worker, reload) is used when the app config
    has ``debug=True`` and ``--production`` is not given.
    """
    try:
        app = resolve_app(args.app)
    except (ModuleNotFoundError, AttributeError, TypeError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        raise SystemExit(1) from exc

    app._ensure_frozen()
    server = app.config.server
    host = args.host or server.host
    port = args.port or server.port

    logger.info("Nattramn is running at: http://%s:%d", host, port)

    if args.production or not server.debug:
        from nattramn.server.production import run_production_server

        run_production_server(
            app,
            host=host,
            port=port,
            workers=args.workers if args.workers is not None else server.workers,
            log_level=server.log_level,
            log_format=server.log_format,
        )
    else:
        from nattramn.server.dev import run_dev_server

        run_dev_server(app, host, port, reload=True, app_path=args.app)
