"""Nattramn CLI.

Entry point registered as ``nattramn`` in ``pyproject.toml``::

    [project.scripts]
    nattramn = "nattramn.cli:main"
"""

import argparse
import sys


def main(argv: list[str] | None = None) -> None:
    """CLI entry point for the ``nattramn`` command."""
    parser = argparse.ArgumentParser(
        prog="nattramn",
        description="Nattramn — server-side rendering with partial content for client-side navigation.",
    )
    subparsers = parser.add_subparsers(dest="command")

    # -- nattramn run ------------------------------------------------------
    run_parser = subparsers.add_parser("run", help="Start the server")
    run_parser.add_argument("app", help="Import string (e.g. myapp:app)")
    run_parser.add_argument("--host", default=None, help="Bind host address")
    run_parser.add_argument("--port", type=int, default=None, help="Bind port number")
    run_parser.add_argument(
        "--production",
        action="store_true",
        help="Run in production mode even if the app config has debug=True",
    )
    run_parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Worker count (0=auto-detect, production only)",
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    if args.command == "run":
        from nattramn.cli._run import run_server

        run_server(args)
