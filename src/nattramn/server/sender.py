"""ASGI response sending — translates nattramn responses to ASGI messages.

In-memory responses go out as one body message; file responses stream
from disk in fixed-size chunks.
"""

import logging

import anyio

from nattramn._internal.asgi import Send
from nattramn.http.response import AnyResponse, FileResponse, Response

logger = logging.getLogger("nattramn.server")

CHUNK_SIZE = 64 * 1024


def _body_allowed(status: int, method: str) -> bool:
    # 1xx, 204, 304 and HEAD responses carry no body
    if method == "HEAD":
        return False
    return not (100 <= status < 200 or status in {204, 304})


def _raw_headers(headers: tuple[tuple[str, str], ...]) -> list[tuple[bytes, bytes]]:
    return [(name.lower().encode("latin-1"), value.encode("latin-1")) for name, value in headers]


async def send_response(response: Response, send: Send, *, method: str = "GET") -> None:
    """Send an in-memory Response.  ``content-length`` is added if missing."""
    raw_headers = _raw_headers(response.headers)
    if response.header("Content-Length") is None:
        raw_headers.append((b"content-length", str(len(response.body)).encode("latin-1")))

    body = response.body if _body_allowed(response.status, method) else b""

    await send({"type": "http.response.start", "status": response.status, "headers": raw_headers})
    await send({"type": "http.response.body", "body": body})


async def send_file_response(response: FileResponse, send: Send, *, method: str = "GET") -> None:
    """Stream a file from disk.

    Headers (including the stat-derived ``Content-Length``) go out first.
    A read error after that point cannot become a 404 any more; it is
    logged and the body is closed early.
    """
    await send(
        {
            "type": "http.response.start",
            "status": response.status,
            "headers": _raw_headers(response.headers),
        }
    )

    if _body_allowed(response.status, method):
        try:
            async with await anyio.open_file(response.path, "rb") as handle:
                while chunk := await handle.read(CHUNK_SIZE):
                    await send({"type": "http.response.body", "body": chunk, "more_body": True})
        except OSError:
            logger.exception("Failed while streaming %s", response.path)

    await send({"type": "http.response.body", "body": b"", "more_body": False})


async def send_any(response: AnyResponse, send: Send, *, method: str = "GET") -> None:
    if isinstance(response, FileResponse):
        await send_file_response(response, send, method=method)
    else:
        await send_response(response, send, method=method)
